"""
AgriAlert analytics package
===========================

Offline analytics for the AgriAlert SA weather-alert dashboard.

- The CLI entry point is in `agrialert/cli.py`.
- Per-province impact aggregation is in `agrialert/aggregate.py`.
- The working selection (filters, sorting, export) is in `agrialert/engine.py`.
- Dataset loading is in `agrialert/loader.py`; sample data in `agrialert/fixtures.py`.
"""

__version__ = '0.3.0'
