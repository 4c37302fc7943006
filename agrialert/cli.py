"""
AgriAlert Command Line Interface
================================

Interactive analytics over the incident dataset:

    python -m agrialert.cli
    python -m agrialert.cli --incidents incidents.xlsx --weather weather.json

Without --incidents the built-in sample incidents are used; without --weather
each province shows its baseline reading. Source files are only read.
"""

from __future__ import annotations
import argparse
import logging
import shlex
from dataclasses import replace
from datetime import date
from typing import Dict, Optional

from . import analytics
from .assistant import GREETING, respond
from .engine import Engine
from .fixtures import PROVINCES, baseline_weather, find_province, sample_incidents
from .loader import load_incidents
from .models import WeatherSnapshot
from .submissions import Reporter, ReportLog
from .weather import load_weather_json

HELP = """
Commands:
  help
  stats                              headline figures for the selection
  impacts [n]                        per-province impact table
  types | severity | trends          dashboard chart series
  weather "<province>"               current conditions for one province
  reset | undo | redo

  filter region "<Province>"
  filter category "<Emergency Type>"
  filter severity <low|medium|high|critical>
  filter status <pending|responding|resolved>
  filter dates <YYYY-MM-DD> <YYYY-MM-DD>

  sort <affected|damage|response|date> [asc|desc]
  topk <k> <affected|damage|response|date>
  show [n]
  export <csv|json> "<path>"
  report "<path.docx>"

  submit "<type>" <severity> "<location>" "<description>"
  reports                            list submitted emergency reports
  ask <message>                      ask the assistant
  quit
"""


class Session:
    """Everything one CLI run works with."""

    def __init__(self, engine: Engine, weather: Dict[str, WeatherSnapshot],
                 report_log: ReportLog, user: Reporter) -> None:
        self.engine = engine
        self.weather = weather
        self.report_log = report_log
        self.user = user


def main(argv: Optional[list] = None) -> None:
    ap = argparse.ArgumentParser(prog="agrialert")
    ap.add_argument("--incidents", help="Incident export (.csv or .xlsx); sample data if omitted")
    ap.add_argument("--weather", help="JSON file of region -> forecast payload or snapshot")
    ap.add_argument("--reports", default="emergency_reports.json", help="Where submitted reports are kept")
    ap.add_argument("--user", default="farmer", help="Name recorded on submitted reports")
    ap.add_argument("--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.incidents:
        print("Loading incidents...")
        records = load_incidents(args.incidents)
    else:
        records = list(sample_incidents())
    weather = baseline_weather()
    if args.weather:
        weather.update(load_weather_json(args.weather))

    engine = Engine.from_records(records, dataset_path=args.incidents)
    session = Session(
        engine=engine,
        weather=weather,
        report_log=ReportLog(args.reports),
        user=Reporter(id=args.user.lower(), name=args.user),
    )

    print(f"Loaded {len(records)} incidents across {len(engine.idx.by_region)} provinces. Type 'help' for commands.")
    print(GREETING)
    while True:
        try:
            line = input("agrialert> ")
        except EOFError:
            break
        stripped = line.strip()
        if not stripped:
            continue
        if stripped.lower() in ("quit", "exit"):
            break
        cmd0 = stripped.split()[0].lower()
        if cmd0 in ("filter", "reset", "undo", "redo"):
            engine.command_log.append(stripped)
        try:
            handle(session, stripped)
        except Exception as e:
            print(f"Error: {e}")


def handle(session: Session, line: str) -> None:
    """Run one command line against the session."""
    engine = session.engine

    # free text, no quoting needed
    if line.lower() == "ask" or line.lower().startswith("ask "):
        print(respond(line[4:], _live_provinces(session)) or "Usage: ask <message>")
        return

    parts = shlex.split(line)
    cmd = parts[0].lower()

    if cmd == "help":
        print(HELP)
        return

    if cmd == "stats":
        s = analytics.summary(engine.selected())
        print(f"Total Incidents: {s.total_incidents}")
        print(f"People Affected: {s.total_affected:,}")
        print(f"Total Damage: {analytics.format_rand_millions(s.total_damage)}")
        print(f"Avg Response Time: {s.average_response_hours} h")
        return

    if cmd == "impacts":
        n = int(parts[1]) if len(parts) >= 2 else None
        impacts = engine.impacts(session.weather)
        for p in impacts[:n]:
            w = p.current_conditions
            print(f"{p.region} | {w.temperature}°C {w.condition} {w.humidity}% | "
                  f"incidents={p.total_incidents} affected={p.total_affected:,} "
                  f"damage={analytics.format_rand_millions(p.total_damage)} "
                  f"avg_resp={p.average_response_hours}h | {analytics.map_link(p.coordinates)}")
        if not impacts:
            print("No incidents in the current selection.")
        return

    if cmd == "types":
        for category, count in analytics.category_distribution(engine.selected()):
            print(f"{category}: {count}")
        return

    if cmd == "severity":
        for sev, count, colour in analytics.severity_distribution(engine.selected()):
            print(f"{sev.value}: {count} ({colour})")
        return

    if cmd == "trends":
        for t in analytics.monthly_trends(engine.selected()):
            print(f"{t.label}: incidents={t.incidents} affected={t.affected:,}")
        return

    if cmd == "weather":
        province = find_province(parts[1]) if len(parts) >= 2 else None
        if province is None:
            raise ValueError("Unknown province. Try e.g. weather \"Gauteng\"")
        w = session.weather.get(province.name)
        print(f"{province.name}: {w.temperature}°C, {w.condition}, {w.humidity}% humidity, {w.wind_speed} km/h wind")
        return

    if cmd == "reset":
        engine.reset()
        print("Selection reset.")
        return

    if cmd == "undo":
        print("Undone." if engine.undo() else "Nothing to undo.")
        return

    if cmd == "redo":
        print("Redone." if engine.redo() else "Nothing to redo.")
        return

    if cmd == "filter":
        kind = parts[1].lower()
        if kind == "region":
            engine.filter_region(parts[2])
        elif kind == "category":
            engine.filter_category(parts[2])
        elif kind == "severity":
            engine.filter_severity(parts[2])
        elif kind == "status":
            engine.filter_status(parts[2])
        elif kind == "dates":
            engine.filter_dates(date.fromisoformat(parts[2]), date.fromisoformat(parts[3]))
        else:
            raise ValueError("filter kind must be: region, category, severity, status, dates")
        print(f"Filtered {kind}. Size={len(engine.active_ids)}")
        return

    if cmd == "sort":
        field = parts[1]
        order = parts[2].lower() if len(parts) >= 3 and parts[2].lower() in ("asc", "desc") else "desc"
        out = engine.sort(field, reverse=(order == "desc"))
        print(f"Sorted {len(out)} incidents by {field} ({order}). Showing 10:")
        _print_rows(out[:10])
        return

    if cmd == "topk":
        k = int(parts[1]); field = parts[2]
        out = engine.topk(k, field)
        print(f"Top {len(out)} by {field}:")
        _print_rows(out)
        return

    if cmd == "show":
        n = int(parts[1]) if len(parts) >= 2 else 10
        _print_rows(engine.selected()[:n])
        return

    if cmd == "export":
        if len(parts) < 3:
            print('Usage: export csv "out.csv"  OR  export json "out.json"')
            return
        fmt, out_path = parts[1].lower(), parts[2]
        if not engine.active_ids:
            print("Nothing to export: current selection is empty.")
            return
        if fmt == "csv":
            engine.export_csv(out_path)
        elif fmt == "json":
            engine.export_json(out_path)
        else:
            print("Unknown export format. Use: csv or json")
            return
        print(f"Exported {fmt.upper()} to {out_path}")
        return

    if cmd == "report":
        from .report import ReportConfig, generate_docx_report
        path = parts[1]
        cfg = ReportConfig(
            dataset_name=engine.dataset_path or "AgriAlert SA sample incidents",
            command_log=engine.command_log,
        )
        generate_docx_report(engine.selected(), engine.impacts(session.weather), path, config=cfg)
        print(f"Report written to {path}")
        return

    if cmd == "submit":
        if len(parts) < 5:
            raise ValueError('Usage: submit "<type>" <severity> "<location>" "<description>"')
        r = session.report_log.submit(session.user, type=parts[1], severity=parts[2],
                                      location=parts[3], description=parts[4])
        print(f"Emergency report {r.id} submitted successfully! Authorities have been notified.")
        return

    if cmd == "reports":
        reports = session.report_log.reports()
        for r in reports:
            print(f"[{r.id}] {r.timestamp} {r.user_name} | {r.type} ({r.severity.value}) @ {r.location} | {r.status.value}")
        if not reports:
            print("No emergency reports submitted yet.")
        return

    print("Unknown command. Type 'help'.")


def _live_provinces(session: Session):
    """Provinces with the session's current temperatures, for the assistant."""
    out = []
    for p in PROVINCES:
        w = session.weather.get(p.name)
        out.append(replace(p, weather=replace(p.weather, temperature=w.temperature)) if w else p)
    return out


def _print_rows(rows):
    for r in rows:
        print(f"[{r.id}] {r.region} | {r.category} | {r.severity.value} | {r.occurred_at} | "
              f"affected={r.affected_count} damage={r.damage_estimate} response={r.response_hours}h | {r.status.value}")


if __name__ == "__main__":
    main()
