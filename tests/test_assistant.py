from agrialert.assistant import DEFAULT_ANSWER, respond
from agrialert.fixtures import PROVINCES


def test_blank_message():
    assert respond("   ", PROVINCES) is None


def test_keyword_priority():
    # "weather" is checked before "rain"
    assert respond("Any weather for rain?", PROVINCES).startswith("I can help you with live weather alerts")
    assert respond("Will it FLOOD?", PROVINCES).startswith("Heavy Rainfall Alert")
    assert respond("frost tonight", PROVINCES).startswith("Frost Warning")
    assert respond("sos", PROVINCES).startswith("For immediate emergencies, call 10111")
    assert respond("thanks!", PROVINCES).startswith("You're welcome")


def test_temperature_lists_provinces():
    answer = respond("how hot is it", PROVINCES)
    assert "Western Cape: 22°C" in answer
    assert "Limpopo: 29°C" in answer


def test_default_answer():
    assert respond("hello there", PROVINCES) == DEFAULT_ANSWER
