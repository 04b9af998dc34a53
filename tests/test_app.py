import io
import random

import pytest

from flightsched.app import main, run_menu
from flightsched.models import FlightFile
from flightsched.schedule import Airport, initial_flights


@pytest.fixture
def airport(tmp_path):
    return Airport(tmp_path / "flights.bin", random.Random(0))


def _run(airport, lines):
    out = io.StringIO()
    run_menu(airport, io.StringIO("".join(line + "\n" for line in lines)), out)
    return out.getvalue()


def _ids(airport):
    return [f.flight_id for f in FlightFile(airport.file.path).load(airport.count)]


def test_start_writes_initial_flights(airport):
    out = _run(airport, ["0600", "7"])
    assert "Airport simulation started." in out
    assert airport.count == len(initial_flights())
    assert _ids(airport) == [f.flight_id for f in initial_flights()]


def test_invalid_opening_time_is_asked_again(airport):
    out = _run(airport, ["2460", "0600", "7"])
    assert "Invalid time format! Use HHMM (0000-2359)." in out
    assert airport.opening_time == 600


def test_end_of_input_before_start(airport):
    out = _run(airport, [])
    assert "Airport simulation started." not in out
    assert airport.opening_time is None


def test_add_flight(airport):
    out = _run(airport, ["0600", "1", "ZZ100", "Oslo", "XYZ Intl", "Boeing 737", "2", "7"])
    assert "Flight added successfully!" in out
    assert airport.count == len(initial_flights()) + 1
    assert _ids(airport)[-1] == "ZZ100"


def test_add_flight_truncates_id(airport):
    _run(airport, ["0600", "1", "ABCDEFGHIJKL", "Oslo", "XYZ Intl", "Jet", "1", "7"])
    assert _ids(airport)[-1] == "ABCDEFGHI"


def test_add_flight_rejects_bad_priority(airport):
    out = _run(airport, ["0600", "1", "ZZ100", "Oslo", "XYZ Intl", "Jet", "5", "7"])
    assert "Priority must be between 1 and 3!" in out
    assert airport.count == len(initial_flights())


def test_add_flight_rejects_empty_field(airport):
    out = _run(airport, ["0600", "1", "ZZ100", "", "XYZ Intl", "Jet", "2", "7"])
    assert "All fields must be filled!" in out
    assert "ZZ100" not in _ids(airport)


def test_print_schedule_lists_every_flight(airport):
    out = _run(airport, ["0600", "2", "7"])
    assert "Departures" in out and "Arrivals" in out
    assert "Crew ID" in out
    for flight in airport.departures() + airport.arrivals():
        assert flight.flight_id in out
    assert len(airport.departures()) + len(airport.arrivals()) == len(initial_flights())


def test_modify_priority(airport):
    out = _run(airport, ["0600", "3", "AI101", "1", "7"])
    assert "Priority updated successfully!" in out
    stored = {f.flight_id: f for f in FlightFile(airport.file.path).load(airport.count)}
    assert stored["AI101"].priority == 1


def test_modify_priority_unknown_flight(airport):
    out = _run(airport, ["0600", "3", "NOPE", "1", "7"])
    assert "Flight ID not found" in out


def test_handle_emergency_landing(airport):
    out = _run(airport, ["0600", "2", "4", "BA202", "1", "0900", "7"])
    assert "allocated for emergency landing of flight BA202." in out
    stored = {f.flight_id: f for f in FlightFile(airport.file.path).load(airport.count)}
    assert stored["BA202"].arrival_time == 900


def test_handle_emergency_bad_type(airport):
    out = _run(airport, ["0600", "4", "BA202", "3", "0900", "7"])
    assert "Invalid emergency type! Use 1 for Landing or 2 for Takeoff." in out


def test_real_time_update(airport):
    out = _run(airport, ["0600", "2", "5", "AI101", "10", "7"])
    assert "Flight times updated successfully!" in out


def test_real_time_update_rejects_non_positive(airport):
    out = _run(airport, ["0600", "5", "AI101", "abc", "7"])
    assert "Delay time must be positive!" in out


def test_cancel_flight(airport):
    out = _run(airport, ["0600", "6", "AI101", "7"])
    assert "Flight removed successfully!" in out
    assert airport.count == len(initial_flights()) - 1
    assert "AI101" not in _ids(airport)


def test_unknown_option_keeps_running(airport):
    out = _run(airport, ["0600", "9", "6", "AI101", "7"])
    assert "Unknown option: 9" in out
    assert "AI101" not in _ids(airport)


def test_main_uses_given_file(tmp_path, monkeypatch):
    path = tmp_path / "schedule.bin"
    monkeypatch.setattr("sys.stdin", io.StringIO("0600\n7\n"))
    monkeypatch.setattr("sys.stdout", io.StringIO())
    assert main(["--file", str(path)]) == 0
    loaded = FlightFile(path).load(len(initial_flights()))
    assert [f.flight_id for f in loaded] == [f.flight_id for f in initial_flights()]