"""Text menu front end for the airport flight scheduler."""

from __future__ import annotations

import argparse
import re
import sys
from typing import Callable, Optional, Sequence, TextIO

from flightsched.models import Flight, format_time
from flightsched.schedule import Airport, EmergencyType, ScheduleError

DEFAULT_FILE = "flights.bin"

FLIGHT_ID_LIMIT = 9
ORIGIN_LIMIT = 29
DESTINATION_LIMIT = 29
AIRCRAFT_TYPE_LIMIT = 19

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class _EndOfInput(Exception):
    """The input stream ran out."""


class _Console:
    """Prompted line input and message output over two text streams."""

    def __init__(self, input_stream: TextIO, output_stream: TextIO) -> None:
        self._input = input_stream
        self._output = output_stream

    def ask(self, prompt: str, limit: Optional[int] = None) -> str:
        self._output.write(f"{prompt}: ")
        self._output.flush()
        line = self._input.readline()
        if not line:
            raise _EndOfInput
        text = line.rstrip("\r\n")
        return text[:limit] if limit is not None else text

    def ask_int(self, prompt: str) -> int:
        return _parse_int(self.ask(prompt))

    def say(self, text: str = "") -> None:
        self._output.write(text + "\n")


def _parse_int(text: str) -> int:
    """Leading integer of the text, or 0 when there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _table(headers: Sequence[str], rows: Sequence[Sequence[object]]) -> list[str]:
    cells = [list(headers)] + [[str(value) for value in row] for row in rows]
    widths = [max(len(row[col]) for row in cells) for col in range(len(headers))]
    lines = ["  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip()
             for row in cells]
    lines.insert(1, "  ".join("-" * width for width in widths))
    return lines


def _departure_row(flight: Flight) -> list[object]:
    return [
        flight.flight_id, flight.origin, flight.destination, flight.aircraft_type,
        flight.priority, flight.runway, format_time(flight.departure_time),
        format_time(flight.arrival_time), flight.assigned_crew_id,
    ]


def _arrival_row(flight: Flight) -> list[object]:
    return [
        flight.flight_id, flight.origin, flight.destination, flight.aircraft_type,
        flight.priority, flight.runway, format_time(flight.arrival_time),
        format_time(flight.departure_time),
    ]


_COMMON_HEADERS = ("Flight ID", "Origin", "Destination", "Aircraft Type", "Priority", "Runway")
_DEPARTURE_HEADERS = _COMMON_HEADERS + ("Departure Time", "Arrival Time", "Crew ID")
_ARRIVAL_HEADERS = _COMMON_HEADERS + ("Arrival Time", "Departure Time")


def _add_flight(airport: Airport, console: _Console) -> None:
    flight_id = console.ask("Flight ID", FLIGHT_ID_LIMIT)
    origin = console.ask("Origin", ORIGIN_LIMIT)
    destination = console.ask("Destination", DESTINATION_LIMIT)
    aircraft = console.ask("Aircraft Type", AIRCRAFT_TYPE_LIMIT)
    priority = console.ask_int("Priority (1-3)")
    airport.add_flight(Flight(flight_id, origin, destination, aircraft, priority))
    console.say("Flight added successfully!")


def _print_schedule(airport: Airport, console: _Console) -> None:
    airport.build_schedule()
    console.say("Departures")
    for line in _table(_DEPARTURE_HEADERS, [_departure_row(f) for f in airport.departures()]):
        console.say(line)
    console.say()
    console.say("Arrivals")
    for line in _table(_ARRIVAL_HEADERS, [_arrival_row(f) for f in airport.arrivals()]):
        console.say(line)


def _modify_priority(airport: Airport, console: _Console) -> None:
    flight_id = console.ask("Flight ID", FLIGHT_ID_LIMIT)
    priority = console.ask_int("New Priority (1-3)")
    airport.modify_priority(flight_id, priority)
    console.say("Priority updated successfully!")


def _handle_emergency(airport: Airport, console: _Console) -> None:
    flight_id = console.ask("Flight ID", FLIGHT_ID_LIMIT)
    kind = console.ask_int("Emergency Type (1=Landing, 2=Takeoff)")
    time = console.ask_int("Emergency Time (HHMM)")
    runway = airport.handle_emergency(flight_id, kind, time)
    action = "landing" if kind == EmergencyType.LANDING else "takeoff"
    console.say(f"Runway {runway} allocated for emergency {action} of flight {flight_id}.")


def _real_time_update(airport: Airport, console: _Console) -> None:
    flight_id = console.ask("Flight ID", FLIGHT_ID_LIMIT)
    minutes = console.ask_int("Delay Time (minutes)")
    airport.delay_flight(flight_id, minutes)
    console.say("Flight times updated successfully!")


def _cancel_flight(airport: Airport, console: _Console) -> None:
    flight_id = console.ask("Flight ID", FLIGHT_ID_LIMIT)
    airport.cancel_flight(flight_id)
    console.say("Flight removed successfully!")


_ACTIONS: dict[str, tuple[str, Callable[[Airport, _Console], None]]] = {
    "1": ("Add Flight", _add_flight),
    "2": ("Print Schedule", _print_schedule),
    "3": ("Modify Priority", _modify_priority),
    "4": ("Handle Emergency", _handle_emergency),
    "5": ("Real Time Update", _real_time_update),
    "6": ("Cancel Flight", _cancel_flight),
}
_EXIT_CHOICE = "7"


def _start(airport: Airport, console: _Console) -> None:
    while True:
        opening = console.ask_int("Airport opening time (HHMM)")
        try:
            airport.start(opening)
        except ScheduleError as exc:
            console.say(str(exc))
            continue
        console.say("Airport simulation started.")
        return


def run_menu(airport: Airport, input_stream: TextIO, output_stream: TextIO) -> None:
    """Ask for the opening time, then serve menu choices until exit or end of input."""
    console = _Console(input_stream, output_stream)
    try:
        _start(airport, console)
        while True:
            console.say()
            for key, (label, _) in _ACTIONS.items():
                console.say(f"{key}. {label}")
            console.say(f"{_EXIT_CHOICE}. Exit")
            choice = console.ask("Choice").strip()
            if choice == _EXIT_CHOICE:
                return
            entry = _ACTIONS.get(choice)
            if entry is None:
                console.say(f"Unknown option: {choice}")
                continue
            try:
                entry[1](airport, console)
            except ScheduleError as exc:
                console.say(str(exc))
    except _EndOfInput:
        return


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the flight scheduler on standard input and output."""
    parser = argparse.ArgumentParser(description="Flight simulation program")
    parser.add_argument(
        "--file", default=DEFAULT_FILE, help="flight file to use (default: %(default)s)"
    )
    args = parser.parse_args(argv)
    run_menu(Airport(args.file), sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())