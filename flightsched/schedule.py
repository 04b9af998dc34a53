"""Flight schedule management for the home airport."""

from __future__ import annotations

import random
from enum import IntEnum
from os import PathLike
from typing import Callable, MutableSequence, Optional, Union

from flightsched.crew import CrewRoster
from flightsched.models import (
    HOME_AIRPORT,
    MAX_FLIGHTS,
    Flight,
    FlightFile,
    is_valid_time,
)

SLOT_MINUTES = 15
EMERGENCY_DELAY_MINUTES = 15
MAX_FLIGHT_HOURS = 12

_INITIAL_FLIGHTS = (
    ("AI101", HOME_AIRPORT, "Mumbai", "Boeing 737", 3),
    ("LH303", HOME_AIRPORT, "Frankfurt", "Boeing 777", 2),
    ("EK505", HOME_AIRPORT, "Dubai", "Airbus A380", 2),
    ("DL909", HOME_AIRPORT, "Bangalore", "Boeing 737", 3),
    ("QF707", HOME_AIRPORT, "Sydney", "Boeing 787", 2),
    ("BA202", "London", HOME_AIRPORT, "Airbus A320", 2),
    ("SQ404", "Singapore", HOME_AIRPORT, "Boeing 787", 2),
    ("UA606", "New York", HOME_AIRPORT, "Boeing 737", 2),
    ("AI808", "Delhi", HOME_AIRPORT, "Airbus A320", 3),
    ("ER999", "Dubai", HOME_AIRPORT, "Private Jet", 1),
    ("VS210", HOME_AIRPORT, "London", "Boeing 777", 2),
    ("AF502", "Paris", HOME_AIRPORT, "Airbus A350", 2),
    ("CX880", HOME_AIRPORT, "Hong Kong", "Boeing 747", 2),
    ("TK721", HOME_AIRPORT, "Istanbul", "Boeing 787", 2),
    ("IB600", "Madrid", HOME_AIRPORT, "Airbus A320", 2),
    ("JL300", "Tokyo", HOME_AIRPORT, "Boeing 777", 2),
    ("AA921", HOME_AIRPORT, "Los Angeles", "Boeing 787", 2),
    ("LH789", "Berlin", HOME_AIRPORT, "Airbus A320", 2),
    ("SQ801", HOME_AIRPORT, "Singapore", "Boeing 787", 2),
    ("AI305", "Chennai", HOME_AIRPORT, "Airbus A320", 3),
    ("BA117", HOME_AIRPORT, "London", "Boeing 777", 2),
    ("EK430", "Dubai", HOME_AIRPORT, "Airbus A380", 2),
    ("TK910", HOME_AIRPORT, "Istanbul", "Boeing 787", 2),
    ("DL432", HOME_AIRPORT, "New York", "Boeing 767", 2),
    ("AF675", HOME_AIRPORT, "Paris", "Airbus A350", 2),
    ("LH456", HOME_AIRPORT, "Frankfurt", "Boeing 747", 2),
    ("AI450", "Hyderabad", HOME_AIRPORT, "Airbus A320", 1),
    ("CX765", "Hong Kong", HOME_AIRPORT, "Boeing 747", 1),
    ("JL107", HOME_AIRPORT, "Tokyo", "Boeing 787", 2),
    ("AI909", HOME_AIRPORT, "Delhi", "Airbus A320", 3),
    ("VS909", "London", HOME_AIRPORT, "Boeing 777", 2),
    ("QF609", HOME_AIRPORT, "Melbourne", "Boeing 787", 2),
    ("UA987", HOME_AIRPORT, "Chicago", "Boeing 767", 2),
    ("BA215", HOME_AIRPORT, "London", "Boeing 777", 2),
    ("EK333", "Dubai", HOME_AIRPORT, "Airbus A380", 2),
    ("DL820", "New York", HOME_AIRPORT, "Boeing 767", 1),
    ("AI560", HOME_AIRPORT, "Bangalore", "Airbus A320", 3),
    ("SQ120", "Singapore", HOME_AIRPORT, "Boeing 787", 2),
    ("LH120", HOME_AIRPORT, "Berlin", "Airbus A320", 2),
    ("BA401", "London", HOME_AIRPORT, "Boeing 777", 2),
    ("CX430", "Hong Kong", HOME_AIRPORT, "Boeing 747", 2),
    ("AF340", HOME_AIRPORT, "Paris", "Airbus A350", 2),
    ("JL520", HOME_AIRPORT, "Tokyo", "Boeing 787", 2),
    ("TK632", HOME_AIRPORT, "Istanbul", "Boeing 787", 2),
)


class ScheduleError(Exception):
    """An operation on the schedule was rejected."""


class FlightNotFoundError(ScheduleError, LookupError):
    """No flight with the requested id exists."""


class EmergencyType(IntEnum):
    """Kind of emergency being handled."""

    LANDING = 1
    TAKEOFF = 2


def initial_flights() -> list[Flight]:
    """The flights the simulation starts with."""
    return [
        Flight(flight_id, origin, destination, aircraft, priority)
        for flight_id, origin, destination, aircraft, priority in _INITIAL_FLIGHTS
    ]


def _partition_sort(items: MutableSequence[Flight], key: Callable[[Flight], int]) -> None:
    """In-place quicksort with a last-element pivot (not stable)."""
    ranges = [(0, len(items) - 1)]
    while ranges:
        low, high = ranges.pop()
        if low >= high:
            continue
        pivot = key(items[high])
        boundary = low
        for j in range(low, high):
            if key(items[j]) <= pivot:
                items[boundary], items[j] = items[j], items[boundary]
                boundary += 1
        items[boundary], items[high] = items[high], items[boundary]
        ranges.append((low, boundary - 1))
        ranges.append((boundary + 1, high))


def _schedule_key(flight: Flight) -> int:
    return flight.departure_time if flight.origin == HOME_AIRPORT else flight.arrival_time


def sort_by_priority(flights: MutableSequence[Flight]) -> None:
    """Sort flights in place by ascending priority."""
    _partition_sort(flights, lambda f: f.priority)


def sort_by_time(flights: MutableSequence[Flight]) -> None:
    """Sort in place by departure time for departures, arrival time otherwise."""
    _partition_sort(flights, _schedule_key)


def _next_slot(current: int) -> int:
    hours, minutes = divmod(current, 100)
    minutes += SLOT_MINUTES
    if minutes >= 60:
        minutes -= 60
        hours += 1
    return hours * 100 + minutes


def allocate_departure_times(
    flights: MutableSequence[Flight], opening_time: int, rng: Optional[random.Random] = None
) -> None:
    """Sort by priority and give departures consecutive 15-minute slots."""
    rng = rng or random.Random()
    current = opening_time
    sort_by_priority(flights)
    for flight in flights:
        if not flight.is_departure():
            continue
        flight.departure_time = current
        duration = rng.randint(1, MAX_FLIGHT_HOURS)
        hours = flight.departure_time // 100 + duration
        if hours >= 24:
            hours -= 24
        flight.arrival_time = hours * 100 + flight.departure_time % 100
        current = _next_slot(current)


def allocate_arrival_times(
    flights: MutableSequence[Flight], opening_time: int, rng: Optional[random.Random] = None
) -> None:
    """Stably sort by priority and give arrivals consecutive 15-minute slots."""
    rng = rng or random.Random()
    current = opening_time
    flights.sort(key=lambda f: f.priority)
    for flight in flights:
        if not flight.is_arrival():
            continue
        flight.arrival_time = current
        duration = rng.randint(1, MAX_FLIGHT_HOURS)
        hours = flight.arrival_time // 100 - duration
        if hours < 0:
            hours += 24
        flight.departure_time = hours * 100 + flight.arrival_time % 100
        current = _next_slot(current)


def allocate_runways(flights: MutableSequence[Flight]) -> None:
    """Runway 1 for departures, runway 2 for everything else."""
    for flight in flights:
        flight.runway = 1 if flight.is_departure() else 2


def _emergency_shift(value: int, minutes: int) -> int:
    hours, mins = divmod(value, 100)
    mins += minutes
    if mins >= 60:
        mins -= 60
        hours += 1
        if hours >= 24:
            hours -= 24
    return hours * 100 + mins


def _delay_shift(value: int, minutes: int) -> int:
    hours, mins = divmod(value, 100)
    mins += minutes
    if mins >= 60:
        mins -= 60
        hours += 1
    if hours >= 24:
        hours -= 24
    return hours * 100 + mins


class Airport:
    """The home airport's schedule, kept in a flight file."""

    def __init__(
        self, path: Union[str, PathLike], rng: Optional[random.Random] = None
    ) -> None:
        self.file = FlightFile(path)
        self.rng = rng or random.Random()
        self.roster = CrewRoster()
        self.count = 0
        self.opening_time: Optional[int] = None
        self.flights: list[Flight] = []

    def _load(self) -> list[Flight]:
        try:
            return self.file.load(self.count)
        except OSError as exc:
            raise ScheduleError(f"cannot read flight file {self.file.path}") from exc

    def _save(self, flights: list[Flight]) -> None:
        try:
            self.file.save(flights)
        except OSError as exc:
            raise ScheduleError(f"cannot write flight file {self.file.path}") from exc

    @staticmethod
    def _find(flights: list[Flight], flight_id: str) -> Flight:
        for flight in flights:
            if flight.flight_id == flight_id:
                return flight
        raise FlightNotFoundError(f"Flight ID not found: {flight_id}")

    def start(self, opening_time: int) -> None:
        """Open the airport and write the initial flights to the file."""
        if not is_valid_time(opening_time):
            raise ScheduleError("Invalid time format! Use HHMM (0000-2359).")
        self.opening_time = opening_time
        flights = initial_flights()
        self._save(flights)
        self.count = len(flights)
        self.flights = self._load()
        self.roster.reset()

    def build_schedule(self) -> list[str]:
        """Assign times, runways and crews; return departures left without crew."""
        if self.opening_time is None:
            raise ScheduleError("the airport has not been started")
        flights = self._load()
        allocate_departure_times(flights, self.opening_time, self.rng)
        allocate_arrival_times(flights, self.opening_time, self.rng)
        allocate_runways(flights)
        self.roster.reset()
        unassigned = self.roster.allocate(flights, self.opening_time)
        self._save(flights)
        self.flights = flights
        return unassigned

    def add_flight(self, flight: Flight) -> None:
        """Append a new flight to the file."""
        self._load()
        if not 1 <= flight.priority <= 3:
            raise ScheduleError("Priority must be between 1 and 3!")
        if not all(
            (flight.flight_id, flight.origin, flight.destination, flight.aircraft_type)
        ):
            raise ScheduleError("All fields must be filled!")
        if self.count >= MAX_FLIGHTS:
            raise ScheduleError(f"no room for more than {MAX_FLIGHTS} flights")
        new = Flight(
            flight.flight_id, flight.origin, flight.destination, flight.aircraft_type,
            flight.priority,
        )
        try:
            self.file.append(new)
        except OSError as exc:
            raise ScheduleError(f"cannot write flight file {self.file.path}") from exc
        self.count += 1

    def modify_priority(self, flight_id: str, priority: int) -> None:
        """Change the priority of a flight."""
        flights = self._load()
        flight = self._find(flights, flight_id)
        if not 1 <= priority <= 3:
            raise ScheduleError("Invalid priority! Keeping old value.")
        flight.priority = priority
        self._save(flights)

    def handle_emergency(
        self, flight_id: str, kind: Union[EmergencyType, int], time: int
    ) -> int:
        """Move a flight to an emergency slot, delay later flights; return its runway."""
        try:
            kind = EmergencyType(kind)
        except ValueError as exc:
            raise ScheduleError(
                "Invalid emergency type! Use 1 for Landing or 2 for Takeoff."
            ) from exc
        if not is_valid_time(time):
            raise ScheduleError("Invalid time format! Use HHMM (0000-2359).")
        flights = self._load()
        target = self._find(flights, flight_id)

        runway = 1
        for other in flights:
            if other.departure_time == time or other.arrival_time == time:
                if other.priority > target.priority:
                    runway = other.runway
                    break
                if other.priority == target.priority:
                    runway = 2 if other.runway == 1 else 1
                    break

        duration = target.arrival_time - target.departure_time
        target.runway = runway
        if kind is EmergencyType.LANDING:
            target.arrival_time = time
            target.departure_time = time - duration
            if target.departure_time < 0:
                target.departure_time += 2400
        else:
            target.departure_time = time
            target.arrival_time = time + duration
            if target.arrival_time >= 2400:
                target.arrival_time -= 2400

        for other in flights:
            if other is target:
                continue
            affected = (
                other.arrival_time >= time
                if kind is EmergencyType.LANDING
                else other.departure_time >= time
            )
            if affected:
                other.departure_time = _emergency_shift(
                    other.departure_time, EMERGENCY_DELAY_MINUTES
                )
                other.arrival_time = _emergency_shift(
                    other.arrival_time, EMERGENCY_DELAY_MINUTES
                )

        sort_by_time(flights)
        self._save(flights)
        return runway

    def delay_flight(self, flight_id: str, minutes: int) -> None:
        """Delay a flight and every flight after it in the file."""
        if minutes <= 0:
            raise ScheduleError("Delay time must be positive!")
        flights = self._load()
        target = self._find(flights, flight_id)
        start = flights.index(target)
        for flight in flights[start:]:
            flight.departure_time = _delay_shift(flight.departure_time, minutes)
            flight.arrival_time = _delay_shift(flight.arrival_time, minutes)
        self._save(flights)

    def cancel_flight(self, flight_id: str) -> None:
        """Remove a flight from the file."""
        flights = self._load()
        flights.remove(self._find(flights, flight_id))
        self._save(flights)
        self.count -= 1

    def departures(self) -> list[Flight]:
        """Flights of the current schedule leaving the home airport."""
        return [f for f in self.flights if f.is_departure()]

    def arrivals(self) -> list[Flight]:
        """Flights of the current schedule landing at the home airport."""
        return [f for f in self.flights if f.is_arrival()]