"""Crew members and their allocation to departing flights."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from flightsched.models import Flight, is_valid_time

NUM_CREW = 50
MAX_DUTY_HOURS = 12


def _to_minutes(hhmm: int) -> int:
    return (hhmm // 100) * 60 + hhmm % 100


def calculate_flight_duration(departure_time: int, arrival_time: int) -> int:
    """Minutes between two HHMM times, wrapping past midnight."""
    departure = _to_minutes(departure_time)
    arrival = _to_minutes(arrival_time)
    if arrival < departure:
        arrival += 24 * 60
    return arrival - departure


@dataclass
class CrewMember:
    """Duty state of one crew."""

    total_hours_worked: int = 0
    last_rest_time: int = 0
    is_available: bool = True


@dataclass
class CrewRoster:
    """A fixed-size pool of crews assigned to departures."""

    size: int = NUM_CREW
    members: list[CrewMember] = field(init=False)

    def __post_init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Make every crew available with no hours worked."""
        self.members = [CrewMember() for _ in range(self.size)]

    def _release(self, now_minutes: int) -> None:
        for member in self.members:
            if not member.is_available and member.last_rest_time <= now_minutes:
                member.is_available = True
                member.total_hours_worked = 0

    def allocate(self, flights: Sequence[Flight], opening_time: int) -> list[str]:
        """Assign crews to departures in order.

        Sets ``assigned_crew_id`` (1-based, 0 when none) on every flight and
        runway 1 on departures. Returns the ids of departures left without crew.
        """
        if not is_valid_time(opening_time):
            raise ValueError(f"invalid opening time {opening_time}; use HHMM 0000-2359")
        unassigned: list[str] = []
        for flight in flights:
            flight.assigned_crew_id = 0
            if not flight.is_departure():
                self._release(_to_minutes(flight.arrival_time))
                continue

            duration = calculate_flight_duration(flight.departure_time, flight.arrival_time)
            departure = _to_minutes(flight.departure_time)
            self._release(departure)

            hours = duration // 60
            best = None
            min_hours = MAX_DUTY_HOURS + 1
            for index, member in enumerate(self.members):
                if (
                    member.is_available
                    and member.total_hours_worked + hours <= MAX_DUTY_HOURS
                    and member.total_hours_worked < min_hours
                ):
                    min_hours = member.total_hours_worked
                    best = index

            if best is None:
                unassigned.append(flight.flight_id)
            else:
                member = self.members[best]
                member.total_hours_worked += hours
                member.last_rest_time = departure + duration
                member.is_available = False
                flight.assigned_crew_id = best + 1
            flight.runway = 1
        return unassigned