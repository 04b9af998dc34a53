"""Flight records, their fixed-size binary file format and time helpers."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Iterable, Union

HOME_AIRPORT = "XYZ Intl"
MAX_FLIGHTS = 50

FLIGHT_ID_SIZE = 10
ORIGIN_SIZE = 30
DESTINATION_SIZE = 30
AIRCRAFT_TYPE_SIZE = 20

_RECORD = struct.Struct(
    f"<{FLIGHT_ID_SIZE}s{ORIGIN_SIZE}s{DESTINATION_SIZE}s{AIRCRAFT_TYPE_SIZE}s2x5i"
)
RECORD_SIZE = _RECORD.size


@dataclass
class Flight:
    """One scheduled flight; times are HHMM integers."""

    flight_id: str
    origin: str
    destination: str
    aircraft_type: str
    priority: int
    runway: int = 0
    departure_time: int = 0
    arrival_time: int = 0
    assigned_crew_id: int = 0

    def is_departure(self) -> bool:
        """True when the flight leaves the home airport."""
        return self.origin == HOME_AIRPORT

    def is_arrival(self) -> bool:
        """True when the flight lands at the home airport."""
        return self.destination == HOME_AIRPORT


def _pack_text(text: str, size: int) -> bytes:
    return text.encode("utf-8")[: size - 1]


def _unpack_text(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="ignore")


def encode_flights(flights: Iterable[Flight]) -> bytes:
    """Serialise flights as consecutive fixed-size records."""
    return b"".join(
        _RECORD.pack(
            _pack_text(f.flight_id, FLIGHT_ID_SIZE),
            _pack_text(f.origin, ORIGIN_SIZE),
            _pack_text(f.destination, DESTINATION_SIZE),
            _pack_text(f.aircraft_type, AIRCRAFT_TYPE_SIZE),
            f.priority,
            f.runway,
            f.departure_time,
            f.arrival_time,
            f.assigned_crew_id,
        )
        for f in flights
    )


def decode_flights(data: bytes) -> list[Flight]:
    """Parse consecutive fixed-size records; raises ValueError on a partial record."""
    if len(data) % RECORD_SIZE:
        raise ValueError(
            f"data length {len(data)} is not a multiple of the record size {RECORD_SIZE}"
        )
    return [
        Flight(
            flight_id=_unpack_text(fid),
            origin=_unpack_text(origin),
            destination=_unpack_text(destination),
            aircraft_type=_unpack_text(aircraft),
            priority=priority,
            runway=runway,
            departure_time=departure,
            arrival_time=arrival,
            assigned_crew_id=crew_id,
        )
        for fid, origin, destination, aircraft, priority, runway, departure, arrival, crew_id
        in _RECORD.iter_unpack(data)
    ]


class FlightFile:
    """A file holding flight records."""

    def __init__(self, path: Union[str, PathLike]) -> None:
        self.path = Path(path)

    def load(self, count: int) -> list[Flight]:
        """Read up to ``count`` whole records from the start of the file."""
        with self.path.open("rb") as handle:
            data = handle.read(max(count, 0) * RECORD_SIZE)
        whole = len(data) - len(data) % RECORD_SIZE
        return decode_flights(data[:whole])

    def save(self, flights: Iterable[Flight]) -> None:
        """Replace the file's contents with the given flights."""
        self.path.write_bytes(encode_flights(flights))

    def append(self, flight: Flight) -> None:
        """Add one flight record at the end of the file."""
        with self.path.open("ab") as handle:
            handle.write(encode_flights([flight]))


def format_time(value: int) -> str:
    """Render an HHMM integer as ``HH:MM``."""
    return f"{value // 100:02d}:{value % 100:02d}"


def is_valid_time(value: int) -> bool:
    """True for HHMM values between 0000 and 2359 with valid minutes."""
    return 0 <= value <= 2359 and value % 100 <= 59