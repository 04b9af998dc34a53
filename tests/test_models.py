import pytest

from flightsched.models import (
    HOME_AIRPORT,
    RECORD_SIZE,
    Flight,
    FlightFile,
    decode_flights,
    encode_flights,
    format_time,
    is_valid_time,
)


def _sample():
    return [
        Flight("AI101", HOME_AIRPORT, "Mumbai", "Boeing 737", 3, 1, 600, 900, 4),
        Flight("BA202", "London", HOME_AIRPORT, "Airbus A320", 2, 2, 300, 615, 0),
    ]


def test_record_size_matches_layout():
    assert RECORD_SIZE == 112
    assert len(encode_flights(_sample())) == 2 * RECORD_SIZE


def test_round_trip():
    flights = _sample()
    assert decode_flights(encode_flights(flights)) == flights


def test_empty_round_trip():
    assert encode_flights([]) == b""
    assert decode_flights(b"") == []


def test_long_text_is_truncated():
    long_id = "ABCDEFGHIJKLMN"
    long_origin = "O" * 40
    flight = Flight(long_id, long_origin, HOME_AIRPORT, "T" * 25, 1)
    (decoded,) = decode_flights(encode_flights([flight]))
    assert decoded.flight_id == long_id[:9]
    assert decoded.origin == long_origin[:29]
    assert decoded.aircraft_type == ("T" * 25)[:19]


def test_partial_record_rejected():
    with pytest.raises(ValueError):
        decode_flights(encode_flights(_sample())[:-1])


def test_direction():
    dep, arr = _sample()
    assert dep.is_departure() and not dep.is_arrival()
    assert arr.is_arrival() and not arr.is_departure()


def test_file_save_and_load(tmp_path):
    store = FlightFile(tmp_path / "flights.bin")
    flights = _sample()
    store.save(flights)
    assert store.load(len(flights)) == flights
    assert store.load(1) == flights[:1]
    assert store.load(10) == flights


def test_file_append(tmp_path):
    store = FlightFile(tmp_path / "flights.bin")
    first, second = _sample()
    store.save([first])
    store.append(second)
    assert store.load(2) == [first, second]


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        FlightFile(tmp_path / "absent.bin").load(1)


def test_format_time():
    assert format_time(905) == "09:05"
    assert format_time(0) == "00:00"


@pytest.mark.parametrize(
    "value, expected",
    [(0, True), (2359, True), (1230, True), (-1, False), (2400, False), (1260, False)],
)
def test_is_valid_time(value, expected):
    assert is_valid_time(value) is expected