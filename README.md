# flightsched

A small simulation of the flight schedule at one airport, "XYZ Intl".
Flights are kept in a binary flight file of fixed-size records. From the
airport's opening time the scheduler gives departures and arrivals
consecutive 15-minute slots in priority order, puts departures on runway 1
and arrivals on runway 2, and assigns each departure a crew from a pool of
50, keeping every crew within a 12-hour working limit.

## Installing

```
pip install .
```

## Running

```
flightsched
flightsched --file my_flights.bin
```

`--file` chooses the flight file (default `flights.bin` in the current
directory). The program first asks for the airport opening time as `HHMM`
(for example `0600`) and asks again until the time is valid. It then writes
the initial set of 44 flights to the flight file and shows a numbered menu:

1. Add Flight: flight ID, origin, destination, aircraft type and priority
   (1–3); all fields must be filled, and the file holds at most 50 flights.
2. Print Schedule: allocates times, runways and crews, then prints a
   departures table (with crew ID) and an arrivals table.
3. Modify Priority: sets a new priority (1–3) for a flight.
4. Handle Emergency: moves a flight to an emergency landing (1) or takeoff
   (2) at an `HHMM` time, reports the runway given to it and delays affected
   flights by 15 minutes.
5. Real Time Update: delays a flight, and every flight after it in the file,
   by a positive number of minutes.
6. Cancel Flight: removes a flight.
7. Exit.

Errors, such as an unknown flight ID, are printed and the menu is shown
again. The program also ends when standard input runs out.

## Using it from Python

```python
import random

from flightsched.schedule import Airport

airport = Airport("flights.bin", rng=random.Random(1))
airport.start(600)
unassigned = airport.build_schedule()   # IDs of departures left without crew
for flight in airport.departures():
    print(flight.flight_id, flight.departure_time, flight.assigned_crew_id)
```

`Airport` also provides `add_flight`, `modify_priority`, `handle_emergency`
(which returns the runway allocated), `delay_flight` and `cancel_flight`.
Rejected operations raise `ScheduleError`; an unknown flight ID raises
`FlightNotFoundError`, a kind of `ScheduleError`. `EmergencyType` names the
two emergency kinds.

Other pieces:

- `flightsched.models`: the `Flight` dataclass, `encode_flights` /
  `decode_flights` for the record format, `FlightFile` for reading, writing
  and appending records, and the helpers `format_time` (renders `HHMM` as
  `HH:MM`) and `is_valid_time`.
- `flightsched.crew`: `CrewRoster` and `CrewMember` for crew allocation, and
  `calculate_flight_duration`, which gives the minutes between two `HHMM`
  times, wrapping past midnight.
- `flightsched.schedule`: besides `Airport`, the functions `initial_flights`,
  `sort_by_priority`, `sort_by_time`, `allocate_departure_times`,
  `allocate_arrival_times` and `allocate_runways`.
- `flightsched.app`: `run_menu(airport, input_stream, output_stream)` runs
  the menu over any pair of text streams; `main` is the command.

Flight durations are drawn at random (1 to 12 hours); pass a seeded
`random.Random` to `Airport` for repeatable schedules.

## What it does not do

There is no graphical window: the schedule is shown as plain text tables
in the terminal. Crew warnings are returned by `build_schedule` but not
printed by the menu.

## Tests

```
pip install .[test]
pytest
```