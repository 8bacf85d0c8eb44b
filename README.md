# rhclock

A small command-line time clock for the MeuRH timesheet service. From the
terminal it registers punches, lists clockings and shows your hour balance.

## Installation

```
pip install .
```

This installs the `clock` command.

## Usage

Log in once. The name, username and password are kept in a local SQLite file
at `~/.clock/data/clock.db`, together with the session token. Before each
request the token is checked with the service. If it is no longer accepted,
the stored username and password are used to log in again.

```
clock login --username jdoe --password password --name "Jane Doe"
clock login info
```

`--name` defaults to the username. `clock login info` prints the stored name
and username. It exits with status 1 when nobody is logged in.

Register an entry or an exit, stamped with the server's current time:

```
clock punch
clock p
```

Show the server's current time:

```
clock time
```

List clockings. The range defaults to today. If one end is given as an empty
value, for example `--end ""`, the other end is used for it:

```
clock list
clock ls --start 2025-01-01 --end 2025-01-31
```

Clockings from different days are separated by a line of dashes. Each
clocking shows its date, its time and whether it was an entry or an exit.

Show the previous, current and next balance for a period. Balances above zero
are shown in green and balances below zero in red. The period defaults to the
first day of the current month through today:

```
clock summary
clock s -s 2025-01-01 -e 2025-01-31
```

Dates are given as `YYYY-MM-DD`. A malformed date, or a start after the end,
is reported as an error. Run `clock --help`, or add `--help` after any
command, for the full list of options. `clock --version` prints the version.

## What it does not do

- `clock login` does not check the credentials. It stores them and whatever
  token the service returns.
- There is no logout command. Once a user is stored, `clock login` refuses to
  replace it. To log in as someone else, delete `~/.clock/data/clock.db`.
- Punches are sent without a location. Latitude and longitude are `"0"`, and
  the address is `l-location-unavailable`.

## Library use

The pieces behind the command can also be used directly.

- `rhclock.api.RhClient(base_url, session)` talks to the timesheet service.
  It has `login`, `is_logged`, `get_valid_token`, `get_time`,
  `request_clocking`, `get_clockings` and `get_balance_summary`. Request and
  decoding failures raise `ApiError`. Bad date ranges raise `PeriodError`.
  `rhclock.api.parse_period(start, end)` validates a date range on its own.
- `rhclock.models` holds the request and response records: `LoginRequest`,
  `ClockingRequest`, `CurrentTime`, `Clocking`, `ClockingStatus`,
  `ClockingPeriod` and `BalanceSummary`.
- `rhclock.store.Store(path)` keeps the `User` and the token. It is a context
  manager. `rhclock.store.default_path()` gives the default location. Failures
  raise `StoreError`.
- `rhclock.timeutil.format_time` and `rhclock.timeutil.format_duration` format
  the service's dates and millisecond durations.

## Development

```
pip install -e ".[test]"
pytest
```