import json
from datetime import date

import pytest
import responses

from rhclock.api import (
    BALANCE_SUMMARY_PATH,
    BASE_URL,
    CURRENT_TIME_PATH,
    IS_FIRST_LOGIN_PATH,
    LOGIN_PATH,
    PERIOD_CLOCKINGS_PATH,
    POST_CLOCKING_PATH,
)
from rhclock.cli import build_parser, color_direction, color_summary, main
from rhclock.store import Store, User, default_path
from rhclock.timeutil import format_duration, format_time

PASSWORD = "password"


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    return tmp_path


@pytest.fixture
def http():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def logged_in(home, http):
    password = PASSWORD
    with Store(default_path()) as store:
        store.save_user(User(name="Alice", username="alice", password=password))
        store.save_token("token")
    http.add(responses.GET, BASE_URL + IS_FIRST_LOGIN_PATH, json={"isLogged": True})
    return http


def test_color_direction_entry_and_exit():
    assert "🟢 Entry" in color_direction("entry")
    assert "green" in color_direction("entry")
    assert "🔴 Exit" in color_direction("exit")
    assert "🔴 Exit" in color_direction("anything")


def test_color_summary_by_sign():
    assert color_summary(0) == format_duration(0)
    positive = color_summary(3_600_000)
    assert "bold green" in positive and format_duration(3_600_000) in positive
    negative = color_summary(-90_000)
    assert "bold red" in negative and format_duration(-90_000) in negative


def test_parser_defaults():
    parser = build_parser()
    today = date.today()
    listed = parser.parse_args(["list"])
    assert listed.start == listed.end == today.isoformat()
    summary = parser.parse_args(["s"])
    assert summary.start == today.replace(day=1).isoformat()
    assert summary.end == today.isoformat()
    explicit = parser.parse_args(["ls", "-s", "2025-01-01", "-e", "2025-01-31"])
    assert (explicit.start, explicit.end) == ("2025-01-01", "2025-01-31")


def test_no_command_prints_help(home, capsys):
    assert main([]) == 0
    assert "clock" in capsys.readouterr().out


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert "1.0.1" in capsys.readouterr().out


def test_info_without_user(home, capsys):
    assert main(["login", "info"]) == 1
    assert "user not found, please run 'clock login'" in capsys.readouterr().out


def test_login_saves_user_and_token(home, http, capsys):
    http.add(
        responses.POST,
        BASE_URL + LOGIN_PATH,
        headers={"Set-Authorization": "token"},
        status=200,
    )
    password = PASSWORD
    assert main(["login", "-u", "alice", "-p", password]) == 0
    out = capsys.readouterr().out
    assert "User created" in out
    assert "Login successful with name alice" in out

    with Store(default_path()) as store:
        assert store.get_token() == "token"
        assert store.get_user() == User(name="alice", username="alice", password=password)

    sent = json.loads(http.calls[0].request.body)
    assert sent == {"user": "alice", "password": password}

    assert main(["login", "info"]) == 0
    assert "Name: alice; Username: alice" in capsys.readouterr().out


def test_login_when_already_logged(logged_in, capsys):
    password = PASSWORD
    assert main(["login", "-u", "bob", "-p", password]) == 0
    assert "User already logged in with name Alice" in capsys.readouterr().out


def test_login_requires_flags(home, capsys):
    assert main(["login", "-u", "alice"]) == 1
    assert '"password"' in capsys.readouterr().err


def test_time_without_user(home, capsys):
    assert main(["time"]) == 1
    assert "user not found" in capsys.readouterr().out


def test_time_prints_server_time(logged_in, capsys):
    logged_in.add(
        responses.GET,
        BASE_URL + CURRENT_TIME_PATH,
        json={"actualDate": "2025-01-15T00:00:00Z", "actualTime": 3_600_000},
    )
    assert main(["time"]) == 0
    expected = format_time("2025-01-15T00:00:00Z", 3_600_000)[0]
    assert f"Actual time: 🕑 {expected}" in capsys.readouterr().out


def test_time_with_empty_answer(logged_in, capsys):
    logged_in.add(responses.GET, BASE_URL + CURRENT_TIME_PATH, json={})
    assert main(["time"]) == 1
    assert "error getting time" in capsys.readouterr().out


def test_punch_posts_clocking(logged_in, capsys):
    logged_in.add(
        responses.GET,
        BASE_URL + CURRENT_TIME_PATH,
        json={"actualDate": "2025-01-15T00:00:00Z", "actualTime": 3_600_000},
    )
    logged_in.add(responses.POST, BASE_URL + POST_CLOCKING_PATH, json={})
    assert main(["p"]) == 0
    expected = format_time("2025-01-15T00:00:00Z", 3_600_000)[0]
    assert f"Clocking registered: 🕑 {expected}" in capsys.readouterr().out

    posts = [c for c in logged_in.calls if c.request.url == BASE_URL + POST_CLOCKING_PATH]
    assert len(posts) == 1
    body = json.loads(posts[0].request.body)
    assert body["hour"] == 3_600_000
    assert body["address"] == "l-location-unavailable"
    assert body["date"] == "2025-01-15T00:00:00Z"


def test_list_groups_days(logged_in, capsys):
    logged_in.add(
        responses.GET,
        BASE_URL + PERIOD_CLOCKINGS_PATH,
        json={
            "initPeriod": "2025-01-01",
            "endPeriod": "2025-01-02",
            "clockings": [
                {"date": "2025-01-01T00:00:00Z", "hour": 28_800_000, "direction": "entry"},
                {"date": "2025-01-01T00:00:00Z", "hour": 43_200_000, "direction": "exit"},
                {"date": "2025-01-02T00:00:00Z", "hour": 28_800_000, "direction": "entry"},
            ],
        },
    )
    assert main(["list", "-s", "2025-01-01", "-e", "2025-01-02"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines.count("--------") == 1
    rows = [line for line in lines if "🕑" in line]
    assert len(rows) == 3
    assert sum("🟢 Entry" in row for row in rows) == 2
    assert sum("🔴 Exit" in row for row in rows) == 1

    period_calls = [c for c in logged_in.calls if PERIOD_CLOCKINGS_PATH in c.request.url]
    assert "initPeriod=2025-01-01" in period_calls[0].request.url
    assert "endPeriod=2025-01-02" in period_calls[0].request.url


def test_list_empty(logged_in, capsys):
    logged_in.add(responses.GET, BASE_URL + PERIOD_CLOCKINGS_PATH, json={"clockings": []})
    assert main(["ls"]) == 0
    assert "No clockings found" in capsys.readouterr().out


def test_list_reversed_period(logged_in, capsys):
    assert main(["list", "-s", "2025-02-01", "-e", "2025-01-01"]) == 0
    assert "Init period is after end period" in capsys.readouterr().out


def test_summary_prints_balances(logged_in, capsys):
    logged_in.add(
        responses.GET,
        BASE_URL + BALANCE_SUMMARY_PATH,
        json={"previous": 3_600_000, "current": 0, "next": -90_000},
    )
    assert main(["summary", "-s", "2025-01-01", "-e", "2025-01-31"]) == 0
    out = capsys.readouterr().out
    assert "2025-01-01" in out and "2025-01-31" in out
    assert format_duration(3_600_000) in out
    assert format_duration(-90_000) in out
    assert "-" * 40 in out


def test_summary_reversed_period(logged_in, capsys):
    assert main(["summary", "-s", "2025-02-01", "-e", "2025-01-01"]) == 1
    out = capsys.readouterr().out
    assert "Init period is after end period" in out
    assert "Error getting balance summary" in out


def test_summary_without_user(home, capsys):
    assert main(["summary"]) == 1
    assert "User not found, please run 'clock login'" in capsys.readouterr().out