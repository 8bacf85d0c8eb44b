"""Client for the timesheet service: login, current time, clockings and balances."""

from __future__ import annotations

import re
from datetime import date
from typing import Any, TypeVar

import requests

from rhclock.models import (
    BalanceSummary,
    ClockingPeriod,
    ClockingRequest,
    CurrentTime,
    LoginRequest,
)
from rhclock.store import User

BASE_URL = "https://meurh.segurosicoob.com.br:8400/restmeurh01"
LOGIN_PATH = "/auth/login"
IS_FIRST_LOGIN_PATH = "/auth/isFirstLogin"
CURRENT_TIME_PATH = "/timesheet/clockingsGeolocation/currentTime/0/0"
PERIOD_CLOCKINGS_PATH = "/timesheet/clockings/currentTime/"
POST_CLOCKING_PATH = "/timesheet/clockingsGeolocation/currentTime"
REASONS_PATH = "/timesheet/clockingsReasonTypes/currentTime"
BALANCE_SUMMARY_PATH = "/timesheet/balanceSummary/currentTime"

_DAY = re.compile(r"(\d{4})-(\d{2})-(\d{2})")

_Model = TypeVar("_Model")


class ApiError(Exception):
    """Raised when a request to the service fails or its answer cannot be read."""


class PeriodError(ValueError):
    """Raised when a date range is malformed or reversed."""


def _parse_day(text: str) -> date:
    match = _DAY.fullmatch(text)
    if match is None:
        raise ValueError(f"not a YYYY-MM-DD date: {text!r}")
    year, month, day = (int(part) for part in match.groups())
    return date(year, month, day)


def parse_period(start: str, end: str) -> tuple[date, date]:
    """Parse two ``YYYY-MM-DD`` dates and check that the first is not after the second."""
    try:
        start_day = _parse_day(start)
        end_day = _parse_day(end)
    except ValueError as exc:
        raise PeriodError("Error parsing period, please use format YYYY-MM-DD") from exc
    if start_day > end_day:
        raise PeriodError("Init period is after end period")
    return start_day, end_day


def _period_params(start: str, end: str) -> list[tuple[str, str]]:
    start_day, end_day = parse_period(start, end)
    return sorted(
        [("initPeriod", start_day.isoformat()), ("endPeriod", end_day.isoformat())]
    )


class RhClient:
    """Talks to the timesheet service on behalf of a stored user."""

    def __init__(
        self, base_url: str = BASE_URL, session: requests.Session | None = None
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()

    def _send(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        try:
            return self.session.request(method, self.base_url + path, **kwargs)
        except requests.RequestException as exc:
            raise ApiError(f"Error sending request: {exc}") from exc

    @staticmethod
    def _decode(response: requests.Response, model: type[_Model]) -> _Model:
        try:
            return model.from_dict(response.json())  # type: ignore[attr-defined]
        except ValueError as exc:
            raise ApiError(f"Error decoding response: {exc}") from exc

    def login(self, username: str, password: str) -> str:
        """Log in and return the token the service hands back, or "" if none."""
        body = LoginRequest(user=username, password=password).to_dict()
        response = self._send("POST", LOGIN_PATH, json=body)
        return response.headers.get("Set-Authorization", "")

    def is_logged(self, username: str, token: str) -> bool:
        """Whether the service still accepts the token; unreadable answers count as no."""
        response = self._send(
            "GET",
            IS_FIRST_LOGIN_PATH,
            params=[("employeeId", username)],
            headers={"Authorization": token},
        )
        try:
            data = response.json()
        except ValueError:
            return False
        if not isinstance(data, dict):
            return False
        return data.get("isLogged") is True

    def get_valid_token(self, user: User, token: str) -> str:
        """Return the token if still valid, otherwise log in again for a fresh one."""
        if self.is_logged(user.username, token):
            return token
        return self.login(user.username, user.password)

    def get_time(self, user: User, token: str) -> CurrentTime:
        """Fetch the server's current date and time of day."""
        valid_token = self.get_valid_token(user, token)
        response = self._send(
            "GET",
            CURRENT_TIME_PATH,
            params=[("employeeId", user.username)],
            headers={"Authorization": valid_token},
        )
        return self._decode(response, CurrentTime)

    def request_clocking(self, user: User, token: str) -> CurrentTime:
        """Register a clocking at the server's current time and return that time."""
        valid_token = self.get_valid_token(user, token)
        current = self.get_time(user, valid_token)
        body = ClockingRequest(date=current.actual_date, hour=current.actual_time)
        self._send(
            "POST",
            POST_CLOCKING_PATH,
            json=body.to_dict(),
            headers={"Authorization": valid_token, "Content-Type": "application/json"},
        )
        return current

    def get_clockings(self, user: User, token: str, start: str, end: str) -> ClockingPeriod:
        """List the clockings registered between two ``YYYY-MM-DD`` dates."""
        params = _period_params(start, end)
        valid_token = self.get_valid_token(user, token)
        response = self._send(
            "GET",
            PERIOD_CLOCKINGS_PATH,
            params=params,
            headers={"Authorization": valid_token},
        )
        return self._decode(response, ClockingPeriod)

    def get_balance_summary(
        self, user: User, token: str, start: str, end: str
    ) -> BalanceSummary:
        """Fetch the hour-bank balances for the period between two dates."""
        params = _period_params(start, end)
        valid_token = self.get_valid_token(user, token)
        response = self._send(
            "GET",
            BALANCE_SUMMARY_PATH,
            params=params,
            headers={"Authorization": valid_token},
        )
        return self._decode(response, BalanceSummary)