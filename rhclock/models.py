"""Request and response records exchanged with the timesheet service."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

_UINT32_MAX = 2**32 - 1
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def _mapping(data: Any) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


def _int(data: Mapping[str, Any], key: str, low: int, high: int) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {key!r} must be an integer")
    if not low <= value <= high:
        raise ValueError(f"field {key!r} out of range: {value}")
    return value


@dataclass(frozen=True)
class LoginRequest:
    """Credentials sent to the login endpoint."""

    user: str
    password: str

    def to_dict(self) -> dict[str, Any]:
        return {"user": self.user, "password": self.password}


@dataclass(frozen=True)
class ClockingRequest:
    """Body of a clocking registration."""

    date: str
    hour: int
    latitude: str = "0"
    longitude: str = "0"
    timezone: int = 0
    address: str = "l-location-unavailable"

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "hour": self.hour,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "timezone": self.timezone,
            "address": self.address,
        }


@dataclass(frozen=True)
class CurrentTime:
    """Server date and the milliseconds elapsed since its midnight."""

    actual_date: str = ""
    actual_time: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> CurrentTime:
        data = _mapping(data)
        return cls(
            actual_date=_str(data, "actualDate"),
            actual_time=_int(data, "actualTime", 0, _UINT32_MAX),
        )


@dataclass(frozen=True)
class ClockingStatus:
    """Approval status of a clocking."""

    id: str = ""
    status: str = ""
    label: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> ClockingStatus:
        data = _mapping(data)
        return cls(id=_str(data, "id"), status=_str(data, "status"), label=_str(data, "label"))


@dataclass(frozen=True)
class Clocking:
    """A single registered entry or exit."""

    id: str = ""
    date: str = ""
    hour: int = 0
    direction: str = ""
    origin: str = ""
    status: ClockingStatus = field(default_factory=ClockingStatus)
    sequence: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> Clocking:
        data = _mapping(data)
        return cls(
            id=_str(data, "id"),
            date=_str(data, "date"),
            hour=_int(data, "hour", 0, _UINT32_MAX),
            direction=_str(data, "direction"),
            origin=_str(data, "origin"),
            status=ClockingStatus.from_dict(data.get("status")),
            sequence=_int(data, "sequence", -(2**63), 2**63 - 1),
        )


@dataclass(frozen=True)
class ClockingPeriod:
    """Clockings registered between two dates."""

    init_period: str = ""
    end_period: str = ""
    clockings: list[Clocking] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> ClockingPeriod:
        data = _mapping(data)
        raw = data.get("clockings")
        if raw is None:
            raw = []
        if not isinstance(raw, list):
            raise ValueError("field 'clockings' must be a list")
        return cls(
            init_period=_str(data, "initPeriod"),
            end_period=_str(data, "endPeriod"),
            clockings=[Clocking.from_dict(item) for item in raw],
        )


@dataclass(frozen=True)
class BalanceSummary:
    """Hour-bank balances in milliseconds."""

    previous: int = 0
    current: int = 0
    next: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> BalanceSummary:
        data = _mapping(data)
        return cls(
            previous=_int(data, "previous", _INT32_MIN, _INT32_MAX),
            current=_int(data, "current", _INT32_MIN, _INT32_MAX),
            next=_int(data, "next", _INT32_MIN, _INT32_MAX),
        )