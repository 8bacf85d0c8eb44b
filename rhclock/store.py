"""Local persistence of the logged-in user and the session token."""

from __future__ import annotations

import json
import sqlite3
from dataclasses import asdict, dataclass
from pathlib import Path
from types import TracebackType
from typing import Any

_TABLE = "clock"
_USER_KEY = "user"
_TOKEN_KEY = "token"


class StoreError(Exception):
    """Raised when the local store cannot be opened, read or written."""


@dataclass(frozen=True)
class User:
    """Credentials and display name of the logged-in user."""

    name: str = ""
    username: str = ""
    password: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"Name": self.name, "Username": self.username, "Password": self.password}

    @classmethod
    def from_dict(cls, data: Any) -> User:
        if not isinstance(data, dict):
            raise ValueError("user record must be a JSON object")
        values = {}
        for attr, key in (("name", "Name"), ("username", "Username"), ("password", "Password")):
            value = data.get(key)
            if value is None:
                value = ""
            if not isinstance(value, str):
                raise ValueError(f"user field {key!r} must be a string")
            values[attr] = value
        return cls(**values)


def default_path() -> Path:
    """Location of the database under the user's home directory."""
    return Path.home() / ".clock" / "data" / "clock.db"


class Store:
    """A small key-value store holding the user and token."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else default_path()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self.path)
            with self._conn:
                self._conn.execute(
                    f"CREATE TABLE IF NOT EXISTS {_TABLE} (key TEXT PRIMARY KEY, value BLOB NOT NULL)"
                )
        except (OSError, sqlite3.Error) as exc:
            raise StoreError(f"cannot open store at {self.path}: {exc}") from exc

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> Store:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _put(self, key: str, value: bytes) -> None:
        try:
            with self._conn:
                self._conn.execute(
                    f"INSERT INTO {_TABLE} (key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    (key, value),
                )
        except sqlite3.Error as exc:
            raise StoreError(f"cannot save {key}: {exc}") from exc

    def _get(self, key: str) -> bytes | None:
        try:
            row = self._conn.execute(f"SELECT value FROM {_TABLE} WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as exc:
            raise StoreError(f"cannot read {key}: {exc}") from exc
        if row is None:
            return None
        value = row[0]
        return value.encode() if isinstance(value, str) else bytes(value)

    def save_user(self, user: User) -> None:
        self._put(_USER_KEY, json.dumps(user.to_dict()).encode())

    def get_user(self) -> User | None:
        """Return the saved user, or None when nobody has logged in."""
        raw = self._get(_USER_KEY)
        if raw is None:
            return None
        try:
            return User.from_dict(json.loads(raw))
        except ValueError as exc:
            raise StoreError(f"stored user is unreadable: {exc}") from exc

    def save_token(self, token: str) -> None:
        self._put(_TOKEN_KEY, token.encode())

    def get_token(self) -> str | None:
        """Return the saved token, or None when none has been stored."""
        raw = self._get(_TOKEN_KEY)
        if raw is None:
            return None
        try:
            return raw.decode()
        except UnicodeDecodeError as exc:
            raise StoreError(f"stored token is unreadable: {exc}") from exc