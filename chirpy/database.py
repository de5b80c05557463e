"""SQLite-backed persistence for Chirpy users."""
from __future__ import annotations

import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from .models import User

_SQLITE_URL_PREFIX = "sqlite:///"


class UserStoreError(RuntimeError):
    """Raised when the database cannot persist or load user records."""


def _ensure_directory(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def resolve_database_path(env_value: Optional[str]) -> Path:
    """Resolve the on-disk path for the application database.

    ``env_value`` may be a plain filesystem path or a ``sqlite:///`` URL.
    """

    if env_value:
        raw = env_value.strip()
        if raw.startswith(_SQLITE_URL_PREFIX):
            raw = raw[len(_SQLITE_URL_PREFIX):]
        elif "://" in raw:
            raise ValueError(f"Unsupported database URL: {env_value!r}")
        if raw:
            return Path(raw).expanduser().resolve(strict=False)
    base_dir = Path(__file__).resolve().parent.parent / "data"
    return (base_dir / "chirpy.sqlite3").resolve(strict=False)


def _current_timestamp() -> datetime:
    return datetime.now(timezone.utc)


def _serialize_datetime(value: datetime) -> str:
    return value.isoformat()


def _parse_datetime(value: str) -> datetime:
    return datetime.fromisoformat(value)


class Database:
    """Simple wrapper around SQLite for persisting users."""

    def __init__(self, path: Path) -> None:
        _ensure_directory(path)
        self._path = path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def initialize(self) -> None:
        """Create the required tables if they do not already exist."""

        with self._connect() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    email TEXT NOT NULL UNIQUE
                );

                CREATE INDEX IF NOT EXISTS idx_users_created_at ON users(created_at);
                """
            )

    # ------------------------------------------------------------------
    # User management
    # ------------------------------------------------------------------
    def create_user(self, email: str) -> User:
        """Insert a user with a generated id and timestamps."""

        user_id = uuid.uuid4()
        created_at = _current_timestamp()
        serialized = _serialize_datetime(created_at)

        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO users (id, created_at, updated_at, email)
                    VALUES (?, ?, ?, ?)
                    """,
                    (str(user_id), serialized, serialized, email),
                )
        except sqlite3.IntegrityError as exc:
            raise UserStoreError("A user with that email already exists") from exc
        except sqlite3.Error as exc:
            raise UserStoreError(f"Failed to persist user: {exc}") from exc

        return User(id=user_id, created_at=created_at, updated_at=created_at, email=email)

    def list_users(self) -> List[User]:
        try:
            with self._connect() as conn:
                rows = conn.execute("SELECT * FROM users ORDER BY created_at, rowid").fetchall()
        except sqlite3.Error as exc:
            raise UserStoreError(f"Failed to load users: {exc}") from exc
        return [self._row_to_user(row) for row in rows]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _row_to_user(self, row: sqlite3.Row) -> User:
        return User(
            id=uuid.UUID(str(row["id"])),
            created_at=_parse_datetime(str(row["created_at"])),
            updated_at=_parse_datetime(str(row["updated_at"])),
            email=str(row["email"]),
        )


__all__ = ["Database", "UserStoreError", "resolve_database_path"]
