from __future__ import annotations

import uuid
from pathlib import Path

import pytest

from chirpy.database import Database, UserStoreError, resolve_database_path


@pytest.fixture()
def database(tmp_path: Path) -> Database:
    db_path = tmp_path / "chirpy.sqlite3"
    db = Database(db_path)
    db.initialize()
    return db


def test_create_user_assigns_id_and_timestamps(database: Database) -> None:
    user = database.create_user("a@b.com")

    assert isinstance(user.id, uuid.UUID)
    assert user.email == "a@b.com"
    assert user.created_at == user.updated_at
    assert user.created_at.tzinfo is not None


def test_list_users_round_trips_records(database: Database) -> None:
    first = database.create_user("first@example.com")
    second = database.create_user("second@example.com")

    users = database.list_users()

    assert [user.id for user in users] == [first.id, second.id]
    assert users[0] == first


def test_duplicate_email_is_rejected(database: Database) -> None:
    database.create_user("dup@example.com")
    with pytest.raises(UserStoreError, match="already exists"):
        database.create_user("dup@example.com")


def test_missing_table_is_reported_as_store_error(tmp_path: Path) -> None:
    uninitialised = Database(tmp_path / "empty.sqlite3")
    with pytest.raises(UserStoreError):
        uninitialised.create_user("a@b.com")


def test_initialize_is_repeatable(database: Database) -> None:
    database.create_user("keep@example.com")
    database.initialize()
    assert len(database.list_users()) == 1


def test_resolve_database_path_accepts_sqlite_urls(tmp_path: Path) -> None:
    target = tmp_path / "store.sqlite3"
    assert resolve_database_path(f"sqlite:///{target}") == target.resolve()
    assert resolve_database_path(str(target)) == target.resolve()


def test_resolve_database_path_defaults_to_data_directory() -> None:
    path = resolve_database_path(None)
    assert path.name == "chirpy.sqlite3"
    assert path.parent.name == "data"


def test_resolve_database_path_rejects_other_schemes() -> None:
    with pytest.raises(ValueError):
        resolve_database_path("postgres://localhost/chirpy")
