"""
pytest configuration and fixtures.

The API tests run against `InMemoryDatabase`, a stand-in for `core.db.Database`
that understands exactly the statements in `users.repository`.
"""

from __future__ import annotations

from typing import Any, Generator

import pytest
from fastapi.testclient import TestClient

from core.db import QueryResult
from core.errors import DatabaseError
from core.settings import Settings
from main import create_app
from users import repository


class InMemoryDatabase:
    """Keeps `users` rows in a dict and enforces the unique email constraint."""

    def __init__(self) -> None:
        self.rows: dict[int, dict[str, Any]] = {}
        self.statements: list[str] = []
        self._next_id = 1

    def _email_taken(self, email: str, *, exclude_id: int | None = None) -> bool:
        return any(r["email"] == email and r["id"] != exclude_id for r in self.rows.values())

    async def execute(self, sql: str, *args: Any) -> QueryResult:
        self.statements.append(sql)

        if sql is repository.LIST_USERS_SQL:
            rows = [dict(self.rows[k]) for k in sorted(self.rows)]
            return QueryResult(rows=rows, row_count=len(rows))

        if sql is repository.GET_USER_SQL:
            row = self.rows.get(args[0])
            rows = [dict(row)] if row else []
            return QueryResult(rows=rows, row_count=len(rows))

        if sql is repository.CREATE_USER_SQL:
            name, email, age = args
            if self._email_taken(email):
                raise DatabaseError('duplicate key value violates unique constraint "users_email_key"')
            row = {"id": self._next_id, "name": name, "email": email, "age": age}
            self.rows[self._next_id] = row
            self._next_id += 1
            return QueryResult(rows=[dict(row)], row_count=1)

        if sql is repository.UPDATE_USER_SQL:
            user_id, name, email, age = args
            if user_id not in self.rows:
                return QueryResult()
            if self._email_taken(email, exclude_id=user_id):
                raise DatabaseError('duplicate key value violates unique constraint "users_email_key"')
            self.rows[user_id].update(name=name, email=email, age=age)
            return QueryResult(rows=[dict(self.rows[user_id])], row_count=1)

        if sql is repository.DELETE_USER_SQL:
            removed = self.rows.pop(args[0], None)
            return QueryResult(row_count=1 if removed else 0)

        raise AssertionError(f"unexpected statement: {sql!r}")


class BrokenDatabase:
    """Every statement fails the way a lost connection would."""

    def __init__(self) -> None:
        self.calls = 0

    async def execute(self, sql: str, *args: Any) -> QueryResult:
        self.calls += 1
        raise DatabaseError("ConnectionDoesNotExistError: connection was closed in the middle of operation")


class ExplodingDatabase:
    """Fails with a bug-style exception instead of a driver error."""

    async def execute(self, sql: str, *args: Any) -> QueryResult:
        raise KeyError("id")


@pytest.fixture
def memory_db() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def client(memory_db: InMemoryDatabase) -> Generator[TestClient, None, None]:
    app = create_app(Settings(log_level="WARNING"), database=memory_db)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def broken_client() -> Generator[TestClient, None, None]:
    app = create_app(Settings(log_level="WARNING"), database=BrokenDatabase())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def exploding_client() -> Generator[TestClient, None, None]:
    app = create_app(Settings(log_level="WARNING"), database=ExplodingDatabase())
    # ServerErrorMiddleware re-raises after the handler responds.
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def alice() -> dict:
    return {"name": "Alice", "email": "alice@example.com", "age": 30}
