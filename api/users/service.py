"""
User business logic: maps repository results to outcomes.
"""

from __future__ import annotations

from core.db import Database
from core.errors import NotFoundError

from . import repository, schemas

# Postgres INTEGER (the SERIAL id column) range.
_MIN_ID = 1
_MAX_ID = 2**31 - 1

USER_NOT_FOUND = "User not found"


def _to_user_response(row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=int(row["id"]),
        name=str(row["name"]),
        email=str(row["email"]),
        age=int(row["age"]),
    )


def _ensure_storable_id(user_id: int) -> None:
    # Ids outside the column range can never match and would make Postgres fail.
    if not _MIN_ID <= user_id <= _MAX_ID:
        raise NotFoundError(USER_NOT_FOUND)


async def list_users(database: Database) -> list[schemas.UserResponse]:
    rows = await repository.list_users(database)
    return [_to_user_response(row) for row in rows]


async def get_user(database: Database, user_id: int) -> schemas.UserResponse:
    _ensure_storable_id(user_id)
    row = await repository.get_user(database, user_id)
    if row is None:
        raise NotFoundError(USER_NOT_FOUND)
    return _to_user_response(row)


async def create_user(database: Database, payload: schemas.UserPayload) -> schemas.UserResponse:
    # Duplicate emails surface as DatabaseError (500); there is no 409 path.
    row = await repository.create_user(
        database,
        name=payload.name,
        email=payload.email,
        age=payload.age,
    )
    return _to_user_response(row)


async def update_user(
    database: Database,
    user_id: int,
    payload: schemas.UserPayload,
) -> schemas.UserResponse:
    _ensure_storable_id(user_id)
    row = await repository.update_user(
        database,
        user_id,
        name=payload.name,
        email=payload.email,
        age=payload.age,
    )
    if row is None:
        raise NotFoundError(USER_NOT_FOUND)
    return _to_user_response(row)


async def delete_user(database: Database, user_id: int) -> None:
    _ensure_storable_id(user_id)
    deleted = await repository.delete_user(database, user_id)
    if not deleted:
        raise NotFoundError(USER_NOT_FOUND)
