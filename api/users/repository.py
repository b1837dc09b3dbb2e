"""
User persistence (raw SQL).

One statement per operation; each function takes the `Database` explicitly.
"""

from __future__ import annotations

from typing import Any

from core.db import Database

USER_COLUMNS = "id, name, email, age"

LIST_USERS_SQL = f"SELECT {USER_COLUMNS} FROM users ORDER BY id"

GET_USER_SQL = f"SELECT {USER_COLUMNS} FROM users WHERE id = $1"

CREATE_USER_SQL = f"""
    INSERT INTO users (name, email, age)
    VALUES ($1, $2, $3)
    RETURNING {USER_COLUMNS}
"""

UPDATE_USER_SQL = f"""
    UPDATE users
    SET name = $2,
        email = $3,
        age = $4
    WHERE id = $1
    RETURNING {USER_COLUMNS}
"""

DELETE_USER_SQL = "DELETE FROM users WHERE id = $1"


async def list_users(database: Database) -> list[dict[str, Any]]:
    result = await database.execute(LIST_USERS_SQL)
    return result.rows


async def get_user(database: Database, user_id: int) -> dict[str, Any] | None:
    result = await database.execute(GET_USER_SQL, user_id)
    return result.rows[0] if result.rows else None


async def create_user(database: Database, *, name: str, email: str, age: int) -> dict[str, Any]:
    result = await database.execute(CREATE_USER_SQL, name, email, age)
    if not result.rows:
        raise RuntimeError("INSERT into users returned no row.")
    return result.rows[0]


async def update_user(
    database: Database,
    user_id: int,
    *,
    name: str,
    email: str,
    age: int,
) -> dict[str, Any] | None:
    """
    Overwrite all mutable fields. Returns the updated row, or None when no
    row has this id.
    """
    result = await database.execute(UPDATE_USER_SQL, user_id, name, email, age)
    return result.rows[0] if result.rows else None


async def delete_user(database: Database, user_id: int) -> bool:
    result = await database.execute(DELETE_USER_SQL, user_id)
    return result.row_count > 0
