"""
Pydantic schemas for user endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictInt, StrictStr, field_validator

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 100

# Postgres INTEGER column range.
AGE_MIN = -(2**31)
AGE_MAX = 2**31 - 1


class UserPayload(BaseModel):
    """
    Body for create and update. All three fields are required; update always
    overwrites every field.

    `age` must be a JSON integer: 0 is accepted, strings, booleans
    and values outside the INTEGER column range are not.
    """

    name: StrictStr = Field(..., max_length=NAME_MAX_LENGTH)
    email: StrictStr = Field(..., max_length=EMAIL_MAX_LENGTH)
    age: StrictInt = Field(..., ge=AGE_MIN, le=AGE_MAX)

    @field_validator("name", "email")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    age: int
