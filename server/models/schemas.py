# server/models/schemas.py

import re
from pydantic import BaseModel, ConfigDict, Field, field_validator
from core.security import MAX_PASSWORD_BYTES
from models.task import TaskStatus


# At least one upper-case letter, one lower-case letter,
# and a digit or a special character.
PASSWORD_STRENGTH = re.compile(r"((?=.*\d)|(?=.*\W+))(?![.\n])(?=.*[A-Z])(?=.*[a-z]).*$")


# -------------------------------
# Auth Schemas
# -------------------------------

class AuthCredentials(BaseModel):
    username: str = Field(min_length=4, max_length=20)
    password: str = Field(min_length=8, max_length=20)

    @field_validator("password")
    @classmethod
    def password_is_strong(cls, value: str) -> str:
        if not PASSWORD_STRENGTH.match(value):
            raise ValueError("password too weak")
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class JwtPayload(BaseModel):
    username: str


class Token(BaseModel):
    access_token: str
    token_type: str


class UserRead(BaseModel):
    username: str


# -------------------------------
# Task Schemas
# -------------------------------

class TaskCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)


class TaskFilter(BaseModel):
    status: TaskStatus | None = None
    search: str | None = Field(default=None, min_length=1)


class TaskStatusUpdate(BaseModel):
    status: TaskStatus

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value):
        normalized = value.upper() if isinstance(value, str) else value
        if normalized not in TaskStatus.__members__:
            raise ValueError(f'"{value}" is an invalid status')
        return TaskStatus(normalized)


class TaskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    status: TaskStatus
