"""
Request and Response Schemas

Pydantic models for every JSON body the API accepts or returns.
Request models reject unknown shapes with a 400 (see errors.py);
response models are built from ORM rows via ``from_attributes``.
"""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, PlainSerializer, field_validator


# Largest value an id column holds (INTEGER is int4 on Postgres)
MAX_ID = 2**31 - 1


def serialize_utc(value: datetime) -> str:
    """Render a datetime as ISO-8601 in UTC with an explicit offset.

    SQLite hands timestamps back without tzinfo; they were written as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.isoformat()


UtcDateTime = Annotated[
    datetime,
    PlainSerializer(serialize_utc, return_type=str, when_used="json"),
]


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=1024)

    @field_validator("name")
    def strip_name(cls, value):
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("email")
    def normalize_email(cls, value):
        # Stored lower-cased so the unique index is case-insensitive
        return value.lower()


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=1024)

    @field_validator("email")
    def normalize_email(cls, value):
        return value.lower()


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: UtcDateTime


class RegisterResponse(BaseModel):
    user: UserOut
    token: TokenResponse


class PostCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    body: str = Field(..., min_length=1)

    @field_validator("title", "body")
    def not_blank(cls, value):
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class PostOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    body: str
    created_at: UtcDateTime


class PostPage(BaseModel):
    """One page of GET /v1/posts, newest first."""
    data: list[PostOut]
    page: int
    per_page: int
    total: int


class ShortlistOut(BaseModel):
    data: list[PostOut]


class ShortlistStatus(BaseModel):
    post_id: int
    shortlisted: bool
