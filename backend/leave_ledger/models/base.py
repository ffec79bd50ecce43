from __future__ import annotations

import uuid
from datetime import UTC, datetime

import sqlalchemy as sa
from sqlmodel import Field, SQLModel


def now_utc() -> datetime:
    return datetime.now(UTC)


def _timestamp_column(**column_kwargs: object) -> dict[str, object]:
    return {"server_default": sa.func.now(), **column_kwargs}


class UUIDBase(SQLModel):
    """Tables keyed by a random UUID generated client-side."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, sa_type=sa.Uuid)


class TimestampMixin(SQLModel):
    created_at: datetime = Field(
        default_factory=now_utc,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
        sa_column_kwargs=_timestamp_column(),
    )


class UpdatedAtMixin(SQLModel):
    """Adds ``updated_at``; services also set it explicitly on every write."""

    updated_at: datetime = Field(
        default_factory=now_utc,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
        sa_column_kwargs=_timestamp_column(onupdate=sa.func.now()),
    )
