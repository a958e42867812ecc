"""SQLAlchemy declarative Base and the UTC clock used for audit timestamps."""

from datetime import UTC, datetime

from sqlalchemy import inspect
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


def utcnow() -> datetime:
    """Timezone-aware current time; every persisted timestamp goes through this."""
    return datetime.now(UTC)


def as_utc(value: datetime | None) -> datetime | None:
    """Treat naive datetimes read back from the database (e.g. SQLite) as UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def created_date_changed(entity) -> bool:
    """True if a persistent entity's created_date was reassigned since it was loaded."""
    state = inspect(entity)
    if not state.persistent:
        return False
    return state.attrs.created_date.history.has_changes()
