from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; every stored timestamp is UTC"""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def violates(error: IntegrityError, *markers: str) -> bool:
    """
    Match an IntegrityError against a constraint.

    PostgreSQL reports the constraint name, SQLite reports the `table.column` list,
    so callers pass both forms.
    """
    message = str(error.orig)
    return any(marker in message for marker in markers)
