"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

import uuid
from datetime import date, datetime
from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from codeboard.backend.core.database import get_db_session
from codeboard.backend.core.exceptions import ValidationError
from codeboard.backend.core.utils import to_naive_utc
from codeboard.backend.models.tag import NoteTag

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


async def get_request_id(x_request_id: str | None = Header(None)) -> str:
    """
    Extract or generate request ID from headers.

    Used for request tracing and correlation.
    """
    return x_request_id or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]


def parse_tag_list(raw: str | None) -> set[NoteTag]:
    """
    Parse a comma-separated tag list from a query string.

    Blank entries are skipped; an unknown name is a validation error.
    """
    if raw is None:
        return set()
    tags = set()
    for name in raw.split(","):
        name = name.strip()
        if not name:
            continue
        try:
            tags.add(NoteTag.from_name(name))
        except ValueError as e:
            raise ValidationError(str(e), details={"field": "tags", "value": name}) from e
    return tags


def parse_date_bound(raw: str | None, field: str) -> date | datetime | None:
    """
    Parse an ISO-8601 range bound from a query string.

    A plain date ("2024-05-01") stays a date so the caller can widen it
    to the whole day; anything with a time part becomes a naive UTC
    datetime.
    """
    if raw is None or not raw.strip():
        return None
    raw = raw.strip()
    try:
        if len(raw) == 10:
            return date.fromisoformat(raw)
        return to_naive_utc(datetime.fromisoformat(raw))
    except ValueError as e:
        raise ValidationError(
            f"{field} must be an ISO-8601 date or datetime",
            details={"field": field, "value": raw},
        ) from e
