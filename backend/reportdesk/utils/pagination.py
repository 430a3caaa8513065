from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Tuple, Type, TypedDict

from dateutil.parser import isoparse
from sqlalchemy.orm import Query
from sqlalchemy.sql import and_, or_

from reportdesk.domain.exceptions import ValidationError

MAX_LIMIT = 100


class CursorMeta(TypedDict):
    has_more: bool
    next_cursor: Optional[str]


def encode_cursor(created_at: datetime, row_id: Any) -> str:
    """``<ISO8601>|<id>`` of the last row on a page."""
    return f"{created_at.isoformat()}|{row_id}"


def decode_cursor(cursor: str) -> Tuple[datetime, str]:
    if not cursor or "|" not in cursor:
        raise ValidationError("Invalid cursor format")

    ts_str, row_id = cursor.split("|", 1)
    try:
        return isoparse(ts_str), row_id
    except ValueError as exc:
        raise ValidationError("Invalid cursor format") from exc


def parse_limit(value, default: int) -> int:
    if value in (None, ""):
        return default
    try:
        limit = int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError("limit must be an integer") from exc

    if limit <= 0:
        raise ValidationError("limit must be greater than zero")
    return min(limit, MAX_LIMIT)


def paginate_cursor(
    query: Query,
    *,
    model: Type[Any],
    limit: int,
    cursor: Optional[str] = None,
) -> tuple[list[Any], CursorMeta]:
    """
    Newest-first keyset pagination.

    Ordering contract: ORDER BY created_at DESC, id DESC. One extra row is
    fetched to detect continuation.
    """
    if cursor:
        cursor_ts, cursor_id = decode_cursor(cursor)
        query = query.filter(
            or_(
                model.created_at < cursor_ts,
                and_(model.created_at == cursor_ts, model.id < cursor_id),
            )
        )

    rows = (
        query.order_by(model.created_at.desc(), model.id.desc())
        .limit(limit + 1)
        .all()
    )

    has_more = len(rows) > limit
    items = rows[:limit]

    next_cursor = None
    if has_more and items:
        last = items[-1]
        next_cursor = encode_cursor(last.created_at, last.id)

    return items, {"has_more": has_more, "next_cursor": next_cursor}
