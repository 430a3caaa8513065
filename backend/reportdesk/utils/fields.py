from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from dateutil.parser import isoparse

from reportdesk.domain.exceptions import ValidationError


def parse_date(value, field_name):
    """Accept ``YYYY-MM-DD`` or a full ISO timestamp; empty means cleared."""
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    try:
        return isoparse(str(value)).date()
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field_name} must be an ISO date") from exc


def parse_decimal(value, field_name):
    if value in (None, ""):
        return None

    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"{field_name} must be a number") from exc


def parse_text(value, field_name):
    if value is None:
        return None
    if not isinstance(value, (str, int, float)):
        raise ValidationError(f"{field_name} must be text")
    return str(value).strip() or None
