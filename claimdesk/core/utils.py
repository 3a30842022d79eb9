import calendar
import json
import threading
import time
from datetime import datetime, date
from typing import Optional, Tuple

DEFAULT_DOCUMENT_NAME = "View Document"


_id_lock = threading.Lock()
_last_id_millis = 0


def new_prefixed_id(prefix: str) -> str:
    """IDs like `comp-1718000000000` (epoch millis), strictly increasing per process."""
    global _last_id_millis
    with _id_lock:
        millis = max(int(time.time() * 1000), _last_id_millis + 1)
        _last_id_millis = millis
    return f"{prefix}-{millis}"


def decode_document(value) -> Optional[dict]:
    """
    Decode a stored photo/document column.
    Accepts a JSON object with a `url` key, or (legacy rows) a bare URL string.
    Anything else is treated as absent.
    """
    if not value:
        return None
    if isinstance(value, dict):
        parsed = value
    else:
        try:
            parsed = json.loads(value)
        except (TypeError, ValueError):
            if isinstance(value, str) and value.startswith("http"):
                return {"url": value, "name": DEFAULT_DOCUMENT_NAME}
            return None
    if isinstance(parsed, dict) and parsed.get("url"):
        return {"url": parsed["url"], "name": parsed.get("name") or DEFAULT_DOCUMENT_NAME}
    # JSON-valid but not an object, e.g. a quoted URL string
    if isinstance(parsed, str) and parsed.startswith("http"):
        return {"url": parsed, "name": DEFAULT_DOCUMENT_NAME}
    return None


def decode_photo_url(value) -> Optional[str]:
    document = decode_document(value)
    return document["url"] if document else None


def encode_document(url: Optional[str], name: Optional[str] = None) -> Optional[str]:
    if not url:
        return None
    return json.dumps({"url": url, "name": name or DEFAULT_DOCUMENT_NAME})


def end_of_day(value) -> datetime:
    if isinstance(value, datetime):
        return value.replace(hour=23, minute=59, second=59, microsecond=999000)
    return datetime(value.year, value.month, value.day, 23, 59, 59, 999000)


def start_of_day(value) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def resolve_date_window(date_from=None, date_to=None, now: Optional[datetime] = None) -> Optional[Tuple[datetime, datetime]]:
    """
    Inclusive [from, to] window for report filters, or None when no `from` is given.
    The upper bound covers the whole `to` day (or today when `to` is omitted).
    """
    if not date_from:
        return None
    upper = date_to or now or datetime.utcnow()
    return start_of_day(date_from), end_of_day(upper)


def days_in_month(month: int, year: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_bounds(month: int, year: int) -> Tuple[date, date]:
    return date(year, month, 1), date(year, month, days_in_month(month, year))


def full_name(first_name: Optional[str], last_name: Optional[str]) -> str:
    return f"{first_name or ''} {last_name or ''}".strip()
