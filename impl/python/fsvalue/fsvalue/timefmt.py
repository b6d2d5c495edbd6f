"""
UTC timestamp formatting and parsing for ``timestampValue`` payloads.

Outgoing timestamps use the fixed pattern ``yyyy-MM-dd'T'HH:mm:ss'Z'``.
Incoming ones may also carry fractional seconds or a numeric offset.
"""
from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

Formatter = Callable[[datetime], str]

_RFC3339 = re.compile(
    r'^(\d{4})-(\d{2})-(\d{2})'
    r'(?:[Tt ](\d{2}):(\d{2})(?::(\d{2})(?:\.(\d+))?)?'
    r'([Zz]|[+-]\d{2}:?\d{2})?)?$',
    re.ASCII,
)


def to_utc(value: date) -> datetime:
    """Normalize a date or datetime to an aware UTC datetime.

    Naive datetimes are taken to already be UTC; plain dates are midnight UTC.
    """
    if not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_utc_timestamp(value: datetime) -> str:
    # strftime pads years below 1000 inconsistently across platforms
    dt = to_utc(value)
    return "%04d-%02d-%02dT%02d:%02d:%02dZ" % (
        dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)


def _offset(text: Optional[str]) -> timezone:
    if text is None or text in ("Z", "z"):
        return timezone.utc
    sign = -1 if text[0] == "-" else 1
    digits = text[1:].replace(":", "")
    return timezone(sign * timedelta(hours=int(digits[:2]), minutes=int(digits[2:])))


def parse_utc_timestamp(raw: Any) -> Optional[datetime]:
    """Parse a wire timestamp into an aware UTC datetime.

    Returns None for a missing payload, for text that does not look like a
    timestamp, and for out-of-range fields such as month 13.
    """
    if not raw or not isinstance(raw, str):
        return None
    m = _RFC3339.match(raw.strip())
    if not m:
        logger.debug("unparseable timestamp %r", raw)
        return None
    year, month, day, hour, minute, second, frac, offset = m.groups()
    micro = int((frac or "0")[:6].ljust(6, "0"))
    try:
        dt = datetime(int(year), int(month), int(day),
                      int(hour or 0), int(minute or 0), int(second or 0), micro,
                      tzinfo=_offset(offset))
        return dt.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        logger.debug("out-of-range timestamp %r", raw)
        return None
