"""Date keys: timestamp + timezone -> calendar date and display title.

Decisions:
- Month and weekday abbreviations are fixed English names, not strftime
  %b/%a, so output does not depend on the process locale.
- Timestamps must be timezone-aware; a naive datetime would silently pick up
  the executing machine's offset.
- yesterday_of subtracts exactly 86400 seconds. Across a DST change this can
  land on an unexpected calendar day; that is known and kept as is.
"""
from __future__ import annotations
import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from errors import ConfigurationError
from models import DateKey

DEFAULT_TZ = 'Asia/Baku'
MONTHS = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun', 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')
WEEKDAYS = ('Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun')
ONE_DAY = timedelta(seconds=86400)
_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")


def resolve_tz(name: Optional[str]) -> tzinfo:
    """Resolve "UTC", an IANA name or a fixed offset ("+04:00", "+0400")."""
    tz_name = (name or '').strip() or DEFAULT_TZ
    if tz_name.lower() in {'utc', 'z', 'gmt'}:
        return timezone.utc
    m = _OFFSET_RE.match(tz_name)
    if m:
        sign_s, hh_s, mm_s = m.groups()
        hh, mm = int(hh_s), int(mm_s)
        if hh > 23 or mm > 59:
            raise ConfigurationError(f'Invalid timezone offset: {tz_name!r}')
        sign = 1 if sign_s == '+' else -1
        return timezone(timedelta(minutes=sign * (hh * 60 + mm)))
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise ConfigurationError(f'Invalid timezone identifier: {tz_name!r}') from e


def _require_aware(ts: datetime) -> None:
    if ts.tzinfo is None or ts.utcoffset() is None:
        raise ValueError(f'timestamp must be timezone-aware: {ts!r}')


def date_key_for(ts: datetime, tz: tzinfo) -> DateKey:
    _require_aware(ts)
    local = ts.astimezone(tz)
    title = f"{local.year:04d}-{MONTHS[local.month - 1]}-{local.day:02d} {WEEKDAYS[local.weekday()]}"
    return DateKey(iso_date=local.date().isoformat(), title=title)


def yesterday_of(ts: datetime) -> datetime:
    _require_aware(ts)
    # UTC first: aware arithmetic in a ZoneInfo zone is wall-clock arithmetic.
    return ts.astimezone(timezone.utc) - ONE_DAY
