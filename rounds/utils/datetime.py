"""Timestamps for comments, mentions and notifications.

Entities carry aware datetimes in the application timezone; the database
columns are plain ``DATETIME`` and hold the same wall-clock value without an
offset.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from rounds.config import get_settings

_FIXED_OFFSET: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


def resolve_timezone(name: str) -> tzinfo:
    """Turn ``UTC+02:00``-style offsets or IANA names into a ``tzinfo``.

    Blank or unknown names resolve to UTC.
    """

    name = name.strip()
    offset = _FIXED_OFFSET.match(name)
    if offset:
        delta = timedelta(
            hours=int(offset.group("hours")),
            minutes=int(offset.group("minutes") or 0),
        )
        return timezone(-delta if offset.group("sign") == "-" else delta)
    if not name:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


@lru_cache(maxsize=1)
def _app_timezone() -> tzinfo:
    return resolve_timezone(get_settings().app_timezone or "")


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Column default: the current app-local time without ``tzinfo``."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach or convert ``value`` to the app timezone; naive means app-local."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=_app_timezone())
    return value.astimezone(_app_timezone())


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Prepare ``value`` for a ``DATETIME`` column."""

    if value is None:
        return None
    return ensure_app_timezone(value).replace(tzinfo=None)
