# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities for PeerPulse.

All engine arithmetic happens on timezone-aware UTC datetimes. Records
coming from the backend may carry naive timestamps; those are assumed to
be UTC.

Usage:
------
    from peerpulse.utils.datetime import utc_now, start_of_day

    window_start = start_of_day(utc_now() - timedelta(days=7))
"""

from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Timezone-aware datetime representing current UTC time.
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure a datetime is timezone-aware UTC.

    Args:
        dt: A datetime object (naive or aware) or None.

    Returns:
        Timezone-aware UTC datetime or None.

    Note:
        - If dt is None, returns None
        - If dt is naive, assumes UTC and adds tzinfo
        - If dt is aware, converts to UTC
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def start_of_day(dt: datetime) -> datetime:
    """Get midnight of the given day (UTC)."""
    return ensure_utc(dt).replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(dt: datetime) -> datetime:
    """Get the last microsecond of the given day (UTC)."""
    return ensure_utc(dt).replace(hour=23, minute=59, second=59, microsecond=999999)


def hours_between(start: datetime, end: datetime) -> float:
    """Calculate the signed number of hours from start to end.

    Args:
        start: Earlier datetime.
        end: Later datetime.

    Returns:
        Hours elapsed (negative if end precedes start).
    """
    return (ensure_utc(end) - ensure_utc(start)).total_seconds() / SECONDS_PER_HOUR


def days_between(start: datetime, end: datetime) -> float:
    """Calculate the signed number of days from start to end."""
    return (ensure_utc(end) - ensure_utc(start)).total_seconds() / SECONDS_PER_DAY


def days_before(now: datetime, days: int) -> datetime:
    """Get a datetime N days before now."""
    return ensure_utc(now) - timedelta(days=days)
