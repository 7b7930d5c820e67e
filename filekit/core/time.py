"""Time-related helpers.

This module centralizes helpers for obtaining the current time.  Components
that stamp paths with date/time values accept a :data:`Clock` so that tests can
pin the moment instead of relying on the wall clock.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current UTC time as an aware ``datetime`` instance."""

    return datetime.now(timezone.utc)


def local_now() -> datetime:
    """Return the current local time as an aware ``datetime`` instance."""

    return datetime.now().astimezone()


def fixed_clock(moment: datetime) -> Clock:
    """Return a clock that always reports *moment*."""

    def _clock() -> datetime:
        return moment

    return _clock


def clock_for_timezone(name: str | None) -> Clock:
    """Return the clock matching a configured timezone name.

    ``"utc"`` selects :func:`utc_now`; anything else (including ``None``)
    selects :func:`local_now`.
    """

    if name and name.strip().lower() == "utc":
        return utc_now
    return local_now
