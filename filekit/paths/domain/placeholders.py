"""Template placeholders expanded into storage paths and file names.

Supported tokens are ``{year}``, ``{month}``, ``{day}``, ``{hour}``,
``{minute}``, ``{second}``, ``{week}`` (ISO-8601 week number), ``{wday}``
(0 = Sunday), ``{timestamp}`` (Unix epoch seconds) and ``{uniqid}``.  Tokens
are replaced literally in a single pass; unknown ``{...}`` tokens are left
as they are.
"""

from __future__ import annotations

import re
import secrets
from datetime import datetime
from enum import Enum

__all__ = ["Placeholder", "placeholder_values", "expand_placeholders", "uniqid"]

_TOKEN_RE = re.compile(r"\{([a-z]+)\}")


class Placeholder(Enum):
    """Placeholder names recognised in templates."""
    YEAR = "year"
    MONTH = "month"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"
    WEEK = "week"
    WDAY = "wday"
    TIMESTAMP = "timestamp"
    UNIQID = "uniqid"

    @property
    def token(self) -> str:
        return "{" + self.value + "}"


def uniqid(moment: datetime) -> str:
    """Return a process-unique token derived from *moment*.

    Thirteen hex digits of seconds and microseconds followed by six random hex
    digits, e.g. ``65e6a3c00d4f1a9b3c2e``.
    """

    seconds = int(moment.timestamp())
    return f"{seconds:08x}{moment.microsecond:05x}{secrets.token_hex(3)}"


def placeholder_values(moment: datetime) -> dict[str, str]:
    """Return the token → value table for *moment*."""

    return {
        Placeholder.YEAR.token: f"{moment.year:04d}",
        Placeholder.MONTH.token: f"{moment.month:02d}",
        Placeholder.DAY.token: f"{moment.day:02d}",
        Placeholder.HOUR.token: f"{moment.hour:02d}",
        Placeholder.MINUTE.token: f"{moment.minute:02d}",
        Placeholder.SECOND.token: f"{moment.second:02d}",
        Placeholder.WEEK.token: f"{moment.isocalendar()[1]:02d}",
        Placeholder.WDAY.token: str((moment.weekday() + 1) % 7),
        Placeholder.TIMESTAMP.token: str(int(moment.timestamp())),
        Placeholder.UNIQID.token: uniqid(moment),
    }


def expand_placeholders(template: str, moment: datetime) -> str:
    """Replace every known placeholder token in *template*."""

    values = placeholder_values(moment)
    return _TOKEN_RE.sub(lambda match: values.get(match.group(0), match.group(0)), template)
