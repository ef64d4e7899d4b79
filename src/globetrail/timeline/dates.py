# SPDX-License-Identifier: Apache-2.0
"""CV date strings: ``MM/YYYY``, ``YYYY`` or ``current``."""

from __future__ import annotations

import datetime as dt

CURRENT = "current"


class TimelineDateError(ValueError):
    """Raised for a date string that is not ``MM/YYYY``, ``YYYY`` or ``current``."""


def parse_date(value: str, now: dt.date | None = None) -> dt.date:
    """Parse a CV date; months resolve to their first day, years to January 1.

    ``current`` (any case) resolves to ``now`` (default: today).
    """
    text = str(value).strip()
    if text.lower() == CURRENT:
        return now or dt.date.today()
    parts = text.split("/")
    try:
        if len(parts) == 2:
            month, year = int(parts[0]), int(parts[1])
        elif len(parts) == 1:
            month, year = 1, int(parts[0])
        else:
            raise ValueError(text)
        return dt.date(year, month, 1)
    except ValueError as exc:
        raise TimelineDateError(f"Unrecognized date: {value!r}") from exc


def format_date_short(value: dt.date) -> str:
    """``Jan 2020`` style label."""
    return value.strftime("%b %Y")
