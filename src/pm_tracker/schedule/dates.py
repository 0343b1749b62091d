# src/pm_tracker/schedule/dates.py

"""
Calendar date helpers.

All persisted dates are plain "YYYY-MM-DD" strings (local calendar dates,
no time zone). Arithmetic happens on datetime.date and is converted back
to keys before it leaves the module that did it.
"""

from __future__ import annotations

from datetime import date

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def parse_date(s: str) -> date:
    """Parse "YYYY-MM-DD". Raises ValueError on malformed input."""
    y, m, d = (int(part) for part in s.split("-"))
    return date(y, m, d)


def format_key(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def format_display(s: str) -> str:
    """'2025-03-05' -> 'Mar 5, 2025'."""
    y, m, d = s.split("-")
    return f"{MONTH_ABBR[int(m) - 1]} {int(d)}, {y}"


def today_key() -> str:
    return format_key(date.today())


def days_diff(s: str, today: str | None = None) -> int:
    """
    Signed whole days from today to `s` (positive = future).

    `today` defaults to the current local date; pass a key to pin it.
    """
    ref = parse_date(today if today is not None else today_key())
    return (parse_date(s) - ref).days
