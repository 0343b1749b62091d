# src/pm_tracker/schedule/frequency.py

"""
Frequency codes.

Two encodings exist side by side:
- legacy: fixed codes "1w", "1m", "2m", "3m", "6m", "1y"
- custom: "<n><unit>" with unit in d / w / mo / y ("14d", "3mo", "2y")

"1w" and "1y" also match the custom pattern, and the custom pattern is always
checked first. Only the month-based legacy codes ever reach the legacy path.

Month arithmetic differs between the two paths:
- legacy months clamp to the end of the target month (Jan 31 + 1m -> Feb 28)
- custom months/years overflow into the next month (Jan 31 + 3mo -> May 1)
Existing schedules depend on both behaviours, so neither is normalized.
"""

from __future__ import annotations

import calendar
import logging
import re
from datetime import date, timedelta

from .dates import format_key, parse_date

logger = logging.getLogger(__name__)

CUSTOM_FREQ_RE = re.compile(r"([0-9]+)(d|w|mo|y)")

LEGACY_MONTHS = {"1m": 1, "2m": 2, "3m": 3, "6m": 6}

LEGACY_TOTAL_DAYS = {"1w": 7, "1m": 30, "2m": 60, "3m": 90, "6m": 180, "1y": 365}

LEGACY_LABELS = {
    "1w": "1 Week",
    "1m": "1 Month",
    "2m": "2 Months",
    "3m": "3 Months",
    "6m": "6 Months",
    "1y": "1 Year",
}

UNIT_DAYS = {"d": 1, "w": 7, "mo": 30, "y": 365}
UNIT_NAMES = {"d": "Day", "w": "Week", "mo": "Month", "y": "Year"}

DEFAULT_TOTAL_DAYS = 30

# Longest cycle a new or edited task may use (100 years).
MAX_FREQ_DAYS = 36500


def _match_custom(freq: str) -> tuple[int, str] | None:
    m = CUSTOM_FREQ_RE.fullmatch(freq or "")
    if not m:
        return None
    return int(m.group(1)), m.group(2)


def is_valid_frequency(freq: str) -> bool:
    if freq in LEGACY_TOTAL_DAYS:
        return True
    return _match_custom(freq) is not None and total_days(freq) <= MAX_FREQ_DAYS


def _shift_months_overflow(d: date, months: int) -> date:
    # Day-of-month is applied on top of the 1st of the target month, so a
    # day the month does not have spills over into the next one.
    idx = d.year * 12 + (d.month - 1) + months
    first = date(idx // 12, idx % 12 + 1, 1)
    return first + timedelta(days=d.day - 1)


def _shift_months_clamped(d: date, months: int) -> date:
    idx = d.year * 12 + (d.month - 1) + months
    y, m = idx // 12, idx % 12 + 1
    last_day = calendar.monthrange(y, m)[1]
    return date(y, m, min(d.day, last_day))


def advance_custom(from_date: str, freq: str) -> str:
    """
    Advance `from_date` by a custom "<n><unit>" code; other codes are a no-op.

    A step that would leave the supported date range also returns `from_date`.
    """
    parsed = _match_custom(freq)
    if parsed is None:
        return from_date

    n, unit = parsed
    d = parse_date(from_date)
    try:
        if unit == "d":
            d = d + timedelta(days=n)
        elif unit == "w":
            d = d + timedelta(days=n * 7)
        elif unit == "mo":
            d = _shift_months_overflow(d, n)
        else:
            d = _shift_months_overflow(d, n * 12)
    except (OverflowError, ValueError):
        logger.warning("Frequency %s from %s is out of date range; not advancing", freq, from_date)
        return from_date
    return format_key(d)


def next_due_date(from_date: str, freq: str) -> str:
    """
    Next due date after a completion on `from_date`.

    Unrecognized codes return `from_date` unchanged.
    """
    if _match_custom(freq) is not None:
        return advance_custom(from_date, freq)

    months = LEGACY_MONTHS.get(freq)
    if months is not None:
        return format_key(_shift_months_clamped(parse_date(from_date), months))

    return from_date


def total_days(freq: str) -> int:
    """Cycle length in days, used to pick the due-soon window."""
    if freq in LEGACY_TOTAL_DAYS:
        return LEGACY_TOTAL_DAYS[freq]
    parsed = _match_custom(freq)
    if parsed is None:
        return DEFAULT_TOTAL_DAYS
    n, unit = parsed
    return n * UNIT_DAYS[unit]


def label_for(freq: str) -> str:
    """'3mo' -> '3 Months'. Codes outside the custom pattern come back unchanged."""
    m = CUSTOM_FREQ_RE.fullmatch(freq or "")
    if not m:
        return freq
    n, unit = m.group(1), m.group(2)
    suffix = "" if n == "1" else "s"
    return f"{n} {UNIT_NAMES[unit]}{suffix}"


def creation_label(freq: str) -> str:
    """Display label cached on a task when it is created."""
    return LEGACY_LABELS.get(freq) or label_for(freq)
