"""
Calendar helpers for play-log statistics.

Plays have day granularity, so everything here works on ``datetime.date``.
Year filters come in two flavours and the distinction matters:

  - *in year*       — ``play.date.year == year`` (a single-year slice).
  - *through year*  — ``play.date.year <= year`` (an "as-of" snapshot used
    for year-over-year comparisons).

``None`` as a year always means "no filter".
"""

from __future__ import annotations

from datetime import date
from typing import Optional


def is_in_year(day: date, year: Optional[int]) -> bool:
    """Return ``True`` if ``day`` falls in ``year`` (or ``year`` is ``None``)."""
    if year is None:
        return True
    return day.year == year


def is_through_year(day: date, year: Optional[int]) -> bool:
    """Return ``True`` if ``day`` falls in or before ``year`` (or ``year`` is ``None``)."""
    if year is None:
        return True
    return day.year <= year


def days_between(start: date, end: date) -> int:
    """Signed whole days from ``start`` to ``end``."""
    return (end - start).days


def month_year_label(day: date) -> str:
    """Short "Mon YYYY" label, e.g. ``"Jan 2024"``."""
    return f"{_MONTH_ABBR[day.month - 1]} {day.year}"


def today() -> date:
    """Local calendar day; wrapped so callers can inject a fixed day instead."""
    return date.today()


_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
