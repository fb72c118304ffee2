"""Timescale annualization factors.

This table is the only source of per-period -> per-year multipliers in the
engine. Working-time figures assume 47 working weeks a year (52 weeks minus
vacation and public holidays), 5 days a week and 40 hours a week.
"""

from __future__ import annotations

from typing import Optional

WORK_WEEKS_PER_YEAR = 47
WORK_DAYS_PER_YEAR = 5 * WORK_WEEKS_PER_YEAR  # 235
WORK_HOURS_PER_YEAR = 40 * WORK_WEEKS_PER_YEAR  # 1880
MONTHS_PER_YEAR = 12

ONE_TIME = "one_time"

_MULTIPLIERS: dict[str, float] = {
    "hour": WORK_HOURS_PER_YEAR,
    "timme": WORK_HOURS_PER_YEAR,
    "day": WORK_DAYS_PER_YEAR,
    "dag": WORK_DAYS_PER_YEAR,
    "week": WORK_WEEKS_PER_YEAR,
    "vecka": WORK_WEEKS_PER_YEAR,
    "per_week": WORK_WEEKS_PER_YEAR,
    "month": MONTHS_PER_YEAR,
    "månad": MONTHS_PER_YEAR,
    "per_month": MONTHS_PER_YEAR,
    "year": 1,
    "år": 1,
    "per_year": 1,
    ONE_TIME: 1,
}


def timescale_multiplier(timescale: Optional[str]) -> float:
    """Return the annualization multiplier for a timescale token.

    Matching is case-insensitive. Unknown or empty tokens map to 1.
    """
    key = (timescale or "").strip().lower()
    return float(_MULTIPLIERS.get(key, 1))


def is_one_time(timescale: Optional[str]) -> bool:
    return (timescale or "").strip().lower() == ONE_TIME
