"""Week-aligned grid layout for calendar heatmaps."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date
from typing import List, Tuple

from contribgrid.models import PADDING_DAY, ContributionDay

DAYS_PER_WEEK = 7

Week = Tuple[ContributionDay, ...]
WeekGrid = List[Week]


def first_weekday(year: int) -> int:
    """Weekday of January 1 of ``year`` with 0=Sunday .. 6=Saturday."""
    return (date(year, 1, 1).weekday() + 1) % DAYS_PER_WEEK


def build_week_grid(days: Sequence[ContributionDay], year: int) -> WeekGrid:
    """Lay out ``days`` into Sunday-first weeks of exactly seven cells.

    ``days`` must be the complete, chronological, gap-free sequence for
    ``year``. The first week is led by padding up to the weekday of
    January 1 and the last week is trailed by padding up to Saturday.
    """
    if not days:
        return []

    weeks: WeekGrid = []
    current: list[ContributionDay] = [PADDING_DAY] * first_weekday(year)

    for day in days:
        current.append(day)
        if len(current) == DAYS_PER_WEEK:
            weeks.append(tuple(current))
            current = []

    if current:
        current.extend([PADDING_DAY] * (DAYS_PER_WEEK - len(current)))
        weeks.append(tuple(current))

    return weeks


def drop_future_days(days: Iterable[ContributionDay], *, today: date) -> list[ContributionDay]:
    """Return ``days`` without real days dated after ``today``.

    ISO dates compare correctly as strings; padding cells are kept.
    """
    cutoff = today.isoformat()
    return [day for day in days if day.is_padding or day.date <= cutoff]


__all__ = [
    "DAYS_PER_WEEK",
    "Week",
    "WeekGrid",
    "build_week_grid",
    "drop_future_days",
    "first_weekday",
]
