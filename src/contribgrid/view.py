"""Consumer-facing heatmap view combining the grid and the yearly total."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from contribgrid.errors import FetchError
from contribgrid.grid import WeekGrid, build_week_grid, drop_future_days
from contribgrid.io.fetcher import ContributionFetcher
from contribgrid.models import ContributionsResponse
from contribgrid.palette import level_color

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Failed to load contribution data; check the entity name or network connection."


@dataclass(frozen=True)
class HeatmapView:
    """Everything a renderer needs for one (entity, year).

    A failed load is represented by an empty grid, a zero total and
    ``error`` set; there is no partially populated state.
    """

    entity: str
    year: int
    weeks: WeekGrid = field(default_factory=list)
    total: int = 0
    error: str | None = None

    @classmethod
    def failed(cls, entity: str, year: int, message: str = FAILURE_MESSAGE) -> "HeatmapView":
        return cls(entity=entity, year=year, error=message)

    @property
    def ok(self) -> bool:
        return self.error is None

    def matches(self, entity: str, year: int) -> bool:
        """True when this view answers the request for ``(entity, year)``.

        Owners use this to drop results that resolved after the requested
        key changed.
        """
        return self.entity == entity and self.year == year

    def to_dict(self, colors: Sequence[str] | None = None) -> dict[str, object]:
        weeks: list[list[dict[str, object]]] = []
        for week in self.weeks:
            cells: list[dict[str, object]] = []
            for day in week:
                cell: dict[str, object] = day.model_dump()
                if colors is not None:
                    cell["color"] = level_color(day.level, colors)
                cells.append(cell)
            weeks.append(cells)
        return {
            "entity": self.entity,
            "year": self.year,
            "total": self.total,
            "error": self.error,
            "weeks": weeks,
        }


def build_view(
    response: ContributionsResponse,
    entity: str,
    year: int,
    *,
    hide_future_days: bool = True,
    today: date | None = None,
) -> HeatmapView:
    days = list(response.contributions)
    if hide_future_days:
        days = drop_future_days(days, today=today or date.today())
    return HeatmapView(
        entity=entity,
        year=year,
        weeks=build_week_grid(days, year),
        total=response.total_for(year),
    )


async def load_view(
    fetcher: ContributionFetcher,
    entity: str,
    year: int,
    *,
    hide_future_days: bool = True,
    today: date | None = None,
) -> HeatmapView:
    """Load contributions for ``(entity, year)`` and lay them out.

    A :class:`FetchError` becomes a failed view; the diagnostic detail is
    only logged.
    """
    try:
        response = await fetcher.load(entity, year)
    except FetchError as exc:
        logger.error("Could not load contributions for %s/%s: %s", entity, year, exc)
        return HeatmapView.failed(entity, year)
    return build_view(response, entity, year, hide_future_days=hide_future_days, today=today)


__all__ = ["FAILURE_MESSAGE", "HeatmapView", "build_view", "load_view"]
