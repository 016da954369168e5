"""Pydantic models for contribution payloads and cache entries."""

from __future__ import annotations

from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ContributionDay(BaseModel):
    """One calendar day of activity; an empty ``date`` marks a padding cell."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    date: str = ""
    count: int = Field(default=0, ge=0)
    level: int = 0

    @property
    def is_padding(self) -> bool:
        return not self.date


PADDING_DAY = ContributionDay(date="", count=0, level=0)


class ContributionsResponse(BaseModel):
    """A year of contribution days as returned by the remote source."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    total: Dict[str, int] = Field(default_factory=dict)
    contributions: Tuple[ContributionDay, ...] = ()

    def total_for(self, year: int | str) -> int:
        """Return the yearly total, treating a missing year as zero."""
        return self.total.get(str(year), 0)


class CacheEntry(BaseModel):
    """Persisted cache record: the payload plus its epoch-millisecond store time."""

    model_config = ConfigDict(extra="ignore")

    data: ContributionsResponse
    timestamp: int


__all__ = ["CacheEntry", "ContributionDay", "ContributionsResponse", "PADDING_DAY"]
