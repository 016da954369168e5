from __future__ import annotations

import json
from datetime import date, timedelta

import requests

from contribgrid.models import ContributionDay, ContributionsResponse

ENTITY = "alice"
YEAR = 2024
HOUR_MS = 60 * 60 * 1000
# 2024-06-01T00:00:00Z in epoch milliseconds.
NOW_MS = 1_717_200_000_000


class FakeClock:
    """Settable millisecond clock for cache tests."""

    def __init__(self, now_ms: int = NOW_MS) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, delta_ms: int) -> None:
        self.now_ms += delta_ms


def make_year_days(year: int, *, count_for=lambda d: d.day % 5) -> list[ContributionDay]:
    """Build the full gap-free day sequence for ``year``."""

    days: list[ContributionDay] = []
    current = date(year, 1, 1)
    while current.year == year:
        count = count_for(current)
        days.append(ContributionDay(date=current.isoformat(), count=count, level=min(count, 4)))
        current += timedelta(days=1)
    return days


def make_response(year: int = YEAR, *, total: int | None = None) -> ContributionsResponse:
    days = make_year_days(year)
    yearly_total = total if total is not None else sum(day.count for day in days)
    return ContributionsResponse(total={str(year): yearly_total}, contributions=tuple(days))


def response_body(response: ContributionsResponse) -> bytes:
    return response.model_dump_json().encode("utf-8")


class DummyResponse:
    def __init__(self, content: bytes, status_code: int = 200) -> None:
        self.content = content
        self.status_code = status_code

    def json(self):
        return json.loads(self.content)

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")
