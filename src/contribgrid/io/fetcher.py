"""Remote contribution fetch with a read-through cache."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import requests
from pydantic import ValidationError

from contribgrid.errors import FetchError
from contribgrid.io.cache import ContributionCache
from contribgrid.models import ContributionsResponse

logger = logging.getLogger(__name__)

DEFAULT_HEADERS: Mapping[str, str] = {
    "User-Agent": "contribgrid/0.1",
    "Accept": "application/json",
}


def contributions_url(base_url: str, entity: str) -> str:
    """Return ``{base_url}/{entity}`` with the entity path-escaped."""
    return f"{base_url.rstrip('/')}/{quote(entity, safe='')}"


def fetch_contributions(
    url: str,
    *,
    params: Mapping[str, Any] | None = None,
    timeout_seconds: float | None = None,
    headers: Mapping[str, str] | None = None,
) -> ContributionsResponse:
    """GET ``url`` and parse the body as a :class:`ContributionsResponse`.

    Blocking. Any transport error, non-2xx status or malformed body raises
    :class:`FetchError`.
    """
    merged_headers = dict(DEFAULT_HEADERS)
    if headers:
        merged_headers.update(headers)

    try:
        response = requests.get(
            url,
            params=dict(params) if params else None,
            timeout=timeout_seconds,
            headers=merged_headers,
        )
    except requests.RequestException as exc:
        raise FetchError(url, detail=str(exc)) from exc

    if not 200 <= response.status_code < 300:
        raise FetchError(url, status=response.status_code)

    try:
        return ContributionsResponse.model_validate_json(response.content)
    except ValidationError as exc:
        raise FetchError(url, status=response.status_code, detail="malformed body") from exc


class ContributionFetcher:
    """Load a year of contributions, consulting the cache before the network."""

    def __init__(
        self,
        cache: ContributionCache,
        *,
        base_url: str,
        timeout_seconds: float | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.cache = cache
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self.headers = dict(headers or {})

    def load_from_cache(self, entity: str, year: int) -> ContributionsResponse | None:
        return self.cache.get(entity, year)

    async def fetch_and_store(self, entity: str, year: int) -> ContributionsResponse:
        """Fetch from the remote source, then write back to the cache.

        The request runs in a worker thread; the cache write happens on the
        calling task once the response has been parsed.
        """
        url = contributions_url(self.base_url, entity)
        logger.info("Fetching contributions for %s/%s from %s", entity, year, url)
        try:
            response = await asyncio.to_thread(
                fetch_contributions,
                url,
                params={"y": year},
                timeout_seconds=self.timeout_seconds,
                headers=self.headers,
            )
        except FetchError as exc:
            logger.warning("Fetch failed for %s/%s: %s", entity, year, exc)
            raise

        self.cache.set(entity, year, response)
        return response

    async def load(self, entity: str, year: int) -> ContributionsResponse:
        """Return cached data when fresh, otherwise fetch and cache it.

        Raises :class:`FetchError` when the cache misses and the remote
        source fails.
        """
        cached = self.load_from_cache(entity, year)
        if cached is not None:
            return cached
        return await self.fetch_and_store(entity, year)


__all__ = [
    "ContributionFetcher",
    "DEFAULT_HEADERS",
    "contributions_url",
    "fetch_contributions",
]
