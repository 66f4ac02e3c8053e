"""Single-slot cache for the BOC quotation page."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from cny_rates.providers.schemas import RateDocument
from cny_rates.utils.datetime import utc_now

DEFAULT_TTL_SECONDS = 300


@dataclass(frozen=True)
class CacheLookup:
    document: RateDocument | None
    fetched_at: datetime | None
    hit: bool


@dataclass(frozen=True)
class CacheStatus:
    state: str
    fetched_at: datetime | None
    age_seconds: float | None
    ttl_seconds: float


class RateDocumentCache:
    """Holds the most recent BOC page and serves it until it is ``ttl`` old.

    The whole page is cached as one unit because it carries every currency.
    ``put`` swaps in a new immutable document in one assignment, so readers
    see either the old document or the new one and never a mix. Two
    concurrent misses may both fetch and both ``put``; the last write wins.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._document: RateDocument | None = None

    def get(self) -> CacheLookup:
        document = self._document
        if document is None:
            return CacheLookup(document=None, fetched_at=None, hit=False)
        hit = self._clock() - document.fetched_at < self._ttl
        return CacheLookup(document=document, fetched_at=document.fetched_at, hit=hit)

    def put(self, content: str) -> datetime:
        document = RateDocument(content=content, fetched_at=self._clock())
        self._document = document
        return document.fetched_at

    def status(self) -> CacheStatus:
        lookup = self.get()
        ttl_seconds = self._ttl.total_seconds()
        if lookup.fetched_at is None:
            return CacheStatus("empty", None, None, ttl_seconds)
        age = (self._clock() - lookup.fetched_at).total_seconds()
        return CacheStatus("fresh" if lookup.hit else "expired", lookup.fetched_at, age, ttl_seconds)
