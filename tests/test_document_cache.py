from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime, timedelta

from freezegun import freeze_time

from cny_rates.services.document_cache import RateDocumentCache


def test_empty_cache_misses():
    cache = RateDocumentCache()

    lookup = cache.get()

    assert lookup.hit is False
    assert lookup.document is None
    assert lookup.fetched_at is None
    assert cache.status().state == "empty"


def test_get_after_put_hits_with_same_document():
    cache = RateDocumentCache(ttl_seconds=300)

    fetched_at = cache.put("<table>v1</table>")
    lookup = cache.get()

    assert lookup.hit is True
    assert lookup.document is not None
    assert lookup.document.content == "<table>v1</table>"
    assert lookup.fetched_at == fetched_at


def test_get_after_ttl_misses_but_keeps_document():
    with freeze_time("2025-10-16 12:00:00") as frozen:
        cache = RateDocumentCache(ttl_seconds=300)
        cache.put("<table>v1</table>")

        frozen.tick(timedelta(seconds=299))
        assert cache.get().hit is True

        frozen.tick(timedelta(seconds=1))
        lookup = cache.get()
        assert lookup.hit is False
        assert lookup.document is not None
        assert cache.status().state == "expired"


def test_put_replaces_the_whole_document():
    with freeze_time("2025-10-16 12:00:00") as frozen:
        cache = RateDocumentCache(ttl_seconds=300)
        cache.put("old")
        frozen.tick(timedelta(seconds=400))

        fetched_at = cache.put("new")

        lookup = cache.get()
        assert lookup.hit is True
        assert lookup.document.content == "new"
        assert fetched_at == datetime(2025, 10, 16, 12, 6, 40, tzinfo=UTC)


def test_status_reports_age_with_injected_clock():
    now = [datetime(2025, 10, 16, 12, 0, tzinfo=UTC)]
    cache = RateDocumentCache(ttl_seconds=60, clock=lambda: now[0])
    cache.put("doc")

    now[0] += timedelta(seconds=30)
    status = cache.status()

    assert status.state == "fresh"
    assert status.age_seconds == 30
    assert status.ttl_seconds == 60


def test_concurrent_readers_never_see_mixed_documents():
    cache = RateDocumentCache(ttl_seconds=300)
    old = "A" * 10_000
    new = "B" * 10_000
    cache.put(old)

    def read() -> str:
        return cache.get().document.content

    with ThreadPoolExecutor(max_workers=8) as pool:
        futures = [pool.submit(read) for _ in range(200)]
        cache.put(new)
        futures += [pool.submit(read) for _ in range(200)]
        contents = {future.result() for future in futures}

    assert contents <= {old, new}
    assert cache.get().document.content == new
