"""Tests for the caching decorator's read-through / write-through policy."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from postcache.exceptions import NotFoundError, TransportError
from postcache.models import Post
from postcache.result import Result
from postcache.service.base import PostService
from postcache.service.cached import CachingPostService
from postcache.store.base import PostStore
from postcache.store.keyvalue import DiskKeyValueStore
from postcache.store.memory import MemoryPostStore
from postcache.store.persisted import PersistedPostStore

from conftest import CountingService


class FailingService(PostService):
    """Backend whose every call fails with the same transport error."""

    def __init__(self) -> None:
        self.error = TransportError("connection refused")

    async def get_post(self, post_id: int) -> Result[Post]:
        return Result.failure(self.error)

    async def get_posts(self) -> Result[list[Post]]:
        return Result.failure(self.error)

    async def create_post(self, title: str, subtitle: str) -> Result[Post]:
        return Result.failure(self.error)


@pytest.fixture
def cached(any_store: PostStore, counting_backend: CountingService) -> CachingPostService:
    return CachingPostService(cache=any_store, service=counting_backend)


# ------------------------------------------------------------------ #
# get_post
# ------------------------------------------------------------------ #


class TestGetPost:
    @pytest.mark.asyncio
    async def test_created_post_is_served_without_backend(
        self, cached: CachingPostService, counting_backend: CountingService
    ) -> None:
        created = (await cached.create_post("title", "subtitle")).unwrap()

        result = await cached.get_post(created.id)

        assert result.unwrap() == created
        assert counting_backend.calls["get_post"] == 0

    @pytest.mark.asyncio
    async def test_miss_reads_through_and_populates(
        self, cached: CachingPostService, counting_backend: CountingService
    ) -> None:
        counting_backend.backend.seed([Post(id=4, title="t", subtitle="s")])

        result = await cached.get_post(4)

        assert result.unwrap() == Post(id=4, title="t", subtitle="s")
        assert counting_backend.calls["get_post"] == 1
        assert cached.cache.get_post(4) == result.unwrap()

    @pytest.mark.asyncio
    async def test_repeated_reads_hit_backend_once(
        self, cached: CachingPostService, counting_backend: CountingService
    ) -> None:
        counting_backend.backend.seed([Post(id=4, title="t", subtitle="s")])

        first = await cached.get_post(4)
        second = await cached.get_post(4)

        assert first.unwrap() == second.unwrap()
        assert counting_backend.calls["get_post"] == 1

    @pytest.mark.asyncio
    async def test_cache_hit_ignores_backend_changes(
        self, cached: CachingPostService, counting_backend: CountingService
    ) -> None:
        counting_backend.backend.seed([Post(id=4, title="t", subtitle="s")])
        await cached.get_post(4)
        counting_backend.backend.clear()

        assert (await cached.get_post(4)).is_success

    @pytest.mark.asyncio
    async def test_not_found_is_forwarded_and_not_cached(
        self, cached: CachingPostService, counting_backend: CountingService
    ) -> None:
        result = await cached.get_post(99)

        assert isinstance(result.error, NotFoundError)
        assert cached.cache.get_posts() == []

        await cached.get_post(99)
        assert counting_backend.calls["get_post"] == 2

    @pytest.mark.asyncio
    async def test_backend_error_forwarded_untouched(self, memory_store: MemoryPostStore) -> None:
        backend = FailingService()
        result = await CachingPostService(memory_store, backend).get_post(1)
        assert result.error is backend.error
        assert memory_store.get_posts() == []


# ------------------------------------------------------------------ #
# get_posts
# ------------------------------------------------------------------ #


class TestGetPosts:
    @pytest.mark.asyncio
    async def test_seeded_backend_then_disconnected(
        self,
        cached: CachingPostService,
        counting_backend: CountingService,
        seeded_posts: list[Post],
    ) -> None:
        counting_backend.backend.seed(seeded_posts)

        first = (await cached.get_posts()).unwrap()
        counting_backend.backend.clear()
        second = (await cached.get_posts()).unwrap()

        assert sorted(first, key=lambda p: p.id) == seeded_posts
        assert sorted(second, key=lambda p: p.id) == seeded_posts
        assert counting_backend.calls["get_posts"] == 1

    @pytest.mark.asyncio
    async def test_non_empty_cache_skips_backend(
        self, cached: CachingPostService, counting_backend: CountingService
    ) -> None:
        cached.cache.store_post(Post(id=1, title="cached", subtitle="cached"))
        counting_backend.backend.seed([Post(id=2, title="remote", subtitle="remote")])

        posts = (await cached.get_posts()).unwrap()

        assert [p.id for p in posts] == [1]
        assert counting_backend.calls["get_posts"] == 0

    @pytest.mark.asyncio
    async def test_empty_backend_leaves_cache_empty(
        self, cached: CachingPostService, counting_backend: CountingService
    ) -> None:
        assert (await cached.get_posts()).unwrap() == []
        assert (await cached.get_posts()).unwrap() == []
        assert counting_backend.calls["get_posts"] == 2

    @pytest.mark.asyncio
    async def test_fetch_replaces_cache_contents(self, counting_backend: CountingService) -> None:
        store = MemoryPostStore()
        cached = CachingPostService(store, counting_backend)
        counting_backend.backend.seed([Post(id=1, title="a", subtitle="b")])

        await cached.get_posts()

        assert [p.id for p in store.get_posts()] == [1]

    @pytest.mark.asyncio
    async def test_backend_error_forwarded(self, memory_store: MemoryPostStore) -> None:
        backend = FailingService()
        result = await CachingPostService(memory_store, backend).get_posts()
        assert result.error is backend.error
        assert memory_store.get_posts() == []


# ------------------------------------------------------------------ #
# create_post
# ------------------------------------------------------------------ #


class TestCreatePost:
    @pytest.mark.asyncio
    async def test_always_delegates(
        self, cached: CachingPostService, counting_backend: CountingService
    ) -> None:
        await cached.create_post("a", "b")
        await cached.create_post("a", "b")
        assert counting_backend.calls["create_post"] == 2

    @pytest.mark.asyncio
    async def test_upserts_without_invalidating(
        self, cached: CachingPostService, counting_backend: CountingService
    ) -> None:
        existing = Post(id=100, title="old", subtitle="old")
        cached.cache.store_post(existing)

        created = (await cached.create_post("new", "new")).unwrap()

        assert cached.cache.get_post(100) == existing
        assert cached.cache.get_post(created.id) == created

    @pytest.mark.asyncio
    async def test_failure_not_cached(self, memory_store: MemoryPostStore) -> None:
        backend = FailingService()
        result = await CachingPostService(memory_store, backend).create_post("a", "b")
        assert result.error is backend.error
        assert memory_store.get_posts() == []


# ------------------------------------------------------------------ #
# Invalidation, composition, persistence
# ------------------------------------------------------------------ #


class TestInvalidate:
    @pytest.mark.asyncio
    async def test_invalidate_forces_refetch(
        self,
        cached: CachingPostService,
        counting_backend: CountingService,
        seeded_posts: list[Post],
    ) -> None:
        cached.cache.store_post(Post(id=50, title="stale", subtitle="stale"))
        counting_backend.backend.seed(seeded_posts)

        cached.invalidate()
        posts = (await cached.get_posts()).unwrap()

        assert sorted(p.id for p in posts) == [1, 2]
        assert counting_backend.calls["get_posts"] == 1


class TestComposition:
    @pytest.mark.asyncio
    async def test_cache_of_cache(self, counting_backend: CountingService) -> None:
        inner_store, outer_store = MemoryPostStore(), MemoryPostStore()
        service: PostService = CachingPostService(
            outer_store, CachingPostService(inner_store, counting_backend)
        )

        created = (await service.create_post("a", "b")).unwrap()
        assert inner_store.get_post(created.id) == created
        assert outer_store.get_post(created.id) == created

        outer_store.clear()
        assert (await service.get_post(created.id)).unwrap() == created
        assert counting_backend.calls["get_post"] == 0

    @pytest.mark.asyncio
    async def test_cache_hits_are_logged(
        self, cached: CachingPostService, caplog: pytest.LogCaptureFixture
    ) -> None:
        created = (await cached.create_post("a", "b")).unwrap()
        with caplog.at_level(logging.DEBUG, logger="postcache.service.cached"):
            await cached.get_post(created.id)
        assert f"Cache hit for post {created.id}" in caplog.text


class TestPersistedCacheAcrossRestarts:
    @pytest.mark.asyncio
    async def test_restart_serves_from_disk(
        self, tmp_path: Path, seeded_posts: list[Post]
    ) -> None:
        first_backend = CountingService()
        first_backend.backend.seed(seeded_posts)
        defaults = DiskKeyValueStore(tmp_path)
        await CachingPostService(PersistedPostStore(defaults, "posts"), first_backend).get_posts()
        defaults.close()

        second_backend = CountingService()
        defaults = DiskKeyValueStore(tmp_path)
        try:
            service = CachingPostService(PersistedPostStore(defaults, "posts"), second_backend)
            posts = (await service.get_posts()).unwrap()
            post = (await service.get_post(2)).unwrap()
        finally:
            defaults.close()

        assert sorted(p.id for p in posts) == [1, 2]
        assert post == seeded_posts[1]
        assert second_backend.total_calls == 0
