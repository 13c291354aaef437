"""Shared test fixtures for postcache.

Provides a call-counting backend for asserting cache short-circuits,
sample posts, store fixtures, and an isolated config environment.  These
fixtures are automatically discovered by pytest and available to all test
modules without explicit imports.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path

import pytest

from postcache.models import Post
from postcache.result import Result
from postcache.service.base import ServiceDecorator
from postcache.service.memory import InMemoryPostService
from postcache.store.keyvalue import DiskKeyValueStore, MemoryKeyValueStore
from postcache.store.memory import MemoryPostStore
from postcache.store.persisted import PersistedPostStore


class CountingService(ServiceDecorator):
    """Forwards to an :class:`InMemoryPostService` and counts every call."""

    def __init__(self, service: InMemoryPostService | None = None) -> None:
        super().__init__(service or InMemoryPostService())
        self.calls: Counter[str] = Counter()

    @property
    def backend(self) -> InMemoryPostService:
        assert isinstance(self.service, InMemoryPostService)
        return self.service

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())

    async def get_post(self, post_id: int) -> Result[Post]:
        self.calls["get_post"] += 1
        return await super().get_post(post_id)

    async def get_posts(self) -> Result[list[Post]]:
        self.calls["get_posts"] += 1
        return await super().get_posts()

    async def create_post(self, title: str, subtitle: str) -> Result[Post]:
        self.calls["create_post"] += 1
        return await super().create_post(title, subtitle)


# ---------------------------------------------------------------------------
# Posts
# ---------------------------------------------------------------------------


@pytest.fixture
def seeded_posts() -> list[Post]:
    """The two posts used by the end-to-end scenarios."""
    return [
        Post(id=1, title="title1", subtitle="subTitle1"),
        Post(id=2, title="title2", subtitle="subTitle2"),
    ]


# ---------------------------------------------------------------------------
# Services and stores
# ---------------------------------------------------------------------------


@pytest.fixture
def counting_backend() -> CountingService:
    """An empty in-memory backend that records how often it is called."""
    return CountingService()


@pytest.fixture
def memory_store() -> MemoryPostStore:
    return MemoryPostStore()


@pytest.fixture
def disk_defaults(tmp_path: Path):
    """A diskcache-backed key-value store rooted in tmp_path."""
    defaults = DiskKeyValueStore(tmp_path)
    yield defaults
    defaults.close()


@pytest.fixture(params=["memory", "persisted"])
def any_store(request: pytest.FixtureRequest, tmp_path: Path):
    """Each PostStore variant, for tests that hold for every store."""
    if request.param == "memory":
        yield MemoryPostStore()
        return
    defaults = DiskKeyValueStore(tmp_path)
    yield PersistedPostStore(defaults, "posts")
    defaults.close()


@pytest.fixture
def memory_defaults() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME and XDG_CACHE_HOME at subdirectories of tmp_path
    and clears all POSTCACHE_* environment variables so tests never touch
    real user config.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))

    for var in [
        "POSTCACHE_BASE_URL",
        "POSTCACHE_CACHE_BACKEND",
        "POSTCACHE_LOG_LEVEL",
        "POSTCACHE_OFFLINE",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path
