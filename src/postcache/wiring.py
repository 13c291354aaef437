"""Composition root: builds the service graph from :class:`~postcache.models.Settings`.

:func:`open_post_service` constructs the decorator graph exactly once --
transport, backend, cache store, caching decorator -- and tears it down when
the ``async with`` block exits.  Nothing is wired through module-level
globals; the caller passes the returned :class:`~postcache.service.base.PostService`
to whatever needs it.

Example::

    settings = resolve_settings()
    async with open_post_service(settings) as service:
        result = await service.get_posts()
"""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack, asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from postcache.client.fixture import FixtureTransport
from postcache.client.httpx_transport import HttpxTransport
from postcache.config import get_cache_dir
from postcache.models import CacheBackend, CacheConfig, Settings
from postcache.service.base import PostService
from postcache.service.cached import CachingPostService
from postcache.service.memory import InMemoryPostService
from postcache.service.remote import RemotePostService
from postcache.store.base import PostStore
from postcache.store.keyvalue import DiskKeyValueStore
from postcache.store.memory import MemoryPostStore
from postcache.store.persisted import PersistedPostStore

logger = logging.getLogger(__name__)


def build_store(config: CacheConfig, stack: AsyncExitStack) -> PostStore:
    """Create the cache store selected by *config*, registering cleanup on *stack*."""
    if config.backend == CacheBackend.MEMORY:
        return MemoryPostStore()

    directory = Path(config.directory) if config.directory else get_cache_dir()
    defaults = DiskKeyValueStore(directory)
    stack.callback(defaults.close)
    logger.debug("Persisting posts under '%s' in %s", config.storage_key, defaults.directory)
    return PersistedPostStore(defaults, config.storage_key, ttl_seconds=config.ttl_seconds)


@asynccontextmanager
async def open_post_service(
    settings: Settings,
    backend: Optional[PostService] = None,
) -> AsyncIterator[CachingPostService]:
    """Yield a caching post service wired according to *settings*.

    Args:
        settings: Resolved settings.  ``remote.offline`` selects the remote
            backend over :class:`FixtureTransport`; otherwise
            ``remote.base_url`` selects the HTTP backend, and without it an
            :class:`InMemoryPostService` is used.
        backend: Explicit backend to wrap instead of the one *settings*
            would select.

    Yields:
        The :class:`CachingPostService` at the top of the graph.
    """
    async with AsyncExitStack() as stack:
        if backend is None:
            if settings.remote.offline:
                backend = RemotePostService(FixtureTransport())
            elif settings.remote.base_url:
                http = await stack.enter_async_context(HttpxTransport(settings.remote))
                backend = RemotePostService(http)
            else:
                backend = InMemoryPostService()
        store = build_store(settings.cache, stack)
        yield CachingPostService(cache=store, service=backend)
