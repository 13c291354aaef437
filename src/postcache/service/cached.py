"""Read-through / write-through caching decorator for post services.

:class:`CachingPostService` sits in front of any
:class:`~postcache.service.base.PostService` and keeps a
:class:`~postcache.store.base.PostStore` populated with what the wrapped
service returns.  The policy is deliberately simple and has no expiry:

* ``get_post`` -- a cached post is returned without touching the backend.
  On a miss the backend is asked; a success is stored before it is
  forwarded, a failure is forwarded untouched (no negative caching).
* ``get_posts`` -- a non-empty cache is returned as is, so posts created
  elsewhere stay invisible until the cache is emptied.  An empty cache is
  filled from the backend with a replace-all store.
* ``create_post`` -- always goes to the backend; the new post is upserted
  into the cache before it is forwarded.

The decorator never retries and never turns a backend failure into a
success.  :meth:`CachingPostService.invalidate` empties the store when a
caller needs fresh data.
"""

from __future__ import annotations

import logging

from postcache.models import Post
from postcache.result import Result
from postcache.service.base import PostService, ServiceDecorator
from postcache.store.base import PostStore

logger = logging.getLogger(__name__)


class CachingPostService(ServiceDecorator):
    """Caches posts from *service* in *cache*.

    Args:
        cache: Store that holds previously fetched or created posts.
        service: The wrapped service, typically a remote backend.

    Example::

        service: PostService = CachingPostService(
            cache=MemoryPostStore(), service=InMemoryPostService()
        )
        created = (await service.create_post("title", "subtitle")).unwrap()
        again = await service.get_post(created.id)  # served from the cache
    """

    def __init__(self, cache: PostStore, service: PostService) -> None:
        super().__init__(service)
        self.cache = cache

    async def get_post(self, post_id: int) -> Result[Post]:
        cached = self.cache.get_post(post_id)
        if cached is not None:
            logger.debug("Cache hit for post %s", post_id)
            return Result.success(cached)

        logger.debug("Cache miss for post %s, asking backend", post_id)
        result = await self.service.get_post(post_id)
        if result.is_success:
            self.cache.store_post(result.unwrap())
        return result

    async def get_posts(self) -> Result[list[Post]]:
        cached = self.cache.get_posts()
        if cached:
            logger.debug("Serving %d posts from cache", len(cached))
            return Result.success(cached)

        logger.debug("Cache empty, fetching posts from backend")
        result = await self.service.get_posts()
        if result.is_success:
            self.cache.store_posts(result.unwrap())
        return result

    async def create_post(self, title: str, subtitle: str) -> Result[Post]:
        result = await self.service.create_post(title, subtitle)
        if result.is_success:
            self.cache.store_post(result.unwrap())
        return result

    def invalidate(self) -> None:
        """Empty the cache so the next reads go to the backend."""
        logger.debug("Invalidating post cache")
        self.cache.clear()
