"""The post service contract and its forwarding decorator base.

This module defines the two foundational types of the service layer:

- :class:`PostService` -- the abstract fetch contract that every backend and
  every decorator conforms to.  All operations are coroutines resolving to a
  :class:`~postcache.result.Result`; backend failures are reported through
  the result and never raised.
- :class:`ServiceDecorator` -- a :class:`PostService` that wraps another one
  and forwards every call to it.  Concrete decorators subclass it and
  override only the operations they change.

Because decorators are themselves services, any code holding a
:class:`PostService` cannot tell a cached service from an uncached one, and
decorators compose freely (a cache in front of a cache, or in front of a
remote backend).
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from postcache.models import Post
from postcache.result import Result


class PostService(ABC):
    """Abstract base class for post services."""

    @abstractmethod
    async def get_post(self, post_id: int) -> Result[Post]:
        """Fetch one post.

        Returns:
            A success carrying the post, or a failure carrying
            :class:`~postcache.exceptions.NotFoundError` when no post with
            *post_id* exists at the resolving layer.
        """

    @abstractmethod
    async def get_posts(self) -> Result[list[Post]]:
        """Fetch every post.  An empty backend yields an empty list."""

    @abstractmethod
    async def create_post(self, title: str, subtitle: str) -> Result[Post]:
        """Create a post; the backend assigns a fresh, strictly increasing id."""


class ServiceDecorator(PostService):
    """A :class:`PostService` that forwards every call to :attr:`service`.

    Args:
        service: The wrapped service.
    """

    def __init__(self, service: PostService) -> None:
        self.service = service

    async def get_post(self, post_id: int) -> Result[Post]:
        return await self.service.get_post(post_id)

    async def get_posts(self) -> Result[list[Post]]:
        return await self.service.get_posts()

    async def create_post(self, title: str, subtitle: str) -> Result[Post]:
        return await self.service.create_post(title, subtitle)
