"""In-memory post backend.

Posts live in a process-local dict and ids are handed out from a counter the
way an auto-incrementing database column would.  Useful as a mock API during
development and as the authoritative backend in tests.
"""

from __future__ import annotations

from typing import Iterable

from postcache.exceptions import NotFoundError
from postcache.models import Post
from postcache.result import Result
from postcache.service.base import PostService


class InMemoryPostService(PostService):
    """:class:`~postcache.service.base.PostService` over a process-local mapping.

    The first created post gets id ``0``; each later one gets the next
    integer.  :meth:`seed` preloads posts and moves the counter past the
    largest seeded id.
    """

    def __init__(self) -> None:
        self._next_id = 0
        self._posts: dict[int, Post] = {}

    def seed(self, posts: Iterable[Post]) -> None:
        """Load existing *posts*, as if they had been created earlier."""
        for post in posts:
            self._posts[post.id] = post
            self._next_id = max(self._next_id, post.id + 1)

    def clear(self) -> None:
        """Forget every post.  The id counter keeps increasing."""
        self._posts.clear()

    async def get_post(self, post_id: int) -> Result[Post]:
        post = self._posts.get(post_id)
        if post is None:
            return Result.failure(NotFoundError(f"Post {post_id} not found"))
        return Result.success(post)

    async def get_posts(self) -> Result[list[Post]]:
        return Result.success(list(self._posts.values()))

    async def create_post(self, title: str, subtitle: str) -> Result[Post]:
        post = Post(id=self._next_id, title=title, subtitle=subtitle)
        self._posts[post.id] = post
        self._next_id += 1
        return Result.success(post)
