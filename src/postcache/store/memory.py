"""Process-lifetime post store backed by a plain dict."""

from __future__ import annotations

from typing import Iterable, Optional

from postcache.models import Post
from postcache.store.base import PostStore


class MemoryPostStore(PostStore):
    """In-memory :class:`~postcache.store.base.PostStore`, lost on restart."""

    def __init__(self) -> None:
        self._posts: dict[int, Post] = {}

    def get_post(self, post_id: int) -> Optional[Post]:
        return self._posts.get(post_id)

    def get_posts(self) -> list[Post]:
        return list(self._posts.values())

    def store_post(self, post: Post) -> None:
        self._posts[post.id] = post

    def store_posts(self, posts: Iterable[Post]) -> None:
        self._posts.clear()
        for post in posts:
            self.store_post(post)

    def clear(self) -> None:
        self._posts.clear()

    def __len__(self) -> int:
        return len(self._posts)
