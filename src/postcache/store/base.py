"""Abstract contract for post cache stores.

A :class:`PostStore` is the backing memory of a
:class:`~postcache.service.cached.CachingPostService`.  It never originates
data: every post it holds was returned by, or created through, the wrapped
service.

To implement a new store, subclass :class:`PostStore` and implement the four
abstract methods.  :meth:`~PostStore.clear` defaults to replacing the
contents with an empty sequence.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from postcache.models import Post


class PostStore(ABC):
    """Abstract base class for post cache stores."""

    @abstractmethod
    def get_post(self, post_id: int) -> Optional[Post]:
        """Return the cached post with *post_id*, or ``None`` when absent."""

    @abstractmethod
    def get_posts(self) -> list[Post]:
        """Return every cached post.  Order is not significant."""

    @abstractmethod
    def store_post(self, post: Post) -> None:
        """Insert *post*, replacing any cached post with the same id."""

    @abstractmethod
    def store_posts(self, posts: Iterable[Post]) -> None:
        """Replace the entire contents with *posts*.

        Existing entries are cleared first, then every input is upserted, so
        duplicate ids collapse to the last occurrence.  This is a full
        invalidate-and-repopulate, not a merge.
        """

    def clear(self) -> None:
        """Drop every cached post."""
        self.store_posts([])
