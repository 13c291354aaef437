"""Post store persisted as a single JSON blob in a key-value store.

The full sequence of cached posts is encoded with
:data:`~postcache.models.PostList` and written under one storage key on every
:meth:`~PersistedPostStore.store_post` and
:meth:`~PersistedPostStore.store_posts`.  Reads decode the whole blob;
:meth:`~PersistedPostStore.get_post` then scans it linearly, so lookups are
O(n) in the number of cached posts.  That is acceptable for the small data
sets this store is meant for.

A blob that fails to decode is logged and treated as an empty store: a
corrupt cache degrades to cache-miss behaviour instead of failing the caller.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Optional

from pydantic import ValidationError

from postcache.exceptions import DecodeError
from postcache.models import Post, PostList
from postcache.store.base import PostStore
from postcache.store.keyvalue import KeyValueStore

logger = logging.getLogger(__name__)


class PersistedPostStore(PostStore):
    """:class:`~postcache.store.base.PostStore` that survives process restarts.

    Two instances built over the same *defaults* and *storage_key* see the
    same contents.  Read-modify-write cycles are serialised with a per-store
    lock and run inside :meth:`KeyValueStore.transact` so concurrent writers
    cannot drop each other's updates.

    Args:
        defaults: The host key-value store holding the blob.
        storage_key: Key the encoded post list is stored under.
        ttl_seconds: Optional expiry applied to the blob on every write.
            ``None`` keeps it forever.

    Example::

        store = PersistedPostStore(DiskKeyValueStore(cache_dir), "posts")
        store.store_posts([Post(id=1, title="a", subtitle="b")])
        assert store.get_post(1) is not None
    """

    def __init__(
        self,
        defaults: KeyValueStore,
        storage_key: str,
        ttl_seconds: Optional[int] = None,
    ) -> None:
        self._defaults = defaults
        self._storage_key = storage_key
        self._ttl_seconds = ttl_seconds
        self._lock = threading.RLock()

    @property
    def storage_key(self) -> str:
        return self._storage_key

    # ------------------------------------------------------------------ #
    # PostStore
    # ------------------------------------------------------------------ #

    def get_post(self, post_id: int) -> Optional[Post]:
        for post in self.get_posts():
            if post.id == post_id:
                return post
        return None

    def get_posts(self) -> list[Post]:
        try:
            return self._decode()
        except DecodeError as exc:
            logger.warning("Ignoring cached posts under '%s': %s", self._storage_key, exc)
            return []

    def store_post(self, post: Post) -> None:
        with self._lock, self._defaults.transact():
            posts = self.get_posts()
            for index, existing in enumerate(posts):
                if existing.id == post.id:
                    posts[index] = post
                    break
            else:
                posts.append(post)
            self._write(posts)

    def store_posts(self, posts: Iterable[Post]) -> None:
        by_id: dict[int, Post] = {}
        for post in posts:
            by_id[post.id] = post
        with self._lock, self._defaults.transact():
            self._write(list(by_id.values()))

    def clear(self) -> None:
        with self._lock, self._defaults.transact():
            self._defaults.delete(self._storage_key)

    # ------------------------------------------------------------------ #
    # Encoding
    # ------------------------------------------------------------------ #

    def _decode(self) -> list[Post]:
        """Decode the stored blob.  A missing key decodes to an empty list."""
        blob = self._defaults.get(self._storage_key)
        if blob is None:
            return []
        if not isinstance(blob, (bytes, str)):
            raise DecodeError(f"expected an encoded blob, found {type(blob).__name__}")
        try:
            return PostList.validate_json(blob)
        except ValidationError as exc:
            raise DecodeError(
                f"{exc.error_count()} validation error(s): {exc.errors()[0]['msg']}"
            ) from exc
        except ValueError as exc:
            raise DecodeError(str(exc)) from exc

    def _write(self, posts: list[Post]) -> None:
        self._defaults.set(
            self._storage_key, PostList.dump_json(posts), expire=self._ttl_seconds
        )
