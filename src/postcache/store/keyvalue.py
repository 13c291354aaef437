"""Key-value persistence layers for :class:`~postcache.store.persisted.PersistedPostStore`.

The persisted store only needs get-blob-by-key and set-blob-by-key with simple
string keys, plus a way to run a read-modify-write atomically.  That surface
is captured by the :class:`KeyValueStore` protocol.  Two implementations ship:

* :class:`DiskKeyValueStore` -- backed by :mod:`diskcache`, survives process
  restarts and is safe across threads and processes.
* :class:`MemoryKeyValueStore` -- a dict guarded by a re-entrant lock, for
  tests and ephemeral use.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from pathlib import Path
from typing import ContextManager, Iterator, Optional, Protocol

import diskcache


class KeyValueStore(Protocol):
    """Minimal blob store consumed by the persisted post store."""

    def get(self, key: str) -> Optional[bytes]: ...

    def set(self, key: str, value: bytes, expire: Optional[int] = None) -> None: ...

    def delete(self, key: str) -> None: ...

    def transact(self) -> ContextManager[object]: ...


class DiskKeyValueStore:
    """:class:`KeyValueStore` over a :class:`diskcache.Cache` directory.

    Args:
        directory: Root directory for the store.  A ``posts/`` subdirectory
            is created inside it.

    Example::

        defaults = DiskKeyValueStore("/tmp/postcache")
        defaults.set("posts", b"[]")
        assert defaults.get("posts") == b"[]"
        defaults.close()
    """

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory) / "posts"
        self._cache: Optional[diskcache.Cache] = diskcache.Cache(str(self._directory))

    @property
    def directory(self) -> Path:
        return self._directory

    def get(self, key: str) -> Optional[bytes]:
        return self._require().get(key)

    def set(self, key: str, value: bytes, expire: Optional[int] = None) -> None:
        self._require().set(key, value, expire=expire)

    def delete(self, key: str) -> None:
        self._require().delete(key)

    def transact(self) -> ContextManager[object]:
        """Run the enclosed reads and writes as one SQLite transaction."""
        return self._require().transact()

    def close(self) -> None:
        """Close the underlying :class:`diskcache.Cache` and release resources."""
        if self._cache is not None:
            self._cache.close()
            self._cache = None

    def _require(self) -> diskcache.Cache:
        if self._cache is None:
            raise RuntimeError(f"Store at {self._directory} is closed")
        return self._cache


class MemoryKeyValueStore:
    """:class:`KeyValueStore` kept in a dict.  Expiry is ignored."""

    def __init__(self) -> None:
        self._data: dict[str, bytes] = {}
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def set(self, key: str, value: bytes, expire: Optional[int] = None) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    @contextmanager
    def transact(self) -> Iterator[None]:
        with self._lock:
            yield
