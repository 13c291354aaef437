"""Cache stores for postcache.

This package provides the :class:`PostStore` contract and its two variants:

* :class:`MemoryPostStore` -- a process-lifetime dict.
* :class:`PersistedPostStore` -- a single JSON blob in a
  :class:`KeyValueStore`, typically :class:`DiskKeyValueStore`
  (:mod:`diskcache`), so cached posts survive restarts.
"""

from postcache.store.base import PostStore
from postcache.store.keyvalue import DiskKeyValueStore, KeyValueStore, MemoryKeyValueStore
from postcache.store.memory import MemoryPostStore
from postcache.store.persisted import PersistedPostStore

__all__ = [
    "DiskKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "MemoryPostStore",
    "PersistedPostStore",
    "PostStore",
]
