"""Canonical Pydantic models shared across all postcache modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into two groups:

**Entity models** -- the cached record and its JSON encoding:
    :class:`Post` and the :data:`PostList` type adapter used for persisted
    blobs and list responses.

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`CacheConfig`, :class:`RemoteConfig`, and :class:`Settings`.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


# --- Entity ---


class Post(BaseModel):
    """A single post as served by a backend and held by a cache store.

    Posts are immutable once created: the backend assigns ``id`` on creation
    and no update operation exists.

    Example::

        Post(id=1, title="title1", subtitle="subTitle1")
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Backend-assigned identifier, unique and increasing")
    title: str
    subtitle: str


PostList = TypeAdapter(list[Post])
"""Adapter that validates and (de)serialises a sequence of :class:`Post`."""


# --- Configuration ---


class CacheBackend(str, enum.Enum):
    """Storage backing a :class:`~postcache.service.cached.CachingPostService`."""

    MEMORY = "memory"
    DISK = "disk"


class CacheConfig(BaseModel):
    """Cache store settings stored in :class:`Settings`."""

    backend: CacheBackend = Field(
        default=CacheBackend.MEMORY, description="Cache store: memory or disk"
    )
    storage_key: str = Field(
        default="posts", description="Key the persisted blob is stored under"
    )
    directory: Optional[str] = Field(
        default=None,
        description="Directory for the disk store (defaults to the XDG cache dir)",
    )
    ttl_seconds: Optional[int] = Field(
        default=None,
        description="Expire the persisted blob after this many seconds (never when unset)",
    )


class RemoteConfig(BaseModel):
    """Settings for the HTTP backend.

    With ``offline`` set the remote backend answers from fixed sample posts
    instead of the network.  Without ``base_url`` (and not offline) the
    in-memory backend is used.
    """

    base_url: Optional[str] = Field(default=None, description="API root, e.g. https://api.example.com")
    timeout: int = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    max_retries: int = Field(default=0, description="Retries on 5xx and transport errors")
    offline: bool = Field(default=False, description="Serve fixed sample posts without network I/O")


class Settings(BaseModel):
    """User-wide configuration persisted at ``~/.config/postcache/config.json``.

    Loaded and saved by :func:`~postcache.config.load_settings` and
    :func:`~postcache.config.save_settings`. See
    :func:`~postcache.config.resolve_settings` for the precedence chain.
    """

    cache: CacheConfig = Field(default_factory=CacheConfig)
    remote: RemoteConfig = Field(default_factory=RemoteConfig)
    log_level: str = Field(default="WARNING", description="Root log level for configure_logging")
