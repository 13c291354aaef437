"""Exception hierarchy for postcache.

All exceptions inherit from :class:`PostCacheError`, which carries a numeric
``code`` and a ``domain`` string describing where the failure originated.
Backend failures never escape a :class:`~postcache.service.base.PostService`
as raised exceptions: they travel to the caller inside a failed
:class:`~postcache.result.Result`.

Subclass hierarchy::

    PostCacheError          (code 1)
    +-- NotFoundError       (code 404)
    +-- TransportError      (code 503, or the HTTP status when known)
    |   +-- MalformedResponseError (code 502)
    +-- DecodeError         (code 422)
    +-- ConfigError         (code 1)
"""

from __future__ import annotations


class PostCacheError(Exception):
    """Base exception for all postcache errors.

    Args:
        message: Human-readable error description.
        code: Optional override for the class-level numeric code.
        domain: Optional override for the class-level error domain.
    """

    code: int = 1
    domain: str = "postcache"

    def __init__(self, message: str, code: int | None = None, domain: str | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code
        if domain is not None:
            self.domain = domain


class NotFoundError(PostCacheError):
    """Raised when no post with the requested id exists at the resolving layer."""

    code = 404
    domain = "Network error"


class TransportError(PostCacheError):
    """Raised on network-level or server failures (timeout, refused connection, non-2xx)."""

    code = 503
    domain = "transport"


class MalformedResponseError(TransportError):
    """Raised when a response body is not JSON or does not match the Post shape."""

    code = 502


class DecodeError(PostCacheError):
    """Raised when a persisted cache blob is corrupt or fails schema validation.

    Always recovered inside :class:`~postcache.store.persisted.PersistedPostStore`.
    """

    code = 422
    domain = "cache"


class ConfigError(PostCacheError):
    """Raised for configuration problems (invalid JSON, bad values)."""

    domain = "config"
