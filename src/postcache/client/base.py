"""Transport boundary for the remote post backend.

:class:`HttpClient` is the abstraction
:class:`~postcache.service.remote.RemotePostService` talks to.  Paths are
plain strings (``/posts/1``, ``/posts/``) and request bodies are dicts.
Implementations raise :class:`~postcache.exceptions.PostCacheError`
subclasses on failure:

* :class:`~postcache.exceptions.NotFoundError` for a missing resource,
* :class:`~postcache.exceptions.TransportError` for timeouts, refused
  connections and non-2xx statuses,
* :class:`~postcache.exceptions.MalformedResponseError` for bodies that are
  not JSON or do not match the Post shape.
"""

from __future__ import annotations

from typing import Any, Protocol

from postcache.models import Post


class HttpClient(Protocol):
    async def get_post(self, path: str) -> Post: ...

    async def get_posts(self, path: str) -> list[Post]: ...

    async def post(self, path: str, body: dict[str, Any]) -> Post: ...
