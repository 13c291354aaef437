"""Post backend that delegates to an HTTP-like transport."""

from __future__ import annotations

from typing import Any, Awaitable, TypeVar

from postcache.client.base import HttpClient
from postcache.exceptions import PostCacheError
from postcache.models import Post
from postcache.result import Result
from postcache.service.base import PostService

T = TypeVar("T")


class RemotePostService(PostService):
    """:class:`~postcache.service.base.PostService` over an
    :class:`~postcache.client.base.HttpClient`.

    Errors raised by the transport are returned as failed results; anything
    that is not a :class:`~postcache.exceptions.PostCacheError` propagates.
    """

    def __init__(self, http: HttpClient) -> None:
        self._http = http

    async def get_post(self, post_id: int) -> Result[Post]:
        return await _capture(self._http.get_post(f"/posts/{post_id}"))

    async def get_posts(self) -> Result[list[Post]]:
        return await _capture(self._http.get_posts("/posts/"))

    async def create_post(self, title: str, subtitle: str) -> Result[Post]:
        body: dict[str, Any] = {"title": title, "subtitle": subtitle}
        return await _capture(self._http.post("/posts", body))


async def _capture(call: Awaitable[T]) -> Result[T]:
    try:
        return Result.success(await call)
    except PostCacheError as exc:
        return Result.failure(exc)
