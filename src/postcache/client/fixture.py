"""Offline transport that answers every request with fixed sample posts."""

from __future__ import annotations

from typing import Any

from postcache.models import Post

SAMPLE_POSTS = (
    Post(id=1, title="title1", subtitle="subTitle1"),
    Post(id=2, title="title2", subtitle="subTitle2"),
    Post(id=3, title="title3", subtitle="subTitle3"),
)


class FixtureTransport:
    """Deterministic :class:`~postcache.client.base.HttpClient` stub.

    Single reads and creates return the first sample post whatever the path
    or body; list reads return all three.  Requests are recorded in
    :attr:`requests` as ``(method, path)`` tuples.
    """

    def __init__(self) -> None:
        self.requests: list[tuple[str, str]] = []

    async def get_post(self, path: str) -> Post:
        self.requests.append(("GET", path))
        return SAMPLE_POSTS[0]

    async def get_posts(self, path: str) -> list[Post]:
        self.requests.append(("GET", path))
        return list(SAMPLE_POSTS)

    async def post(self, path: str, body: dict[str, Any]) -> Post:
        self.requests.append(("POST", path))
        return SAMPLE_POSTS[0]
