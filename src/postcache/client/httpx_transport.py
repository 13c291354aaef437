"""Asynchronous HTTP transport for the remote post backend.

This module provides :class:`HttpxTransport`, the real-I/O implementation of
:class:`~postcache.client.base.HttpClient`.  It wraps
:class:`httpx.AsyncClient`, retries server errors and transport failures
with exponential backoff, and maps every failure onto the postcache error
taxonomy so the service layer can report it through a
:class:`~postcache.result.Result`.

Wire format: ``GET /posts/{id}`` returns one Post object, ``GET /posts/``
returns a JSON array of Post objects, and ``POST /posts`` takes
``{"title": ..., "subtitle": ...}`` and returns the created Post.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from postcache.exceptions import MalformedResponseError, NotFoundError, TransportError
from postcache.models import Post, PostList, RemoteConfig

logger = logging.getLogger(__name__)


class HttpxTransport:
    """HTTP transport backed by :class:`httpx.AsyncClient`.

    Must be used as an async context manager; the underlying client is
    created on entry and closed on exit.

    Args:
        config: Base URL, timeout, SSL verification and retry settings.
        transport: Optional :mod:`httpx` transport, e.g.
            :class:`httpx.MockTransport` in tests.
        backoff: Base delay in seconds between retries.  The delay doubles
            each attempt: ``backoff``, ``2 * backoff``, ``4 * backoff``, ...

    Example::

        async with HttpxTransport(RemoteConfig(base_url="https://api.example.com")) as http:
            post = await http.get_post("/posts/1")
    """

    def __init__(
        self,
        config: RemoteConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        backoff: float = 1.0,
    ) -> None:
        self._config = config
        self._transport = transport
        self._backoff = backoff
        self._client: Optional[httpx.AsyncClient] = None

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> HttpxTransport:
        self._client = httpx.AsyncClient(
            base_url=self._config.base_url or "",
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # HttpClient
    # ------------------------------------------------------------------ #

    async def get_post(self, path: str) -> Post:
        data = await self._request_json("GET", path)
        return self._parse(Post.model_validate, data, path)

    async def get_posts(self, path: str) -> list[Post]:
        data = await self._request_json("GET", path)
        return self._parse(PostList.validate_python, data, path)

    async def post(self, path: str, body: dict[str, Any]) -> Post:
        data = await self._request_json("POST", path, json_body=body)
        return self._parse(Post.model_validate, data, path)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    async def _request_json(
        self,
        method: str,
        path: str,
        json_body: Optional[dict[str, Any]] = None,
    ) -> Any:
        try:
            response = await self._execute_with_retry(method, path, json_body)
        except httpx.DecodingError as exc:
            raise MalformedResponseError(f"{method} {path}: undecodable response body: {exc}") from exc
        except httpx.RequestError as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc
        self._map_response_error(response, path)
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponseError(f"{method} {path}: response is not JSON") from exc

    async def _execute_with_retry(
        self,
        method: str,
        path: str,
        json_body: Optional[dict[str, Any]],
    ) -> httpx.Response:
        """Execute the request, retrying 5xx and transport-level errors up to ``max_retries`` times."""
        assert self._client is not None, "Transport not initialised -- use as async context manager"

        max_retries = self._config.max_retries
        for attempt in range(max_retries + 1):
            delay = self._backoff * 2 ** attempt
            try:
                response = await self._client.request(method, path, json=json_body)
            except httpx.TransportError as exc:
                if attempt < max_retries:
                    logger.debug(
                        "Transport error: %s, retrying in %ss (attempt %d/%d)",
                        exc, delay, attempt + 1, max_retries,
                    )
                    await asyncio.sleep(delay)
                    continue
                raise TransportError(
                    f"{method} {path} failed after {max_retries + 1} attempts: {exc}"
                ) from exc

            if response.status_code >= 500 and attempt < max_retries:
                logger.debug(
                    "Server error %d, retrying in %ss (attempt %d/%d)",
                    response.status_code, delay, attempt + 1, max_retries,
                )
                await asyncio.sleep(delay)
                continue
            return response

        raise TransportError(f"{method} {path} failed after all retries")  # pragma: no cover

    def _map_response_error(self, response: httpx.Response, path: str) -> None:
        """Raise a typed exception for error HTTP status codes."""
        status = response.status_code
        if status < 400:
            return
        message = f"HTTP {status} for {path}"
        if status == 404:
            raise NotFoundError(message)
        raise TransportError(message, code=status)

    @staticmethod
    def _parse(validate: Any, data: Any, path: str) -> Any:
        try:
            return validate(data)
        except ValidationError as exc:
            raise MalformedResponseError(f"Unexpected response shape for {path}: {exc}") from exc
