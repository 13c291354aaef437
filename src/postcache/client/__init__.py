"""Transports for the remote post backend.

Classes:
    :class:`HttpClient` -- the protocol the remote service talks to.
    :class:`HttpxTransport` -- real I/O over :class:`httpx.AsyncClient`.
    :class:`FixtureTransport` -- offline stub returning fixed sample posts.

Example::

    from postcache.client import HttpxTransport

    async with HttpxTransport(settings.remote) as http:
        service = RemotePostService(http)
"""

from postcache.client.base import HttpClient
from postcache.client.fixture import FixtureTransport
from postcache.client.httpx_transport import HttpxTransport

__all__ = ["FixtureTransport", "HttpClient", "HttpxTransport"]
