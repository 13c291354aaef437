"""Post services: the fetch contract, its backends and the caching decorator."""

from postcache.service.base import PostService, ServiceDecorator
from postcache.service.cached import CachingPostService
from postcache.service.memory import InMemoryPostService
from postcache.service.remote import RemotePostService

__all__ = [
    "CachingPostService",
    "InMemoryPostService",
    "PostService",
    "RemotePostService",
    "ServiceDecorator",
]
