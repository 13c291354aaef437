"""postcache -- read-through/write-through caching for an async post service.

Code that needs posts holds a :class:`~postcache.service.base.PostService`
and cannot tell whether it is talking to a backend directly or through the
:class:`~postcache.service.cached.CachingPostService` decorator.  Backends
are an in-memory mock and a remote service over an HTTP transport; cache
stores are an in-memory dict and a persisted JSON blob in :mod:`diskcache`.

Typical wiring::

    settings = resolve_settings()
    configure_logging(settings.log_level)
    async with open_post_service(settings) as service:
        posts = (await service.get_posts()).unwrap()

Modules:
    models: Pydantic models for posts and settings.
    result: Tagged success/failure outcome of a service call.
    exceptions: Error taxonomy carried by failed results.
    service: The service contract, backends and caching decorator.
    store: Cache store contract and its memory/persisted variants.
    client: Transports for the remote backend.
    completion: Callback-style dispatch for code that cannot await.
    config: XDG-aware settings loading and precedence resolution.
    log: Rich stderr logging setup.
    wiring: Composition root building the service graph.
"""

__version__ = "0.1.0"
