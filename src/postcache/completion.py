"""Continuation-style access to :class:`~postcache.service.base.PostService`.

UI code that cannot ``await`` hands an operation and a completion callback to
:func:`dispatch`.  The operation runs as a task on the running event loop and
the callback fires exactly once, on the loop thread, with the
:class:`~postcache.result.Result`.  There is no cancellation: a caller that
stops caring about the answer still gets called back.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

from postcache.exceptions import PostCacheError
from postcache.result import Result

T = TypeVar("T")

Completion = Callable[[Result[T]], None]


def dispatch(
    operation: Awaitable[Result[T]],
    completion: Completion[T],
    loop: Optional[asyncio.AbstractEventLoop] = None,
) -> asyncio.Future[None]:
    """Schedule *operation* and pass its result to *completion*.

    A :class:`~postcache.exceptions.PostCacheError` raised by *operation* is
    delivered to *completion* as a failed result.  Any other exception skips
    the callback and is left on the returned future.

    Args:
        operation: Awaitable resolving to a :class:`Result`, usually a
            service call such as ``service.get_posts()``.
        completion: Callback invoked once with the result.
        loop: Loop to schedule on.  Defaults to the running loop.

    Returns:
        The scheduled future; awaiting it waits for *completion* to have run.

    Example::

        dispatch(service.get_posts(), lambda result: view.show(result))
    """
    if loop is None:
        loop = asyncio.get_running_loop()

    async def _run() -> None:
        try:
            result = await operation
        except PostCacheError as exc:
            result = Result.failure(exc)
        completion(result)

    return asyncio.ensure_future(_run(), loop=loop)
