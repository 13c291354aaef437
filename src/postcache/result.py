"""Tagged outcome of an asynchronous service operation.

Every :class:`~postcache.service.base.PostService` method resolves to a
:class:`Result`: either a success carrying the value or a failure carrying a
:class:`~postcache.exceptions.PostCacheError`.  There is no partial or
multi-error form.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from postcache.exceptions import PostCacheError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a success ``value`` or a failure ``error``, never both.

    Build instances with :meth:`success` and :meth:`failure` rather than the
    constructor.

    Example::

        result = await service.get_post(1)
        if result.is_success:
            show(result.value)
        else:
            report(result.error)
    """

    value: Optional[T] = None
    error: Optional[PostCacheError] = None

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: PostCacheError) -> Result[T]:
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the success value or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
