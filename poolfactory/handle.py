"""
Scoped handle for a checked-out resource.
"""

from __future__ import annotations

from collections.abc import Callable
import threading
from types import TracebackType
from typing import Any, Generic, TypeVar

from .exceptions import ResourceReleasedError

T = TypeVar("T")
R = TypeVar("R")

_EMPTY: Any = object()


class PooledResource(Generic[T]):
    """
    Owns one checked-out resource and the obligation to give it back.

    The release callback runs at most once, whichever way the handle is
    given up: an explicit :meth:`release`, leaving a ``with`` block, handing
    ownership to another handle with :meth:`move`, or being garbage collected.

    Handles are created by pools; user code never constructs them directly.
    """

    __slots__ = ("_resource", "_releaser", "_lock", "__weakref__")

    def __init__(self, resource: T, releaser: Callable[[T], None]) -> None:
        self._resource = resource
        self._releaser: Callable[[T], None] | None = releaser
        self._lock = threading.Lock()

    @property
    def value(self) -> T:
        """The pooled resource."""
        if self._resource is _EMPTY:
            raise ResourceReleasedError()
        return self._resource

    @value.setter
    def value(self, resource: T) -> None:
        if self._resource is _EMPTY:
            raise ResourceReleasedError()
        self._resource = resource

    @property
    def has_value(self) -> bool:
        return self._resource is not _EMPTY

    def __bool__(self) -> bool:
        return self.has_value

    def use(self, fn: Callable[[T], R]) -> R:
        """Apply ``fn`` to the resource and return its result."""
        return fn(self.value)

    def _take(self) -> tuple[Any, Callable[[T], None] | None]:
        with self._lock:
            resource, releaser = self._resource, self._releaser
            self._resource = _EMPTY
            self._releaser = None
        return resource, releaser

    def move(self) -> PooledResource[T]:
        """
        Transfer the resource and its release obligation to a new handle.

        Returns:
            A handle owning the resource; this handle is left empty

        Raises:
            ResourceReleasedError: If this handle no longer holds a resource

        """
        resource, releaser = self._take()
        if resource is _EMPTY or releaser is None:
            raise ResourceReleasedError()
        return PooledResource(resource, releaser)

    def release(self) -> bool:
        """
        Give the resource back to its pool.

        Returns:
            True if this call released the resource, False if it was
            already released

        """
        resource, releaser = self._take()
        if resource is _EMPTY or releaser is None:
            return False
        releaser(resource)
        return True

    def __enter__(self) -> T:
        return self.value

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.release()

    def __del__(self) -> None:
        # __init__ may not have completed
        if getattr(self, "_releaser", None) is not None:
            self.release()

    def __repr__(self) -> str:
        if self._resource is _EMPTY:
            return "<PooledResource released>"
        return f"<PooledResource {self._resource!r}>"
