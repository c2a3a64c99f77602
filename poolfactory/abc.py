"""
Interfaces implemented by every pool.

``IResourcePool`` is the capability set shared by :class:`~poolfactory.pool.Pool`
and :class:`~poolfactory.thread_safe.ThreadSafePool`;
``IAsyncResourcePool`` is its trio counterpart.
"""

from abc import (
    ABC,
    abstractmethod,
)
from collections.abc import (
    Awaitable,
    Callable,
)
import inspect
from typing import (
    Any,
    Generic,
    TypeVar,
    Union,
)

from poolfactory.config import (
    PoolConfig,
)
from poolfactory.handle import (
    PooledResource,
)
from poolfactory.result import (
    Err,
    Ok,
    Result,
)
from poolfactory.state import (
    PoolStats,
)

T = TypeVar("T")
R = TypeVar("R")


class IResourcePool(ABC, Generic[T]):
    """
    Interface for a bounded pool of reusable resources.

    Resources are handed out wrapped in a :class:`PooledResource`, whose
    release path returns them to the pool that issued them.
    """

    @abstractmethod
    def checkout(self) -> Result[PooledResource[T], Any]:
        """
        Obtain a resource from the pool.

        Returns
        -------
        Result[PooledResource[T], Any]
            ``Ok`` with a handle owning the resource, or ``Err`` with the
            creator's error or a ``PoolExhaustedError``.

        """

    @abstractmethod
    def stats(self) -> PoolStats:
        """
        Take a snapshot of the pool counters.

        Returns
        -------
        PoolStats
            Idle count, checked-out count, total created and capacity.

        """

    @property
    @abstractmethod
    def config(self) -> PoolConfig:
        """The configuration the pool was built with."""

    @abstractmethod
    def drain(self) -> int:
        """
        Discard every idle resource.

        Returns
        -------
        int
            The number of resources discarded.

        """

    def with_resource(self, body: Callable[[T], R]) -> Result[R, Any]:
        """
        Run ``body`` with a checked-out resource, then give it back.

        The resource is released even if ``body`` raises; the exception is
        re-raised after release.

        Parameters
        ----------
        body : Callable[[T], R]
            Function receiving the resource.

        Returns
        -------
        Result[R, Any]
            ``Ok`` with the body's return value, or the checkout error.

        """
        checked_out = self.checkout()
        if isinstance(checked_out, Err):
            return checked_out
        with checked_out.value as resource:
            return Ok(body(resource))


class IAsyncResourcePool(ABC, Generic[T]):
    """Async interface for a bounded pool of reusable resources."""

    @abstractmethod
    async def checkout(self) -> Result[PooledResource[T], Any]:
        """
        Obtain a resource from the pool, waiting up to ``acquire_timeout``.

        Returns
        -------
        Result[PooledResource[T], Any]
            ``Ok`` with a handle, or ``Err`` with the creator's error or an
            ``AcquireTimeoutError``.

        """

    @abstractmethod
    def stats(self) -> PoolStats:
        """Take a snapshot of the pool counters."""

    @property
    @abstractmethod
    def config(self) -> PoolConfig:
        """The configuration the pool was built with."""

    @abstractmethod
    def drain(self) -> int:
        """Discard every idle resource and return how many there were."""

    async def with_resource(
        self, body: Callable[[T], Union[R, Awaitable[R]]]
    ) -> Result[R, Any]:
        """
        Run ``body`` with a checked-out resource, then give it back.

        Parameters
        ----------
        body : Callable[[T], R | Awaitable[R]]
            Function or coroutine function receiving the resource.

        Returns
        -------
        Result[R, Any]
            ``Ok`` with the body's return value, or the checkout error.

        """
        checked_out = await self.checkout()
        if isinstance(checked_out, Err):
            return checked_out
        with checked_out.value as resource:
            outcome = body(resource)
            if inspect.isawaitable(outcome):
                outcome = await outcome
            return Ok(outcome)
