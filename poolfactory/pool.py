"""
Single-threaded resource pool.

This module provides the basic pool engine: checkout with creation on
demand, pre-warming, and the validate/reset lifecycle on return. It does no
locking; use :class:`~poolfactory.thread_safe.ThreadSafePool` when several
threads share a pool.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from .abc import IResourcePool
from .config import DEFAULT_CONFIG, PoolConfig
from .handle import PooledResource
from .result import Result
from .state import Creator, Destroyer, PoolState, PoolStats, Resetter, Validator

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Pool(IResourcePool[T]):
    """
    Resource pool for use from a single thread.

    When the pool is at capacity, :meth:`checkout` fails immediately with
    ``PoolExhaustedError`` instead of waiting.
    """

    def __init__(
        self,
        creator: Creator[T],
        validator: Validator[T] | None = None,
        resetter: Resetter[T] | None = None,
        config: PoolConfig = DEFAULT_CONFIG,
        destroyer: Destroyer[T] | None = None,
    ) -> None:
        """
        Initialize the pool and pre-warm it to ``config.min_size``.

        Args:
            creator: Zero-argument function returning a Result with a new resource
            validator: Predicate telling whether a resource is still usable
            resetter: Function restoring a returned resource, returning a Result
            config: Pool configuration
            destroyer: Function closing a resource the pool discards

        """
        self._state: PoolState[T] = PoolState(
            creator, validator, resetter, config, destroyer
        )
        self._state.prewarm()

    def checkout(self) -> Result[PooledResource[T], Any]:
        return self._state.checkout().map(self._wrap)

    def _wrap(self, resource: T) -> PooledResource[T]:
        return PooledResource(resource, self._release)

    def _release(self, resource: T) -> None:
        self._state.release(resource)

    def stats(self) -> PoolStats:
        return self._state.snapshot()

    @property
    def config(self) -> PoolConfig:
        return self._state.config

    def drain(self) -> int:
        drained = self._state.drain()
        logger.debug("Drained %d idle resources", drained)
        return drained

    def __repr__(self) -> str:
        stats = self.stats()
        return (
            f"<{type(self).__name__} available={stats.available} "
            f"in_use={stats.in_use} max_size={stats.max_size}>"
        )
