"""
Thread-safe resource pool.

Checkout blocks until a resource is idle or there is room to create one,
up to ``config.acquire_timeout`` seconds.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, TypeVar

from .abc import IResourcePool
from .config import DEFAULT_CONFIG, PoolConfig
from .exceptions import AcquireTimeoutError
from .handle import PooledResource
from .result import Err, Result
from .state import Creator, Destroyer, PoolState, PoolStats, Resetter, Validator

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ThreadSafePool(IResourcePool[T]):
    """
    Resource pool shared by any number of threads.

    All state, including calls into the lifecycle callbacks, is guarded by a
    single lock. Callbacks therefore must not block indefinitely or re-enter
    the pool.

    Each release wakes one waiting thread. Waiters are not served in arrival
    order; a woken thread re-checks the pool and may go back to waiting.
    """

    def __init__(
        self,
        creator: Creator[T],
        validator: Validator[T] | None = None,
        resetter: Resetter[T] | None = None,
        config: PoolConfig = DEFAULT_CONFIG,
        destroyer: Destroyer[T] | None = None,
    ) -> None:
        self._state: PoolState[T] = PoolState(
            creator, validator, resetter, config, destroyer
        )
        # Reentrant: a handle finalized by the GC may release on a thread
        # that already holds the lock.
        self._lock = threading.RLock()
        self._available = threading.Condition(self._lock)

        with self._lock:
            self._state.prewarm()

    def checkout(self) -> Result[PooledResource[T], Any]:
        """
        Acquire a resource, blocking until one is available or the timeout passes.

        Returns:
            Ok with a handle, the creator's Err, or Err(AcquireTimeoutError)

        """
        timeout = self._state.config.acquire_timeout
        with self._available:
            deadline = time.monotonic() + timeout
            while self._state.must_wait():
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    logger.debug("Checkout timed out after %.3fs", timeout)
                    return Err(
                        AcquireTimeoutError(timeout, self._state.config.max_size)
                    )
                self._available.wait(min(remaining, threading.TIMEOUT_MAX))

            try:
                result = self._state.checkout()
            except Exception:
                self._available.notify()
                raise
            # A failed creation leaves room that another waiter can use.
            if isinstance(result, Err) and not self._state.must_wait():
                self._available.notify()
            return result.map(self._wrap)

    def _wrap(self, resource: T) -> PooledResource[T]:
        return PooledResource(resource, self._release)

    def _release(self, resource: T) -> None:
        with self._available:
            self._state.release(resource)
            self._available.notify()

    def stats(self) -> PoolStats:
        with self._lock:
            return self._state.snapshot()

    @property
    def config(self) -> PoolConfig:
        with self._lock:
            return self._state.config

    def drain(self) -> int:
        with self._lock:
            drained = self._state.drain()
        logger.debug("Drained %d idle resources", drained)
        return drained

    def __repr__(self) -> str:
        stats = self.stats()
        return (
            f"<{type(self).__name__} available={stats.available} "
            f"in_use={stats.in_use} max_size={stats.max_size}>"
        )
