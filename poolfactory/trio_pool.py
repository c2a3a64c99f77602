"""
Resource pool for trio tasks.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import trio

from .abc import IAsyncResourcePool
from .config import DEFAULT_CONFIG, PoolConfig
from .exceptions import AcquireTimeoutError
from .handle import PooledResource
from .result import Err, Result
from .state import Creator, Destroyer, PoolState, PoolStats, Resetter, Validator

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TrioPool(IAsyncResourcePool[T]):
    """
    Resource pool shared by the tasks of one trio run.

    Checkout waits cooperatively for a release, up to
    ``config.acquire_timeout`` seconds. Release is synchronous, so handles can
    be given back from plain ``with`` blocks and finalizers. The lifecycle
    callbacks stay synchronous and run on the trio thread.

    The pool must not be touched from other OS threads.
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
        # Replaced on every change; waiters hold on to the one they saw.
        self._changed = trio.Event()
        self._state.prewarm()

    async def checkout(self) -> Result[PooledResource[T], Any]:
        timeout = self._state.config.acquire_timeout
        with trio.move_on_after(timeout):
            while self._state.must_wait():
                await self._changed.wait()
            result = self._state.checkout()
            if isinstance(result, Err) and not self._state.must_wait():
                self._notify_changed()
            return result.map(self._wrap)

        logger.debug("Checkout timed out after %.3fs", timeout)
        return Err(AcquireTimeoutError(timeout, self._state.config.max_size))

    def _wrap(self, resource: T) -> PooledResource[T]:
        return PooledResource(resource, self._release)

    def _release(self, resource: T) -> None:
        self._state.release(resource)
        self._notify_changed()

    def _notify_changed(self) -> None:
        changed, self._changed = self._changed, trio.Event()
        changed.set()

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
