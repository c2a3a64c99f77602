"""
Pool construction.

Every ``create*`` function validates the configuration first and only then
builds and pre-warms a pool, so an invalid configuration never produces a
pool. All of them go through :func:`_build`.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar, Union

from .config import DEFAULT_CONFIG, PoolConfig
from .exceptions import InvalidPoolConfigError
from .pool import Pool
from .result import Err, Ok, Result
from .state import Creator, Destroyer, Resetter, Validator
from .thread_safe import ThreadSafePool
from .trio_pool import TrioPool

logger = logging.getLogger(__name__)

T = TypeVar("T")

AnyPool = Union[Pool[Any], ThreadSafePool[Any], TrioPool[Any]]


def _always_valid(resource: Any) -> bool:
    return True


def _no_reset(resource: Any) -> Result[None, Any]:
    return Ok(None)


def validate_config(config: PoolConfig) -> Result[None, InvalidPoolConfigError]:
    """
    Check a configuration before building a pool from it.

    Args:
        config: Configuration to check

    Returns:
        Ok(None), or Err(InvalidPoolConfigError) describing the first problem

    """
    if config.max_size == 0:
        return Err(InvalidPoolConfigError("max_size cannot be 0"))
    if config.max_size < 0:
        return Err(InvalidPoolConfigError("max_size cannot be negative"))
    if config.min_size < 0:
        return Err(InvalidPoolConfigError("min_size cannot be negative"))
    if config.min_size > config.max_size:
        return Err(InvalidPoolConfigError("min_size cannot exceed max_size"))
    if config.acquire_timeout < 0:
        return Err(InvalidPoolConfigError("acquire_timeout cannot be negative"))
    if config.idle_timeout < 0:
        return Err(InvalidPoolConfigError("idle_timeout cannot be negative"))
    return Ok(None)


def _build(
    pool_cls: type[AnyPool],
    creator: Creator[T],
    validator: Validator[T],
    resetter: Resetter[T],
    config: PoolConfig,
    destroyer: Destroyer[T] | None,
) -> Result[Any, InvalidPoolConfigError]:
    validation = validate_config(config)
    if isinstance(validation, Err):
        logger.debug("Rejected pool config %s: %s", config, validation.error)
        return validation

    pool = pool_cls(creator, validator, resetter, config, destroyer)
    logger.debug("Created %r", pool)
    return Ok(pool)


# Single-threaded pools


def create(
    creator: Creator[T],
    config: PoolConfig = DEFAULT_CONFIG,
    *,
    destroyer: Destroyer[T] | None = None,
) -> Result[Pool[T], InvalidPoolConfigError]:
    """Create a single-threaded pool from a creator function."""
    return create_with_lifecycle(
        creator, _always_valid, _no_reset, config, destroyer=destroyer
    )


def create_validated(
    creator: Creator[T],
    validator: Validator[T],
    config: PoolConfig = DEFAULT_CONFIG,
    *,
    destroyer: Destroyer[T] | None = None,
) -> Result[Pool[T], InvalidPoolConfigError]:
    """Create a single-threaded pool with custom validation."""
    return create_with_lifecycle(
        creator, validator, _no_reset, config, destroyer=destroyer
    )


def create_with_lifecycle(
    creator: Creator[T],
    validator: Validator[T],
    resetter: Resetter[T],
    config: PoolConfig = DEFAULT_CONFIG,
    *,
    destroyer: Destroyer[T] | None = None,
) -> Result[Pool[T], InvalidPoolConfigError]:
    """
    Create a single-threaded pool with full lifecycle management.

    Args:
        creator: Zero-argument function returning a Result with a new resource
        validator: Predicate telling whether a resource is still usable
        resetter: Function restoring a returned resource, returning a Result
        config: Pool configuration
        destroyer: Function closing a resource the pool discards

    Returns:
        Ok with the pool, or Err(InvalidPoolConfigError)

    """
    return _build(Pool, creator, validator, resetter, config, destroyer)


# Thread-safe pools


def create_thread_safe(
    creator: Creator[T],
    config: PoolConfig = DEFAULT_CONFIG,
    *,
    destroyer: Destroyer[T] | None = None,
) -> Result[ThreadSafePool[T], InvalidPoolConfigError]:
    """Create a thread-safe pool from a creator function."""
    return create_thread_safe_with_lifecycle(
        creator, _always_valid, _no_reset, config, destroyer=destroyer
    )


def create_thread_safe_validated(
    creator: Creator[T],
    validator: Validator[T],
    config: PoolConfig = DEFAULT_CONFIG,
    *,
    destroyer: Destroyer[T] | None = None,
) -> Result[ThreadSafePool[T], InvalidPoolConfigError]:
    """Create a thread-safe pool with custom validation."""
    return create_thread_safe_with_lifecycle(
        creator, validator, _no_reset, config, destroyer=destroyer
    )


def create_thread_safe_with_lifecycle(
    creator: Creator[T],
    validator: Validator[T],
    resetter: Resetter[T],
    config: PoolConfig = DEFAULT_CONFIG,
    *,
    destroyer: Destroyer[T] | None = None,
) -> Result[ThreadSafePool[T], InvalidPoolConfigError]:
    """Create a thread-safe pool with full lifecycle management."""
    return _build(ThreadSafePool, creator, validator, resetter, config, destroyer)


# Trio pools


def create_trio(
    creator: Creator[T],
    config: PoolConfig = DEFAULT_CONFIG,
    *,
    destroyer: Destroyer[T] | None = None,
) -> Result[TrioPool[T], InvalidPoolConfigError]:
    return create_trio_with_lifecycle(
        creator, _always_valid, _no_reset, config, destroyer=destroyer
    )


def create_trio_validated(
    creator: Creator[T],
    validator: Validator[T],
    config: PoolConfig = DEFAULT_CONFIG,
    *,
    destroyer: Destroyer[T] | None = None,
) -> Result[TrioPool[T], InvalidPoolConfigError]:
    return create_trio_with_lifecycle(
        creator, validator, _no_reset, config, destroyer=destroyer
    )


def create_trio_with_lifecycle(
    creator: Creator[T],
    validator: Validator[T],
    resetter: Resetter[T],
    config: PoolConfig = DEFAULT_CONFIG,
    *,
    destroyer: Destroyer[T] | None = None,
) -> Result[TrioPool[T], InvalidPoolConfigError]:
    return _build(TrioPool, creator, validator, resetter, config, destroyer)


def make_pool(
    creator: Creator[T], config: PoolConfig = DEFAULT_CONFIG
) -> Result[Pool[T], InvalidPoolConfigError]:
    return create(creator, config)


def make_thread_safe_pool(
    creator: Creator[T], config: PoolConfig = DEFAULT_CONFIG
) -> Result[ThreadSafePool[T], InvalidPoolConfigError]:
    return create_thread_safe(creator, config)
