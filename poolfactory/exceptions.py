"""
Resource pool exception classes.

Pools report failures as ``Err`` values carrying one of these exceptions;
only :class:`ResourceReleasedError` is ever raised directly.
"""

from __future__ import annotations


class PoolError(Exception):
    """Base exception for all resource pool errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidPoolConfigError(PoolError):
    """Exception reported when a pool configuration is rejected."""

    def __init__(self, message: str):
        super().__init__(message)


class PoolExhaustedError(PoolError):
    """Exception reported when no resource is idle and the pool is at capacity."""

    def __init__(
        self,
        in_use: int | None = None,
        max_size: int | None = None,
        message: str | None = None,
    ):
        self.in_use = in_use
        self.max_size = max_size

        if message:
            super().__init__(message)
        elif in_use is not None and max_size is not None:
            super().__init__(
                f"Pool exhausted: max_size reached (in_use={in_use}, "
                f"max_size={max_size})"
            )
        else:
            super().__init__("Pool exhausted: max_size reached")


class AcquireTimeoutError(PoolExhaustedError):
    """Exception reported when a blocking checkout passes its deadline."""

    def __init__(self, timeout: float, max_size: int | None = None):
        self.timeout = timeout
        super().__init__(
            max_size=max_size,
            message=f"Pool acquire timeout after {timeout}s",
        )


class ResourceReleasedError(PoolError):
    """Exception raised when a handle is used after its resource was released."""

    def __init__(self, message: str = "Pooled resource has already been released"):
        super().__init__(message)


class UnwrapError(PoolError):
    """Exception raised when unwrapping the wrong side of a result."""

    def __init__(self, payload: object, message: str):
        self.payload = payload
        super().__init__(message)
