"""
Internal pool state and lifecycle logic.

:class:`PoolState` holds the idle collection, the counters and the lifecycle
callbacks. It performs no synchronization: every pool class owns one and
decides how access to it is serialized.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from dataclasses import asdict, dataclass
import logging
from typing import Any, Generic, TypeVar

from .config import PoolConfig
from .exceptions import PoolExhaustedError
from .result import Err, Ok, Result, as_result

logger = logging.getLogger(__name__)

T = TypeVar("T")

Creator = Callable[[], Result[T, Any]]
Validator = Callable[[T], bool]
Resetter = Callable[[T], Result[None, Any]]
Destroyer = Callable[[T], None]


@dataclass(frozen=True)
class PoolStats:
    """Point-in-time snapshot of a pool's counters."""

    available: int
    in_use: int
    total_created: int
    max_size: int

    @property
    def utilization(self) -> float:
        return self.in_use / self.max_size if self.max_size > 0 else 0.0

    def to_dict(self) -> dict[str, int | float]:
        data: dict[str, int | float] = dict(asdict(self))
        data["utilization"] = self.utilization
        return data


class PoolState(Generic[T]):
    """
    Idle resources, counters and the create/validate/reset/destroy callbacks.

    Idle resources are reused oldest-returned first: checkout pops from the
    left of the deque and release appends on the right.
    """

    def __init__(
        self,
        creator: Creator[T],
        validator: Validator[T] | None,
        resetter: Resetter[T] | None,
        config: PoolConfig,
        destroyer: Destroyer[T] | None = None,
    ) -> None:
        self.creator = creator
        self.validator = validator
        self.resetter = resetter
        self.destroyer = destroyer
        self.config = config

        self.idle: deque[T] = deque()
        self.in_use = 0
        self.total_created = 0

    def prewarm(self) -> None:
        """Create up to ``min_size`` idle resources; failures are skipped."""
        for attempt in range(self.config.min_size):
            try:
                result = as_result(self.creator())
            except Exception:
                logger.warning(
                    "Pre-warm attempt %d raised, skipping", attempt + 1, exc_info=True
                )
                continue
            if isinstance(result, Err):
                logger.debug(
                    "Pre-warm attempt %d failed: %s", attempt + 1, result.error
                )
                continue
            self.idle.append(result.value)
            self.total_created += 1
        logger.debug(
            "Pre-warmed %d of %d resources", len(self.idle), self.config.min_size
        )

    def must_wait(self) -> bool:
        """True while nothing is idle and no room is left to create."""
        return not self.idle and self.in_use >= self.config.max_size

    def checkout(self) -> Result[T, Any]:
        """
        Take an idle resource or create a new one.

        Returns:
            Ok with the resource, the creator's Err, or Err(PoolExhaustedError)

        """
        if self.idle:
            resource = self.idle.popleft()
            if self.config.validate_on_acquire and not self._is_valid(resource):
                logger.debug("Idle resource failed validation on acquire")
                self.discard(resource)
                return self._create()
            self.in_use += 1
            return Ok(resource)

        if self.in_use >= self.config.max_size:
            return Err(PoolExhaustedError(self.in_use, self.config.max_size))

        return self._create()

    def _create(self) -> Result[T, Any]:
        result = as_result(self.creator())
        if isinstance(result, Err):
            logger.debug("Resource creation failed: %s", result.error)
            return result

        self.total_created += 1
        self.in_use += 1
        logger.debug("Created resource #%d", self.total_created)
        return result

    def release(self, resource: T) -> None:
        """Recycle a returned resource, or discard it if it cannot be reused."""
        self.in_use -= 1

        if self.resetter is not None:
            try:
                reset = as_result(self.resetter(resource))
            except Exception:
                logger.warning("Resetter raised, discarding resource", exc_info=True)
                self.discard(resource)
                return
            if isinstance(reset, Err):
                logger.debug("Reset failed, discarding resource: %s", reset.error)
                self.discard(resource)
                return

        if self.config.validate_on_release and not self._is_valid(resource):
            logger.debug("Resource failed validation on release")
            self.discard(resource)
            return

        self.idle.append(resource)

    def _is_valid(self, resource: T) -> bool:
        if self.validator is None:
            return True
        try:
            return bool(self.validator(resource))
        except Exception:
            logger.warning("Validator raised, treating resource as invalid", exc_info=True)
            return False

    def discard(self, resource: T) -> None:
        if self.destroyer is None:
            return
        try:
            self.destroyer(resource)
        except Exception:
            logger.warning("Destroyer raised while discarding resource", exc_info=True)

    def drain(self) -> int:
        """Discard every idle resource and return how many there were."""
        drained = 0
        while self.idle:
            self.discard(self.idle.popleft())
            drained += 1
        return drained

    def snapshot(self) -> PoolStats:
        return PoolStats(
            available=len(self.idle),
            in_use=self.in_use,
            total_created=self.total_created,
            max_size=self.config.max_size,
        )
