"""
Pool configuration.

This module provides the immutable :class:`PoolConfig` value together with
the predefined presets and loaders for environment variables and JSON files.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
import json
import os
from typing import Any


@dataclass(frozen=True)
class PoolConfig:
    """
    Immutable pool configuration.

    Every ``with_*`` method returns a new configuration and leaves the
    original untouched. Timeouts are expressed in seconds.

    ``idle_timeout`` is stored for callers that want it but no pool evicts
    idle resources on its own.
    """

    min_size: int = 0
    max_size: int = 10
    acquire_timeout: float = 30.0
    idle_timeout: float = 300.0  # 5 minutes
    validate_on_acquire: bool = True
    validate_on_release: bool = False

    def with_min_size(self, n: int) -> PoolConfig:
        return replace(self, min_size=n)

    def with_max_size(self, n: int) -> PoolConfig:
        return replace(self, max_size=n)

    def with_acquire_timeout(self, seconds: float) -> PoolConfig:
        return replace(self, acquire_timeout=seconds)

    def with_idle_timeout(self, seconds: float) -> PoolConfig:
        return replace(self, idle_timeout=seconds)

    def with_validation(self, on_acquire: bool, on_release: bool) -> PoolConfig:
        """
        Configure when the validator runs.

        Args:
            on_acquire: Validate idle resources before handing them out
            on_release: Validate resources before returning them to idle

        Returns:
            A new configuration

        """
        return replace(
            self, validate_on_acquire=on_acquire, validate_on_release=on_release
        )

    @classmethod
    def from_env(cls, prefix: str = "POOL_") -> PoolConfig:
        """
        Load configuration from environment variables.

        Args:
            prefix: Prefix of the variable names, e.g. ``POOL_MAX_SIZE``

        Returns:
            PoolConfig: Configuration loaded from environment

        """
        defaults = cls()
        return cls(
            min_size=int(os.getenv(f"{prefix}MIN_SIZE", str(defaults.min_size))),
            max_size=int(os.getenv(f"{prefix}MAX_SIZE", str(defaults.max_size))),
            acquire_timeout=float(
                os.getenv(f"{prefix}ACQUIRE_TIMEOUT", str(defaults.acquire_timeout))
            ),
            idle_timeout=float(
                os.getenv(f"{prefix}IDLE_TIMEOUT", str(defaults.idle_timeout))
            ),
            validate_on_acquire=os.getenv(
                f"{prefix}VALIDATE_ON_ACQUIRE", "true"
            ).lower()
            == "true",
            validate_on_release=os.getenv(
                f"{prefix}VALIDATE_ON_RELEASE", "false"
            ).lower()
            == "true",
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PoolConfig:
        """Build a configuration from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def from_file(cls, config_path: str) -> PoolConfig:
        """
        Load configuration from JSON file.

        Args:
            config_path: Path to configuration file

        Returns:
            PoolConfig: Configuration loaded from file

        """
        with open(config_path) as f:
            config_data = json.load(f)
        return cls.from_dict(config_data)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def save_to_file(self, config_path: str) -> None:
        with open(config_path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)


DEFAULT_CONFIG = PoolConfig()

THREAD_POOL_CONFIG = (
    DEFAULT_CONFIG.with_min_size(4).with_max_size(16).with_validation(False, False)
)

CONNECTION_POOL_CONFIG = (
    DEFAULT_CONFIG.with_min_size(2).with_max_size(20).with_validation(True, True)
)

MEMORY_POOL_CONFIG = (
    DEFAULT_CONFIG.with_min_size(8).with_max_size(64).with_validation(False, False)
)
