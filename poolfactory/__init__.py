"""Resource pool package exports.

Expose the public symbols callers and tests import from ``poolfactory`` so
they can do e.g.::

	from poolfactory import PoolConfig, create_thread_safe

The individual modules stay importable for everything else.
"""

from .config import (
    CONNECTION_POOL_CONFIG,
    DEFAULT_CONFIG,
    MEMORY_POOL_CONFIG,
    THREAD_POOL_CONFIG,
    PoolConfig,
)
from .exceptions import (
    AcquireTimeoutError,
    InvalidPoolConfigError,
    PoolError,
    PoolExhaustedError,
    ResourceReleasedError,
    UnwrapError,
)
from .factory import (
    create,
    create_thread_safe,
    create_thread_safe_validated,
    create_thread_safe_with_lifecycle,
    create_trio,
    create_trio_validated,
    create_trio_with_lifecycle,
    create_validated,
    create_with_lifecycle,
    make_pool,
    make_thread_safe_pool,
    validate_config,
)
from .handle import PooledResource
from .pool import Pool
from .result import Err, Ok, Result
from .state import PoolStats
from .thread_safe import ThreadSafePool
from .trio_pool import TrioPool

__all__ = [
	"AcquireTimeoutError",
	"CONNECTION_POOL_CONFIG",
	"DEFAULT_CONFIG",
	"Err",
	"InvalidPoolConfigError",
	"MEMORY_POOL_CONFIG",
	"Ok",
	"Pool",
	"PoolConfig",
	"PoolError",
	"PoolExhaustedError",
	"PoolStats",
	"PooledResource",
	"ResourceReleasedError",
	"Result",
	"THREAD_POOL_CONFIG",
	"ThreadSafePool",
	"TrioPool",
	"UnwrapError",
	"create",
	"create_thread_safe",
	"create_thread_safe_validated",
	"create_thread_safe_with_lifecycle",
	"create_trio",
	"create_trio_validated",
	"create_trio_with_lifecycle",
	"create_validated",
	"create_with_lifecycle",
	"make_pool",
	"make_thread_safe_pool",
	"validate_config",
]
