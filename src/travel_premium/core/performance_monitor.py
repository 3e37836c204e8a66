# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.


"""Performance monitoring decorator for pricing operations."""

import time
from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from beartype import beartype

from .logging_utils import get_logger

P = ParamSpec("P")
T = TypeVar("T")

logger = get_logger(__name__)


@beartype
def performance_monitor(
    operation_name: str,
    max_duration_ms: int = 50,
    log_slow_operations: bool = True,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator to time a synchronous pricing operation.

    Durations are logged at debug level; operations slower than
    ``max_duration_ms`` are logged as warnings. Exceptions are logged with
    the elapsed time and re-raised.

    Args:
        operation_name: Name of the operation for monitoring
        max_duration_ms: Alert threshold in milliseconds
        log_slow_operations: Whether to log slow operations
    """

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            start_time = time.perf_counter()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.error(
                    f"PERFORMANCE ERROR: {operation_name} failed after "
                    f"{duration_ms:.2f}ms: {str(e)}"
                )
                raise

            duration_ms = (time.perf_counter() - start_time) * 1000
            if log_slow_operations and duration_ms > max_duration_ms:
                logger.warning(
                    f"PERFORMANCE WARNING: {operation_name} took {duration_ms:.2f}ms "
                    f"(threshold: {max_duration_ms}ms)"
                )
            else:
                logger.debug(f"{operation_name} completed in {duration_ms:.2f}ms")
            return result

        return wrapper

    return decorator
