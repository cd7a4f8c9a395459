"""Error handling decorators for standardized exception logging."""

import inspect
import logging
from functools import wraps
from typing import Any, Callable

from ...domain.exceptions import RuleExecutionError, ValidationUsageError


def log_validation_errors(
    operation_name: str,
    logger: logging.Logger = None,
    reraise: bool = True,
    default_return: Any = None,
):
    """Decorator for standardized validation error logging.

    Args:
        operation_name: Human-readable operation name for logging
        logger: Logger to use (defaults to function's module logger)
        reraise: Whether to re-raise exception after logging
        default_return: Value to return on error if not re-raising

    Example:
        @log_validation_errors("Property validation", reraise=True)
        async def evaluate_property(self, entity, property_name):
            # Rule faults are logged once here and re-raised
            ...
    """

    def decorator(func: Callable):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            log = logger or logging.getLogger(func.__module__)
            try:
                return await func(*args, **kwargs)
            except ValidationUsageError as err:
                # Caller mistake - log without stack trace
                log.error("%s usage error: %s", operation_name, err)
                if reraise:
                    raise
                return default_return
            except RuleExecutionError as err:
                log.error(
                    "%s rule error: %s",
                    operation_name,
                    err,
                    exc_info=True,
                )
                if reraise:
                    raise
                return default_return
            except Exception as err:
                log.error(
                    "%s unexpected error: %s",
                    operation_name,
                    err,
                    exc_info=True,
                )
                if reraise:
                    raise
                return default_return

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            log = logger or logging.getLogger(func.__module__)
            try:
                return func(*args, **kwargs)
            except Exception as err:
                log.error(
                    "%s error: %s",
                    operation_name,
                    err,
                    exc_info=True,
                )
                if reraise:
                    raise
                return default_return

        return async_wrapper if inspect.iscoroutinefunction(func) else sync_wrapper

    return decorator
