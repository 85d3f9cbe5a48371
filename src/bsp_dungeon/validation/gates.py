"""
Validation gate decorator.

Provides the @validation_gate decorator for wrapping layout-producing
functions with automatic validation of their result.
"""

import functools
import logging
from typing import Any, Callable

from .core import ValidationError, ValidationResult

logger = logging.getLogger(__name__)


def validation_gate(fail_fast: bool = True, log_warnings: bool = True) -> Callable:
    """Decorator to validate the DungeonLayout returned by a function.

    Args:
        fail_fast: If True, raise ValidationError on FAIL issues
        log_warnings: If True, log WARN issues

    Returns:
        Decorated function

    Usage:
        @validation_gate()
        def build(settings: DungeonSettings) -> DungeonLayout:
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            # Import here to avoid circular imports
            from .checks.layout_checks import validate_layout

            layout = func(*args, **kwargs)
            result: ValidationResult = validate_layout(layout)

            if log_warnings:
                for issue in result.warnings:
                    logger.warning(str(issue))

            if fail_fast and result.failed:
                logger.error(f"Layout validation failed: {len(result.errors)} errors")
                raise ValidationError(result)

            return layout
        return wrapper
    return decorator
