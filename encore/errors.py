"""Fail-open wrapping for public entry points."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def fail_open(default_factory: Callable[[], Any]) -> Callable[[F], F]:
    """
    Turn any exception raised by the wrapped call into a logged default.

    Used only at public entry points; internal helpers raise normally.

    Usage:
        @fail_open(list)
        def generate_recommendations(...): ...
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception:
                logger.exception(f"{func.__name__} failed; returning fallback result")
                return default_factory()
        return wrapper
    return decorator
