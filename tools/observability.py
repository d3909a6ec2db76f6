"""Observability helpers for instrumenting wardrobe, weather and outfit operations."""

from __future__ import annotations

import inspect
import logging
import time
from functools import wraps
from typing import Any, Callable, Dict, ParamSpec, TypeVar

from models.clothing_item import ClothingItem
from stylesync.logging_config import (
    ensure_correlation_id,
    get_logger,
    log_event,
    redact_for_log,
)

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")


def _describe(value: Any) -> Any:
    if isinstance(value, ClothingItem):
        return {"item_id": value.item_id, "category": value.category}
    return value


def _preview_arguments(func: Callable[..., Any], args: tuple, kwargs: dict, max_keys: int = 6) -> Dict[str, Any]:
    """Name every argument so user ids and locations are redacted however they were passed."""

    try:
        bound = inspect.signature(func).bind_partial(*args, **kwargs)
    except TypeError:
        arguments = dict(kwargs)
    else:
        arguments = {key: value for key, value in bound.arguments.items() if key != "self"}
    preview: Dict[str, Any] = {}
    for idx, (key, value) in enumerate(arguments.items()):
        if idx >= max_keys:
            preview["truncated"] = True
            break
        preview[key] = _describe(value)
    return redact_for_log(preview)


def summarise_result(result: Any) -> Dict[str, Any]:
    """Small, non-personal facts about what an operation returned."""

    if isinstance(result, ClothingItem):
        return {"item_id": result.item_id, "category": result.category}
    if isinstance(result, (list, tuple)):
        return {"result_count": len(result)}
    outfits = getattr(result, "outfits", None)
    if outfits is not None:
        return {
            "status": getattr(result, "status", "ok"),
            "outfit_count": len(outfits),
            "truncated": bool(getattr(result, "truncated", False)),
        }
    if hasattr(result, "temperature_c") and hasattr(result, "condition"):
        return {"condition": result.condition, "temperature_c": result.temperature_c}
    return {}


def instrument_operation(operation_name: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Wrap a store, weather or engine call with structured logs and timings.

    Rejected input (any ``ValueError``, which covers invalid items and thin
    wardrobes) is logged at WARNING without a traceback; anything else is an
    ERROR with ``exc_info``.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            correlation_id = ensure_correlation_id()
            start = time.perf_counter()

            log_event(
                LOGGER,
                logging.INFO,
                "operation_started",
                operation=operation_name,
                correlation_id=correlation_id,
                arguments=_preview_arguments(func, args, kwargs),
            )
            try:
                result = func(*args, **kwargs)
            except ValueError as exc:
                log_event(
                    LOGGER,
                    logging.WARNING,
                    "operation_rejected",
                    operation=operation_name,
                    correlation_id=correlation_id,
                    duration_ms=round((time.perf_counter() - start) * 1000, 2),
                    error_type=type(exc).__name__,
                )
                raise
            except Exception as exc:
                log_event(
                    LOGGER,
                    logging.ERROR,
                    "operation_failed",
                    operation=operation_name,
                    correlation_id=correlation_id,
                    duration_ms=round((time.perf_counter() - start) * 1000, 2),
                    error_type=type(exc).__name__,
                    exc_info=True,
                )
                raise
            log_event(
                LOGGER,
                logging.INFO,
                "operation_completed",
                operation=operation_name,
                correlation_id=correlation_id,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                **summarise_result(result),
            )
            return result

        return wrapper

    return decorator


__all__ = ["instrument_operation", "summarise_result"]
