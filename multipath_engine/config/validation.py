"""Construction-time validation helpers shared by the generators."""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

from multipath_engine.exceptions import ConfigValidationError
from multipath_engine.models.time_grid import TimeGrid


def require(condition: bool, message: str, log: logging.Logger) -> None:
    """Log and raise :class:`ConfigValidationError` when ``condition`` is false."""
    if not condition:
        log.warning("Generator validation failed", extra={"reason": message})
        raise ConfigValidationError(message)


def ensure_vector(values: Iterable[float], name: str) -> np.ndarray:
    """Return ``values`` as a 1-d float array."""
    arr = np.array(values, dtype=float)
    if arr.ndim != 1:
        raise ConfigValidationError(f"{name} must be a vector, got shape {arr.shape}")
    if not np.isfinite(arr).all():
        raise ConfigValidationError(f"{name} contains non-finite values")
    return arr


def ensure_time_grid(times: TimeGrid | Iterable[float]) -> TimeGrid:
    """Copy ``times`` into a fresh :class:`TimeGrid`."""
    return TimeGrid(times)


__all__ = ["require", "ensure_vector", "ensure_time_grid"]
