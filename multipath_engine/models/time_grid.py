"""Immutable time grid shared by generators and the paths they produce."""

from __future__ import annotations

from typing import Iterable, Iterator

import numpy as np

from multipath_engine.exceptions import ConfigValidationError


class TimeGrid:
    """Ordered, non-negative time points defining simulation steps.

    The underlying array is copied on construction and marked read-only, so a
    grid can be shared between a generator and every path it fills.
    """

    __slots__ = ("_times", "_dts")

    def __init__(self, times: Iterable[float]) -> None:
        if isinstance(times, TimeGrid):
            times = times.times
        arr = np.array(times if isinstance(times, (np.ndarray, list, tuple)) else list(times), dtype=float)
        if arr.ndim != 1:
            raise ConfigValidationError(f"time grid must be one-dimensional, got shape {arr.shape}")
        if arr.size == 0:
            raise ConfigValidationError("time grid must contain at least one point")
        if not np.isfinite(arr).all():
            raise ConfigValidationError("time grid contains non-finite values")
        if arr[0] < 0.0:
            raise ConfigValidationError(f"first time ({arr[0]}) must be non negative")
        dts = np.diff(arr)
        if (dts < 0.0).any():
            i = int(np.argmax(dts < 0.0))
            raise ConfigValidationError(
                f"time({i})={arr[i]} is later than time({i + 1})={arr[i + 1]}"
            )
        arr.setflags(write=False)
        dts.setflags(write=False)
        self._times = arr
        self._dts = dts

    @classmethod
    def uniform(cls, length: float, steps: int) -> "TimeGrid":
        """Grid of ``steps + 1`` equally spaced points from 0 to ``length``."""
        if steps <= 0:
            raise ConfigValidationError(f"time steps ({steps}) must be greater than zero")
        if length <= 0:
            raise ConfigValidationError(f"length ({length}) must be > 0")
        return cls(np.linspace(0.0, float(length), steps + 1))

    @property
    def times(self) -> np.ndarray:
        return self._times

    @property
    def dts(self) -> np.ndarray:
        return self._dts

    @property
    def size(self) -> int:
        return int(self._times.size)

    @property
    def n_steps(self) -> int:
        return self.size - 1

    def dt(self, i: int) -> float:
        return float(self._dts[i])

    def is_strictly_increasing(self) -> bool:
        return bool((self._dts > 0.0).all())

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, i: int) -> float:
        return float(self._times[i])

    def __iter__(self) -> Iterator[float]:
        return (float(t) for t in self._times)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeGrid):
            return NotImplemented
        return np.array_equal(self._times, other._times)

    def __hash__(self) -> int:
        return hash(self._times.tobytes())

    def __repr__(self) -> str:
        return f"TimeGrid(size={self.size}, start={self._times[0]}, end={self._times[-1]})"


__all__ = ["TimeGrid"]
