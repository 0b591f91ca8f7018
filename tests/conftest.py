"""Deterministic test doubles for the injected random and process capabilities."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pytest

from multipath_engine.interfaces import DiffusionProcess, RandomArrayGenerator, RandomSequenceGenerator
from multipath_engine.models import Sample


class FixedSequenceGenerator(RandomSequenceGenerator):
    """Cycles through the given sequences, each returned with its weight."""

    def __init__(self, sequences: Sequence[Sequence[float]], weights: Sequence[float] | None = None, dimension: int | None = None):
        self.sequences = [np.asarray(s, dtype=float) for s in sequences]
        self.weights = list(weights) if weights is not None else [1.0] * len(self.sequences)
        self._dimension = dimension if dimension is not None else len(self.sequences[0])
        self.calls = 0

    @property
    def dimension(self) -> int:
        return self._dimension

    def next_sequence(self) -> Sample[np.ndarray]:
        k = self.calls % len(self.sequences)
        self.calls += 1
        return Sample(self.sequences[k].copy(), self.weights[k])


class FixedArrayGenerator(RandomArrayGenerator):
    """Cycles through per-step correlated draws and their weights."""

    def __init__(self, arrays: Sequence[Sequence[float]], weights: Sequence[float] | None = None):
        self.arrays = [np.asarray(a, dtype=float) for a in arrays]
        self.weights = list(weights) if weights is not None else [1.0] * len(self.arrays)
        self.calls = 0

    @property
    def dimension(self) -> int:
        return len(self.arrays[0])

    def next(self) -> Sample[np.ndarray]:
        k = self.calls % len(self.arrays)
        self.calls += 1
        return Sample(self.arrays[k].copy(), self.weights[k])


class ConstantProcess(DiffusionProcess):
    """Constant log-drift and volatility; records every evaluation."""

    def __init__(self, x0: float = 100.0, drift_rate: float = 0.0, sigma: float = 0.2):
        self._x0 = x0
        self.drift_rate = drift_rate
        self.sigma = sigma
        self.drift_calls: list[tuple[float, float]] = []
        self.variance_calls: list[tuple[float, float, float]] = []

    @property
    def x0(self) -> float:
        return self._x0

    def drift(self, t: float, x: float) -> float:
        self.drift_calls.append((t, x))
        return self.drift_rate

    def variance(self, t: float, x: float, dt: float) -> float:
        self.variance_calls.append((t, x, dt))
        return self.sigma * self.sigma * dt


@pytest.fixture
def fixed_sequence():
    return FixedSequenceGenerator


@pytest.fixture
def fixed_arrays():
    return FixedArrayGenerator


@pytest.fixture
def constant_process():
    return ConstantProcess
