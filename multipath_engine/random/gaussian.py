"""Seeded numpy Gaussian generators usable as default random capabilities."""

from __future__ import annotations

import numpy as np
from numpy.random import PCG64, Generator

from multipath_engine.exceptions import ConfigValidationError, PathGenerationError
from multipath_engine.interfaces.random_sequence import RandomArrayGenerator, RandomSequenceGenerator
from multipath_engine.mc.correlation import CorrelationTransform, DecompositionMethod
from multipath_engine.models.sample import Sample


def _rng(seed: int | None) -> Generator:
    return Generator(PCG64(seed)) if seed is not None else np.random.default_rng()


class GaussianSequenceGenerator(RandomSequenceGenerator):
    """Independent standard normal sequences of a fixed dimension, unit weight."""

    def __init__(self, dimension: int, seed: int | None = None) -> None:
        if dimension <= 0:
            raise ConfigValidationError(f"dimension ({dimension}) must be positive")
        self._dimension = int(dimension)
        self._rng = _rng(seed)
        self._last: Sample[np.ndarray] | None = None

    @property
    def dimension(self) -> int:
        return self._dimension

    def next_sequence(self) -> Sample[np.ndarray]:
        self._last = Sample(self._rng.standard_normal(self._dimension), 1.0)
        return self._last

    def last_sequence(self) -> Sample[np.ndarray]:
        if self._last is None:
            raise PathGenerationError("no sequence has been drawn yet")
        return self._last


class CorrelatedGaussianArrayGenerator(RandomArrayGenerator):
    """Normal draws with the given covariance, one per asset, unit weight."""

    def __init__(self, covariance, seed: int | None = None, method: DecompositionMethod = "eigen") -> None:
        self.transform = CorrelationTransform(covariance, method=method)
        self._rng = _rng(seed)

    @property
    def dimension(self) -> int:
        return self.transform.size

    def next(self) -> Sample[np.ndarray]:
        return Sample(self.transform.apply(self._rng.standard_normal(self.dimension)), 1.0)


__all__ = ["GaussianSequenceGenerator", "CorrelatedGaussianArrayGenerator"]
