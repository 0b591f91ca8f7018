"""Random generator interfaces consumed by the path generators."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from multipath_engine.models.sample import Sample


class RandomSequenceGenerator(ABC):
    """Produces weighted sequences of independent draws of a fixed length.

    Draws are ordered per time step, then per asset.
    """

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Length of every sequence returned by :meth:`next_sequence`."""

    @abstractmethod
    def next_sequence(self) -> Sample[np.ndarray]:
        """Return the next weighted sequence of ``dimension`` draws."""


class RandomArrayGenerator(ABC):
    """Produces one weighted, already correlated draw per asset on each call."""

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Number of assets in every returned array."""

    @abstractmethod
    def next(self) -> Sample[np.ndarray]:
        """Return the next weighted array of correlated draws."""
