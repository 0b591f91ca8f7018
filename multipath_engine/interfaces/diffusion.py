"""Diffusion process interface consumed by the path generators."""

from __future__ import annotations

from abc import ABC, abstractmethod


class DiffusionProcess(ABC):
    """Single-asset process evaluated step by step along a time grid.

    The primary generator evolves ``x`` multiplicatively, so ``drift`` is the
    log-drift rate per unit time and ``variance`` the log-variance accumulated
    over ``dt``.
    """

    @property
    @abstractmethod
    def x0(self) -> float:
        """Initial level of the process."""

    @abstractmethod
    def drift(self, t: float, x: float) -> float:
        """Drift rate at time ``t`` given the current level ``x``."""

    @abstractmethod
    def variance(self, t: float, x: float, dt: float) -> float:
        """Non-negative variance accumulated over ``[t, t + dt]`` from level ``x``."""
