"""Additive-diffusion multi-path generator with constant drifts."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from multipath_engine.config.validation import ensure_time_grid, ensure_vector, require
from multipath_engine.exceptions import PathGenerationError, UnsupportedOperationError
from multipath_engine.interfaces.random_sequence import RandomArrayGenerator
from multipath_engine.mc.correlation import validate_covariance
from multipath_engine.models.path import MultiPath
from multipath_engine.models.sample import Sample
from multipath_engine.models.time_grid import TimeGrid
from multipath_engine.random.gaussian import CorrelatedGaussianArrayGenerator
from multipath_engine.utils.logging import get_logger

log = get_logger(__name__, component="legacy_generator")


class LegacyMultiPathGenerator:
    """Reduced generator that never consults a diffusion process.

    Drift increments are ``drifts[j] * dt_i`` and fixed at construction; the
    diffusion increment of step ``i`` is the ``j``-th correlated draw of that
    step scaled by ``sqrt(dt_i)``. The trajectory weight is the product of
    the weights of the per-step draws. Antithetic generation is not
    supported.
    """

    def __init__(
        self,
        drifts: Iterable[float],
        covariance,
        time_grid: TimeGrid | Iterable[float],
        array_generator: RandomArrayGenerator | None = None,
        *,
        seed: int | None = 0,
        reuse_buffer: bool = False,
    ) -> None:
        cov = validate_covariance(covariance)
        n_assets = cov.shape[0]
        drift_vec = ensure_vector(drifts, "drifts")
        grid = ensure_time_grid(time_grid)

        require(
            drift_vec.size == n_assets,
            f"LegacyMultiPathGenerator covariance ({n_assets}x{n_assets}) and drifts ({drift_vec.size}) "
            "do not have the same size",
            log,
        )
        require(grid.size > 1, "LegacyMultiPathGenerator: no times given", log)
        require(grid[0] >= 0.0, f"LegacyMultiPathGenerator: first time ({grid[0]}) must be non negative", log)
        require(
            grid.is_strictly_increasing(),
            "LegacyMultiPathGenerator: time grid must be strictly increasing",
            log,
        )
        variances = np.diag(cov)
        require(
            bool((variances >= 0.0).all()),
            f"LegacyMultiPathGenerator: negative variance on diagonal {variances.tolist()}",
            log,
        )
        if array_generator is None:
            array_generator = CorrelatedGaussianArrayGenerator(cov, seed=seed)
        require(
            array_generator.dimension == n_assets,
            f"LegacyMultiPathGenerator: random array dimension ({array_generator.dimension}) "
            f"does not match the number of assets ({n_assets})",
            log,
        )

        self._time_grid = grid
        self._generator = array_generator
        self._sqrt_dts = np.sqrt(grid.dts)
        self._drift_increments = np.outer(drift_vec, grid.dts)
        self._drift_increments.setflags(write=False)
        self.reuse_buffer = reuse_buffer
        self._n_assets = n_assets
        self._buffer = self._empty_sample()

        log.info(
            "LegacyMultiPathGenerator initialised",
            extra={"n_assets": n_assets, "n_steps": grid.n_steps, "dimension": n_assets},
        )

    @classmethod
    def from_horizon(
        cls,
        drifts: Iterable[float],
        covariance,
        length: float,
        time_steps: int,
        array_generator: RandomArrayGenerator | None = None,
        *,
        seed: int | None = 0,
        reuse_buffer: bool = False,
    ) -> "LegacyMultiPathGenerator":
        """Build a generator on a uniform grid of ``time_steps`` steps over ``[0, length]``."""
        require(
            time_steps > 0,
            f"LegacyMultiPathGenerator: time steps ({time_steps}) must be greater than zero",
            log,
        )
        require(length > 0, f"LegacyMultiPathGenerator: length ({length}) must be > 0", log)
        return cls(
            drifts,
            covariance,
            TimeGrid.uniform(length, time_steps),
            array_generator,
            seed=seed,
            reuse_buffer=reuse_buffer,
        )

    @property
    def n_assets(self) -> int:
        return self._n_assets

    @property
    def n_steps(self) -> int:
        return self._time_grid.n_steps

    @property
    def time_grid(self) -> TimeGrid:
        return self._time_grid

    @property
    def drift_increments(self) -> np.ndarray:
        """``(n_assets, n_steps)`` array of fixed drift increments."""
        return self._drift_increments

    def _empty_sample(self) -> Sample[MultiPath]:
        multipath = MultiPath(self._n_assets, self._time_grid)
        for j, path in enumerate(multipath):
            path.drift[:] = self._drift_increments[j]
        return Sample(multipath, 1.0)

    def next(self) -> Sample[MultiPath]:
        out = self._buffer if self.reuse_buffer else self._empty_sample()
        out.weight = 1.0
        paths = list(out.value)
        for i in range(self.n_steps):
            draw = self._generator.next()
            values = np.asarray(draw.value, dtype=float)
            if values.shape != (self._n_assets,):
                raise PathGenerationError(
                    f"random array generator returned {values.shape} draws, expected ({self._n_assets},)"
                )
            out.weight *= draw.weight
            for j in range(self._n_assets):
                paths[j].diffusion[i] = values[j] * self._sqrt_dts[i]
        return out

    def antithetic(self) -> Sample[MultiPath]:
        raise UnsupportedOperationError("legacy generator doesn't support antithetic paths")


__all__ = ["LegacyMultiPathGenerator"]
