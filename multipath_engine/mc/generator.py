"""Correlated multi-asset path generator driven by diffusion processes."""

from __future__ import annotations

import math
from typing import Iterable, Literal, Sequence

import numpy as np

from multipath_engine.config.validation import ensure_time_grid, ensure_vector, require
from multipath_engine.exceptions import PathGenerationError
from multipath_engine.interfaces.diffusion import DiffusionProcess
from multipath_engine.interfaces.random_sequence import RandomSequenceGenerator
from multipath_engine.mc.correlation import CorrelationTransform, DecompositionMethod, validate_covariance
from multipath_engine.models.path import MultiPath
from multipath_engine.models.sample import Sample
from multipath_engine.models.time_grid import TimeGrid
from multipath_engine.utils.logging import get_logger

log = get_logger(__name__, component="multipath_generator")

Normalization = Literal["two_factor", "per_asset"]
AntitheticMode = Literal["pass_through", "mirror"]

NORMALIZATIONS = ("two_factor", "per_asset")
ANTITHETIC_MODES = ("pass_through", "mirror")


class MultiPathGenerator:
    """Generates one weighted multi-asset trajectory per call.

    Each call draws a single sequence of ``n_assets * n_steps`` independent
    draws, correlates it block by block and evolves every asset with a
    log-Euler step::

        drift_i     = dt_i * process.drift(t_{i+1}, x)
        diffusion_i = -z_i * sqrt(process.variance(t_{i+1}, x, dt_i))
        x          *= exp(drift_i + diffusion_i)

    where ``z_i`` is the correlated draw divided by its transform row norm.
    ``normalization="two_factor"`` only rescales components 0 and 1 using the
    first two transform columns and therefore requires exactly two assets;
    ``"per_asset"`` rescales every component by its full row norm.

    ``antithetic="pass_through"`` makes :meth:`antithetic` return an
    independent trajectory; ``"mirror"`` re-evaluates the sequence drawn by
    the latest :meth:`next` with its sign flipped.

    By default each call returns a newly allocated sample. With
    ``reuse_buffer=True`` the returned sample is owned by the generator and
    overwritten by the following call.
    """

    def __init__(
        self,
        processes: Sequence[DiffusionProcess],
        drifts: Iterable[float],
        covariance,
        time_grid: TimeGrid | Iterable[float],
        generator: RandomSequenceGenerator,
        *,
        normalization: Normalization = "two_factor",
        antithetic: AntitheticMode = "pass_through",
        reuse_buffer: bool = False,
        decomposition: DecompositionMethod = "eigen",
    ) -> None:
        cov = validate_covariance(covariance)
        n_assets = cov.shape[0]
        grid = ensure_time_grid(time_grid)
        drift_vec = ensure_vector(drifts, "drifts")

        require(grid.size > 1, "MultiPathGenerator: no times given (time grid needs at least 2 points)", log)
        n_steps = grid.n_steps
        require(
            generator.dimension == n_assets * n_steps,
            f"MultiPathGenerator's dimension ({generator.dimension}) is not equal to "
            f"({n_assets} * {n_steps}) the number of assets times the number of time steps",
            log,
        )
        require(
            drift_vec.size == n_assets,
            f"MultiPathGenerator covariance ({n_assets}x{n_assets}) and drifts ({drift_vec.size}) "
            "do not have the same size",
            log,
        )
        require(
            len(processes) == n_assets,
            f"MultiPathGenerator got {len(processes)} diffusion processes for {n_assets} assets",
            log,
        )
        require(normalization in NORMALIZATIONS, f"unknown normalization {normalization!r}", log)
        require(antithetic in ANTITHETIC_MODES, f"unknown antithetic mode {antithetic!r}", log)
        require(
            normalization != "two_factor" or n_assets == 2,
            f"two_factor normalization requires exactly 2 assets, got {n_assets}",
            log,
        )

        self._processes = tuple(processes)
        self._drifts = drift_vec
        self._drifts.setflags(write=False)
        self._time_grid = grid
        self._generator = generator
        self._transform = CorrelationTransform(cov, method=decomposition)
        self._scale = self._normalization_factors(normalization)
        self.normalization = normalization
        self.antithetic_mode = antithetic
        self.reuse_buffer = reuse_buffer
        self._buffer = self._empty_sample()
        self._last_draw: Sample[np.ndarray] | None = None

        log.info(
            "MultiPathGenerator initialised",
            extra={
                "n_assets": n_assets,
                "n_steps": n_steps,
                "dimension": generator.dimension,
                "normalization": normalization,
                "antithetic": antithetic,
            },
        )

    @property
    def n_assets(self) -> int:
        return self._transform.size

    @property
    def n_steps(self) -> int:
        return self._time_grid.n_steps

    @property
    def dimension(self) -> int:
        return self.n_assets * self.n_steps

    @property
    def time_grid(self) -> TimeGrid:
        return self._time_grid

    @property
    def transform(self) -> CorrelationTransform:
        return self._transform

    @property
    def drifts(self) -> np.ndarray:
        return self._drifts

    def _normalization_factors(self, normalization: Normalization) -> np.ndarray:
        norms = self._transform.row_norms(2 if normalization == "two_factor" else None)
        factors = np.ones(self.n_assets)
        nonzero = norms > 0.0
        factors[nonzero] = 1.0 / norms[nonzero]
        return factors

    def _empty_sample(self) -> Sample[MultiPath]:
        multipath = MultiPath(self.n_assets, self._time_grid)
        dts = self._time_grid.dts
        for j, path in enumerate(multipath):
            path.drift[:] = self._drifts[j] * dts
        return Sample(multipath, 1.0)

    def _draw(self) -> Sample[np.ndarray]:
        sequence = self._generator.next_sequence()
        values = np.array(sequence.value, dtype=float)
        if values.shape != (self.dimension,):
            raise PathGenerationError(
                f"random generator returned {values.shape} draws, expected ({self.dimension},)"
            )
        return Sample(values, sequence.weight)

    def _evolve(self, draws: np.ndarray, weight: float) -> Sample[MultiPath]:
        out = self._buffer if self.reuse_buffer else self._empty_sample()
        out.weight = weight
        paths = list(out.value)
        n_assets = self.n_assets
        matrix = self._transform.matrix
        times = self._time_grid.times
        dts = self._time_grid.dts
        blocks = draws.reshape(self.n_steps, n_assets)
        asset = [p.x0 for p in self._processes]

        for i in range(self.n_steps):
            t = float(times[i + 1])
            dt = float(dts[i])
            correlated = (matrix @ blocks[i]) * self._scale
            for j in range(n_assets):
                process = self._processes[j]
                drift = dt * process.drift(t, asset[j])
                diffusion = -correlated[j] * math.sqrt(process.variance(t, asset[j], dt))
                paths[j].drift[i] = drift
                paths[j].diffusion[i] = diffusion
                asset[j] *= math.exp(drift + diffusion)

        return out

    def next(self) -> Sample[MultiPath]:
        """Draw a new sequence and return the resulting weighted trajectory."""
        self._last_draw = self._draw()
        return self._evolve(self._last_draw.value, self._last_draw.weight)

    def antithetic(self) -> Sample[MultiPath]:
        """Return the antithetic counterpart of the latest trajectory.

        In ``pass_through`` mode this is simply :meth:`next`.
        """
        if self.antithetic_mode == "pass_through":
            return self.next()
        if self._last_draw is None:
            raise PathGenerationError("antithetic() requires a previous call to next()")
        return self._evolve(-self._last_draw.value, self._last_draw.weight)


__all__ = ["MultiPathGenerator", "Normalization", "AntitheticMode"]
