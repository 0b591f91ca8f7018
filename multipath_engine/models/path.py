"""Single- and multi-asset path containers."""

from __future__ import annotations

from typing import Iterator, Sequence

import numpy as np
import pandas as pd

from multipath_engine.exceptions import ConfigValidationError
from multipath_engine.models.time_grid import TimeGrid


class SingleAssetPath:
    """Per-step drift and diffusion log-increments of one asset."""

    __slots__ = ("time_grid", "drift", "diffusion")

    def __init__(
        self,
        time_grid: TimeGrid,
        drift: np.ndarray | None = None,
        diffusion: np.ndarray | None = None,
    ) -> None:
        n_steps = time_grid.n_steps
        if n_steps < 1:
            raise ConfigValidationError("path requires a time grid with at least 2 points")
        self.time_grid = time_grid
        self.drift = np.zeros(n_steps) if drift is None else np.array(drift, dtype=float)
        self.diffusion = np.zeros(n_steps) if diffusion is None else np.array(diffusion, dtype=float)
        if self.drift.shape != (n_steps,) or self.diffusion.shape != (n_steps,):
            raise ConfigValidationError(
                f"drift/diffusion must have {n_steps} entries, got {self.drift.shape} and {self.diffusion.shape}"
            )

    @property
    def size(self) -> int:
        return int(self.drift.size)

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, i: int) -> float:
        """Total log-increment over step ``i``."""
        return float(self.drift[i] + self.diffusion[i])

    def log_increments(self) -> np.ndarray:
        return self.drift + self.diffusion

    def levels(self, x0: float) -> np.ndarray:
        """Level trajectory on every grid point, starting from ``x0``."""
        out = np.empty(self.size + 1)
        out[0] = x0
        out[1:] = x0 * np.exp(np.cumsum(self.log_increments()))
        return out

    def copy(self) -> "SingleAssetPath":
        return SingleAssetPath(self.time_grid, self.drift.copy(), self.diffusion.copy())


class MultiPath:
    """One simulated scenario: a path per asset over a shared time grid."""

    __slots__ = ("_paths",)

    def __init__(self, n_assets: int, time_grid: TimeGrid, paths: Sequence[SingleAssetPath] | None = None) -> None:
        if n_assets <= 0:
            raise ConfigValidationError(f"number of assets ({n_assets}) must be positive")
        if paths is None:
            paths = [SingleAssetPath(time_grid) for _ in range(n_assets)]
        elif len(paths) != n_assets:
            raise ConfigValidationError(f"expected {n_assets} paths, got {len(paths)}")
        elif any(p.time_grid != time_grid for p in paths):
            raise ConfigValidationError("all asset paths must share the multipath time grid")
        self._paths = list(paths)

    @property
    def asset_count(self) -> int:
        return len(self._paths)

    @property
    def path_size(self) -> int:
        return self._paths[0].size

    @property
    def time_grid(self) -> TimeGrid:
        return self._paths[0].time_grid

    def __len__(self) -> int:
        return self.asset_count

    def __getitem__(self, j: int) -> SingleAssetPath:
        return self._paths[j]

    def __iter__(self) -> Iterator[SingleAssetPath]:
        return iter(self._paths)

    def copy(self) -> "MultiPath":
        return MultiPath(self.asset_count, self.time_grid, [p.copy() for p in self._paths])

    def to_frame(self) -> pd.DataFrame:
        """Increments indexed by step-end time, columns ``(asset, component)``."""
        columns = pd.MultiIndex.from_product(
            [range(self.asset_count), ["drift", "diffusion"]], names=["asset", "component"]
        )
        data = np.column_stack([arr for p in self._paths for arr in (p.drift, p.diffusion)])
        index = pd.Index(self.time_grid.times[1:], name="time")
        return pd.DataFrame(data, index=index, columns=columns)


__all__ = ["SingleAssetPath", "MultiPath"]
