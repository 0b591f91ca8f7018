"""Generator configuration schema and validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

from multipath_engine.exceptions import ConfigConflictError, ConfigValidationError
from multipath_engine.models.time_grid import TimeGrid

Normalization = Literal["two_factor", "per_asset"]
AntitheticMode = Literal["pass_through", "mirror"]
Decomposition = Literal["eigen", "cholesky"]


@dataclass(slots=True)
class GeneratorConfig:
    drifts: list[float]
    covariance: list[list[float]]
    times: Optional[list[float]] = None
    horizon: Optional[float] = None
    n_steps: Optional[int] = None
    seed: Optional[int] = None
    normalization: Normalization = "two_factor"
    antithetic: AntitheticMode = "pass_through"
    reuse_buffer: bool = False
    decomposition: Decomposition = "eigen"
    run_id: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        self.drifts = [float(d) for d in self.drifts]
        self.covariance = [[float(c) for c in row] for row in self.covariance]
        n_assets = len(self.covariance)
        if n_assets == 0:
            raise ConfigValidationError("covariance must not be empty")
        if any(len(row) != n_assets for row in self.covariance):
            raise ConfigValidationError("covariance must be a square matrix")
        if len(self.drifts) != n_assets:
            raise ConfigValidationError(
                f"drifts ({len(self.drifts)}) and covariance ({n_assets}x{n_assets}) do not have the same size"
            )
        if self.times is not None and (self.horizon is not None or self.n_steps is not None):
            raise ConfigConflictError("provide either times or horizon/n_steps, not both")
        if self.times is None:
            if self.horizon is None or self.n_steps is None:
                raise ConfigValidationError("horizon and n_steps are required when times is not given")
            if self.n_steps <= 0:
                raise ConfigValidationError("n_steps must be > 0")
            if self.horizon <= 0:
                raise ConfigValidationError("horizon must be > 0")
        elif len(self.times) < 2:
            raise ConfigValidationError("times must contain at least 2 points")
        if self.normalization not in {"two_factor", "per_asset"}:
            raise ConfigValidationError("invalid normalization")
        if self.antithetic not in {"pass_through", "mirror"}:
            raise ConfigValidationError("invalid antithetic mode")
        if self.decomposition not in {"eigen", "cholesky"}:
            raise ConfigValidationError("invalid decomposition")

    @property
    def n_assets(self) -> int:
        return len(self.covariance)

    def time_grid(self) -> TimeGrid:
        if self.times is not None:
            return TimeGrid(self.times)
        return TimeGrid.uniform(self.horizon, self.n_steps)

    @classmethod
    def from_dict(cls, data: dict) -> "GeneratorConfig":
        return cls(**data)

    def to_dict(self) -> dict:
        return {
            "drifts": list(self.drifts),
            "covariance": [list(row) for row in self.covariance],
            "times": None if self.times is None else list(self.times),
            "horizon": self.horizon,
            "n_steps": self.n_steps,
            "seed": self.seed,
            "normalization": self.normalization,
            "antithetic": self.antithetic,
            "reuse_buffer": self.reuse_buffer,
            "decomposition": self.decomposition,
            "run_id": self.run_id,
        }
