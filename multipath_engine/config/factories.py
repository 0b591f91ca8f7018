"""Factory helpers for generator creation with logging."""

from __future__ import annotations

import logging
from typing import Callable, Generic, Sequence, TypeVar

from multipath_engine.exceptions import ConfigConflictError
from multipath_engine.interfaces.diffusion import DiffusionProcess
from multipath_engine.interfaces.random_sequence import RandomArrayGenerator, RandomSequenceGenerator
from multipath_engine.mc.generator import MultiPathGenerator
from multipath_engine.mc.legacy import LegacyMultiPathGenerator
from multipath_engine.random.gaussian import CorrelatedGaussianArrayGenerator, GaussianSequenceGenerator
from multipath_engine.schema.generator_config import GeneratorConfig

T = TypeVar("T")

log = logging.getLogger(__name__)


class FactoryBase(Generic[T]):
    def __init__(self, name: str, builder: Callable[[], T]) -> None:
        self.name = name
        self.builder = builder

    def create(self, run_id: str | None = None) -> T:
        component = self.builder()
        log.info(
            "Component loaded",
            extra={"type": component.__class__.__name__, "factory": self.name, "run_id": run_id},
        )
        return component


def build_multipath_generator(
    config: GeneratorConfig,
    processes: Sequence[DiffusionProcess],
    sequence_generator: RandomSequenceGenerator | None = None,
) -> MultiPathGenerator:
    """Build the primary generator, defaulting to a seeded Gaussian sequence source."""

    grid = config.time_grid()
    if sequence_generator is None:
        sequence_generator = GaussianSequenceGenerator(config.n_assets * grid.n_steps, seed=config.seed)

    def _build() -> MultiPathGenerator:
        return MultiPathGenerator(
            processes,
            config.drifts,
            config.covariance,
            grid,
            sequence_generator,
            normalization=config.normalization,
            antithetic=config.antithetic,
            reuse_buffer=config.reuse_buffer,
            decomposition=config.decomposition,
        )

    return FactoryBase("multipath", _build).create(run_id=config.run_id)


def build_legacy_generator(
    config: GeneratorConfig,
    array_generator: RandomArrayGenerator | None = None,
) -> LegacyMultiPathGenerator:
    """Build the legacy generator from a config; ``mirror`` antithetics are rejected."""

    if config.antithetic != "pass_through":
        raise ConfigConflictError("legacy generator does not support antithetic sampling")
    if array_generator is None:
        array_generator = CorrelatedGaussianArrayGenerator(
            config.covariance, seed=config.seed, method=config.decomposition
        )

    def _build() -> LegacyMultiPathGenerator:
        if config.times is None:
            return LegacyMultiPathGenerator.from_horizon(
                config.drifts,
                config.covariance,
                config.horizon,
                config.n_steps,
                array_generator,
                reuse_buffer=config.reuse_buffer,
            )
        return LegacyMultiPathGenerator(
            config.drifts,
            config.covariance,
            config.times,
            array_generator,
            reuse_buffer=config.reuse_buffer,
        )

    return FactoryBase("legacy", _build).create(run_id=config.run_id)


__all__ = ["FactoryBase", "build_multipath_generator", "build_legacy_generator"]
