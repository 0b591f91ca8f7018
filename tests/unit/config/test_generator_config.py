import numpy as np
import pytest

from multipath_engine.config.factories import build_legacy_generator, build_multipath_generator
from multipath_engine.exceptions import ConfigConflictError, ConfigValidationError
from multipath_engine.mc.generator import MultiPathGenerator
from multipath_engine.mc.legacy import LegacyMultiPathGenerator
from multipath_engine.schema.generator_config import GeneratorConfig


def _config(**overrides) -> GeneratorConfig:
    data = {
        "drifts": [0.05, 0.03],
        "covariance": [[0.04, 0.01], [0.01, 0.09]],
        "horizon": 1.0,
        "n_steps": 4,
        "seed": 7,
    }
    data.update(overrides)
    return GeneratorConfig(**data)


def test_config_round_trip():
    cfg = _config(run_id="run-1")
    assert GeneratorConfig.from_dict(cfg.to_dict()) == cfg
    assert cfg.n_assets == 2
    assert cfg.time_grid().n_steps == 4


@pytest.mark.parametrize(
    "overrides",
    [
        {"drifts": [0.05]},
        {"covariance": [[0.04, 0.0]]},
        {"covariance": []},
        {"n_steps": 0},
        {"horizon": -1.0},
        {"horizon": None},
        {"horizon": None, "n_steps": None, "times": [0.0]},
        {"normalization": "pca"},
        {"antithetic": "bridge"},
        {"decomposition": "svd"},
    ],
)
def test_config_validation(overrides):
    with pytest.raises(ConfigValidationError):
        _config(**overrides)


def test_times_and_horizon_conflict():
    with pytest.raises(ConfigConflictError):
        _config(times=[0.0, 1.0])


def test_build_multipath_generator_with_default_source(constant_process):
    gen = build_multipath_generator(_config(), [constant_process(), constant_process(sigma=0.3)])
    assert isinstance(gen, MultiPathGenerator)
    assert gen.dimension == 8
    sample = gen.next()
    assert sample.value.path_size == 4
    assert np.isfinite(sample.value[1].diffusion).all()


def test_build_multipath_generator_per_asset(constant_process):
    cfg = _config(
        drifts=[0.0] * 3,
        covariance=np.eye(3).tolist(),
        horizon=None,
        n_steps=None,
        times=[0.0, 0.5, 1.0],
        normalization="per_asset",
        antithetic="mirror",
    )
    gen = build_multipath_generator(cfg, [constant_process() for _ in range(3)])
    base = gen.next()
    anti = gen.antithetic()
    assert np.allclose(anti.value[2].diffusion, -base.value[2].diffusion)


def test_build_legacy_generator():
    gen = build_legacy_generator(_config())
    assert isinstance(gen, LegacyMultiPathGenerator)
    assert gen.next().value[0].drift[0] == 0.05 * 0.25
    explicit = build_legacy_generator(_config(horizon=None, n_steps=None, times=[0.0, 1.0, 3.0]))
    assert explicit.n_steps == 2


def test_build_legacy_generator_rejects_mirror():
    with pytest.raises(ConfigConflictError):
        build_legacy_generator(_config(antithetic="mirror"))
