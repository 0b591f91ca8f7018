import math

import numpy as np
import pytest

from multipath_engine.exceptions import ConfigValidationError
from multipath_engine.models import MultiPath, SingleAssetPath, TimeGrid


def test_single_asset_path_levels_follow_log_increments():
    grid = TimeGrid([0.0, 1.0, 2.0])
    path = SingleAssetPath(grid, drift=[0.1, -0.05], diffusion=[0.2, 0.0])
    assert path.size == 2
    assert path[0] == pytest.approx(0.3)
    levels = path.levels(100.0)
    assert levels[0] == 100.0
    assert levels[1] == pytest.approx(100.0 * math.exp(0.3))
    assert levels[2] == pytest.approx(100.0 * math.exp(0.25))


def test_single_asset_path_rejects_wrong_length():
    with pytest.raises(ConfigValidationError):
        SingleAssetPath(TimeGrid([0.0, 1.0, 2.0]), drift=[0.1])
    with pytest.raises(ConfigValidationError):
        SingleAssetPath(TimeGrid([0.0]))


def test_copy_is_independent():
    grid = TimeGrid([0.0, 1.0])
    multipath = MultiPath(2, grid)
    clone = multipath.copy()
    multipath[0].diffusion[0] = 1.5
    assert clone[0].diffusion[0] == 0.0
    assert clone.time_grid == grid


def test_multipath_shape_and_grid_checks():
    grid = TimeGrid.uniform(1.0, 3)
    multipath = MultiPath(3, grid)
    assert multipath.asset_count == 3
    assert len(multipath) == 3
    assert multipath.path_size == 3
    assert all(p.time_grid is grid for p in multipath)

    with pytest.raises(ConfigValidationError):
        MultiPath(0, grid)
    with pytest.raises(ConfigValidationError):
        MultiPath(2, grid, [SingleAssetPath(grid)])
    with pytest.raises(ConfigValidationError):
        MultiPath(1, grid, [SingleAssetPath(TimeGrid([0.0, 2.0]))])


def test_to_frame_layout():
    grid = TimeGrid([0.0, 0.5, 1.0])
    multipath = MultiPath(2, grid)
    multipath[1].diffusion[:] = [0.3, -0.3]
    frame = multipath.to_frame()
    assert frame.shape == (2, 4)
    assert list(frame.index) == [0.5, 1.0]
    assert frame.columns.names == ["asset", "component"]
    assert np.array_equal(frame[(1, "diffusion")].to_numpy(), [0.3, -0.3])
    assert (frame[(0, "drift")] == 0.0).all()
