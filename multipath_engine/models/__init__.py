"""Data model for simulated trajectories."""

from multipath_engine.models.path import MultiPath, SingleAssetPath
from multipath_engine.models.sample import Sample
from multipath_engine.models.time_grid import TimeGrid

__all__ = ["TimeGrid", "Sample", "SingleAssetPath", "MultiPath"]
