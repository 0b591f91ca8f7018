"""Correlated multi-asset path generation for Monte Carlo valuation."""

from multipath_engine.mc.correlation import CorrelationTransform, matrix_sqrt
from multipath_engine.mc.generator import MultiPathGenerator
from multipath_engine.mc.legacy import LegacyMultiPathGenerator
from multipath_engine.models import MultiPath, Sample, SingleAssetPath, TimeGrid

__all__ = [
    "CorrelationTransform",
    "matrix_sqrt",
    "MultiPathGenerator",
    "LegacyMultiPathGenerator",
    "MultiPath",
    "Sample",
    "SingleAssetPath",
    "TimeGrid",
]

__version__ = "0.1.0"
