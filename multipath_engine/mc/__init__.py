"""Path generators and the correlation transform they share."""

from multipath_engine.mc.correlation import CorrelationTransform
from multipath_engine.mc.generator import MultiPathGenerator
from multipath_engine.mc.legacy import LegacyMultiPathGenerator

__all__ = ["CorrelationTransform", "MultiPathGenerator", "LegacyMultiPathGenerator"]
