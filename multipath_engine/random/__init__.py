from multipath_engine.random.gaussian import CorrelatedGaussianArrayGenerator, GaussianSequenceGenerator

__all__ = ["GaussianSequenceGenerator", "CorrelatedGaussianArrayGenerator"]
