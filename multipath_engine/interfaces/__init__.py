"""Capability interfaces injected into the path generators.

- diffusion.py: DiffusionProcess (initial value, drift, variance)
- random_sequence.py: RandomSequenceGenerator (primary generator) and
  RandomArrayGenerator (legacy generator)
"""

from multipath_engine.interfaces.diffusion import DiffusionProcess
from multipath_engine.interfaces.random_sequence import RandomArrayGenerator, RandomSequenceGenerator

__all__ = [
    "DiffusionProcess",
    "RandomSequenceGenerator",
    "RandomArrayGenerator",
]
