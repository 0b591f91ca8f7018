"""Weighted sample container."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Sample(Generic[T]):
    """A value paired with its likelihood/importance weight."""

    value: T
    weight: float = 1.0


__all__ = ["Sample"]
