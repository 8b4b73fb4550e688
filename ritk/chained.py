"""Composition of two transforms."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike

from ritk.base import Transform


@dataclass
class ChainedTransform(Transform):
    """Applies ``first`` and then ``second``: ``y = second(first(x))``."""

    first: Transform
    second: Transform

    def transform_points(self, points: ArrayLike) -> np.ndarray:
        return self.second.transform_points(self.first.transform_points(points))