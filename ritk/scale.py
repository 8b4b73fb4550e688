"""Scaling about a fixed center."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from ritk.base import Transform, _as_points, _as_vector


class ScaleTransform(Transform):
    """Scales points about a fixed center: ``T(x) = s * (x - c) + c``."""

    def __init__(self, scale: ArrayLike, center: ArrayLike | None = None) -> None:
        self._scale = _as_vector(scale, name="scale")
        dim = self._scale.shape[0]
        self._center = np.zeros(dim) if center is None else _as_vector(center, dim, "center")

    @classmethod
    def identity(cls, dimension: int, center: ArrayLike | None = None) -> ScaleTransform:
        """Return a scale transform with all factors equal to one."""
        return cls(np.ones(dimension), center)

    @property
    def dimension(self) -> int:
        return self._scale.shape[0]

    @property
    def scale(self) -> np.ndarray:
        return self._scale.copy()

    @property
    def center(self) -> np.ndarray:
        return self._center.copy()

    def transform_points(self, points: ArrayLike) -> np.ndarray:
        pts = _as_points(points, self.dimension)
        c = self._center[np.newaxis, :]
        return (pts - c) * self._scale[np.newaxis, :] + c

    def __repr__(self) -> str:
        return f"ScaleTransform(scale={self._scale.tolist()}, center={self._center.tolist()})"