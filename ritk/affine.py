"""General affine transform with a fixed center."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from ritk.base import Resampleable, Transform, _as_points, _as_vector


class AffineTransform(Transform, Resampleable):
    """Affine map about a fixed center: ``T(x) = A(x - c) + c + t``."""

    def __init__(
        self,
        matrix: ArrayLike,
        translation: ArrayLike,
        center: ArrayLike | None = None,
    ) -> None:
        mat = np.array(matrix, dtype=np.float64)
        if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
            raise ValueError(f"matrix must be square, got shape {mat.shape}")
        dim = mat.shape[0]
        self._matrix = mat
        self._translation = _as_vector(translation, dim, "translation")
        self._center = np.zeros(dim) if center is None else _as_vector(center, dim, "center")

    @classmethod
    def identity(cls, dimension: int, center: ArrayLike | None = None) -> AffineTransform:
        """Return the identity transform, centered at ``center`` or the origin."""
        return cls(np.eye(dimension), np.zeros(dimension), center)

    @property
    def dimension(self) -> int:
        return self._matrix.shape[0]

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix.copy()

    @property
    def translation(self) -> np.ndarray:
        return self._translation.copy()

    @property
    def center(self) -> np.ndarray:
        return self._center.copy()

    def transform_points(self, points: ArrayLike) -> np.ndarray:
        pts = _as_points(points, self.dimension)
        c = self._center[np.newaxis, :]
        return (pts - c) @ self._matrix.T + c + self._translation[np.newaxis, :]

    def resample(self, shape, origin, spacing, direction) -> AffineTransform:
        """An affine transform does not depend on the grid; return a copy."""
        return AffineTransform(self._matrix, self._translation, self._center)

    def __repr__(self) -> str:
        return (
            f"AffineTransform(matrix={self._matrix.tolist()}, "
            f"translation={self._translation.tolist()}, center={self._center.tolist()})"
        )