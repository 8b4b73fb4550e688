"""Cubic B-spline free-form deformation transform."""

from __future__ import annotations

from itertools import product
from math import prod

import numpy as np
from numpy.typing import ArrayLike

from ritk.base import Transform, _as_points, _as_vector
from ritk.bspline_grid import bspline_basis, world_to_grid

_SUPPORTED_DIMENSIONS = (2, 3)


class BSplineTransform(Transform):
    """Free-form deformation driven by a grid of control point displacements.

    Physical points are mapped to continuous control grid indices, the
    displacement is interpolated with cubic B-splines and added to the point.
    Points outside the grid support (indices ``0`` to ``grid_size - 1``) are
    left unchanged.
    """

    def __init__(
        self,
        grid_size: tuple[int, ...],
        origin: ArrayLike,
        spacing: ArrayLike,
        direction: ArrayLike,
        coefficients: ArrayLike,
    ) -> None:
        size = tuple(int(n) for n in grid_size)
        if not all(n >= 4 for n in size):
            raise ValueError(
                "BSpline grid size must be at least 4 in all dimensions "
                "to support cubic B-splines"
            )
        dim = len(size)
        self._grid_size = size
        self._origin = _as_vector(origin, dim, "origin")
        self._spacing = _as_vector(spacing, dim, "spacing")
        mat = np.array(direction, dtype=np.float64)
        if mat.shape != (dim, dim):
            raise ValueError(f"direction must have shape ({dim}, {dim}), got {mat.shape}")
        self._direction = mat
        coeffs = np.array(coefficients, dtype=np.float64)
        expected = (prod(size), dim)
        if coeffs.shape != expected:
            raise ValueError(f"coefficients must have shape {expected}, got {coeffs.shape}")
        self._coefficients = coeffs

    @classmethod
    def from_spatial(
        cls,
        grid_size: tuple[int, ...],
        origin: ArrayLike,
        spacing: ArrayLike,
        direction: ArrayLike,
        coefficients: ArrayLike,
    ) -> BSplineTransform:
        """Build a transform from spatial metadata of the control grid.

        The direction matrix is laid out column by column into the grid's
        direction, so the stored matrix is its transpose.
        """
        mat = np.array(direction, dtype=np.float64)
        return cls(grid_size, origin, spacing, mat.T, coefficients)

    @property
    def dimension(self) -> int:
        return len(self._grid_size)

    @property
    def grid_size(self) -> tuple[int, ...]:
        return self._grid_size

    @property
    def origin(self) -> np.ndarray:
        return self._origin.copy()

    @property
    def spacing(self) -> np.ndarray:
        return self._spacing.copy()

    @property
    def direction(self) -> np.ndarray:
        return self._direction.copy()

    @property
    def coefficients(self) -> np.ndarray:
        return self._coefficients.copy()

    def world_to_grid(self, points: ArrayLike) -> np.ndarray:
        """Map physical points of shape ``(N, D)`` to continuous grid indices."""
        return world_to_grid(points, self._origin, self._spacing, self._direction)

    def transform_points(self, points: ArrayLike) -> np.ndarray:
        dim = self.dimension
        if dim not in _SUPPORTED_DIMENSIONS:
            raise ValueError("BSplineTransform only supports 2D and 3D")
        pts = _as_points(points, dim)
        size = np.array(self._grid_size)
        grid = self.world_to_grid(pts)

        valid = np.all((grid >= 0.0) & (grid <= size - 1), axis=1)

        floor = np.floor(grid)
        basis = bspline_basis(grid - floor)  # (N, D, 4)
        base = floor.astype(np.int64) - 1

        offsets = np.array(list(product(range(4), repeat=dim)))  # (K, D)
        weights = np.prod(basis[:, np.arange(dim)[np.newaxis, :], offsets], axis=-1)  # (N, K)

        indices = np.clip(base[:, np.newaxis, :] + offsets[np.newaxis, :, :], 0, size - 1)
        strides = np.concatenate(([1], np.cumprod(size[:-1])))
        flat = indices @ strides  # (N, K)

        displacement = np.sum(weights[..., np.newaxis] * self._coefficients[flat], axis=1)
        return pts + displacement * valid[:, np.newaxis]

    def __repr__(self) -> str:
        return (
            f"BSplineTransform(grid_size={self._grid_size}, origin={self._origin.tolist()}, "
            f"spacing={self._spacing.tolist()})"
        )