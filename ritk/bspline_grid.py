"""Helpers for cubic B-spline control grids: basis weights and index mapping."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from ritk.base import _as_points, _as_vector

_SINGULAR_TOLERANCE = 1e-10


def bspline_basis(u: ArrayLike) -> np.ndarray:
    """Return the four cubic B-spline weights for each fractional offset.

    ``u`` holds offsets in ``[0, 1)``; the result has shape ``u.shape + (4,)``
    with the weights ``(B0, B1, B2, B3)`` along the last axis.
    """
    u = np.asarray(u, dtype=np.float64)
    u2 = u * u
    u3 = u2 * u
    b0 = (1.0 - u) ** 3 / 6.0
    b1 = (3.0 * u3 - 6.0 * u2 + 4.0) / 6.0
    b2 = (-3.0 * u3 + 3.0 * u2 + 3.0 * u + 1.0) / 6.0
    b3 = u3 / 6.0
    return np.stack([b0, b1, b2, b3], axis=-1)


def inverse_direction(direction: ArrayLike) -> np.ndarray:
    """Invert a 2x2 or 3x3 direction matrix.

    A singular matrix, or a matrix of any other size, yields the identity.
    """
    mat = np.array(direction, dtype=np.float64)
    if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
        raise ValueError(f"direction must be a square matrix, got shape {mat.shape}")
    dim = mat.shape[0]
    if dim not in (2, 3):
        return np.eye(dim)
    if abs(np.linalg.det(mat)) < _SINGULAR_TOLERANCE:
        return np.eye(dim)
    return np.linalg.inv(mat)


def world_to_grid(
    points: ArrayLike,
    origin: ArrayLike,
    spacing: ArrayLike,
    direction: ArrayLike,
) -> np.ndarray:
    """Map physical points of shape ``(N, D)`` to continuous grid indices.

    The grid places index ``i`` at ``origin + direction @ (spacing * i)``.
    """
    origin_vec = _as_vector(origin, name="origin")
    dim = origin_vec.shape[0]
    spacing_vec = _as_vector(spacing, dim, "spacing")
    mat = np.array(direction, dtype=np.float64)
    if mat.shape != (dim, dim):
        raise ValueError(f"direction must have shape ({dim}, {dim}), got {mat.shape}")
    pts = _as_points(points, dim)
    inv = inverse_direction(mat)
    to_index = inv.T / spacing_vec[np.newaxis, :]
    return (pts - origin_vec[np.newaxis, :]) @ to_index