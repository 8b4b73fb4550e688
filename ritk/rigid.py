"""Rigid transform: rotation by Euler angles plus translation about a fixed center."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from ritk.base import Transform, _as_points, _as_vector

_ROTATION_PARAMETERS = {2: 1, 3: 3}


class RigidTransform(Transform):
    """Rotation plus translation about a fixed center: ``T(x) = R(x - c) + c + t``.

    In 2D the rotation is a single angle in radians. In 3D it holds three Euler
    angles ``(x, y, z)`` in radians, composed as ``R = Rz @ Ry @ Rx``.
    """

    def __init__(
        self,
        translation: ArrayLike,
        rotation: ArrayLike,
        center: ArrayLike | None = None,
    ) -> None:
        self._translation = _as_vector(translation, name="translation")
        dim = self._translation.shape[0]
        if dim not in _ROTATION_PARAMETERS:
            raise ValueError(f"RigidTransform only supports 2D and 3D, got {dim}D")
        self._rotation = _as_vector(rotation, _ROTATION_PARAMETERS[dim], "rotation")
        self._center = np.zeros(dim) if center is None else _as_vector(center, dim, "center")

    @classmethod
    def identity(cls, dimension: int, center: ArrayLike | None = None) -> RigidTransform:
        """Return a transform with no rotation and no translation."""
        if dimension not in _ROTATION_PARAMETERS:
            raise ValueError(f"RigidTransform only supports 2D and 3D, got {dimension}D")
        return cls(np.zeros(dimension), np.zeros(_ROTATION_PARAMETERS[dimension]), center)

    @property
    def dimension(self) -> int:
        return self._translation.shape[0]

    @property
    def translation(self) -> np.ndarray:
        return self._translation.copy()

    @property
    def rotation(self) -> np.ndarray:
        return self._rotation.copy()

    @property
    def center(self) -> np.ndarray:
        return self._center.copy()

    def rotation_matrix(self) -> np.ndarray:
        """Return the ``(D, D)`` rotation matrix built from the angles."""
        if self.dimension == 2:
            (theta,) = self._rotation
            c, s = np.cos(theta), np.sin(theta)
            return np.array([[c, -s], [s, c]])

        alpha, beta, gamma = self._rotation
        cx, sx = np.cos(alpha), np.sin(alpha)
        cy, sy = np.cos(beta), np.sin(beta)
        cz, sz = np.cos(gamma), np.sin(gamma)
        return np.array(
            [
                [cz * cy, cz * sy * sx - sz * cx, cz * sy * cx + sz * sx],
                [sz * cy, sz * sy * sx + cz * cx, sz * sy * cx - cz * sx],
                [-sy, cy * sx, cy * cx],
            ]
        )

    def transform_points(self, points: ArrayLike) -> np.ndarray:
        pts = _as_points(points, self.dimension)
        c = self._center[np.newaxis, :]
        return (pts - c) @ self.rotation_matrix().T + c + self._translation[np.newaxis, :]

    def __repr__(self) -> str:
        return (
            f"RigidTransform(translation={self._translation.tolist()}, "
            f"rotation={self._rotation.tolist()}, center={self._center.tolist()})"
        )