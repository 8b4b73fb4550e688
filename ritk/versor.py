"""Rigid 3D transform parameterised by a unit quaternion (versor)."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from ritk.base import Transform, _as_points, _as_vector


class VersorRigid3DTransform(Transform):
    """Quaternion rotation plus translation about a fixed center.

    ``T(x) = R(x - c) + c + t`` where ``R`` comes from the quaternion
    ``(x, y, z, w)``, normalised before use.
    """

    def __init__(
        self,
        translation: ArrayLike,
        rotation: ArrayLike,
        center: ArrayLike | None = None,
    ) -> None:
        self._translation = _as_vector(translation, 3, "translation")
        self._rotation = _as_vector(rotation, 4, "rotation")
        self._center = np.zeros(3) if center is None else _as_vector(center, 3, "center")

    @property
    def dimension(self) -> int:
        return 3

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
        """Return the ``(3, 3)`` rotation matrix of the normalised quaternion."""
        norm = np.sqrt(np.sum(self._rotation**2)) + 1e-12
        x, y, z, w = self._rotation / norm
        xx, yy, zz = x * x, y * y, z * z
        xy, xz, yz = x * y, x * z, y * z
        xw, yw, zw = x * w, y * w, z * w
        return np.array(
            [
                [1.0 - 2.0 * (yy + zz), 2.0 * (xy - zw), 2.0 * (xz + yw)],
                [2.0 * (xy + zw), 1.0 - 2.0 * (xx + zz), 2.0 * (yz - xw)],
                [2.0 * (xz - yw), 2.0 * (yz + xw), 1.0 - 2.0 * (xx + yy)],
            ]
        )

    def transform_points(self, points: ArrayLike) -> np.ndarray:
        pts = _as_points(points, 3)
        c = self._center[np.newaxis, :]
        return (pts - c) @ self.rotation_matrix().T + c + self._translation[np.newaxis, :]

    def __repr__(self) -> str:
        return (
            f"VersorRigid3DTransform(translation={self._translation.tolist()}, "
            f"rotation={self._rotation.tolist()}, center={self._center.tolist()})"
        )