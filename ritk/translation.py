"""Pure translation transform."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from ritk.base import Transform, _as_points, _as_vector


class TranslationTransform(Transform):
    """Translates points by a fixed offset vector."""

    def __init__(self, translation: ArrayLike) -> None:
        self._translation = _as_vector(translation, name="translation")

    @property
    def dimension(self) -> int:
        return self._translation.shape[0]

    @property
    def translation(self) -> np.ndarray:
        return self._translation.copy()

    def transform_points(self, points: ArrayLike) -> np.ndarray:
        pts = _as_points(points, self.dimension)
        return pts + self._translation[np.newaxis, :]

    def __repr__(self) -> str:
        return f"TranslationTransform(translation={self._translation.tolist()})"