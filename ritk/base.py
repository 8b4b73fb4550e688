"""Core interfaces shared by all spatial coordinate transforms."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np
from numpy.typing import ArrayLike


class Transform(ABC):
    """Maps batches of points from one physical space to another."""

    @abstractmethod
    def transform_points(self, points: ArrayLike) -> np.ndarray:
        """Apply the transform to points of shape ``(N, D)``."""

    def inverse(self) -> Transform | None:
        """Return the inverse transform, or ``None`` when none is available."""
        return None


class Resampleable(ABC):
    """A transform that can be adapted to a new image grid."""

    @abstractmethod
    def resample(
        self,
        shape: tuple[int, ...],
        origin: ArrayLike,
        spacing: ArrayLike,
        direction: ArrayLike,
    ) -> Any:
        """Return a new instance of the transform adapted to the given grid."""


def _as_vector(values: ArrayLike, dimension: int | None = None, name: str = "vector") -> np.ndarray:
    """Copy ``values`` into a float vector, checking its length."""
    arr = np.array(values, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional, got shape {arr.shape}")
    if dimension is not None and arr.shape[0] != dimension:
        raise ValueError(f"{name} must have length {dimension}, got {arr.shape[0]}")
    return arr


def _as_points(points: ArrayLike, dimension: int) -> np.ndarray:
    """View ``points`` as a float array of shape ``(N, dimension)``."""
    arr = np.asarray(points, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != dimension:
        raise ValueError(f"points must have shape (N, {dimension}), got {arr.shape}")
    return arr