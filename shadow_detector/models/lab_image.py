from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple
import numpy as np

from .errors import DimensionMismatchError


@dataclass
class LabPlanes:
    """
    Simple data object: the three single-channel Lab planes of one image
    (+ optional source path for bookkeeping).
    Planes are treated as read-only once built.
    """
    l: np.ndarray  # Shape (H, W), values in [0, 255]
    a: np.ndarray  # Shape (H, W), values in [0, 255]
    b: np.ndarray  # Shape (H, W), values in [0, 255]
    path: Path | None = None  # Source of the image.

    def __post_init__(self):
        shapes = {self.l.shape, self.a.shape, self.b.shape}
        if len(shapes) != 1:
            raise DimensionMismatchError(
                f"L, A, B planes differ in shape: "
                f"{self.l.shape}, {self.a.shape}, {self.b.shape}"
            )
        if self.l.ndim != 2:
            raise DimensionMismatchError(
                f"Lab planes must be 2-D, got shape {self.l.shape}"
            )

    @property
    def shape(self) -> Tuple[int, int]:
        return self.l.shape

    def values_at(self, pixels: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Raw L, A, B values at an (N, 2) array of (row, col)."""
        rows, cols = pixels[:, 0], pixels[:, 1]
        return self.l[rows, cols], self.a[rows, cols], self.b[rows, cols]

    def merged(self) -> np.ndarray:
        """Stack back into one (H, W, 3) Lab image."""
        return np.dstack([self.l, self.a, self.b])
