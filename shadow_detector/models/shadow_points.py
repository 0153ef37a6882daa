# models/shadow_points.py
from __future__ import annotations
import threading
from typing import FrozenSet, List, Tuple
import numpy as np


class ShadowPointSet:
    """
    Append-only collection of shadow pixels shared by all worker tasks.

    • add_component() appends one whole component under the lock,
      so a reader never sees half a component.
    • Read it once, after every task has joined.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._chunks: List[np.ndarray] = []

    # ───────────────────────── writers
    def add_component(self, pixels: np.ndarray) -> None:
        chunk = np.asarray(pixels, dtype=np.int64).reshape(-1, 2)
        with self._lock:
            self._chunks.append(chunk)

    # ───────────────────────── readers
    def __len__(self) -> int:
        """Number of distinct shadow pixels."""
        return len(self.to_array())

    def to_array(self) -> np.ndarray:
        """Unique (row, col) pairs, row-major order. Shape (N, 2)."""
        with self._lock:
            if not self._chunks:
                return np.zeros((0, 2), dtype=np.int64)
            stacked = np.concatenate(self._chunks, axis=0)
        return np.unique(stacked, axis=0)

    def as_set(self) -> FrozenSet[Tuple[int, int]]:
        return frozenset(map(tuple, self.to_array().tolist()))

    def __contains__(self, point) -> bool:
        return tuple(point) in self.as_set()

    def to_mask(self, shape: Tuple[int, int]) -> np.ndarray:
        """
        Render as uint8 mask (H, W): 255 = shadow, 0 otherwise.
        """
        mask = np.zeros(shape, dtype=np.uint8)
        points = self.to_array()
        if len(points):
            mask[points[:, 0], points[:, 1]] = 255
        return mask
