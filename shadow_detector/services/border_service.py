# services/border_service.py
from __future__ import annotations
from typing import Tuple
import numpy as np

# 8-neighbourhood, centre excluded
_OFFSETS = [(dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)]


class BorderService:
    """
    Computes the ring of pixels around a connected component.

    • Component pixels on the image edge contribute no neighbours, so a
      component touching the edge gets an incomplete border.
    • Neighbours of interior pixels are kept even if they sit on the edge.
    """

    @staticmethod
    def trace(pixels: np.ndarray, shape: Tuple[int, int]) -> np.ndarray:
        """
        Args:
            pixels (np.ndarray): (N, 2) component pixels (row, col).
            shape (tuple): Image (rows, cols).

        Returns:
            (np.ndarray): (M, 2) unique border pixels, row-major order.
        """
        pixels = np.asarray(pixels, dtype=np.int64).reshape(-1, 2)
        n_rows, n_cols = shape
        if len(pixels) == 0:
            return np.zeros((0, 2), dtype=np.int64)

        rows, cols = pixels[:, 0], pixels[:, 1]
        interior = (rows > 0) & (cols > 0) & (rows < n_rows - 1) & (cols < n_cols - 1)

        # work on the bounding box grown by one pixel
        r0, c0 = max(rows.min() - 1, 0), max(cols.min() - 1, 0)
        r1, c1 = min(rows.max() + 1, n_rows - 1), min(cols.max() + 1, n_cols - 1)
        member = np.zeros((r1 - r0 + 1, c1 - c0 + 1), dtype=bool)
        member[rows - r0, cols - c0] = True

        visited = np.zeros_like(member)
        src_r, src_c = rows[interior] - r0, cols[interior] - c0
        for dr, dc in _OFFSETS:
            visited[src_r + dr, src_c + dc] = True
        visited &= ~member

        border_r, border_c = np.nonzero(visited)
        return np.stack([border_r + r0, border_c + c0], axis=1).astype(np.int64)
