from __future__ import annotations
from dataclasses import dataclass
import numpy as np

from .color_bin import ColorBinKey


@dataclass
class ConnectedComponent:
    """
    8-connected group of pixels from one color bin.
    Label 0 is background and never becomes a component.
    """
    key: ColorBinKey      # bin the pixels were taken from
    label: int            # 1..N as returned by the labeling primitive
    pixels: np.ndarray    # Shape (N, 2), int (row, col)

    def __len__(self) -> int:
        return len(self.pixels)
