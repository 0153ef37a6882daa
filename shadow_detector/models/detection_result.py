from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple
import numpy as np

from .bin_report import BinFailure, BinReport
from .shadow_points import ShadowPointSet


@dataclass
class DetectionResult:
    """
    Data object containing the shadow points of one image and the
    per-bin diagnostics collected while computing them.
    """
    points: ShadowPointSet
    shape: Tuple[int, int]
    reports: List[BinReport] = field(default_factory=list)
    failures: List[BinFailure] = field(default_factory=list)
    output_path: Path | None = None  # Where the final mask was written, if it was.

    @property
    def mask(self) -> np.ndarray:
        return self.points.to_mask(self.shape)

    @property
    def shadow_pixels(self) -> int:
        return len(self.points)
