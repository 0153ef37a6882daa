# services/color_bin_service.py
from __future__ import annotations
import logging
import numpy as np

from ..models.color_bin import BinSteps, ColorBinKey, ColorBins
from ..models.errors import BinningConsistencyError
from ..models.lab_image import LabPlanes

logger = logging.getLogger(__name__)


class ColorBinService:
    """
    Groups foreground pixels by quantized (L, A, B).
    Steps and shapes are checked by the caller; nothing is validated here.
    """

    def bin_pixels(self, mask: np.ndarray, planes: LabPlanes, steps: BinSteps) -> ColorBins:
        """
        Args:
            mask (np.ndarray): (H, W), nonzero marks a foreground pixel.
            planes (LabPlanes): Lab planes of the same shape.
            steps (BinSteps): Quantization steps.

        Returns:
            (ColorBins): key → (N, 2) array of (row, col), row-major within a bin.
        """
        rows, cols = np.nonzero(mask)
        pixels = np.stack([rows, cols], axis=1).astype(np.int64)

        q_l, q_a, q_b = steps.quantize_arrays(*planes.values_at(pixels))
        keys = np.stack([q_l, q_a, q_b], axis=1)

        bins: ColorBins = {}
        if len(pixels):
            unique_keys, inverse = np.unique(keys, axis=0, return_inverse=True)
            inverse = inverse.reshape(-1)
            order = np.argsort(inverse, kind="stable")
            counts = np.bincount(inverse, minlength=len(unique_keys))
            groups = np.split(pixels[order], np.cumsum(counts)[:-1])
            for key, group in zip(unique_keys.tolist(), groups):
                bins[ColorBinKey(*key)] = group

        self._check_partition(bins, len(pixels))
        logger.debug("binned %d foreground pixels into %d bins", len(pixels), len(bins))
        return bins

    @staticmethod
    def _check_partition(bins: ColorBins, foreground: int) -> None:
        binned = sum(len(group) for group in bins.values())
        if binned != foreground:
            raise BinningConsistencyError(
                f"{binned} pixels binned but mask has {foreground} foreground pixels"
            )
