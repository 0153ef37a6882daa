# services/shadow_classifier_service.py
from __future__ import annotations
import numpy as np

from ..models.color_bin import BinSteps, ColorBinKey
from ..models.lab_image import LabPlanes


class ShadowClassifierService:
    """
    Decides shadow vs. object for one component from its border.

    A component is a shadow cast on a uniformly coloured surface when some
    border pixel has the same quantized chroma but is strictly lighter.
    Bins with quantized lightness 0 are never shadows.
    """

    def __init__(self, planes: LabPlanes, steps: BinSteps) -> None:
        self.planes = planes
        self.steps = steps

    def is_shadow(self, key: ColorBinKey, border: np.ndarray) -> bool:
        """
        Args:
            key (ColorBinKey): Quantized (L, A, B) of the component.
            border (np.ndarray): (M, 2) border pixels.

        Returns:
            True if at least one border pixel is lighter with identical chroma.
        """
        l, a, b = key
        border = np.asarray(border, dtype=np.int64).reshape(-1, 2)
        if l <= 0 or len(border) == 0:
            return False

        b_l, b_a, b_b = self.steps.quantize_arrays(*self.planes.values_at(border))
        return bool(np.any((b_l > l) & (b_a == a) & (b_b == b)))
