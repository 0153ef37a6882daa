from typing import Tuple
import numpy as np

from ..models.shadow_points import ShadowPointSet


class MaskService:
    """Turns collected shadow points into a displayable mask."""

    @staticmethod
    def render(points: ShadowPointSet, shape: Tuple[int, int]) -> np.ndarray:
        return points.to_mask(shape)

    @staticmethod
    def to_displayable(mask: np.ndarray) -> np.ndarray:
        """
        Stretch any nonzero mask to uint8 0/255 for saving.
        """
        return np.where(np.asarray(mask) != 0, 255, 0).astype(np.uint8)

    @staticmethod
    def count_marked(mask: np.ndarray) -> int:
        return int(np.count_nonzero(mask))
