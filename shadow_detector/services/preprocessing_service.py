from __future__ import annotations
import logging
import os
import cv2
import numpy as np
from dotenv import load_dotenv

from ..models.lab_image import LabPlanes

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()


class PreprocessingService:
    """
    Prepares the inputs of the shadow classifier from an RGB photo.
    *   No I/O here, works only with numpy arrays.
    """

    def __init__(self):
        self.BILATERAL_DIAMETER = int(os.getenv("BILATERAL_DIAMETER", "5"))
        self.BILATERAL_SIGMA_COLOR = float(os.getenv("BILATERAL_SIGMA_COLOR", "80"))
        self.BILATERAL_SIGMA_SPACE = float(os.getenv("BILATERAL_SIGMA_SPACE", "80"))

    @staticmethod
    def to_lab(rgb: np.ndarray) -> LabPlanes:
        """
        Receives uint8 RGB pixels (H, W, 3) and returns the 8-bit L, A, B planes.
        """
        lab = cv2.cvtColor(rgb, cv2.COLOR_RGB2Lab)
        l, a, b = cv2.split(lab)
        return LabPlanes(l=l, a=a, b=b)

    def _bilateral(self, plane: np.ndarray) -> np.ndarray:
        return cv2.bilateralFilter(plane, self.BILATERAL_DIAMETER,
                                   self.BILATERAL_SIGMA_COLOR,
                                   self.BILATERAL_SIGMA_SPACE)

    def smooth(self, planes: LabPlanes) -> LabPlanes:
        """
        Edge-preserving noise reduction, applied to each plane on its own.
        """
        return LabPlanes(
            l=self._bilateral(planes.l),
            a=self._bilateral(planes.a),
            b=self._bilateral(planes.b),
            path=planes.path,
        )

    @staticmethod
    def background_light_mask(l_plane: np.ndarray) -> np.ndarray:
        """
        Marks pixels darker than the mean lightness ("background light").

        Returns:
            (np.ndarray): uint8 mask (H, W); candidate pixels hold 1 + L
            (always nonzero), the rest 0.
        """
        avg_l = float(np.mean(l_plane))
        logger.info(f"average L value {avg_l:.2f}")

        l16 = l_plane.astype(np.int16)
        candidates = (l16 - avg_l) < 0
        mask = np.where(candidates, l16 + 1, 0).astype(np.uint8)
        logger.debug(f"background-light mask: {int(candidates.sum())} candidate pixels")
        return mask
