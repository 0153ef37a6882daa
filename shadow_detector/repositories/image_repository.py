from pathlib import Path
from typing import Union
import numpy as np
import cv2
from PIL import Image as PILImage
import logging

logger = logging.getLogger(__name__)


class ImageRepository:
    """
    Handles file I/O for source photographs and result planes/masks.
    """

    @staticmethod
    def load(path: Union[str, Path], rgb: bool = True) -> np.ndarray:
        """
        Returns uint8 pixels (H, W, 3), RGB order unless rgb=False.
        """
        path = Path(path)
        arr_bgr = cv2.imread(str(path))
        if arr_bgr is None:
            raise FileNotFoundError(f"Image not found or unreadable: {path}")
        return np.ascontiguousarray(arr_bgr[:, :, ::-1]) if rgb else arr_bgr

    @staticmethod
    def save(pixels: np.ndarray, path: Union[str, Path]) -> Path:
        """
        Save a uint8 plane (H, W) or RGB image (H, W, 3).
        Parent directories are created as needed.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        if not pixels.flags['C_CONTIGUOUS']:
            pixels = np.ascontiguousarray(pixels)
        PILImage.fromarray(pixels.astype(np.uint8)).save(path)
        logger.debug("saved %s", path)
        return path
