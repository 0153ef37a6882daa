# models/labeling_engine.py
"""
Singleton wrapper around OpenCV connected-component labeling.

• cv2.connectedComponents() is internally multithreaded and must not be
  entered by several Python threads at once; callers serialize on
  LabelingEngine.call_lock.
• Exposes .label(binary)  →  (count, labels) with labels 1..count-1, 0 = background.
"""
from __future__ import annotations
import threading
from typing import Callable, Tuple
import cv2
import numpy as np

# (binary uint8 image) -> (component count incl. background, int32 label image)
LabelFn = Callable[[np.ndarray], Tuple[int, np.ndarray]]


class LabelingEngine:

    _instance: "LabelingEngine" | None = None
    _lock = threading.RLock()       # guards singleton construction
    call_lock = threading.Lock()    # process-wide: one labeling call at a time

    def __new__(cls, connectivity: int = 8):
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._init_runtime(connectivity)
            return cls._instance

    # --------------------------------------------------
    def _init_runtime(self, connectivity: int) -> None:
        self.connectivity = connectivity

    # --------------------------------------------------
    def label(self, binary: np.ndarray) -> Tuple[int, np.ndarray]:
        """
        Args
        ----
        binary : np.ndarray  (H, W)  uint8, nonzero = foreground

        Returns
        -------
        count  : int  number of labels including background
        labels : np.ndarray  (H, W)  int32
        """
        count, labels = cv2.connectedComponents(binary, connectivity=self.connectivity)
        return int(count), labels
