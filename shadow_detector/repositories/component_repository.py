# repositories/component_repository.py
from __future__ import annotations
import logging
from typing import List, Tuple
import numpy as np

from ..models.color_bin import ColorBinKey
from ..models.component import ConnectedComponent
from ..models.errors import ComponentExtractionError
from ..models.labeling_engine import LabelFn, LabelingEngine

logger = logging.getLogger(__name__)


class ComponentRepository:
    """
    Splits one color bin into its 8-connected components.

    • Calls the labeling primitive once per non-empty bin.
    • Every call, injected or default, runs under LabelingEngine.call_lock.
    """

    def __init__(self, label_fn: LabelFn | None = None) -> None:
        self.label_fn: LabelFn = label_fn or LabelingEngine().label

    # ---------- private helpers ----------
    @staticmethod
    def _render(pixels: np.ndarray, shape: Tuple[int, int]) -> np.ndarray:
        binary = np.zeros(shape, dtype=np.uint8)
        binary[pixels[:, 0], pixels[:, 1]] = 255
        return binary

    def _label(self, binary: np.ndarray) -> Tuple[int, np.ndarray]:
        with LabelingEngine.call_lock:
            return self.label_fn(binary)

    # ---------- public API ----------
    def extract(
        self,
        key: ColorBinKey,
        pixels: np.ndarray,
        shape: Tuple[int, int],
    ) -> List[ConnectedComponent]:
        """
        Returns the components of *pixels*, ordered by label (1..N).
        An empty bin gives an empty list without touching the primitive.
        """
        pixels = np.asarray(pixels, dtype=np.int64).reshape(-1, 2)
        if len(pixels) == 0:
            return []

        count, labels = self._label(self._render(pixels, shape))

        pixel_labels = np.asarray(labels)[pixels[:, 0], pixels[:, 1]].astype(np.int64)
        if np.any(pixel_labels <= 0) or np.any(pixel_labels >= count):
            raise ComponentExtractionError(
                f"bin {tuple(key)}: labeling returned {count} labels but "
                f"pixel labels span [{pixel_labels.min()}, {pixel_labels.max()}]"
            )

        # stable sort keeps each component's pixels in bin order
        order = np.argsort(pixel_labels, kind="stable")
        sorted_labels = pixel_labels[order]
        present, starts = np.unique(sorted_labels, return_index=True)
        groups = np.split(pixels[order], starts[1:])

        components = [
            ConnectedComponent(key=key, label=int(lbl), pixels=grp)
            for lbl, grp in zip(present, groups)
        ]
        logger.debug("bin %s: %d pixels → %d components",
                     tuple(key), len(pixels), len(components))
        return components
