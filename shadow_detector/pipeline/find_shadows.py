# pipeline/find_shadows.py
from __future__ import annotations
import logging
from typing import Tuple, Union

import numpy as np

from ..models.color_bin import BinSteps
from ..models.detection_result import DetectionResult
from ..models.errors import BinProcessingError, DimensionMismatchError
from ..models.lab_image import LabPlanes
from ..models.labeling_engine import LabelFn
from ..repositories.component_repository import ComponentRepository
from ..services.color_bin_service import ColorBinService
from .bin_worker_pool import BinObserver, BinWorkerPool

logger = logging.getLogger(__name__)


def coerce_steps(steps: Union[BinSteps, Tuple[int, int, int]]) -> BinSteps:
    if not isinstance(steps, BinSteps):
        steps = BinSteps(*steps)
    return steps.validate()


def find_shadows(
    planes: LabPlanes,
    mask: np.ndarray,
    steps: Union[BinSteps, Tuple[int, int, int]] = BinSteps(),
    *,
    workers: int | None = None,
    scheduling: str | None = None,
    label_fn: LabelFn | None = None,
    observer: BinObserver | None = None,
    strict: bool = True,
    color_bin_service: ColorBinService = ColorBinService(),
) -> DetectionResult:
    """
    Classify the foreground pixels of *mask* as shadow / non-shadow:
        • validate steps and shapes (nothing runs if either is wrong)
        • group foreground pixels into (L, A, B) color bins
        • process the bins on a BinWorkerPool
    Raises BinProcessingError after all bins finished if any bin failed
    and *strict* is set; otherwise failures are only returned.
    """
    steps = coerce_steps(steps)
    mask = np.asarray(mask)
    if mask.shape != planes.shape:
        raise DimensionMismatchError(
            f"mask shape {mask.shape} does not match planes shape {planes.shape}"
        )

    pool = BinWorkerPool(
        planes,
        steps,
        workers=workers,
        scheduling=scheduling,
        component_repository=ComponentRepository(label_fn),
        observer=observer,
    )

    bins = color_bin_service.bin_pixels(mask, planes, steps)
    logger.info(f"labMap created. labMap size: {len(bins)}")

    result = pool.run(bins)
    logger.info(f"{result.shadow_pixels} shadow pixels from "
                f"{sum(r.shadow_components for r in result.reports)} components")

    if result.failures and strict:
        raise BinProcessingError(result.failures)
    return result
