# pipeline/bin_worker_pool.py
from __future__ import annotations
import logging
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed, wait
from typing import Callable, List, Tuple

import numpy as np
from dotenv import load_dotenv

from ..models.bin_report import BinFailure, BinReport
from ..models.color_bin import BinSteps, ColorBinKey, ColorBins
from ..models.detection_result import DetectionResult
from ..models.lab_image import LabPlanes
from ..models.shadow_points import ShadowPointSet
from ..repositories.component_repository import ComponentRepository
from ..services.border_service import BorderService
from ..services.shadow_classifier_service import ShadowClassifierService

logger = logging.getLogger(__name__)

# env‑vars
load_dotenv()
WORKERS = int(os.getenv("SHADOW_WORKERS") or os.cpu_count() or 1)
SCHEDULING = os.getenv("SHADOW_SCHEDULING", "continuous")
SCHEDULING_MODES = ("continuous", "wave")

BinObserver = Callable[[BinReport], None]


def log_bin_report(report: BinReport) -> None:
    logger.debug(report.describe())


class BinWorkerPool:
    """
    Runs one task per color bin on a bounded set of worker threads.

    • continuous: fixed workers pull the next bin as soon as they are free.
    • wave:       launch `workers` bins, wait for all of them, launch the next batch.

    Shadow components go into one shared ShadowPointSet; the labeling
    primitive is serialized inside ComponentRepository. Those two locks
    are never held together.
    """

    def __init__(
        self,
        planes: LabPlanes,
        steps: BinSteps,
        *,
        workers: int | None = None,
        scheduling: str | None = None,
        component_repository: ComponentRepository | None = None,
        border_service: BorderService | None = None,
        classifier: ShadowClassifierService | None = None,
        observer: BinObserver | None = None,
    ) -> None:
        self.workers = WORKERS if workers is None else workers
        self.scheduling = scheduling or SCHEDULING
        if isinstance(self.workers, bool) or not isinstance(self.workers, int) or self.workers < 1:
            raise ValueError(f"workers must be a positive integer, got {self.workers!r}")
        if self.scheduling not in SCHEDULING_MODES:
            raise ValueError(f"scheduling must be one of {SCHEDULING_MODES}, got {self.scheduling!r}")

        self.planes = planes
        self.steps = steps
        self.component_repository = component_repository or ComponentRepository()
        self.border_service = border_service or BorderService()
        self.classifier = classifier or ShadowClassifierService(planes, steps)
        self.observer = observer or log_bin_report
        self._report_lock = threading.Lock()

    # ───────────────────────── one bin
    def process_bin(self, key: ColorBinKey, pixels: np.ndarray, points: ShadowPointSet) -> BinReport:
        """
        Extract components, classify each, then append every shadow component
        to *points*. Nothing is appended unless all components were classified.
        """
        start = time.perf_counter()
        shape = self.planes.shape

        components = self.component_repository.extract(key, pixels, shape)
        shadows = [
            comp for comp in components
            if self.classifier.is_shadow(key, self.border_service.trace(comp.pixels, shape))
        ]
        for comp in shadows:
            points.add_component(comp.pixels)

        return BinReport(
            key=key,
            total_pixels=len(pixels),
            num_components=len(components),
            shadow_components=len(shadows),
            shadow_pixels=sum(len(c) for c in shadows),
            elapsed_ms=(time.perf_counter() - start) * 1000.0,
        )

    def _run_task(self, key, pixels, points, reports, failures) -> None:
        try:
            report = self.process_bin(key, pixels, points)
        except Exception as err:
            logger.exception("bin %s failed (%d pixels lost)", tuple(key), len(pixels))
            with self._report_lock:
                failures.append(BinFailure(key=key, total_pixels=len(pixels), error=err))
            return

        with self._report_lock:
            reports.append(report)
            try:
                self.observer(report)
            except Exception:
                logger.exception("observer failed for bin %s", tuple(key))

    # ───────────────────────── scheduling
    def _run_continuous(self, items, *task_state) -> None:
        with ThreadPoolExecutor(max_workers=self.workers,
                                thread_name_prefix="bin-worker") as executor:
            futures = [executor.submit(self._run_task, key, pixels, *task_state)
                       for key, pixels in items]
            for future in as_completed(futures):
                future.result()

    def _run_waves(self, items, *task_state) -> None:
        with ThreadPoolExecutor(max_workers=self.workers,
                                thread_name_prefix="bin-wave") as executor:
            for start in range(0, len(items), self.workers):
                batch = items[start:start + self.workers]
                futures = [executor.submit(self._run_task, key, pixels, *task_state)
                           for key, pixels in batch]
                wait(futures)
                for future in futures:
                    future.result()
                logger.debug("wave %d done (%d bins)", start // self.workers + 1, len(batch))

    # ───────────────────────── public API
    def run(self, bins: ColorBins, points: ShadowPointSet | None = None) -> DetectionResult:
        """
        Process every bin exactly once and return the aggregated result.
        Bins that raise are reported in `failures`; the others still complete.
        """
        if points is None:
            points = ShadowPointSet()
        reports: List[BinReport] = []
        failures: List[BinFailure] = []
        items: List[Tuple[ColorBinKey, np.ndarray]] = list(bins.items())

        logger.info("processing %d bins with %d %s worker(s)",
                    len(items), self.workers, self.scheduling)
        if self.scheduling == "wave":
            self._run_waves(items, points, reports, failures)
        else:
            self._run_continuous(items, points, reports, failures)

        return DetectionResult(points=points, shape=self.planes.shape,
                               reports=reports, failures=failures)
