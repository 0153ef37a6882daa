# models/errors.py
from __future__ import annotations
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .bin_report import BinFailure


class ShadowDetectionError(Exception):
    """Base class for every error raised by the detector."""


class InvalidStepError(ShadowDetectionError, ValueError):
    """A quantization step is not a strictly positive integer."""


class DimensionMismatchError(ShadowDetectionError, ValueError):
    """Channel planes and mask do not share the same 2-D shape."""


class BinningConsistencyError(ShadowDetectionError):
    """Binned pixel count disagrees with the foreground pixel count."""


class ComponentExtractionError(ShadowDetectionError):
    """Labeling output does not cover the bin it was computed for."""


class BinProcessingError(ShadowDetectionError):
    """
    One or more bins failed while the worker pool was running.
    The remaining bins were still processed; `failures` lists the lost ones.
    """

    def __init__(self, failures: List["BinFailure"]):
        self.failures = list(failures)
        keys = ", ".join(str(tuple(f.key)) for f in self.failures)
        super().__init__(f"{len(self.failures)} bin(s) failed: {keys}")
