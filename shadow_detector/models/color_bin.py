# models/color_bin.py
from __future__ import annotations
from dataclasses import dataclass
from numbers import Integral
from typing import Dict, NamedTuple, Tuple

import numpy as np

from .errors import InvalidStepError


class ColorBinKey(NamedTuple):
    """Quantized (L, A, B) coordinates shared by every pixel of one bin."""
    l: int
    a: int
    b: int


# key -> (N, 2) int array of (row, col)
ColorBins = Dict[ColorBinKey, np.ndarray]


def _ceil_div(values: np.ndarray, step: int) -> np.ndarray:
    # exact ceil(v / step) on integers, no float round-off
    return -(-values.astype(np.int64) // step)


@dataclass(frozen=True)
class BinSteps:
    """
    Quantization steps for the three Lab channels.
    A channel value v falls in bin ceil(v / step).
    """
    l_step: int = 10
    a_step: int = 10
    b_step: int = 10

    # ── validation ───────────────────────────────────────────────────
    def validate(self) -> "BinSteps":
        for name, step in self.as_dict().items():
            if isinstance(step, bool) or not isinstance(step, Integral):
                raise InvalidStepError(f"{name} must be an integer, got {step!r}")
            if step <= 0:
                raise InvalidStepError(f"{name} must be positive, got {step}")
        return self

    def as_dict(self) -> Dict[str, int]:
        return {"l_step": self.l_step, "a_step": self.a_step, "b_step": self.b_step}

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.l_step, self.a_step, self.b_step

    # ── quantization ─────────────────────────────────────────────────
    def quantize(self, l_value: int, a_value: int, b_value: int) -> ColorBinKey:
        """Quantize a single (L, A, B) triplet."""
        return ColorBinKey(
            int(_ceil_div(np.asarray(l_value), self.l_step)),
            int(_ceil_div(np.asarray(a_value), self.a_step)),
            int(_ceil_div(np.asarray(b_value), self.b_step)),
        )

    def quantize_arrays(
        self, l_values: np.ndarray, a_values: np.ndarray, b_values: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Element-wise quantization of three same-shaped arrays."""
        return (
            _ceil_div(l_values, self.l_step),
            _ceil_div(a_values, self.a_step),
            _ceil_div(b_values, self.b_step),
        )
