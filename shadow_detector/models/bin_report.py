from __future__ import annotations
from dataclasses import dataclass

from .color_bin import ColorBinKey


@dataclass
class BinReport:
    """Diagnostics for one processed bin."""
    key: ColorBinKey
    total_pixels: int
    num_components: int
    shadow_components: int
    shadow_pixels: int
    elapsed_ms: float

    def describe(self) -> str:
        l, a, b = self.key
        return (f"Bin ({l}, {a}, {b}) -> totPixels: {self.total_pixels}, "
                f"totCC: {self.num_components}, shadowCC: {self.shadow_components}. "
                f"Done in {self.elapsed_ms:.0f} ms")


@dataclass
class BinFailure:
    """A bin whose task raised; its pixels did not reach the result."""
    key: ColorBinKey
    total_pixels: int
    error: BaseException
