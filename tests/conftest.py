import numpy as np
import pytest

from shadow_detector.models.color_bin import BinSteps
from shadow_detector.models.lab_image import LabPlanes

STEPS = BinSteps(10, 10, 10)
CHROMA = 128  # ceil(128 / 10) = 13


def square_scene(component_l: int, border_l: int, size: int = 11, top: int = 3, side: int = 5):
    """
    size x size image: a side x side patch at (top, top) with lightness
    component_l, everything else border_l, uniform chroma. Only the patch
    is foreground.
    """
    l = np.full((size, size), border_l, dtype=np.uint8)
    l[top:top + side, top:top + side] = component_l
    a = np.full((size, size), CHROMA, dtype=np.uint8)
    b = np.full((size, size), CHROMA, dtype=np.uint8)
    mask = np.zeros((size, size), dtype=np.uint8)
    mask[top:top + side, top:top + side] = 1
    return LabPlanes(l=l, a=a, b=b), mask


def random_scene(seed: int = 0, shape=(40, 50)):
    rng = np.random.default_rng(seed)
    # coarse blocks so bins form real connected regions
    coarse = (shape[0] // 5 + 1, shape[1] // 5 + 1)
    blocks = [rng.integers(0, 256, size=coarse, dtype=np.uint8) for _ in range(3)]
    l, a, b = (np.kron(blk, np.ones((5, 5), dtype=np.uint8))[:shape[0], :shape[1]]
               for blk in blocks)
    noise = rng.integers(0, 12, size=shape, dtype=np.uint8)
    l = np.clip(l.astype(np.int32) + noise, 0, 255).astype(np.uint8)
    mask = (rng.random(shape) < 0.7).astype(np.uint8)
    return LabPlanes(l=l, a=a, b=b), mask


@pytest.fixture
def steps():
    return STEPS
