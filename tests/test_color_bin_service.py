import numpy as np
import pytest

from shadow_detector.models.color_bin import BinSteps, ColorBinKey
from shadow_detector.models.errors import BinningConsistencyError, InvalidStepError
from shadow_detector.models.lab_image import LabPlanes
from shadow_detector.services.color_bin_service import ColorBinService

from conftest import random_scene


def test_quantize_uses_ceiling():
    steps = BinSteps(10, 10, 10)
    assert steps.quantize(25, 0, 10) == (3, 0, 1)
    assert steps.quantize(30, 1, 255) == ColorBinKey(3, 1, 26)


def test_quantize_arrays_matches_scalar():
    steps = BinSteps(7, 3, 16)
    values = np.arange(256, dtype=np.uint8)
    q_l, q_a, q_b = steps.quantize_arrays(values, values, values)
    for v in (0, 1, 6, 7, 8, 100, 255):
        assert (q_l[v], q_a[v], q_b[v]) == tuple(steps.quantize(v, v, v))


@pytest.mark.parametrize("bad", [(0, 10, 10), (10, -1, 10), (10, 10, 2.5), (True, 1, 1)])
def test_validate_rejects_bad_steps(bad):
    with pytest.raises(InvalidStepError):
        BinSteps(*bad).validate()


def test_bins_partition_foreground():
    planes, mask = random_scene(seed=3)
    bins = ColorBinService().bin_pixels(mask, planes, BinSteps(20, 15, 15))

    fg = set(zip(*np.nonzero(mask)))
    seen = [tuple(p) for group in bins.values() for p in group.tolist()]
    assert len(seen) == len(fg)
    assert set(seen) == fg


def test_every_pixel_lands_in_its_own_key():
    planes, mask = random_scene(seed=5)
    steps = BinSteps(20, 15, 15)
    bins = ColorBinService().bin_pixels(mask, planes, steps)
    for key, group in bins.items():
        for r, c in group.tolist():
            assert steps.quantize(planes.l[r, c], planes.a[r, c], planes.b[r, c]) == key


def test_empty_mask_gives_no_bins(steps):
    planes = LabPlanes(*(np.zeros((4, 4), dtype=np.uint8) for _ in range(3)))
    assert ColorBinService().bin_pixels(np.zeros((4, 4)), planes, steps) == {}


def test_nonzero_mask_values_all_count_as_foreground(steps):
    planes = LabPlanes(*(np.full((2, 2), 40, dtype=np.uint8) for _ in range(3)))
    mask = np.array([[0, 7], [255, 1]])
    bins = ColorBinService().bin_pixels(mask, planes, steps)
    assert list(bins) == [(4, 4, 4)]
    assert bins[(4, 4, 4)].tolist() == [[0, 1], [1, 0], [1, 1]]


def test_partition_check_raises():
    with pytest.raises(BinningConsistencyError):
        ColorBinService._check_partition({ColorBinKey(1, 1, 1): np.zeros((2, 2))}, 3)
