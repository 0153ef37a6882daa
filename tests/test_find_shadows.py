import cv2
import numpy as np
import pytest

from shadow_detector import BinSteps, LabPlanes, find_shadows
from shadow_detector.models.errors import (BinProcessingError, DimensionMismatchError,
                                           InvalidStepError)

from conftest import random_scene, square_scene


def _must_not_run(binary):
    raise AssertionError("labeling must not start on invalid input")


def test_scenario_lighter_border():
    planes, mask = square_scene(component_l=30, border_l=50)
    result = find_shadows(planes, mask, (10, 10, 10), workers=3)
    assert len(result.points) == 25
    assert result.mask.shape == (11, 11)


def test_scenario_darker_border():
    planes, mask = square_scene(component_l=30, border_l=20)
    assert len(find_shadows(planes, mask, BinSteps(10, 10, 10)).points) == 0


@pytest.mark.parametrize("steps", [(0, 10, 10), (10, 0, 10), (10, 10, -3), (10, 2.0, 10)])
def test_invalid_steps_rejected_before_work(steps):
    planes, mask = square_scene(30, 50)
    with pytest.raises(InvalidStepError):
        find_shadows(planes, mask, steps, label_fn=_must_not_run)


def test_invalid_step_is_a_value_error():
    planes, mask = square_scene(30, 50)
    with pytest.raises(ValueError):
        find_shadows(planes, mask, (10, -1, 10))


def test_mask_shape_mismatch():
    planes, mask = square_scene(30, 50)
    with pytest.raises(DimensionMismatchError):
        find_shadows(planes, mask[:-1], label_fn=_must_not_run)


def test_plane_shape_mismatch():
    with pytest.raises(DimensionMismatchError):
        LabPlanes(l=np.zeros((4, 4)), a=np.zeros((4, 5)), b=np.zeros((4, 4)))
    with pytest.raises(DimensionMismatchError):
        LabPlanes(l=np.zeros((4, 4, 3)), a=np.zeros((4, 4, 3)), b=np.zeros((4, 4, 3)))


def test_worker_counts_agree():
    planes, mask = random_scene(seed=9)
    one = find_shadows(planes, mask, workers=1).points.as_set()
    many = find_shadows(planes, mask, workers=6).points.as_set()
    waves = find_shadows(planes, mask, workers=6, scheduling="wave").points.as_set()
    assert one == many == waves


def _fails_on_corner(binary):
    if binary[0, 0]:
        raise RuntimeError("corner bin")
    return cv2.connectedComponents(binary, connectivity=8)


def test_bin_failure_raises_after_all_bins_ran():
    planes, mask = square_scene(component_l=30, border_l=50)
    mask[0, 0] = 1
    with pytest.raises(BinProcessingError) as info:
        find_shadows(planes, mask, workers=2, label_fn=_fails_on_corner)
    assert [f.key for f in info.value.failures] == [(5, 13, 13)]


def test_bin_failure_returned_when_not_strict():
    planes, mask = square_scene(component_l=30, border_l=50)
    mask[0, 0] = 1
    result = find_shadows(planes, mask, workers=2, label_fn=_fails_on_corner, strict=False)
    assert len(result.failures) == 1
    assert len(result.points) == 25


def test_empty_mask():
    planes, mask = square_scene(30, 50)
    result = find_shadows(planes, np.zeros_like(mask))
    assert len(result.points) == 0
    assert result.reports == []
