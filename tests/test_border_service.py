import numpy as np

from shadow_detector.services.border_service import BorderService


def _expected_border(pixels, shape):
    members = set(pixels)
    rows, cols = shape
    out = set()
    for r, c in pixels:
        if r in (0, rows - 1) or c in (0, cols - 1):
            continue
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                n = (r + dr, c + dc)
                if n != (r, c) and n not in members:
                    out.add(n)
    return out


def test_single_pixel_has_eight_neighbours():
    border = BorderService.trace(np.array([[3, 3]]), (7, 7))
    assert len(border) == 8
    assert {tuple(p) for p in border.tolist()} == {
        (2, 2), (2, 3), (2, 4), (3, 2), (3, 4), (4, 2), (4, 3), (4, 4)}


def test_interior_component_border_is_complete_and_unique():
    pixels = [(4, 5), (5, 4), (5, 5), (5, 6), (6, 5), (7, 7), (6, 6)]
    border = BorderService.trace(np.array(pixels), (12, 12))
    got = [tuple(p) for p in border.tolist()]
    assert len(got) == len(set(got))
    assert set(got) == _expected_border(pixels, (12, 12))
    assert not set(got) & set(pixels)


def test_square_border_is_ring():
    rr, cc = np.mgrid[2:7, 2:7]
    pixels = np.stack([rr.ravel(), cc.ravel()], axis=1)
    border = BorderService.trace(pixels, (9, 9))
    assert len(border) == 7 * 7 - 5 * 5


def test_border_is_row_major():
    border = BorderService.trace(np.array([[2, 2], [3, 3]]), (6, 6))
    as_list = border.tolist()
    assert as_list == sorted(as_list)


def test_edge_pixels_contribute_no_neighbours():
    assert len(BorderService.trace(np.array([[0, 3]]), (6, 6))) == 0
    assert len(BorderService.trace(np.array([[5, 5]]), (6, 6))) == 0


def test_edge_touching_component_border_is_partial():
    pixels = [(0, 3), (1, 3)]
    got = {tuple(p) for p in BorderService.trace(np.array(pixels), (6, 6)).tolist()}
    # only (1, 3) is traced; its neighbours on row 0 are still kept
    assert got == {(0, 2), (0, 4), (1, 2), (1, 4), (2, 2), (2, 3), (2, 4)}


def test_empty_component():
    assert BorderService.trace(np.zeros((0, 2), dtype=int), (5, 5)).shape == (0, 2)


def test_random_components_match_brute_force():
    rng = np.random.default_rng(11)
    shape = (15, 13)
    for _ in range(20):
        mask = rng.random(shape) < 0.25
        pixels = [tuple(p) for p in np.argwhere(mask).tolist()]
        got = [tuple(p) for p in BorderService.trace(np.array(pixels).reshape(-1, 2), shape).tolist()]
        assert len(got) == len(set(got))
        assert set(got) == _expected_border(pixels, shape)
