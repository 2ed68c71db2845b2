import math

import numpy as np
import pytest

from pmvskit.detector import FeatureType
from pmvskit.dog import (
    blurred_magnitude,
    detect_dog,
    difference_of_gaussians,
    is_local_max,
    is_scale_local_max,
    laplacian_response,
    scale_response,
)


def _peak(center=1.0, other=0.0):
    a = np.full((3, 3), other, dtype=np.float32)
    a[1, 1] = center
    return a


def _noise_image(width, height, seed=7):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=width * height * 3).tolist()


def test_is_local_max_peak():
    assert is_local_max(_peak(1.0, 0.0), 1, 1) == 1


def test_is_local_max_valley():
    assert is_local_max(_peak(-1.0, 0.0), 1, 1) == -1


def test_is_local_max_flat():
    assert is_local_max(np.zeros((3, 3)), 1, 1) == 0


def test_is_local_max_positive_not_max():
    a = _peak(1.0, 0.0)
    a[0, 2] = 2.0
    assert is_local_max(a, 1, 1) == 0


def test_is_local_max_accepts_nested_lists():
    assert is_local_max(_peak(1.0, 0.0).tolist(), 1, 1) == 1


def test_scale_local_max_requires_scale_extremum():
    c = _peak(1.0, 0.0)
    assert is_scale_local_max(_peak(0.5), c, _peak(0.5), 1, 1) == 1
    assert is_scale_local_max(_peak(2.0), c, _peak(0.5), 1, 1) == 0


def test_scale_local_min():
    c = _peak(-1.0, 0.0)
    assert is_scale_local_max(_peak(-0.5), c, _peak(-0.5), 1, 1) == -1
    assert is_scale_local_max(_peak(-2.0), c, _peak(-0.5), 1, 1) == 0


def test_laplacian_response_constant_and_linear_are_zero():
    assert laplacian_response(np.full((3, 3), 5.0), 1, 1) == 0.0
    ramp = np.add.outer(np.arange(3.0), 2 * np.arange(3.0))
    assert laplacian_response(ramp, 1, 1) == pytest.approx(0.0)


def test_laplacian_response_is_linear():
    a = _peak(1.0, 0.0)
    assert laplacian_response(3 * a, 1, 1) == pytest.approx(3 * laplacian_response(a, 1, 1))


def test_scale_response_zero_for_identical_constant_maps():
    a = np.full((3, 3), 2.0)
    assert scale_response(a, a, a, 1, 1) == 0.0


def test_scale_response_is_nonnegative_and_symmetric_in_sign():
    rng = np.random.default_rng(1)
    p, c, n = (rng.normal(size=(3, 3)) for _ in range(3))
    r = scale_response(p, c, n, 1, 1)
    assert r >= 0.0
    assert scale_response(-p, -c, -n, 1, 1) == pytest.approx(r)


def test_difference_of_gaussians_round_trip():
    rng = np.random.default_rng(2)
    cres = rng.random((4, 5)).astype(np.float32)
    nres = rng.random((4, 5)).astype(np.float32)
    dog = difference_of_gaussians(cres, nres)
    np.testing.assert_allclose(dog + cres, nres, rtol=1e-6, atol=1e-6)


def test_difference_of_gaussians_shape_mismatch():
    with pytest.raises(ValueError):
        difference_of_gaussians(np.zeros((2, 2)), np.zeros((3, 3)))


def test_blurred_magnitude_constant_image():
    img = np.full((10, 12, 3), 0.5, dtype=np.float32)
    res = blurred_magnitude(img, None, 1.5)
    assert res.shape == (10, 12)
    np.testing.assert_allclose(res, 0.5 * math.sqrt(3), rtol=1e-4)


def test_blurred_magnitude_masked_pixels_are_zero():
    img = np.full((8, 8, 3), 0.5, dtype=np.float32)
    mask = np.full((8, 8), 255, dtype=np.uint8)
    mask[3, 4] = 0
    res = blurred_magnitude(img, mask, 1.0)
    assert res[3, 4] == 0.0
    assert res[0, 0] > 0.0


def test_blurred_magnitude_rejects_grey_image():
    with pytest.raises(ValueError):
        blurred_magnitude(np.zeros((4, 4)), None, 1.0)


def test_detect_dog_blank_image_finds_nothing():
    width, height = 24, 24
    assert detect_dog([0] * (width * height * 3), None, None, width, height, 4, 1.0, 3.0) == []


def test_detect_dog_fully_masked_finds_nothing():
    width, height = 24, 24
    image = _noise_image(width, height)
    mask = [0] * (width * height)
    assert detect_dog(image, mask, None, width, height, 4, 1.0, 3.0) == []


def test_detect_dog_noise_invariants():
    width, height, gspeedup = 48, 40, 4
    points = detect_dog(_noise_image(width, height), None, None, width, height, gspeedup, 1.0, 3.0)
    assert len(points) > 0

    responses = [p.response for p in points]
    assert responses == sorted(responses)
    assert all(r > 0.0 for r in responses)
    assert all(p.type == FeatureType.DOG for p in points)

    coords = [(p.icoord[0], p.icoord[1]) for p in points]
    assert len(set(coords)) == len(coords)
    assert all(p.icoord[2] == 1.0 for p in points)
    assert all(0 <= x < width and 0 <= y < height for x, y in coords)

    gridsize = 2 * gspeedup
    counts = {}
    for x, y in coords:
        key = (int(y) // gridsize, int(x) // gridsize)
        counts[key] = counts.get(key, 0) + 1
    assert max(counts.values()) <= 4


def test_detect_dog_is_deterministic():
    width, height = 32, 32
    image = _noise_image(width, height, seed=11)
    first = detect_dog(image, None, None, width, height, 4, 1.0, 3.0)
    second = detect_dog(image, None, None, width, height, 4, 1.0, 3.0)
    assert [(p.icoord, p.response) for p in first] == [
        (p.icoord, p.response) for p in second
    ]


@pytest.mark.parametrize(
    "gspeedup, first, last",
    [(0, 1.0, 3.0), (4, 0.0, 3.0), (4, 1.0, -1.0)],
)
def test_detect_dog_rejects_bad_parameters(gspeedup, first, last):
    width, height = 16, 16
    with pytest.raises(ValueError):
        detect_dog([0] * (width * height * 3), None, None, width, height, gspeedup, first, last)


def test_detect_dog_rejects_wrong_image_size():
    with pytest.raises(ValueError):
        detect_dog([0] * 10, None, None, 16, 16, 4, 1.0, 3.0)