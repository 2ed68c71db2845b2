"""Difference-of-Gaussians blob detection with a per-cell cap on the number of blobs."""

from __future__ import annotations

import math
from bisect import insort
from typing import List, Optional, Sequence

import numpy as np

from pmvskit.detector import (
    FeaturePoint,
    FeatureType,
    build_image,
    build_mask,
    collect_grids,
    convolve_x,
    convolve_y,
    gauss_kernel,
)
from pmvskit.vec3 import Vec3

_FACTOR = 2
_SCALE_STEP = float(np.float32(2.0) ** np.float32(0.5))
_MIN_STEPS = 4

_NEIGHBOURS = [(dy, dx) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dy, dx) != (0, 0)]


def is_local_max(dog, x: int, y: int) -> int:
    """1 for a positive spatial maximum, -1 for a spatial minimum, 0 otherwise.

    A value that is not positive counts as a minimum only when all eight
    neighbours are larger.
    """
    value = dog[y][x]
    neighbours = [dog[y + dy][x + dx] for dy, dx in _NEIGHBOURS]
    if 0.0 < value:
        return 1 if all(n < value for n in neighbours) else 0
    return -1 if all(n > value for n in neighbours) else 0


def is_scale_local_max(pdog, cdog, ndog, x: int, y: int) -> int:
    """Like is_local_max on cdog, also requiring an extremum across the adjacent scales."""
    flag = is_local_max(cdog, x, y)
    value = cdog[y][x]
    if flag == 1:
        return 1 if pdog[y][x] < value and ndog[y][x] < value else 0
    if flag == -1:
        return -1 if value < pdog[y][x] and value < ndog[y][x] else 0
    return 0


def laplacian_response(dog, x: int, y: int) -> float:
    """Eight times the centre value minus the sum of the eight neighbours."""
    total = sum(dog[y + dy][x + dx] for dy, dx in _NEIGHBOURS)
    return float(8 * dog[y][x] - total)


def scale_response(pdog, cdog, ndog, x: int, y: int) -> float:
    """Absolute combined spatial and scale-space Laplacian at (x, y)."""
    c = cdog[y][x]
    return abs(
        laplacian_response(pdog, x, y)
        + laplacian_response(cdog, x, y)
        + laplacian_response(ndog, x, y)
        + float(c - pdog[y][x])
        + float(c - ndog[y][x])
    )


def difference_of_gaussians(cres, nres) -> np.ndarray:
    """The difference nres - cres of two blurred magnitude maps."""
    c = np.asarray(cres, dtype=np.float32)
    n = np.asarray(nres, dtype=np.float32)
    if c.shape != n.shape:
        raise ValueError("response maps must have the same shape")
    return n - c


def blurred_magnitude(
    image: np.ndarray, mask: Optional[np.ndarray], sigma: float
) -> np.ndarray:
    """Blur an RGB image with a Gaussian of the given sigma and take per-pixel length."""
    img = np.asarray(image, dtype=np.float32)
    if img.ndim != 3 or img.shape[2] != 3:
        raise ValueError("image must have shape (height, width, 3)")
    kernel = gauss_kernel(sigma)
    blurred = convolve_y(convolve_x(img, kernel, mask), kernel, mask)
    return np.sqrt(np.sum(blurred * blurred, axis=2)).astype(np.float32)


def _shift(a: np.ndarray, dy: int, dx: int) -> np.ndarray:
    h, w = a.shape
    return a[1 + dy : h - 1 + dy, 1 + dx : w - 1 + dx]


def _scale_extrema(pdog: np.ndarray, cdog: np.ndarray, ndog: np.ndarray) -> np.ndarray:
    """Boolean map of pixels where is_scale_local_max is nonzero."""
    h, w = cdog.shape
    flags = np.zeros((h, w), dtype=bool)
    if h < 3 or w < 3:
        return flags
    c = _shift(cdog, 0, 0)
    p = _shift(pdog, 0, 0)
    n = _shift(ndog, 0, 0)
    all_smaller = np.ones_like(c, dtype=bool)
    all_larger = np.ones_like(c, dtype=bool)
    for dy, dx in _NEIGHBOURS:
        nb = _shift(cdog, dy, dx)
        all_smaller &= nb < c
        all_larger &= nb > c
    maxima = (c > 0.0) & all_smaller & (p < c) & (n < c)
    minima = (c <= 0.0) & all_larger & (c < p) & (c < n)
    flags[1:-1, 1:-1] = maxima | minima
    return flags


def detect_dog(
    image: Sequence[int],
    mask: Optional[Sequence[int]],
    edge: Optional[Sequence[int]],
    width: int,
    height: int,
    gspeedup: int,
    first_scale: float,
    last_scale: float,
) -> List[FeaturePoint]:
    """Detect scale-space extrema of the difference of Gaussians in 8-bit RGB data.

    Scales grow by sqrt(2) from first_scale, over at least four steps. The
    image is split into cells of 2*gspeedup pixels, each keeping its four
    strongest points. The result is ordered weakest first.
    """
    if gspeedup <= 0:
        raise ValueError("gspeedup must be positive")
    if not first_scale > 0 or not last_scale > 0:
        raise ValueError("scales must be positive")
    img = build_image(image, width, height)
    combined = build_mask(mask, edge, width, height)

    max_points = _FACTOR * _FACTOR
    gridsize = gspeedup * _FACTOR
    gw = (width + gridsize - 1) // gridsize
    gh = (height + gridsize - 1) // gridsize
    grids: List[List[List[FeaturePoint]]] = [[[] for _ in range(gw)] for _ in range(gh)]

    steps = max(
        _MIN_STEPS, math.ceil(math.log(last_scale / first_scale) / math.log(_SCALE_STEP))
    )

    cres = blurred_magnitude(img, combined, first_scale)
    nres = blurred_magnitude(img, combined, first_scale * _SCALE_STEP)
    cdog = difference_of_gaussians(cres, nres)
    cres = nres
    nres = blurred_magnitude(img, combined, first_scale * _SCALE_STEP * _SCALE_STEP)
    ndog = difference_of_gaussians(cres, nres)

    detected = np.zeros((height, width), dtype=bool)

    for i in range(2, steps):
        cscale = first_scale * _SCALE_STEP ** (i + 1)
        cres = nres
        nres = blurred_magnitude(img, combined, cscale)
        pdog, cdog = cdog, ndog
        ndog = difference_of_gaussians(cres, nres)

        margin = math.ceil(2 * cscale)
        if height - 2 * margin <= 0 or width - 2 * margin <= 0:
            continue
        region = np.zeros((height, width), dtype=bool)
        region[margin : height - margin, margin : width - margin] = True
        candidates = (
            region & ~detected & (cdog != 0.0) & _scale_extrema(pdog, cdog, ndog)
        )

        for cy, cx in zip(*np.nonzero(candidates)):
            y, x = int(cy), int(cx)
            detected[y, x] = True
            cell = grids[min(y // gridsize, gh - 1)][min(x // gridsize, gw - 1)]
            insort(
                cell,
                FeaturePoint(
                    Vec3(float(x), float(y), 1.0),
                    abs(float(cdog[y, x])),
                    FeatureType.DOG,
                ),
            )
            if len(cell) > max_points:
                del cell[0]

    return collect_grids(grids)