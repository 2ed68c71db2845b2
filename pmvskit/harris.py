"""Harris corner detection with a per-cell cap on the number of corners."""

from __future__ import annotations

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
    gauss_derivative_kernel,
    gauss_kernel,
)
from pmvskit.vec3 import Vec3

_DERIVATIVE = np.array([-0.5, 0.0, 0.5], dtype=np.float32)
_AVERAGE = np.full(3, 1.0 / 3.0, dtype=np.float32)
_HARRIS_K = 0.06
_FACTOR = 2


def _blur(image: np.ndarray, kernel: np.ndarray, mask: Optional[np.ndarray]) -> np.ndarray:
    return convolve_y(convolve_x(image, kernel, mask), kernel, mask)


def harris_response(
    image: np.ndarray, mask: Optional[np.ndarray], sigma: float
) -> np.ndarray:
    """The Harris corner response of an RGB image, after non-maximum suppression.

    image is a (height, width, 3) float array, mask an optional 8-bit
    (height, width) array. Interior pixels smaller than one of their four
    neighbours are set to 0, as are masked-out pixels.
    """
    img = np.asarray(image, dtype=np.float32)
    if img.ndim != 3 or img.shape[2] != 3:
        raise ValueError("image must have shape (height, width, 3)")
    gauss_i = gauss_kernel(sigma)

    dx = convolve_y(convolve_x(img, _DERIVATIVE, mask), _AVERAGE, mask)
    dy = convolve_y(convolve_x(img, _AVERAGE, mask), _DERIVATIVE, mask)

    dxdx = np.sum(dx * dx, axis=2)
    dydy = np.sum(dy * dy, axis=2)
    dxdy = np.sum(dx * dy, axis=2)
    outside = None if mask is None else np.asarray(mask) == 0
    if outside is not None:
        for arr in (dxdx, dydy, dxdy):
            arr[outside] = 0.0

    dxdx = _blur(dxdx, gauss_i, mask)
    dydy = _blur(dydy, gauss_i, mask)
    dxdy = _blur(dxdy, gauss_i, mask)

    tr = dxdx + dydy
    response = (dxdx * dydy - dxdy * dxdy - np.float32(_HARRIS_K) * tr * tr).astype(
        np.float32
    )
    if outside is not None:
        response[outside] = 0.0

    suppressed = response.copy()
    c = response[1:-1, 1:-1]
    weaker = (
        (c < response[1:-1, 2:])
        | (c < response[1:-1, :-2])
        | (c < response[2:, 1:-1])
        | (c < response[:-2, 1:-1])
    )
    suppressed[1:-1, 1:-1][weaker] = 0.0
    return suppressed


def detect_harris(
    image: Sequence[int],
    mask: Optional[Sequence[int]],
    edge: Optional[Sequence[int]],
    width: int,
    height: int,
    gspeedup: int,
    sigma: float,
) -> List[FeaturePoint]:
    """Detect Harris corners in interleaved 8-bit RGB data.

    The image is split into cells of 2*gspeedup pixels, each keeping its four
    strongest corners. The result is ordered weakest first.
    """
    if gspeedup <= 0:
        raise ValueError("gspeedup must be positive")
    img = build_image(image, width, height)
    combined = build_mask(mask, edge, width, height)
    response = harris_response(img, combined, sigma)

    max_points = _FACTOR * _FACTOR
    gridsize = gspeedup * _FACTOR
    gw = (width + gridsize - 1) // gridsize
    gh = (height + gridsize - 1) // gridsize
    grids: List[List[List[FeaturePoint]]] = [[[] for _ in range(gw)] for _ in range(gh)]

    margin = len(gauss_derivative_kernel(sigma)) // 2
    window = response[margin : height - margin, margin : width - margin]
    for wy, wx in zip(*np.nonzero(window)):
        y = int(wy) + margin
        x = int(wx) + margin
        value = float(response[y, x])
        cell = grids[min(y // gridsize, gh - 1)][min(x // gridsize, gw - 1)]
        if len(cell) < max_points or cell[0].response < value:
            insort(
                cell,
                FeaturePoint(Vec3(float(x), float(y), 1.0), value, FeatureType.HARRIS),
            )
            if len(cell) > max_points:
                del cell[0]

    return collect_grids(grids)