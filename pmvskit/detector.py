"""Shared machinery for image feature detectors: kernels, masks, convolution, grids."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from itertools import chain
from typing import Iterable, List, Optional, Sequence

import numpy as np

from pmvskit.vec3 import Vec3


class FeatureType(IntEnum):
    """Which detector produced a feature point."""

    HARRIS = 0
    DOG = 1


@dataclass
class FeaturePoint:
    """A detected feature: homogeneous image coordinate, response and detector type.

    Points order by their response, weakest first.
    """

    icoord: Vec3 = field(default_factory=Vec3)
    response: float = 0.0
    type: FeatureType = FeatureType.HARRIS

    def __lt__(self, other: "FeaturePoint") -> bool:
        if not isinstance(other, FeaturePoint):
            return NotImplemented
        return self.response < other.response


def _check_sigma(sigma: float) -> None:
    if not sigma > 0:
        raise ValueError("sigma must be positive")


def gauss_derivative_kernel(sigma: float) -> np.ndarray:
    """A 1D derivative-of-Gaussian kernel of length 2*ceil(2*sigma)+1.

    It is normalised so that its positive taps sum to one.
    """
    _check_sigma(sigma)
    margin = math.ceil(2 * sigma)
    taps = [
        x * math.exp(-(x * x) / (2 * sigma * sigma)) for x in range(-margin, margin + 1)
    ]
    denom = sum(t for t in taps if t > 0.0)
    return np.array([t / denom for t in taps], dtype=np.float32)


def gauss_kernel(sigma: float) -> np.ndarray:
    """A normalised 1D Gaussian kernel of length 2*ceil(2*sigma)+1."""
    _check_sigma(sigma)
    margin = math.ceil(2 * sigma)
    taps = [math.exp(-(x * x) / (2 * sigma * sigma)) for x in range(-margin, margin + 1)]
    denom = sum(taps)
    return np.array([t / denom for t in taps], dtype=np.float32)


def response_threshold(points: Iterable[FeaturePoint]) -> float:
    """Mean plus standard deviation of the responses; 0 for no points."""
    responses = [p.response for p in points]
    count = len(responses) or 1
    ave = sum(responses) / count
    ave2 = sum(r * r for r in responses) / count
    return ave + math.sqrt(max(0.0, ave2 - ave * ave))


def build_image(image: Sequence[int], width: int, height: int) -> np.ndarray:
    """Turn interleaved 8-bit RGB data into a (height, width, 3) array in [0, 1]."""
    data = np.asarray(image, dtype=np.float32)
    if data.size != width * height * 3:
        raise ValueError("image data does not match width * height * 3")
    return data.reshape(height, width, 3) / np.float32(255.0)


def build_mask(
    mask: Optional[Sequence[int]],
    edge: Optional[Sequence[int]],
    width: int,
    height: int,
) -> Optional[np.ndarray]:
    """Combine an optional mask and an optional edge map into one 8-bit mask.

    Returns None when both are missing or empty. Where both are given, a
    pixel is 255 when both are nonzero and 0 otherwise.
    """
    has_mask = mask is not None and len(mask) > 0
    has_edge = edge is not None and len(edge) > 0
    if not has_mask and not has_edge:
        return None

    def _as_grid(values: Sequence[int]) -> np.ndarray:
        arr = np.asarray(values, dtype=np.uint8)
        if arr.size != width * height:
            raise ValueError("mask data does not match width * height")
        return arr.reshape(height, width)

    if not has_mask:
        return _as_grid(edge)
    if not has_edge:
        return _as_grid(mask)
    both = (_as_grid(mask) != 0) & (_as_grid(edge) != 0)
    return np.where(both, 255, 0).astype(np.uint8)


def is_close_boundary(mask: Optional[np.ndarray], x: int, y: int, margin: int) -> bool:
    """Whether the window of the given margin around (x, y) leaves the mask or image."""
    if mask is None:
        return False
    height, width = mask.shape
    if x - margin < 0 or width <= x + margin or y - margin < 0 or height <= y + margin:
        return True
    window = mask[y - margin : y + margin + 1, x - margin : x + margin + 1]
    return bool(np.any(window == 0))


def _convolve(
    image: np.ndarray,
    kernel: Sequence[float],
    mask: Optional[np.ndarray],
    axis: int,
    clamp: bool,
) -> np.ndarray:
    img = np.asarray(image, dtype=np.float32)
    taps = np.asarray(kernel, dtype=np.float32)
    height, width = img.shape[:2]
    size = img.shape[axis]
    margin = len(taps) // 2
    positions = np.arange(size)
    valid_mask = None if mask is None else np.asarray(mask) != 0
    out = np.zeros_like(img)

    for j, tap in enumerate(taps):
        idx = positions + j - margin
        weight = np.ones((height, width), dtype=np.float32)
        if not clamp:
            inside = ((idx >= 0) & (idx < size)).astype(np.float32)
            weight *= inside.reshape((1, size) if axis == 1 else (size, 1))
        idx = np.clip(idx, 0, size - 1)
        shifted = np.take(img, idx, axis=axis)
        if valid_mask is not None:
            weight *= np.take(valid_mask, idx, axis=axis).astype(np.float32)
        if img.ndim == 3:
            weight = weight[..., None]
        out += tap * shifted * weight

    if valid_mask is not None:
        out[~valid_mask] = 0.0
    return out


def convolve_x(
    image: np.ndarray, kernel: Sequence[float], mask: Optional[np.ndarray] = None
) -> np.ndarray:
    """Convolve rows with the kernel, clamping at the borders.

    Masked-out pixels give 0 and do not contribute to their neighbours.
    """
    return _convolve(image, kernel, mask, axis=1, clamp=True)


def convolve_y(
    image: np.ndarray, kernel: Sequence[float], mask: Optional[np.ndarray] = None
) -> np.ndarray:
    """Convolve columns with the kernel, clamping at the borders.

    Masked-out pixels give 0 and do not contribute to their neighbours.
    """
    return _convolve(image, kernel, mask, axis=0, clamp=True)


def convolve_x_zero(image: np.ndarray, kernel: Sequence[float]) -> np.ndarray:
    """Convolve rows with the kernel, treating pixels outside the image as 0."""
    return _convolve(image, kernel, None, axis=1, clamp=False)


def convolve_y_zero(image: np.ndarray, kernel: Sequence[float]) -> np.ndarray:
    """Convolve columns with the kernel, treating pixels outside the image as 0."""
    return _convolve(image, kernel, None, axis=0, clamp=False)


def collect_grids(grids: Iterable[Iterable[Iterable[FeaturePoint]]]) -> List[FeaturePoint]:
    """Gather the points of all grid cells, weakest first.

    Points of equal response keep their row-major grid order.
    """
    points = chain.from_iterable(chain.from_iterable(grids))
    return sorted(points, key=lambda p: p.response)