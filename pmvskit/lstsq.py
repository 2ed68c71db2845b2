"""Linear least-squares solving."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np


def lls(a: Sequence[Sequence[float]], b: Sequence[float]) -> List[float]:
    """Solve a x = b in the least-squares sense via SVD.

    Returns the minimum-norm solution, rounded to single precision. Raises
    ValueError on an empty matrix, ragged rows or a right-hand side of the
    wrong length.
    """
    if len(a) == 0 or len(a[0]) == 0:
        raise ValueError("matrix must not be empty")
    n = len(a[0])
    if any(len(row) != n for row in a):
        raise ValueError("matrix rows must have equal length")
    if len(b) != len(a):
        raise ValueError("right-hand side length must equal the number of rows")
    mat = np.asarray(a, dtype=np.float64)
    rhs = np.asarray(b, dtype=np.float64)
    x, *_ = np.linalg.lstsq(mat, rhs, rcond=None)
    return [float(v) for v in x.astype(np.float32)]