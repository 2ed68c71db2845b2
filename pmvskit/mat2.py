"""2x2 matrices, determinants, inversion and eigen decomposition."""

from __future__ import annotations

import math
from numbers import Real
from typing import Iterator, Optional, Tuple, Union

from pmvskit.vec2 import Vec2, perp

Scalar = Union[int, float]


class Mat2:
    """A mutable 2x2 matrix stored as two row vectors; m[i, j] is row i, column j."""

    __slots__ = ("_rows",)

    def __init__(self, r0: Optional[Vec2] = None, r1: Optional[Vec2] = None) -> None:
        self._rows = [
            r0.copy() if r0 is not None else Vec2(0.0, 0.0),
            r1.copy() if r1 is not None else Vec2(0.0, 0.0),
        ]

    @classmethod
    def from_values(cls, a: Scalar, b: Scalar, c: Scalar, d: Scalar) -> "Mat2":
        """The matrix [[a, b], [c, d]]."""
        return cls(Vec2(a, b), Vec2(c, d))

    @classmethod
    def identity(cls) -> "Mat2":
        return cls.from_values(1, 0, 0, 1)

    @classmethod
    def outer_product(cls, u: Vec2, v: Optional[Vec2] = None) -> "Mat2":
        """The matrix u v^T; with one argument, u u^T."""
        if v is None:
            v = u
        return cls.from_values(u[0] * v[0], u[0] * v[1], u[1] * v[0], u[1] * v[1])

    @classmethod
    def diagonal(cls, d: Scalar) -> "Mat2":
        """The matrix d times the identity."""
        return cls.from_values(d, 0, 0, d)

    def __getitem__(self, key):
        if isinstance(key, tuple):
            i, j = key
            return self._rows[i][j]
        return self._rows[key]

    def __setitem__(self, key, value) -> None:
        if isinstance(key, tuple):
            i, j = key
            self._rows[i][j] = value
        else:
            if not isinstance(value, Vec2):
                raise TypeError("a matrix row must be a Vec2")
            self._rows[key] = value.copy()

    def __iter__(self) -> Iterator[Vec2]:
        return iter(self._rows)

    def __repr__(self) -> str:
        return f"Mat2({self._rows[0]!r}, {self._rows[1]!r})"

    def __str__(self) -> str:
        return "\n".join(str(r) for r in self._rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mat2):
            return NotImplemented
        return self._rows == other._rows

    __hash__ = None  # mutable

    def __add__(self, other: "Mat2") -> "Mat2":
        if not isinstance(other, Mat2):
            return NotImplemented
        return Mat2(self[0] + other[0], self[1] + other[1])

    def __sub__(self, other: "Mat2") -> "Mat2":
        if not isinstance(other, Mat2):
            return NotImplemented
        return Mat2(self[0] - other[0], self[1] - other[1])

    def __neg__(self) -> "Mat2":
        return Mat2(-self[0], -self[1])

    def __mul__(self, other):
        """Matrix product, matrix-vector product, or scaling by a number."""
        if isinstance(other, Mat2):
            cols = [other.col(j) for j in range(2)]
            return Mat2(*(Vec2(*(row.dot(c) for c in cols)) for row in self._rows))
        if isinstance(other, Vec2):
            return Vec2(self[0].dot(other), self[1].dot(other))
        if isinstance(other, Real):
            return Mat2(self[0] * other, self[1] * other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return Mat2(self[0] * other, self[1] * other)
        return NotImplemented

    def __truediv__(self, s: Scalar) -> "Mat2":
        if not isinstance(s, Real):
            return NotImplemented
        return Mat2(self[0] / s, self[1] / s)

    def col(self, i: int) -> Vec2:
        return Vec2(self._rows[0][i], self._rows[1][i])

    def rows(self) -> Tuple[Vec2, Vec2]:
        """Copies of the two rows."""
        return self._rows[0].copy(), self._rows[1].copy()


def det(m: Mat2) -> Scalar:
    return m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0]


def trace(m: Mat2) -> Scalar:
    return m[0, 0] + m[1, 1]


def transpose(m: Mat2) -> Mat2:
    return Mat2(m.col(0), m.col(1))


def adjoint(m: Mat2) -> Mat2:
    """The cofactor matrix, rows (perp(m[1]), -perp(m[0]))."""
    return Mat2(perp(m[1]), -perp(m[0]))


def invert(m: Mat2) -> Tuple[Mat2, Scalar]:
    """The inverse of m together with its determinant.

    Raises ValueError when the matrix is singular.
    """
    d = det(m)
    if d == 0.0:
        raise ValueError("matrix is singular")
    inv = Mat2.from_values(m[1, 1] / d, -m[0, 1] / d, -m[1, 0] / d, m[0, 0] / d)
    return inv, d


def eigenvalues(m: Mat2) -> Optional[Vec2]:
    """The two real eigenvalues, larger first, or None when the discriminant is below 1e-6."""
    b = -m[0, 0] - m[1, 1]
    c = det(m)
    dis = b * b - 4.0 * c
    if dis < 1e-6:
        return None
    s = math.sqrt(dis)
    return Vec2(0.5 * (-b + s), 0.5 * (-b - s))


def eigenvectors(m: Mat2, evals: Vec2) -> Tuple[Vec2, Vec2]:
    """Unit eigenvectors for the given eigenvalues."""
    evecs = (
        Vec2(-m[0, 1], m[0, 0] - evals[0]),
        Vec2(-m[0, 1], m[0, 0] - evals[1]),
    )
    for v in evecs:
        v.unitize()
    return evecs


def eigen(m: Mat2) -> Optional[Tuple[Vec2, Tuple[Vec2, Vec2]]]:
    """Eigenvalues and eigenvectors, or None when eigenvalues() gives none."""
    evals = eigenvalues(m)
    if evals is None:
        return None
    return evals, eigenvectors(m, evals)