"""3x3 matrices, inversion and axis-angle (Rodrigues) conversions."""

from __future__ import annotations

import math
from numbers import Real
from typing import Iterator, Optional, Tuple, Union

from pmvskit.vec3 import Vec3

Scalar = Union[int, float]


class Mat3:
    """A mutable 3x3 matrix stored as three row vectors; m[i, j] is row i, column j."""

    __slots__ = ("_rows",)

    def __init__(
        self,
        r0: Optional[Vec3] = None,
        r1: Optional[Vec3] = None,
        r2: Optional[Vec3] = None,
    ) -> None:
        self._rows = [
            r.copy() if r is not None else Vec3(0.0, 0.0, 0.0) for r in (r0, r1, r2)
        ]

    @classmethod
    def identity(cls) -> "Mat3":
        return cls(Vec3(1, 0, 0), Vec3(0, 1, 0), Vec3(0, 0, 1))

    @classmethod
    def outer_product(cls, u: Vec3, v: Optional[Vec3] = None) -> "Mat3":
        """The matrix u v^T; with one argument, u u^T."""
        if v is None:
            v = u
        return cls(*(Vec3(*(ui * vj for vj in v)) for ui in u))

    @classmethod
    def diagonal(cls, d: Scalar) -> "Mat3":
        """The matrix d times the identity."""
        return cls(Vec3(d, 0, 0), Vec3(0, d, 0), Vec3(0, 0, d))

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
            if not isinstance(value, Vec3):
                raise TypeError("a matrix row must be a Vec3")
            self._rows[key] = value.copy()

    def __iter__(self) -> Iterator[Vec3]:
        return iter(self._rows)

    def __repr__(self) -> str:
        return "Mat3({!r}, {!r}, {!r})".format(*self._rows)

    def __str__(self) -> str:
        return "\n".join(str(r) for r in self._rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mat3):
            return NotImplemented
        return self._rows == other._rows

    __hash__ = None  # mutable

    def __add__(self, other: "Mat3") -> "Mat3":
        if not isinstance(other, Mat3):
            return NotImplemented
        return Mat3(*(a + b for a, b in zip(self, other)))

    def __sub__(self, other: "Mat3") -> "Mat3":
        if not isinstance(other, Mat3):
            return NotImplemented
        return Mat3(*(a - b for a, b in zip(self, other)))

    def __neg__(self) -> "Mat3":
        return Mat3(*(-r for r in self))

    def __mul__(self, other):
        """Matrix product, matrix-vector product, or scaling by a number."""
        if isinstance(other, Mat3):
            cols = [other.col(j) for j in range(3)]
            return Mat3(*(Vec3(*(row.dot(c) for c in cols)) for row in self._rows))
        if isinstance(other, Vec3):
            return Vec3(*(row.dot(other) for row in self._rows))
        if isinstance(other, Real):
            return Mat3(*(r * other for r in self._rows))
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return Mat3(*(r * other for r in self._rows))
        return NotImplemented

    def __truediv__(self, s: Scalar) -> "Mat3":
        if not isinstance(s, Real):
            return NotImplemented
        return Mat3(*(r / s for r in self._rows))

    def col(self, i: int) -> Vec3:
        return Vec3(*(r[i] for r in self._rows))

    def rows(self) -> Tuple[Vec3, Vec3, Vec3]:
        """Copies of the three rows."""
        return tuple(r.copy() for r in self._rows)


def diag(v: Vec3) -> Mat3:
    """The diagonal matrix with v on its diagonal."""
    return Mat3(Vec3(v[0], 0, 0), Vec3(0, v[1], 0), Vec3(0, 0, v[2]))


def det(m: Mat3) -> Scalar:
    return m[0].dot(m[1] ^ m[2])


def trace(m: Mat3) -> Scalar:
    return m[0, 0] + m[1, 1] + m[2, 2]


def transpose(m: Mat3) -> Mat3:
    return Mat3(m.col(0), m.col(1), m.col(2))


def adjoint(m: Mat3) -> Mat3:
    """The cofactor matrix, rows built from cross products of the other rows."""
    return Mat3(m[1] ^ m[2], m[2] ^ m[0], m[0] ^ m[1])


def invert(m: Mat3) -> Tuple[Mat3, Scalar]:
    """The inverse of m together with its determinant.

    Raises ValueError when the matrix is singular.
    """
    a = adjoint(m)
    d = a[0].dot(m[0])
    if d == 0.0:
        raise ValueError("matrix is singular")
    return transpose(a) / d, d


def row_extend(v: Vec3) -> Mat3:
    """A matrix whose three rows are all v."""
    return Mat3(v, v, v)


def rodrigues(axis: Vec3) -> Mat3:
    """The rotation matrix for an axis-angle vector (angle is its length)."""
    theta = axis.norm()
    if theta == 0:
        return Mat3.identity()
    wx = Mat3(
        Vec3(0, -axis[2], axis[1]),
        Vec3(axis[2], 0, -axis[0]),
        Vec3(-axis[1], axis[0], 0),
    )
    a = math.sin(theta) / theta
    b = (1 - math.cos(theta)) / (theta * theta)
    return Mat3.identity() + wx * a + (wx * wx) * b


def irodrigues(rot: Mat3) -> Vec3:
    """The axis-angle vector of a rotation matrix; zero when the angle is 0 or pi."""
    c = min(1.0, max(-1.0, (trace(rot) - 1) / 2))
    theta = math.acos(c)
    denom = 2 * math.sin(theta)
    if denom == 0.0:
        return Vec3()
    vec = Vec3(
        rot[2, 1] - rot[1, 2],
        rot[0, 2] - rot[2, 0],
        rot[1, 0] - rot[0, 1],
    )
    return theta / denom * vec