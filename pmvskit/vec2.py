"""Two-component vectors and 2D segment/interval helpers."""

from __future__ import annotations

import math
from numbers import Real
from typing import Iterator, List, Optional, Union

Scalar = Union[int, float]


class _Vector:
    """Fixed-size mutable vector; subclasses fix the dimension."""

    __slots__ = ("_elt",)

    def __init__(self, *elements: Scalar) -> None:
        self._elt: List[Scalar] = list(elements)

    def _make(self, values):
        return type(self)(*values)

    def __getitem__(self, i: int) -> Scalar:
        return self._elt[i]

    def __setitem__(self, i: int, value: Scalar) -> None:
        self._elt[i] = value

    def __iter__(self) -> Iterator[Scalar]:
        return iter(self._elt)

    def __len__(self) -> int:
        return len(self._elt)

    def __repr__(self) -> str:
        inner = ", ".join(repr(e) for e in self._elt)
        return f"{type(self).__name__}({inner})"

    def __str__(self) -> str:
        return " ".join(str(e) for e in self._elt)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._elt == other._elt

    __hash__ = None  # mutable

    def __lt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return tuple(self._elt) < tuple(other._elt)

    def __add__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._make(a + b for a, b in zip(self, other))

    def __sub__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._make(a - b for a, b in zip(self, other))

    def __neg__(self):
        return self._make(-a for a in self)

    def __mul__(self, other):
        """Dot product with a vector, or scaling by a number."""
        if type(other) is type(self):
            return self.dot(other)
        if isinstance(other, Real):
            return self._make(a * other for a in self)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return self._make(a * other for a in self)
        return NotImplemented

    def __truediv__(self, s):
        if not isinstance(s, Real):
            return NotImplemented
        return self._make(a / s for a in self)

    def dot(self, other) -> Scalar:
        return sum(a * b for a, b in zip(self, other))

    def norm2(self) -> Scalar:
        return self.dot(self)

    def norm(self) -> float:
        return math.sqrt(self.norm2())

    def unitize(self) -> None:
        """Scale to unit length in place; zero and unit vectors are left alone."""
        denom2 = self.norm2()
        if denom2 != 1.0 and denom2 != 0.0:
            denom = math.sqrt(denom2)
            self._elt = [a / denom for a in self._elt]

    def copy(self):
        return self._make(self._elt)


class Vec2(_Vector):
    """A mutable 2D vector with arithmetic, dot product and lexicographic order."""

    __slots__ = ()

    def __init__(self, x: Scalar = 0.0, y: Scalar = 0.0) -> None:
        super().__init__(x, y)

    def __getitem__(self, i: int) -> Scalar:
        return super().__getitem__(i)

    def __setitem__(self, i: int, value: Scalar) -> None:
        super().__setitem__(i, value)

    def __iter__(self) -> Iterator[Scalar]:
        return super().__iter__()

    def __len__(self) -> int:
        return super().__len__()

    def __eq__(self, other: object) -> bool:
        return super().__eq__(other)

    __hash__ = None

    def __lt__(self, other):
        return super().__lt__(other)

    def __add__(self, other):
        return super().__add__(other)

    def __sub__(self, other):
        return super().__sub__(other)

    def __neg__(self):
        return super().__neg__()

    def __mul__(self, other):
        """Dot product with a Vec2, or scaling by a number."""
        return super().__mul__(other)

    def __rmul__(self, other):
        return super().__rmul__(other)

    def __truediv__(self, s):
        return super().__truediv__(s)

    def dot(self, other) -> Scalar:
        return super().dot(other)

    def norm2(self) -> Scalar:
        return super().norm2()

    def norm(self) -> float:
        return super().norm()

    def unitize(self) -> None:
        """Scale to unit length in place; zero and unit vectors are left alone."""
        super().unitize()

    def copy(self) -> "Vec2":
        return super().copy()


def perp(v: Vec2) -> Vec2:
    """The vector rotated by -90 degrees."""
    return Vec2(v[1], -v[0])


def cross(lhs: Vec2, rhs: Vec2) -> Scalar:
    """The z component of the 3D cross product of two planar vectors."""
    return lhs[0] * rhs[1] - lhs[1] * rhs[0]


def is_overlap(lhs: Vec2, rhs: Vec2) -> Optional[Vec2]:
    """Intersection of two sorted open intervals, or None when they do not overlap."""
    if lhs[1] <= rhs[0] or rhs[1] <= lhs[0]:
        return None
    return Vec2(max(lhs[0], rhs[0]), min(lhs[1], rhs[1]))


def is_overlap_unsorted(lhs: Vec2, rhs: Vec2) -> Optional[Vec2]:
    """Like is_overlap, but the interval endpoints may be in either order."""
    lhs2 = Vec2(min(lhs[0], lhs[1]), max(lhs[0], lhs[1]))
    rhs2 = Vec2(min(rhs[0], rhs[1]), max(rhs[0], rhs[1]))
    return is_overlap(lhs2, rhs2)


def is_intersect(p0: Vec2, p1: Vec2, q0: Vec2, q1: Vec2) -> bool:
    """Whether segments p0p1 and q0q1 intersect.

    Segments that only share an endpoint (and are not collinear) do not count
    as intersecting.
    """
    p0q0 = p0 - q0
    p0p1 = p0 - p1
    p0q1 = p0 - q1
    q0p0 = q0 - p0
    q0q1 = q0 - q1
    q0p1 = q0 - p1

    itmp0 = cross(p0q0, p0p1)
    itmp1 = cross(p0p1, p0q1)
    itmp2 = cross(q0p0, q0q1)
    itmp3 = cross(q0q1, q0p1)

    if itmp0 == 0 and itmp1 == 0:
        # All four points are collinear; compare positions along p0 -> q0.
        v_p1 = p0q0.dot(p0p1)
        v_q0 = p0q0.dot(p0q0)
        v_q1 = p0q0.dot(p0q1)
        return is_overlap_unsorted(Vec2(0, v_p1), Vec2(v_q0, v_q1)) is not None

    if p0 == q0 or p0 == q1 or p1 == q0 or p1 == q1:
        return False

    p1q0 = p1 - q0
    p1q1 = p1 - q1
    q1p0 = q1 - p0
    q1p1 = q1 - p1
    if itmp0 == 0 and p0q0.dot(p1q0) < 0:
        return True
    if itmp1 == 0 and p0q1.dot(p1q1) < 0:
        return True
    if itmp2 == 0 and q0p0.dot(q1p0) < 0:
        return True
    if itmp3 == 0 and q0p1.dot(q1p1) < 0:
        return True

    if itmp0 * itmp1 < 0 or itmp2 * itmp3 < 0:
        return False
    return True