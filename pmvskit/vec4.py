"""Four-component vectors with 4D cross products, projection and frames."""

from __future__ import annotations

from typing import Iterator, Tuple, Union

from pmvskit.vec2 import _Vector
from pmvskit.vec3 import Vec3, _cross_components, _ortho_x_components

Scalar = Union[int, float]


class Vec4(_Vector):
    """A mutable 4D vector with arithmetic, dot product and lexicographic order."""

    __slots__ = ()

    def __init__(
        self, x: Scalar = 0.0, y: Scalar = 0.0, z: Scalar = 0.0, w: Scalar = 0.0
    ) -> None:
        super().__init__(x, y, z, w)

    @classmethod
    def from_vec3(cls, v: Vec3, w: Scalar) -> "Vec4":
        """Extend a 3D vector with a fourth component."""
        return cls(v[0], v[1], v[2], w)

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
        """Dot product with a Vec4, or scaling by a number."""
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

    def copy(self) -> "Vec4":
        return super().copy()


def cross3(a: Vec4, b: Vec4, c: Vec4) -> Vec4:
    """The 4D generalised cross product: a vector orthogonal to a, b and c."""
    d1 = b[2] * c[3] - b[3] * c[2]
    d2 = b[1] * c[3] - b[3] * c[1]
    d3 = b[1] * c[2] - b[2] * c[1]
    d4 = b[0] * c[3] - b[3] * c[0]
    d5 = b[0] * c[2] - b[2] * c[0]
    d6 = b[0] * c[1] - b[1] * c[0]
    return Vec4(
        -a[1] * d1 + a[2] * d2 - a[3] * d3,
        a[0] * d1 - a[2] * d4 + a[3] * d5,
        -a[0] * d2 + a[1] * d4 - a[3] * d6,
        a[0] * d3 - a[1] * d5 + a[2] * d6,
    )


def cross(u: Vec4, v: Vec4) -> Vec4:
    """Cross product of the first three components; the fourth is 0."""
    return Vec4(*_cross_components(u, v), 0)


def proj(v: Vec4) -> Vec3:
    """Project homogeneous coordinates to 3D, dividing by w unless it is 0 or 1."""
    u = Vec3(v[0], v[1], v[2])
    if v[3] != 1.0 and v[3] != 0.0:
        u = u / v[3]
    return u


def ortho(z: Vec4) -> Tuple[Vec4, Vec4]:
    """Two vectors completing the 3D part of z to a frame; fourth components are 0."""
    x = Vec4(*_ortho_x_components(z), 0)
    x.unitize()
    y = Vec4(*_cross_components(z, x), 0)
    return x, y