"""Three-component vectors with cross product, projection and orthonormal frames."""

from __future__ import annotations

from typing import Iterator, Tuple, Union

from pmvskit.vec2 import Vec2, _Vector

Scalar = Union[int, float]


class Vec3(_Vector):
    """A mutable 3D vector with arithmetic, dot/cross products and lexicographic order."""

    __slots__ = ()

    def __init__(self, x: Scalar = 0.0, y: Scalar = 0.0, z: Scalar = 0.0) -> None:
        super().__init__(x, y, z)

    @classmethod
    def from_vec2(cls, v: Vec2, z: Scalar) -> "Vec3":
        """Extend a 2D vector with a third component."""
        return cls(v[0], v[1], z)

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
        """Dot product with a Vec3, or scaling by a number."""
        return super().__mul__(other)

    def __rmul__(self, other):
        return super().__rmul__(other)

    def __truediv__(self, s):
        return super().__truediv__(s)

    def __xor__(self, other: "Vec3") -> "Vec3":
        """Cross product."""
        if not isinstance(other, Vec3):
            return NotImplemented
        return cross(self, other)

    def dot(self, other) -> Scalar:
        return super().dot(other)

    def norm2(self) -> Scalar:
        return super().norm2()

    def norm(self) -> float:
        return super().norm()

    def unitize(self) -> None:
        """Scale to unit length in place; zero and unit vectors are left alone."""
        super().unitize()

    def sum(self) -> Scalar:
        return self._elt[0] + self._elt[1] + self._elt[2]

    def copy(self) -> "Vec3":
        return super().copy()


def _cross_components(u, v) -> Tuple[Scalar, Scalar, Scalar]:
    return (
        u[1] * v[2] - v[1] * u[2],
        -u[0] * v[2] + v[0] * u[2],
        u[0] * v[1] - v[0] * u[1],
    )


def _ortho_x_components(z) -> Tuple[Scalar, Scalar, Scalar]:
    """Components of a vector orthogonal to the first three components of z."""
    if abs(z[0]) > 0.5:
        return z[1], -z[0], 0
    if abs(z[1]) > 0.5:
        return 0, z[2], -z[1]
    return -z[2], 0, z[0]


def cross(u: Vec3, v: Vec3) -> Vec3:
    """Cross product u x v."""
    return Vec3(*_cross_components(u, v))


def proj(v: Vec3) -> Vec2:
    """Project homogeneous coordinates to 2D, dividing by z unless it is 0 or 1."""
    u = Vec2(v[0], v[1])
    if v[2] != 1.0 and v[2] != 0.0:
        u = u / v[2]
    return u


def ortho(z: Vec3) -> Tuple[Vec3, Vec3]:
    """Two vectors completing z to a frame: a unit x orthogonal to z, and y = z x x."""
    x = Vec3(*_ortho_x_components(z))
    x.unitize()
    return x, cross(z, x)