"""4x4 matrices, homogeneous transforms and rigid-motion conversions."""

from __future__ import annotations

import math
from numbers import Real
from typing import Iterator, Optional, Tuple, Union

from pmvskit.mat3 import Mat3
from pmvskit.vec3 import Vec3
from pmvskit.vec4 import Vec4, cross3

Scalar = Union[int, float]


class Mat4:
    """A mutable 4x4 matrix stored as four row vectors; m[i, j] is row i, column j."""

    __slots__ = ("_rows",)

    def __init__(
        self,
        r0: Optional[Vec4] = None,
        r1: Optional[Vec4] = None,
        r2: Optional[Vec4] = None,
        r3: Optional[Vec4] = None,
    ) -> None:
        self._rows = [
            r.copy() if r is not None else Vec4(0.0, 0.0, 0.0, 0.0)
            for r in (r0, r1, r2, r3)
        ]

    @classmethod
    def identity(cls) -> "Mat4":
        return cls(
            Vec4(1, 0, 0, 0), Vec4(0, 1, 0, 0), Vec4(0, 0, 1, 0), Vec4(0, 0, 0, 1)
        )

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
            if not isinstance(value, Vec4):
                raise TypeError("a matrix row must be a Vec4")
            self._rows[key] = value.copy()

    def __iter__(self) -> Iterator[Vec4]:
        return iter(self._rows)

    def __repr__(self) -> str:
        return "Mat4({!r}, {!r}, {!r}, {!r})".format(*self._rows)

    def __str__(self) -> str:
        return "\n".join(str(r) for r in self._rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mat4):
            return NotImplemented
        return self._rows == other._rows

    __hash__ = None  # mutable

    def __add__(self, other: "Mat4") -> "Mat4":
        if not isinstance(other, Mat4):
            return NotImplemented
        return Mat4(*(a + b for a, b in zip(self, other)))

    def __sub__(self, other: "Mat4") -> "Mat4":
        if not isinstance(other, Mat4):
            return NotImplemented
        return Mat4(*(a - b for a, b in zip(self, other)))

    def __neg__(self) -> "Mat4":
        return Mat4(*(-r for r in self))

    def __mul__(self, other):
        """Matrix product, matrix-vector product, or scaling by a number.

        A Vec3 is treated as a homogeneous point (w = 1) and the result is
        divided by the transformed w unless that is 0.
        """
        if isinstance(other, Mat4):
            cols = [other.col(j) for j in range(4)]
            return Mat4(*(Vec4(*(row.dot(c) for c in cols)) for row in self._rows))
        if isinstance(other, Vec4):
            return Vec4(*(row.dot(other) for row in self._rows))
        if isinstance(other, Vec3):
            u = Vec4.from_vec3(other, 1)
            w = self._rows[3].dot(u)
            x, y, z = (row.dot(u) for row in self._rows[:3])
            if w == 0.0:
                return Vec3(x, y, z)
            return Vec3(x / w, y / w, z / w)
        if isinstance(other, Real):
            return Mat4(*(r * other for r in self._rows))
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return Mat4(*(r * other for r in self._rows))
        return NotImplemented

    def __truediv__(self, s: Scalar) -> "Mat4":
        if not isinstance(s, Real):
            return NotImplemented
        return Mat4(*(r / s for r in self._rows))

    def col(self, i: int) -> Vec4:
        return Vec4(*(r[i] for r in self._rows))

    def rows(self) -> Tuple[Vec4, Vec4, Vec4, Vec4]:
        """Copies of the four rows."""
        return tuple(r.copy() for r in self._rows)


def det(m: Mat4) -> Scalar:
    return m[0].dot(cross3(m[1], m[2], m[3]))


def trace(m: Mat4) -> Scalar:
    return m[0, 0] + m[1, 1] + m[2, 2] + m[3, 3]


def transpose(m: Mat4) -> Mat4:
    return Mat4(m.col(0), m.col(1), m.col(2), m.col(3))


def adjoint(m: Mat4) -> Mat4:
    """The cofactor matrix, built from 4D cross products of the other rows."""
    return Mat4(
        cross3(m[1], m[2], m[3]),
        cross3(-m[0], m[2], m[3]),
        cross3(m[0], m[1], m[3]),
        cross3(-m[0], m[1], m[2]),
    )


def invert_cramer(m: Mat4) -> Tuple[Mat4, Scalar]:
    """The inverse by Cramer's rule, with the determinant.

    Raises ValueError when the matrix is singular.
    """
    a = adjoint(m)
    d = a[0].dot(m[0])
    if d == 0.0:
        raise ValueError("matrix is singular")
    return transpose(a) / d, d


def invert(m: Mat4) -> Tuple[Mat4, Scalar]:
    """The inverse by Gaussian elimination with partial pivoting, with the determinant.

    Raises ValueError when no nonzero pivot can be found.
    """
    a = [list(r) for r in m]
    b = [[1.0 if i == j else 0.0 for j in range(4)] for i in range(4)]
    determinant = 1.0

    for i in range(4):
        j = max(range(i, 4), key=lambda k: abs(a[k][i]))
        if abs(a[j][i]) <= 0.0:
            raise ValueError("matrix is singular")
        if j != i:
            a[i], a[j] = a[j], a[i]
            b[i], b[j] = b[j], b[i]
            determinant = -determinant
        pivot = a[i][i]
        determinant *= pivot
        a[i] = [v / pivot for v in a[i]]
        b[i] = [v / pivot for v in b[i]]
        for r in range(i + 1, 4):
            t = a[r][i]
            a[r] = [x - y * t for x, y in zip(a[r], a[i])]
            b[r] = [x - y * t for x, y in zip(b[r], b[i])]

    for i in range(3, 0, -1):
        for r in range(i):
            t = a[r][i]
            b[r] = [x - y * t for x, y in zip(b[r], b[i])]

    return Mat4(*(Vec4(*row) for row in b)), determinant


def translation_matrix(d: Vec3) -> Mat4:
    return Mat4(
        Vec4(1, 0, 0, d[0]),
        Vec4(0, 1, 0, d[1]),
        Vec4(0, 0, 1, d[2]),
        Vec4(0, 0, 0, 1),
    )


def scaling_matrix(s: Vec3) -> Mat4:
    return Mat4(
        Vec4(s[0], 0, 0, 0),
        Vec4(0, s[1], 0, 0),
        Vec4(0, 0, s[2], 0),
        Vec4(0, 0, 0, 1),
    )


def rotation_matrix_rad(theta: Scalar, axis: Vec3) -> Mat4:
    """Rotation by theta radians about a unit axis."""
    c, s = math.cos(theta), math.sin(theta)
    x, y, z = axis
    xx, yy, zz = x * x, y * y, z * z
    xy, yz, xz = x * y, y * z, x * z
    xs, ys, zs = x * s, y * s, z * s
    return Mat4(
        Vec4(xx * (1 - c) + c, xy * (1 - c) - zs, xz * (1 - c) + ys, 0),
        Vec4(xy * (1 - c) + zs, yy * (1 - c) + c, yz * (1 - c) - xs, 0),
        Vec4(xz * (1 - c) - ys, yz * (1 - c) + xs, zz * (1 - c) + c, 0),
        Vec4(0, 0, 0, 1),
    )


def rotation_matrix_deg(theta: Scalar, axis: Vec3) -> Mat4:
    """Rotation by theta degrees about a unit axis."""
    return rotation_matrix_rad(theta * math.pi / 180.0, axis)


def perspective_matrix(fovy: Scalar, aspect: Scalar, zmin: Scalar, zmax: Scalar) -> Mat4:
    """A perspective projection; fovy is in degrees. zmax == 0 gives A = B = 1."""
    if zmax == 0.0:
        a = b = 1.0
    else:
        a = (zmax + zmin) / (zmin - zmax)
        b = (2 * zmax * zmin) / (zmin - zmax)
    f = 1.0 / math.tan(fovy * math.pi / 180.0 / 2.0)
    m = Mat4()
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = a
    m[2, 3] = b
    m[3, 2] = -1
    m[3, 3] = 0
    return m


def lookat_matrix(eye: Vec3, at: Vec3, up: Vec3) -> Mat4:
    """A viewing transform placing eye at the origin, looking down -z toward at."""
    up = up.copy()
    up.unitize()
    f = at - eye
    f.unitize()
    s = f ^ up
    u = s ^ f
    s.unitize()
    u.unitize()
    m = Mat4(
        Vec4.from_vec3(s, 0),
        Vec4.from_vec3(u, 0),
        Vec4.from_vec3(-f, 0),
        Vec4(0, 0, 0, 1),
    )
    return m * translation_matrix(-eye)


def viewport_matrix(w: Scalar, h: Scalar) -> Mat4:
    """Map normalised device coordinates to a w x h viewport with y pointing down."""
    return scaling_matrix(Vec3(w / 2.0, -h / 2.0, 1)) * translation_matrix(
        Vec3(1, -1, 0)
    )


def hat(vec: Vec3) -> Mat3:
    """The skew-symmetric matrix with hat(v) * u == v x u."""
    return Mat3(
        Vec3(0.0, -vec[2], vec[1]),
        Vec3(vec[2], 0.0, -vec[0]),
        Vec3(-vec[1], vec[0], 0.0),
    )


def trans_to_wt(trans: Mat4) -> Tuple[Vec3, Vec3]:
    """Split a rigid transform into an axis-angle rotation w and a translation t."""
    t = Vec3(trans[0, 3], trans[1, 3], trans[2, 3])
    tr = trans[0, 0] + trans[1, 1] + trans[2, 2]
    omegalen = math.acos(max(-1.0, min(1.0, (tr - 1.0) / 2.0)))
    if math.sin(omegalen) == 0.0:
        return Vec3(), t
    w = Vec3(
        trans[2, 1] - trans[1, 2],
        trans[0, 2] - trans[2, 0],
        trans[1, 0] - trans[0, 1],
    )
    w.unitize()
    return w * omegalen, t


def wt_to_trans(w: Vec3, t: Vec3) -> Mat4:
    """Build a rigid transform from an axis-angle rotation w and a translation t."""
    trans = Mat4.identity()
    for y in range(3):
        trans[y, 3] = t[y]

    omegalen = w.norm()
    reduced = omegalen
    while 2 * math.pi < reduced:
        reduced -= 2 * math.pi

    if reduced != 0.0:
        wn = w * reduced / omegalen
        omegahat = hat(wn)
        omegahat2 = omegahat * omegahat
        a = math.sin(reduced) / reduced
        b = (1.0 - math.cos(reduced)) / (reduced * reduced)
        for y in range(3):
            for x in range(3):
                trans[y, x] += a * omegahat[y, x] + b * omegahat2[y, x]
    return trans