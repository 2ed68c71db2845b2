import math

import pytest

from pmvskit.mat3 import rodrigues
from pmvskit.mat4 import (
    Mat4,
    adjoint,
    det,
    hat,
    invert,
    invert_cramer,
    lookat_matrix,
    perspective_matrix,
    rotation_matrix_deg,
    rotation_matrix_rad,
    scaling_matrix,
    trans_to_wt,
    translation_matrix,
    transpose,
    viewport_matrix,
    wt_to_trans,
)
from pmvskit.vec3 import Vec3
from pmvskit.vec4 import Vec4


def _flat(m):
    return [m[i, j] for i in range(4) for j in range(4)]


def _assert_close(a, b, tol=1e-9):
    assert _flat(a) == pytest.approx(_flat(b), abs=tol)


@pytest.fixture
def sample():
    return Mat4(
        Vec4(0, 2, 1, 0),
        Vec4(3, 1, 0, 1),
        Vec4(1, 0, 4, 2),
        Vec4(0, 1, 2, 5),
    )


def test_identity_properties(sample):
    assert det(Mat4.identity()) == 1
    assert Mat4.identity() * sample == sample


def test_transpose_involution(sample):
    assert transpose(transpose(sample)) == sample
    assert transpose(sample)[0] == sample.col(0)


def test_adjoint_gives_det_times_identity(sample):
    d = det(sample)
    _assert_close(sample * transpose(adjoint(sample)), Mat4.identity() * d)


def test_invert_round_trip(sample):
    inv, d = invert(sample)
    assert d == pytest.approx(det(sample))
    _assert_close(sample * inv, Mat4.identity())


def test_invert_matches_cramer(sample):
    inv_g, d_g = invert(sample)
    inv_c, d_c = invert_cramer(sample)
    _assert_close(inv_g, inv_c)
    assert d_g == pytest.approx(d_c)


def test_singular_raises():
    v = Vec4(1, 2, 3, 4)
    m = Mat4(v, v * 2, Vec4(0, 1, 0, 0), Vec4(0, 0, 1, 0))
    with pytest.raises(ValueError):
        invert(m)
    with pytest.raises(ValueError):
        invert_cramer(m)


def test_arithmetic(sample):
    assert sample + sample == 2 * sample
    assert sample - sample == Mat4()
    assert -sample == sample * -1
    assert (sample * 2) / 2 == sample


def test_setitem_row_type():
    m = Mat4()
    m[2, 1] = 9
    assert m.col(1) == Vec4(0, 0, 9, 0)
    with pytest.raises(TypeError):
        m[0] = Vec3(1, 2, 3)


def test_translation_moves_point():
    d = Vec3(1, -2, 3)
    p = Vec3(4, 5, 6)
    assert translation_matrix(d) * p == p + d


def test_translation_inverse():
    d = Vec3(1, -2, 3)
    _assert_close(translation_matrix(d) * translation_matrix(-d), Mat4.identity())


def test_scaling_matrix():
    m = scaling_matrix(Vec3(2, 3, 4))
    assert m * Vec3(1, 1, 1) == Vec3(2, 3, 4)


def test_homogeneous_division():
    m = Mat4.identity()
    m[3, 3] = 2
    assert m * Vec3(2, 4, 6) == Vec3(1, 2, 3)


def test_homogeneous_zero_w_is_not_divided():
    m = Mat4.identity()
    m[3, 3] = 0
    assert m * Vec3(2, 4, 6) == Vec3(2, 4, 6)


def test_rotation_is_orthogonal_and_fixes_axis():
    axis = Vec3(1, 2, 2) / 3
    r = rotation_matrix_rad(0.7, axis)
    _assert_close(r * transpose(r), Mat4.identity())
    assert det(r) == pytest.approx(1.0)
    assert list(r * axis) == pytest.approx(list(axis))


def test_rotation_deg_matches_rad():
    axis = Vec3(0, 0, 1)
    _assert_close(rotation_matrix_deg(90, axis), rotation_matrix_rad(math.pi / 2, axis))


def test_rotation_matches_rodrigues():
    axis = Vec3(1, 2, 2) / 3
    r4 = rotation_matrix_rad(0.7, axis)
    r3 = rodrigues(axis * 0.7)
    assert [r4[i, j] for i in range(3) for j in range(3)] == pytest.approx(
        [r3[i, j] for i in range(3) for j in range(3)]
    )


def test_perspective_fixed_entries():
    m = perspective_matrix(60.0, 1.5, 1.0, 100.0)
    assert m[3, 2] == -1
    assert m[3, 3] == 0
    assert m[0, 0] * 1.5 == pytest.approx(m[1, 1])


def test_perspective_maps_near_and_far_planes():
    m = perspective_matrix(60.0, 1.0, 1.0, 100.0)
    near = m * Vec4(0, 0, -1.0, 1)
    far = m * Vec4(0, 0, -100.0, 1)
    assert near[2] / near[3] == pytest.approx(-1.0)
    assert far[2] / far[3] == pytest.approx(1.0)


def test_perspective_without_far_plane():
    m = perspective_matrix(90.0, 1.0, 1.0, 0.0)
    assert m[2, 2] == 1.0 and m[2, 3] == 1.0


def test_lookat_moves_eye_to_origin_and_target_down_z():
    eye = Vec3(1, 2, 3)
    at = Vec3(1, 2, -2)
    m = lookat_matrix(eye, at, Vec3(0, 1, 0))
    assert list(m * eye) == pytest.approx([0, 0, 0])
    dist = (at - eye).norm()
    assert list(m * at) == pytest.approx([0, 0, -dist])


def test_viewport_corners():
    m = viewport_matrix(640, 480)
    assert list(m * Vec3(-1, 1, 0)) == pytest.approx([0, 0, 0])
    assert list(m * Vec3(1, -1, 0)) == pytest.approx([640, 480, 0])


def test_hat_is_cross_product():
    v, u = Vec3(1, 2, 3), Vec3(-2, 0, 5)
    assert hat(v) * u == v ^ u


def test_wt_round_trip():
    w = Vec3(0.1, 0.2, -0.3)
    t = Vec3(1, 2, 3)
    w2, t2 = trans_to_wt(wt_to_trans(w, t))
    assert list(w2) == pytest.approx(list(w))
    assert list(t2) == pytest.approx(list(t))


def test_wt_to_trans_rotation_matches_rodrigues():
    w = Vec3(0.1, 0.2, -0.3)
    trans = wt_to_trans(w, Vec3())
    r = rodrigues(w)
    assert [trans[i, j] for i in range(3) for j in range(3)] == pytest.approx(
        [r[i, j] for i in range(3) for j in range(3)]
    )
    assert trans[3] == Vec4(0, 0, 0, 1)


def test_wt_zero_rotation_is_translation():
    t = Vec3(4, 5, 6)
    assert wt_to_trans(Vec3(), t) == translation_matrix(t)
    w, t2 = trans_to_wt(translation_matrix(t))
    assert w == Vec3()
    assert t2 == t