import math

import pytest

from vegsim.vector import Vec3, meter_to_real_length, rot_vec_around_axis


def _close(a, b, tol=1e-9):
    assert list(a) == pytest.approx(list(b), abs=tol)


def test_length_of_axis_aligned_vector():
    assert Vec3(0.0, 3.0, 0.0).length() == pytest.approx(3.0)


@pytest.mark.parametrize(
    "vec", [Vec3(1, 2, 3), Vec3(-4, 0.5, 7), Vec3(0, 0, -9), Vec3(1e-3, 2e-3, 0)]
)
def test_norm_has_unit_length(vec):
    assert vec.norm().length() == pytest.approx(1.0)


def test_norm_keeps_direction():
    vec = Vec3(2.0, -1.0, 4.0)
    assert vec.angle_between(vec.norm()) == pytest.approx(0.0, abs=1e-6)


def test_norm_of_zero_vector_is_nan():
    components = [str(c) for c in Vec3().norm()]
    assert components == ["nan", "nan", "nan"]


def test_cross_is_perpendicular_to_both():
    a = Vec3(1.0, 2.0, 3.0)
    b = Vec3(-2.0, 0.5, 1.0)
    c = a.cross(b)
    assert c.dot(a) == pytest.approx(0.0, abs=1e-9)
    assert c.dot(b) == pytest.approx(0.0, abs=1e-9)


def test_cross_is_anticommutative():
    a = Vec3(1.0, 2.0, 3.0)
    b = Vec3(4.0, -5.0, 6.0)
    _close(a.cross(b), -(b.cross(a)))


def test_angle_between_opposite_vectors_is_pi():
    a = Vec3(1.0, 1.0, 0.0)
    assert a.angle_between(-a) == pytest.approx(math.pi)


def test_angle_between_perpendicular_vectors():
    assert Vec3(1, 0, 0).angle_between(Vec3(0, 0, 5)) == pytest.approx(math.pi / 2)


def test_angle_with_zero_vector_is_nan():
    angle = Vec3(1, 0, 0).angle_between(Vec3())
    assert str(angle) == "nan"


def test_arithmetic_round_trips():
    a = Vec3(1.5, -2.0, 3.25)
    b = Vec3(0.5, 4.0, -1.0)
    assert (a + b) - b == a
    _close((a * 3.0) / 3.0, a)
    assert 2 * a == a * 2


def test_multiplying_two_vectors_is_rejected():
    with pytest.raises(TypeError):
        Vec3(1, 2, 3) * Vec3(1, 2, 3)


def test_meter_to_real_length():
    assert meter_to_real_length(1.0) == 5.0
    assert meter_to_real_length(3.0) == pytest.approx(3 * meter_to_real_length(1.0))


def test_rotation_quarter_turn_around_z():
    _close(rot_vec_around_axis(Vec3(1, 0, 0), Vec3(0, 0, 1), math.pi / 2), Vec3(0, 1, 0))


def test_full_turn_returns_original():
    vec = Vec3(0.3, -1.2, 2.0)
    _close(rot_vec_around_axis(vec, Vec3(1, 1, 0), 2 * math.pi), vec)


def test_rotation_preserves_length():
    vec = Vec3(0.3, -1.2, 2.0)
    rotated = rot_vec_around_axis(vec, Vec3(0.2, 1, -0.7), 1.1)
    assert rotated.length() == pytest.approx(vec.length())


def test_axis_scale_does_not_matter():
    vec = Vec3(1, 2, 3)
    _close(
        rot_vec_around_axis(vec, Vec3(0, 10, 0), 0.7),
        rot_vec_around_axis(vec, Vec3(0, 1, 0), 0.7),
    )