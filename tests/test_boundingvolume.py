import pytest

from vegsim.boundingvolume import BoundingVolume
from vegsim.vector import Vec3


def _unit_box():
    volume = BoundingVolume()
    volume.include_point(Vec3(10.0, 10.0, 10.0))
    return volume


def test_new_volume_spans_origin():
    volume = BoundingVolume()
    assert volume.min_pos == Vec3()
    assert volume.max_pos == Vec3()
    assert volume.includes(Vec3())


def test_include_point_expands():
    volume = BoundingVolume()
    a = Vec3(-2.0, 3.0, 1.0)
    b = Vec3(4.0, -1.0, 6.0)
    volume.include_point(a)
    volume.include_point(b)
    assert volume.includes(a)
    assert volume.includes(b)
    assert volume.includes(Vec3())
    assert volume.min_pos == Vec3(-2.0, -1.0, 0.0)
    assert volume.max_pos == Vec3(4.0, 3.0, 6.0)


def test_includes_boundaries_and_rejects_outside():
    volume = _unit_box()
    assert volume.includes(Vec3(10.0, 0.0, 5.0))
    assert not volume.includes(Vec3(10.5, 0.0, 5.0))
    assert not volume.includes(Vec3(1.0, -0.1, 1.0))


def test_merge_covers_both_without_origin():
    a = BoundingVolume(Vec3(1, 1, 1), Vec3(2, 2, 2))
    b = BoundingVolume(Vec3(5, 5, 5), Vec3(6, 6, 6))
    merged = a.merge(b)
    assert merged.min_pos == Vec3(1, 1, 1)
    assert merged.max_pos == Vec3(6, 6, 6)
    assert not merged.includes(Vec3())


def test_interpolate_endpoints():
    volume = _unit_box()
    assert volume.interpolate((0, 0, 0), (4, 4, 4)) == volume.min_pos
    assert volume.interpolate((4, 4, 4), (4, 4, 4)) == volume.max_pos


def test_interpolate_rejects_value_beyond_resolution():
    with pytest.raises(ValueError):
        _unit_box().interpolate((5, 0, 0), (4, 4, 4))


@pytest.mark.parametrize("index", [(0, 0, 0), (3, 7, 9), (9, 9, 9), (5, 2, 1)])
def test_reverse_interpolate_round_trip(index):
    volume = _unit_box()
    res = (10, 10, 10)
    assert volume.reverse_interpolate(volume.interpolate(index, res), res, False) == index


def test_reverse_interpolate_clamps():
    volume = _unit_box()
    res = (10, 10, 10)
    assert volume.reverse_interpolate(Vec3(-50, -1, -0.5), res, False) == (0, 0, 0)
    assert volume.reverse_interpolate(Vec3(50, 10, 99), res, False) == (9, 9, 9)


def test_ceil_rounds_up_inside_cell():
    volume = _unit_box()
    res = (10, 10, 10)
    point = Vec3(2.5, 4.5, 6.5)
    low = volume.reverse_interpolate(point, res, False)
    high = volume.reverse_interpolate(point, res, True)
    assert [h - l for h, l in zip(high, low)] == [1, 1, 1]


def test_zero_resolution_rejected():
    with pytest.raises(ValueError):
        _unit_box().reverse_interpolate(Vec3(1, 1, 1), (0, 1, 1))