import math

import pytest

from vegsim import rng
from vegsim.boundingvolume import BoundingVolume
from vegsim.markerset import F32_MAX, Marker, MarkerSet
from vegsim.vector import Vec3

RES = (4, 4, 4)
UP = Vec3(0.0, 1.0, 0.0)
CENTER = Vec3(2.0, 2.0, 2.0)


@pytest.fixture
def marker_set():
    rng.reset()
    return MarkerSet(BoundingVolume(Vec3(0, 0, 0), Vec3(4, 4, 4)), RES)


def test_marker_claim_and_reset():
    marker = Marker(Vec3(1.0, 2.0, 3.0))
    assert marker.claimed_bud is None
    marker.claim(5, 2.0)
    assert marker.claimed_bud == 5
    assert marker.distance_to_claimed == 2.0
    marker.reset()
    assert marker.claimed_bud is None
    assert marker.distance_to_claimed == F32_MAX


def test_markers_are_laid_out_y_then_z_then_x(marker_set):
    assert len(marker_set.markers) == 64
    for i, marker in enumerate(marker_set.markers):
        x, y, z = marker_set.bounding_volume.reverse_interpolate(marker.position, RES, False)
        assert i == y * 16 + z * 4 + x


def test_construction_is_reproducible_after_reset(marker_set):
    rng.reset()
    other = MarkerSet(BoundingVolume(Vec3(0, 0, 0), Vec3(4, 4, 4)), RES)
    assert [m.position for m in other.markers] == [m.position for m in marker_set.markers]


def test_fresh_set_has_no_marked_points(marker_set):
    assert marker_set.all_marked_points() == []


def test_set_markers_in_cone_claims_for_bud(marker_set):
    count = marker_set.set_markers_in_cone(7, CENTER, UP, math.pi / 2, 1.5)
    assert count > 0
    marked = marker_set.all_marked_points()
    assert len(marked) == count
    assert all(m.claimed_bud == 7 for m in marked)


def test_same_claim_twice_takes_nothing(marker_set):
    marker_set.set_markers_in_cone(7, CENTER, UP, math.pi / 2, 1.5)
    assert marker_set.set_markers_in_cone(8, CENTER, UP, math.pi / 2, 1.5) == 0


def test_reset_releases_claims(marker_set):
    marker_set.set_markers_in_cone(7, CENTER, UP, math.pi / 2, 1.5)
    marker_set.reset()
    assert marker_set.all_marked_points() == []


def test_total_markers_for_id(marker_set):
    count = marker_set.set_markers_in_cone(7, CENTER, UP, math.pi / 2, 1.5)
    assert marker_set.total_markers_for_id_in_cone(7, CENTER, UP, math.pi / 2, 1.5) >= count
    assert marker_set.total_markers_for_id_in_cone(8, CENTER, UP, math.pi / 2, 1.5) == 0


def test_remove_markers_in_sphere_occupies_space(marker_set):
    marker_set.set_markers_in_cone(7, CENTER, UP, math.pi / 2, 1.5)
    marker_set.remove_markers_in_sphere(CENTER, 10.0)
    assert marker_set.all_marked_points() == []
    assert all(m.claimed_bud == 0 for m in marker_set.markers)
    assert marker_set.set_markers_in_cone(7, CENTER, UP, math.pi / 2, 1.5) == 0


def test_markers_dir_points_into_cone(marker_set):
    marker_set.set_markers_in_cone(7, CENTER, UP, math.pi / 2, 1.5)
    result = marker_set.markers_dir_for_id_in_cone(7, CENTER, UP, math.pi / 2, 1.5)
    assert result.length() == pytest.approx(1.0)
    assert result.y > 0.0


def test_markers_dir_none_when_cone_is_empty(marker_set):
    far = Vec3(100.0, 2.0, 2.0)
    assert marker_set.markers_dir_for_id_in_cone(7, far, Vec3(1, 0, 0), math.pi / 2, 1.5) is None


def test_markers_dir_without_owned_markers_is_undefined(marker_set):
    result = marker_set.markers_dir_for_id_in_cone(7, CENTER, UP, math.pi / 2, 1.5)
    assert all(math.isnan(c) for c in result)


def test_degenerate_volume_rejects_sphere_walk():
    rng.reset()
    markers = MarkerSet(BoundingVolume(), (2, 2, 2))
    with pytest.raises(ValueError):
        markers.remove_markers_in_sphere(Vec3(), 1.0)