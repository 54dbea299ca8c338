import pytest

from vegsim import parameters, rng
from vegsim.boundingvolume import BoundingVolume
from vegsim.environment import Environment
from vegsim.plantgenetics import PlantGenetics
from vegsim.treeparameter import SpaceDividingMode
from vegsim.vector import Vec3

BUD = Vec3(5.5, 5.5, 5.5)
UP = Vec3(0.0, 1.0, 0.0)


@pytest.fixture
def env():
    rng.reset()
    return Environment(BoundingVolume(Vec3(0, 0, 0), Vec3(10, 10, 10)), resolution=10)


@pytest.fixture
def genetics():
    return PlantGenetics()


def _claim(env, genetics, bud_id):
    return env.markers.set_markers_in_cone(
        bud_id, BUD, UP, genetics.bud_perception_angle, genetics.bud_perception_radius_factor
    )


def test_defaults(env):
    assert env.mode == parameters.SPACE_DIV_MODE
    assert env.tropism_growth_direction_weight == parameters.TROPISM_START_WEIGTH
    assert env.tropism_dir == parameters.TROPISM_DIR


def test_increase_tropism(env):
    env.increase_tropism()
    expected = parameters.TROPISM_START_WEIGTH * parameters.TROPISM_CHANGE_RATE
    assert env.tropism_growth_direction_weight == pytest.approx(expected)


def test_is_inside(env):
    assert env.is_inside(BUD)
    assert env.is_inside(Vec3(10, 10, 10))
    assert not env.is_inside(Vec3(-0.1, 5, 5))


def test_shadow_mode_light(env, genetics):
    env.mode = SpaceDividingMode.SHADOW_VOXELS
    free = env.calc_light_gathered(BUD, genetics, 3, 0.3, UP)
    assert free == pytest.approx(parameters.SHADOW_VOXEL_C + parameters.SHADOW_VOXEL_A)
    env.shadowvoxels.add_shadow(BUD)
    shaded = env.calc_light_gathered(BUD, genetics, 3, 0.3, UP)
    assert shaded == pytest.approx(parameters.SHADOW_VOXEL_C)


def test_shadow_mode_direction_without_shadow(env, genetics):
    env.mode = SpaceDividingMode.SHADOW_VOXELS
    result = env.optimal_growth_direction(BUD, genetics, 3, 0.3, UP)
    assert tuple(result) == pytest.approx((0.0, 1.0, 0.0))


def test_marker_mode_light(env, genetics):
    env.mode = SpaceDividingMode.MARKERS
    assert env.calc_light_gathered(BUD, genetics, 3, 0.3, UP) == 0.0
    assert _claim(env, genetics, 3) > 0
    assert env.calc_light_gathered(BUD, genetics, 3, 0.3, UP) == 1.0
    assert env.calc_light_gathered(BUD, genetics, 4, 0.3, UP) == 0.0


def test_marker_mode_direction(env, genetics):
    env.mode = SpaceDividingMode.MARKERS
    _claim(env, genetics, 3)
    result = env.optimal_growth_direction(BUD, genetics, 3, 0.3, UP)
    assert result.length() == pytest.approx(1.0)
    assert result.y > 0.0


def test_none_mode(env, genetics):
    env.mode = SpaceDividingMode.NONE
    assert env.calc_light_gathered(BUD, genetics, 3, 0.3, UP) == 0.0
    assert env.optimal_growth_direction(BUD, genetics, 3, 0.3, UP) is None


def test_reset_space(env, genetics):
    _claim(env, genetics, 3)
    env.shadowvoxels.add_shadow(BUD)
    env.reset_space()
    assert env.markers.all_marked_points() == []
    expected = parameters.SHADOW_VOXEL_C + parameters.SHADOW_VOXEL_A
    assert env.shadowvoxels.light_exposure(BUD) == pytest.approx(expected)