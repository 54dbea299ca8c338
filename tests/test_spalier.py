from vegsim.metamer import Metamer
from vegsim.plant import Plant
from vegsim.plantgenetics import PlantGenetics
from vegsim.spalier import AutopruneSpalier
from vegsim.vector import Vec3

UP = Vec3(0.0, 1.0, 0.0)


def _next(prev: Metamer, genetics: PlantGenetics) -> Metamer:
    return Metamer(prev.end_point, prev.end_point + UP * 0.3, genetics, 1)


def _plant_with_trunk(count: int, switch_to_aux: bool = False):
    genetics = PlantGenetics()
    plant = Plant(Vec3(0.0, 0.0, 25.0), genetics)
    trunk = [plant.root]
    for i in range(1, count):
        child = _next(trunk[-1], genetics)
        if switch_to_aux and (i - 1) % 6 == 5:
            trunk[-1].auxillary_metamer = child
        else:
            trunk[-1].terminal_metamer = child
        trunk.append(child)
    return plant, trunk


def test_first_layer_rules():
    plant, trunk = _plant_with_trunk(8)
    AutopruneSpalier().update_plant(plant)
    for metamer in trunk[:3]:
        assert metamer.auxillary_bud_damage == 1.0
    assert trunk[3].auxillary_bud_damage == 0.0
    assert trunk[3].aux_support_pole.direction == Vec3(-1.0, 0.0, 0.0)
    assert trunk[3].aux_support_pole.visible is True
    assert trunk[3].aux_support_pole.model.start_width == 0.0001
    assert trunk[4].aux_support_pole.direction == Vec3(1.0, 0.0, 0.0)
    assert trunk[4].aux_support_pole.visible is True


def test_sixth_metamer_hands_trunk_to_auxiliary_bud():
    plant, trunk = _plant_with_trunk(8)
    AutopruneSpalier().update_plant(plant)
    assert trunk[5].terminal_metamer is None
    assert trunk[5].terminal_bud_damage == 1.0
    assert trunk[5].aux_support_pole.direction == UP
    assert trunk[5].aux_support_pole.visible is False


def test_trunk_height_is_limited():
    plant, trunk = _plant_with_trunk(27, switch_to_aux=True)
    AutopruneSpalier().update_plant(plant)
    assert trunk[24].terminal_metamer is None
    assert trunk[24].auxillary_metamer is None
    assert trunk[24].terminal_bud_damage == 1.0
    assert trunk[24].auxillary_bud_damage == 1.0
    # layers are chained through auxiliary metamers
    assert trunk[11].auxillary_metamer is trunk[12]


def test_existing_side_branch_is_shortened():
    plant, trunk = _plant_with_trunk(5)
    genetics = plant.genetics
    branch = _next(trunk[3], genetics)
    follower = _next(branch, genetics)
    branch.terminal_metamer = follower
    side = _next(follower, genetics)
    side_next = _next(side, genetics)
    side_tip = _next(side_next, genetics)
    side.terminal_metamer = side_next
    side_next.terminal_metamer = side_tip
    follower.auxillary_metamer = side
    trunk[3].auxillary_metamer = branch

    AutopruneSpalier().update_plant(plant)

    assert trunk[3].auxillary_metamer is branch
    assert trunk[3].aux_support_pole is None
    assert side.terminal_metamer is side_next
    assert side_next.terminal_metamer is None
    assert side.longest_path() == 2