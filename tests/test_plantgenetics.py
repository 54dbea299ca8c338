from types import SimpleNamespace

import pytest

from vegsim import parameters
from vegsim.plantgenetics import PlantGenetics
from vegsim.treeparameter import GeneticKind, GeneticParameter


def test_defaults_come_from_parameters():
    genetics = PlantGenetics()
    assert genetics.borchert_honda_lambda == parameters.BORCHERT_HONDA_LAMBDA
    assert genetics.borchert_honda_alpha == parameters.BORCHERT_HONDA_ALPHA
    assert genetics.pole_length == parameters.POLE_LENGTH
    assert genetics.metamer_base_length == parameters.METAMER_BASE_LENGTH
    assert genetics.shed_treshhold == parameters.SHED_TRESHHOLD


def test_aux_requirement_without_metamer():
    assert PlantGenetics().aux_shoot_requirement(None) == parameters.AUX_SHOOT_REQUIREMENT


def test_aux_requirement_with_healthy_terminal():
    metamer = SimpleNamespace(terminal_bud_damage=0.0)
    assert PlantGenetics().aux_shoot_requirement(metamer) == parameters.AUX_SHOOT_REQUIREMENT


def test_aux_requirement_with_damaged_terminal():
    metamer = SimpleNamespace(terminal_bud_damage=1.0)
    assert PlantGenetics().aux_shoot_requirement(metamer) == parameters.TERM_SHOOT_REQUIREMENT


@pytest.mark.parametrize("kind", list(GeneticKind))
def test_update_then_get_round_trip(kind):
    genetics = PlantGenetics()
    genetics.update_param(GeneticParameter(kind, 2.5))
    assert genetics.get_param(GeneticParameter(kind)) == GeneticParameter(kind, 2.5)


def test_get_param_reports_current_value():
    genetics = PlantGenetics()
    result = genetics.get_param(GeneticParameter(GeneticKind.BORCHERT_HONDA_LAMBDA))
    assert result.value == parameters.BORCHERT_HONDA_LAMBDA


def test_update_aux_requirement_changes_only_that_field():
    genetics = PlantGenetics()
    genetics.update_param(GeneticParameter(GeneticKind.AUX_SHOOT_REQ, 0.7))
    assert genetics.aux_shoot_requirement() == 0.7
    assert genetics.terminal_shoot_requirement == parameters.TERM_SHOOT_REQUIREMENT
    assert genetics.pole_length == parameters.POLE_LENGTH