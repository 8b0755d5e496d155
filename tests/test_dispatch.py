import logging

import pytest

from fo2calc.exceptions import InvalidInputError
from fo2calc.formulas import DEFAULT_FORMULA, FORMULAS, FormulaId, compute_damage, parse_formula
from fo2calc.models import Weapon


def test_every_formula_id_is_registered():
    assert set(FORMULAS) == set(FormulaId)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("fallout2", FormulaId.FALLOUT2),
        ("FO2tweaks", FormulaId.FO2TWEAKS),
        (" yaam ", FormulaId.YAAM),
        ("glovz", FormulaId.GLOVZ),
        ("ECCO", FormulaId.ECCO),
        (FormulaId.GLOVZ, FormulaId.GLOVZ),
    ],
)
def test_parse_formula_known_names(name, expected):
    assert parse_formula(name) is expected


def test_unknown_formula_warns_and_falls_back(caplog, pistol, ap_ammo, combat_armor):
    caplog.set_level(logging.WARNING, logger="fo2calc.formulas")

    result = compute_damage("sfall-custom", pistol, ap_ammo, combat_armor, critical=True)

    assert result == compute_damage("fallout2", pistol, ap_ammo, combat_armor, critical=True)
    assert any("Unknown formula" in rec.message for rec in caplog.records)
    assert DEFAULT_FORMULA is FormulaId.FALLOUT2


def test_known_formula_does_not_warn(caplog, pistol, ball_ammo, no_armor):
    caplog.set_level(logging.WARNING, logger="fo2calc.formulas")
    compute_damage("ecco", pistol, ball_ammo, no_armor)
    assert not caplog.records


def test_empty_formula_name_falls_back():
    assert parse_formula("") is FormulaId.FALLOUT2
    assert parse_formula(None) is FormulaId.FALLOUT2


@pytest.mark.parametrize("formula", list(FormulaId))
def test_same_arguments_same_result(formula, smg, ap_ammo, combat_armor):
    kwargs = dict(critical=True, burst=True, ranged_bonus=4, hits=3, sniper_luck=True)
    first = compute_damage(formula, smg, ap_ammo, combat_armor, **kwargs)
    second = compute_damage(formula, smg, ap_ammo, combat_armor, **kwargs)
    assert first == second


@pytest.mark.parametrize("formula", list(FormulaId))
def test_malformed_numbers_fail_fast(formula, pistol, ball_ammo, no_armor):
    with pytest.raises(InvalidInputError):
        compute_damage(formula, pistol, ball_ammo, no_armor, hits=-1)
    with pytest.raises(InvalidInputError):
        compute_damage(formula, pistol, ball_ammo, no_armor, ranged_bonus=float("nan"))
    with pytest.raises(ValueError):
        compute_damage(formula, pistol, ball_ammo, no_armor, ranged_bonus=float("inf"))


@pytest.mark.parametrize("formula", list(FormulaId))
def test_zero_damage_weapon_renders_single_zero(formula, ball_ammo, no_armor):
    dud = Weapon(name="Dud", caliber="10mm", min_dmg=0, max_dmg=0)
    assert compute_damage(formula, dud, ball_ammo, no_armor) == "0"
