"""FO2tweaks damage formula.

All arithmetic stays in floats, nothing is rounded before display::

    damage = (rnd + ranged_bonus - dt) * ammo_mult * crit_mult * (100 - dr) / 100
    ammo_mult = (100 + dr_mod) / 100
    dt = armor_dt * ammo_mult                       (after crit/Penetrate bypass)
    dr = armor_dr * ammo_mult   if dr_mod > 0       (hollow points)
       = armor_dr + dr_mod      otherwise           (armor piercing / ball)
    dr capped to [0, 90]

Burst fire is modelled as an expected value. Each bullet crits with
``BASE_CRIT_CHANCE`` (``SNIPER_LUCK_CRIT_CHANCE`` with Sniper Luck). These are
estimates of the engine's per-shot roll, not exact derivations.
"""
from __future__ import annotations

from fo2calc.formulas.common import DamageRange, Number, bypass_armor, check_inputs, damage_range
from fo2calc.models import Ammo, Armor, Weapon
from fo2calc.resistance import Resistance, resolve_resistance

CRIT_MULT = 2
MAX_DR = 90
BASE_CRIT_CHANCE = 0.05
SNIPER_LUCK_CRIT_CHANCE = 1 / 3


def _effective(res: Resistance, dr_mod: int, ammo_mult: float) -> Resistance:
    dt = max(0.0, res.dt * ammo_mult)
    if dr_mod > 0:
        dr = res.dr * ammo_mult
    else:
        dr = res.dr + dr_mod
    return Resistance(dr=max(0.0, min(float(MAX_DR), dr)), dt=dt)


def _shot(base: float, ranged_bonus: Number, res: Resistance, ammo_mult: float, crit_mult: int) -> float:
    damage = (base + ranged_bonus - res.dt) * ammo_mult * crit_mult * (100.0 - res.dr) / 100.0
    return max(0.0, damage)


def compute(
    weapon: Weapon,
    ammo: Ammo,
    armor: Armor,
    critical: bool = False,
    burst: bool = False,
    ranged_bonus: Number = 0,
    hits: Number = 1,
    sniper_luck: bool = False,
) -> DamageRange:
    check_inputs(ammo, ranged_bonus, hits)
    ammo_mult = (100.0 + ammo.dr_mod) / 100.0
    base_res = resolve_resistance(armor, weapon, ammo)
    normal_res = _effective(bypass_armor(base_res, weapon, False), ammo.dr_mod, ammo_mult)
    crit_res = _effective(bypass_armor(base_res, weapon, True), ammo.dr_mod, ammo_mult)
    crit_chance = SNIPER_LUCK_CRIT_CHANCE if sniper_luck else BASE_CRIT_CHANCE

    def roll(base: int) -> float:
        normal = _shot(base, ranged_bonus, normal_res, ammo_mult, 1)
        crit = _shot(base, ranged_bonus, crit_res, ammo_mult, CRIT_MULT)
        if not burst:
            return (crit if critical else normal) * hits
        if hits <= 0:
            return 0.0
        mixed = crit_chance * crit + (1 - crit_chance) * normal
        if critical:
            # first bullet is the requested critical, the rest roll
            return crit + (hits - 1) * mixed
        return hits * mixed

    return damage_range(roll, weapon)
