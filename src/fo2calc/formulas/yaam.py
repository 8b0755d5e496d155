"""YAAM (Yet Another Ammo Mod) damage formula.

The ammo's ``dr_mod`` acts as an ammo DT value subtracted from armor DT.
When that leaves DT negative, ten times the shortfall is taken off armor DR
instead, so strongly armor-piercing ammo gets an outsized DR reduction.
"""
from __future__ import annotations

import math

from fo2calc.formulas.common import DamageRange, Number, bypass_armor, check_inputs, damage_range
from fo2calc.models import Ammo, Armor, Weapon
from fo2calc.resistance import resolve_resistance

MULT_CRIT_SINGLE = 6
MULT_CRIT_BURST = 4
MULT_NORMAL = 2


def multiplier(critical: bool, burst: bool) -> int:
    if not critical:
        return MULT_NORMAL
    return MULT_CRIT_BURST if burst else MULT_CRIT_SINGLE


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
    res = bypass_armor(resolve_resistance(armor, weapon, ammo), weapon, critical)

    calc_dt = res.dt - ammo.dr_mod
    _calc_dt = 0
    if calc_dt < 0:
        _calc_dt = calc_dt * 10
        calc_dt = 0
    calc_dr = max(0, res.dr + _calc_dt)
    mult = multiplier(critical, burst)

    def roll(base: int) -> int:
        if calc_dr >= 100:
            return 0
        raw = math.floor((base + ranged_bonus - calc_dt) * mult * ammo.dmg_mult / ammo.dmg_div / 2)
        raw = max(0, raw)
        resisted = math.floor(calc_dr * raw / 100)
        return int(max(0, math.floor(raw - resisted)) * hits)

    return damage_range(roll, weapon)
