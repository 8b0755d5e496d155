"""Glovz damage formula.

Ammo never adds DR: a positive ``dr_mod`` is flipped negative. Armor DT is
divided by the ammo's damage divisor and armor DR by its damage multiplier,
each rounded on its own. An armor stat of zero or less skips its step.
"""
from __future__ import annotations

import math

from fo2calc.formulas.common import DamageRange, Number, bypass_armor, check_inputs, damage_range, round_half_up
from fo2calc.formulas.yaam import multiplier
from fo2calc.models import Ammo, Armor, Weapon
from fo2calc.resistance import resolve_resistance


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

    ammo_x = ammo.dmg_mult if ammo.dmg_mult > 0 else 1
    ammo_y = ammo.dmg_div if ammo.dmg_div > 0 else 1
    ammo_drm = -ammo.dr_mod if ammo.dr_mod > 0 else ammo.dr_mod
    mult = multiplier(critical, burst)

    calc_dt = round_half_up(res.dt / ammo_y) if res.dt > 0 else 0
    calc_dr = 0
    if res.dr > 0:
        calc_dr = res.dr + ammo_drm
        calc_dr = min(100, round_half_up(calc_dr / ammo_x)) if calc_dr > 0 else 0

    def roll(base: int) -> int:
        damage = base + ranged_bonus - calc_dt
        if damage > 0 and calc_dr > 0:
            damage -= round_half_up(damage * calc_dr / 100)
        damage = max(0, damage)
        return int(math.floor(damage * mult / 2) * hits)

    return damage_range(roll, weapon)
