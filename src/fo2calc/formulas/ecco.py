"""EcCo (Economy and Combat Overhaul) damage formula.

Float arithmetic. Only armor-piercing ammo touches DT
(``dt + dr_mod / 10 * 1.3``); hollow points only raise DR. DR itself works
like vanilla but is capped at 100 instead of 90.

A critical burst lands half of its bullets (rounded up) as criticals, the
rest as normal hits. Sniper Luck makes every bullet critical.
"""
from __future__ import annotations

import math

from fo2calc.formulas.common import DamageRange, Number, bypass_armor, check_inputs, damage_range
from fo2calc.formulas.fallout2 import CRIT_MULT_BURST, CRIT_MULT_SINGLE
from fo2calc.models import Ammo, Armor, Weapon
from fo2calc.resistance import Resistance, resolve_resistance

AP_DT_FACTOR = 1.3
MAX_DR = 100


def _effective(res: Resistance, dr_mod: int) -> Resistance:
    dt = res.dt
    if dr_mod < 0:
        dt = max(0.0, dt + dr_mod / 10 * AP_DT_FACTOR)
    dr = max(0, min(MAX_DR, res.dr + dr_mod))
    return Resistance(dr=dr, dt=dt)


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
    base_res = resolve_resistance(armor, weapon, ammo)
    normal_res = _effective(bypass_armor(base_res, weapon, False), ammo.dr_mod)
    crit_res = _effective(bypass_armor(base_res, weapon, True), ammo.dr_mod)
    crit_mult = CRIT_MULT_BURST if burst else CRIT_MULT_SINGLE
    ratio = ammo.damage_ratio

    def shot(base: int, res: Resistance, mult: int) -> float:
        damage = ((base * ratio + ranged_bonus) * mult - res.dt) * (100 - res.dr) / 100
        return max(0.0, float(damage))

    def roll(base: int) -> float:
        normal = shot(base, normal_res, 1)
        if not critical:
            return normal * hits
        crit = shot(base, crit_res, crit_mult)
        if not burst or sniper_luck:
            return crit * hits
        crit_hits = math.ceil(hits / 2)
        return crit * crit_hits + normal * (hits - crit_hits)

    return damage_range(roll, weapon)
