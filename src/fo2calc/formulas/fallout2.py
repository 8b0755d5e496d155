from __future__ import annotations

from fo2calc.formulas.common import DamageRange, Number, bypass_armor, check_inputs, damage_range, round_half_up
from fo2calc.models import Ammo, Armor, Weapon
from fo2calc.resistance import resolve_resistance

# On top of the x2 the game already folds into critical damage tables
CRIT_MULT_SINGLE = 3
CRIT_MULT_BURST = 2
MAX_DR = 90


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
    """Vanilla Fallout 2: integer damage per bullet, times bullets that hit."""
    check_inputs(ammo, ranged_bonus, hits)
    res = bypass_armor(resolve_resistance(armor, weapon, ammo), weapon, critical)
    effective_dr = max(0, min(MAX_DR, res.dr + ammo.dr_mod))
    crit_mult = (CRIT_MULT_BURST if burst else CRIT_MULT_SINGLE) if critical else 1
    ratio = ammo.damage_ratio

    def roll(base: int) -> int:
        damage = ((base * ratio + ranged_bonus) * crit_mult - res.dt) * (100 - effective_dr) / 100
        return int(round_half_up(max(0, damage)) * hits)

    return damage_range(roll, weapon)
