from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Sequence, Union

from fo2calc.exceptions import UnknownEntityError
from fo2calc.formulas import FormulaId, compute_damage, parse_formula
from fo2calc.formulas.common import Number, round_half_up
from fo2calc.models import Ammo, ModData, Weapon
from fo2calc.mods import REFERENCE_MOD, ModRegistry

logger = logging.getLogger(__name__)

# Without point-blank range only about a third of a burst is assumed to land
BODY_SHOT_FRACTION = 3

DamageTable = Dict[str, Dict[str, Dict[str, str]]]


def calculate_hits(burst: bool, point_blank: bool, burst_rounds: int) -> int:
    """Bullets assumed to hit: 1 single shot, all at point blank, else a third."""
    if not burst:
        return 1
    if point_blank:
        return burst_rounds
    return round_half_up(burst_rounds / BODY_SHOT_FRACTION)


def compatible_ammo(weapon: Weapon, ammo: Sequence[Ammo]) -> List[Ammo]:
    return [a for a in ammo if a.caliber == weapon.caliber]


def damage_table(
    mod: ModData,
    formula: Union[FormulaId, str],
    *,
    critical: bool = False,
    burst: bool = False,
    point_blank: bool = False,
    ranged_bonus: Number = 0,
    sniper_luck: bool = False,
) -> DamageTable:
    """Damage strings for every weapon, compatible ammo and armor in a mod.

    Weapons that cannot fire in the requested mode (single shot from a
    burst-only weapon, burst from a single-shot weapon) are left out.
    """
    formula_id = parse_formula(formula)
    table: DamageTable = {}
    for weapon in mod.weapons:
        if burst and not weapon.supports_burst:
            continue
        if not burst and not weapon.supports_single:
            continue
        hits = calculate_hits(burst, point_blank, weapon.burst or 1)
        rows: Dict[str, Dict[str, str]] = {}
        for ammo in compatible_ammo(weapon, mod.ammo):
            rows[ammo.name] = {
                armor.name: compute_damage(
                    formula_id,
                    weapon,
                    ammo,
                    armor,
                    critical=critical,
                    burst=burst,
                    ranged_bonus=ranged_bonus,
                    hits=hits,
                    sniper_luck=sniper_luck,
                )
                for armor in mod.armor
            }
        if not rows:
            logger.debug("No %s ammo for %s in mod %s", weapon.caliber, weapon.name, mod.mod_id)
        table[weapon.name] = rows
    return table


def compare_mods(
    mods: Mapping[str, ModData],
    registry: ModRegistry,
    weapon_name: str,
    ammo_name: str,
    *,
    critical: bool = False,
    burst: bool = False,
    point_blank: bool = False,
    ranged_bonus: Number = 0,
    sniper_luck: bool = False,
) -> Dict[str, Dict[str, str]]:
    """One weapon and ammo across every mod, each under its own formula.

    Rows follow the registry order and always span the vanilla armor list.
    A mod that lacks an armor is scored against the vanilla record of the
    same name. Mods without the weapon, the ammo in its caliber, or the
    requested fire mode are left out.
    """
    try:
        reference = mods[REFERENCE_MOD]
    except KeyError:
        raise UnknownEntityError(f"Reference mod '{REFERENCE_MOD}' not in mod data") from None

    result: Dict[str, Dict[str, str]] = {}
    for cfg in registry.ordered():
        mod = mods.get(cfg.id)
        if mod is None:
            continue
        weapon = next((w for w in mod.weapons if w.name == weapon_name), None)
        if weapon is None:
            logger.debug("Mod %s has no weapon %s", cfg.id, weapon_name)
            continue
        if (burst and not weapon.supports_burst) or (not burst and not weapon.supports_single):
            continue
        ammo = next((a for a in compatible_ammo(weapon, mod.ammo) if a.name == ammo_name), None)
        if ammo is None:
            logger.debug("Mod %s has no %s ammo %s", cfg.id, weapon.caliber, ammo_name)
            continue

        own_armor = {a.name: a for a in mod.armor}
        hits = calculate_hits(burst, point_blank, weapon.burst or 1)
        result[cfg.id] = {
            armor.name: compute_damage(
                cfg.formula_id,
                weapon,
                ammo,
                own_armor.get(armor.name, armor),
                critical=critical,
                burst=burst,
                ranged_bonus=ranged_bonus,
                hits=hits,
                sniper_luck=sniper_luck,
            )
            for armor in reference.armor
        }
    return result


__all__ = [
    "BODY_SHOT_FRACTION",
    "DamageTable",
    "calculate_hits",
    "compare_mods",
    "compatible_ammo",
    "damage_table",
]
