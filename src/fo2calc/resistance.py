"""Pick which of an armor's (DR, DT) pairs applies to an attack."""
from __future__ import annotations

from dataclasses import dataclass

from fo2calc.models import Ammo, Armor, Weapon

NORMAL = "normal"

# Electrical damage reuses the plasma pair; the game has no electrical stats.
_ATTRS_BY_TYPE = {
    "fire": ("dr_fire", "dt_fire"),
    "plasma": ("dr_plasma", "dt_plasma"),
    "laser": ("dr_laser", "dt_laser"),
    "electrical": ("dr_plasma", "dt_plasma"),
    "explosive": ("dr_explosive", "dt_explosive"),
}


@dataclass(frozen=True)
class Resistance:
    dr: float
    dt: float


def damage_type(weapon: Weapon, ammo: Ammo) -> str:
    """Ammo damage type wins over the weapon's; both absent means normal."""
    return ammo.dmg_type or weapon.dmg_type or NORMAL


def resistance_for_type(armor: Armor, dmg_type: str) -> Resistance:
    dr_attr, dt_attr = _ATTRS_BY_TYPE.get(dmg_type, ("dr", "dt"))
    return Resistance(dr=getattr(armor, dr_attr), dt=getattr(armor, dt_attr))


def resolve_resistance(armor: Armor, weapon: Weapon, ammo: Ammo) -> Resistance:
    return resistance_for_type(armor, damage_type(weapon, ammo))


__all__ = [
    "NORMAL",
    "Resistance",
    "damage_type",
    "resistance_for_type",
    "resolve_resistance",
]
