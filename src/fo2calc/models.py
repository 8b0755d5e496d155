from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from fo2calc.exceptions import InvalidInputError, UnknownEntityError


def _require_finite(owner: str, field_name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"{owner}: {field_name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidInputError(f"{owner}: {field_name} must be finite, got {value!r}")


@dataclass(frozen=True)
class Weapon:
    """
    Immutable weapon record. ``caliber`` is the only join key to ammunition.
    """

    name: str
    caliber: str
    min_dmg: int
    max_dmg: int
    dmg_type: Optional[str] = None
    burst: Optional[int] = None
    burst_only: bool = False
    penetrate: bool = False

    def __post_init__(self) -> None:
        _require_finite(self.name, "min_dmg", self.min_dmg)
        _require_finite(self.name, "max_dmg", self.max_dmg)
        if self.min_dmg > self.max_dmg:
            raise InvalidInputError(
                f"{self.name}: min_dmg ({self.min_dmg}) is greater than max_dmg ({self.max_dmg})"
            )
        if self.burst is not None:
            if isinstance(self.burst, bool) or not isinstance(self.burst, int) or self.burst <= 0:
                raise InvalidInputError(f"{self.name}: burst must be a positive integer, got {self.burst!r}")
        if self.burst_only and self.burst is None:
            raise InvalidInputError(f"{self.name}: burst_only weapon has no burst size")

    @property
    def supports_burst(self) -> bool:
        return self.burst is not None

    @property
    def supports_single(self) -> bool:
        return not self.burst_only


@dataclass(frozen=True)
class Ammo:
    """
    Immutable ammunition record.

    ``dr_mod`` adjusts armor DR (negative for armor piercing, positive for
    hollow points). ``dmg_mult / dmg_div`` scales the weapon's base damage.
    ``ac_mod`` is carried for completeness; no formula reads it.
    """

    name: str
    caliber: str
    ac_mod: int = 0
    dr_mod: int = 0
    dmg_mult: float = 1
    dmg_div: float = 1
    dmg_type: Optional[str] = None

    def __post_init__(self) -> None:
        for field_name in ("ac_mod", "dr_mod", "dmg_mult", "dmg_div"):
            _require_finite(self.name, field_name, getattr(self, field_name))
        if self.dmg_div == 0:
            raise InvalidInputError(f"{self.name}: dmg_div must not be zero")

    @property
    def damage_ratio(self) -> float:
        return self.dmg_mult / self.dmg_div


@dataclass(frozen=True)
class Armor:
    """Immutable armor record with a (DR, DT) pair per damage type."""

    name: str
    abbrev: str
    dr: int = 0
    dt: int = 0
    dr_fire: int = 0
    dt_fire: int = 0
    dr_plasma: int = 0
    dt_plasma: int = 0
    dr_laser: int = 0
    dt_laser: int = 0
    dr_explosive: int = 0
    dt_explosive: int = 0

    def __post_init__(self) -> None:
        for field_name in (
            "dr", "dt",
            "dr_fire", "dt_fire",
            "dr_plasma", "dt_plasma",
            "dr_laser", "dt_laser",
            "dr_explosive", "dt_explosive",
        ):
            _require_finite(self.name, field_name, getattr(self, field_name))


@dataclass(frozen=True)
class ModData:
    """Weapons, ammunition and armor shipped by one mod."""

    mod_id: str
    weapons: Tuple[Weapon, ...] = ()
    ammo: Tuple[Ammo, ...] = ()
    armor: Tuple[Armor, ...] = ()

    def weapon_named(self, name: str) -> Weapon:
        for w in self.weapons:
            if w.name == name:
                return w
        raise UnknownEntityError(f"Unknown weapon '{name}' in mod '{self.mod_id}'")

    def ammo_named(self, name: str) -> Ammo:
        for a in self.ammo:
            if a.name == name:
                return a
        raise UnknownEntityError(f"Unknown ammo '{name}' in mod '{self.mod_id}'")

    def armor_named(self, name: str) -> Armor:
        for a in self.armor:
            if a.name == name:
                return a
        raise UnknownEntityError(f"Unknown armor '{name}' in mod '{self.mod_id}'")


__all__ = [
    "Weapon",
    "Ammo",
    "Armor",
    "ModData",
]
