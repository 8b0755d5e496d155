"""Pieces shared by every damage formula variant.

Each variant keeps its own rounding; only the helpers below are common:

- ``DamageRange``: the numeric min/max pair a formula returns, and its
  string form (``"min-max"``, or ``"0"`` when nothing gets through).
- ``round_half_up``: halves round away from zero for positive values, the
  rounding the community damage tables were checked against.
- ``bypass_armor``: critical hits and the Penetrate perk lowering armor.
- ``check_inputs``: fail fast on values that would turn into NaN/Infinity.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Union

from fo2calc.exceptions import InvalidInputError
from fo2calc.models import Ammo, Weapon
from fo2calc.resistance import Resistance

Number = Union[int, float]

CRIT_BYPASS_FACTOR = 0.2
PENETRATE_DT_DIVISOR = 5


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_float(value: float) -> str:
    """Render with at most one decimal, dropping a trailing ``.0``."""
    rounded = Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    if rounded == rounded.to_integral_value():
        return str(int(rounded))
    return str(rounded)


def format_number(value: Number) -> str:
    if isinstance(value, int):
        return str(value)
    return format_float(value)


@dataclass(frozen=True)
class DamageRange:
    min: Number
    max: Number

    def render(self) -> str:
        low = format_number(self.min)
        high = format_number(self.max)
        if low == "0" and high == "0":
            return "0"
        return f"{low}-{high}"

    @property
    def average(self) -> float:
        return (self.min + self.max) / 2

    @classmethod
    def parse(cls, text: str) -> "DamageRange":
        """Inverse of :meth:`render`; a single value means min == max."""
        parts = text.strip().split("-")
        if not 1 <= len(parts) <= 2 or not all(parts):
            raise InvalidInputError(f"Not a damage range: {text!r}")
        try:
            values = [float(p) for p in parts]
        except ValueError as exc:
            raise InvalidInputError(f"Not a damage range: {text!r}") from exc
        numbers = [int(v) if v.is_integer() else v for v in values]
        return cls(min=numbers[0], max=numbers[-1])

    def __str__(self) -> str:
        return self.render()


def bypass_armor(res: Resistance, weapon: Weapon, critical: bool) -> Resistance:
    """Critical hits cut DR and DT to 20%; otherwise Penetrate cuts DT to a fifth.

    The two never stack.
    """
    if critical:
        return Resistance(dr=res.dr * CRIT_BYPASS_FACTOR, dt=res.dt * CRIT_BYPASS_FACTOR)
    if weapon.penetrate:
        return Resistance(dr=res.dr, dt=res.dt // PENETRATE_DT_DIVISOR)
    return res


def check_inputs(ammo: Ammo, ranged_bonus: Number, hits: Number) -> None:
    if ammo.dmg_div == 0:
        raise InvalidInputError(f"{ammo.name}: dmg_div must not be zero")
    for label, value in (("ranged_bonus", ranged_bonus), ("hits", hits)):
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise InvalidInputError(f"{label} must be a finite number, got {value!r}")
    if hits < 0:
        raise InvalidInputError(f"hits must not be negative, got {hits!r}")


def damage_range(roll: Callable[[int], Number], weapon: Weapon) -> DamageRange:
    return DamageRange(min=roll(weapon.min_dmg), max=roll(weapon.max_dmg))


FormulaFn = Callable[..., DamageRange]


__all__ = [
    "CRIT_BYPASS_FACTOR",
    "PENETRATE_DT_DIVISOR",
    "DamageRange",
    "FormulaFn",
    "Number",
    "bypass_armor",
    "check_inputs",
    "damage_range",
    "format_float",
    "format_number",
    "round_half_up",
]
