"""
fo2calc package root.

Weapon vs. armor damage for Fallout 2 under the vanilla formula and the
community formulas of EcCo, FO2tweaks, YAAM and Glovz. The formula engine is
pure and stateless; loading data and the mod registry live beside it and are
only needed by callers that start from files.
"""
__version__ = "0.3.0"

from .exceptions import (
    DataLoadError,
    DataValidationError,
    Fo2CalcError,
    InvalidInputError,
    UnknownEntityError,
)
from .formulas import DamageRange, FormulaId, compute_damage, compute_range, parse_formula
from .models import Ammo, Armor, ModData, Weapon
from .resistance import damage_type, resolve_resistance

__all__ = [
    "__version__",
    "Ammo",
    "Armor",
    "DamageRange",
    "DataLoadError",
    "DataValidationError",
    "Fo2CalcError",
    "FormulaId",
    "InvalidInputError",
    "ModData",
    "UnknownEntityError",
    "Weapon",
    "compute_damage",
    "compute_range",
    "damage_type",
    "parse_formula",
    "resolve_resistance",
]
