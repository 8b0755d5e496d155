"""Load normalized mod data (``data.json``) into typed records.

The file is what the CSV conversion step produces::

    {"mods": {"vanilla": {"weapons": [...], "ammo": [...], "armor": [...]}, ...}}

Documents are validated against the packaged JSON Schema before any record is
built, so record constructors only see well-typed values. Older exports carry a
single float ``dmg_mod`` per ammo instead of ``dmg_mult``/``dmg_div``; it is
turned back into a fraction with a denominator of at most 10. A value no such
fraction fits to within 0.005 (1.15, say) is rejected rather than guessed.
"""
from __future__ import annotations

import json
import logging
import os
from fractions import Fraction
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Mapping

from jsonschema import Draft202012Validator

from fo2calc.exceptions import DataLoadError, DataValidationError, InvalidInputError
from fo2calc.models import Ammo, Armor, ModData, Weapon

logger = logging.getLogger(__name__)

SCHEMA_NAME = "mod_data.schema.json"
# Legacy dmg_mod values were written with two decimals from an integer mult/div
LEGACY_MAX_DIVISOR = 10
LEGACY_MAX_ERROR = 0.005


@lru_cache(maxsize=1)
def _load_schema() -> Dict[str, Any]:
    text = resources.files("fo2calc.data").joinpath("schemas").joinpath(SCHEMA_NAME).read_text(encoding="utf-8")
    logger.debug("Loaded mod data schema %s", SCHEMA_NAME)
    return json.loads(text)


def validate_mod_data(data: Any) -> None:
    """
    Validate raw mod data against the JSON schema.

    Raises:
        DataValidationError with every schema error attached.
    """
    validator = Draft202012Validator(_load_schema())
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errors:
        for err in errors:
            logger.debug("Mod data schema error at %s: %s", list(err.path), err.message)
        raise DataValidationError("Mod data validation failed", errors)


def _weapon(raw: Mapping[str, Any]) -> Weapon:
    return Weapon(
        name=raw["name"],
        caliber=raw["caliber"],
        min_dmg=raw["min_dmg"],
        max_dmg=raw["max_dmg"],
        dmg_type=raw.get("dmg_type") or None,
        burst=raw.get("burst"),
        burst_only=bool(raw.get("burst_only", False)),
        penetrate=bool(raw.get("penetrate", False)),
    )


def _ammo(raw: Mapping[str, Any]) -> Ammo:
    if "dmg_mult" in raw:
        mult, div = raw["dmg_mult"], raw.get("dmg_div", 1)
    else:
        ratio = Fraction(raw["dmg_mod"]).limit_denominator(LEGACY_MAX_DIVISOR)
        if abs(float(ratio) - raw["dmg_mod"]) > LEGACY_MAX_ERROR:
            raise InvalidInputError(
                f"{raw['name']}: dmg_mod {raw['dmg_mod']} is not a fraction with a denominator of at most {LEGACY_MAX_DIVISOR}"
            )
        mult, div = ratio.numerator, ratio.denominator
    return Ammo(
        name=raw["name"],
        caliber=raw["caliber"],
        ac_mod=raw.get("ac_mod", 0),
        dr_mod=raw["dr_mod"],
        dmg_mult=mult,
        dmg_div=div,
        dmg_type=raw.get("dmg_type") or None,
    )


def _armor(raw: Mapping[str, Any]) -> Armor:
    fields = {k: raw[k] for k in (
        "dr", "dt",
        "dr_fire", "dt_fire",
        "dr_plasma", "dt_plasma",
        "dr_laser", "dt_laser",
        "dr_explosive", "dt_explosive",
    ) if k in raw}
    return Armor(name=raw["name"], abbrev=raw.get("abbrev") or raw["name"], **fields)


def parse_mod_data(data: Any, *, validate: bool = True) -> Dict[str, ModData]:
    """Build ``ModData`` per mod id from an already-decoded document."""
    if validate:
        validate_mod_data(data)
    mods: Dict[str, ModData] = {}
    for mod_id, payload in data["mods"].items():
        try:
            mod = ModData(
                mod_id=mod_id,
                weapons=tuple(_weapon(w) for w in payload["weapons"]),
                ammo=tuple(_ammo(a) for a in payload["ammo"]),
                armor=tuple(_armor(a) for a in payload["armor"]),
            )
        except InvalidInputError as e:
            raise DataValidationError(f"Invalid record in mod '{mod_id}': {e}") from e
        _check_duplicates(mod)
        mods[mod_id] = mod
        logger.debug(
            "Mod %s: %d weapons, %d ammo, %d armor", mod_id, len(mod.weapons), len(mod.ammo), len(mod.armor)
        )
    return mods


def _check_duplicates(mod: ModData) -> None:
    for kind, records in (("weapon", mod.weapons), ("ammo", mod.ammo), ("armor", mod.armor)):
        seen: set[str] = set()
        for rec in records:
            if rec.name in seen:
                raise DataValidationError(f"Duplicate {kind} name '{rec.name}' in mod '{mod.mod_id}'")
            seen.add(rec.name)


def load_mod_data(path: os.PathLike | str, *, validate: bool = True) -> Dict[str, ModData]:
    """Read and parse a mod data JSON file.

    Raises:
        DataLoadError: if the file is missing or not JSON
        DataValidationError: if the content does not describe valid mod data
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DataLoadError(f"Mod data file not found: {p}") from exc
    except OSError as exc:
        raise DataLoadError(f"Unable to read mod data file: {p}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"Invalid JSON in {p}: {exc}") from exc

    mods = parse_mod_data(data, validate=validate)
    logger.info("Loaded %d mods from %s", len(mods), p)
    return mods


__all__ = [
    "load_mod_data",
    "parse_mod_data",
    "validate_mod_data",
]
