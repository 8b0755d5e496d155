from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from fo2calc.exceptions import DataLoadError, DataValidationError, UnknownEntityError
from fo2calc.formulas import FormulaId, parse_formula

logger = logging.getLogger(__name__)

REFERENCE_MOD = "vanilla"


class ModConfig(BaseModel):
    """Display metadata for one mod and the formula it uses."""

    id: str = Field(..., description="Mod identifier, also the key in mod data")
    name: str = Field(..., description="Display name")
    description: str = Field("", description="One-line description")
    formula: str = Field(FormulaId.FALLOUT2.value, description="Formula identifier")

    @field_validator("id", "name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @property
    def formula_id(self) -> FormulaId:
        return parse_formula(self.formula)


class ModRegistry(BaseModel):
    """All known mods plus the order they are shown in."""

    order: List[str] = Field(default_factory=list, description="Mod ids in display order")
    mods: Dict[str, ModConfig] = Field(default_factory=dict, description="Mod configs keyed by id")

    @model_validator(mode="before")
    @classmethod
    def fill_ids(cls, data: object) -> object:
        # YAML keys double as ids; don't make users repeat them
        if isinstance(data, dict) and isinstance(data.get("mods"), dict):
            mods = {}
            for key, value in data["mods"].items():
                if isinstance(value, dict):
                    value = {"id": key, **value}
                mods[key] = value
            data = {**data, "mods": mods}
        return data

    @model_validator(mode="after")
    def check_order(self) -> "ModRegistry":
        if REFERENCE_MOD not in self.mods:
            raise ValueError(f"'{REFERENCE_MOD}' mod is required")
        for key, cfg in self.mods.items():
            if key != cfg.id:
                raise ValueError(f"mod key '{key}' does not match id '{cfg.id}'")
        unknown = [m for m in self.order if m not in self.mods]
        if unknown:
            raise ValueError(f"order lists unknown mods: {unknown}")
        if len(set(self.order)) != len(self.order):
            raise ValueError("order lists a mod more than once")
        # anything not ordered goes last, in definition order
        self.order = list(self.order) + [m for m in self.mods if m not in self.order]
        return self

    def get(self, mod_id: str) -> ModConfig:
        try:
            return self.mods[mod_id]
        except KeyError as exc:
            raise UnknownEntityError(f"Unknown mod id: {mod_id}") from exc

    def ordered(self) -> List[ModConfig]:
        return [self.mods[m] for m in self.order]

    def formula_for(self, mod_id: str) -> FormulaId:
        return self.get(mod_id).formula_id


def _read_yaml(text: str, source: str) -> dict:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise DataLoadError(f"Invalid YAML in {source}: {e}") from e
    if not isinstance(data, dict):
        raise DataValidationError(f"Expected a mapping at the top of {source}")
    return data


def load_mod_registry(path: Optional[Path | str] = None) -> ModRegistry:
    """Load the mod registry from YAML.

    If path is None, loads the packaged default at fo2calc/data/mods.yaml.
    """
    if path is None:
        source = "fo2calc.data/mods.yaml"
        text = resources.files("fo2calc.data").joinpath("mods.yaml").read_text(encoding="utf-8")
        logger.debug("Loaded embedded mod registry resource")
    else:
        source = str(path)
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise DataLoadError(f"Unable to read mod registry: {path}") from e
        logger.debug("Loaded mod registry from path: %s", path)

    data = _read_yaml(text, source)
    try:
        registry = ModRegistry.model_validate(data)
    except ValidationError as e:
        raise DataValidationError(f"Invalid mod registry in {source}: {e}") from e
    logger.info("Mod registry: %s", ", ".join(registry.order))
    return registry


__all__ = [
    "REFERENCE_MOD",
    "ModConfig",
    "ModRegistry",
    "load_mod_registry",
]
