import json
from pathlib import Path

import pytest

from fo2calc.exceptions import DataLoadError, DataValidationError
from fo2calc.loader import load_mod_data, parse_mod_data


def write_json(path: Path, obj) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj), encoding="utf-8")
    return path


def test_loads_records_per_mod(tmp_path: Path, sample_data):
    mods = load_mod_data(write_json(tmp_path / "data.json", sample_data))

    assert list(mods) == ["vanilla", "ecco"]
    vanilla = mods["vanilla"]
    flamer = vanilla.weapon_named("Flamer")
    assert flamer.dmg_type == "fire"
    assert flamer.burst_only and flamer.burst == 1
    assert vanilla.weapon_named("10mm pistol").burst is None

    jhp = vanilla.ammo_named("10mm JHP")
    assert (jhp.dr_mod, jhp.dmg_mult, jhp.dmg_div, jhp.dmg_type) == (25, 2, 1, None)

    leather = vanilla.armor_named("Leather Armor")
    assert (leather.dr_fire, leather.dt_explosive) == (20, 0)
    assert vanilla.armor_named("None").abbrev == "-"


def test_legacy_dmg_mod_becomes_fraction(sample_data):
    mods = parse_mod_data(sample_data)
    ap = mods["ecco"].ammo_named("10mm AP")

    assert (ap.dmg_mult, ap.dmg_div) == (1, 2)
    # abbrev falls back to the name
    assert mods["ecco"].armor_named("Leather Armor").abbrev == "Leather Armor"


def test_schema_errors_are_reported(sample_data):
    del sample_data["mods"]["vanilla"]["weapons"][0]["min_dmg"]

    with pytest.raises(DataValidationError) as ei:
        parse_mod_data(sample_data)
    assert "validation failed" in str(ei.value).lower()
    human = ei.value.to_human()
    assert "min_dmg" in human
    assert "weapons/0" in human


def test_zero_divisor_is_rejected_by_schema(sample_data):
    sample_data["mods"]["vanilla"]["ammo"][0]["dmg_div"] = 0

    with pytest.raises(DataValidationError):
        parse_mod_data(sample_data)


def test_record_invariants_surface_as_validation_errors(sample_data):
    sample_data["mods"]["vanilla"]["weapons"][0]["min_dmg"] = 50

    with pytest.raises(DataValidationError) as ei:
        parse_mod_data(sample_data)
    assert "10mm pistol" in str(ei.value)


def test_duplicate_names_are_rejected(sample_data):
    armor = sample_data["mods"]["vanilla"]["armor"]
    armor.append(dict(armor[0]))

    with pytest.raises(DataValidationError) as ei:
        parse_mod_data(sample_data)
    assert "Duplicate armor" in str(ei.value)


def test_missing_and_malformed_files(tmp_path: Path):
    with pytest.raises(DataLoadError):
        load_mod_data(tmp_path / "nope.json")

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(DataLoadError):
        load_mod_data(bad)

    with pytest.raises(DataValidationError):
        load_mod_data(write_json(tmp_path / "empty.json", {"mods": {}}))


@pytest.mark.parametrize("dmg_mod, expected", [(0.67, (2, 3)), (1.33, (4, 3)), (1.5, (3, 2)), (2, (2, 1))])
def test_legacy_dmg_mod_fits_small_fractions(sample_data, dmg_mod, expected):
    sample_data["mods"]["ecco"]["ammo"][0]["dmg_mod"] = dmg_mod

    ap = parse_mod_data(sample_data)["ecco"].ammo_named("10mm AP")
    assert (ap.dmg_mult, ap.dmg_div) == expected


def test_legacy_dmg_mod_without_a_close_fraction_is_rejected(sample_data):
    # nearest denominator <= 10 is 8/7, off by 0.007
    sample_data["mods"]["ecco"]["ammo"][0]["dmg_mod"] = 1.15

    with pytest.raises(DataValidationError) as ei:
        parse_mod_data(sample_data)
    assert "dmg_mod 1.15" in str(ei.value)
