import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from fo2calc.models import Ammo, Armor, Weapon  # noqa: E402


@pytest.fixture
def pistol() -> Weapon:
    return Weapon(name="10mm pistol", caliber="10mm", min_dmg=10, max_dmg=16)


@pytest.fixture
def smg() -> Weapon:
    return Weapon(name="10mm SMG", caliber="10mm", min_dmg=10, max_dmg=16, burst=10)


@pytest.fixture
def ball_ammo() -> Ammo:
    return Ammo(name="10mm ball", caliber="10mm", dr_mod=0, dmg_mult=1, dmg_div=1)


@pytest.fixture
def ap_ammo() -> Ammo:
    return Ammo(name="10mm AP", caliber="10mm", ac_mod=0, dr_mod=-20, dmg_mult=1, dmg_div=1)


@pytest.fixture
def no_armor() -> Armor:
    return Armor(name="None", abbrev="-")


@pytest.fixture
def leather() -> Armor:
    return Armor(
        name="Leather Jacket",
        abbrev="LJ",
        dr=20,
        dt=0,
        dr_fire=10,
        dt_fire=0,
        dr_plasma=10,
        dt_plasma=0,
        dr_laser=20,
        dt_laser=0,
        dr_explosive=20,
        dt_explosive=0,
    )


@pytest.fixture
def combat_armor() -> Armor:
    return Armor(
        name="Combat Armor",
        abbrev="CA",
        dr=40,
        dt=5,
        dr_fire=60,
        dt_fire=4,
        dr_plasma=50,
        dt_plasma=4,
        dr_laser=60,
        dt_laser=8,
        dr_explosive=40,
        dt_explosive=6,
    )


@pytest.fixture
def sample_data() -> dict:
    """Raw mod data document in the loader's JSON shape."""
    return {
        "mods": {
            "vanilla": {
                "weapons": [
                    {"name": "10mm pistol", "caliber": "10mm", "min_dmg": 5, "max_dmg": 12},
                    {"name": "10mm SMG", "caliber": "10mm", "min_dmg": 5, "max_dmg": 12, "burst": 10},
                    {
                        "name": "Flamer",
                        "caliber": "Flamer",
                        "min_dmg": 10,
                        "max_dmg": 40,
                        "dmg_type": "fire",
                        "burst": 1,
                        "burst_only": True,
                    },
                ],
                "ammo": [
                    {"name": "10mm JHP", "caliber": "10mm", "ac_mod": 0, "dr_mod": 25, "dmg_mult": 2, "dmg_div": 1},
                    {"name": "10mm AP", "caliber": "10mm", "ac_mod": 0, "dr_mod": -25, "dmg_mult": 1, "dmg_div": 2},
                    {
                        "name": "Flamethrower fuel",
                        "caliber": "Flamer",
                        "ac_mod": -10,
                        "dr_mod": 0,
                        "dmg_mult": 1,
                        "dmg_div": 1,
                        "dmg_type": "fire",
                    },
                ],
                "armor": [
                    {"name": "None", "abbrev": "-", "dr": 0, "dt": 0},
                    {
                        "name": "Leather Armor",
                        "abbrev": "LA",
                        "dr": 25,
                        "dt": 2,
                        "dr_fire": 20,
                        "dt_fire": 0,
                        "dr_plasma": 10,
                        "dt_plasma": 0,
                        "dr_laser": 20,
                        "dt_laser": 0,
                        "dr_explosive": 20,
                        "dt_explosive": 0,
                    },
                ],
            },
            "ecco": {
                "weapons": [{"name": "10mm pistol", "caliber": "10mm", "min_dmg": 6, "max_dmg": 12}],
                "ammo": [{"name": "10mm AP", "caliber": "10mm", "dr_mod": -30, "dmg_mod": 0.5}],
                "armor": [{"name": "Leather Armor", "dr": 25, "dt": 2}],
            },
        }
    }
