from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Dict, Optional

from . import __version__
from .exceptions import DataValidationError, Fo2CalcError
from .formulas import FormulaId, compute_damage
from .loader import load_mod_data
from .logging_config import configure_logging
from .models import ModData
from .mods import ModRegistry, load_mod_registry
from .table import calculate_hits, compare_mods, damage_table

logger = logging.getLogger(__name__)


def _select_mod(mods: Dict[str, ModData], mod_id: str) -> ModData:
    try:
        return mods[mod_id]
    except KeyError:
        raise Fo2CalcError(f"Mod '{mod_id}' not in data file (have: {', '.join(sorted(mods))})") from None


def _formula(args: argparse.Namespace, registry: ModRegistry) -> str:
    # explicit --formula wins, else whatever the mod is configured with
    if args.formula:
        return args.formula
    if args.mod in registry.mods:
        return registry.formula_for(args.mod).value
    logger.warning("Mod %s has no registry entry; using %s", args.mod, FormulaId.FALLOUT2.value)
    return FormulaId.FALLOUT2.value


def _cmd_damage(args: argparse.Namespace) -> int:
    registry = load_mod_registry(args.mods_file)
    mod = _select_mod(load_mod_data(args.data), args.mod)
    weapon = mod.weapon_named(args.weapon)
    ammo = mod.ammo_named(args.ammo)
    armor = mod.armor_named(args.armor)
    if ammo.caliber != weapon.caliber:
        raise Fo2CalcError(f"{ammo.name} ({ammo.caliber}) does not fit {weapon.name} ({weapon.caliber})")
    if args.burst and not weapon.supports_burst:
        raise Fo2CalcError(f"{weapon.name} has no burst mode")

    hits = calculate_hits(args.burst, args.point_blank, weapon.burst or 1)
    result = compute_damage(
        _formula(args, registry),
        weapon,
        ammo,
        armor,
        critical=args.critical,
        burst=args.burst,
        ranged_bonus=args.ranged_bonus,
        hits=hits,
        sniper_luck=args.sniper_luck,
    )
    print(result)
    return 0


def _cmd_table(args: argparse.Namespace) -> int:
    registry = load_mod_registry(args.mods_file)
    mod = _select_mod(load_mod_data(args.data), args.mod)
    table = damage_table(
        mod,
        _formula(args, registry),
        critical=args.critical,
        burst=args.burst,
        point_blank=args.point_blank,
        ranged_bonus=args.ranged_bonus,
        sniper_luck=args.sniper_luck,
    )
    print(json.dumps(table, indent=2))
    return 0


def _cmd_compare(args: argparse.Namespace) -> int:
    registry = load_mod_registry(args.mods_file)
    result = compare_mods(
        load_mod_data(args.data),
        registry,
        args.weapon,
        args.ammo,
        critical=args.critical,
        burst=args.burst,
        point_blank=args.point_blank,
        ranged_bonus=args.ranged_bonus,
        sniper_luck=args.sniper_luck,
    )
    if not result:
        raise Fo2CalcError(f"No mod has {args.weapon} with {args.ammo}")
    print(json.dumps(result, indent=2))
    return 0


def _cmd_mods(args: argparse.Namespace) -> int:
    registry = load_mod_registry(args.mods_file)
    for cfg in registry.ordered():
        print(f"{cfg.id:<12} {cfg.name:<12} {cfg.formula:<10} {cfg.description}")
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    try:
        mods = load_mod_data(args.data)
    except DataValidationError as e:
        print(f"INVALID: {args.data}\n{e.to_human()}")
        return 1
    counts = ", ".join(f"{m}: {len(d.weapons)}/{len(d.ammo)}/{len(d.armor)}" for m, d in mods.items())
    print(f"OK: {args.data} (weapons/ammo/armor {counts})")
    return 0


def _add_modifiers(p: argparse.ArgumentParser) -> None:
    p.add_argument("data", help="Path to the mod data JSON file")
    p.add_argument("--mod", default="vanilla", help="Mod id inside the data file (default: vanilla)")
    p.add_argument(
        "--formula",
        default=None,
        help="Formula id (fallout2, fo2tweaks, yaam, glovz, ecco); defaults to the mod's formula",
    )
    _add_attack_options(p)


def _add_attack_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--critical", action="store_true", help="Assume a critical hit")
    p.add_argument("--burst", action="store_true", help="Fire a burst")
    p.add_argument("--point-blank", action="store_true", help="Every burst round hits")
    p.add_argument("--ranged-bonus", type=int, default=0, help="Bonus ranged damage per bullet")
    p.add_argument("--sniper-luck", action="store_true", help="Sniper + 10 Luck critical chances")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="fo2calc", description="Fallout 2 damage calculator")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    p.add_argument("--mods-file", default=None, help="Mod registry YAML (default: packaged registry)")
    sub = p.add_subparsers(dest="cmd", required=True)

    d = sub.add_parser("damage", help="Damage of one weapon/ammo/armor combination")
    _add_modifiers(d)
    d.add_argument("--weapon", required=True, help="Weapon name")
    d.add_argument("--ammo", required=True, help="Ammo name")
    d.add_argument("--armor", required=True, help="Armor name")
    d.set_defaults(func=_cmd_damage)

    t = sub.add_parser("table", help="Damage for every weapon, ammo and armor of a mod (JSON)")
    _add_modifiers(t)
    t.set_defaults(func=_cmd_table)

    c = sub.add_parser("compare", help="One weapon and ammo across all mods, vanilla armor list (JSON)")
    c.add_argument("data", help="Path to the mod data JSON file")
    c.add_argument("--weapon", required=True, help="Weapon name")
    c.add_argument("--ammo", required=True, help="Ammo name")
    _add_attack_options(c)
    c.set_defaults(func=_cmd_compare)

    m = sub.add_parser("mods", help="List known mods in display order")
    m.set_defaults(func=_cmd_mods)

    v = sub.add_parser("validate", help="Validate a mod data JSON file")
    v.add_argument("data", help="Path to the mod data JSON file")
    v.set_defaults(func=_cmd_validate)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    try:
        return args.func(args)
    except Fo2CalcError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
