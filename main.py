"""Command-line interface for the Pokemon stat and damage calculators."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from poke_calc.analysis.stat_calc import SPREAD_PRESETS, clamp_ev, clamp_iv, spread_preset
from poke_calc.clients import PokeAPIClient, PokeAPIClientError
from poke_calc.models import STAT_ORDER
from poke_calc.parsers import parse_set
from poke_calc.services import CalculatorService

STAT_LABELS = {
    "hp": "HP",
    "attack": "Atk",
    "defense": "Def",
    "special-attack": "SpA",
    "special-defense": "SpD",
    "speed": "Spe",
}


def _read_set_text(path: str) -> str:
    if path == "-":
        data = sys.stdin.read()
        if not data.strip():
            raise SystemExit("No set text provided on stdin.")
        return data
    file_path = Path(path)
    if not file_path.exists():
        raise SystemExit(f"File not found: {file_path}")
    return file_path.read_text(encoding="utf-8")


def _parse_base_stats(raw: str) -> dict[str, int]:
    values = [part.strip() for part in raw.split("/")]
    if len(values) != len(STAT_ORDER):
        raise SystemExit("--base needs six values: HP/Atk/Def/SpA/SpD/Spe")
    try:
        return {stat: int(value) for stat, value in zip(STAT_ORDER, values)}
    except ValueError:
        raise SystemExit(f"Invalid base stats: {raw}")


def _humanize_stat_line(line: dict[str, object]) -> str:
    stats = line["stats"]
    parts = [f"{STAT_LABELS[stat]} {stats[stat]}" for stat in STAT_ORDER]
    return f"{line['name']} (Lv. {line['level']}, {line['nature']}): " + " / ".join(parts)


def _humanize_damage(report: dict[str, object]) -> str:
    move = report["move"]
    modifiers = report["modifiers"]
    lines = [
        f"{report['attacker']} {move['name']} vs. {report['defender']}: "
        f"{report['min_damage']}-{report['max_damage']} "
        f"({report['min_percent']}% - {report['max_percent']}%)",
    ]
    notes = [f"type x{modifiers['type_effectiveness']}"]
    if modifiers["stab"]:
        notes.append("STAB")
    if modifiers["item"] != 1:
        notes.append(f"item x{round(modifiers['item'], 2)}")
    lines.append("Modifiers: " + ", ".join(notes))
    if report["rolls"]:
        lines.append("Rolls: " + ", ".join(str(roll) for roll in report["rolls"]))
        lines.append(
            f"KO: {report['ko_chance']} ({report['ko_rolls']}/{len(report['rolls'])} rolls"
            f" vs {report['defender_hp']} HP)"
        )
    return "\n".join(lines)


def _debug_print(enabled: bool, message: str) -> None:
    if enabled:
        sys.stderr.write(f"[debug] {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pokemon stat and damage calculator")
    parser.add_argument("--json", action="store_true", help="Emit results as JSON")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print debug progress information to stderr",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    stat = sub.add_parser("stat", help="Compute a single stat")
    stat.add_argument("stat", help="hp, attack, defense, special-attack, special-defense or speed")
    stat.add_argument("base", type=int, help="Base stat value")
    stat.add_argument("--iv", type=int, default=31)
    stat.add_argument("--ev", type=int, default=0)
    stat.add_argument("--level", type=int, default=None)
    stat.add_argument("--nature", default=None)

    stats = sub.add_parser("stats", help="Compute all six stats of a Showdown set")
    stats.add_argument("set_file", help="Path to a Showdown export or '-' for stdin")
    stats.add_argument(
        "--base",
        help="Base stats as HP/Atk/Def/SpA/SpD/Spe (skips the PokeAPI lookup)",
    )
    stats.add_argument(
        "--preset",
        choices=sorted(SPREAD_PRESETS),
        help="Replace the set's IVs, EVs and nature with a preset spread",
    )

    damage = sub.add_parser("damage", help="Calculate damage between two Showdown sets")
    damage.add_argument("attacker_file", help="Showdown export of the attacker")
    damage.add_argument("defender_file", help="Showdown export of the defender")
    damage.add_argument("--move", required=True, help="Move name (looked up on PokeAPI)")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _debug_print(args.debug, f"Arguments parsed: {args}")

    service = CalculatorService(
        catalog=PokeAPIClient(),
        debug_logger=(lambda msg: _debug_print(args.debug, msg)),
    )

    try:
        if args.command == "stat":
            value = service.compute_stat(
                args.stat,
                args.base,
                clamp_iv(args.iv),
                clamp_ev(args.ev),
                args.level,
                args.nature,
            )
            payload: object = {"stat": args.stat, "value": value}
            text = str(value)
        elif args.command == "stats":
            pokemon = parse_set(_read_set_text(args.set_file))
            _debug_print(args.debug, f"Parsed set for {pokemon.name}")
            request = {
                "name": pokemon.name,
                "species": pokemon.species,
                "level": pokemon.level,
                "ivs": pokemon.ivs,
                "evs": pokemon.evs,
                "nature": pokemon.nature,
            }
            if args.preset:
                request.update(spread_preset(args.preset))
                # Presets without a nature keep the one from the set.
                request["nature"] = request["nature"] or pokemon.nature
            if args.base:
                request["base_stats"] = _parse_base_stats(args.base)
            payload = service.stat_line(request)
            text = _humanize_stat_line(payload)
        else:
            payload = service.compute_damage_from_sets(
                _read_set_text(args.attacker_file),
                _read_set_text(args.defender_file),
                args.move,
            )
            text = _humanize_damage(payload)
    except ValueError as exc:
        raise SystemExit(f"Error: {exc}")
    except PokeAPIClientError as exc:
        raise SystemExit(f"Error fetching data from PokeAPI: {exc}")

    if args.json:
        json.dump(payload, sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
