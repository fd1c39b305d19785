"""Parser and exporter for Smogon/Showdown-style Pokemon set text."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional

from ..models import STAT_ORDER, PokemonSet, Team, normalize_stat_name

# Showdown exports of a full box stay far below this; longer input is cut.
MAX_INPUT_LENGTH = 50_000
MAX_SETS = 20

SHOWDOWN_STAT_LABELS = {
    "hp": "HP",
    "attack": "Atk",
    "defense": "Def",
    "special-attack": "SpA",
    "special-defense": "SpD",
    "speed": "Spe",
}

_GENDER_MARKERS = {"M", "F"}
_TRAILING_PARENS = re.compile(r"\s*\(([^()]*)\)\s*$")


def parse_team(raw_text: str, *, name: str | None = None, format_hint: str = "singles") -> Team:
    """Parse a Showdown export (one or more sets) into a Team object."""

    cleaned = raw_text[:MAX_INPUT_LENGTH].replace("\r\n", "\n").strip()
    if not cleaned:
        raise ValueError("Team text is empty")

    team = Team(format=format_hint, name=name)
    for entry in _split_entries(cleaned)[:MAX_SETS]:
        team.add_pokemon(_parse_entry(entry))
    return team


def parse_set(raw_text: str) -> PokemonSet:
    """Parse exactly one set; extra sets after the first are ignored."""

    return parse_team(raw_text).pokemon[0]


def export_set(pokemon: PokemonSet) -> str:
    """Render a set back into Showdown export text.

    EVs are only listed when non-zero and IVs only when they differ from 31,
    which is what the Showdown teambuilder does.
    """

    header = pokemon.name
    if pokemon.item:
        header += f" @ {pokemon.item}"
    lines = [header]
    if pokemon.ability:
        lines.append(f"Ability: {pokemon.ability}")
    if pokemon.level is not None:
        lines.append(f"Level: {pokemon.level}")
    if pokemon.shiny:
        lines.append("Shiny: Yes")
    if pokemon.tera_type:
        lines.append(f"Tera Type: {pokemon.tera_type}")

    evs = _format_spread(pokemon.evs, lambda value: value > 0)
    if evs:
        lines.append(f"EVs: {evs}")
    if pokemon.nature:
        lines.append(f"{pokemon.nature} Nature")
    ivs = _format_spread(pokemon.ivs, lambda value: value != 31)
    if ivs:
        lines.append(f"IVs: {ivs}")

    lines.extend(f"- {move}" for move in pokemon.moves if move)
    return "\n".join(lines)


def export_team(team: Team) -> str:
    return "\n\n".join(export_set(pokemon) for pokemon in team.pokemon)


def _split_entries(text: str) -> List[str]:
    return [chunk.strip() for chunk in re.split(r"\n\s*\n", text) if chunk.strip()]


def _parse_entry(chunk: str) -> PokemonSet:
    lines = [line.strip() for line in chunk.splitlines() if line.strip()]
    if not lines:
        raise ValueError("Pokemon entry is empty")

    name, item = _parse_header(lines[0])
    pokemon = PokemonSet(name=name, species=_infer_species(name), item=item)

    for line in lines[1:]:
        if line.startswith("Ability:"):
            pokemon.ability = _value_after_colon(line)
        elif line.startswith("Level:"):
            pokemon.level = _parse_int(_value_after_colon(line), 1, 100)
        elif line.startswith("Shiny:"):
            pokemon.shiny = _value_after_colon(line).lower() == "yes"
        elif line.startswith("Tera Type:"):
            pokemon.tera_type = _value_after_colon(line)
        elif line.startswith("EVs:"):
            pokemon.evs = _parse_stat_spread(_value_after_colon(line), 252)
        elif line.startswith("IVs:"):
            pokemon.ivs = _parse_stat_spread(_value_after_colon(line), 31)
        elif line.endswith(" Nature"):
            pokemon.nature = line[: -len(" Nature")].strip()
        elif line.startswith("-"):
            pokemon.moves.append(line.lstrip("- ").strip())
        else:
            pokemon.notes.append(line)

    return pokemon


def _parse_header(line: str) -> tuple[str, str | None]:
    if "@" not in line:
        return line.strip(), None
    name_part, item_part = line.split("@", 1)
    return name_part.strip(), item_part.strip() or None


def _parse_int(value: str, low: int, high: int) -> Optional[int]:
    try:
        parsed = int(value)
    except ValueError:
        return None
    if parsed < low or parsed > high:
        return None
    return parsed


def _parse_stat_spread(spread: str, maximum: int) -> Dict[str, int]:
    """Read ``252 Atk / 4 SpD`` style spreads; out-of-range values are dropped."""

    stats: Dict[str, int] = {}
    for raw_value, label in _split_stat_tokens(spread):
        stat = normalize_stat_name(label)
        value = _parse_int(raw_value, 0, maximum)
        if stat and value is not None:
            stats[stat] = value
    return stats


def _split_stat_tokens(spread: str) -> Iterable[tuple[str, str]]:
    for raw in spread.split("/"):
        parts = raw.split()
        if len(parts) >= 2:
            yield parts[0], "".join(parts[1:])


def _format_spread(values: Dict[str, int], keep) -> str:
    return " / ".join(
        f"{values[stat]} {SHOWDOWN_STAT_LABELS[stat]}"
        for stat in STAT_ORDER
        if stat in values and keep(values[stat])
    )


def _value_after_colon(line: str) -> str:
    return line.split(":", 1)[1].strip()


def _infer_species(name: str) -> str:
    """``Nickname (Species) (M)`` -> ``Species``; ``Species (F)`` -> ``Species``."""

    remaining = name.strip()
    match = _TRAILING_PARENS.search(remaining)
    if match and match.group(1).strip().upper() in _GENDER_MARKERS:
        remaining = remaining[: match.start()].strip()
        match = _TRAILING_PARENS.search(remaining)
    if match and match.start() > 0:
        return match.group(1).strip()
    return remaining or name.strip()
