"""Type-effectiveness chart shared by the damage calculator."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Tuple

TYPE_CHART: dict[str, dict[str, tuple[str, ...]]] = {
    "normal": {"double": (), "half": ("rock", "steel"), "zero": ("ghost",)},
    "fire": {
        "double": ("grass", "ice", "bug", "steel"),
        "half": ("fire", "water", "rock", "dragon"),
        "zero": (),
    },
    "water": {
        "double": ("fire", "ground", "rock"),
        "half": ("water", "grass", "dragon"),
        "zero": (),
    },
    "electric": {
        "double": ("water", "flying"),
        "half": ("electric", "grass", "dragon"),
        "zero": ("ground",),
    },
    "grass": {
        "double": ("water", "ground", "rock"),
        "half": ("fire", "grass", "poison", "flying", "bug", "dragon", "steel"),
        "zero": (),
    },
    "ice": {
        "double": ("grass", "ground", "flying", "dragon"),
        "half": ("fire", "water", "ice", "steel"),
        "zero": (),
    },
    "fighting": {
        "double": ("normal", "ice", "rock", "dark", "steel"),
        "half": ("poison", "flying", "psychic", "bug", "fairy"),
        "zero": ("ghost",),
    },
    "poison": {
        "double": ("grass", "fairy"),
        "half": ("poison", "ground", "rock", "ghost"),
        "zero": ("steel",),
    },
    "ground": {
        "double": ("fire", "electric", "poison", "rock", "steel"),
        "half": ("grass", "bug"),
        "zero": ("flying",),
    },
    "flying": {
        "double": ("grass", "fighting", "bug"),
        "half": ("electric", "rock", "steel"),
        "zero": (),
    },
    "psychic": {
        "double": ("fighting", "poison"),
        "half": ("psychic", "steel"),
        "zero": ("dark",),
    },
    "bug": {
        "double": ("grass", "psychic", "dark"),
        "half": ("fire", "fighting", "poison", "flying", "ghost", "steel", "fairy"),
        "zero": (),
    },
    "rock": {
        "double": ("fire", "ice", "flying", "bug"),
        "half": ("fighting", "ground", "steel"),
        "zero": (),
    },
    "ghost": {
        "double": ("psychic", "ghost"),
        "half": ("dark",),
        "zero": ("normal",),
    },
    "dragon": {
        "double": ("dragon",),
        "half": ("steel",),
        "zero": ("fairy",),
    },
    "dark": {
        "double": ("psychic", "ghost"),
        "half": ("fighting", "dark", "fairy"),
        "zero": (),
    },
    "steel": {
        "double": ("ice", "rock", "fairy"),
        "half": ("fire", "water", "electric", "steel"),
        "zero": (),
    },
    "fairy": {
        "double": ("fighting", "dragon", "dark"),
        "half": ("fire", "poison", "steel"),
        "zero": (),
    },
}


class TypeChart:
    """Immutable attacking-type -> defending-type multiplier lookup."""

    def __init__(self, chart: Mapping[str, Mapping[str, Iterable[str]]] = TYPE_CHART) -> None:
        relations: Dict[str, Dict[str, float]] = {}
        for attack, buckets in chart.items():
            row: Dict[str, float] = {}
            for defender in buckets.get("double", ()):
                row[defender.lower()] = 2.0
            for defender in buckets.get("half", ()):
                row[defender.lower()] = 0.5
            for defender in buckets.get("zero", ()):
                row[defender.lower()] = 0.0
            relations[attack.lower()] = row
        self._relations = MappingProxyType(
            {attack: MappingProxyType(row) for attack, row in relations.items()}
        )

    @property
    def types(self) -> Tuple[str, ...]:
        return tuple(self._relations)

    def lookup(self, attack_type: str, defender_type: str) -> float:
        """Multiplier for one attacking type against one defending type."""

        row = self._relations.get(attack_type.lower())
        if row is None:
            return 1.0
        return row.get(defender_type.lower(), 1.0)

    def multiplier(self, attack_type: str, defender_types: Iterable[str]) -> float:
        """Combined multiplier against every type of a defender."""

        multiplier = 1.0
        for defender in defender_types:
            multiplier *= self.lookup(attack_type, defender)
        return multiplier


DEFAULT_TYPE_CHART = TypeChart()
