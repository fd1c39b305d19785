"""Dataclasses for Showdown-style sets before they are resolved into combatants."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(slots=True)
class PokemonSet:
    """Represents a single Showdown export entry."""

    name: str
    species: Optional[str] = None
    item: Optional[str] = None
    ability: Optional[str] = None
    level: Optional[int] = None
    tera_type: Optional[str] = None
    shiny: bool = False
    nature: Optional[str] = None
    evs: Dict[str, int] = field(default_factory=dict)
    ivs: Dict[str, int] = field(default_factory=dict)
    moves: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)


@dataclass(slots=True)
class Team:
    """Collection of Pokemon sets parsed from one export."""

    format: str = "singles"
    name: Optional[str] = None
    pokemon: List[PokemonSet] = field(default_factory=list)

    def add_pokemon(self, pokemon: PokemonSet) -> None:
        self.pokemon.append(pokemon)
