"""Builds calculator inputs from loose payloads and serializes the results."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..analysis import DamageCalculator, StatCalculator
from ..clients import PokeAPIClient
from ..config import load_settings
from ..data.modifiers import NO_EFFECT
from ..models import (
    DAMAGE_CLASSES,
    PHYSICAL,
    STAT_ORDER,
    BaseStats,
    BattleContext,
    Combatant,
    DamageResult,
    Move,
    PokemonSet,
    normalize_stat_name,
)
from ..parsers import parse_set


class CalculatorService:
    """Shared entry point for the CLI, the MCP tools and the web API."""

    def __init__(
        self,
        *,
        stat_calculator: Optional[StatCalculator] = None,
        damage_calculator: Optional[DamageCalculator] = None,
        catalog: Optional[PokeAPIClient] = None,
        default_level: Optional[int] = None,
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.stats = stat_calculator or StatCalculator()
        self.damage_calculator = damage_calculator or DamageCalculator(
            stat_calculator=self.stats, debug_logger=debug_logger
        )
        self.catalog = catalog
        self.default_level = (
            load_settings().default_level if default_level is None else default_level
        )
        self._debug_logger = debug_logger

    def _debug(self, message: str) -> None:
        if self._debug_logger:
            self._debug_logger(message)

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------
    def compute_stat(
        self,
        stat_name: str,
        base: int,
        iv: int = 31,
        ev: int = 0,
        level: Optional[int] = None,
        nature: Optional[str] = None,
    ) -> int:
        stat = normalize_stat_name(stat_name)
        if stat is None:
            raise ValueError(f"Unknown stat: {stat_name}")
        self._check_nature(nature)
        return self.stats.compute_stat(stat, int(base), int(iv), int(ev), self._level(level), nature)

    def stat_line(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        combatant = self.build_combatant(payload, resolve_types=False)
        stats = self.stats.compute_stats(
            combatant.base_stats,
            {stat: combatant.iv(stat) for stat in STAT_ORDER},
            {stat: combatant.ev(stat) for stat in STAT_ORDER},
            combatant.level,
            combatant.nature,
        )
        return {
            "name": combatant.name,
            "level": combatant.level,
            "nature": combatant.nature,
            "base_stats": combatant.base_stats.as_dict(),
            "stats": stats,
        }

    # ------------------------------------------------------------------
    # Damage
    # ------------------------------------------------------------------
    def compute_damage(
        self,
        attacker: Mapping[str, Any],
        defender: Mapping[str, Any],
        move: Mapping[str, Any],
    ) -> Dict[str, Any]:
        context = BattleContext(
            attacker=self.build_combatant(attacker),
            defender=self.build_combatant(defender),
            move=self.build_move(move),
        )
        result = self.damage_calculator.calculate_damage(context)
        return self.serialize(context, result)

    def compute_damage_from_sets(
        self, attacker_text: str, defender_text: str, move_name: str
    ) -> Dict[str, Any]:
        attacker = self.combatant_from_set(parse_set(attacker_text))
        defender = self.combatant_from_set(parse_set(defender_text))
        context = BattleContext(
            attacker=attacker,
            defender=defender,
            move=self.build_move({"name": move_name}),
        )
        result = self.damage_calculator.calculate_damage(context)
        return self.serialize(context, result)

    @staticmethod
    def serialize(context: BattleContext, result: DamageResult) -> Dict[str, Any]:
        payload = asdict(result)
        payload["ko_rolls"] = result.ko_rolls
        payload["ko_chance"] = result.ko_chance
        payload["attacker"] = context.attacker.name
        payload["defender"] = context.defender.name
        payload["move"] = asdict(context.move)
        return payload

    # ------------------------------------------------------------------
    # Input building
    # ------------------------------------------------------------------
    def build_combatant(
        self, payload: Mapping[str, Any], *, resolve_types: bool = True
    ) -> Combatant:
        if not isinstance(payload, Mapping):
            raise ValueError("Combatant payload must be a mapping")

        name = str(payload.get("name") or payload.get("species") or "").strip()
        if not name:
            raise ValueError("Combatant payload needs a name or species")
        species = str(payload.get("species") or name)

        base_values = payload.get("base_stats")
        if base_values:
            base_stats = BaseStats.from_mapping(base_values)
        else:
            base_stats = self._catalog_base_stats(species)

        types = [str(t).lower() for t in payload.get("types") or []]
        if not types and resolve_types:
            types = self._catalog_types(species)

        return Combatant(
            name=name,
            base_stats=base_stats,
            level=self._level(payload.get("level")),
            types=types,
            ivs=self._spread(payload.get("ivs")),
            evs=self._spread(payload.get("evs")),
            nature=self._check_nature(payload.get("nature")) or "Hardy",
            item=payload.get("item"),
            ability=payload.get("ability"),
            status=payload.get("status"),
        )

    def combatant_from_set(self, pokemon_set: PokemonSet) -> Combatant:
        species = pokemon_set.species or pokemon_set.name
        return self.build_combatant(
            {
                "name": pokemon_set.name,
                "species": species,
                "level": pokemon_set.level,
                "ivs": pokemon_set.ivs,
                "evs": pokemon_set.evs,
                "nature": pokemon_set.nature,
                "item": pokemon_set.item,
                "ability": pokemon_set.ability,
            }
        )

    def build_move(self, payload: Mapping[str, Any]) -> Move:
        if not isinstance(payload, Mapping):
            raise ValueError("Move payload must be a mapping")
        name = str(payload.get("name") or "").strip()
        power = payload.get("power")
        move_type = payload.get("type")

        if power is None or not move_type:
            if not self.catalog:
                raise ValueError(f"Move {name or '?'} needs power and type")
            if not name:
                raise ValueError("Move payload needs a name")
            self._debug(f"Fetching move data for {name}")
            fetched = self.catalog.get_move(name)
            power = fetched.power if power is None else power
            move_type = move_type or fetched.type
            damage_class = payload.get("damage_class") or fetched.damage_class
        else:
            damage_class = payload.get("damage_class") or PHYSICAL

        damage_class = str(damage_class).lower()
        if damage_class not in DAMAGE_CLASSES:
            raise ValueError(f"Unknown damage class: {damage_class}")
        return Move(
            name=name or "Move",
            power=int(power),
            type=str(move_type).lower(),
            damage_class=damage_class,
        )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def type_matchup(self, attack_type: str, defender_types: List[str]) -> float:
        return self.damage_calculator.type_chart.multiplier(attack_type, defender_types)

    def natures(self) -> List[Dict[str, Any]]:
        return [
            {
                "name": nature.name,
                "boosted": nature.boosted,
                "hindered": nature.hindered,
                "neutral": nature.is_neutral,
            }
            for nature in self.stats.natures
        ]

    def modifiers(self) -> Dict[str, List[str]]:
        """Abilities and items the damage calculator knows how to apply."""

        registry = self.damage_calculator.modifiers
        return {"abilities": registry.ability_names, "items": registry.item_names}

    def abilities(self, species: str) -> List[Dict[str, Any]]:
        """A species' abilities, flagged by whether the calculator models them."""

        if not self.catalog:
            raise ValueError("Ability lookup needs a catalog")
        self._debug(f"Fetching abilities for {species}")
        registry = self.damage_calculator.modifiers
        return [
            {"name": name, "modeled": registry.ability(name) is not NO_EFFECT}
            for name in self.catalog.get_abilities(species)
        ]

    def _level(self, level: Optional[Any]) -> int:
        return int(self.default_level if level is None else level)

    def _check_nature(self, nature: Optional[str]) -> Optional[str]:
        if nature and nature not in self.stats.natures:
            self._debug(f"Unknown nature {nature}; treating it as neutral")
        return nature

    def _catalog_base_stats(self, species: str) -> BaseStats:
        if not self.catalog:
            self._debug(f"No base stats for {species}; using zeros")
            return BaseStats()
        self._debug(f"Fetching base stats for {species}")
        return self.catalog.get_base_stats(species)

    def _catalog_types(self, species: str) -> List[str]:
        if not self.catalog:
            return []
        return self.catalog.get_pokemon_types(species)

    @staticmethod
    def _spread(values: Optional[Mapping[str, Any]]) -> Dict[str, int]:
        spread: Dict[str, int] = {}
        for key, value in (values or {}).items():
            stat = normalize_stat_name(str(key))
            if stat:
                spread[stat] = int(value)
        return spread
