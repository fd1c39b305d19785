"""Shared dataclasses for the stat and damage calculators."""

from .battle import (
    ATTACK,
    DAMAGE_CLASSES,
    DEFENSE,
    HP,
    PHYSICAL,
    SPECIAL,
    SPECIAL_ATTACK,
    SPECIAL_DEFENSE,
    SPEED,
    STAT_ORDER,
    BaseStats,
    BattleContext,
    Combatant,
    DamageModifiers,
    DamageResult,
    Move,
    Nature,
    normalize_stat_name,
)
from .team import PokemonSet, Team

__all__ = [
    "ATTACK",
    "DAMAGE_CLASSES",
    "DEFENSE",
    "HP",
    "PHYSICAL",
    "SPECIAL",
    "SPECIAL_ATTACK",
    "SPECIAL_DEFENSE",
    "SPEED",
    "STAT_ORDER",
    "BaseStats",
    "BattleContext",
    "Combatant",
    "DamageModifiers",
    "DamageResult",
    "Move",
    "Nature",
    "PokemonSet",
    "Team",
    "normalize_stat_name",
]
