"""Dataclasses describing a single attack and the result of resolving it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

HP = "hp"
ATTACK = "attack"
DEFENSE = "defense"
SPECIAL_ATTACK = "special-attack"
SPECIAL_DEFENSE = "special-defense"
SPEED = "speed"

STAT_ORDER: Tuple[str, ...] = (HP, ATTACK, DEFENSE, SPECIAL_ATTACK, SPECIAL_DEFENSE, SPEED)

PHYSICAL = "physical"
SPECIAL = "special"
DAMAGE_CLASSES = (PHYSICAL, SPECIAL)

DEFAULT_IV = 31
DEFAULT_EV = 0

_STAT_ALIASES: Dict[str, str] = {
    "hp": HP,
    "atk": ATTACK,
    "attack": ATTACK,
    "def": DEFENSE,
    "defense": DEFENSE,
    "spa": SPECIAL_ATTACK,
    "spatk": SPECIAL_ATTACK,
    "specialattack": SPECIAL_ATTACK,
    "spd": SPECIAL_DEFENSE,
    "spdef": SPECIAL_DEFENSE,
    "specialdefense": SPECIAL_DEFENSE,
    "spe": SPEED,
    "speed": SPEED,
}


def normalize_stat_name(name: str) -> Optional[str]:
    """Map Showdown/PokeAPI style stat labels onto the canonical names."""

    key = name.strip().lower()
    for char in (" ", "-", "_", "."):
        key = key.replace(char, "")
    return _STAT_ALIASES.get(key)


@dataclass(frozen=True, slots=True)
class BaseStats:
    """Intrinsic base values of a species or form."""

    hp: int = 0
    attack: int = 0
    defense: int = 0
    special_attack: int = 0
    special_defense: int = 0
    speed: int = 0

    @classmethod
    def from_mapping(cls, values: Mapping[str, int]) -> "BaseStats":
        kwargs: Dict[str, int] = {}
        for key, value in values.items():
            stat = normalize_stat_name(key)
            if stat:
                kwargs[stat.replace("-", "_")] = int(value)
        return cls(**kwargs)

    def get(self, stat: str) -> int:
        canonical = normalize_stat_name(stat)
        if canonical is None:
            return 0
        return getattr(self, canonical.replace("-", "_"))

    def as_dict(self) -> Dict[str, int]:
        return {stat: self.get(stat) for stat in STAT_ORDER}


@dataclass(frozen=True, slots=True)
class Nature:
    """A nature raises one stat by 10% and lowers another, or does nothing."""

    name: str
    boosted: Optional[str] = None
    hindered: Optional[str] = None

    @property
    def is_neutral(self) -> bool:
        return self.boosted is None and self.hindered is None


@dataclass(slots=True)
class Combatant:
    """A fully described Pokemon on one side of an attack."""

    name: str
    base_stats: BaseStats = field(default_factory=BaseStats)
    level: int = 50
    types: List[str] = field(default_factory=list)
    ivs: Dict[str, int] = field(default_factory=dict)
    evs: Dict[str, int] = field(default_factory=dict)
    nature: str = "Hardy"
    item: Optional[str] = None
    ability: Optional[str] = None
    # Carried for callers; the damage formula does not read it yet.
    status: Optional[str] = None

    def iv(self, stat: str) -> int:
        return self.ivs.get(stat, DEFAULT_IV)

    def ev(self, stat: str) -> int:
        return self.evs.get(stat, DEFAULT_EV)

    def has_type(self, type_name: str) -> bool:
        target = type_name.lower()
        return any(t.lower() == target for t in self.types)


@dataclass(frozen=True, slots=True)
class Move:
    """An attacking (or status) move."""

    name: str
    power: int
    type: str
    damage_class: str = PHYSICAL

    @property
    def is_status(self) -> bool:
        return self.power == 0

    @property
    def is_special(self) -> bool:
        return self.damage_class == SPECIAL


@dataclass(slots=True)
class BattleContext:
    attacker: Combatant
    defender: Combatant
    move: Move


@dataclass(slots=True)
class DamageModifiers:
    """Which modifiers fired while resolving an attack."""

    type_effectiveness: float = 0.0
    stab: bool = False
    crit: bool = False
    item: float = 1.0
    weather: float = 1.0


@dataclass(slots=True)
class DamageResult:
    """Sixteen-roll damage distribution for one attack."""

    min_damage: int = 0
    max_damage: int = 0
    rolls: List[int] = field(default_factory=list)
    min_percent: float = 0.0
    max_percent: float = 0.0
    modifiers: DamageModifiers = field(default_factory=DamageModifiers)
    defender_hp: int = 0

    @property
    def ko_rolls(self) -> int:
        if self.defender_hp <= 0:
            return 0
        return sum(1 for roll in self.rolls if roll >= self.defender_hp)

    @property
    def ko_chance(self) -> str:
        # "guaranteed", "possible", "none"
        kos = self.ko_rolls
        if kos and kos == len(self.rolls):
            return "guaranteed"
        if kos:
            return "possible"
        return "none"
