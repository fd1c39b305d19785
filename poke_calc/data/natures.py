"""Nature table: which stat each nature raises and lowers by 10%."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, Optional, Tuple

from ..models import (
    ATTACK,
    DEFENSE,
    SPECIAL_ATTACK,
    SPECIAL_DEFENSE,
    SPEED,
    Nature,
)

NATURES: Tuple[Nature, ...] = (
    Nature("Hardy"),
    Nature("Lonely", ATTACK, DEFENSE),
    Nature("Brave", ATTACK, SPEED),
    Nature("Adamant", ATTACK, SPECIAL_ATTACK),
    Nature("Naughty", ATTACK, SPECIAL_DEFENSE),
    Nature("Bold", DEFENSE, ATTACK),
    Nature("Docile"),
    Nature("Relaxed", DEFENSE, SPEED),
    Nature("Impish", DEFENSE, SPECIAL_ATTACK),
    Nature("Lax", DEFENSE, SPECIAL_DEFENSE),
    Nature("Timid", SPEED, ATTACK),
    Nature("Hasty", SPEED, DEFENSE),
    Nature("Serious"),
    Nature("Jolly", SPEED, SPECIAL_ATTACK),
    Nature("Naive", SPEED, SPECIAL_DEFENSE),
    Nature("Modest", SPECIAL_ATTACK, ATTACK),
    Nature("Mild", SPECIAL_ATTACK, DEFENSE),
    Nature("Quiet", SPECIAL_ATTACK, SPEED),
    Nature("Bashful"),
    Nature("Rash", SPECIAL_ATTACK, SPECIAL_DEFENSE),
    Nature("Calm", SPECIAL_DEFENSE, ATTACK),
    Nature("Gentle", SPECIAL_DEFENSE, DEFENSE),
    Nature("Sassy", SPECIAL_DEFENSE, SPEED),
    Nature("Careful", SPECIAL_DEFENSE, SPECIAL_ATTACK),
    Nature("Quirky"),
)

NEUTRAL_NATURE = Nature("Neutral")


class NatureTable:
    """Case-insensitive nature lookup; unknown names resolve to a neutral nature."""

    def __init__(self, natures: Iterable[Nature] = NATURES) -> None:
        table: Dict[str, Nature] = {}
        for nature in natures:
            table[nature.name.strip().lower()] = nature
        self._natures = MappingProxyType(table)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip().lower() in self._natures

    def __iter__(self):
        return iter(self._natures.values())

    def __len__(self) -> int:
        return len(self._natures)

    def get(self, name: Optional[str]) -> Nature:
        if not name:
            return NEUTRAL_NATURE
        return self._natures.get(name.strip().lower(), NEUTRAL_NATURE)


DEFAULT_NATURES = NatureTable()
