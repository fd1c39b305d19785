"""Abilities and held items that change the damage pipeline.

Every ability and item is a :class:`BattleModifier`. The damage calculator
calls the same hooks for whichever modifier a combatant carries, always in
this order:

1. ``modify_offensive_stat`` - attacker item first, then attacker ability.
2. ``modify_move_power`` - attacker ability.
3. ``modify_defensive_type_multiplier`` - defender ability, after the type
   chart lookup.
4. ``modify_offensive_type_multiplier`` - attacker ability, after step 3.
5. ``modify_secondary_multiplier`` - attacker item, after the type
   multiplier has been applied to damage.

Anything not registered resolves to :data:`NO_EFFECT`.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Optional

from ..models import PHYSICAL, SPECIAL

NOTHING_HELD = {"", "none"}


def normalize_modifier_name(name: Optional[str]) -> str:
    if not name:
        return ""
    slug = name.strip().lower().replace("-", " ").replace("_", " ")
    return " ".join(slug.split())


class BattleModifier:
    """No-op base; subclasses override only the hooks they care about."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    def modify_offensive_stat(self, stat: int, damage_class: str) -> int:
        return stat

    def modify_move_power(self, power: int) -> int:
        return power

    def modify_defensive_type_multiplier(self, multiplier: float, move_type: str) -> float:
        return multiplier

    def modify_offensive_type_multiplier(self, multiplier: float) -> float:
        return multiplier

    def modify_secondary_multiplier(
        self, multiplier: float, type_multiplier: float, damage_class: str
    ) -> float:
        return multiplier


NO_EFFECT = BattleModifier("None")


# ----------------------------------------------------------------------
# Abilities
# ----------------------------------------------------------------------
class PowerDoublingAbility(BattleModifier):
    """Huge Power / Pure Power: doubles the physical attacking stat."""

    def modify_offensive_stat(self, stat: int, damage_class: str) -> int:
        if damage_class == PHYSICAL:
            return stat * 2
        return stat


class LowPowerBoostAbility(BattleModifier):
    """Technician: weak moves get 50% more base power."""

    def __init__(self, name: str, *, threshold: int = 60) -> None:
        super().__init__(name)
        self.threshold = threshold

    def modify_move_power(self, power: int) -> int:
        if power <= self.threshold:
            return power * 3 // 2
        return power


class TypeImmunityAbility(BattleModifier):
    """Levitate, Flash Fire, the absorb abilities, Sap Sipper."""

    def __init__(self, name: str, immune_types: Iterable[str]) -> None:
        super().__init__(name)
        self.immune_types: FrozenSet[str] = frozenset(t.lower() for t in immune_types)

    def modify_defensive_type_multiplier(self, multiplier: float, move_type: str) -> float:
        if move_type.lower() in self.immune_types:
            return 0.0
        return multiplier


class WonderGuardAbility(BattleModifier):
    """Only super-effective hits get through."""

    def modify_defensive_type_multiplier(self, multiplier: float, move_type: str) -> float:
        if multiplier <= 1:
            return 0.0
        return multiplier


class TintedLensAbility(BattleModifier):
    """Resisted (but not immune) hits deal double."""

    def modify_offensive_type_multiplier(self, multiplier: float) -> float:
        if 0 < multiplier < 1:
            return multiplier * 2
        return multiplier


# ----------------------------------------------------------------------
# Items
# ----------------------------------------------------------------------
class ChoiceItem(BattleModifier):
    """Choice Band / Choice Specs: 1.5x the matching attacking stat."""

    def __init__(self, name: str, damage_class: str) -> None:
        super().__init__(name)
        self.damage_class = damage_class

    def modify_offensive_stat(self, stat: int, damage_class: str) -> int:
        if damage_class == self.damage_class:
            return stat * 3 // 2
        return stat


class PowerItem(BattleModifier):
    """Flat secondary multiplier, optionally limited to one damage class."""

    def __init__(self, name: str, factor: float, damage_class: Optional[str] = None) -> None:
        super().__init__(name)
        self.factor = factor
        self.damage_class = damage_class

    def modify_secondary_multiplier(
        self, multiplier: float, type_multiplier: float, damage_class: str
    ) -> float:
        if self.damage_class is None or self.damage_class == damage_class:
            return multiplier * self.factor
        return multiplier


class SuperEffectiveItem(BattleModifier):
    """Expert Belt: boosts only super-effective hits."""

    def __init__(self, name: str, factor: float = 1.2) -> None:
        super().__init__(name)
        self.factor = factor

    def modify_secondary_multiplier(
        self, multiplier: float, type_multiplier: float, damage_class: str
    ) -> float:
        if type_multiplier > 1:
            return multiplier * self.factor
        return multiplier


DEFAULT_ABILITIES = (
    PowerDoublingAbility("Huge Power"),
    PowerDoublingAbility("Pure Power"),
    LowPowerBoostAbility("Technician", threshold=60),
    TypeImmunityAbility("Levitate", ["ground"]),
    TypeImmunityAbility("Flash Fire", ["fire"]),
    TypeImmunityAbility("Volt Absorb", ["electric"]),
    TypeImmunityAbility("Motor Drive", ["electric"]),
    TypeImmunityAbility("Lightning Rod", ["electric"]),
    TypeImmunityAbility("Water Absorb", ["water"]),
    TypeImmunityAbility("Dry Skin", ["water"]),
    TypeImmunityAbility("Storm Drain", ["water"]),
    TypeImmunityAbility("Sap Sipper", ["grass"]),
    WonderGuardAbility("Wonder Guard"),
    TintedLensAbility("Tinted Lens"),
)

DEFAULT_ITEMS = (
    ChoiceItem("Choice Band", PHYSICAL),
    ChoiceItem("Choice Specs", SPECIAL),
    PowerItem("Life Orb", 1.3),
    SuperEffectiveItem("Expert Belt", 1.2),
    PowerItem("Muscle Band", 1.1, PHYSICAL),
    PowerItem("Wise Glasses", 1.1, SPECIAL),
)


class ModifierRegistry:
    """Name -> modifier lookup for abilities and held items."""

    def __init__(
        self,
        abilities: Iterable[BattleModifier] = DEFAULT_ABILITIES,
        items: Iterable[BattleModifier] = DEFAULT_ITEMS,
    ) -> None:
        self._abilities = self._index(abilities)
        self._items = self._index(items)

    @staticmethod
    def _index(modifiers: Iterable[BattleModifier]):
        table: Dict[str, BattleModifier] = {}
        for modifier in modifiers:
            table[normalize_modifier_name(modifier.name)] = modifier
        return MappingProxyType(table)

    @property
    def ability_names(self) -> list[str]:
        return [modifier.name for modifier in self._abilities.values()]

    @property
    def item_names(self) -> list[str]:
        return [modifier.name for modifier in self._items.values()]

    def ability(self, name: Optional[str]) -> BattleModifier:
        return self._lookup(self._abilities, name)

    def item(self, name: Optional[str]) -> BattleModifier:
        return self._lookup(self._items, name)

    @staticmethod
    def _lookup(table, name: Optional[str]) -> BattleModifier:
        key = normalize_modifier_name(name)
        if key in NOTHING_HELD:
            return NO_EFFECT
        return table.get(key, NO_EFFECT)


DEFAULT_MODIFIERS = ModifierRegistry()
