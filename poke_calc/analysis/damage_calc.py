"""Damage calculation module using the standard Pokemon damage formula."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Iterable, List, Optional

from ..data.modifiers import DEFAULT_MODIFIERS, ModifierRegistry
from ..data.type_chart import DEFAULT_TYPE_CHART, TypeChart
from ..models import (
    ATTACK,
    DEFENSE,
    HP,
    SPECIAL,
    SPECIAL_ATTACK,
    SPECIAL_DEFENSE,
    BattleContext,
    Combatant,
    DamageModifiers,
    DamageResult,
    Move,
)
from .stat_calc import StatCalculator

ROLL_PERCENTAGES = range(85, 101)


def round_percent(value: float) -> float:
    """Round to one decimal place, halves away from zero."""

    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class DamageCalculator:
    """Calculates the 16-roll damage range of a single attack.

    Formula: floor(floor(floor(2 * Level / 5 + 2) * Power * A / D) / 50) + 2,
    then STAB, type effectiveness and held-item multipliers, flooring after
    each step, then the 85-100% random rolls.
    """

    def __init__(
        self,
        *,
        stat_calculator: Optional[StatCalculator] = None,
        type_chart: Optional[TypeChart] = None,
        modifiers: Optional[ModifierRegistry] = None,
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.stats = stat_calculator or StatCalculator()
        self.type_chart = type_chart or DEFAULT_TYPE_CHART
        self.modifiers = modifiers or DEFAULT_MODIFIERS
        self._debug_logger = debug_logger

    def _debug(self, message: str) -> None:
        if self._debug_logger:
            self._debug_logger(message)

    def calculate_damage(self, context: BattleContext) -> DamageResult:
        attacker, defender, move = context.attacker, context.defender, context.move

        if move.is_status:
            self._debug(f"{move.name} has no base power; skipping damage calculation")
            return DamageResult()

        is_special = move.damage_class == SPECIAL
        attack_stat_name = SPECIAL_ATTACK if is_special else ATTACK
        defense_stat_name = SPECIAL_DEFENSE if is_special else DEFENSE

        attacker_item = self.modifiers.item(attacker.item)
        attacker_ability = self.modifiers.ability(attacker.ability)
        defender_ability = self.modifiers.ability(defender.ability)

        # Attacking stat: item before ability
        attack = self.stats.combatant_stat(attacker, attack_stat_name)
        attack = attacker_item.modify_offensive_stat(attack, move.damage_class)
        attack = attacker_ability.modify_offensive_stat(attack, move.damage_class)

        defense = self.stats.combatant_stat(defender, defense_stat_name)
        # TODO: defensive items (Eviolite, Assault Vest) hook in here.
        defense = max(defense, 1)

        power = attacker_ability.modify_move_power(move.power)
        self._debug(
            f"{attacker.name} {move.name}: {attack_stat_name}={attack} "
            f"{defense_stat_name}={defense} power={power}"
        )

        level_factor = 2 * attacker.level // 5 + 2
        damage = level_factor * power * attack // defense // 50 + 2

        stab = attacker.has_type(move.type)
        if stab:
            damage = damage * 3 // 2

        type_multiplier = self.type_chart.multiplier(move.type, defender.types)
        type_multiplier = defender_ability.modify_defensive_type_multiplier(
            type_multiplier, move.type
        )
        type_multiplier = attacker_ability.modify_offensive_type_multiplier(type_multiplier)
        damage = math.floor(damage * type_multiplier)

        item_multiplier = attacker_item.modify_secondary_multiplier(
            1.0, type_multiplier, move.damage_class
        )
        damage = math.floor(damage * item_multiplier)

        rolls = [damage * percent // 100 for percent in ROLL_PERCENTAGES]
        min_damage, max_damage = rolls[0], rolls[-1]

        defender_hp = self.stats.combatant_stat(defender, HP)
        if defender_hp > 0:
            min_percent = round_percent(min_damage / defender_hp * 100)
            max_percent = round_percent(max_damage / defender_hp * 100)
        else:
            min_percent = max_percent = 0.0

        self._debug(
            f"{attacker.name} {move.name} vs {defender.name}: "
            f"{min_damage}-{max_damage} ({min_percent}-{max_percent}%)"
        )
        return DamageResult(
            min_damage=min_damage,
            max_damage=max_damage,
            rolls=rolls,
            min_percent=min_percent,
            max_percent=max_percent,
            modifiers=DamageModifiers(
                type_effectiveness=type_multiplier,
                stab=stab,
                crit=False,
                item=item_multiplier,
                weather=1.0,
            ),
            defender_hp=defender_hp,
        )

    def calculate_against(
        self, attacker: Combatant, move: Move, defenders: Iterable[Combatant]
    ) -> List[DamageResult]:
        """Resolve one attack against several candidate defenders."""

        return [
            self.calculate_damage(BattleContext(attacker=attacker, defender=defender, move=move))
            for defender in defenders
        ]


DEFAULT_DAMAGE_CALCULATOR = DamageCalculator()


def compute_damage(context: BattleContext) -> DamageResult:
    """Resolve one attack with the default tables."""

    return DEFAULT_DAMAGE_CALCULATOR.calculate_damage(context)
