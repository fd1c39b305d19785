"""Tests for the damage pipeline."""

from __future__ import annotations

import copy
from dataclasses import replace

import pytest

from poke_calc.analysis.damage_calc import DamageCalculator, compute_damage, round_percent
from poke_calc.data.type_chart import TypeChart
from poke_calc.models import (
    PHYSICAL,
    SPECIAL,
    BaseStats,
    BattleContext,
    Combatant,
    DamageModifiers,
    Move,
)

GARCHOMP = BaseStats(
    hp=108, attack=130, defense=95, special_attack=80, special_defense=85, speed=102
)
TYRANITAR = BaseStats(
    hp=100, attack=134, defense=110, special_attack=95, special_defense=100, speed=61
)
SHEDINJA = BaseStats(
    hp=1, attack=90, defense=45, special_attack=30, special_defense=30, speed=40
)

EARTHQUAKE = Move("Earthquake", 100, "ground", PHYSICAL)
DRACO_METEOR = Move("Draco Meteor", 130, "dragon", SPECIAL)


def make_attacker(**overrides) -> Combatant:
    attacker = Combatant(
        name="Garchomp",
        base_stats=GARCHOMP,
        level=50,
        types=["dragon", "ground"],
        ivs={"attack": 31},
        evs={"attack": 252},
        nature="Jolly",
        item="None",
    )
    return replace(attacker, **overrides)


def make_defender(**overrides) -> Combatant:
    defender = Combatant(
        name="Tyranitar",
        base_stats=TYRANITAR,
        level=50,
        types=["rock", "dark"],
        ivs={"defense": 31, "hp": 31},
        evs={"defense": 0, "hp": 0},
        nature="Hardy",
        item="None",
    )
    return replace(defender, **overrides)


def damage(attacker=None, defender=None, move=EARTHQUAKE, calculator=None):
    context = BattleContext(
        attacker=attacker or make_attacker(),
        defender=defender or make_defender(),
        move=move,
    )
    if calculator is not None:
        return calculator.calculate_damage(context)
    return compute_damage(context)


def test_earthquake_baseline() -> None:
    result = damage()

    assert result.max_damage == 188
    assert result.min_damage == 159
    assert result.modifiers.type_effectiveness == 2
    assert result.modifiers.stab is True
    assert result.modifiers.crit is False
    assert result.modifiers.item == 1
    assert result.modifiers.weather == 1
    assert result.defender_hp == 175
    assert result.min_percent == 90.9
    assert result.max_percent == 107.4


def test_rolls_are_sixteen_ascending_values() -> None:
    result = damage()

    assert len(result.rolls) == 16
    assert result.rolls == sorted(result.rolls)
    assert result.rolls[0] == result.min_damage
    assert result.rolls[-1] == result.max_damage
    assert result.ko_rolls == 7
    assert result.ko_chance == "possible"


def test_repeated_calls_are_identical_and_do_not_mutate_inputs() -> None:
    attacker, defender = make_attacker(), make_defender()
    snapshot = copy.deepcopy((attacker, defender, EARTHQUAKE))

    first = damage(attacker, defender)
    second = damage(attacker, defender)

    assert first == second
    assert (attacker, defender, EARTHQUAKE) == snapshot


def test_status_move_short_circuits() -> None:
    attacker = make_attacker(item="Life Orb", ability="Huge Power")
    result = damage(attacker, move=Move("Swords Dance", 0, "normal", PHYSICAL))

    assert result.min_damage == 0
    assert result.max_damage == 0
    assert result.rolls == []
    assert result.min_percent == 0
    assert result.max_percent == 0
    assert result.modifiers == DamageModifiers(
        type_effectiveness=0, stab=False, crit=False, item=1, weather=1
    )
    assert result.ko_chance == "none"


def test_choice_band_boosts_physical_attack() -> None:
    assert damage(make_attacker(item="Choice Band")).max_damage == 282
    # Choice Band does nothing for special moves.
    assert damage(make_attacker(item="Choice Band"), move=DRACO_METEOR).max_damage == 66


def test_choice_specs_boosts_special_attack() -> None:
    assert damage(move=DRACO_METEOR).max_damage == 66
    assert damage(make_attacker(item="Choice Specs"), move=DRACO_METEOR).max_damage == 99
    assert damage(make_attacker(item="Choice Specs")).max_damage == 188


def test_power_doubling_ability() -> None:
    baseline = damage().max_damage
    boosted = damage(make_attacker(ability="Huge Power")).max_damage

    assert boosted == 374
    assert boosted > 1.8 * baseline
    assert damage(make_attacker(ability="Pure Power")).max_damage == boosted
    # Only physical attacks are doubled.
    assert damage(make_attacker(ability="Huge Power"), move=DRACO_METEOR).max_damage == 66


@pytest.mark.parametrize(
    "ability, move",
    [
        ("Levitate", Move("Earthquake", 250, "ground", PHYSICAL)),
        ("Flash Fire", Move("Flare Blitz", 120, "fire", PHYSICAL)),
        ("Volt Absorb", Move("Thunderbolt", 90, "electric", SPECIAL)),
        ("Motor Drive", Move("Thunderbolt", 90, "electric", SPECIAL)),
        ("Lightning Rod", Move("Thunderbolt", 90, "electric", SPECIAL)),
        ("Water Absorb", Move("Surf", 90, "water", SPECIAL)),
        ("Dry Skin", Move("Surf", 90, "water", SPECIAL)),
        ("Storm Drain", Move("Surf", 90, "water", SPECIAL)),
        ("Sap Sipper", Move("Energy Ball", 90, "grass", SPECIAL)),
    ],
)
def test_immunity_abilities_block_their_type(ability: str, move: Move) -> None:
    result = damage(defender=make_defender(ability=ability), move=move)

    assert result.max_damage == 0
    assert result.modifiers.type_effectiveness == 0
    assert set(result.rolls) == {0}


def test_immunity_ability_ignores_other_types() -> None:
    result = damage(defender=make_defender(ability="Levitate"), move=DRACO_METEOR)
    assert result.max_damage == 66


def test_wonder_guard_blocks_everything_but_super_effective_hits() -> None:
    shedinja = make_defender(
        name="Shedinja",
        base_stats=SHEDINJA,
        types=["bug", "ghost"],
        ability="Wonder Guard",
    )

    neutral = damage(defender=shedinja, move=Move("Waterfall", 80, "water", PHYSICAL))
    assert neutral.max_damage == 0
    assert neutral.modifiers.type_effectiveness == 0

    resisted = damage(defender=shedinja, move=EARTHQUAKE)
    assert resisted.max_damage == 0

    super_effective = damage(defender=shedinja, move=Move("Flare Blitz", 120, "fire", PHYSICAL))
    assert super_effective.max_damage > 0
    assert super_effective.modifiers.type_effectiveness == 2
    assert super_effective.defender_hp == 1
    assert super_effective.ko_chance == "guaranteed"


def test_tinted_lens_restores_resisted_hits_to_neutral() -> None:
    lens_user = make_attacker(types=["normal"], ability="Tinted Lens")
    plain = make_attacker(types=["normal"])
    water = make_defender(types=["water"])
    fire_punch = Move("Fire Punch", 80, "fire", PHYSICAL)
    brick_break = Move("Brick Break", 80, "fighting", PHYSICAL)
    thunder_punch = Move("Thunder Punch", 80, "electric", PHYSICAL)

    resisted = damage(lens_user, water, fire_punch)
    neutral = damage(plain, water, brick_break)
    assert resisted.modifiers.type_effectiveness == 1
    assert resisted.rolls == neutral.rolls
    assert damage(plain, water, fire_punch).max_damage < resisted.max_damage

    assert damage(lens_user, water, brick_break) == neutral
    assert damage(lens_user, water, thunder_punch) == damage(plain, water, thunder_punch)


def test_tinted_lens_does_not_break_immunities() -> None:
    lens_user = make_attacker(ability="Tinted Lens")
    flying = make_defender(types=["flying"])

    result = damage(lens_user, flying, EARTHQUAKE)
    assert result.modifiers.type_effectiveness == 0
    assert result.max_damage == 0


def test_technician_threshold() -> None:
    technician = make_attacker(ability="Technician")
    plain = make_attacker()
    bulldoze = Move("Bulldoze", 60, "ground", PHYSICAL)
    over_cutoff = Move("Bulldoze+", 61, "ground", PHYSICAL)

    boosted = damage(technician, move=bulldoze)
    assert boosted == damage(plain, move=Move("Bulldoze", 90, "ground", PHYSICAL))
    assert boosted != damage(plain, move=bulldoze)
    assert damage(technician, move=over_cutoff) == damage(plain, move=over_cutoff)


@pytest.mark.parametrize(
    "item, move, expected_max, expected_item",
    [
        ("Life Orb", EARTHQUAKE, 244, 1.3),
        ("Expert Belt", EARTHQUAKE, 225, 1.2),
        ("Expert Belt", DRACO_METEOR, 66, 1.0),
        ("Muscle Band", EARTHQUAKE, 206, 1.1),
        ("Muscle Band", DRACO_METEOR, 66, 1.0),
        ("Wise Glasses", DRACO_METEOR, 72, 1.1),
        ("Wise Glasses", EARTHQUAKE, 188, 1.0),
    ],
)
def test_secondary_item_multipliers(item, move, expected_max, expected_item) -> None:
    result = damage(make_attacker(item=item), move=move)

    assert result.max_damage == expected_max
    assert result.modifiers.item == pytest.approx(expected_item)


def test_unknown_names_have_no_effect() -> None:
    result = damage(
        make_attacker(item="Mystery Berry", ability="Not An Ability", nature="Grumpy"),
        make_defender(ability="Rough Skin"),
    )
    assert result.max_damage == 188


def test_modifier_names_accept_pokeapi_slugs() -> None:
    assert damage(make_attacker(item="life-orb")).max_damage == 244
    assert damage(make_attacker(ability="huge-power")).max_damage == 374


def test_missing_base_stats_do_not_raise() -> None:
    blank = Combatant(name="MissingNo")
    result = damage(blank, blank, Move("Tackle", 40, "normal", PHYSICAL))

    assert len(result.rolls) == 16
    assert result.max_damage >= 0


def test_calculators_can_use_swapped_type_charts() -> None:
    custom = DamageCalculator(
        type_chart=TypeChart({"ground": {"double": (), "half": ("rock",), "zero": ()}})
    )

    result = damage(calculator=custom)
    assert result.modifiers.type_effectiveness == 0.5
    assert result.max_damage == 47
    assert damage().max_damage == 188


def test_calculate_against_many_defenders() -> None:
    calculator = DamageCalculator()
    results = calculator.calculate_against(
        make_attacker(),
        EARTHQUAKE,
        [make_defender(), make_defender(ability="Levitate")],
    )
    assert [result.max_damage for result in results] == [188, 0]


def test_debug_logger_receives_progress() -> None:
    messages: list[str] = []
    calculator = DamageCalculator(debug_logger=messages.append)

    damage(calculator=calculator)

    assert any("attack=182" in message and "defense=130" in message for message in messages)
    assert any("159-188" in message for message in messages)


def test_round_percent_rounds_halves_up() -> None:
    assert round_percent(0.25) == 0.3
    assert round_percent(107.42857) == 107.4
    assert round_percent(90.857) == 90.9
