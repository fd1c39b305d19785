"""Final stat calculation (base + IV + EV + level + nature)."""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from ..data.natures import DEFAULT_NATURES, NatureTable
from ..models import (
    ATTACK,
    HP,
    STAT_ORDER,
    SPEED,
    BaseStats,
    Combatant,
)
from ..models.battle import DEFAULT_EV, DEFAULT_IV

MAX_IV = 31
MAX_EV = 252

SPREAD_PRESETS: Dict[str, Dict[str, object]] = {
    "min": {
        "ivs": {stat: 0 for stat in STAT_ORDER},
        "evs": {stat: 0 for stat in STAT_ORDER},
        "nature": None,
    },
    "max": {
        "ivs": {stat: MAX_IV for stat in STAT_ORDER},
        "evs": {stat: MAX_EV for stat in STAT_ORDER},
        "nature": None,
    },
    # Standard physical sweeper spread
    "competitive": {
        "ivs": {stat: MAX_IV for stat in STAT_ORDER},
        "evs": {stat: (4 if stat == HP else 252 if stat in (ATTACK, SPEED) else 0) for stat in STAT_ORDER},
        "nature": "Jolly",
    },
}


def clamp_iv(value: int) -> int:
    return min(MAX_IV, max(0, int(value)))


def clamp_ev(value: int) -> int:
    return min(MAX_EV, max(0, int(value)))


def spread_preset(name: str) -> Dict[str, object]:
    """Return a fresh copy of a named IV/EV/nature preset."""

    preset = SPREAD_PRESETS[name.strip().lower()]
    return {
        "ivs": dict(preset["ivs"]),
        "evs": dict(preset["evs"]),
        "nature": preset["nature"],
    }


class StatCalculator:
    """Computes final stats using the Gen 3+ formula.

    HP    = floor(0.01 * (2*Base + IV + floor(0.25*EV)) * Level) + Level + 10
    Other = floor((floor(0.01 * (2*Base + IV + floor(0.25*EV)) * Level) + 5) * Nature)

    Each floor is taken where the formula puts it. Integer arithmetic keeps
    every intermediate exact.
    """

    def __init__(self, natures: Optional[NatureTable] = None) -> None:
        self.natures = DEFAULT_NATURES if natures is None else natures

    def compute_stat(
        self,
        stat_name: str,
        base: int,
        iv: int,
        ev: int,
        level: int,
        nature_name: Optional[str] = None,
    ) -> int:
        scaled = (2 * base + iv + ev // 4) * level // 100

        if stat_name == HP:
            # Shedinja always has exactly 1 HP.
            if base == 1:
                return 1
            return scaled + level + 10

        stat = scaled + 5
        nature = self.natures.get(nature_name)
        if nature.boosted == stat_name:
            stat = stat * 11 // 10
        elif nature.hindered == stat_name:
            stat = stat * 9 // 10
        return stat

    def compute_stats(
        self,
        base_stats: BaseStats,
        ivs: Optional[Mapping[str, int]] = None,
        evs: Optional[Mapping[str, int]] = None,
        level: int = 50,
        nature_name: Optional[str] = None,
    ) -> Dict[str, int]:
        """Resolve all six stats in display order."""

        ivs = ivs or {}
        evs = evs or {}
        return {
            stat: self.compute_stat(
                stat,
                base_stats.get(stat),
                ivs.get(stat, DEFAULT_IV),
                evs.get(stat, DEFAULT_EV),
                level,
                nature_name,
            )
            for stat in STAT_ORDER
        }

    def combatant_stat(self, combatant: Combatant, stat_name: str) -> int:
        return self.compute_stat(
            stat_name,
            combatant.base_stats.get(stat_name),
            combatant.iv(stat_name),
            combatant.ev(stat_name),
            combatant.level,
            combatant.nature,
        )


DEFAULT_STAT_CALCULATOR = StatCalculator()


def compute_stat(
    stat_name: str,
    base: int,
    iv: int,
    ev: int,
    level: int,
    nature_name: Optional[str] = None,
) -> int:
    """Compute one final stat with the default nature table."""

    return DEFAULT_STAT_CALCULATOR.compute_stat(stat_name, base, iv, ev, level, nature_name)


def compute_stats(
    base_stats: BaseStats,
    ivs: Optional[Mapping[str, int]] = None,
    evs: Optional[Mapping[str, int]] = None,
    level: int = 50,
    nature_name: Optional[str] = None,
) -> Dict[str, int]:
    return DEFAULT_STAT_CALCULATOR.compute_stats(base_stats, ivs, evs, level, nature_name)
