"""Pokemon stat and damage calculators."""

from .analysis import (
    DamageCalculator,
    StatCalculator,
    compute_damage,
    compute_stat,
    compute_stats,
)
from .parsers import parse_team

__all__ = [
    "DamageCalculator",
    "StatCalculator",
    "compute_damage",
    "compute_stat",
    "compute_stats",
    "parse_team",
]
