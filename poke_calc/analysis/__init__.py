"""Stat and damage calculators."""

from .damage_calc import DamageCalculator, compute_damage
from .stat_calc import StatCalculator, compute_stat, compute_stats

__all__ = [
    "DamageCalculator",
    "StatCalculator",
    "compute_damage",
    "compute_stat",
    "compute_stats",
]
