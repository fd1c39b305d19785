"""Static tables consumed by the calculators."""

from .modifiers import DEFAULT_MODIFIERS, BattleModifier, ModifierRegistry
from .natures import DEFAULT_NATURES, NATURES, NatureTable
from .type_chart import DEFAULT_TYPE_CHART, TYPE_CHART, TypeChart

__all__ = [
    "BattleModifier",
    "DEFAULT_MODIFIERS",
    "DEFAULT_NATURES",
    "DEFAULT_TYPE_CHART",
    "ModifierRegistry",
    "NATURES",
    "NatureTable",
    "TYPE_CHART",
    "TypeChart",
]
