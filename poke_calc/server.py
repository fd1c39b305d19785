"""FastMCP server exposing the stat and damage calculators as tools."""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional

from fastmcp import FastMCP

from .clients import PokeAPIClient, PokeAPIClientError
from .services import CalculatorService

app = FastMCP("poke-calc", version="0.1.0")
_service = CalculatorService(catalog=PokeAPIClient())


@app.tool()
def compute_stat(
    stat: Annotated[str, "Stat name (hp, attack, defense, special-attack, special-defense, speed)"],
    base: Annotated[int, "Base stat value"],
    iv: Annotated[int, "Individual value (0-31)"] = 31,
    ev: Annotated[int, "Effort value (0-252)"] = 0,
    level: Annotated[Optional[int], "Level (1-100); defaults to POKE_CALC_DEFAULT_LEVEL"] = None,
    nature: Annotated[Optional[str], "Nature name, e.g. 'Jolly'"] = None,
) -> int:
    """Compute one final stat from base stat, IV, EV, level and nature."""

    return _service.compute_stat(stat, base, iv, ev, level, nature)


@app.tool()
def compute_stat_line(
    pokemon: Annotated[Dict[str, Any], "Pokemon: name/species, level, ivs, evs, nature, optional base_stats"],
) -> Dict[str, Any]:
    """Compute all six final stats for a Pokemon."""

    try:
        return _service.stat_line(pokemon)
    except PokeAPIClientError as exc:  # pragma: no cover - network failure
        return {"error": f"Error fetching {pokemon.get('species') or pokemon.get('name')}: {exc}"}


@app.tool()
def compute_damage(
    attacker: Annotated[Dict[str, Any], "Attacker: name/species, level, types, base_stats, ivs, evs, nature, item, ability"],
    defender: Annotated[Dict[str, Any], "Defender, same shape as the attacker"],
    move: Annotated[Dict[str, Any], "Move: name and optionally power, type, damage_class"],
) -> Dict[str, Any]:
    """Return the 16-roll damage range of one move against one defender."""

    try:
        return _service.compute_damage(attacker, defender, move)
    except PokeAPIClientError as exc:  # pragma: no cover - network failure
        return {"error": f"Error fetching catalog data: {exc}"}


@app.tool()
def compute_damage_from_sets(
    attacker_text: Annotated[str, "Showdown export of the attacker"],
    defender_text: Annotated[str, "Showdown export of the defender"],
    move: Annotated[str, "Move name (e.g., 'Earthquake')"],
) -> Dict[str, Any]:
    """Parse two Showdown sets and calculate the damage of one move."""

    try:
        return _service.compute_damage_from_sets(attacker_text, defender_text, move)
    except PokeAPIClientError as exc:  # pragma: no cover - network failure
        return {"error": f"Error fetching catalog data: {exc}"}


@app.tool()
def calculate_type_matchup(
    attacker_type: Annotated[str, "Attacking type"],
    defender_types: Annotated[List[str], "One or two defending types"],
) -> str:
    """Return the effectiveness multiplier of an attacking type against a defender."""

    multiplier = _service.type_matchup(attacker_type.strip(), [t.strip() for t in defender_types])
    defenders = "/".join(t.strip().title() for t in defender_types)
    return f"{attacker_type.strip().title()} vs {defenders} -> {multiplier}x"


@app.tool()
def list_natures() -> List[Dict[str, Any]]:
    """List every nature with the stat it raises and the stat it lowers."""

    return _service.natures()


@app.tool()
def list_modifiers() -> Dict[str, List[str]]:
    """List the abilities and held items the damage calculator applies."""

    return _service.modifiers()


@app.tool()
def list_abilities(
    pokemon: Annotated[str, "Pokemon species name"],
) -> Dict[str, Any]:
    """List a Pokemon's abilities and whether each one changes damage."""

    try:
        return {"pokemon": pokemon, "abilities": _service.abilities(pokemon)}
    except PokeAPIClientError as exc:  # pragma: no cover - network failure
        return {"error": f"Error fetching {pokemon}: {exc}"}


def run() -> None:
    """Entry point for `python -m poke_calc.server` or console script."""

    print("[poke-calc] Starting MCP server. Press Ctrl+C to stop.")
    app.run()


if __name__ == "__main__":
    run()
