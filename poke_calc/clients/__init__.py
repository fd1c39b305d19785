"""External data clients used by the calculator services."""

from .pokeapi import PokeAPIClient, PokeAPIClientError

__all__ = [
    "PokeAPIClient",
    "PokeAPIClientError",
]
