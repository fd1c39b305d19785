"""Runtime settings read from the environment (and optional .env files)."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load default .env first, then overlay .env.local so user-specific values win.
load_dotenv()
load_dotenv(".env.local", override=True)


@dataclass(frozen=True, slots=True)
class Settings:
    pokeapi_url: str = "https://pokeapi.co/api/v2"
    cache_ttl: int = 600
    timeout: int = 10
    default_level: int = 50
    host: str = "127.0.0.1"
    port: int = 8000


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def load_settings() -> Settings:
    defaults = Settings()
    return Settings(
        pokeapi_url=os.getenv("POKE_CALC_POKEAPI_URL", defaults.pokeapi_url).rstrip("/"),
        cache_ttl=_int_env("POKE_CALC_CACHE_TTL", defaults.cache_ttl),
        timeout=_int_env("POKE_CALC_TIMEOUT", defaults.timeout),
        default_level=_int_env("POKE_CALC_DEFAULT_LEVEL", defaults.default_level),
        host=os.getenv("POKE_CALC_HOST", defaults.host),
        port=_int_env("POKE_CALC_PORT", defaults.port),
    )
