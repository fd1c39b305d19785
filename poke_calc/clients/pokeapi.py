"""Lightweight wrapper around PokeAPI for fetching species and move data."""

from __future__ import annotations

import re
import time
from typing import Any, Dict, List, Optional

import requests

from ..config import load_settings
from ..models import PHYSICAL, SPECIAL, BaseStats, Move


class PokeAPIClientError(RuntimeError):
    """Raised when the PokeAPI request fails."""


class PokeAPIClient:
    """Small helper client with naive in-memory caching."""

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
        cache_ttl: Optional[int] = None,
        timeout: Optional[int] = None,
        user_agent: str = "poke-calc/0.1 (+https://github.com/)",
    ) -> None:
        settings = load_settings()
        self.session = session or requests.Session()
        self.base_url = (base_url or settings.pokeapi_url).rstrip("/")
        self.cache_ttl = settings.cache_ttl if cache_ttl is None else cache_ttl
        self.timeout = settings.timeout if timeout is None else timeout
        self.user_agent = user_agent
        self._cache: Dict[str, tuple[float, Any]] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def get_pokemon(self, name: str) -> Dict[str, Any]:
        slug = self._slugify_name(name)
        payload = self._get_json(f"pokemon/{slug}", allow_404=True)
        if payload is None:
            raise PokeAPIClientError(f"Unknown Pokemon: {name}")
        return payload

    def get_pokemon_types(self, name: str) -> List[str]:
        payload = self.get_pokemon(name)
        slots = sorted(payload.get("types", []), key=lambda slot: slot.get("slot", 0))
        return [slot["type"]["name"] for slot in slots]

    def get_base_stats(self, name: str) -> BaseStats:
        payload = self.get_pokemon(name)
        values = {
            entry["stat"]["name"]: entry.get("base_stat", 0)
            for entry in payload.get("stats", [])
        }
        return BaseStats.from_mapping(values)

    def get_abilities(self, name: str) -> List[str]:
        payload = self.get_pokemon(name)
        return [
            self._display_name(entry["ability"]["name"])
            for entry in payload.get("abilities", [])
        ]

    def get_move(self, move_name: str) -> Move:
        slug = self._slugify_name(move_name)
        payload = self._get_json(f"move/{slug}", allow_404=True)
        if payload is None:
            raise PokeAPIClientError(f"Unknown move: {move_name}")

        damage_class = (payload.get("damage_class") or {}).get("name")
        return Move(
            name=self._display_name(payload.get("name", slug)),
            power=payload.get("power") or 0,
            type=(payload.get("type") or {}).get("name") or "normal",
            damage_class=SPECIAL if damage_class == SPECIAL else PHYSICAL,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _get_json(self, endpoint: str, *, allow_404: bool = False) -> Optional[Dict[str, Any]]:
        url = self._build_url(endpoint)
        now = time.time()
        cached = self._cache.get(url)
        if cached and now - cached[0] < self.cache_ttl:
            return cached[1]

        try:
            response = self.session.get(
                url,
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
            )
            if response.status_code == 404 and allow_404:
                return None
            response.raise_for_status()
        except requests.RequestException as exc:
            raise PokeAPIClientError(str(exc)) from exc

        payload = response.json()
        self._cache[url] = (now, payload)
        return payload

    def _build_url(self, endpoint: str) -> str:
        endpoint = endpoint.lstrip("/")
        return f"{self.base_url}/{endpoint}"

    @staticmethod
    def _slugify_name(name: str) -> str:
        slug = name.strip().lower()
        slug = re.sub(r"[\s\.]+", "-", slug)
        slug = slug.replace("'", "")
        slug = slug.replace(":", "")
        slug = slug.replace("%", "")
        slug = re.sub(r"[^a-z0-9\-]", "", slug)
        return slug

    @staticmethod
    def _display_name(slug: str) -> str:
        return " ".join(part.capitalize() for part in slug.split("-"))
