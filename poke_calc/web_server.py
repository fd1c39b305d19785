"""FastAPI web server exposing the calculators via REST API."""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field, field_validator

from .clients import PokeAPIClient, PokeAPIClientError
from .config import load_settings
from .services import CalculatorService

MAX_EV_TOTAL = 510

IV = Annotated[int, Field(ge=0, le=31)]
EV = Annotated[int, Field(ge=0, le=252)]

app = FastAPI(
    title="Poke-Calc Web API",
    description="REST API for Pokemon stat and damage calculations",
    version="0.1.0",
)

# Initialize shared services (same as MCP server)
_service = CalculatorService(catalog=PokeAPIClient())


# Pydantic models for request/response
class StatRequest(BaseModel):
    """Request model for a single stat."""

    stat: str
    base: int = Field(ge=0)
    iv: IV = 31
    ev: EV = 0
    level: Optional[int] = Field(default=None, ge=1, le=100)
    nature: Optional[str] = None


class StatResponse(BaseModel):
    result: int


class CombatantRequest(BaseModel):
    """A Pokemon as entered in the calculator form."""

    name: Optional[str] = None
    species: Optional[str] = None
    level: Optional[int] = Field(default=None, ge=1, le=100)
    types: List[str] = Field(default_factory=list, max_length=2)
    base_stats: Optional[Dict[str, Annotated[int, Field(ge=0)]]] = None
    ivs: Dict[str, IV] = Field(default_factory=dict)
    evs: Dict[str, EV] = Field(default_factory=dict)
    nature: Optional[str] = None
    item: Optional[str] = None
    ability: Optional[str] = None
    status: Optional[str] = None

    @field_validator("evs")
    @classmethod
    def _check_ev_total(cls, evs: Dict[str, int]) -> Dict[str, int]:
        total = sum(evs.values())
        if total > MAX_EV_TOTAL:
            raise ValueError(f"EV total {total} exceeds {MAX_EV_TOTAL}")
        return evs


class MoveRequest(BaseModel):
    name: str
    power: Optional[int] = Field(default=None, ge=0)
    type: Optional[str] = None
    damage_class: Optional[Literal["physical", "special"]] = None


class DamageRequest(BaseModel):
    """Request model for the damage calculator."""

    attacker: CombatantRequest
    defender: CombatantRequest
    move: MoveRequest


class ResultResponse(BaseModel):
    """Response model wrapping a JSON payload."""

    result: Dict[str, Any]


class TypeMatchupResponse(BaseModel):
    result: str
    multiplier: float


class NaturesResponse(BaseModel):
    result: List[Dict[str, Any]]


class ModifiersResponse(BaseModel):
    abilities: List[str]
    items: List[str]


class AbilitiesResponse(BaseModel):
    pokemon: str
    abilities: List[Dict[str, Any]]


def _dump(model: BaseModel) -> Dict[str, Any]:
    return model.model_dump(exclude_none=True)


@app.post("/api/compute_stat", response_model=StatResponse)
async def compute_stat(request: StatRequest) -> StatResponse:
    """Compute one final stat."""
    try:
        value = _service.compute_stat(
            request.stat, request.base, request.iv, request.ev, request.level, request.nature
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return StatResponse(result=value)


@app.post("/api/compute_stat_line", response_model=ResultResponse)
async def compute_stat_line(request: CombatantRequest) -> ResultResponse:
    """Compute all six final stats of a Pokemon."""
    try:
        return ResultResponse(result=_service.stat_line(_dump(request)))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except PokeAPIClientError as exc:
        raise HTTPException(status_code=502, detail=f"Failed to fetch Pokemon data: {exc}")


@app.post("/api/compute_damage", response_model=ResultResponse)
async def compute_damage(request: DamageRequest) -> ResultResponse:
    """Return the damage range of one move against one defender."""
    try:
        result = _service.compute_damage(
            _dump(request.attacker), _dump(request.defender), _dump(request.move)
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Failed to calculate damage: {exc}")
    except PokeAPIClientError as exc:
        raise HTTPException(status_code=502, detail=f"Failed to fetch catalog data: {exc}")
    return ResultResponse(result=result)


@app.get("/api/calculate_type_matchup", response_model=TypeMatchupResponse)
async def calculate_type_matchup(
    attacker_type: str = Query(..., description="Attacking type"),
    defender_types: List[str] = Query(..., description="One or two defending types"),
) -> TypeMatchupResponse:
    """Return the effectiveness multiplier of an attacking type against a defender."""
    multiplier = _service.type_matchup(attacker_type.strip(), [t.strip() for t in defender_types])
    defenders = "/".join(t.strip().title() for t in defender_types)
    result = f"{attacker_type.strip().title()} vs {defenders} -> {multiplier}x"
    return TypeMatchupResponse(result=result, multiplier=multiplier)


@app.get("/api/natures", response_model=NaturesResponse)
async def list_natures() -> NaturesResponse:
    """List every nature and the stats it changes."""
    return NaturesResponse(result=_service.natures())


@app.get("/api/modifiers", response_model=ModifiersResponse)
async def list_modifiers() -> ModifiersResponse:
    """List the abilities and held items the damage calculator applies."""
    return ModifiersResponse(**_service.modifiers())


@app.get("/api/abilities/{pokemon}", response_model=AbilitiesResponse)
async def list_abilities(pokemon: str) -> AbilitiesResponse:
    """List a Pokemon's abilities and whether each one changes damage."""
    try:
        abilities = _service.abilities(pokemon)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except PokeAPIClientError as exc:
        raise HTTPException(status_code=502, detail=f"Failed to fetch Pokemon data: {exc}")
    return AbilitiesResponse(pokemon=pokemon, abilities=abilities)


def run(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Entry point for running the web server."""
    import uvicorn

    settings = load_settings()
    host = host or settings.host
    port = port or settings.port
    print(f"[poke-calc-web] Starting web server at http://{host}:{port}")
    print("[poke-calc-web] Press Ctrl+C to stop.")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
