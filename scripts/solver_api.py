#!/usr/bin/env python3
from __future__ import annotations

import logging
import sys
from pathlib import Path

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from cubesolve.cubie import CubeState
from cubesolve.optimal.engine import ExternalEngineFailure
from cubesolve.service import CubeService, InvalidCubeError

_LOGGER = logging.getLogger(__name__)

service = CubeService.create()
app = FastAPI(title="Cube Solver API", version="1.0.0")


class ColorsRequest(BaseModel):
    colors: list[str]


class FaceletsRequest(BaseModel):
    facelets: str


class CubeRequest(BaseModel):
    facelets: str | None = None
    colors: list[str] | None = None
    moves: str | None = None


class BeginnerRequest(CubeRequest):
    max_moves: int | None = Field(default=None, ge=1, le=2000)


def _state_from(payload: CubeRequest) -> CubeState:
    given = [value for value in (payload.facelets, payload.colors, payload.moves) if value is not None]
    if len(given) != 1:
        raise HTTPException(status_code=400, detail="Provide exactly one of facelets, colors or moves")
    try:
        if payload.facelets is not None:
            return service.state_from_facelets(payload.facelets)
        if payload.colors is not None:
            return service.state_from_colors(payload.colors)
        return service.state_from_moves(payload.moves or "")
    except InvalidCubeError as exc:
        raise HTTPException(
            status_code=400,
            detail={"errors": [issue.message for issue in exc.issues], "codes": [issue.code.value for issue in exc.issues]},
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.post("/api/validate/colors")
def api_validate_colors(payload: ColorsRequest) -> dict:
    return {"ok": True, "data": service.validate_colors(payload.colors)}


@app.post("/api/validate/facelets")
def api_validate_facelets(payload: FaceletsRequest) -> dict:
    return {"ok": True, "data": service.validate_facelets(payload.facelets.strip())}


@app.get("/api/scramble")
def api_scramble(seed: int | None = Query(default=None, ge=0)) -> dict:
    try:
        item = service.scramble(seed=seed)
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return {"ok": True, "data": item}


@app.post("/api/hint")
def api_hint(payload: CubeRequest) -> dict:
    state = _state_from(payload)
    try:
        item = service.hint(state)
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return {"ok": True, "data": item}


@app.post("/api/solve/beginner")
def api_solve_beginner(payload: BeginnerRequest) -> dict:
    state = _state_from(payload)
    try:
        item = service.beginner_solution(state, max_moves=payload.max_moves)
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return {"ok": True, "data": item}


@app.post("/api/solve/optimal")
def api_solve_optimal(payload: CubeRequest) -> dict:
    state = _state_from(payload)
    try:
        item = service.optimal_solution(state)
    except ExternalEngineFailure as exc:
        _LOGGER.warning("Optimal solve failed: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return {"ok": True, "data": item}
