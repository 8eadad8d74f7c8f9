from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from cubesolve.config import SolverConfig
from cubesolve.cubie import SOLVED, apply_alg
from cubesolve.notation import parse_alg
from cubesolve.service import CubeService
from cubesolve.stickers import solved_facelets
from cubesolve.validation import FACE_TO_COLOR
import scripts.solver_api as solver_api


def _fake_engine(facelets: str) -> str:
    raise RuntimeError("engine not available in tests")


def _build_client(engine=_fake_engine, short_depth: int = 4) -> TestClient:
    config = SolverConfig(short_depth=short_depth, background_solve=False)
    solver_api.service = CubeService.create(config=config, engine=engine)
    return TestClient(solver_api.app)


def test_validate_facelets_reports_issues() -> None:
    client = _build_client()
    flipped = list(solved_facelets())
    flipped[5], flipped[10] = flipped[10], flipped[5]

    response = client.post("/api/validate/facelets", json={"facelets": "".join(flipped)})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["ok"] is False
    assert data["codes"] == ["ORIENTATION_PARITY_VIOLATION"]

    good = client.post("/api/validate/facelets", json={"facelets": solved_facelets()}).json()["data"]
    assert good["ok"] is True
    assert good["facelets"] == solved_facelets()


def test_validate_colors() -> None:
    client = _build_client()
    colors = [FACE_TO_COLOR[face] for face in apply_alg(SOLVED, parse_alg("R U")).to_facelets()]
    data = client.post("/api/validate/colors", json={"colors": colors}).json()["data"]
    assert data["ok"] is True

    colors[0] = "purple"
    bad = client.post("/api/validate/colors", json={"colors": colors}).json()["data"]
    assert bad["ok"] is False
    assert "COLOR_COUNT_VIOLATION" in bad["codes"]


def test_scramble_with_seed() -> None:
    client = _build_client()
    response = client.get("/api/scramble", params={"seed": 4})
    assert response.status_code == 200
    data = response.json()["data"]
    assert 20 <= data["length"] <= 25
    assert len(data["facelets"]) == 54


def test_hint_and_beginner_solution() -> None:
    client = _build_client()
    hint = client.post("/api/hint", json={"moves": "R"}).json()["data"]
    assert hint["stage"] == "white_cross"
    assert hint["moves"] == "R'"
    assert hint["fallback"] is False

    solution = client.post("/api/solve/beginner", json={"moves": "F R U R' U' F' U2"}).json()["data"]
    assert solution["solved"] is True
    assert solution["length"] <= 400


def test_optimal_solution_from_facelets() -> None:
    client = _build_client()
    facelets = apply_alg(SOLVED, parse_alg("R U")).to_facelets()
    response = client.post("/api/solve/optimal", json={"facelets": facelets})
    assert response.status_code == 200
    assert response.json()["data"] == {"moves": "U' R'", "length": 2}


def test_optimal_engine_failure_is_reported() -> None:
    client = _build_client(short_depth=1)
    response = client.post("/api/solve/optimal", json={"moves": "R U F"})
    assert response.status_code == 502
    assert "engine not available" in response.json()["detail"]


def test_invalid_requests_are_rejected() -> None:
    client = _build_client()
    both = client.post("/api/hint", json={"moves": "R", "facelets": solved_facelets()})
    assert both.status_code == 400

    bad_moves = client.post("/api/hint", json={"moves": "R Q"})
    assert bad_moves.status_code == 400

    twisted = list(solved_facelets())
    twisted[8], twisted[9], twisted[20] = twisted[20], twisted[8], twisted[9]
    response = client.post("/api/solve/optimal", json={"facelets": "".join(twisted)})
    assert response.status_code == 400
    assert response.json()["detail"]["codes"] == ["ORIENTATION_PARITY_VIOLATION"]
