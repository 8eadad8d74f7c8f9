from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from cubesolve.beginner.solver import compute_beginner_solution, get_next_beginner_hint
from cubesolve.beginner.stages import STAGE_LABELS
from cubesolve.config import SolverConfig
from cubesolve.cubie import SOLVED, CubeState, apply_alg, is_solved
from cubesolve.notation import format_moves, parse_alg
from cubesolve.optimal.engine import FullSolveEngine, kociemba_engine
from cubesolve.optimal.solver import OptimalSolver
from cubesolve.optimal.worker import FullSolveDispatcher
from cubesolve.scramble import generate_scramble
from cubesolve.validation import (
    ValidationIssue,
    ValidationResult,
    colors_to_facelets,
    from_facelets_strict,
    validate_facelet_colors,
)


class InvalidCubeError(ValueError):
    def __init__(self, issues: Sequence[ValidationIssue]) -> None:
        super().__init__("; ".join(issue.message for issue in issues))
        self.issues = tuple(issues)


def _result_payload(result: ValidationResult) -> dict[str, Any]:
    return {
        "ok": result.ok,
        "errors": list(result.errors),
        "codes": sorted({issue.code.value for issue in result.issues}),
    }


@dataclass
class CubeService:
    config: SolverConfig
    engine: FullSolveEngine
    optimal: OptimalSolver

    @classmethod
    def create(
        cls,
        config: SolverConfig | None = None,
        engine: FullSolveEngine = kociemba_engine,
    ) -> "CubeService":
        cfg = config or SolverConfig.from_env()
        dispatcher = FullSolveDispatcher(engine=engine, background=cfg.background_solve)
        return cls(config=cfg, engine=engine, optimal=OptimalSolver(config=cfg, dispatcher=dispatcher))

    def validate_colors(self, colors: Sequence[str]) -> dict[str, Any]:
        lenient = validate_facelet_colors(colors)
        if not lenient.ok:
            return _result_payload(lenient)
        return self.validate_facelets(colors_to_facelets(colors))

    def validate_facelets(self, facelets: str) -> dict[str, Any]:
        strict = from_facelets_strict(facelets)
        payload = _result_payload(strict)
        if strict.ok:
            payload["facelets"] = facelets
        return payload

    def state_from_colors(self, colors: Sequence[str]) -> CubeState:
        lenient = validate_facelet_colors(colors)
        if not lenient.ok:
            raise InvalidCubeError(lenient.issues)
        return self.state_from_facelets(colors_to_facelets(colors))

    def state_from_facelets(self, facelets: str) -> CubeState:
        strict = from_facelets_strict(facelets.strip())
        if strict.state is None:
            raise InvalidCubeError(strict.issues)
        return strict.state

    def state_from_moves(self, moves: str) -> CubeState:
        return apply_alg(SOLVED, parse_alg(moves))

    def scramble(self, seed: int | None = None) -> dict[str, Any]:
        rng = np.random.default_rng(seed)
        moves = generate_scramble(rng=rng, config=self.config, engine=self.engine)
        state = apply_alg(SOLVED, moves)
        return {"moves": format_moves(moves), "length": len(moves), "facelets": state.to_facelets()}

    def hint(self, state: CubeState) -> dict[str, Any]:
        hint = get_next_beginner_hint(state, engine=self.engine, config=self.config)
        return {
            "stage": hint.stage.value,
            "label": STAGE_LABELS[hint.stage],
            "moves": format_moves(hint.moves),
            "explanation_key": hint.explanation_key,
            "fallback": hint.is_fallback,
        }

    def beginner_solution(self, state: CubeState, max_moves: int | None = None) -> dict[str, Any]:
        moves = compute_beginner_solution(state, max_moves=max_moves, engine=self.engine, config=self.config)
        return {
            "moves": format_moves(moves),
            "length": len(moves),
            "solved": is_solved(apply_alg(state, moves)),
        }

    def optimal_solution(self, state: CubeState, timeout: float | None = None) -> dict[str, Any]:
        moves = self.optimal.solve(state, timeout=timeout)
        return {"moves": format_moves(moves), "length": len(moves)}

    def close(self) -> None:
        self.optimal.close()
