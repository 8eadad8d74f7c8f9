from __future__ import annotations

import pytest

from cubesolve.config import SolverConfig
from cubesolve.cubie import SOLVED, apply_alg, is_solved
from cubesolve.notation import format_moves, parse_alg
from cubesolve.optimal.engine import ExternalEngineFailure
from cubesolve.optimal.short import find_short_solution, reverse_map
from cubesolve.optimal.solver import OptimalSolver
from cubesolve.optimal.worker import FullSolveDispatcher


def _sync_solver(engine, short_depth: int = 4) -> OptimalSolver:
    config = SolverConfig(short_depth=short_depth, background_solve=False)
    return OptimalSolver(config=config, dispatcher=FullSolveDispatcher(engine=engine, background=False))


def _unused_engine(facelets: str) -> str:
    raise AssertionError("short search should have found a solution")


def test_reverse_map_is_built_once_and_read_only() -> None:
    table = reverse_map(2)
    assert reverse_map(2) is table
    assert table[SOLVED.to_facelets()] == ()
    with pytest.raises(TypeError):
        table["x"] = ()  # type: ignore[index]


def test_solved_state_needs_no_moves() -> None:
    assert find_short_solution(SOLVED) == []


def test_one_move_away() -> None:
    state = apply_alg(SOLVED, parse_alg("R"))
    assert format_moves(_sync_solver(_unused_engine).solve(state)) == "R'"


def test_four_moves_away() -> None:
    state = apply_alg(SOLVED, parse_alg("R U R' U'"))
    moves = _sync_solver(_unused_engine).solve(state)
    assert len(moves) <= 4
    assert is_solved(apply_alg(state, moves))


def test_seven_moves_away_meets_in_the_middle() -> None:
    state = apply_alg(SOLVED, parse_alg("R U F L D B R"))
    moves = find_short_solution(state, depth=4)
    assert moves is not None
    assert len(moves) <= 8
    assert is_solved(apply_alg(state, moves))


def test_beyond_short_depth_returns_none() -> None:
    state = apply_alg(SOLVED, parse_alg("R U F"))
    assert find_short_solution(state, depth=1) is None


def test_far_state_is_delegated_to_engine() -> None:
    calls = []

    def engine(facelets: str) -> str:
        calls.append(facelets)
        return "F' U' R'"

    state = apply_alg(SOLVED, parse_alg("R U F"))
    moves = _sync_solver(engine, short_depth=1).solve(state)
    assert format_moves(moves) == "F' U' R'"
    assert calls == [state.to_facelets()]


def test_unreadable_engine_output_fails_the_request() -> None:
    state = apply_alg(SOLVED, parse_alg("R U F"))
    future = _sync_solver(lambda facelets: "Error 8", short_depth=1).solve_async(state)
    with pytest.raises(ExternalEngineFailure, match="unreadable"):
        future.result(timeout=5)


def test_engine_error_is_surfaced() -> None:
    def engine(facelets: str) -> str:
        raise ValueError("invalid cube")

    state = apply_alg(SOLVED, parse_alg("R U F"))
    with pytest.raises(ExternalEngineFailure, match="invalid cube"):
        _sync_solver(engine, short_depth=1).solve(state)


def test_real_engine_solves_far_state() -> None:
    pytest.importorskip("kociemba")
    from cubesolve.optimal.engine import kociemba_engine

    state = apply_alg(SOLVED, parse_alg("R U F L D B R F2 U' L2 B D'"))
    moves = _sync_solver(kociemba_engine, short_depth=2).solve(state)
    assert is_solved(apply_alg(state, moves))
