from __future__ import annotations

import numpy as np

from cubesolve.config import SolverConfig
from cubesolve.cubie import SOLVED, apply_alg
from cubesolve.notation import format_moves, parse_alg
from cubesolve.scramble import (
    generate_fallback_scramble,
    generate_scramble,
    random_cube_state,
    random_state_scramble,
)
from cubesolve.validation import is_solvable


def test_fallback_scramble_length_and_no_repeated_face() -> None:
    rng = np.random.default_rng(42)
    for _ in range(200):
        moves = generate_fallback_scramble(20, 25, rng)
        assert 20 <= len(moves) <= 25
        for previous, current in zip(moves, moves[1:]):
            assert previous.face != current.face


def test_fallback_scramble_is_reproducible_with_seed() -> None:
    first = generate_fallback_scramble(rng=np.random.default_rng(3))
    second = generate_fallback_scramble(rng=np.random.default_rng(3))
    assert first == second


def test_fixed_length_scramble() -> None:
    moves = generate_fallback_scramble(5, 5, np.random.default_rng(1))
    assert len(moves) == 5


def test_random_cube_states_are_solvable() -> None:
    rng = np.random.default_rng(11)
    for _ in range(25):
        state = random_cube_state(rng)
        assert is_solvable(state.to_facelets()).ok


def test_random_state_scramble_inverts_engine_solution() -> None:
    moves = random_state_scramble(np.random.default_rng(5), engine=lambda facelets: "R U F2")
    assert format_moves(moves) == "F2 U' R'"


def test_generate_scramble_uses_provider() -> None:
    assert generate_scramble(provider=lambda: "R U R' U'") == parse_alg("R U R' U'")


def test_generate_scramble_falls_back_when_provider_fails(caplog) -> None:
    def broken_provider() -> str:
        raise RuntimeError("engine offline")

    config = SolverConfig(scramble_min_moves=10, scramble_max_moves=12)
    moves = generate_scramble(rng=np.random.default_rng(9), provider=broken_provider, config=config)
    assert 10 <= len(moves) <= 12
    assert "engine offline" in caplog.text


def test_generate_scramble_falls_back_on_unparseable_provider_output() -> None:
    moves = generate_scramble(rng=np.random.default_rng(9), provider=lambda: "R Q2")
    assert 20 <= len(moves) <= 25
    assert apply_alg(SOLVED, moves) != SOLVED
