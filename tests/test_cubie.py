from __future__ import annotations

import numpy as np
import pytest

from cubesolve.cubie import SOLVED, CubeState, apply_alg, apply_move, from_facelets, is_solved, to_facelets
from cubesolve.notation import ALL_MOVES, invert_alg, invert_move, parse_alg
from cubesolve.scramble import generate_fallback_scramble
from cubesolve.stickers import facelets_from_moves, solved_facelets

SAMPLE_ALGS = [
    "R",
    "U'",
    "F2",
    "R U R' U'",
    "F R U R' U' F'",
    "L D2 B' R U F2",
    "R U F L D B R",
    "B' L2 D R' F U2 L'",
]


def test_solved_state_facelets() -> None:
    assert SOLVED.is_solved()
    assert CubeState.solved() == SOLVED
    assert to_facelets(SOLVED) == solved_facelets()


@pytest.mark.parametrize("formula", SAMPLE_ALGS)
def test_facelet_round_trip(formula: str) -> None:
    state = apply_alg(SOLVED, parse_alg(formula))
    assert from_facelets(to_facelets(state)) == state


def test_every_move_is_undone_by_its_inverse() -> None:
    start = apply_alg(SOLVED, parse_alg("L D2 B' R U F2"))
    for move in ALL_MOVES:
        assert apply_move(apply_move(start, move), invert_move(move)) == start


def test_alg_followed_by_inverse_is_identity() -> None:
    rng = np.random.default_rng(7)
    for _ in range(5):
        moves = generate_fallback_scramble(rng=rng)
        state = apply_alg(SOLVED, moves)
        assert not is_solved(state)
        assert is_solved(apply_alg(state, invert_alg(moves)))


def test_quarter_turn_has_order_four() -> None:
    for move in ALL_MOVES:
        state = SOLVED
        for _ in range(4):
            state = state.apply(move)
        assert state == SOLVED


@pytest.mark.parametrize("formula", SAMPLE_ALGS)
def test_cubie_model_matches_sticker_simulation(formula: str) -> None:
    moves = parse_alg(formula)
    assert apply_alg(SOLVED, moves).to_facelets() == facelets_from_moves(moves)


def test_orientation_sums_stay_legal() -> None:
    state = apply_alg(SOLVED, parse_alg("F R U R' U' F' B L2 D'"))
    assert sum(state.co) % 3 == 0
    assert sum(state.eo) % 2 == 0
    assert sorted(state.cp) == list(range(8))
    assert sorted(state.ep) == list(range(12))


def test_from_facelets_rejects_wrong_length() -> None:
    with pytest.raises(ValueError, match="54"):
        from_facelets("U" * 53)
