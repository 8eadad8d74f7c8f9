from __future__ import annotations

import logging
from functools import partial
from typing import Callable

import numpy as np

from cubesolve.config import DEFAULT_CONFIG, SolverConfig
from cubesolve.cubie import CubeState
from cubesolve.notation import FACE_ORDER, TURN_AMOUNTS, Move, format_moves, invert_alg, parse_alg
from cubesolve.optimal.engine import FullSolveEngine, kociemba_engine
from cubesolve.validation import permutation_parity

_LOGGER = logging.getLogger(__name__)

ScrambleProvider = Callable[[], str]


def generate_fallback_scramble(
    min_moves: int = 20,
    max_moves: int = 25,
    rng: np.random.Generator | None = None,
) -> list[Move]:
    """Random-move scramble that never turns the same face twice in a row.

    Opposite faces (R then L) are allowed on purpose; the delegate engine
    behaves the same way.
    """
    rng = rng if rng is not None else np.random.default_rng()
    low, high = min(min_moves, max_moves), max(min_moves, max_moves)
    length = int(rng.integers(low, high + 1))

    moves: list[Move] = []
    last_face: str | None = None
    for _ in range(length):
        face = FACE_ORDER[int(rng.integers(len(FACE_ORDER)))]
        while face == last_face:
            face = FACE_ORDER[int(rng.integers(len(FACE_ORDER)))]
        last_face = face
        amount = TURN_AMOUNTS[int(rng.integers(len(TURN_AMOUNTS)))]
        moves.append(Move(face, amount))
    return moves


def random_cube_state(rng: np.random.Generator | None = None) -> CubeState:
    """Uniformly random state among those a real cube can reach."""
    rng = rng if rng is not None else np.random.default_rng()
    cp = [int(piece) for piece in rng.permutation(8)]
    ep = [int(piece) for piece in rng.permutation(12)]
    if permutation_parity(cp) != permutation_parity(ep):
        ep[10], ep[11] = ep[11], ep[10]

    co = [int(twist) for twist in rng.integers(0, 3, size=7)]
    co.append(-sum(co) % 3)
    eo = [int(flip) for flip in rng.integers(0, 2, size=11)]
    eo.append(sum(eo) % 2)
    return CubeState(cp=tuple(cp), co=tuple(co), ep=tuple(ep), eo=tuple(eo))


def random_state_scramble(
    rng: np.random.Generator | None = None,
    engine: FullSolveEngine = kociemba_engine,
) -> list[Move]:
    state = random_cube_state(rng)
    solution = parse_alg(engine(state.to_facelets()))
    return invert_alg(solution)


def _random_state_text(rng: np.random.Generator, engine: FullSolveEngine) -> str:
    return format_moves(random_state_scramble(rng, engine))


def generate_scramble(
    rng: np.random.Generator | None = None,
    provider: ScrambleProvider | None = None,
    config: SolverConfig = DEFAULT_CONFIG,
    engine: FullSolveEngine = kociemba_engine,
) -> list[Move]:
    """Prefers a random-state scramble and degrades to random moves if the provider fails."""
    rng = rng if rng is not None else np.random.default_rng()
    if provider is None:
        provider = partial(_random_state_text, rng, engine)

    try:
        return parse_alg(provider())
    except (ImportError, ValueError, RuntimeError, OSError) as exc:
        _LOGGER.warning("Scramble provider failed, using local generator: %s", exc)

    return generate_fallback_scramble(config.scramble_min_moves, config.scramble_max_moves, rng)
