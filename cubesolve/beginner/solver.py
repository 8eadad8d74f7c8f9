from __future__ import annotations

import logging
from typing import Callable, Sequence

from cubesolve.beginner.algs import get_algorithm, stage_operators
from cubesolve.beginner.cross import solve_cross
from cubesolve.beginner.stages import (
    D_SLOTS,
    MIDDLE_SLOTS,
    U_SLOTS,
    are_middle_edges_solved,
    are_u_corners_oriented,
    are_u_corners_permuted,
    are_u_edges_oriented,
    get_current_stage,
)
from cubesolve.config import DEFAULT_CONFIG, SolverConfig
from cubesolve.cubie import EDGE_COLORS, CubeState, apply_alg, apply_move, is_solved
from cubesolve.models import FALLBACK_EXPLANATION, BeginnerHint, Stage
from cubesolve.notation import Move, parse_alg, y_rotate_alg
from cubesolve.optimal.engine import FullSolveEngine, kociemba_engine
from cubesolve.search import SearchExhausted, bounded_bfs

_LOGGER = logging.getLogger(__name__)

# corner piece -> (U slot above its home, insertion trigger)
_CORNER_TARGETS = (
    (4, 0, "R U R'"),
    (5, 1, "L' U' L"),
    (6, 2, "B' U' B"),
    (7, 3, "B U B'"),
)
_BOTTOM_EJECTS = {piece: trigger for piece, _, trigger in _CORNER_TARGETS}

_U_SIDE_FACE = {0: "R", 1: "F", 2: "L", 3: "B"}
_NEIGHBOURS = {"F": ("L", "R"), "R": ("F", "B"), "B": ("R", "L"), "L": ("B", "F")}
_Y_TURNS_TO = {"F": 0, "R": 1, "B": 2, "L": 3}


def u_turns(count: int) -> list[Move]:
    turns = count % 4
    if turns == 0:
        return []
    if turns == 2:
        return [Move("U", 2)]
    return [Move("U", 1 if turns == 1 else -1)]


class _Recorder:
    """Applies moves to a working state and remembers them."""

    def __init__(self, state: CubeState) -> None:
        self.state = state
        self.moves: list[Move] = []

    def play(self, moves: Sequence[Move]) -> None:
        self.state = apply_alg(self.state, moves)
        self.moves.extend(moves)


def _corner_slot(state: CubeState, piece: int) -> int:
    return state.cp.index(piece)


def _corner_home(state: CubeState, piece: int) -> bool:
    return state.cp[piece] == piece and state.co[piece] == 0


def solve_white_corners(state: CubeState, config: SolverConfig = DEFAULT_CONFIG) -> list[Move]:
    work = _Recorder(state)
    for piece, above, trigger in _CORNER_TARGETS:
        trigger_moves = parse_alg(trigger)
        guard = 0
        while not _corner_home(work.state, piece) and guard < config.corner_guard:
            guard += 1
            slot = _corner_slot(work.state, piece)

            if slot in D_SLOTS:
                work.play(parse_alg(_BOTTOM_EJECTS[slot]))
                continue

            setup = _align_top_corner(work.state, piece, above)
            work.play(setup)
            for _ in range(config.corner_insert_repeats):
                if _corner_home(work.state, piece):
                    break
                work.play(trigger_moves)
    return work.moves


def _align_top_corner(state: CubeState, piece: int, above: int) -> list[Move]:
    for count in range(4):
        setup = u_turns(count)
        if _corner_slot(apply_alg(state, setup), piece) == above:
            return setup
    return []


def _aligned_middle_edge(state: CubeState) -> tuple[str, str] | None:
    """First U-layer middle edge whose side sticker matches the center below it.

    Returns (face the edge sits above, face it has to move to).
    """
    for slot in U_SLOTS:
        piece = state.ep[slot]
        if piece not in MIDDLE_SLOTS:
            continue
        ori = state.eo[slot]
        top_color, side_color = EDGE_COLORS[piece][ori], EDGE_COLORS[piece][1 - ori]
        front = _U_SIDE_FACE[slot]
        if side_color != front:
            continue
        return front, top_color
    return None


def _plan_middle_insertion(state: CubeState) -> list[Move] | None:
    for count in range(4):
        setup = u_turns(count)
        found = _aligned_middle_edge(apply_alg(state, setup))
        if found is None:
            continue
        front, target = found
        left, right = _NEIGHBOURS[front]
        if target == right:
            base = get_algorithm("MiddleRight").moves
        elif target == left:
            base = get_algorithm("MiddleLeft").moves
        else:
            continue
        return setup + y_rotate_alg(base, _Y_TURNS_TO[front])
    return None


def _middle_eject(slot: int) -> list[Move]:
    # 8 FR, 9 FL, 10 BL, 11 BR
    if slot == 8:
        return get_algorithm("MiddleRight").moves
    if slot == 9:
        return get_algorithm("MiddleLeft").moves
    if slot == 10:
        return y_rotate_alg(get_algorithm("MiddleRight").moves, 2)
    return y_rotate_alg(get_algorithm("MiddleLeft").moves, 2)


def solve_middle_edges(state: CubeState, config: SolverConfig = DEFAULT_CONFIG) -> list[Move]:
    work = _Recorder(state)
    guard = 0
    while not are_middle_edges_solved(work.state) and guard < config.middle_guard:
        guard += 1
        insertion = _plan_middle_insertion(work.state)
        if insertion is not None:
            work.play(insertion)
            continue

        wrong = next(
            (s for s in MIDDLE_SLOTS if work.state.ep[s] != s or work.state.eo[s] != 0),
            None,
        )
        if wrong is None:
            break
        work.play(_middle_eject(wrong))
    return work.moves


def perm_rank4(values: Sequence[int]) -> int:
    """Lehmer rank of four distinct values, 0..23."""
    facts = (6, 2, 1, 1)
    rank = 0
    for i in range(4):
        smaller = sum(1 for j in range(i + 1, 4) if values[j] < values[i])
        rank += smaller * facts[i]
    return rank


def encode_top_edges(state: CubeState) -> int:
    bits = sum((state.eo[slot] & 1) << slot for slot in U_SLOTS)
    return perm_rank4(state.ep[:4]) * 16 + bits


def encode_top_corner_twists(state: CubeState) -> int:
    twists = 0
    for slot in reversed(U_SLOTS):
        twists = twists * 3 + state.co[slot]
    return perm_rank4(state.cp[:4]) * 81 + twists


def encode_top_corners(state: CubeState) -> int:
    key = 0
    for slot in U_SLOTS:
        key |= (state.cp[slot] & 3) << (2 * slot)
    return key


def encode_last_layer(state: CubeState) -> int:
    return perm_rank4(state.cp[:4]) * 24 + perm_rank4(state.ep[:4])


def _search(
    state: CubeState,
    stage: Stage,
    encode: Callable[[CubeState], int],
    is_goal: Callable[[CubeState], bool],
    config: SolverConfig,
) -> list[Move]:
    return bounded_bfs(
        state,
        encode=encode,
        operators=stage_operators(stage),
        is_goal=is_goal,
        max_states=config.bfs_max_states,
    )


def solve_yellow_cross(state: CubeState, config: SolverConfig = DEFAULT_CONFIG) -> list[Move]:
    return _search(state, Stage.YELLOW_CROSS, encode_top_edges, are_u_edges_oriented, config)


def solve_yellow_corners_orient(state: CubeState, config: SolverConfig = DEFAULT_CONFIG) -> list[Move]:
    return _search(
        state, Stage.YELLOW_CORNERS_ORIENT, encode_top_corner_twists, are_u_corners_oriented, config
    )


def solve_yellow_corners_permute(state: CubeState, config: SolverConfig = DEFAULT_CONFIG) -> list[Move]:
    return _search(state, Stage.YELLOW_CORNERS_PERMUTE, encode_top_corners, are_u_corners_permuted, config)


def solve_yellow_edges_permute(state: CubeState, config: SolverConfig = DEFAULT_CONFIG) -> list[Move]:
    return _search(state, Stage.YELLOW_EDGES_PERMUTE, encode_last_layer, is_solved, config)


_STAGE_SOLVERS: dict[Stage, Callable[[CubeState, SolverConfig], list[Move]]] = {
    Stage.WHITE_CROSS: lambda state, _config: solve_cross(state),
    Stage.WHITE_CORNERS: solve_white_corners,
    Stage.MIDDLE_EDGES: solve_middle_edges,
    Stage.YELLOW_CROSS: solve_yellow_cross,
    Stage.YELLOW_CORNERS_ORIENT: solve_yellow_corners_orient,
    Stage.YELLOW_CORNERS_PERMUTE: solve_yellow_corners_permute,
    Stage.YELLOW_EDGES_PERMUTE: solve_yellow_edges_permute,
}


def _fallback_move(state: CubeState, engine: FullSolveEngine) -> list[Move]:
    try:
        solution = parse_alg(engine(state.to_facelets()))
    except (ImportError, ValueError, RuntimeError, OSError) as exc:
        _LOGGER.warning("Full-solve engine unavailable for beginner fallback: %s", exc)
        return []
    return solution[:1]


def get_next_beginner_hint(
    state: CubeState,
    engine: FullSolveEngine = kociemba_engine,
    config: SolverConfig = DEFAULT_CONFIG,
) -> BeginnerHint:
    """Moves that complete the current beginner stage.

    When the stage procedure cannot make progress the hint degrades to the
    first move of a full solve and is tagged `optimal_fallback`.
    """
    stage = get_current_stage(state)
    if stage == Stage.SOLVED:
        return BeginnerHint(stage=stage, moves=(), explanation_key=Stage.SOLVED.value)

    try:
        moves = _STAGE_SOLVERS[stage](state, config)
    except SearchExhausted as exc:
        _LOGGER.warning("Stage %s search exhausted: %s", stage.value, exc)
        moves = []

    if moves:
        _LOGGER.debug("Stage %s: %d moves", stage.value, len(moves))
        return BeginnerHint(stage=stage, moves=tuple(moves), explanation_key=stage.value)

    _LOGGER.warning("Stage %s made no progress, following a full solve", stage.value)
    return BeginnerHint(
        stage=stage,
        moves=tuple(_fallback_move(state, engine)),
        explanation_key=FALLBACK_EXPLANATION,
    )


def compute_beginner_solution(
    state: CubeState,
    max_moves: int | None = None,
    engine: FullSolveEngine = kociemba_engine,
    config: SolverConfig = DEFAULT_CONFIG,
) -> list[Move]:
    limit = config.beginner_max_moves if max_moves is None else max_moves
    out: list[Move] = []
    work = state
    while len(out) < limit and not is_solved(work):
        hint = get_next_beginner_hint(work, engine=engine, config=config)
        if not hint.moves:
            break
        for move in hint.moves:
            work = apply_move(work, move)
            out.append(move)
            if len(out) >= limit:
                break
    return out
