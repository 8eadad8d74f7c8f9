from __future__ import annotations

from typing import Dict

from cubesolve.cubie import CubeState, is_solved
from cubesolve.models import Stage

U_SLOTS = (0, 1, 2, 3)
D_SLOTS = (4, 5, 6, 7)
MIDDLE_SLOTS = (8, 9, 10, 11)

STAGE_LABELS: Dict[Stage, str] = {
    Stage.WHITE_CROSS: "White cross",
    Stage.WHITE_CORNERS: "First layer corners",
    Stage.MIDDLE_EDGES: "Second layer edges",
    Stage.YELLOW_CROSS: "Yellow cross",
    Stage.YELLOW_CORNERS_ORIENT: "Orient yellow corners",
    Stage.YELLOW_CORNERS_PERMUTE: "Position yellow corners",
    Stage.YELLOW_EDGES_PERMUTE: "Position yellow edges",
    Stage.SOLVED: "Solved",
}


def is_white_cross_solved(state: CubeState) -> bool:
    return all(state.ep[slot] == slot and state.eo[slot] == 0 for slot in D_SLOTS)


def are_white_corners_solved(state: CubeState) -> bool:
    return all(state.cp[slot] == slot and state.co[slot] == 0 for slot in D_SLOTS)


def are_middle_edges_solved(state: CubeState) -> bool:
    return all(state.ep[slot] == slot and state.eo[slot] == 0 for slot in MIDDLE_SLOTS)


def are_u_edges_oriented(state: CubeState) -> bool:
    return all(state.eo[slot] == 0 for slot in U_SLOTS)


def are_u_corners_oriented(state: CubeState) -> bool:
    return all(state.co[slot] == 0 for slot in U_SLOTS)


def are_u_corners_permuted(state: CubeState) -> bool:
    return all(state.cp[slot] == slot for slot in U_SLOTS)


# Each stage's own goal, assuming every earlier stage already holds.
_STAGE_GOALS = (
    (Stage.WHITE_CROSS, is_white_cross_solved),
    (Stage.WHITE_CORNERS, are_white_corners_solved),
    (Stage.MIDDLE_EDGES, are_middle_edges_solved),
    (Stage.YELLOW_CROSS, are_u_edges_oriented),
    (Stage.YELLOW_CORNERS_ORIENT, are_u_corners_oriented),
    (Stage.YELLOW_CORNERS_PERMUTE, are_u_corners_permuted),
    (Stage.YELLOW_EDGES_PERMUTE, is_solved),
)


def get_current_stage(state: CubeState) -> Stage:
    for stage, goal in _STAGE_GOALS:
        if not goal(state):
            return stage
    return Stage.SOLVED


def is_stage_complete(state: CubeState, stage: Stage) -> bool:
    """True when `stage` and every stage before it hold for `state`."""
    if stage in (Stage.YELLOW_EDGES_PERMUTE, Stage.SOLVED):
        return is_solved(state)
    order = Stage.ordered()
    return order.index(get_current_stage(state)) > order.index(stage)
