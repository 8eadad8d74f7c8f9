from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from cubesolve.notation import FACE_ORDER, Move

# Slot order: URF, UFL, ULB, UBR, DFR, DLF, DBL, DRB.
CORNER_NAMES = ("URF", "UFL", "ULB", "UBR", "DFR", "DLF", "DBL", "DRB")
# Slot order: UR, UF, UL, UB, DR, DF, DL, DB, FR, FL, BL, BR.
EDGE_NAMES = ("UR", "UF", "UL", "UB", "DR", "DF", "DL", "DB", "FR", "FL", "BL", "BR")

# Facelet indices of each corner slot, starting with the U/D facelet and going clockwise.
CORNER_FACELETS: tuple[tuple[int, int, int], ...] = (
    (8, 9, 20),  # URF
    (6, 18, 38),  # UFL
    (0, 36, 47),  # ULB
    (2, 45, 11),  # UBR
    (29, 26, 15),  # DFR
    (27, 44, 24),  # DLF
    (33, 53, 42),  # DBL
    (35, 17, 51),  # DRB
)

EDGE_FACELETS: tuple[tuple[int, int], ...] = (
    (5, 10),  # UR
    (7, 19),  # UF
    (3, 37),  # UL
    (1, 46),  # UB
    (32, 16),  # DR
    (28, 25),  # DF
    (30, 43),  # DL
    (34, 52),  # DB
    (23, 12),  # FR
    (21, 41),  # FL
    (50, 39),  # BL
    (48, 14),  # BR
)

CENTER_FACELETS = (4, 13, 22, 31, 40, 49)

CORNER_COLORS: tuple[tuple[str, str, str], ...] = tuple(
    (name[0], name[1], name[2]) for name in CORNER_NAMES
)
EDGE_COLORS: tuple[tuple[str, str], ...] = tuple((name[0], name[1]) for name in EDGE_NAMES)

# Quarter turns in "replaced by" form: slot i receives the piece from slot perm[i]
# and adds twist[i] to its orientation.
_QUARTER_TURNS: dict[str, tuple[tuple[int, ...], tuple[int, ...], tuple[int, ...], tuple[int, ...]]] = {
    "U": (
        (3, 0, 1, 2, 4, 5, 6, 7),
        (0, 0, 0, 0, 0, 0, 0, 0),
        (3, 0, 1, 2, 4, 5, 6, 7, 8, 9, 10, 11),
        (0,) * 12,
    ),
    "R": (
        (4, 1, 2, 0, 7, 5, 6, 3),
        (2, 0, 0, 1, 1, 0, 0, 2),
        (8, 1, 2, 3, 11, 5, 6, 7, 4, 9, 10, 0),
        (0,) * 12,
    ),
    "F": (
        (1, 5, 2, 3, 0, 4, 6, 7),
        (1, 2, 0, 0, 2, 1, 0, 0),
        (0, 9, 2, 3, 4, 8, 6, 7, 1, 5, 10, 11),
        (0, 1, 0, 0, 0, 1, 0, 0, 1, 1, 0, 0),
    ),
    "D": (
        (0, 1, 2, 3, 5, 6, 7, 4),
        (0, 0, 0, 0, 0, 0, 0, 0),
        (0, 1, 2, 3, 5, 6, 7, 4, 8, 9, 10, 11),
        (0,) * 12,
    ),
    "L": (
        (0, 2, 6, 3, 4, 1, 5, 7),
        (0, 1, 2, 0, 0, 2, 1, 0),
        (0, 1, 10, 3, 4, 5, 9, 7, 8, 2, 6, 11),
        (0,) * 12,
    ),
    "B": (
        (0, 1, 3, 7, 4, 5, 2, 6),
        (0, 0, 1, 2, 0, 0, 2, 1),
        (0, 1, 2, 11, 4, 5, 6, 10, 8, 9, 3, 7),
        (0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 1, 1),
    ),
}

_QUARTERS_FOR_AMOUNT = {1: 1, 2: 2, -1: 3}


@dataclass(frozen=True)
class CubeState:
    """Corner and edge permutation/orientation of a 3x3x3 cube.

    `cp[i]` is the corner piece sitting in corner slot i and `co[i]` its twist;
    `ep`/`eo` are the same for edges. Centers never move.
    """

    cp: tuple[int, ...] = (0, 1, 2, 3, 4, 5, 6, 7)
    co: tuple[int, ...] = (0,) * 8
    ep: tuple[int, ...] = tuple(range(12))
    eo: tuple[int, ...] = (0,) * 12

    @classmethod
    def solved(cls) -> "CubeState":
        return cls()

    def is_solved(self) -> bool:
        return self == SOLVED

    def apply(self, move: Move) -> "CubeState":
        return apply_move(self, move)

    def to_facelets(self) -> str:
        return to_facelets(self)


SOLVED = CubeState()


def _quarter_turn(state: CubeState, face: str) -> CubeState:
    cperm, ctwist, eperm, eflip = _QUARTER_TURNS[face]
    cp, co, ep, eo = state.cp, state.co, state.ep, state.eo
    return CubeState(
        cp=tuple(cp[j] for j in cperm),
        co=tuple((co[j] + t) % 3 for j, t in zip(cperm, ctwist)),
        ep=tuple(ep[j] for j in eperm),
        eo=tuple(eo[j] ^ f for j, f in zip(eperm, eflip)),
    )


def apply_move(state: CubeState, move: Move) -> CubeState:
    for _ in range(_QUARTERS_FOR_AMOUNT[move.amount]):
        state = _quarter_turn(state, move.face)
    return state


def apply_alg(state: CubeState, moves: Iterable[Move]) -> CubeState:
    for move in moves:
        state = apply_move(state, move)
    return state


def is_solved(state: CubeState) -> bool:
    return state == SOLVED


def to_facelets(state: CubeState) -> str:
    facelets = [""] * 54
    for face_index, facelet in enumerate(CENTER_FACELETS):
        facelets[facelet] = FACE_ORDER[face_index]

    for slot, (piece, ori) in enumerate(zip(state.cp, state.co)):
        for n in range(3):
            facelets[CORNER_FACELETS[slot][(n + ori) % 3]] = CORNER_COLORS[piece][n]

    for slot, (piece, ori) in enumerate(zip(state.ep, state.eo)):
        for n in range(2):
            facelets[EDGE_FACELETS[slot][(n + ori) % 2]] = EDGE_COLORS[piece][n]

    return "".join(facelets)


def from_facelets(facelets: str) -> CubeState:
    """Permissive inverse of `to_facelets`.

    Only meant for strings already accepted by
    `cubesolve.validation.from_facelets_strict`; unknown pieces raise ValueError.
    """
    if len(facelets) != 54:
        raise ValueError(f"Facelet string must contain exactly 54 facelets, got {len(facelets)}")

    cp: list[int] = []
    co: list[int] = []
    for slot_facelets in CORNER_FACELETS:
        colors = tuple(facelets[index] for index in slot_facelets)
        ori = next((i for i, color in enumerate(colors) if color in ("U", "D")), None)
        if ori is None:
            raise ValueError(f"Corner facelets {colors} carry no U/D sticker")
        ordered = (colors[ori], colors[(ori + 1) % 3], colors[(ori + 2) % 3])
        cp.append(CORNER_COLORS.index(ordered))
        co.append(ori)

    ep: list[int] = []
    eo: list[int] = []
    for slot_facelets in EDGE_FACELETS:
        pair = (facelets[slot_facelets[0]], facelets[slot_facelets[1]])
        if pair in EDGE_COLORS:
            ep.append(EDGE_COLORS.index(pair))
            eo.append(0)
        else:
            ep.append(EDGE_COLORS.index((pair[1], pair[0])))
            eo.append(1)

    return CubeState(cp=tuple(cp), co=tuple(co), ep=tuple(ep), eo=tuple(eo))
