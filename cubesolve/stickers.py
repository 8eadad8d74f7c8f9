from __future__ import annotations

from functools import lru_cache
from typing import Iterable

import numpy as np

from cubesolve.notation import FACE_ORDER, Move, token_to_move

Vec = tuple[int, int, int]

# x grows towards B, y towards L, z towards U.
_NORMAL_TO_FACE: dict[Vec, str] = {
    (0, 0, 1): "U",
    (0, -1, 0): "R",
    (-1, 0, 0): "F",
    (0, 0, -1): "D",
    (0, 1, 0): "L",
    (1, 0, 0): "B",
}
_FACE_NORMAL = {face: normal for normal, face in _NORMAL_TO_FACE.items()}

# face -> (axis index, coordinate of its layer on that axis)
_LAYER = {"U": (2, 1), "D": (2, -1), "R": (1, -1), "L": (1, 1), "F": (0, -1), "B": (0, 1)}

_CLOCKWISE_IS_POSITIVE = {"R", "F", "D"}

# Positive quarter turn about each axis.
_QUARTER_TURN = {
    0: np.array([[1, 0, 0], [0, 0, -1], [0, 1, 0]]),
    1: np.array([[0, 0, 1], [0, 1, 0], [-1, 0, 0]]),
    2: np.array([[0, -1, 0], [1, 0, 0], [0, 0, 1]]),
}

# Each face read row by row as seen from outside, top row first.
_FACE_GRIDS = (
    ("U", lambda cube: np.rot90(cube[:, :, 2], 2)),
    ("R", lambda cube: np.rot90(np.flip(cube[:, 0, :], (0, 1)), -1)),
    ("F", lambda cube: np.rot90(np.flip(cube[0, :, :], 0))),
    ("D", lambda cube: np.rot90(np.flip(cube[:, :, 0], 0), 2)),
    ("L", lambda cube: np.rot90(np.flip(cube[:, 2, :], 0))),
    ("B", lambda cube: np.rot90(np.flip(cube[2, :, :], (0, 1)), -1)),
)


@lru_cache(maxsize=1)
def _slot_arrays() -> tuple[np.ndarray, np.ndarray]:
    """(54, 3) cubelet positions and outward normals in facelet string order."""
    # cube[x, y, z] holds the coordinate vector (x - 1, y - 1, z - 1).
    cube = np.moveaxis(np.indices((3, 3, 3)) - 1, 0, -1)
    positions = np.concatenate([grid(cube).reshape(9, 3) for _, grid in _FACE_GRIDS])
    normals = np.repeat(np.array([_FACE_NORMAL[face] for face, _ in _FACE_GRIDS]), 9, axis=0)
    return positions, normals


def _as_vec(row: np.ndarray) -> Vec:
    x, y, z = (int(value) for value in row)
    return (x, y, z)


@lru_cache(maxsize=1)
def facelet_slots() -> tuple[tuple[Vec, str], ...]:
    """Returns (cubelet position, face) for each index of a URFDLB facelet string."""
    positions, normals = _slot_arrays()
    return tuple((_as_vec(p), _NORMAL_TO_FACE[_as_vec(n)]) for p, n in zip(positions, normals))


@lru_cache(maxsize=1)
def _slot_index() -> dict[tuple[Vec, str], int]:
    return {slot: index for index, slot in enumerate(facelet_slots())}


def _quarter_turns(move: Move) -> int:
    turns = 1 if move.face in _CLOCKWISE_IS_POSITIVE else -1
    if move.amount == -1:
        turns *= -1
    elif move.amount == 2:
        turns *= 2
    return turns


@lru_cache(maxsize=None)
def facelet_permutation(move: Move) -> tuple[int, ...]:
    """Index permutation of a face turn: new_facelets[i] == old_facelets[perm[i]]."""
    positions, normals = _slot_arrays()
    axis, layer = _LAYER[move.face]
    rotation = np.linalg.matrix_power(_QUARTER_TURN[axis], _quarter_turns(move) % 4)

    moving = positions[:, axis] == layer
    new_positions = positions.copy()
    new_normals = normals.copy()
    new_positions[moving] = positions[moving] @ rotation.T
    new_normals[moving] = normals[moving] @ rotation.T

    index_of = _slot_index()
    perm = [0] * 54
    for old_index, (position, normal) in enumerate(zip(new_positions, new_normals)):
        perm[index_of[(_as_vec(position), _NORMAL_TO_FACE[_as_vec(normal)])]] = old_index
    return tuple(perm)


def apply_move_to_facelets(facelets: str, move: Move) -> str:
    perm = facelet_permutation(move)
    return "".join([facelets[i] for i in perm])


def solved_facelets() -> str:
    return "".join(face * 9 for face in FACE_ORDER)


def facelets_from_moves(moves: Iterable[Move | str], start: str | None = None) -> str:
    facelets = solved_facelets() if start is None else start
    for move in moves:
        if isinstance(move, str):
            move = token_to_move(move)
        facelets = apply_move_to_facelets(facelets, move)
    return facelets
