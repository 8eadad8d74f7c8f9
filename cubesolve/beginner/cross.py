from __future__ import annotations

import logging
import time
from functools import lru_cache

import numpy as np

from cubesolve.cubie import SOLVED, CubeState, apply_move
from cubesolve.notation import ALL_MOVES, Move
from cubesolve.search import SearchExhausted

_LOGGER = logging.getLogger(__name__)

CROSS_PIECES = (4, 5, 6, 7)
_CHUNK_BITS = 5
_CHUNK_MASK = (1 << _CHUNK_BITS) - 1
_KEY_SPACE = 1 << (_CHUNK_BITS * len(CROSS_PIECES))


def _chunk(slot: int, ori: int) -> int:
    return slot | (ori << 4)


def encode_cross(state: CubeState) -> int:
    """Packs slot and flip of the four D-layer edges into 20 bits."""
    key = 0
    for index, piece in enumerate(CROSS_PIECES):
        slot = state.ep.index(piece)
        key |= _chunk(slot, state.eo[slot]) << (_CHUNK_BITS * index)
    return key


CROSS_GOAL = encode_cross(SOLVED)


@lru_cache(maxsize=1)
def _chunk_tables() -> np.ndarray:
    """tables[m][chunk] is where an edge described by `chunk` ends up after ALL_MOVES[m]."""
    tables = np.tile(np.arange(_CHUNK_MASK + 1, dtype=np.int64), (len(ALL_MOVES), 1))
    for move_index, move in enumerate(ALL_MOVES):
        moved = apply_move(SOLVED, move)
        for new_slot, old_slot in enumerate(moved.ep):
            flip = moved.eo[new_slot]
            for ori in (0, 1):
                tables[move_index, _chunk(old_slot, ori)] = _chunk(new_slot, ori ^ flip)
    return tables


def _apply_to_keys(keys: np.ndarray, table: np.ndarray) -> np.ndarray:
    result = np.zeros_like(keys)
    for index in range(len(CROSS_PIECES)):
        shift = _CHUNK_BITS * index
        result |= table[(keys >> shift) & _CHUNK_MASK] << shift
    return result


@lru_cache(maxsize=1)
def cross_distances() -> np.ndarray:
    """Distance to the solved cross for every reachable 20-bit key, -1 elsewhere."""
    started = time.perf_counter()
    tables = _chunk_tables()
    distances = np.full(_KEY_SPACE, -1, dtype=np.int8)
    distances[CROSS_GOAL] = 0
    frontier = np.array([CROSS_GOAL], dtype=np.int64)
    depth = 0
    while frontier.size:
        depth += 1
        reached = [_apply_to_keys(frontier, table) for table in tables]
        candidates = np.unique(np.concatenate(reached))
        fresh = candidates[distances[candidates] < 0]
        distances[fresh] = depth
        frontier = fresh

    distances.flags.writeable = False
    _LOGGER.debug(
        "Built cross distance table: %d states, depth %d, %.2fs",
        int(np.count_nonzero(distances >= 0)),
        depth - 1,
        time.perf_counter() - started,
    )
    return distances


def _step(key: int, move_index: int) -> int:
    table = _chunk_tables()[move_index]
    result = 0
    for index in range(len(CROSS_PIECES)):
        shift = _CHUNK_BITS * index
        result |= int(table[(key >> shift) & _CHUNK_MASK]) << shift
    return result


def solve_cross(state: CubeState) -> list[Move]:
    """Shortest face-turn sequence that places and orients the four D-layer edges."""
    distances = cross_distances()
    key = encode_cross(state)
    remaining = int(distances[key])
    if remaining < 0:
        raise SearchExhausted(f"Cross key {key:#07x} is not reachable")

    moves: list[Move] = []
    while remaining > 0:
        for move_index, move in enumerate(ALL_MOVES):
            next_key = _step(key, move_index)
            if distances[next_key] == remaining - 1:
                moves.append(move)
                key = next_key
                remaining -= 1
                break
        else:
            raise SearchExhausted(f"Cross table has no descent from distance {remaining}")
    return moves
