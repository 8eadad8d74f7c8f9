from __future__ import annotations

import logging
import threading
import time
from functools import lru_cache
from types import MappingProxyType
from typing import Iterator, Mapping

from cubesolve.cubie import CubeState
from cubesolve.notation import ALL_MOVES, Move, invert_alg
from cubesolve.stickers import apply_move_to_facelets, solved_facelets

_LOGGER = logging.getLogger(__name__)

_BUILD_LOCK = threading.Lock()

_Node = tuple[str, tuple[Move, ...]]


def _expand(facelets: str, path: tuple[Move, ...]) -> Iterator[_Node]:
    last_face = path[-1].face if path else None
    for move in ALL_MOVES:
        if move.face == last_face:
            continue
        yield apply_move_to_facelets(facelets, move), path + (move,)


@lru_cache(maxsize=None)
def _build_reverse_map(depth: int) -> Mapping[str, tuple[Move, ...]]:
    started = time.perf_counter()
    solved = solved_facelets()
    solutions: dict[str, tuple[Move, ...]] = {solved: ()}
    frontier: list[_Node] = [(solved, ())]
    for _ in range(depth):
        next_frontier: list[_Node] = []
        for facelets, path in frontier:
            for child, child_path in _expand(facelets, path):
                if child in solutions:
                    continue
                solutions[child] = tuple(invert_alg(child_path))
                next_frontier.append((child, child_path))
        frontier = next_frontier

    _LOGGER.debug(
        "Built short-solution map: depth %d, %d states, %.2fs",
        depth,
        len(solutions),
        time.perf_counter() - started,
    )
    return MappingProxyType(solutions)


def reverse_map(depth: int) -> Mapping[str, tuple[Move, ...]]:
    """Solving sequence for every facelet string within `depth` moves of solved.

    Built once per depth and shared read-only afterwards.
    """
    with _BUILD_LOCK:
        return _build_reverse_map(depth)


def find_short_solution(state: CubeState, depth: int = 4) -> list[Move] | None:
    """Shortest solution found by meeting the cached map with a forward search.

    Covers states up to `2 * depth` moves from solved; returns None beyond that.
    """
    table = reverse_map(depth)
    start = state.to_facelets()
    if start in table:
        return list(table[start])

    best: tuple[Move, ...] | None = None
    seen = {start}
    frontier: list[_Node] = [(start, ())]
    for level in range(1, depth + 1):
        if best is not None and level >= len(best):
            break
        next_frontier: list[_Node] = []
        for facelets, path in frontier:
            for child, child_path in _expand(facelets, path):
                if child in seen:
                    continue
                seen.add(child)
                tail = table.get(child)
                if tail is not None:
                    candidate = child_path + tail
                    if best is None or len(candidate) < len(best):
                        best = candidate
                next_frontier.append((child, child_path))
        frontier = next_frontier

    return list(best) if best is not None else None
