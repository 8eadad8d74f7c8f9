from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Callable, Hashable, Sequence, TypeVar

from cubesolve.cubie import apply_alg
from cubesolve.notation import Move, parse_alg

S = TypeVar("S")


class SearchExhausted(RuntimeError):
    pass


@dataclass(frozen=True)
class Operator:
    name: str
    moves: tuple[Move, ...]

    @classmethod
    def from_formula(cls, formula: str, name: str | None = None) -> "Operator":
        return cls(name=name or formula, moves=tuple(parse_alg(formula)))


def _reconstruct(
    parents: dict[Hashable, tuple[Hashable, int]],
    start_key: Hashable,
    goal_key: Hashable,
    operators: Sequence[Operator],
) -> list[Move]:
    used: list[Operator] = []
    key = goal_key
    while key != start_key:
        parent_key, op_index = parents[key]
        used.append(operators[op_index])
        key = parent_key
    used.reverse()
    return [move for operator in used for move in operator.moves]


def bounded_bfs(
    start: S,
    *,
    encode: Callable[[S], Hashable],
    operators: Sequence[Operator],
    is_goal: Callable[[S], bool],
    apply: Callable[[S, Sequence[Move]], S] = apply_alg,
    max_states: int = 50_000,
) -> list[Move]:
    """Breadth-first search over encoded states using whole algorithms as steps.

    Returns the concatenated moves of the shortest operator sequence that
    reaches a goal state. `encode` must capture everything `is_goal` and the
    operators' effect on it depend on; states with equal keys are visited once.
    """
    if is_goal(start):
        return []

    start_key = encode(start)
    parents: dict[Hashable, tuple[Hashable, int]] = {start_key: (start_key, -1)}
    queue: deque[tuple[Hashable, S]] = deque([(start_key, start)])

    while queue:
        key, node = queue.popleft()
        for index, operator in enumerate(operators):
            candidate = apply(node, operator.moves)
            candidate_key = encode(candidate)
            if candidate_key in parents:
                continue
            parents[candidate_key] = (key, index)
            if is_goal(candidate):
                return _reconstruct(parents, start_key, candidate_key, operators)
            if len(parents) >= max_states:
                raise SearchExhausted(f"No goal within {max_states} states")
            queue.append((candidate_key, candidate))

    raise SearchExhausted(f"Goal unreachable: explored {len(parents)} states")
