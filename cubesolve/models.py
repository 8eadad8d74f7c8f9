from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from cubesolve.notation import Move, parse_alg


class Stage(str, Enum):
    WHITE_CROSS = "white_cross"
    WHITE_CORNERS = "white_corners"
    MIDDLE_EDGES = "middle_edges"
    YELLOW_CROSS = "yellow_cross"
    YELLOW_CORNERS_ORIENT = "yellow_corners_orient"
    YELLOW_CORNERS_PERMUTE = "yellow_corners_permute"
    YELLOW_EDGES_PERMUTE = "yellow_edges_permute"
    SOLVED = "solved"

    @classmethod
    def ordered(cls) -> tuple["Stage", ...]:
        return tuple(cls)


FALLBACK_EXPLANATION = "optimal_fallback"


@dataclass(frozen=True)
class BeginnerHint:
    stage: Stage
    moves: Tuple[Move, ...]
    explanation_key: str

    @property
    def is_fallback(self) -> bool:
        return self.explanation_key == FALLBACK_EXPLANATION


@dataclass(frozen=True)
class NamedAlgorithm:
    name: str
    formula: str
    stage: Stage
    aliases: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Algorithm name must be non-empty")
        if not self.formula.strip():
            raise ValueError("Algorithm formula must be non-empty")

    @property
    def moves(self) -> list[Move]:
        return parse_alg(self.formula)
