from __future__ import annotations

from collections import Counter
from types import MappingProxyType
from typing import Iterable, Mapping

from cubesolve.models import NamedAlgorithm, Stage
from cubesolve.search import Operator


ALGORITHM_LIST = [
    NamedAlgorithm(
        name="MiddleRight",
        formula="U R U' R' U' F' U F",
        stage=Stage.MIDDLE_EDGES,
        aliases=("RightInsert",),
    ),
    NamedAlgorithm(
        name="MiddleLeft",
        formula="U' L' U L U F U' F'",
        stage=Stage.MIDDLE_EDGES,
        aliases=("LeftInsert",),
    ),
    NamedAlgorithm(
        name="YellowCross",
        formula="F R U R' U' F'",
        stage=Stage.YELLOW_CROSS,
        aliases=("FRURUF",),
    ),
    NamedAlgorithm(
        name="YellowCrossInverse",
        formula="F U R U' R' F'",
        stage=Stage.YELLOW_CROSS,
    ),
    NamedAlgorithm(
        name="Sune",
        formula="R U R' U R U2 R'",
        stage=Stage.YELLOW_CORNERS_ORIENT,
    ),
    NamedAlgorithm(
        name="AntiSune",
        formula="R' U' R U' R' U2 R",
        stage=Stage.YELLOW_CORNERS_ORIENT,
        aliases=("Anti-Sune",),
    ),
    NamedAlgorithm(
        name="Aperm",
        formula="R' F R' B2 R F' R' B2 R2",
        stage=Stage.YELLOW_CORNERS_PERMUTE,
        aliases=("CornerCycle", "Aa"),
    ),
    NamedAlgorithm(
        name="Ua",
        formula="R U' R U R U R U' R' U' R2",
        stage=Stage.YELLOW_EDGES_PERMUTE,
    ),
    NamedAlgorithm(
        name="Ub",
        formula="R2 U R U R' U' R' U' R' U R'",
        stage=Stage.YELLOW_EDGES_PERMUTE,
    ),
]

# Top-layer adjustments shared by every last-layer search.
U_TURNS = ("U", "U'", "U2")


def _lookup_key(name: str) -> str:
    return name.strip().casefold()


def _index_algorithms(algorithms: Iterable[NamedAlgorithm]) -> Mapping[str, NamedAlgorithm]:
    entries = [
        (_lookup_key(key), algorithm)
        for algorithm in algorithms
        for key in (algorithm.name, *algorithm.aliases)
    ]
    repeated = sorted(key for key, count in Counter(key for key, _ in entries).items() if count > 1)
    if repeated:
        raise ValueError(f"Algorithm keys defined more than once: {', '.join(repeated)}")
    return MappingProxyType(dict(entries))


ALGORITHM_REGISTRY = _index_algorithms(ALGORITHM_LIST)


def get_algorithm(name: str) -> NamedAlgorithm:
    try:
        return ALGORITHM_REGISTRY[_lookup_key(name)]
    except KeyError:
        available = ", ".join(list_algorithm_names())
        raise KeyError(f"Unknown algorithm: {name}. Available algorithms: {available}") from None


def list_algorithm_names() -> list[str]:
    return [algorithm.name for algorithm in ALGORITHM_LIST]


def stage_algorithms(stage: Stage) -> tuple[NamedAlgorithm, ...]:
    return tuple(algorithm for algorithm in ALGORITHM_LIST if algorithm.stage is stage)


def stage_operators(stage: Stage) -> list[Operator]:
    """U adjustments followed by every algorithm of `stage`, as BFS operators."""
    algorithms = stage_algorithms(stage)
    if not algorithms:
        raise ValueError(f"No algorithms registered for stage {stage.value}")
    operators = [Operator.from_formula(turn) for turn in U_TURNS]
    operators.extend(Operator.from_formula(a.formula, name=a.name) for a in algorithms)
    return operators
