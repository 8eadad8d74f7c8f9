from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Mapping

_ENV_NAMES = {
    "short_depth": "CUBESOLVE_SHORT_DEPTH",
    "beginner_max_moves": "CUBESOLVE_MAX_MOVES",
    "corner_guard": "CUBESOLVE_CORNER_GUARD",
    "corner_insert_repeats": "CUBESOLVE_CORNER_REPEATS",
    "middle_guard": "CUBESOLVE_MIDDLE_GUARD",
    "scramble_min_moves": "CUBESOLVE_SCRAMBLE_MIN",
    "scramble_max_moves": "CUBESOLVE_SCRAMBLE_MAX",
    "background_solve": "CUBESOLVE_BACKGROUND",
    "bfs_max_states": "CUBESOLVE_BFS_MAX_STATES",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class SolverConfig:
    short_depth: int = 4
    beginner_max_moves: int = 400
    corner_guard: int = 30
    corner_insert_repeats: int = 6
    middle_guard: int = 40
    scramble_min_moves: int = 20
    scramble_max_moves: int = 25
    background_solve: bool = True
    bfs_max_states: int = 50_000

    def __post_init__(self) -> None:
        if not 0 <= self.short_depth <= 6:
            raise ValueError("short_depth must be between 0 and 6")
        if self.beginner_max_moves < 1:
            raise ValueError("beginner_max_moves must be >= 1")
        if self.corner_guard < 1 or self.corner_insert_repeats < 1 or self.middle_guard < 1:
            raise ValueError("beginner iteration caps must be >= 1")
        if self.scramble_min_moves < 1:
            raise ValueError("scramble_min_moves must be >= 1")
        if self.scramble_max_moves < self.scramble_min_moves:
            raise ValueError("scramble_max_moves must be >= scramble_min_moves")
        if self.bfs_max_states < 1:
            raise ValueError("bfs_max_states must be >= 1")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SolverConfig":
        env = os.environ if environ is None else environ
        overrides: dict[str, object] = {}
        types = {item.name: item.type for item in fields(cls)}

        for name, env_name in _ENV_NAMES.items():
            raw = env.get(env_name, "").strip()
            if not raw:
                continue
            if types[name] in (bool, "bool"):
                lowered = raw.lower()
                if lowered in _TRUE_VALUES:
                    overrides[name] = True
                elif lowered in _FALSE_VALUES:
                    overrides[name] = False
                else:
                    raise ValueError(f"{env_name} must be a boolean, got '{raw}'")
                continue
            try:
                overrides[name] = int(raw)
            except ValueError as exc:
                raise ValueError(f"{env_name} must be an integer, got '{raw}'") from exc

        return replace(cls(), **overrides) if overrides else cls()


DEFAULT_CONFIG = SolverConfig()
