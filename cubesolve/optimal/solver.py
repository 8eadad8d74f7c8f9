from __future__ import annotations

import logging
from concurrent.futures import Future
from functools import lru_cache
from typing import Optional

from cubesolve.config import DEFAULT_CONFIG, SolverConfig
from cubesolve.cubie import CubeState
from cubesolve.notation import Move, MoveSyntaxError, parse_alg
from cubesolve.optimal.engine import ExternalEngineFailure
from cubesolve.optimal.short import find_short_solution
from cubesolve.optimal.worker import FullSolveDispatcher

_LOGGER = logging.getLogger(__name__)


class OptimalSolver:
    """Short-solution search with the full-solve engine as a fallback."""

    def __init__(
        self,
        config: SolverConfig = DEFAULT_CONFIG,
        dispatcher: Optional[FullSolveDispatcher] = None,
    ) -> None:
        self.config = config
        self.dispatcher = dispatcher or FullSolveDispatcher(background=config.background_solve)

    def solve_async(self, state: CubeState) -> Future:
        """Future of the solving move list; fails with ExternalEngineFailure."""
        if self.config.short_depth > 0:
            short = find_short_solution(state, self.config.short_depth)
            if short is not None:
                _LOGGER.debug("Short solution of %d moves", len(short))
                done: Future = Future()
                done.set_result(short)
                return done

        result: Future = Future()
        engine_future = self.dispatcher.submit(state.to_facelets())
        engine_future.add_done_callback(lambda finished: _transfer(finished, result))
        return result

    def solve(self, state: CubeState, timeout: Optional[float] = None) -> list[Move]:
        return self.solve_async(state).result(timeout=timeout)

    def close(self) -> None:
        self.dispatcher.close()


def _transfer(engine_future: Future, result: Future) -> None:
    error = engine_future.exception()
    if error is not None:
        result.set_exception(error)
        return
    try:
        moves = parse_alg(engine_future.result())
    except MoveSyntaxError as exc:
        result.set_exception(ExternalEngineFailure(f"Engine returned an unreadable solution: {exc}"))
        return
    result.set_result(moves)


@lru_cache(maxsize=1)
def _default_solver() -> OptimalSolver:
    return OptimalSolver(config=SolverConfig.from_env())


def solve_optimal(state: CubeState) -> list[Move]:
    return _default_solver().solve(state)
