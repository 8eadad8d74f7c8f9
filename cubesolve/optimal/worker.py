from __future__ import annotations

import itertools
import logging
import threading
from concurrent.futures import Executor, Future, ProcessPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, Optional

from cubesolve.optimal.engine import ExternalEngineFailure, FullSolveEngine, kociemba_engine

_LOGGER = logging.getLogger(__name__)

ExecutorFactory = Callable[[], Executor]


@dataclass(frozen=True)
class SolveRequest:
    request_id: int
    facelets: str


@dataclass(frozen=True)
class SolveResponse:
    request_id: int
    ok: bool
    solution: str = ""
    error: str = ""


def run_engine(engine: FullSolveEngine, request: SolveRequest) -> SolveResponse:
    """Worker-side entry point; engine errors travel back as a failed response."""
    try:
        solution = engine(request.facelets)
    except Exception as exc:
        return SolveResponse(request_id=request.request_id, ok=False, error=f"{type(exc).__name__}: {exc}")
    return SolveResponse(request_id=request.request_id, ok=True, solution=solution)


def default_executor() -> Executor:
    return ProcessPoolExecutor(max_workers=1)


class FullSolveDispatcher:
    """Runs the full-solve engine off the calling thread.

    Every request gets an id from a monotonically increasing counter and a
    pending future keyed by that id. A fault of the executor itself fails every
    pending request and discards the executor; the next request starts a new one.
    Without a usable executor the engine is called synchronously.
    """

    def __init__(
        self,
        engine: FullSolveEngine = kociemba_engine,
        executor_factory: ExecutorFactory = default_executor,
        background: bool = True,
    ) -> None:
        self.engine = engine
        self.executor_factory = executor_factory
        self.background = background
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self._pending: Dict[int, Future] = {}
        self._executor: Optional[Executor] = None

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    def submit(self, facelets: str) -> Future:
        """Returns a future resolving to the engine's move string."""
        result: Future = Future()
        with self._lock:
            request = SolveRequest(request_id=next(self._ids), facelets=facelets)
            self._pending[request.request_id] = result

        executor = self._ensure_executor()
        if executor is None:
            self._resolve(run_engine(self.engine, request))
            return result

        try:
            task = executor.submit(run_engine, self.engine, request)
        except RuntimeError as exc:
            self._fail_executor(executor, request.request_id, exc)
            return result
        task.add_done_callback(partial(self._on_task_done, executor, request.request_id))
        return result

    def close(self) -> None:
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=False)

    def _ensure_executor(self) -> Optional[Executor]:
        if not self.background:
            return None
        with self._lock:
            if self._executor is not None:
                return self._executor
            try:
                self._executor = self.executor_factory()
            except (NotImplementedError, OSError, ImportError) as exc:
                _LOGGER.warning("Background solving unavailable, solving in-process: %s", exc)
                self.background = False
                return None
            _LOGGER.debug("Started full-solve executor %s", type(self._executor).__name__)
            return self._executor

    def _on_task_done(self, executor: Executor, request_id: int, task: Future) -> None:
        if task.cancelled():
            self._fail_executor(executor, request_id, RuntimeError(f"Request {request_id} was cancelled"))
            return
        error = task.exception()
        if error is not None:
            self._fail_executor(executor, request_id, error)
            return
        self._resolve(task.result())

    def _resolve(self, response: SolveResponse) -> None:
        with self._lock:
            future = self._pending.pop(response.request_id, None)
        if future is None:
            return
        if response.ok:
            future.set_result(response.solution)
        else:
            future.set_exception(ExternalEngineFailure(response.error, request_id=response.request_id))

    def _fail_executor(self, executor: Executor, request_id: int, error: BaseException) -> None:
        """Fails what was pending on `executor`; a replaced executor only fails its own request."""
        with self._lock:
            current = self._executor is executor
            if current:
                pending, self._pending = self._pending, {}
                self._executor = None
            else:
                future = self._pending.pop(request_id, None)
                pending = {} if future is None else {request_id: future}
        if current:
            _LOGGER.warning("Full-solve worker faulted (%s); failing %d pending request(s)", error, len(pending))
            executor.shutdown(wait=False)
        for pending_id, future in pending.items():
            future.set_exception(
                ExternalEngineFailure(f"Full-solve worker faulted: {error}", request_id=pending_id)
            )
