from __future__ import annotations

from typing import Callable

FullSolveEngine = Callable[[str], str]


class ExternalEngineFailure(RuntimeError):
    def __init__(self, message: str, request_id: int | None = None) -> None:
        super().__init__(message)
        self.request_id = request_id


def kociemba_engine(facelets: str) -> str:
    """Two-phase full solve of a URFDLB facelet string; returns a move string."""
    import kociemba

    return kociemba.solve(facelets)
