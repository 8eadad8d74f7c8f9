from cubesolve.beginner.solver import compute_beginner_solution, get_next_beginner_hint
from cubesolve.beginner.stages import get_current_stage, is_stage_complete
from cubesolve.config import SolverConfig
from cubesolve.cubie import CubeState, apply_alg, apply_move, from_facelets, is_solved, to_facelets
from cubesolve.models import BeginnerHint, Stage
from cubesolve.notation import (
    InvalidFaceError,
    InvalidSuffixError,
    Move,
    MoveSyntaxError,
    format_moves,
    invert_alg,
    invert_move,
    parse_alg,
)
from cubesolve.optimal.engine import ExternalEngineFailure
from cubesolve.optimal.short import find_short_solution
from cubesolve.optimal.solver import OptimalSolver, solve_optimal
from cubesolve.scramble import generate_fallback_scramble, generate_scramble
from cubesolve.search import SearchExhausted, bounded_bfs
from cubesolve.validation import (
    ValidationErrorCode,
    ValidationResult,
    from_facelets_strict,
    is_solvable,
    validate_facelet_colors,
)

__all__ = [
    "BeginnerHint",
    "CubeState",
    "ExternalEngineFailure",
    "InvalidFaceError",
    "InvalidSuffixError",
    "Move",
    "MoveSyntaxError",
    "OptimalSolver",
    "SearchExhausted",
    "SolverConfig",
    "Stage",
    "ValidationErrorCode",
    "ValidationResult",
    "apply_alg",
    "apply_move",
    "bounded_bfs",
    "compute_beginner_solution",
    "find_short_solution",
    "format_moves",
    "from_facelets",
    "from_facelets_strict",
    "generate_fallback_scramble",
    "generate_scramble",
    "get_current_stage",
    "get_next_beginner_hint",
    "invert_alg",
    "invert_move",
    "is_solvable",
    "is_solved",
    "is_stage_complete",
    "parse_alg",
    "solve_optimal",
    "to_facelets",
    "validate_facelet_colors",
]
