from __future__ import annotations

import pytest

from cubesolve.config import DEFAULT_CONFIG, SolverConfig


def test_defaults() -> None:
    assert DEFAULT_CONFIG.short_depth == 4
    assert DEFAULT_CONFIG.beginner_max_moves == 400
    assert (DEFAULT_CONFIG.corner_guard, DEFAULT_CONFIG.middle_guard) == (30, 40)
    assert DEFAULT_CONFIG.corner_insert_repeats == 6
    assert DEFAULT_CONFIG.background_solve is True


def test_from_env_reads_overrides() -> None:
    config = SolverConfig.from_env(
        {
            "CUBESOLVE_SHORT_DEPTH": " 3 ",
            "CUBESOLVE_MAX_MOVES": "250",
            "CUBESOLVE_BACKGROUND": "off",
            "CUBESOLVE_MIDDLE_GUARD": "",
        }
    )
    assert config.short_depth == 3
    assert config.beginner_max_moves == 250
    assert config.background_solve is False
    assert config.middle_guard == 40


def test_from_env_uses_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("CUBESOLVE_SCRAMBLE_MIN", "15")
    monkeypatch.setenv("CUBESOLVE_SCRAMBLE_MAX", "18")
    config = SolverConfig.from_env()
    assert (config.scramble_min_moves, config.scramble_max_moves) == (15, 18)


def test_from_env_rejects_malformed_values() -> None:
    with pytest.raises(ValueError, match="CUBESOLVE_SHORT_DEPTH"):
        SolverConfig.from_env({"CUBESOLVE_SHORT_DEPTH": "deep"})
    with pytest.raises(ValueError, match="CUBESOLVE_BACKGROUND"):
        SolverConfig.from_env({"CUBESOLVE_BACKGROUND": "maybe"})


def test_invalid_values_fail_validation() -> None:
    with pytest.raises(ValueError):
        SolverConfig(short_depth=9)
    with pytest.raises(ValueError):
        SolverConfig(scramble_min_moves=30, scramble_max_moves=20)
    with pytest.raises(ValueError):
        SolverConfig(corner_guard=0)
