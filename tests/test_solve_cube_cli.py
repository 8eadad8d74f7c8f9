from __future__ import annotations

from cubesolve.stickers import solved_facelets
import scripts.solve_cube as solve_cube


def test_optimal_command_prints_short_solution(capsys) -> None:
    assert solve_cube.main(["optimal", "--moves", "R U"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "U' R'"
    assert out[1] == "2 moves"


def test_beginner_command_solves(capsys) -> None:
    assert solve_cube.main(["beginner", "--moves", "L U2 L' U' R U R'"]) == 0
    assert "solved=True" in capsys.readouterr().out


def test_hint_command(capsys) -> None:
    assert solve_cube.main(["hint", "--moves", "R"]) == 0
    assert capsys.readouterr().out.strip() == "White cross: R'"


def test_validate_command_rejects_flipped_edge(capsys) -> None:
    flipped = list(solved_facelets())
    flipped[5], flipped[10] = flipped[10], flipped[5]
    assert solve_cube.main(["validate", "--facelets", "".join(flipped)]) == 1
    assert "flipped" in capsys.readouterr().err


def test_invalid_input_exit_code(capsys) -> None:
    assert solve_cube.main(["hint", "--facelets", "U" * 54]) == 2
    assert "error:" in capsys.readouterr().err
