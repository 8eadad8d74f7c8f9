from __future__ import annotations

from cubesolve.notation import ALL_MOVES, Move
from cubesolve.stickers import (
    apply_move_to_facelets,
    facelet_permutation,
    facelet_slots,
    facelets_from_moves,
    solved_facelets,
)


def test_solved_facelets_layout() -> None:
    assert solved_facelets() == "U" * 9 + "R" * 9 + "F" * 9 + "D" * 9 + "L" * 9 + "B" * 9


def test_facelet_slots_put_centers_on_their_face() -> None:
    slots = facelet_slots()
    assert len(slots) == 54
    for index, face in zip((4, 13, 22, 31, 40, 49), "URFDLB"):
        position, slot_face = slots[index]
        assert slot_face == face
        assert sum(abs(axis) for axis in position) == 1


def test_every_move_permutation_is_a_bijection() -> None:
    for move in ALL_MOVES:
        perm = facelet_permutation(move)
        assert sorted(perm) == list(range(54))


def test_u_turn_keeps_u_face_and_cycles_side_rows() -> None:
    state = apply_move_to_facelets(solved_facelets(), Move("U", 1))
    assert state[0:9] == "U" * 9
    # Clockwise U carries the top rows F -> L -> B -> R.
    assert state[9:12] == "BBB"
    assert state[18:21] == "RRR"
    assert state[36:39] == "FFF"


def test_half_turn_equals_two_quarter_turns() -> None:
    for face in "URFDLB":
        assert facelets_from_moves([Move(face, 2)]) == facelets_from_moves([Move(face, 1), Move(face, 1)])


def test_string_tokens_are_accepted() -> None:
    assert facelets_from_moves(["R", "R'"]) == solved_facelets()


def test_facelet_slots_corner_positions() -> None:
    slots = facelet_slots()
    assert slots[0] == ((1, 1, 1), "U")
    assert slots[8] == ((-1, -1, 1), "U")
    assert slots[18] == ((-1, 1, 1), "F")
    assert len(set(slots)) == 54
