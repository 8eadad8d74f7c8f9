from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Sequence

Face = Literal["U", "R", "F", "D", "L", "B"]
TurnAmount = Literal[1, -1, 2]

FACE_ORDER = "URFDLB"
TURN_AMOUNTS: tuple[int, ...] = (1, -1, 2)

_Y_CYCLE = "FRBL"


class MoveSyntaxError(ValueError):
    def __init__(self, message: str, token: str, position: int = 0) -> None:
        super().__init__(f"{message} at index {position}")
        self.token = token
        self.position = position


class InvalidFaceError(MoveSyntaxError):
    pass


class InvalidSuffixError(MoveSyntaxError):
    pass


@dataclass(frozen=True)
class Move:
    face: Face
    amount: TurnAmount = 1

    def __post_init__(self) -> None:
        if self.face not in FACE_ORDER or len(self.face) != 1:
            raise ValueError(f"Move face must be one of {FACE_ORDER}, got {self.face!r}")
        if self.amount not in TURN_AMOUNTS:
            raise ValueError(f"Move amount must be one of {TURN_AMOUNTS}, got {self.amount!r}")

    def __str__(self) -> str:
        return move_to_token(self)


ALL_MOVES: tuple[Move, ...] = tuple(Move(face, amount) for face in FACE_ORDER for amount in TURN_AMOUNTS)


def move_to_token(move: Move) -> str:
    if move.amount == 1:
        return move.face
    if move.amount == -1:
        return f"{move.face}'"
    return f"{move.face}2"


def token_to_move(token: str, position: int = 0) -> Move:
    text = token.strip()
    if not text:
        raise MoveSyntaxError("Empty move token", token, position)

    face = text[0].upper()
    if face not in FACE_ORDER:
        raise InvalidFaceError(f"Invalid face in move token '{text}'", text, position)

    suffix = text[1:]
    if suffix == "":
        return Move(face, 1)
    if suffix == "'":
        return Move(face, -1)
    if suffix == "2":
        return Move(face, 2)
    raise InvalidSuffixError(f"Invalid move suffix in token '{text}'", text, position)


def parse_alg(text: str) -> list[Move]:
    moves: list[Move] = []
    position = 0
    for token in text.split():
        position = text.index(token, position)
        moves.append(token_to_move(token, position))
        position += len(token)
    return moves


def format_moves(moves: Iterable[Move]) -> str:
    return " ".join(move_to_token(move) for move in moves)


def invert_move(move: Move) -> Move:
    if move.amount == 2:
        return move
    return Move(move.face, -move.amount)


def invert_alg(moves: Sequence[Move]) -> list[Move]:
    return [invert_move(move) for move in reversed(moves)]


def rotate_face_y(face: str, turns: int) -> str:
    if face not in _Y_CYCLE:
        return face
    return _Y_CYCLE[(_Y_CYCLE.index(face) + turns) % 4]


def y_rotate_alg(moves: Sequence[Move], turns: int) -> list[Move]:
    """Relabels side faces as if the cube were turned `turns` quarter turns about U.

    One turn maps F->R->B->L->F, so an algorithm written for the front face
    targets the right face after one turn.
    """
    if turns % 4 == 0:
        return list(moves)
    return [Move(rotate_face_y(move.face, turns), move.amount) for move in moves]
