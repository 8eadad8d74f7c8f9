from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Sequence

from cubesolve.cubie import (
    CENTER_FACELETS,
    CORNER_COLORS,
    CORNER_FACELETS,
    EDGE_COLORS,
    EDGE_FACELETS,
    CubeState,
)
from cubesolve.notation import FACE_ORDER

StickerColor = Literal["white", "yellow", "green", "blue", "red", "orange"]

STICKER_COLORS: tuple[StickerColor, ...] = ("white", "yellow", "green", "blue", "red", "orange")

FACE_TO_COLOR: dict[str, StickerColor] = {
    "U": "white",
    "R": "red",
    "F": "green",
    "D": "yellow",
    "L": "orange",
    "B": "blue",
}


class ValidationErrorCode(str, Enum):
    COLOR_COUNT_VIOLATION = "COLOR_COUNT_VIOLATION"
    DUPLICATE_OR_MISSING_CENTER = "DUPLICATE_OR_MISSING_CENTER"
    STRUCTURAL_PARSE_FAILURE = "STRUCTURAL_PARSE_FAILURE"
    ORIENTATION_PARITY_VIOLATION = "ORIENTATION_PARITY_VIOLATION"
    PERMUTATION_PARITY_MISMATCH = "PERMUTATION_PARITY_MISMATCH"


@dataclass(frozen=True)
class ValidationIssue:
    code: ValidationErrorCode
    message: str


@dataclass(frozen=True)
class ValidationResult:
    issues: tuple[ValidationIssue, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.issues

    @property
    def errors(self) -> tuple[str, ...]:
        return tuple(issue.message for issue in self.issues)

    def has(self, code: ValidationErrorCode) -> bool:
        return any(issue.code == code for issue in self.issues)


@dataclass(frozen=True)
class StrictParseResult(ValidationResult):
    state: CubeState | None = field(default=None)


@dataclass(frozen=True)
class SolvabilityResult:
    ok: bool
    reason: str = ""


def validate_facelet_colors(colors: Sequence[str]) -> ValidationResult:
    """Lenient check of user-entered sticker colors.

    Reports every violated condition: 54 stickers, 9 of each color and six
    distinct centers. Says nothing about whether the cube can be assembled.
    """
    issues: list[ValidationIssue] = []
    if len(colors) != 54:
        issues.append(
            ValidationIssue(
                ValidationErrorCode.COLOR_COUNT_VIOLATION,
                f"Exactly 54 stickers are required, got {len(colors)}",
            )
        )

    unknown = sorted({color for color in colors if color not in STICKER_COLORS})
    for color in unknown:
        issues.append(
            ValidationIssue(ValidationErrorCode.COLOR_COUNT_VIOLATION, f"Unknown sticker color '{color}'")
        )

    counts = Counter(color for color in colors if color in STICKER_COLORS)
    for color in STICKER_COLORS:
        if counts[color] != 9:
            issues.append(
                ValidationIssue(
                    ValidationErrorCode.COLOR_COUNT_VIOLATION,
                    f"Color {color} must appear exactly 9 times (found {counts[color]})",
                )
            )

    centers = [colors[index] for index in CENTER_FACELETS if index < len(colors)]
    if len(set(centers)) != 6:
        issues.append(
            ValidationIssue(
                ValidationErrorCode.DUPLICATE_OR_MISSING_CENTER,
                "The six center stickers must be six different colors",
            )
        )

    return ValidationResult(issues=tuple(issues))


def build_color_map(colors: Sequence[str]) -> dict[str, str]:
    centers = [colors[index] for index in CENTER_FACELETS]
    if len(set(centers)) != 6:
        raise ValueError("Centers must be six distinct colors")
    return {color: face for color, face in zip(centers, FACE_ORDER)}


def colors_to_facelets(colors: Sequence[str]) -> str:
    """Maps sticker colors to face symbols using the centers, whatever the cube orientation."""
    if len(colors) != 54:
        raise ValueError(f"Expected 54 colors, got {len(colors)}")
    color_map = build_color_map(colors)
    return "".join(color_map[color] for color in colors)


def permutation_parity(perm: Sequence[int]) -> int:
    parity = 0
    visited = [False] * len(perm)
    for start in range(len(perm)):
        if visited[start]:
            continue
        cycle_len = 0
        current = start
        while not visited[current]:
            visited[current] = True
            current = perm[current]
            cycle_len += 1
        parity ^= (cycle_len + 1) % 2
    return parity


def _issue(code: ValidationErrorCode, message: str) -> ValidationIssue:
    return ValidationIssue(code=code, message=message)


def from_facelets_strict(facelets: str) -> StrictParseResult:
    """Rebuilds the cubie state and rejects anything a real cube cannot reach.

    This is the only check that catches a flipped edge, a twisted corner or
    two swapped pieces.
    """
    issues: list[ValidationIssue] = []
    if len(facelets) != 54:
        issues.append(
            _issue(
                ValidationErrorCode.STRUCTURAL_PARSE_FAILURE,
                f"Facelet string must contain exactly 54 characters, got {len(facelets)}",
            )
        )
    if not set(facelets) <= set(FACE_ORDER):
        issues.append(
            _issue(
                ValidationErrorCode.STRUCTURAL_PARSE_FAILURE,
                "Facelet string may only contain URFDLB "
                f"(got: {''.join(sorted(set(facelets) - set(FACE_ORDER)))})",
            )
        )
    if issues:
        return StrictParseResult(issues=tuple(issues))

    counts = Counter(facelets)
    for face in FACE_ORDER:
        if counts[face] != 9:
            issues.append(
                _issue(
                    ValidationErrorCode.COLOR_COUNT_VIOLATION,
                    f"Face symbol {face} must appear exactly 9 times (found {counts[face]})",
                )
            )

    for face, index in zip(FACE_ORDER, CENTER_FACELETS):
        if facelets[index] != face:
            issues.append(
                _issue(
                    ValidationErrorCode.DUPLICATE_OR_MISSING_CENTER,
                    f"Center of face {face} (index {index}) is {facelets[index]}",
                )
            )

    cp = [-1] * 8
    co = [0] * 8
    used_corners: set[int] = set()
    for slot, slot_facelets in enumerate(CORNER_FACELETS):
        colors = [facelets[index] for index in slot_facelets]
        ori = next((i for i, color in enumerate(colors) if color in ("U", "D")), None)
        if ori is None:
            issues.append(
                _issue(
                    ValidationErrorCode.STRUCTURAL_PARSE_FAILURE,
                    f"Corner at slot {slot} has no U/D-bearing facelet ({''.join(colors)})",
                )
            )
            continue

        ordered = (colors[ori], colors[(ori + 1) % 3], colors[(ori + 2) % 3])
        if ordered not in CORNER_COLORS:
            issues.append(
                _issue(
                    ValidationErrorCode.STRUCTURAL_PARSE_FAILURE,
                    f"Corner at slot {slot} has no matching color triple ({''.join(colors)})",
                )
            )
            continue

        piece = CORNER_COLORS.index(ordered)
        if piece in used_corners:
            issues.append(
                _issue(
                    ValidationErrorCode.STRUCTURAL_PARSE_FAILURE,
                    f"Duplicate corner {''.join(CORNER_COLORS[piece])} at slot {slot}",
                )
            )
            continue
        used_corners.add(piece)
        cp[slot] = piece
        co[slot] = ori

    ep = [-1] * 12
    eo = [0] * 12
    used_edges: set[int] = set()
    for slot, (first, second) in enumerate(EDGE_FACELETS):
        pair = (facelets[first], facelets[second])
        if pair in EDGE_COLORS:
            piece, ori = EDGE_COLORS.index(pair), 0
        elif (pair[1], pair[0]) in EDGE_COLORS:
            piece, ori = EDGE_COLORS.index((pair[1], pair[0])), 1
        else:
            issues.append(
                _issue(
                    ValidationErrorCode.STRUCTURAL_PARSE_FAILURE,
                    f"Edge at slot {slot} has no matching color pair ({''.join(pair)})",
                )
            )
            continue

        if piece in used_edges:
            issues.append(
                _issue(
                    ValidationErrorCode.STRUCTURAL_PARSE_FAILURE,
                    f"Duplicate edge {''.join(EDGE_COLORS[piece])} at slot {slot}",
                )
            )
            continue
        used_edges.add(piece)
        ep[slot] = piece
        eo[slot] = ori

    if len(used_corners) != 8:
        issues.append(
            _issue(
                ValidationErrorCode.STRUCTURAL_PARSE_FAILURE,
                f"Only {len(used_corners)} of 8 corners could be identified",
            )
        )
    if len(used_edges) != 12:
        issues.append(
            _issue(
                ValidationErrorCode.STRUCTURAL_PARSE_FAILURE,
                f"Only {len(used_edges)} of 12 edges could be identified",
            )
        )
    if issues:
        return StrictParseResult(issues=tuple(issues))

    if sum(co) % 3 != 0:
        issues.append(
            _issue(
                ValidationErrorCode.ORIENTATION_PARITY_VIOLATION,
                "Corner orientation sum is not divisible by 3 (a corner is twisted)",
            )
        )
    if sum(eo) % 2 != 0:
        issues.append(
            _issue(
                ValidationErrorCode.ORIENTATION_PARITY_VIOLATION,
                "Edge orientation sum is odd (an edge is flipped)",
            )
        )
    if permutation_parity(cp) != permutation_parity(ep):
        issues.append(
            _issue(
                ValidationErrorCode.PERMUTATION_PARITY_MISMATCH,
                "Corner and edge permutation parities differ (two pieces are swapped)",
            )
        )
    if issues:
        return StrictParseResult(issues=tuple(issues))

    state = CubeState(cp=tuple(cp), co=tuple(co), ep=tuple(ep), eo=tuple(eo))
    return StrictParseResult(state=state)


def is_solvable(facelets: str) -> SolvabilityResult:
    strict = from_facelets_strict(facelets)
    if not strict.ok:
        return SolvabilityResult(ok=False, reason="; ".join(strict.errors))
    return SolvabilityResult(ok=True)
