#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from cubesolve.config import SolverConfig
from cubesolve.cubie import CubeState
from cubesolve.notation import MoveSyntaxError
from cubesolve.optimal.engine import ExternalEngineFailure
from cubesolve.service import CubeService, InvalidCubeError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Scramble, validate and solve a 3x3x3 cube.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    scramble = sub.add_parser("scramble", help="Print a scramble and the resulting facelets")
    scramble.add_argument("--seed", type=int, help="Seed for reproducible scrambles")

    for name, help_text in (
        ("validate", "Check that a facelet string describes a real cube"),
        ("hint", "Print the next beginner-method step"),
        ("beginner", "Print a full beginner-method solution"),
        ("optimal", "Print a short solution"),
    ):
        command = sub.add_parser(name, help=help_text)
        source = command.add_mutually_exclusive_group(required=True)
        source.add_argument("--facelets", help="54 characters over URFDLB")
        source.add_argument("--moves", help="Scramble applied to a solved cube")
        if name == "beginner":
            command.add_argument("--max-moves", type=int, default=None, help="Stop after this many moves")

    return parser.parse_args(argv)


def _resolve_state(service: CubeService, args: argparse.Namespace) -> CubeState:
    if args.facelets:
        return service.state_from_facelets(args.facelets)
    return service.state_from_moves(args.moves)


def run(service: CubeService, args: argparse.Namespace) -> int:
    if args.command == "scramble":
        item = service.scramble(seed=args.seed)
        print(item["moves"])
        print(item["facelets"])
        return 0

    if args.command == "validate":
        source = args.facelets or service.state_from_moves(args.moves).to_facelets()
        result = service.validate_facelets(source)
        if result["ok"]:
            print("OK")
            return 0
        for error in result["errors"]:
            print(f"error: {error}", file=sys.stderr)
        return 1

    state = _resolve_state(service, args)
    if args.command == "hint":
        item = service.hint(state)
        print(f"{item['label']}: {item['moves'] or '-'}")
        if item["fallback"]:
            print("(following a full solve for this step)")
        return 0

    if args.command == "beginner":
        item = service.beginner_solution(state, max_moves=args.max_moves)
        print(item["moves"])
        print(f"{item['length']} moves, solved={item['solved']}")
        return 0 if item["solved"] else 1

    item = service.optimal_solution(state)
    print(item["moves"])
    print(f"{item['length']} moves")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    service = CubeService.create(config=SolverConfig.from_env())
    try:
        return run(service, args)
    except (InvalidCubeError, MoveSyntaxError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except ExternalEngineFailure as exc:
        print(f"error: full-solve engine failed: {exc}", file=sys.stderr)
        return 3
    finally:
        service.close()


if __name__ == "__main__":
    raise SystemExit(main())
