"""Run a grid program: bs HEIGHT WIDTH FILE."""

from __future__ import annotations

import argparse
import logging
import sys

from .config import DEFAULT_LOG_LEVEL, MachineConfig
from .errors import BSIOError, BSLoadError, BSRuntimeError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bs", description=__doc__)
    parser.add_argument("height", nargs="?", help="number of grid rows")
    parser.add_argument("width", nargs="?", help="number of grid columns")
    parser.add_argument("file", nargs="?", help="source file of 'x y token' records")
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="abort after this many steps without halt (default: BS_JAX_MAX_STEPS or unbounded)",
    )
    parser.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="diagnostic log level on stderr",
    )
    return parser


def _read_dimension(text: str) -> int | None:
    try:
        value = int(text, 10)
    except ValueError:
        return None
    return value if value > 0 else None


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.file is None:
        parser.print_help()
        return 0

    logging.basicConfig(level=args.log_level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

    dims: list[int] = []
    for text in (args.height, args.width):
        value = _read_dimension(text)
        if value is None:
            print(f'ERROR PARSE: couldn\'t read number from string "{text}"', file=sys.stderr)
            return 1
        dims.append(value)
    height, width = dims

    if args.max_steps is not None:
        if args.max_steps <= 0:
            print("ERROR PARSE: --max-steps must be positive", file=sys.stderr)
            return 1
        config = MachineConfig(max_steps=args.max_steps)
    else:
        config = MachineConfig.from_env()

    from .loader import load_file
    from .machine import run_program

    try:
        grid = load_file(args.file, height, width)
    except BSIOError as err:
        print(f"ERROR IO: {err}", file=sys.stderr)
        return 1
    except BSLoadError as err:
        print(f"ERROR PARSE: {err}", file=sys.stderr)
        return 1

    try:
        run_program(grid, out=sys.stdout, config=config)
    except BSRuntimeError as err:
        sys.stdout.flush()
        print(f"ERROR RUNTIME: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
