"""Command-line entry point of the dining philosophers simulation."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from .rules import InvalidArguments, parse_rules
from .simulation import Simulation


def main(argv: Sequence[str] | None = None) -> int:
    """Run the simulation from command-line arguments and return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        rules = parse_rules(args)
    except InvalidArguments:
        print("Error: invalid arguments")
        return 1
    try:
        Simulation(rules, sys.stdout).run()
    except RuntimeError:
        print("Error: simulation failed")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())