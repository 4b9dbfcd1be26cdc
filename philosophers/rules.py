"""Command-line rules of the dining philosophers simulation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

INT_MAX = 2**31 - 1
_DIGITS = frozenset("0123456789")


class InvalidArguments(ValueError):
    """Raised when the simulation arguments are malformed."""


@dataclass(frozen=True)
class Rules:
    """Parameters of one simulation run; times are in milliseconds."""

    philosophers: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    meals: int | None = None


def parse_positive_int(text: str) -> int:
    """Parse a strictly positive decimal integer no larger than INT_MAX.

    An optional leading '+' is allowed; anything else but ASCII digits is not.
    """
    if not text:
        raise InvalidArguments("empty number")
    digits = text[1:] if text.startswith("+") else text
    if not set(digits) <= _DIGITS:
        raise InvalidArguments(f"not a positive integer: {text!r}")
    value = int(digits) if digits else 0
    if value > INT_MAX:
        raise InvalidArguments(f"number too large: {text!r}")
    if value <= 0:
        raise InvalidArguments(f"number must be positive: {text!r}")
    return value


def parse_rules(args: Sequence[str]) -> Rules:
    """Build rules from the arguments that follow the program name.

    Expects four or five arguments: number of philosophers, time to die,
    time to eat, time to sleep and, optionally, the number of meals each
    philosopher must eat.
    """
    if len(args) not in (4, 5):
        raise InvalidArguments(f"expected 4 or 5 arguments, got {len(args)}")
    numbers = [parse_positive_int(arg) for arg in args]
    philosophers, time_to_die, time_to_eat, time_to_sleep = numbers[:4]
    meals = numbers[4] if len(numbers) == 5 else None
    return Rules(philosophers, time_to_die, time_to_eat, time_to_sleep, meals)