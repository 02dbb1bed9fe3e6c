"""Exact integer arithmetic for interpolation.

Python ints are unbounded, so products never overflow; the only thing
to guard is that divisions are exact.
"""

from __future__ import annotations

from math import gcd

from shareverify.errors import InexactDivisionError


def exact_divide(numerator: int, denominator: int) -> int:
    """Return numerator / denominator, which must divide evenly.

    Raises:
        ZeroDivisionError: denominator is 0.
        InexactDivisionError: the remainder is non-zero.
    """
    quotient, remainder = divmod(numerator, denominator)
    if remainder:
        raise InexactDivisionError(
            f"{numerator} is not divisible by {denominator}"
        )
    return quotient


class RationalAccumulator:
    """Running sum of fractions kept as a reduced numerator/denominator pair."""

    def __init__(self) -> None:
        self.numerator = 0
        self.denominator = 1

    def add(self, numerator: int, denominator: int) -> None:
        if denominator == 0:
            raise ZeroDivisionError("Fraction with zero denominator")
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        num = self.numerator * denominator + numerator * self.denominator
        den = self.denominator * denominator
        g = gcd(num, den)
        self.numerator = num // g
        self.denominator = den // g

    def to_int(self) -> int:
        """Collapse the sum to an integer, failing if it is not one."""
        return exact_divide(self.numerator, self.denominator)
