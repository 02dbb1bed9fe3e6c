"""Exact Lagrange interpolation over the integers.

No modulus and no floating point: every product is an unbounded Python
int and the result must come out as an exact integer.
"""

from __future__ import annotations

from collections.abc import Sequence

from shareverify.arithmetic import RationalAccumulator
from shareverify.errors import DuplicateXError, InvalidShareError
from shareverify.models import Share


def interpolate_at(points: Sequence[Share], target_x: int = 0) -> int:
    """Evaluate the polynomial through points at target_x.

    For points (x_j, y_j) the value is

        sum_j y_j * prod_{m != j} (target_x - x_m) / (x_j - x_m)

    The terms are summed as exact fractions and divided once at the end,
    so any set of points on an integer-valued polynomial succeeds
    whatever their order.

    Raises:
        InvalidShareError: no points, or a point without an x-coordinate.
        DuplicateXError: two points share an x-coordinate.
        InexactDivisionError: the value at target_x is not an integer.
    """
    if not points:
        raise InvalidShareError("Need at least one point to interpolate")

    xs: list[int] = []
    for p in points:
        if p.x is None:
            raise InvalidShareError(f"Share {p.id!r} has no x-coordinate")
        xs.append(p.x)
    if len(set(xs)) != len(xs):
        raise DuplicateXError(f"Duplicate x-coordinates in {sorted(xs)}")

    total = RationalAccumulator()
    for j, p in enumerate(points):
        numerator = 1
        denominator = 1
        for m, xm in enumerate(xs):
            if m == j:
                continue
            numerator *= target_x - xm
            denominator *= xs[j] - xm
        total.add(p.y * numerator, denominator)

    return total.to_int()


class LagrangeInterpolator:
    """Interpolator bound to a fixed threshold k.

    Args:
        k: Number of points every call must supply.
        target_x: Evaluation point (the secret lives at 0).
    """

    def __init__(self, k: int, target_x: int = 0) -> None:
        if k < 1:
            raise InvalidShareError(f"k must be >= 1, got {k}")
        self.k = k
        self.target_x = target_x

    def __call__(self, points: Sequence[Share]) -> int:
        if len(points) != self.k:
            raise InvalidShareError(
                f"Need exactly {self.k} points, got {len(points)}"
            )
        return interpolate_at(points, self.target_x)
