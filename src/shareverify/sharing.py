"""Shamir-style (n, k)-threshold sharing over the integers.

No field reduction: coefficients are bounded integers and shares are
exact polynomial values, so reconstruction needs exact interpolation
rather than modular inverses.
"""

from __future__ import annotations

import random
import secrets
from collections.abc import Sequence

from shareverify.errors import InvalidShareError
from shareverify.interpolation import interpolate_at
from shareverify.models import Share, ThresholdParams

DEFAULT_COEFF_BOUND = 1 << 64


class IntegerSecretSharing:
    """(n, k)-threshold secret sharing with integer polynomials.

    Args:
        coeff_bound: Non-constant coefficients are drawn from
            [-coeff_bound, coeff_bound].
        rng: Optional seeded generator; the secrets module is used otherwise.
    """

    def __init__(
        self,
        coeff_bound: int = DEFAULT_COEFF_BOUND,
        rng: random.Random | None = None,
    ) -> None:
        if coeff_bound < 1:
            raise ValueError(f"coeff_bound must be >= 1, got {coeff_bound}")
        self.coeff_bound = coeff_bound
        self.rng = rng

    def share(
        self,
        secret: int,
        n: int,
        k: int,
        evaluation_points: Sequence[int] | None = None,
    ) -> list[Share]:
        """Split secret into n shares with threshold k. Default x-points: 1..n."""
        ThresholdParams(n=n, k=k)

        if evaluation_points is None:
            evaluation_points = list(range(1, n + 1))
        if len(evaluation_points) != n:
            raise ValueError(f"Need {n} evaluation points, got {len(evaluation_points)}")
        if len(set(evaluation_points)) != n:
            raise InvalidShareError("Evaluation points must be distinct")

        coeffs = self.random_polynomial(secret, k - 1)
        return [
            Share(y=eval_poly(coeffs, x), x=x, id=f"share{i}")
            for i, x in enumerate(evaluation_points, start=1)
        ]

    def reconstruct(self, shares: Sequence[Share], k: int | None = None) -> int:
        """Interpolate the first k shares (all when k is None) at x = 0.

        Trusts the shares: duplicate x or an inexact result is raised,
        not voted away. Use ConsistencyResolver for untrusted input.
        """
        if k is None:
            k = len(shares)
        ThresholdParams(n=len(shares), k=k)
        points = [s.with_position(i) for i, s in enumerate(shares[:k], start=1)]
        return interpolate_at(points, 0)

    def random_polynomial(self, constant: int, degree: int) -> list[int]:
        bound = self.coeff_bound
        coeffs = [constant]
        for _ in range(degree):
            if self.rng is not None:
                coeffs.append(self.rng.randint(-bound, bound))
            else:
                coeffs.append(secrets.randbelow(2 * bound + 1) - bound)
        return coeffs


def eval_poly(coeffs: Sequence[int], x: int) -> int:
    """Horner evaluation; coeffs[0] is the constant term."""
    result = 0
    for c in reversed(coeffs):
        result = result * x + c
    return result


def share_secret(secret: int, n: int, k: int) -> list[Share]:
    """Convenience: split secret into n shares with threshold k."""
    return IntegerSecretSharing().share(secret, n, k)


def reconstruct_secret(shares: Sequence[Share], k: int | None = None) -> int:
    """Convenience: reconstruct secret from trusted shares."""
    return IntegerSecretSharing().reconstruct(shares, k)
