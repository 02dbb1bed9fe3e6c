"""Lexicographic enumeration of k-subsets of range(n)."""

from __future__ import annotations

from collections.abc import Iterator

from scipy.special import comb

from shareverify.errors import InvalidRangeError


def _check_range(n: int, k: int) -> None:
    if not 1 <= k <= n:
        raise InvalidRangeError(f"Need 1 <= k <= n, got k={k}, n={n}")


def enumerate_combinations(n: int, k: int) -> Iterator[tuple[int, ...]]:
    """Lazily yield every increasing k-tuple from 0..n-1 in lexicographic order.

    The range is validated eagerly; each call returns a fresh iterator
    that reproduces the same order.

    Raises:
        InvalidRangeError: k <= 0 or k > n.
    """
    _check_range(n, k)
    return _odometer(n, k)


def _odometer(n: int, k: int) -> Iterator[tuple[int, ...]]:
    """Start at (0, 1, ..., k-1); bump the rightmost index below its
    ceiling n-k+i and reset everything to its right to consecutive values.
    """
    indices = list(range(k))
    while True:
        yield tuple(indices)

        i = k - 1
        while i >= 0 and indices[i] == n - k + i:
            i -= 1
        if i < 0:
            return

        indices[i] += 1
        for j in range(i + 1, k):
            indices[j] = indices[j - 1] + 1


def combination_count(n: int, k: int) -> int:
    """Exact C(n, k), the number of tuples enumerate_combinations yields."""
    _check_range(n, k)
    return int(comb(n, k, exact=True))
