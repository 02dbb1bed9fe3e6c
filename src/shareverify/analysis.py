"""Cost and robustness bounds for majority-vote resolution.

A forged polynomial can agree with at most k-1 honest points, so with
f colluding forgers it is backed by at most C(f+k-1, k) subsets, while
the true secret is backed by C(n-f, k). The honest polynomial outvotes
any single forged polynomial when the latter is strictly larger. Distinct
forged polynomials that happen to agree at x = 0 are not covered.
"""

from __future__ import annotations

import numpy as np
from scipy.special import comb
from scipy.stats import binom

from shareverify.combinations import combination_count
from shareverify.models import ThresholdParams


def subset_count(n: int, k: int) -> int:
    """Number of k-subsets resolution has to evaluate."""
    return combination_count(n, k)


def evaluation_cost(n: int, k: int) -> int:
    """Approximate multiply count of a full resolution: C(n, k) * k^2."""
    return subset_count(n, k) * k * k


def honest_support(n_honest: int, k: int) -> int:
    return int(comb(n_honest, k, exact=True))


def worst_case_forged_support(n_fake: int, k: int) -> int:
    """Support of a forged polynomial through all fakes and k-1 honest points."""
    if n_fake == 0:
        return 0
    return int(comb(n_fake + k - 1, k, exact=True))


def guarantees_majority(n: int, k: int, n_fake: int) -> bool:
    """True if the true secret outvotes any coalition of n_fake forgers."""
    if not 0 <= n_fake <= n:
        raise ValueError(f"Need 0 <= n_fake <= n, got n_fake={n_fake}, n={n}")
    return honest_support(n - n_fake, k) > worst_case_forged_support(n_fake, k)


def max_tolerable_fakes(n: int, k: int) -> int:
    """Largest number of forged shares that cannot outvote the honest ones."""
    ThresholdParams(n=n, k=k)
    f = 0
    while f < n and guarantees_majority(n, k, f + 1):
        f += 1
    return f


def majority_probability(n: int, k: int, p_forge: float) -> float:
    """P[majority guaranteed] when each share is forged independently.

    The forger count is Bin(n, p_forge); the result sums its PMF over
    the counts for which guarantees_majority holds.
    """
    if not 0.0 <= p_forge <= 1.0:
        raise ValueError(f"p_forge must be in [0, 1], got {p_forge}")
    ThresholdParams(n=n, k=k)

    counts = np.arange(n + 1)
    pmf = binom.pmf(counts, n, p_forge)
    safe = np.array([guarantees_majority(n, k, int(f)) for f in counts])
    return float(np.sum(pmf[safe]))
