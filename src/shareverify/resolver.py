"""Majority-vote reconstruction that separates honest shares from forged ones.

Every k-subset of the shares is interpolated at x = 0. Subsets whose
points do not lie on a common integer polynomial are skipped; the
remaining results are tallied and the value backed by the most subsets
wins. Cost is C(n, k) interpolations of O(k^2) each, see
shareverify.analysis.evaluation_cost.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ProcessPoolExecutor

from shareverify.combinations import enumerate_combinations
from shareverify.errors import (
    DuplicateXError,
    InexactDivisionError,
    InvalidShareError,
    NoConsistentSecretError,
)
from shareverify.interpolation import interpolate_at
from shareverify.models import CandidateSecret, ResolutionOutcome, Share, ThresholdParams

logger = logging.getLogger(__name__)

Tally = dict[int, CandidateSecret]


def prepare_shares(shares: Sequence[Share]) -> list[Share]:
    """Assign positional x / id defaults and check ids are unique."""
    prepared = [s.with_position(i) for i, s in enumerate(shares, start=1)]
    ids = [s.id for s in prepared]
    if len(set(ids)) != len(ids):
        raise InvalidShareError(f"Duplicate share ids in {ids}")
    return prepared


def _tally_subsets(
    shares: Sequence[Share],
    subsets: Iterable[tuple[int, tuple[int, ...]]],
) -> tuple[Tally, int]:
    """Interpolate each (position, subset) pair; return tally and skip count."""
    tally: Tally = {}
    skipped = 0
    for position, subset in subsets:
        points = [shares[i] for i in subset]
        try:
            value = interpolate_at(points, 0)
        except (InexactDivisionError, DuplicateXError) as exc:
            logger.debug("Skipping subset %s: %s", subset, exc)
            skipped += 1
            continue
        candidate = tally.get(value)
        if candidate is None:
            candidate = tally[value] = CandidateSecret(value)
        candidate.add(position, frozenset(str(p.id) for p in points))
    return tally, skipped


def _merge(tallies: Iterable[Tally]) -> Tally:
    """Merge partial tallies given in enumeration order."""
    merged: Tally = {}
    for partial in tallies:
        for value, part in partial.items():
            candidate = merged.get(value)
            if candidate is None:
                merged[value] = part
                continue
            candidate.positions.extend(part.positions)
            candidate.supporting_subsets.extend(part.supporting_subsets)
    return merged


def select_winner(tally: Tally) -> CandidateSecret:
    """Candidate with the most support; ties go to whichever reached it first."""
    if not tally:
        raise NoConsistentSecretError("No k-subset of shares is consistent")
    return min(
        tally.values(),
        key=lambda c: (-c.support, c.reached_support_at),
    )


class ConsistencyResolver:
    """Resolve the secret and the honest/fake partition of a share set.

    Args:
        workers: Process count for subset evaluation. 1 keeps everything
            in the calling process.
        chunk_size: Subsets per work item when workers > 1.
    """

    def __init__(self, workers: int = 1, chunk_size: int = 2048) -> None:
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
        self.workers = workers
        self.chunk_size = chunk_size

    def resolve(self, shares: Sequence[Share], k: int) -> ResolutionOutcome:
        """Run majority-vote resolution over all k-subsets of shares.

        Raises:
            InvalidRangeError: k outside [1, len(shares)].
            InvalidShareError: repeated share ids.
            NoConsistentSecretError: every subset was inconsistent.
        """
        params = ThresholdParams(n=len(shares), k=k)
        prepared = prepare_shares(shares)
        subsets = enumerate(enumerate_combinations(params.n, params.k))

        if self.workers == 1:
            tally, skipped = _tally_subsets(prepared, subsets)
        else:
            tally, skipped = self._tally_parallel(prepared, subsets)

        evaluated = sum(c.support for c in tally.values()) + skipped
        winner = select_winner(tally)

        honest = frozenset().union(*winner.supporting_subsets)
        fake = frozenset(str(s.id) for s in prepared) - honest

        logger.info(
            "Resolved secret from %d/%d subsets (%d candidates, %d skipped)",
            winner.support, evaluated, len(tally), skipped,
        )
        if fake:
            logger.info("Shares outside the majority: %s", sorted(fake))

        return ResolutionOutcome(
            secret=winner.value,
            honest_ids=honest,
            fake_ids=fake,
            support=winner.support,
            subsets_evaluated=evaluated,
            subsets_skipped=skipped,
        )

    def _tally_parallel(
        self,
        shares: list[Share],
        subsets: Iterable[tuple[int, tuple[int, ...]]],
    ) -> tuple[Tally, int]:
        chunks = iter(lambda: list(itertools.islice(subsets, self.chunk_size)), [])
        with ProcessPoolExecutor(max_workers=self.workers) as pool:
            results = list(
                pool.map(_tally_subsets, itertools.repeat(shares), chunks)
            )
        tally = _merge(t for t, _ in results)
        return tally, sum(s for _, s in results)


def resolve_shares(
    shares: Sequence[Share],
    k: int,
    workers: int = 1,
) -> ResolutionOutcome:
    """Convenience: resolve shares with a default ConsistencyResolver."""
    return ConsistencyResolver(workers=workers).resolve(shares, k)
