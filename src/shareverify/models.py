"""Data models for shares, threshold parameters and resolution results."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from shareverify.errors import InvalidRangeError


@dataclass(frozen=True)
class Share:
    """A single point (x, y) of the sharing polynomial.

    Attributes:
        y: Share value, an arbitrary-precision integer.
        x: Evaluation point. None means "use the 1-based position of the
            share in its collection".
        id: Optional owner identifier.
    """

    y: int
    x: int | None = None
    id: str | None = None

    def with_position(self, position: int) -> Share:
        """Fill in the default x and id for a share at a 1-based position."""
        return replace(
            self,
            x=position if self.x is None else self.x,
            id=f"share{position}" if self.id is None else self.id,
        )


@dataclass(frozen=True)
class ThresholdParams:
    """(n, k) threshold: n shares issued, any k reconstruct."""

    n: int
    k: int

    def __post_init__(self) -> None:
        if not 1 <= self.k <= self.n:
            raise InvalidRangeError(
                f"Need 1 <= k <= n, got k={self.k}, n={self.n}"
            )


@dataclass
class CandidateSecret:
    """A secret value observed during resolution and the subsets backing it.

    Attributes:
        value: Interpolated value at x = 0.
        supporting_subsets: Share-id sets of every subset producing value,
            in enumeration order.
        positions: Enumeration index of each supporting subset.
    """

    value: int
    supporting_subsets: list[frozenset[str]] = field(default_factory=list)
    positions: list[int] = field(default_factory=list)

    @property
    def support(self) -> int:
        return len(self.supporting_subsets)

    @property
    def reached_support_at(self) -> int:
        """Enumeration index at which the current support count was reached."""
        return self.positions[-1]

    def add(self, position: int, ids: frozenset[str]) -> None:
        self.positions.append(position)
        self.supporting_subsets.append(ids)


@dataclass(frozen=True)
class ResolutionOutcome:
    """Secret selected by majority vote and the honest/fake partition.

    Attributes:
        secret: Winning candidate value.
        honest_ids: Ids appearing in at least one supporting subset.
        fake_ids: All other share ids.
        support: Number of subsets that produced the secret.
        subsets_evaluated: Total k-subsets considered.
        subsets_skipped: Subsets discarded as internally inconsistent.
    """

    secret: int
    honest_ids: frozenset[str]
    fake_ids: frozenset[str]
    support: int = 0
    subsets_evaluated: int = 0
    subsets_skipped: int = 0

    @property
    def all_honest(self) -> bool:
        return not self.fake_ids
