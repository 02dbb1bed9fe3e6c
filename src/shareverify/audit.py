"""Compare owner-declared share values against computed ones."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace

from shareverify.errors import InvalidShareError
from shareverify.models import Share
from shareverify.resolver import prepare_shares

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Discrepancy:
    """Result of checking one declared value."""

    share_id: str | None
    computed: int
    declared: int

    @property
    def differs(self) -> bool:
        return self.computed != self.declared


def compare_declared(share: Share, declared: int) -> Discrepancy:
    return Discrepancy(share_id=share.id, computed=share.y, declared=declared)


def audit_declared(
    shares: Sequence[Share],
    declared_by_id: Mapping[str, int],
) -> list[Discrepancy]:
    """Check declared values for the named shares, in share order.

    Shares are named as the resolver names them, so ids from a
    ResolutionOutcome can be passed straight back in.
    """
    prepared = prepare_shares(shares)
    unknown = set(declared_by_id) - {s.id for s in prepared}
    if unknown:
        raise InvalidShareError(f"Unknown share ids: {sorted(unknown)}")
    return [
        compare_declared(s, declared_by_id[s.id])
        for s in prepared
        if s.id in declared_by_id
    ]


def apply_override(share: Share, declared: int) -> Share:
    """Replace the computed value with the declared one.

    The original share is left untouched; a differing value is logged.
    """
    check = compare_declared(share, declared)
    if check.differs:
        logger.warning(
            "Share %s: declared value %d overrides computed value %d",
            share.id, declared, share.y,
        )
    return replace(share, y=declared)
