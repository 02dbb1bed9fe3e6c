"""Error taxonomy for reconstruction and consistency resolution."""

from __future__ import annotations


class SharingError(Exception):
    """Base class for all shareverify errors."""


class InvalidRangeError(SharingError, ValueError):
    """Threshold parameters violate 1 <= k <= n."""


class InvalidShareError(SharingError, ValueError):
    """A share or share collection is malformed (missing x, repeated id, ...)."""


class DuplicateXError(SharingError, ValueError):
    """Two points handed to the interpolator share an x-coordinate."""


class InexactDivisionError(SharingError, ArithmeticError):
    """An exact integer division left a non-zero remainder."""


class NoConsistentSecretError(SharingError, LookupError):
    """No k-subset of the shares produced an integer secret."""


class IngestError(SharingError, ValueError):
    """A share document could not be parsed or decoded."""
