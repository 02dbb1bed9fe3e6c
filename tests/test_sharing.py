"""Tests for shareverify.sharing module."""

from __future__ import annotations

import random

import pytest

from shareverify.errors import (
    DuplicateXError,
    InexactDivisionError,
    InvalidRangeError,
    InvalidShareError,
)
from shareverify.models import Share
from shareverify.sharing import (
    IntegerSecretSharing,
    eval_poly,
    reconstruct_secret,
    share_secret,
)


class TestIntegerSecretSharing:
    @pytest.fixture
    def sss(self) -> IntegerSecretSharing:
        return IntegerSecretSharing(coeff_bound=1000, rng=random.Random(7))

    def test_share_and_reconstruct_exact_threshold(self, sss: IntegerSecretSharing):
        shares = sss.share(42, n=5, k=3)
        assert len(shares) == 5
        assert sss.reconstruct(shares, k=3) == 42

    def test_reconstruct_with_all_shares(self, sss: IntegerSecretSharing):
        shares = sss.share(100, n=5, k=3)
        assert sss.reconstruct(shares) == 100

    def test_reconstruct_with_different_subsets(self, sss: IntegerSecretSharing):
        shares = sss.share(77, n=6, k=3)
        for subset in [shares[:3], shares[1:4], shares[3:6], [shares[0], shares[2], shares[5]]]:
            assert sss.reconstruct(subset) == 77

    def test_default_ids_and_points(self, sss: IntegerSecretSharing):
        shares = sss.share(1, n=3, k=2)
        assert [s.x for s in shares] == [1, 2, 3]
        assert [s.id for s in shares] == ["share1", "share2", "share3"]

    def test_negative_and_huge_secret(self, sss: IntegerSecretSharing):
        secret = -(2**300) + 5
        shares = sss.share(secret, n=4, k=4)
        assert sss.reconstruct(shares) == secret

    def test_custom_evaluation_points(self, sss: IntegerSecretSharing):
        shares = sss.share(55, n=4, k=3, evaluation_points=[10, 20, 30, 40])
        assert [s.x for s in shares] == [10, 20, 30, 40]
        assert sss.reconstruct(shares[1:]) == 55

    def test_wrong_point_count(self, sss: IntegerSecretSharing):
        with pytest.raises(ValueError, match="Need 4 evaluation points"):
            sss.share(1, n=4, k=2, evaluation_points=[1, 2])

    def test_repeated_evaluation_points(self, sss: IntegerSecretSharing):
        with pytest.raises(InvalidShareError, match="distinct"):
            sss.share(1, n=3, k=2, evaluation_points=[1, 1, 2])

    def test_invalid_threshold(self, sss: IntegerSecretSharing):
        with pytest.raises(InvalidRangeError, match="1 <= k <= n"):
            sss.share(42, n=3, k=5)

    def test_threshold_one(self, sss: IntegerSecretSharing):
        """k=1 means every share is the secret itself."""
        shares = sss.share(99, n=5, k=1)
        assert all(s.y == 99 for s in shares)

    def test_reconstruct_uses_first_k(self, sss: IntegerSecretSharing):
        shares = sss.share(9, n=4, k=2)
        shares[3] = Share(y=shares[3].y + 1, x=4)
        assert sss.reconstruct(shares, k=2) == 9

    def test_reconstruct_positional_x(self):
        assert IntegerSecretSharing().reconstruct([Share(6), Share(9)]) == 3

    def test_reconstruct_duplicate_x_is_fatal(self, sss: IntegerSecretSharing):
        with pytest.raises(DuplicateXError):
            sss.reconstruct([Share(10, 1), Share(20, 1)])

    def test_reconstruct_inexact_is_fatal(self, sss: IntegerSecretSharing):
        with pytest.raises(InexactDivisionError):
            sss.reconstruct([Share(0, 1), Share(1, 3)])

    def test_reconstruct_too_few(self, sss: IntegerSecretSharing):
        with pytest.raises(InvalidRangeError):
            sss.reconstruct([Share(1, 1)], k=2)

    def test_seeded_is_reproducible(self):
        a = IntegerSecretSharing(rng=random.Random(3)).share(5, n=3, k=3)
        b = IntegerSecretSharing(rng=random.Random(3)).share(5, n=3, k=3)
        assert a == b

    def test_coefficients_bounded(self):
        sss = IntegerSecretSharing(coeff_bound=4)
        coeffs = sss.random_polynomial(0, 200)
        assert coeffs[0] == 0
        assert all(-4 <= c <= 4 for c in coeffs)

    def test_invalid_bound(self):
        with pytest.raises(ValueError, match="coeff_bound"):
            IntegerSecretSharing(coeff_bound=0)


def test_eval_poly():
    assert eval_poly([3, 0, 1], 4) == 19
    assert eval_poly([], 4) == 0


class TestConvenienceFunctions:
    def test_share_and_reconstruct(self):
        shares = share_secret(12345, n=5, k=3)
        assert reconstruct_secret(shares[:3]) == 12345
        assert reconstruct_secret(shares, k=3) == 12345
