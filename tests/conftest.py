"""Shared test fixtures for the shareverify test suite."""

from __future__ import annotations

import pytest

from shareverify.models import Share


@pytest.fixture
def line_shares() -> list[Share]:
    """Points of y = 3x + 3 at x = 1..4 with the third one corrupted."""
    return [
        Share(y=6, x=1, id="share1"),
        Share(y=9, x=2, id="share2"),
        Share(y=100, x=3, id="share3"),
        Share(y=15, x=4, id="share4"),
    ]


@pytest.fixture
def quadratic_values() -> list[int]:
    """f(x) = 7 + 2x + 3x^2 at x = 1..5."""
    return [12, 23, 40, 63, 92]


@pytest.fixture
def sample_document() -> dict:
    """Test case in the JSON share-document layout; f(x) = x^2 + 3."""
    return {
        "keys": {"n": 4, "k": 3},
        "1": {"base": "10", "value": "4"},
        "2": {"base": "2", "value": "111"},
        "3": {"base": "10", "value": "12"},
        "6": {"base": "4", "value": "213"},
    }
