"""Test configuration for package."""

import pytest

from flex_compare import Comparator, ComparisonFlag


@pytest.fixture
def make_comparator():
    """Build a Comparator from one or more flags."""
    def _make(*flags: ComparisonFlag) -> Comparator:
        combined = ComparisonFlag(0)
        for flag in flags:
            combined |= flag
        return Comparator(combined)
    return _make


@pytest.fixture
def strict_comparator() -> Comparator:
    """Comparator with STRICT as its only flag."""
    return Comparator(ComparisonFlag.STRICT)
