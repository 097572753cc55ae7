"""
Test assertion helpers built on Comparator.

Failures are reported through pytest.fail() with a short report of both
values, their kinds and the flags used.
"""

import pytest

from .comparator import Comparator
from .constants import DEFAULT_FLAGS
from .values import kind_of


def compare(value: object, value2: object, flags: int = DEFAULT_FLAGS) -> bool:
    """Compare two values with a one-off Comparator."""
    return Comparator(flags).compare(value, value2)


def assert_compare(
    actual: object,
    expected: object,
    flags: int = DEFAULT_FLAGS,
    comparator: Comparator | None = None,
    msg: str | None = None,
) -> None:
    """
    Fail the current test unless actual and expected compare equal.

    Args:
        actual: value produced by the code under test
        expected: value to compare against
        flags: comparison flags, ignored when comparator is given
        comparator: an existing Comparator to use instead of building one
        msg: optional message placed at the top of the failure report
    """
    if comparator is None:
        comparator = Comparator(flags)
    if not comparator.compare(actual, expected):
        _generate_failure_report('Values are not equal', actual, expected, comparator, msg)


def assert_not_compare(
    actual: object,
    expected: object,
    flags: int = DEFAULT_FLAGS,
    comparator: Comparator | None = None,
    msg: str | None = None,
) -> None:
    """Fail the current test if actual and expected compare equal."""
    if comparator is None:
        comparator = Comparator(flags)
    if comparator.compare(actual, expected):
        _generate_failure_report('Values are equal', actual, expected, comparator, msg)


def _generate_failure_report(
    headline: str,
    actual: object,
    expected: object,
    comparator: Comparator,
    msg: str | None,
) -> None:
    """Build the failure report and call pytest.fail()."""
    report_lines = [msg] if msg else []
    report_lines.extend([
        f"{headline}:",
        f"  Actual ({kind_of(actual)}): {actual!r}",
        f"  Expected ({kind_of(expected)}): {expected!r}",
        f"  Flags: {comparator.get_flags()!r}",
    ])
    pytest.fail("\n".join(report_lines))
