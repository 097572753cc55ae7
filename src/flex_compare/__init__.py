"""
flex-compare - configurable equality comparison.

Decides whether two arbitrary values are equal under a caller-selected set of
policies: strict typing, float tolerance, NaN handling, mapping key order,
index-array order, string case, object, closure and stream semantics.
"""

from .comparator import Comparator
from .config import ComparatorConfig
from .constants import (
    ALL_FLAGS,
    DEFAULT_FLAGS,
    EPSILON,
    ComparisonFlag,
    HandleKind,
    ValueKind,
)
from .values import Handle, kind_of
from .assertions import assert_compare, assert_not_compare, compare
from .exceptions import ConfigurationError, FlexCompareError

__version__ = "0.1.0"
__all__ = [
    "ALL_FLAGS",
    "DEFAULT_FLAGS",
    "EPSILON",
    # Core comparison
    "Comparator",
    "ComparatorConfig",
    "ComparisonFlag",
    # Exceptions
    "ConfigurationError",
    "FlexCompareError",
    # Value taxonomy
    "Handle",
    "HandleKind",
    "ValueKind",
    # Assertion helpers
    "assert_compare",
    "assert_not_compare",
    "compare",
    "kind_of",
]
