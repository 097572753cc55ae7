"""
Constants and enums for flex-compare.

Flag bit values are part of the public contract: stored or serialized
configurations rely on them, so existing members must never be renumbered.
"""

import sys
from enum import Enum, IntFlag


class ComparisonFlag(IntFlag):
    """
    Behavior flags for Comparator.

    Members combine with ``|`` and can be used anywhere an int bitmask is expected.
    """

    # Compared values must have the same kind
    STRICT = 1
    # Instances of the same class are equal when their fields are equal
    EQUAL_OBJECT = 2
    # Functions are equal when defined at the same place with the same captured scope
    EQUAL_CLOSURE = 4
    # Floats are equal within +/- EPSILON
    EQUAL_FLOAT = 8
    # NaN equals NaN
    EQUAL_NAN = 16
    # Mapping key order does not matter
    EQUAL_ARRAY = 32
    # Index arrays are equal when they hold the same values in any order
    EQUAL_INDEX_ARRAY = 64
    # ASCII case-insensitive, binary safe string comparison
    EQUAL_STRING = 128
    # Streams are equal when their metadata is equal
    EQUAL_STREAM = 256


DEFAULT_FLAGS = (
    ComparisonFlag.EQUAL_CLOSURE
    | ComparisonFlag.EQUAL_OBJECT
    | ComparisonFlag.EQUAL_ARRAY
    | ComparisonFlag.EQUAL_FLOAT
)

ALL_FLAGS = ComparisonFlag(sum(flag.value for flag in ComparisonFlag))

EPSILON = sys.float_info.epsilon


class ValueKind(str, Enum):
    """Kinds of values the comparator recognizes."""

    NULL = 'null'
    BOOLEAN = 'boolean'
    INTEGER = 'integer'
    FLOAT = 'float'
    STRING = 'string'
    MAPPING = 'mapping'
    OBJECT = 'object'
    HANDLE = 'handle'
    UNSUPPORTED = 'unsupported'

    def __str__(self) -> str:
        """Return the enum value as string."""
        return str(self.value)


class HandleKind(str, Enum):
    """Kinds of external resource handles."""

    STREAM = 'stream'
    SOCKET = 'socket'

    def __str__(self) -> str:
        """Return the enum value as string."""
        return str(self.value)
