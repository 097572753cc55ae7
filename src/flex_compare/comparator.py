"""
Flexible value comparison.

Comparator decides whether two values are equal under a set of behavior flags
(see ComparisonFlag). Each kind of value has its own algorithm; compare()
applies the cheap shortcuts, works out which algorithm applies and recurses
through mappings and objects.

Comparisons never raise for incomparable values, they return False. There is
no recursion guard: comparing cyclic structures raises RecursionError.
"""

import logging
import math
from collections.abc import Mapping, Sequence

from .config import ComparatorConfig, normalize_flags
from .constants import DEFAULT_FLAGS, EPSILON, ComparisonFlag, HandleKind, ValueKind
from .values import (
    as_handle,
    closure_identity,
    closure_scope,
    entries,
    has_string_coercion,
    is_function_value,
    is_index_keys,
    is_numeric_string,
    kind_of,
    numeric_value,
    object_fields,
    sort_key,
    to_text,
)

logger = logging.getLogger(__name__)

_SCALAR_TYPES = (type(None), bool, int, float, str, bytes)

# ASCII-only case folding, independent of locale and of non-ASCII letters
_ASCII_LOWER = str.maketrans(
    'ABCDEFGHIJKLMNOPQRSTUVWXYZ',
    'abcdefghijklmnopqrstuvwxyz',
)


class Comparator:
    """
    Configurable equality comparison.

    Example:
        >>> comparator = Comparator(ComparisonFlag.EQUAL_FLOAT)
        >>> comparator.compare(0.1 + 0.2, 0.3)
        True
        >>> comparator.compare({'a': 1, 'b': 2}, {'b': 2, 'a': 1})
        False

    A Comparator holds its flags as plain mutable state; share an instance
    between threads only if nothing changes its flags.
    """

    def __init__(self, flags: int | ComparatorConfig = DEFAULT_FLAGS):
        self._flags = ComparisonFlag(0)
        if isinstance(flags, ComparatorConfig):
            self.config = flags
        else:
            self.set_flags(flags)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._flags!r})"

    @classmethod
    def from_config(cls, config: ComparatorConfig) -> 'Comparator':
        """Create a comparator from named options."""
        return cls(config)

    def set_flags(self, flags: int) -> None:
        """
        Replace the behavior flags.

        Negative bitmasks clamp to 0 and unknown bits are dropped; neither is an error.

        Raises:
            ConfigurationError: If flags is not an integer
        """
        self._flags = normalize_flags(flags)

    def get_flags(self) -> ComparisonFlag:
        """Return the behavior flags."""
        return self._flags

    flags = property(get_flags, set_flags)

    def has_flag(self, flag: int) -> bool:
        """Check whether every bit of flag is set; flag may combine several flags."""
        return (self._flags & flag) == flag

    @property
    def config(self) -> ComparatorConfig:
        """The behavior flags as named options."""
        return ComparatorConfig.from_flags(self._flags)

    @config.setter
    def config(self, config: ComparatorConfig) -> None:
        self._flags = config.to_flags()

    def compare(self, value: object, value2: object) -> bool:
        """
        Compare two values.

        Args:
            value: the first value to compare
            value2: the second value to compare

        Returns:
            True if the values are equal under the current flags
        """
        strict = self.has_flag(ComparisonFlag.STRICT)
        if _identical(value, value2) or (not strict and _loosely_equal(value, value2)):
            return True

        kind = kind_of(value)
        kind2 = kind_of(value2)
        if strict and kind is not kind2:
            return False
        if ValueKind.FLOAT in (kind, kind2):
            kind = ValueKind.FLOAT
        elif ValueKind.STRING in (kind, kind2):
            kind = ValueKind.STRING

        match kind:
            case ValueKind.FLOAT:
                return self.compare_floats(value, value2)
            case ValueKind.STRING:
                return self.compare_strings(value, value2)
            case ValueKind.MAPPING if kind2 is kind:
                return self._compare_mappings(value, value2)
            case ValueKind.OBJECT if kind2 is kind:
                return self.compare_objects(value, value2)
            case ValueKind.HANDLE if kind2 is kind:
                return self.compare_handles(value, value2)
            case ValueKind.UNSUPPORTED if kind2 is kind:
                return bool(value == value2)

        logger.debug(
            "No comparison between %s and %s, treating as not equal",
            type(value).__name__,
            type(value2).__name__,
        )
        return False

    def compare_floats(self, number: object, number2: object) -> bool:
        """
        Compare two floating point numbers.

        Ints and numeric strings are converted to float; anything else is not equal.
        """
        number = numeric_value(number)
        number2 = numeric_value(number2)
        if number is None or number2 is None:
            return False

        is_nan = math.isnan(number)
        is_nan2 = math.isnan(number2)
        if is_nan or is_nan2:
            return is_nan and is_nan2 and self.has_flag(ComparisonFlag.EQUAL_NAN)

        if self.has_flag(ComparisonFlag.EQUAL_FLOAT):
            return (
                abs(number - number2) < EPSILON
                or min(number, number2) + EPSILON == max(number, number2) - EPSILON
            )

        return False

    def compare_strings(self, string: object, string2: object) -> bool:
        """Compare two strings, ignoring ASCII case if EQUAL_STRING is set."""
        string = to_text(string)
        string2 = to_text(string2)
        if string is None or string2 is None:
            return False

        if self.has_flag(ComparisonFlag.EQUAL_STRING):
            return string.translate(_ASCII_LOWER) == string2.translate(_ASCII_LOWER)
        return string == string2

    def compare_mappings(self, mapping: object, mapping2: object) -> bool:
        """
        Compare two mappings (dicts, or sequences keyed by index).

        With EQUAL_ARRAY entries are paired by key, otherwise key order must
        match. With EQUAL_INDEX_ARRAY, index arrays are compared as multisets
        of values.
        """
        if kind_of(mapping) is not ValueKind.MAPPING or kind_of(mapping2) is not ValueKind.MAPPING:
            return False
        return self._compare_mappings(mapping, mapping2)

    def _compare_mappings(self, mapping: Mapping | Sequence, mapping2: Mapping | Sequence) -> bool:
        items = entries(mapping)
        items2 = entries(mapping2)
        if len(items) != len(items2):
            return False

        if self.has_flag(ComparisonFlag.EQUAL_ARRAY):
            items.sort(key=lambda item: sort_key(item[0]))
            lookup = dict(items2)
            if lookup.keys() != dict(items).keys():
                return False
            items2 = [(key, lookup[key]) for key, _ in items]
        keys = [key for key, _ in items]
        if keys != [key for key, _ in items2]:
            return False

        if self.has_flag(ComparisonFlag.EQUAL_INDEX_ARRAY) and is_index_keys(keys):
            return self._compare_unordered([v for _, v in items], [v for _, v in items2])

        return all(
            self.compare(value, value2)
            for (_, value), (_, value2) in zip(items, items2, strict=True)
        )

    def compare_handles(self, handle: object, handle2: object) -> bool:
        """Compare two resource handles; only streams with equal metadata can be equal."""
        if not self.has_flag(ComparisonFlag.EQUAL_STREAM):
            return False

        handle = as_handle(handle)
        handle2 = as_handle(handle2)
        if handle is None or handle2 is None:
            return False
        if handle.kind is HandleKind.STREAM and handle2.kind is HandleKind.STREAM:
            return self._compare_mappings(handle.metadata, handle2.metadata)

        return False

    def compare_objects(self, obj: object, obj2: object) -> bool:
        """
        Compare two objects of the same class.

        Function values compare by definition site and captured scope
        (EQUAL_CLOSURE); other objects by their string form when their class
        defines __str__, otherwise field by field (EQUAL_OBJECT).
        """
        if type(obj) is not type(obj2):
            return False

        if is_function_value(obj):
            if self.has_flag(ComparisonFlag.EQUAL_CLOSURE):
                return (
                    closure_identity(obj) == closure_identity(obj2)
                    and self._compare_scopes(closure_scope(obj), closure_scope(obj2))
                )
            return False

        if self.has_flag(ComparisonFlag.EQUAL_OBJECT):
            if has_string_coercion(obj):
                return self.compare_strings(str(obj), str(obj2))
            return self._compare_mappings(object_fields(obj), object_fields(obj2))

        return False

    def _compare_scopes(self, scope: tuple, scope2: tuple) -> bool:
        if len(scope) != len(scope2):
            return False
        if self.has_flag(ComparisonFlag.EQUAL_OBJECT):
            return all(self.compare(v, v2) for v, v2 in zip(scope, scope2, strict=True))
        return all(v is v2 for v, v2 in zip(scope, scope2, strict=True))

    def _compare_unordered(self, values: list, values2: list) -> bool:
        # Bipartite matching with augmenting paths; equality here is not transitive.
        matches = [[self.compare(value, value2) for value2 in values2] for value in values]
        owners: list[int | None] = [None] * len(values2)

        def assign(index: int, visited: set[int]) -> bool:
            for index2, matched in enumerate(matches[index]):
                if not matched or index2 in visited:
                    continue
                visited.add(index2)
                if owners[index2] is None or assign(owners[index2], visited):
                    owners[index2] = index
                    return True
            return False

        return all(assign(index, set()) for index in range(len(values)))


def _identical(value: object, value2: object) -> bool:
    """
    Check identity: equal scalars of the same type, or the same object.

    Mappings and sequences are never identical here so that their contents are
    always compared under the current flags; NaN is never identical to itself.
    """
    if type(value) is not type(value2):
        return False
    if isinstance(value, _SCALAR_TYPES):
        return value == value2
    if kind_of(value) is ValueKind.MAPPING:
        return False
    return value is value2


def _loosely_equal(value: object, value2: object) -> bool:
    """
    Loose equality between scalars.

    Numbers (bools included) compare numerically with each other. A number
    (not a bool) and a numeric string compare numerically, a number and any
    other string compare as text. Two numeric strings compare numerically.
    Nothing else is loosely equal.
    """
    if _is_number(value) and _is_number(value2):
        return value == value2

    if _is_number(value, with_bool=False) and isinstance(value2, str | bytes):
        return _number_equals_string(value, value2)
    if _is_number(value2, with_bool=False) and isinstance(value, str | bytes):
        return _number_equals_string(value2, value)

    if is_numeric_string(value) and is_numeric_string(value2):
        return numeric_value(value) == numeric_value(value2)
    return False


def _is_number(value: object, with_bool: bool = True) -> bool:
    if isinstance(value, bool):
        return with_bool
    return isinstance(value, int | float)


def _number_equals_string(number: int | float, string: str | bytes) -> bool:
    if is_numeric_string(string):
        return numeric_value(number) == numeric_value(string)
    return str(number) == to_text(string)
