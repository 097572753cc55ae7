"""
Comparator configuration as a record of named options.

ComparatorConfig is the explicit counterpart of the ComparisonFlag bitmask. Both
forms convert losslessly, so configurations can be stored as either a mapping
of booleans or a single integer.
"""

import logging
from typing import Any, ClassVar

from pydantic import BaseModel, Field, model_validator

from .constants import ALL_FLAGS, DEFAULT_FLAGS, ComparisonFlag
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# field name -> flag, in bit order
FIELD_FLAGS: dict[str, ComparisonFlag] = {
    'strict': ComparisonFlag.STRICT,
    'equal_object': ComparisonFlag.EQUAL_OBJECT,
    'equal_closure': ComparisonFlag.EQUAL_CLOSURE,
    'equal_float': ComparisonFlag.EQUAL_FLOAT,
    'equal_nan': ComparisonFlag.EQUAL_NAN,
    'equal_array': ComparisonFlag.EQUAL_ARRAY,
    'equal_index_array': ComparisonFlag.EQUAL_INDEX_ARRAY,
    'equal_string': ComparisonFlag.EQUAL_STRING,
    'equal_stream': ComparisonFlag.EQUAL_STREAM,
}


def normalize_flags(flags: object) -> ComparisonFlag:
    """
    Clamp a raw bitmask to a valid ComparisonFlag combination.

    Negative values become 0 and bits without a matching flag are dropped.

    Raises:
        ConfigurationError: If flags is not an integer (bool included)
    """
    if isinstance(flags, bool) or not isinstance(flags, int):
        raise ConfigurationError(
            f"Comparator flags must be an integer bitmask, got: {type(flags).__name__}",
            value=flags,
        )
    normalized = ComparisonFlag(max(0, int(flags)) & ALL_FLAGS)
    if normalized != flags:
        logger.debug("Clamped comparator flags %r to %r", flags, normalized)
    return normalized


class ComparatorConfig(BaseModel):
    """Named comparison options; each field mirrors one ComparisonFlag."""

    model_config: ClassVar[dict[str, Any]] = {'extra': 'forbid', 'frozen': True}

    strict: bool = Field(False, description="Compared values must have the same kind")
    equal_object: bool = Field(
        False, description="Instances of the same class are equal when their fields are equal",
    )
    equal_closure: bool = Field(
        False, description="Functions defined at the same place with the same scope are equal",
    )
    equal_float: bool = Field(False, description="Floats are equal within +/- EPSILON")
    equal_nan: bool = Field(False, description="NaN equals NaN")
    equal_array: bool = Field(False, description="Mapping key order does not matter")
    equal_index_array: bool = Field(
        False, description="Index arrays holding the same values in any order are equal",
    )
    equal_string: bool = Field(False, description="ASCII case-insensitive string comparison")
    equal_stream: bool = Field(False, description="Streams with equal metadata are equal")

    @model_validator(mode='before')
    @classmethod
    def convert_bitmask(cls, data: Any) -> Any:  # noqa: ANN401
        """Accept a raw integer bitmask in place of named options."""
        if isinstance(data, int) and not isinstance(data, bool):
            flags = normalize_flags(data)
            return {name: bool(flags & flag) for name, flag in FIELD_FLAGS.items()}
        return data

    @classmethod
    def from_flags(cls, flags: int) -> 'ComparatorConfig':
        """Build a config from a (possibly out of range) bitmask."""
        return cls.model_validate(normalize_flags(flags))

    @classmethod
    def default(cls) -> 'ComparatorConfig':
        """Return the config matching DEFAULT_FLAGS."""
        return cls.from_flags(DEFAULT_FLAGS)

    def to_flags(self) -> ComparisonFlag:
        """Convert the enabled options into a ComparisonFlag bitmask."""
        flags = ComparisonFlag(0)
        for name, flag in FIELD_FLAGS.items():
            if getattr(self, name):
                flags |= flag
        return flags
