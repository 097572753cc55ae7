"""
Value taxonomy for the comparator.

Maps arbitrary Python values onto the fixed set of kinds the comparator knows
how to compare, and exposes the capabilities the per-kind algorithms rely on:
mapping entries, stream handle metadata, string coercion, comparable object
fields and function identity.
"""

import dataclasses
import io
import os
import re
import socket
import types
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from .constants import HandleKind, ValueKind


# Numeric strings: optional sign, digits with optional fraction, optional exponent.
# "nan", "inf" and underscore separators are deliberately not numeric.
_NUMERIC_PATTERN = re.compile(r'^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$')

# __str__ implementations that only echo the type or its fields
_GENERIC_STR = (object.__str__, BaseModel.__str__)

_FUNCTION_TYPES = (types.FunctionType, types.MethodType, types.BuiltinMethodType)

_EMPTY_CELL = object()


@dataclass(frozen=True)
class Handle:
    """
    An opaque external resource described by its kind and metadata.

    Callers may build handles directly for resources the comparator does not
    recognize natively; streams and sockets are wrapped automatically.
    """

    kind: HandleKind
    metadata: Mapping[str, Any] = field(default_factory=dict)


def kind_of(value: object) -> ValueKind:
    """Return the ValueKind of a Python value."""
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str | bytes | bytearray):
        return ValueKind.STRING
    if isinstance(value, Handle | io.IOBase | socket.socket):
        return ValueKind.HANDLE
    if isinstance(value, Mapping | Sequence):
        return ValueKind.MAPPING
    if isinstance(value, Set | complex):
        return ValueKind.UNSUPPORTED
    return ValueKind.OBJECT


def entries(value: Mapping | Sequence) -> list[tuple[Any, Any]]:
    """Return the ordered (key, value) pairs of a mapping; sequences are keyed 0..n-1."""
    if isinstance(value, Mapping):
        return list(value.items())
    return list(enumerate(value))


def is_index_keys(keys: list[Any]) -> bool:
    """Check whether keys are exactly 0..n-1 in order."""
    return all(
        isinstance(key, int) and not isinstance(key, bool) and key == index
        for index, key in enumerate(keys)
    )


def sort_key(key: object) -> tuple:
    """
    Total order over mixed key types.

    Numbers sort first, then strings, then bytes, then anything else by type
    name and repr.
    """
    if isinstance(key, int | float) and not isinstance(key, bool):
        return (0, key, '')
    if isinstance(key, bool):
        return (0, int(key), '')
    if isinstance(key, str):
        return (1, 0, key)
    if isinstance(key, bytes):
        return (2, 0, key.decode('latin-1'))
    return (3, 0, f'{type(key).__qualname__}:{key!r}')


def numeric_value(value: object) -> float | None:
    """
    Return value as a float when it is a number or a numeric string.

    Returns None for anything else, including numbers too large for a float.
    """
    if isinstance(value, bool | int | float):
        try:
            return float(value)
        except OverflowError:
            return None
    if isinstance(value, bytes | bytearray):
        value = bytes(value).decode('ascii', 'replace')
    if isinstance(value, str) and _NUMERIC_PATTERN.match(value):
        try:
            return float(value)
        except OverflowError:
            return None
    return None


def is_numeric_string(value: object) -> bool:
    """Check whether value is a str/bytes holding a number."""
    return isinstance(value, str | bytes | bytearray) and numeric_value(value) is not None


def has_string_coercion(obj: object) -> bool:
    """Check whether the object's type defines its own __str__."""
    return type(obj).__str__ not in _GENERIC_STR


def to_text(value: object) -> str | None:
    """
    Coerce a value to text for string comparison.

    bytes decode as UTF-8 (undecodable bytes preserved), bools become "1"/"",
    numbers use str() and objects use their own __str__. Returns None for
    values without a text form.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bytes | bytearray):
        return bytes(value).decode('utf-8', 'surrogateescape')
    if isinstance(value, bool):
        return '1' if value else ''
    if isinstance(value, int | float):
        return str(value)
    if kind_of(value) is ValueKind.OBJECT and has_string_coercion(value):
        return str(value)
    return None


def stream_metadata(stream: io.IOBase) -> dict[str, Any]:
    """
    Describe a stream without reading from it.

    Closed streams only report their type, mode, uri and closed state.
    """
    closed = stream.closed
    uri = getattr(stream, 'name', None)
    if isinstance(uri, os.PathLike):
        uri = os.fspath(uri)
    metadata: dict[str, Any] = {
        'stream_type': type(stream).__name__,
        'mode': getattr(stream, 'mode', None),
        'uri': uri,
        'closed': closed,
    }
    if not closed:
        metadata['seekable'] = stream.seekable()
        metadata['readable'] = stream.readable()
        metadata['writable'] = stream.writable()
    return metadata


def as_handle(value: object) -> Handle | None:
    """Wrap a stream or socket as a Handle; Handles are returned unchanged."""
    if isinstance(value, Handle):
        return value
    if isinstance(value, io.IOBase):
        return Handle(HandleKind.STREAM, stream_metadata(value))
    if isinstance(value, socket.socket):
        return Handle(HandleKind.SOCKET, {'family': value.family, 'type': value.type})
    return None


def object_fields(obj: object) -> dict[str, Any]:
    """
    Return the comparable fields of an object in declaration order.

    Pydantic models report declared and extra fields, dataclasses their
    declared fields; other objects their instance __dict__ followed by any
    populated __slots__.
    """
    if isinstance(obj, BaseModel):
        return dict(obj)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}

    fields = dict(vars(obj)) if hasattr(obj, '__dict__') else {}
    for cls in type(obj).__mro__:
        slots = cls.__dict__.get('__slots__', ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ('__dict__', '__weakref__') or name in fields:
                continue
            if hasattr(obj, name):
                fields[name] = getattr(obj, name)
    return fields


def is_function_value(obj: object) -> bool:
    """Check whether obj is a function, lambda or bound method."""
    return isinstance(obj, _FUNCTION_TYPES)


def closure_identity(fn: Any) -> tuple:  # noqa: ANN401
    """
    Return the definition-site identity of a function value.

    Functions built from the same definition share their code object, so two
    closures produced by one factory have the same identity.
    """
    func = getattr(fn, '__func__', fn)
    code = getattr(func, '__code__', None)
    if code is None:
        return (getattr(func, '__module__', None), getattr(func, '__qualname__', None))
    return (code.co_filename, code.co_firstlineno, code.co_qualname, code)


def closure_scope(fn: Any) -> tuple:  # noqa: ANN401
    """Return the captured scope of a function value: bound self, then closure cells."""
    scope = []
    if hasattr(fn, '__self__'):
        scope.append(fn.__self__)
    func = getattr(fn, '__func__', fn)
    for cell in getattr(func, '__closure__', None) or ():
        try:
            scope.append(cell.cell_contents)
        except ValueError:
            scope.append(_EMPTY_CELL)
    return tuple(scope)
