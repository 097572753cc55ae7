"""Tests for the value taxonomy helpers."""

import io
from collections import OrderedDict
from decimal import Decimal

import pytest

from flex_compare import Handle, HandleKind, ValueKind, kind_of
from flex_compare.values import (
    as_handle,
    closure_identity,
    closure_scope,
    entries,
    has_string_coercion,
    is_function_value,
    is_index_keys,
    numeric_value,
    object_fields,
    sort_key,
    stream_metadata,
    to_text,
)
from tests.sample_values import (
    Item,
    Label,
    Point,
    SimpleObject,
    Slotted,
    create_closure,
    make_adder,
)


class TestKindOf:
    """Test mapping Python values onto ValueKind."""

    @pytest.mark.parametrize(("value", "expected"), [
        (None, ValueKind.NULL),
        (False, ValueKind.BOOLEAN),
        (0, ValueKind.INTEGER),
        (0.0, ValueKind.FLOAT),
        ('', ValueKind.STRING),
        (b'', ValueKind.STRING),
        (bytearray(b'x'), ValueKind.STRING),
        ({}, ValueKind.MAPPING),
        (OrderedDict(), ValueKind.MAPPING),
        ([], ValueKind.MAPPING),
        ((), ValueKind.MAPPING),
        (range(3), ValueKind.MAPPING),
        (set(), ValueKind.UNSUPPORTED),
        (frozenset(), ValueKind.UNSUPPORTED),
        (1j, ValueKind.UNSUPPORTED),
        (io.BytesIO(), ValueKind.HANDLE),
        (Handle(HandleKind.SOCKET), ValueKind.HANDLE),
        (SimpleObject(), ValueKind.OBJECT),
        (Decimal('1'), ValueKind.OBJECT),
        (create_closure(), ValueKind.OBJECT),
        (Item(name='a', price=1.0), ValueKind.OBJECT),
    ])
    def test_kind_of(self, value, expected):
        """Test each Python type maps onto its kind."""
        assert kind_of(value) is expected

    def test_kind_str(self):
        """Test kinds render as their value."""
        assert str(ValueKind.MAPPING) == 'mapping'
        assert str(HandleKind.STREAM) == 'stream'


class TestMappingHelpers:
    """Test entries, index key detection and key ordering."""

    def test_entries(self):
        """Test dicts keep their items and sequences are keyed by index."""
        assert entries({'b': 1, 'a': 2}) == [('b', 1), ('a', 2)]
        assert entries(['x', 'y']) == [(0, 'x'), (1, 'y')]
        assert entries(()) == []

    @pytest.mark.parametrize(("keys", "expected"), [
        ([], True),
        ([0, 1, 2], True),
        ([1, 0], False),
        ([0, 2], False),
        (['0', '1'], False),
        ([False, True], False),
    ])
    def test_is_index_keys(self, keys, expected):
        """Test only 0..n-1 in order counts as index keys."""
        assert is_index_keys(keys) is expected

    def test_sort_key_orders_mixed_types(self):
        """Test numbers sort before strings, bytes and everything else."""
        keys = ['b', 2, None, b'x', 1.5, 'a', (1,)]
        assert sorted(keys, key=sort_key) == [1.5, 2, 'a', 'b', b'x', None, (1,)]


class TestScalarCoercion:
    """Test numeric and text coercion."""

    @pytest.mark.parametrize(("value", "expected"), [
        (3, 3.0),
        (True, 1.0),
        (2.5, 2.5),
        ('1e3', 1000.0),
        (' -42 ', -42.0),
        ('.5', 0.5),
        (b'7', 7.0),
        ('nan', None),
        ('inf', None),
        ('1_000', None),
        ('abc', None),
        ('', None),
        (None, None),
        ([1], None),
        (10 ** 400, None),
    ])
    def test_numeric_value(self, value, expected):
        """Test numbers and numeric strings convert to float."""
        assert numeric_value(value) == expected

    @pytest.mark.parametrize(("value", "expected"), [
        ('text', 'text'),
        (b'text', 'text'),
        (True, '1'),
        (False, ''),
        (12, '12'),
        (Label('shown'), 'shown'),
        (None, None),
        ([], None),
        (SimpleObject(), None),
    ])
    def test_to_text(self, value, expected):
        """Test values with a text form convert to str."""
        assert to_text(value) == expected

    def test_has_string_coercion(self):
        """Test only classes defining their own __str__ count."""
        assert has_string_coercion(Label('x')) is True
        assert has_string_coercion(Decimal('1')) is True
        assert has_string_coercion(SimpleObject()) is False
        assert has_string_coercion(Point(0, 0)) is False
        assert has_string_coercion(Item(name='a', price=1.0)) is False


class TestObjectFields:
    """Test comparable field extraction."""

    def test_plain_object(self):
        """Test plain objects report their instance attributes in order."""
        assert object_fields(SimpleObject(b=1, a=2)) == {'b': 1, 'a': 2}
        assert list(object_fields(SimpleObject(b=1, a=2))) == ['b', 'a']

    def test_dataclass(self):
        """Test dataclasses report declared fields."""
        assert object_fields(Point(1.0, 2.0)) == {'x': 1.0, 'y': 2.0}

    def test_pydantic_model(self):
        """Test pydantic models report their fields."""
        assert object_fields(Item(name='pen', price=2.0)) == {'name': 'pen', 'price': 2.0}

    def test_slots(self):
        """Test only populated slots are reported."""
        assert object_fields(Slotted(1, 2)) == {'x': 1, 'y': 2}
        assert object_fields(Slotted(1)) == {'x': 1}

    def test_no_fields(self):
        """Test objects without attributes report nothing."""
        assert object_fields(object()) == {}


class TestHandles:
    """Test stream metadata and handle wrapping."""

    def test_stream_metadata(self):
        """Test metadata describes an open stream without reading it."""
        stream = io.BytesIO(b'payload')
        metadata = stream_metadata(stream)
        assert metadata == {
            'stream_type': 'BytesIO',
            'mode': None,
            'uri': None,
            'closed': False,
            'seekable': True,
            'readable': True,
            'writable': True,
        }
        assert stream.tell() == 0

    def test_closed_stream_metadata(self, tmp_path):
        """Test closed streams report only static metadata."""
        path = tmp_path / 'f.txt'
        path.write_text('x')
        stream = open(path)  # noqa: SIM115
        stream.close()
        assert stream_metadata(stream) == {
            'stream_type': 'TextIOWrapper',
            'mode': 'r',
            'uri': str(path),
            'closed': True,
        }

    def test_as_handle(self):
        """Test streams are wrapped and handles pass through."""
        handle = Handle(HandleKind.SOCKET)
        assert as_handle(handle) is handle
        assert as_handle(io.StringIO()).kind is HandleKind.STREAM
        assert as_handle({'kind': 'stream'}) is None


class TestFunctionValues:
    """Test function identity and captured scope."""

    def test_is_function_value(self):
        """Test functions, lambdas and bound methods are recognized."""
        assert is_function_value(create_closure()) is True
        assert is_function_value(SimpleObject().describe) is True
        assert is_function_value([].append) is True
        assert is_function_value(len) is True
        assert is_function_value(SimpleObject()) is False

    def test_closure_identity(self):
        """Test closures from one factory share their identity."""
        assert closure_identity(create_closure()) == closure_identity(create_closure())
        assert closure_identity(make_adder(1)) != closure_identity(create_closure())

    def test_closure_scope(self):
        """Test captured values and bound instances form the scope."""
        obj = SimpleObject()
        assert closure_scope(create_closure()) == ()
        assert closure_scope(make_adder(5)) == (5,)
        assert closure_scope(obj.describe)[0] is obj
