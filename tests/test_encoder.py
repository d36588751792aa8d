"""Tests for roundtrip.encoder."""

from datetime import datetime

import pytest

from roundtrip import MISSING
from roundtrip import encoder as E
from roundtrip.maybe import NOTHING, Just


class TestEncoderMethods:
    def test_contramap(self):
        assert E.string.contramap(str).encode(12) == "12"

    def test_map(self):
        assert E.number.map(lambda n: n * 2).encode(3) == 6


class TestPrimitives:
    def test_identity_primitives(self):
        assert E.boolean.encode(False) is False
        assert E.number.encode(2) == 2
        assert E.integer.encode(2) == 2
        assert E.string.encode("bar") == "bar"
        assert E.null.encode(None) is None
        assert E.identity.encode({"a": 1}) == {"a": 1}

    def test_date(self):
        assert E.date.encode(datetime(2019, 7, 26)) == "2019-07-26T00:00:00"

    def test_constant(self):
        assert E.constant("x").encode(123) == "x"


class TestStructural:
    def test_optional(self):
        assert E.optional(E.string).encode(Just("foo")) == "foo"
        assert E.optional(E.string).encode(NOTHING) is MISSING

    def test_array(self):
        assert E.array(E.string).encode(["a", "b"]) == ["a", "b"]
        assert E.array(E.optional(E.string)).encode([Just("a"), NOTHING]) == ["a", None]

    def test_tuple(self):
        assert E.tuple_(E.string, E.number).encode(("foo", 1)) == ["foo", 1]

    def test_property(self):
        assert E.property_("foo", E.string).encode("bar") == {"foo": "bar"}

    def test_property_omits_missing(self):
        assert E.property_("foo", E.optional(E.string)).encode(NOTHING) == {}
        assert E.property_("foo", E.optional(E.string)).encode(Just("x")) == {"foo": "x"}

    def test_object(self):
        assert E.object_(E.identity).encode({}) == {}


class TestBuild:
    def test_build_merges_fields(self):
        foo = E.build(
            {
                "bar": E.property_("bar", E.string),
                "baz": E.property_("baz", E.optional(E.boolean)),
            }
        )
        assert foo.encode({"bar": "eek", "baz": Just(False)}) == {"bar": "eek", "baz": False}
        assert foo.encode({"bar": "eek", "baz": NOTHING}) == {"bar": "eek"}

    def test_build_reads_attributes(self):
        class Point:
            def __init__(self, x, y):
                self.x = x
                self.y = y

        point = E.build({"x": E.property_("x", E.number), "y": E.property_("y", E.number)})
        assert point.encode(Point(1, 2)) == {"x": 1, "y": 2}

    def test_build_renames_keys(self):
        user = E.build({"first_name": E.property_("firstName", E.string)})
        assert user.encode({"first_name": "Ada"}) == {"firstName": "Ada"}

    def test_build_requires_object_fields(self):
        bad = E.build({"bar": E.string})
        with pytest.raises(TypeError):
            bad.encode({"bar": "x"})


class TestEncodeString:
    def test_encode_string(self):
        assert E.string.encode_string("foo") == '"foo"'
        point = E.build({"x": E.property_("x", E.number), "z": E.property_("z", E.optional(E.number))})
        assert point.encode_string({"x": 1, "z": NOTHING}) == '{"x": 1}'
