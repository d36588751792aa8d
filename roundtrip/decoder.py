"""
Decoders: conversion from loosely-typed raw data to rich values.

A Decoder wraps a function raw -> Validation[DecodeError, A]. Structural
decoders prefix child failures with their position, so a single decode
reports every failing field at once:

    build({"items": property_("items", array(string))}).decode({"items": [1]})
    # Invalid({"items[0]": "Expected a string"})
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import reduce
from typing import Any, Callable, Generic, Iterable, Mapping, Sequence, TypeVar

from . import validation as V
from .context import is_strict
from .errors import index_key, prefix_error, root_error
from .lib.sequence_helpers import zip_with
from .maybe import NOTHING, Just, Maybe
from .types import MISSING, DecodeError, is_absent
from .validation import Invalid, Valid, Validation

A = TypeVar("A")
B = TypeVar("B")
T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Decoder(Generic[A]):
    """
    Immutable decoder node.

    Every combinator returns a new Decoder closed over this one.
    """

    run: Callable[[Any], Validation[DecodeError, A]]

    def decode(self, raw: Any) -> Validation[DecodeError, A]:
        """
        Try to convert raw to an A.

        Returns:
            Valid(value) if decoding succeeds
            Invalid({path: message, ...}) if it fails
        """
        return self.run(raw)

    def decode_or_raise(self, raw: Any) -> A:
        """Decode raw, raising DecodeFailure when it is Invalid."""
        return self.run(raw).unwrap()

    def decode_string(self, text: str) -> Validation[DecodeError, A]:
        """
        Parse text as JSON, then decode the parsed value.

        Usage:
            number.decode_string("12")   # Valid(12)
            number.decode_string("{")    # Invalid({"$": "Expected a JSON string"})
        """
        try:
            raw = json.loads(text)
        except (TypeError, ValueError):
            return Invalid(root_error("Expected a JSON string"))
        return self.run(raw)

    def map(self, f: Callable[[A], B]) -> Decoder[B]:
        """
        Transform every successfully decoded value.

        Usage:
            string.map(str.upper).decode("bob")  # Valid("BOB")
        """
        return Decoder(lambda raw: self.run(raw).map(f))

    def contramap(self, f: Callable[[Any], Any]) -> Decoder[A]:
        """Adapt the raw input before decoding it."""
        return Decoder(lambda raw: self.run(f(raw)))

    def filter(self, message: str, predicate: Callable[[A], bool]) -> Decoder[A]:
        """
        Reject decoded values that fail predicate, reporting message at the root.

        Usage:
            positive = number.filter("Expected a positive number", lambda n: n > 0)
            positive.decode(-1)  # Invalid({"$": "Expected a positive number"})
        """

        def check(value: A) -> Validation[DecodeError, A]:
            return Valid(value) if predicate(value) else Invalid(root_error(message))

        return Decoder(lambda raw: self.run(raw).match_case(invalid=Invalid, valid=check))

    def or_else(self, other: Decoder[A]) -> Decoder[A]:
        """
        Try this decoder, falling back on other if it fails.

        Failures are not merged: if both fail, the result is other's failure.

        Usage:
            string.or_else(number).decode(12)     # Valid(12)
            string.or_else(number).decode(False)  # Invalid({"$": "Expected a number"})
        """
        return Decoder(lambda raw: self.run(raw).or_else(lambda: other.run(raw)))

    def __or__(self, other: Decoder[A]) -> Decoder[A]:
        return self.or_else(other)

    def replace(self, other: Decoder[B]) -> Decoder[B]:
        """
        Run both decoders on the same input and keep other's value.

        Failures from both sides are merged.

        Usage:
            d = property_("foo", string).replace(property_("bar", number))
            d.decode({})  # Invalid({"foo": "Expected a string", "bar": "Expected a number"})
        """
        return Decoder(lambda raw: self.run(raw).replace(other.run(raw)))

    def replace_pure(self, value: B) -> Decoder[B]:
        return Decoder(lambda raw: self.run(raw).replace_pure(value))

    def void_out(self) -> Decoder[tuple[()]]:
        return Decoder(lambda raw: self.run(raw).void_out())


def _expect(predicate: Callable[[Any], bool], message: str) -> Decoder[Any]:
    def run(value: Any) -> Validation[DecodeError, Any]:
        return Valid(value) if predicate(value) else Invalid(root_error(message))

    return Decoder(run)


def _is_number(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


# =============================================================================
# General-purpose decoders
# =============================================================================

identity: Decoder[Any] = Decoder(Valid)

boolean: Decoder[bool] = _expect(lambda x: isinstance(x, bool), "Expected a boolean")

number: Decoder[float] = _expect(_is_number, "Expected a number")

integer: Decoder[int] = _expect(
    lambda x: isinstance(x, int) and not isinstance(x, bool), "Expected an integer"
)

string: Decoder[str] = _expect(lambda x: isinstance(x, str), "Expected a string")

null: Decoder[None] = _expect(lambda x: x is None, "Expected a null")


def _decode_date(value: Any) -> Validation[DecodeError, datetime]:
    if isinstance(value, datetime):
        return Valid(value)
    if isinstance(value, str):
        try:
            return Valid(datetime.fromisoformat(value))
        except ValueError:
            pass
    elif _is_number(value):
        try:
            return Valid(datetime.fromtimestamp(value / 1000, tz=timezone.utc))
        except (OverflowError, OSError, ValueError):
            pass
    return Invalid(root_error("Expected a date"))


# Accepts a datetime, an ISO-8601 string or epoch milliseconds
date: Decoder[datetime] = Decoder(_decode_date)


def constant(value: T) -> Decoder[T]:
    """Always decodes to value, ignoring the input."""
    return Decoder(lambda _: Valid(value))


def constant_failure(failure: DecodeError) -> Decoder[Any]:
    """Always fails with failure, ignoring the input."""
    return Decoder(lambda _: Invalid(failure))


def fail(message: str) -> Decoder[Any]:
    """Always fails with message at the root."""
    return constant_failure(root_error(message))


succeed = constant


def only(value: T) -> Decoder[T]:
    """
    Accept a single raw value.

    Usage:
        only("foo").decode("foo")  # Valid("foo")
        only("foo").decode("bar")  # Invalid({"$": "Expected foo"})
    """

    def check(x: Any) -> bool:
        return type(x) is type(value) and x == value

    return _expect(check, f"Expected {value}")


def choice(*values: T) -> Decoder[T]:
    """
    Accept any of a finite set of raw values.

    Usage:
        choice("foo", "bar").decode("baz")  # Invalid({"$": "Valid options: foo | bar"})
    """

    def check(x: Any) -> bool:
        return any(type(x) is type(v) and x == v for v in values)

    return _expect(check, f"Valid options: {' | '.join(str(v) for v in values)}")


def optional(convert: Decoder[T]) -> Decoder[Maybe[T]]:
    """
    Decode None or MISSING as Nothing, anything else through convert.

    Usage:
        optional(string).decode(None)   # Valid(Nothing())
        optional(string).decode("foo")  # Valid(Just("foo"))
        optional(string).decode(True)   # Invalid({"$": "Expected a string"})
    """

    def run(value: Any) -> Validation[DecodeError, Maybe[T]]:
        if is_absent(value):
            return Valid(NOTHING)
        return convert.decode(value).map(Just)

    return Decoder(run)


def array(convert: Decoder[T]) -> Decoder[list[T]]:
    """
    Decode every element of a list (or tuple) with convert.

    Usage:
        array(string).decode("foo")          # Invalid({"$": "Expected an array"})
        array(string).decode([True, "foo"])  # Invalid({"[0]": "Expected a string"})
    """

    def run(value: Any) -> Validation[DecodeError, list[T]]:
        if not isinstance(value, (list, tuple)):
            return Invalid(root_error("Expected an array"))
        return V.sequence(
            [
                convert.decode(item).map_error(lambda e, i=i: prefix_error(index_key(i), e))
                for i, item in enumerate(value)
            ]
        )

    return Decoder(run)


def tuple_(*converters: Decoder[Any]) -> Decoder[tuple[Any, ...]]:
    """
    Decode a fixed-length array positionally.

    The length is checked before any element, so a wrong-length input reports
    only the arity failure.

    Usage:
        tuple_(string, number).decode(["foo"])     # Invalid({"$": "Expected an array of length 2"})
        tuple_(string, number).decode([1, "foo"])  # Invalid({"[0]": ..., "[1]": ...})
        tuple_(string, number).decode(["foo", 1])  # Valid(("foo", 1))
    """
    message = f"Expected an array of length {len(converters)}"

    def decode_item(i: int, convert: Decoder[Any], item: Any) -> Validation[DecodeError, Any]:
        return convert.decode(item).map_error(lambda e: prefix_error(index_key(i), e))

    def run(value: Any) -> Validation[DecodeError, tuple[Any, ...]]:
        if not isinstance(value, (list, tuple)) or len(value) != len(converters):
            return Invalid(root_error(message))
        return V.zip_with_m(decode_item, range(len(converters)), converters, value).map(tuple)

    return Decoder(run)


def index(i: int, convert: Decoder[T]) -> Decoder[T]:
    """
    Decode a single element of an array.

    Usage:
        index(1, string).decode(["a", "b"])  # Valid("b")
        index(1, string).decode(["a", 2])    # Invalid({"[1]": "Expected a string"})
        index(2, string).decode(["a"])       # Invalid({"$": "Expected index 2 to exist"})
    """

    def run(value: Any) -> Validation[DecodeError, T]:
        if not isinstance(value, (list, tuple)):
            return Invalid(root_error("Expected an array"))
        if not 0 <= i < len(value):
            return Invalid(root_error(f"Expected index {i} to exist"))
        return convert.decode(value[i]).map_error(lambda e: prefix_error(index_key(i), e))

    return Decoder(run)


def property_(name: str, convert: Decoder[T]) -> Decoder[T]:
    """
    Decode one property of an object.

    An absent key is passed to convert as MISSING, so optional() decoders
    succeed with Nothing and the others fail with their own message. Inside
    decoding_context(strict=True) that failure reads "Required" instead.

    Usage:
        property_("bar", string).decode({})              # Invalid({"bar": "Expected a string"})
        property_("bar", string).decode({"bar": "foo"})  # Valid("foo")
    """

    def run(obj: Any) -> Validation[DecodeError, T]:
        raw = obj.get(name, MISSING) if isinstance(obj, Mapping) else MISSING
        result = convert.decode(raw)
        if raw is MISSING and isinstance(result, Invalid) and is_strict():
            result = Invalid(root_error("Required"))
        return result.map_error(lambda e: prefix_error(name, e))

    return Decoder(run)


def object_(convert: Decoder[T]) -> Decoder[T]:
    """Run convert only on mappings, failing with "Expected an object" otherwise."""

    def run(value: Any) -> Validation[DecodeError, T]:
        if not isinstance(value, Mapping):
            return Invalid(root_error("Expected an object"))
        return convert.decode(value)

    return Decoder(run)


def one_of(*choices: Decoder[T]) -> Decoder[T]:
    """
    Try each decoder in order until one succeeds.

    If all fail, the last failure is reported.

    Usage:
        one_of(only("foo"), only("bar")).decode("baz")  # Invalid({"$": "Expected bar"})
    """
    if not choices:
        return constant_failure(root_error("No valid choices"))
    return reduce(lambda state, d: state.or_else(d), choices[1:], choices[0])


# =============================================================================
# Lifting
# =============================================================================


def lift(f: Callable[..., T], *args: Decoder[Any]) -> Decoder[T]:
    """
    Decode every argument of f from the same input, then apply f.

    Usage:
        def answer(question: str, value: bool) -> str:
            return f"{question} {value}"

        d = lift(answer, property_("question", string), property_("answer", boolean))
        d.decode({"question": "foo", "answer": 0})  # Invalid({"answer": "Expected a boolean"})
    """
    return Decoder(lambda raw: V.lift_f(f, *(d.decode(raw) for d in args)))


def build(spec: Mapping[str, Decoder[Any]]) -> Decoder[dict[str, Any]]:
    """
    Decode an object into a dict, one decoder per output key.

    All field failures are merged, each already prefixed by its property.

    Usage:
        foo = build({
            "bar": property_("bar", string),
            "baz": property_("baz", optional(boolean)),
        })
        foo.decode({"bar": None, "baz": 1})
        # Invalid({"bar": "Expected a string", "baz": "Expected a boolean"})
    """
    fields = dict(spec)

    def run(value: Any) -> Validation[DecodeError, dict[str, Any]]:
        if not isinstance(value, Mapping):
            return Invalid(root_error("Expected an object"))
        return V.lift_o({key: d.decode(value) for key, d in fields.items()})

    return Decoder(run)


lift_o = build


# =============================================================================
# Traversals
# =============================================================================


def map_m(f: Callable[[T], Decoder[B]], values: Iterable[T]) -> Decoder[list[B]]:
    """Build a decoder for each value and run them all on the same input."""
    items = list(values)
    return Decoder(lambda raw: V.map_m(lambda x: f(x).decode(raw), items))


def for_m(values: Iterable[T], f: Callable[[T], Decoder[B]]) -> Decoder[list[B]]:
    return map_m(f, values)


def sequence(decoders: Iterable[Decoder[T]]) -> Decoder[list[T]]:
    return map_m(lambda d: d, decoders)


def map_and_unzip_with(
    f: Callable[[T], Decoder[tuple[Any, ...]]], values: Iterable[T], n: int = 0
) -> Decoder[tuple[list[Any], ...]]:
    """
    Run map_m and transpose the decoded rows into columns.

    n sets the number of columns produced for empty input.
    """
    items = list(values)
    return Decoder(lambda raw: V.map_and_unzip_with(lambda x: f(x).decode(raw), items, n))


def zip_with_m(f: Callable[..., Decoder[T]], *sequences: Sequence[Any]) -> Decoder[list[T]]:
    return sequence(zip_with(f, *sequences))
