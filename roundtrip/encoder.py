"""
Encoders: conversion from rich values back to raw data.

An Encoder wraps a total function A -> raw. Its structural primitives mirror
those in roundtrip.decoder.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Generic, Mapping, TypeVar

from .lib.sequence_helpers import zip_with
from .maybe import Maybe
from .types import MISSING

A = TypeVar("A")
B = TypeVar("B")
T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Encoder(Generic[A]):
    """Immutable encoder node."""

    run: Callable[[A], Any]

    def encode(self, value: A) -> Any:
        return self.run(value)

    def encode_string(self, value: A) -> str:
        """Encode value, then serialize the raw output as JSON text."""
        return json.dumps(self.run(value))

    def contramap(self, f: Callable[[B], A]) -> Encoder[B]:
        """
        Obtain the input for this encoder from a different type.

        Usage:
            string.contramap(str).encode(12)  # "12"
        """
        return Encoder(lambda value: self.run(f(value)))

    def map(self, f: Callable[[Any], Any]) -> Encoder[A]:
        """Post-process the raw output."""
        return Encoder(lambda value: f(self.run(value)))


def _identity(value: Any) -> Any:
    return value


def _in_array(raw: Any) -> Any:
    # Arrays have no holes, an absent element is written as null
    return None if raw is MISSING else raw


# =============================================================================
# General-purpose encoders
# =============================================================================

identity: Encoder[Any] = Encoder(_identity)

boolean: Encoder[bool] = Encoder(_identity)

number: Encoder[float] = Encoder(_identity)

integer: Encoder[int] = Encoder(_identity)

string: Encoder[str] = Encoder(_identity)

null: Encoder[None] = Encoder(_identity)


def _encode_date(value: datetime) -> str:
    return value.isoformat()


date: Encoder[datetime] = Encoder(_encode_date)


def constant(raw: Any) -> Encoder[Any]:
    """Always encodes to raw, ignoring the value."""
    return Encoder(lambda _: raw)


def optional(convert: Encoder[T]) -> Encoder[Maybe[T]]:
    """
    Encode Just(x) as convert.encode(x) and Nothing as MISSING.

    Usage:
        optional(string).encode(Just("foo"))  # "foo"
        optional(string).encode(NOTHING)      # MISSING
    """
    return Encoder(lambda m: m.match_case(just=convert.encode, nothing=lambda: MISSING))


def array(convert: Encoder[T]) -> Encoder[list[T]]:
    return Encoder(lambda values: [_in_array(convert.encode(x)) for x in values])


def tuple_(*converters: Encoder[Any]) -> Encoder[tuple[Any, ...]]:
    """Encode the elements of a tuple positionally into a list."""

    def run(values: tuple[Any, ...]) -> list[Any]:
        return zip_with(lambda convert, x: _in_array(convert.encode(x)), converters, values)

    return Encoder(run)


def property_(name: str, convert: Encoder[T]) -> Encoder[T]:
    """
    Encode a value as a single-key object.

    The key is left out when convert produces MISSING.

    Usage:
        property_("foo", string).encode("bar")           # {"foo": "bar"}
        property_("foo", optional(string)).encode(NOTHING)  # {}
    """

    def run(value: T) -> dict[str, Any]:
        raw = convert.encode(value)
        return {} if raw is MISSING else {name: raw}

    return Encoder(run)


def object_(convert: Encoder[T]) -> Encoder[T]:
    return Encoder(convert.run)


def _read_field(value: Any, key: str) -> Any:
    if isinstance(value, Mapping):
        return value[key]
    return getattr(value, key)


def build(spec: Mapping[str, Encoder[Any]]) -> Encoder[Any]:
    """
    Encode a record by merging the objects produced for each of its fields.

    Each field is read from the value by key (mappings) or attribute
    (anything else) and handed to its encoder, which must produce an object.

    Usage:
        foo = build({
            "bar": property_("bar", string),
            "baz": property_("baz", optional(boolean)),
        })
        foo.encode({"bar": "eek", "baz": Just(False)})  # {"bar": "eek", "baz": False}
    """
    fields = dict(spec)

    def run(value: Any) -> dict[str, Any]:
        raw: dict[str, Any] = {}
        for key, convert in fields.items():
            part = convert.encode(_read_field(value, key))
            if not isinstance(part, Mapping):
                raise TypeError(
                    f"Encoder for field '{key}' must produce an object, got {type(part).__name__}"
                )
            raw.update(part)
        return raw

    return Encoder(run)


lift_o = build
