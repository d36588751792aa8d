"""
Codecs: matched decoder/encoder pairs.

A codec converts in both directions between a raw format and a rich one.
Its two halves must be inverse to each other, structurally:

    codec.decode(codec.encode(value)) == Valid(value)
    codec.encode(codec.decode(raw).value) == raw   # for canonical raw input

Every structural codec here is built from the matching decoder and encoder
primitives of its children, so the law holds by construction as long as the
functions passed to the invmap family are themselves inverses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Generic, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from . import decoder as D
from . import encoder as E
from .decoder import Decoder
from .encoder import Encoder
from .errors import EncodeError, format_path, root_error
from .maybe import Maybe, to_maybe
from .types import MISSING, DecodeError
from .validation import Invalid, Valid, Validation

logger = logging.getLogger(__name__)

A = TypeVar("A")
B = TypeVar("B")
T = TypeVar("T")
_Model = TypeVar("_Model", bound=BaseModel)


@dataclass(frozen=True, slots=True)
class Codec(Generic[A]):
    """A decoder and an encoder for the same pair of raw and rich types."""

    decoder: Decoder[A]
    encoder: Encoder[A]
    # Raw key read and written by a property_ codec
    property_name: str | None = None

    def decode(self, raw: Any) -> Validation[DecodeError, A]:
        return self.decoder.decode(raw)

    def encode(self, value: A) -> Any:
        return self.encoder.encode(value)

    def decode_or_raise(self, raw: Any) -> A:
        return self.decoder.decode_or_raise(raw)

    def decode_string(self, text: str) -> Validation[DecodeError, A]:
        return self.decoder.decode_string(text)

    def encode_string(self, value: A) -> str:
        return self.encoder.encode_string(value)

    def invmap_rich(self, f: Callable[[A], B], g: Callable[[B], A]) -> Codec[B]:
        """
        Change the rich type through an isomorphism.

        f runs after decoding and g before encoding. The caller must ensure
        g(f(a)) == a for every decodable a.

        Usage:
            cents = number.invmap_rich(lambda n: round(n * 100), lambda c: c / 100)
        """
        return Codec(self.decoder.map(f), self.encoder.contramap(g))

    invmap = invmap_rich

    def invmap_raw(self, f: Callable[[Any], Any], g: Callable[[Any], Any]) -> Codec[A]:
        """
        Change the raw type through an isomorphism.

        f runs after encoding and g before decoding.

        Usage:
            csv = array(string).invmap_raw(",".join, lambda s: s.split(","))
        """
        return Codec(self.decoder.contramap(g), self.encoder.map(f))

    def invmap_both(
        self,
        rich_f: Callable[[A], B],
        rich_g: Callable[[B], A],
        raw_f: Callable[[Any], Any],
        raw_g: Callable[[Any], Any],
    ) -> Codec[B]:
        """Apply invmap_rich(rich_f, rich_g) and invmap_raw(raw_f, raw_g) together."""
        return self.invmap_rich(rich_f, rich_g).invmap_raw(raw_f, raw_g)


# =============================================================================
# General-purpose codecs
# =============================================================================

identity: Codec[Any] = Codec(D.identity, E.identity)

boolean: Codec[bool] = Codec(D.boolean, E.boolean)

number: Codec[float] = Codec(D.number, E.number)

integer: Codec[int] = Codec(D.integer, E.integer)

string: Codec[str] = Codec(D.string, E.string)

null: Codec[None] = Codec(D.null, E.null)

date: Codec[datetime] = Codec(D.date, E.date)


def constant(value: T) -> Codec[T]:
    """Decodes anything to value and encodes value unchanged."""
    return Codec(D.constant(value), E.identity)


def only(value: T) -> Codec[T]:
    return Codec(D.only(value), E.identity)


def choice(*values: T) -> Codec[T]:
    """
    Conversion between raw data and a finite set of values.

    Usage:
        choice("foo", "bar").decode("baz")  # Invalid({"$": "Valid options: foo | bar"})
        choice("foo", "bar").encode("bar")  # "bar"
    """
    return Codec(D.choice(*values), E.identity)


def array(item: Codec[T]) -> Codec[list[T]]:
    return Codec(D.array(item.decoder), E.array(item.encoder))


def tuple_(*items: Codec[Any]) -> Codec[tuple[Any, ...]]:
    return Codec(
        D.tuple_(*(c.decoder for c in items)),
        E.tuple_(*(c.encoder for c in items)),
    )


def optional(inner: Codec[T]) -> Codec[Maybe[T]]:
    """
    Conversion between possibly absent raw data and Maybe.

    Usage:
        optional(string).decode(None)         # Valid(Nothing())
        optional(string).encode(Just("foo"))  # "foo"
        optional(string).encode(NOTHING)      # MISSING
    """
    return Codec(D.optional(inner.decoder), E.optional(inner.encoder))


def nullable(inner: Codec[T]) -> Codec[T | None]:
    """Like optional, but with None in place of Nothing on the rich side."""
    return optional(inner).invmap_rich(lambda m: m.default_with(None), to_maybe)


def property_(name: str, inner: Codec[T]) -> Codec[T]:
    """
    Reads and writes one property of an object.

    Usage:
        property_("bar", string).decode({"bar": True})  # Invalid({"bar": "Expected a string"})
        property_("bar", string).encode("foo")          # {"bar": "foo"}
    """
    return Codec(
        D.property_(name, inner.decoder),
        E.property_(name, inner.encoder),
        property_name=name,
    )


def object_(inner: Codec[T]) -> Codec[T]:
    return Codec(D.object_(inner.decoder), E.object_(inner.encoder))


def build(spec: Mapping[str, Codec[Any]]) -> Codec[dict[str, Any]]:
    """
    Composes a record codec out of one codec per field.

    Usage:
        foo = build({
            "bar": property_("bar", string),
            "baz": property_("baz", optional(boolean)),
        })
        foo.decode({"bar": None, "baz": 1})
        # Invalid({"bar": "Expected a string", "baz": "Expected a boolean"})
        foo.encode({"bar": "eek", "baz": Just(False)})  # {"bar": "eek", "baz": False}
    """
    return Codec(
        D.build({key: c.decoder for key, c in spec.items()}),
        E.build({key: c.encoder for key, c in spec.items()}),
    )


lift_o = build


# =============================================================================
# Tagged unions
# =============================================================================


def _has_tag(value: Any, tag_field: str, tag: Any) -> bool:
    if isinstance(value, Mapping):
        return value.get(tag_field, MISSING) == tag
    return getattr(value, tag_field, MISSING) == tag


@dataclass(frozen=True, slots=True)
class Case(Generic[A]):
    """One variant of a tagged union, see case() and one_of()."""

    tag: Any
    codec: Codec[A]
    matches: Callable[[Any], bool]

    @property
    def decoder(self) -> Decoder[A]:
        return self.codec.decoder

    @property
    def encoder(self) -> Encoder[A]:
        return self.codec.encoder

    def decode(self, raw: Any) -> Validation[DecodeError, A]:
        return self.codec.decode(raw)

    def encode(self, value: A) -> Any:
        return self.codec.encode(value)


def case(
    tag: Any,
    inner: Codec[A],
    *,
    tag_field: str = "__case",
    matches: Callable[[Any], bool] | None = None,
) -> Case[A]:
    """
    A variant of a tagged union, discriminated by tag_field.

    Decoding accepts only objects whose tag_field equals tag; decoded dicts
    keep the tag so that they can be encoded again. Encoding adds the tag to
    the object produced by inner.

    matches decides, at encode time, whether a rich value belongs to this
    case. By default it compares the value's tag_field (key or attribute)
    with tag; pass e.g. ``lambda v: isinstance(v, Circle)`` for classes.

    Usage:
        circle = case("circle", build({"radius": property_("radius", number)}))
        circle.decode({"__case": "circle", "radius": 1})  # Valid({"radius": 1, "__case": "circle"})
        circle.decode({"__case": "square"})               # Invalid({"$": "Expected __case: circle"})
    """
    message = f"Expected {tag_field}: {tag}"

    def tag_value(value: Any) -> Any:
        if isinstance(value, Mapping):
            return {**value, tag_field: tag}
        return value

    def decode(raw: Any) -> Validation[DecodeError, A]:
        if not isinstance(raw, Mapping) or raw.get(tag_field, MISSING) != tag:
            return Invalid(root_error(message))
        return inner.decode(raw).map(tag_value)

    def encode(value: A) -> dict[str, Any]:
        raw = inner.encode(value)
        if not isinstance(raw, Mapping):
            raise TypeError(f"Case '{tag}' must encode to an object, got {type(raw).__name__}")
        return {**raw, tag_field: tag}

    def has_tag(value: Any) -> bool:
        return _has_tag(value, tag_field, tag)

    codec = Codec(Decoder(decode), Encoder(encode))
    return Case(tag=tag, codec=codec, matches=matches or has_tag)


def one_of(*cases: Case[Any]) -> Codec[Any]:
    """
    A tagged union of cases.

    Decoding tries each case in order. Encoding uses the first case whose
    predicate accepts the value and raises EncodeError if none does: such a
    value cannot have come from any of these cases.

    Usage:
        shape = one_of(circle, square)
        shape.encode({"__case": "triangle"})  # raises EncodeError
    """

    def encode(value: Any) -> Any:
        for c in cases:
            if c.matches(value):
                return c.encode(value)
        logger.debug("No case among %s matches %s", [c.tag for c in cases], repr(value)[:50])
        raise EncodeError(f"No case matches value: {repr(value)[:50]}")

    return Codec(D.one_of(*(c.decoder for c in cases)), Encoder(encode))


# =============================================================================
# Pydantic models
# =============================================================================


def _model_errors(error: ValidationError, raw_names: Mapping[str, str]) -> DecodeError:
    errors: DecodeError = {}
    for e in error.errors():
        loc = tuple(e["loc"])
        # Model fields are named by spec key, the raw path by property
        if loc and loc[0] in raw_names:
            loc = (raw_names[loc[0]], *loc[1:])
        errors[format_path(loc)] = e["msg"]
    return errors


def model(model_cls: type[_Model], spec: Mapping[str, Codec[Any]]) -> Codec[_Model]:
    """
    A record codec whose rich values are instances of a pydantic model.

    The fields listed in spec are decoded like build(spec), then passed to
    model_cls.model_validate. A pydantic error on a field is reported under
    the raw key of that field's property_ codec, so it lands on the same path
    as a structural failure would; fields built otherwise keep the spec key.
    Encoding reads each spec field off the instance.

    Usage:
        class User(BaseModel):
            name: str
            age: int | None = None

        user = model(User, {
            "name": property_("name", string),
            "age": property_("age", nullable(integer)),
        })
        user.decode({"name": "Alice"})  # Valid(User(name="Alice", age=None))
    """
    fields = build(spec)
    raw_names = {key: c.property_name for key, c in spec.items() if c.property_name is not None}

    def validate(value: dict[str, Any]) -> Validation[DecodeError, _Model]:
        try:
            return Valid(model_cls.model_validate(value))
        except ValidationError as e:
            logger.debug("%s rejected decoded fields: %s", model_cls.__name__, e)
            return Invalid(_model_errors(e, raw_names))

    def decode(raw: Any) -> Validation[DecodeError, _Model]:
        match fields.decode(raw):
            case Valid(value=value):
                return validate(value)
            case invalid:
                return invalid

    return Codec(Decoder(decode), fields.encoder)
