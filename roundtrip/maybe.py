"""
Maybe: a value that is either present (Just) or absent (Nothing).
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Any, Callable, Generic, Iterable, Mapping, Sequence, TypeVar, Union

from .lib.sequence_helpers import unzip, zip_with
from .types import is_absent

T = TypeVar("T")
U = TypeVar("U")
C = TypeVar("C")


@dataclass(frozen=True, slots=True)
class Just(Generic[T]):
    """Maybe holding a value."""

    value: T

    def is_just(self) -> bool:
        return True

    def is_nothing(self) -> bool:
        return False

    def map(self, f: Callable[[T], U]) -> Maybe[U]:
        return Just(f(self.value))

    def chain(self, f: Callable[[T], Maybe[U]]) -> Maybe[U]:
        return f(self.value)

    flat_map = chain

    def filter(self, predicate: Callable[[T], bool]) -> Maybe[T]:
        return self if predicate(self.value) else NOTHING

    def default_with(self, default: T) -> T:
        return self.value

    def match_case(self, *, just: Callable[[T], C], nothing: Callable[[], C]) -> C:
        return just(self.value)

    def or_else(self, other: Callable[[], Maybe[T]]) -> Maybe[T]:
        return self

    def replace(self, other: Maybe[U]) -> Maybe[U]:
        return other

    def replace_pure(self, value: U) -> Maybe[U]:
        return Just(value)

    def void_out(self) -> Maybe[tuple[()]]:
        return Just(())

    def to_list(self) -> list[T]:
        return [self.value]

    def __repr__(self) -> str:
        return f"Just({self.value!r})"


@dataclass(frozen=True, slots=True)
class Nothing:
    """Maybe holding no value. Every Nothing is equal; use the NOTHING constant."""

    def is_just(self) -> bool:
        return False

    def is_nothing(self) -> bool:
        return True

    def map(self, f: Callable[[Any], Any]) -> Nothing:
        return self

    def chain(self, f: Callable[[Any], Any]) -> Nothing:
        return self

    flat_map = chain

    def filter(self, predicate: Callable[[Any], bool]) -> Nothing:
        return self

    def default_with(self, default: T) -> T:
        return default

    def match_case(self, *, just: Callable[[Any], C], nothing: Callable[[], C]) -> C:
        return nothing()

    def or_else(self, other: Callable[[], Maybe[T]]) -> Maybe[T]:
        return other()

    def replace(self, other: Maybe[Any]) -> Nothing:
        return self

    def replace_pure(self, value: Any) -> Nothing:
        return self

    def void_out(self) -> Nothing:
        return self

    def to_list(self) -> list[Any]:
        return []

    def __repr__(self) -> str:
        return "Nothing()"


NOTHING = Nothing()

Maybe = Union[Just[T], Nothing]


def to_maybe(value: T | None) -> Maybe[T]:
    """Wrap a value, treating None and MISSING as Nothing."""
    return NOTHING if is_absent(value) else Just(value)


def is_just(m: Maybe[Any]) -> bool:
    return isinstance(m, Just)


def is_nothing(m: Maybe[Any]) -> bool:
    return isinstance(m, Nothing)


def list_to_maybe(values: Sequence[T]) -> Maybe[T]:
    """The first element of values, if any."""
    return Just(values[0]) if len(values) > 0 else NOTHING


def cat_maybes(ms: Iterable[Maybe[T]]) -> list[T]:
    """Keep the values of every Just, in order."""
    return [m.value for m in ms if isinstance(m, Just)]


def map_maybe(f: Callable[[T], Maybe[U]], values: Iterable[T]) -> list[U]:
    return cat_maybes(f(x) for x in values)


def lift_f(f: Callable[..., U], *args: Maybe[Any]) -> Maybe[U]:
    """Apply f to the values of args if every one of them is Just."""
    values = cat_maybes(args)
    return Just(f(*values)) if len(values) == len(args) else NOTHING


def lift_o(spec: Mapping[str, Maybe[Any]]) -> Maybe[dict[str, Any]]:
    """Build a dict out of a mapping of Maybes."""
    return sequence([m.map(lambda x, k=key: (k, x)) for key, m in spec.items()]).map(dict)


def map_m(f: Callable[[T], Maybe[U]], values: Iterable[T]) -> Maybe[list[U]]:
    return sequence([f(x) for x in values])


def for_m(values: Iterable[T], f: Callable[[T], Maybe[U]]) -> Maybe[list[U]]:
    return map_m(f, values)


def sequence(ms: Sequence[Maybe[T]]) -> Maybe[list[T]]:
    return lift_f(lambda *xs: list(xs), *ms)


def map_and_unzip_with(
    f: Callable[[T], Maybe[tuple[Any, ...]]], values: Iterable[T], n: int = 0
) -> Maybe[tuple[list[Any], ...]]:
    return map_m(f, values).map(lambda rows: unzip(rows, n))


def zip_with_m(f: Callable[..., Maybe[U]], *sequences: Sequence[Any]) -> Maybe[list[U]]:
    return sequence(zip_with(f, *sequences))


def reduce_m(f: Callable[[U, T], Maybe[U]], seed: U, values: Iterable[T]) -> Maybe[U]:
    """Fold values left to right, stopping at the first Nothing."""
    return reduce(lambda state, x: state.chain(lambda acc: f(acc, x)), values, Just(seed))


def when(condition: bool) -> Maybe[tuple[()]]:
    return Just(()) if condition else NOTHING


def unless(condition: bool) -> Maybe[tuple[()]]:
    return when(not condition)


def join(m: Maybe[Maybe[T]]) -> Maybe[T]:
    return m.chain(lambda inner: inner)
