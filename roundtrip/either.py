"""
Either: a computation that failed (Left) or succeeded (Right).

Composition short-circuits: when several Eithers are combined, only the
first Left is reported. See roundtrip.validation for the accumulating sibling.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Any, Callable, Generic, Iterable, Mapping, Sequence, TypeVar, Union

from .lib.sequence_helpers import unzip, zip_with
from .maybe import NOTHING, Just, Maybe

L = TypeVar("L")
R = TypeVar("R")
T = TypeVar("T")
U = TypeVar("U")
C = TypeVar("C")


@dataclass(frozen=True, slots=True)
class Left(Generic[L]):
    """Failed Either containing an error value."""

    value: L

    def is_left(self) -> bool:
        return True

    def is_right(self) -> bool:
        return False

    def map(self, f: Callable[[Any], Any]) -> Left[L]:
        return self

    def map_left(self, f: Callable[[L], U]) -> Left[U]:
        return Left(f(self.value))

    def chain(self, f: Callable[[Any], Any]) -> Left[L]:
        return self

    flat_map = chain

    def match_case(self, *, left: Callable[[L], C], right: Callable[[Any], C]) -> C:
        return left(self.value)

    def or_else(self, other: Callable[[], Either[L, R]]) -> Either[L, R]:
        return other()

    def replace(self, other: Either[L, Any]) -> Left[L]:
        return self

    def replace_pure(self, value: Any) -> Left[L]:
        return self

    def void_out(self) -> Left[L]:
        return self

    def default_left_with(self, default: L) -> L:
        return self.value

    def default_right_with(self, default: R) -> R:
        return default

    def to_maybe(self) -> Maybe[Any]:
        return NOTHING

    def __repr__(self) -> str:
        return f"Left({self.value!r})"


@dataclass(frozen=True, slots=True)
class Right(Generic[R]):
    """Successful Either containing a value."""

    value: R

    def is_left(self) -> bool:
        return False

    def is_right(self) -> bool:
        return True

    def map(self, f: Callable[[R], U]) -> Right[U]:
        return Right(f(self.value))

    def map_left(self, f: Callable[[Any], Any]) -> Right[R]:
        return self

    def chain(self, f: Callable[[R], Either[L, U]]) -> Either[L, U]:
        return f(self.value)

    flat_map = chain

    def match_case(self, *, left: Callable[[Any], C], right: Callable[[R], C]) -> C:
        return right(self.value)

    def or_else(self, other: Callable[[], Either[L, R]]) -> Right[R]:
        return self

    def replace(self, other: Either[L, U]) -> Either[L, U]:
        return other

    def replace_pure(self, value: U) -> Right[U]:
        return Right(value)

    def void_out(self) -> Right[tuple[()]]:
        return Right(())

    def default_left_with(self, default: L) -> L:
        return default

    def default_right_with(self, default: R) -> R:
        return self.value

    def to_maybe(self) -> Maybe[R]:
        return Just(self.value)

    def __repr__(self) -> str:
        return f"Right({self.value!r})"


Either = Union[Left[L], Right[R]]


def lefts(es: Iterable[Either[L, Any]]) -> list[L]:
    return [e.value for e in es if isinstance(e, Left)]


def rights(es: Iterable[Either[Any, R]]) -> list[R]:
    return [e.value for e in es if isinstance(e, Right)]


def is_left(e: Either[Any, Any]) -> bool:
    return isinstance(e, Left)


def is_right(e: Either[Any, Any]) -> bool:
    return isinstance(e, Right)


def lift_f(f: Callable[..., U], *args: Either[L, Any]) -> Either[L, U]:
    """Apply f to the values of args, or return the first Left among them."""
    for arg in args:
        if isinstance(arg, Left):
            return arg
    return Right(f(*rights(args)))


def lift_o(spec: Mapping[str, Either[L, Any]]) -> Either[L, dict[str, Any]]:
    """Build a dict out of a mapping of Eithers, failing with the first Left."""
    return sequence([e.map(lambda x, k=key: (k, x)) for key, e in spec.items()]).map(dict)


def map_m(f: Callable[[T], Either[L, U]], values: Iterable[T]) -> Either[L, list[U]]:
    return sequence([f(x) for x in values])


def for_m(values: Iterable[T], f: Callable[[T], Either[L, U]]) -> Either[L, list[U]]:
    return map_m(f, values)


def sequence(es: Sequence[Either[L, R]]) -> Either[L, list[R]]:
    return lift_f(lambda *xs: list(xs), *es)


def map_and_unzip_with(
    f: Callable[[T], Either[L, tuple[Any, ...]]], values: Iterable[T], n: int = 0
) -> Either[L, tuple[list[Any], ...]]:
    return map_m(f, values).map(lambda rows: unzip(rows, n))


def zip_with_m(f: Callable[..., Either[L, U]], *sequences: Sequence[Any]) -> Either[L, list[U]]:
    return sequence(zip_with(f, *sequences))


def reduce_m(f: Callable[[U, T], Either[L, U]], seed: U, values: Iterable[T]) -> Either[L, U]:
    return reduce(lambda state, x: state.chain(lambda acc: f(acc, x)), values, Right(seed))


def join(e: Either[L, Either[L, R]]) -> Either[L, R]:
    return e.chain(lambda inner: inner)


def when(condition: bool, e: Either[L, tuple[()]]) -> Either[L, tuple[()]]:
    return e if condition else Right(())


def unless(condition: bool, e: Either[L, tuple[()]]) -> Either[L, tuple[()]]:
    return when(not condition, e)
