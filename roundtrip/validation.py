"""
Validation: the error-accumulating sibling of Either.

Valid and Invalid have the same shape as Right and Left, but combining
several Invalids merges all of their failures instead of keeping the first.
Failures must be containers:

    lists/tuples  -> concatenated, duplicates kept
    mappings      -> shallow-merged, a later key replaces an earlier one

There is deliberately no chain(): a dependent step cannot run once an
earlier step failed, so its errors could never be collected.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Any, Callable, Generic, Iterable, Mapping, Sequence, TypeVar, Union

from .either import Left, Right
from .errors import DecodeFailure
from .lib.sequence_helpers import unzip, zip_with
from .maybe import NOTHING, Just, Maybe

E = TypeVar("E")
T = TypeVar("T")
U = TypeVar("U")
C = TypeVar("C")


def merge_failures(first: Any, second: Any) -> Any:
    """
    Combine two failures of the same container shape.

    Examples:
        merge_failures(["a"], ["a", "b"])    # ["a", "a", "b"]
        merge_failures({"x": 1}, {"y": 2})   # {"x": 1, "y": 2}
    """
    if isinstance(first, Mapping) and isinstance(second, Mapping):
        return {**first, **second}
    if isinstance(first, (list, tuple)) and isinstance(second, (list, tuple)):
        return [*first, *second]
    raise TypeError(
        f"Cannot merge failures of type {type(first).__name__} and {type(second).__name__}"
    )


@dataclass(frozen=True, slots=True)
class Valid(Generic[T]):
    """Successful validation containing a value."""

    value: T

    def is_valid(self) -> bool:
        return True

    def is_invalid(self) -> bool:
        return False

    def map(self, f: Callable[[T], U]) -> Valid[U]:
        return Valid(f(self.value))

    def map_error(self, f: Callable[[Any], Any]) -> Valid[T]:
        return self

    def match_case(self, *, invalid: Callable[[Any], C], valid: Callable[[T], C]) -> C:
        return valid(self.value)

    def or_else(self, other: Callable[[], Validation[E, T]]) -> Valid[T]:
        return self

    def replace(self, other: Validation[E, U]) -> Validation[E, U]:
        return other

    def replace_pure(self, value: U) -> Valid[U]:
        return Valid(value)

    def void_out(self) -> Valid[tuple[()]]:
        return Valid(())

    def default_with(self, default: T) -> T:
        return self.value

    def to_either(self) -> Right[T]:
        return Right(self.value)

    def to_maybe(self) -> Maybe[T]:
        return Just(self.value)

    def unwrap(self) -> T:
        return self.value

    def __repr__(self) -> str:
        return f"Valid({self.value!r})"


@dataclass(frozen=True, slots=True)
class Invalid(Generic[E]):
    """Failed validation containing a mergeable failure."""

    failure: E

    def is_valid(self) -> bool:
        return False

    def is_invalid(self) -> bool:
        return True

    def map(self, f: Callable[[Any], Any]) -> Invalid[E]:
        return self

    def map_error(self, f: Callable[[E], U]) -> Invalid[U]:
        return Invalid(f(self.failure))

    def match_case(self, *, invalid: Callable[[E], C], valid: Callable[[Any], C]) -> C:
        return invalid(self.failure)

    def or_else(self, other: Callable[[], Validation[E, T]]) -> Validation[E, T]:
        return other()

    def replace(self, other: Validation[E, Any]) -> Invalid[E]:
        if isinstance(other, Invalid):
            return Invalid(merge_failures(self.failure, other.failure))
        return self

    def replace_pure(self, value: Any) -> Invalid[E]:
        return self

    def void_out(self) -> Invalid[E]:
        return self

    def default_with(self, default: T) -> T:
        return default

    def to_either(self) -> Left[E]:
        return Left(self.failure)

    def to_maybe(self) -> Maybe[Any]:
        return NOTHING

    def unwrap(self) -> Any:
        raise DecodeFailure(self.failure)

    def __repr__(self) -> str:
        return f"Invalid({self.failure!r})"


Validation = Union[Invalid[E], Valid[T]]


def failures(vs: Iterable[Validation[E, Any]]) -> list[E]:
    return [v.failure for v in vs if isinstance(v, Invalid)]


def successful(vs: Iterable[Validation[Any, T]]) -> list[T]:
    return [v.value for v in vs if isinstance(v, Valid)]


def is_valid(v: Validation[Any, Any]) -> bool:
    return isinstance(v, Valid)


def is_invalid(v: Validation[Any, Any]) -> bool:
    return isinstance(v, Invalid)


def lift_f(f: Callable[..., U], *args: Validation[E, Any]) -> Validation[E, U]:
    """
    Apply f to the values of args if all are Valid, else merge every failure.

    Examples:
        lift_f(add, Valid(1), Valid(2))          # Valid(3)
        lift_f(add, Invalid(["a"]), Invalid(["b"]))  # Invalid(["a", "b"])
    """
    errors = failures(args)
    if errors:
        return Invalid(reduce(merge_failures, errors))
    return Valid(f(*successful(args)))


def lift_o(spec: Mapping[str, Validation[E, Any]]) -> Validation[E, dict[str, Any]]:
    """Build a dict out of a mapping of Validations, merging all failures."""
    return sequence([v.map(lambda x, k=key: (k, x)) for key, v in spec.items()]).map(dict)


def map_m(f: Callable[[T], Validation[E, U]], values: Iterable[T]) -> Validation[E, list[U]]:
    return sequence([f(x) for x in values])


def for_m(values: Iterable[T], f: Callable[[T], Validation[E, U]]) -> Validation[E, list[U]]:
    return map_m(f, values)


def sequence(vs: Sequence[Validation[E, T]]) -> Validation[E, list[T]]:
    return lift_f(lambda *xs: list(xs), *vs)


def map_and_unzip_with(
    f: Callable[[T], Validation[E, tuple[Any, ...]]], values: Iterable[T], n: int = 0
) -> Validation[E, tuple[list[Any], ...]]:
    return map_m(f, values).map(lambda rows: unzip(rows, n))


def zip_with_m(
    f: Callable[..., Validation[E, U]], *sequences: Sequence[Any]
) -> Validation[E, list[U]]:
    return sequence(zip_with(f, *sequences))
