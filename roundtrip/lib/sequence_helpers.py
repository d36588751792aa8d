"""
Helper functions for zipping and unzipping sequences.
"""

from typing import Any, Callable, Sequence, TypeVar

T = TypeVar("T")


def zip_with(f: Callable[..., T], *sequences: Sequence[Any]) -> list[T]:
    """
    Apply f positionally across sequences, stopping at the shortest one.

    Examples:
        zip_with(lambda a, b: a + b, [1, 2], [10, 20, 30])  # [11, 22]
    """
    return [f(*args) for args in zip(*sequences)]


def unzip(rows: Sequence[Sequence[Any]], n: int = 0) -> tuple[list[Any], ...]:
    """
    Transpose a sequence of rows into a tuple of columns.

    Args:
        rows: Rows of equal length
        n: Number of columns to produce when rows is empty

    Examples:
        unzip([(1, "a"), (2, "b")])  # ([1, 2], ["a", "b"])
        unzip([], 2)                  # ([], [])
    """
    if len(rows) == 0:
        return tuple([] for _ in range(n))
    return tuple(list(column) for column in zip(*rows))
