"""
Error paths and exceptions for roundtrip.

A DecodeError maps a path to a message. Paths use "$" for the root,
".name" for object properties and "[i]" for array or tuple elements:

    {"items[2].name": "Expected a string"}
"""

from __future__ import annotations

from typing import Any, Mapping

from .types import DecodeError

ROOT = "$"


def root_error(message: str) -> DecodeError:
    """Build a failure located at the root of the decoded value."""
    return {ROOT: message}


def index_key(index: int) -> str:
    """Path key for an element of an array or tuple."""
    return f"[{index}]"


def prefix_error(prefix: str, error: Mapping[str, str]) -> DecodeError:
    """
    Move every entry of a child error underneath prefix.

    Examples:
        prefix_error("bar", {"$": "Expected a string"})    # {"bar": ...}
        prefix_error("bar", {"[2]": "Expected a string"})  # {"bar[2]": ...}
        prefix_error("bar", {"baz": "Expected a string"})  # {"bar.baz": ...}
    """
    prefixed: DecodeError = {}
    for child_key, message in error.items():
        if child_key == ROOT:
            suffix = ""
        elif child_key.startswith("["):
            suffix = child_key
        else:
            suffix = f".{child_key}"
        prefixed[f"{prefix}{suffix}"] = message
    return prefixed


def format_path(segments: tuple[str | int, ...] | list[str | int]) -> str:
    """
    Render a tuple of keys and indices as a path key.

    Examples:
        format_path(())                    # "$"
        format_path(("items", 0, "name"))  # "items[0].name"
    """
    path = ""
    for segment in segments:
        if isinstance(segment, int):
            path += index_key(segment)
        elif path:
            path += f".{segment}"
        else:
            path = str(segment)
    return path or ROOT


class DecodeFailure(ValueError):
    """Raised by the explicit raising helpers when a decode result is Invalid."""

    def __init__(self, errors: Any):
        self.errors = errors
        super().__init__(f"Decoding failed: {_describe(errors)}")


class EncodeError(ValueError):
    """Raised when a value cannot have been produced by any known codec case."""


def _describe(errors: Any) -> str:
    if isinstance(errors, Mapping):
        return "; ".join(f"{path}: {message}" for path, message in errors.items())
    if isinstance(errors, (list, tuple)):
        return "; ".join(str(e) for e in errors)
    return str(errors)
