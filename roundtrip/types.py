"""
Type definitions for roundtrip.

Provides the MISSING sentinel for absent raw values and shared type aliases.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class Missing(Enum):
    """
    Sentinel marking a raw value that is absent, as opposed to present and None.

    A property decoder hands MISSING to its child when the key does not exist,
    and an optional encoder produces MISSING for Nothing so that the enclosing
    property encoder can leave the key out entirely.

    Examples:
        property_("bar", optional(string)).decode({})      # Valid(Nothing())
        property_("bar", optional(string)).encode(NOTHING)  # {}
    """

    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = Missing.MISSING

# A path-keyed mapping of decode failure messages
DecodeError = dict[str, str]


def is_absent(value: Any) -> bool:
    """Check if a raw value is None or MISSING."""
    return value is None or value is MISSING
