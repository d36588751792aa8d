"""
Decode-time settings shared by every decoder in the current context.

Decoders are plain values built once and reused, so settings that change
how they report failures live in a ContextVar rather than on the decoders
themselves. Only strictness exists today: under strict decoding an absent
property whose decoder rejects the absence is reported as "Required".

    name = property_("name", string)
    name.decode({})                      # Invalid({"name": "Expected a string"})
    with decoding_context(strict=True):
        name.decode({})                  # Invalid({"name": "Required"})
"""

from contextlib import contextmanager
from contextvars import ContextVar

_strict_mode: ContextVar[bool] = ContextVar("roundtrip_strict", default=False)


def is_strict() -> bool:
    return _strict_mode.get()


@contextmanager
def decoding_context(*, strict: bool = False):
    """Apply the given settings to decodes run inside the block, then restore the previous ones."""
    token = _strict_mode.set(strict)
    try:
        yield
    finally:
        _strict_mode.reset(token)
