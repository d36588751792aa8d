"""
roundtrip - bidirectional conversion between raw data and rich values.

Usage:
    from roundtrip import codec as C

    user = C.build({
        "name": C.property_("name", C.string),
        "tags": C.property_("tags", C.array(C.string)),
    })

    user.decode({"name": "Alice", "tags": ["a", 1]})
    # Invalid({"tags[1]": "Expected a string"})
"""

import logging

from . import codec, decoder, either, encoder, maybe, validation
from .codec import Case, Codec
from .context import decoding_context, is_strict
from .decoder import Decoder
from .either import Either, Left, Right
from .encoder import Encoder
from .errors import DecodeFailure, EncodeError, format_path, prefix_error
from .maybe import NOTHING, Just, Maybe, Nothing, to_maybe
from .types import MISSING, DecodeError
from .validation import Invalid, Valid, Validation

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Modules
    "codec",
    "decoder",
    "encoder",
    "either",
    "maybe",
    "validation",
    # Sum types
    "Maybe",
    "Just",
    "Nothing",
    "NOTHING",
    "to_maybe",
    "Either",
    "Left",
    "Right",
    "Validation",
    "Valid",
    "Invalid",
    # Converters
    "Decoder",
    "Encoder",
    "Codec",
    "Case",
    # Errors
    "DecodeError",
    "DecodeFailure",
    "EncodeError",
    "format_path",
    "prefix_error",
    # Configuration
    "decoding_context",
    "is_strict",
    "MISSING",
]
