"""Pluggable compression: pick a codec by name, configure it with options.

>>> import pluggable_compression as pc
>>> gz = pc.new_algorithm("gzip", pc.with_level(pc.BEST_SPEED))
>>> gz.decode(gz.encode(b"hello")) == b"hello"
True

Algorithms register themselves in :data:`default_registry` at import time.
Code that needs an isolated set of algorithms creates its own
:class:`Registry`.
"""

from __future__ import annotations

from pluggable_compression.algorithm import Algorithm, decode_all, encode_all
from pluggable_compression.algorithms import register_builtins
from pluggable_compression.errors import (
    CompressionError,
    ConfigError,
    FormatError,
    UnregisteredAlgorithmError,
    UnsupportedOptionError,
)
from pluggable_compression.options import (
    BEST_COMPRESSION,
    BEST_SPEED,
    DEFAULT_COMPRESSION,
    HUFFMAN_ONLY,
    NO_COMPRESSION,
    Endian,
    Option,
    OptionKind,
    with_endian,
    with_level,
    with_lit_width,
    with_order,
)
from pluggable_compression.registry import Registry
from pluggable_compression.stream import Decoder, Encoder

__all__ = [
    "BEST_COMPRESSION",
    "BEST_SPEED",
    "DEFAULT_COMPRESSION",
    "HUFFMAN_ONLY",
    "NO_COMPRESSION",
    "Algorithm",
    "CompressionError",
    "ConfigError",
    "Decoder",
    "Encoder",
    "Endian",
    "FormatError",
    "Option",
    "OptionKind",
    "Registry",
    "UnregisteredAlgorithmError",
    "UnsupportedOptionError",
    "algorithms",
    "decode",
    "decode_all",
    "default_registry",
    "encode",
    "encode_all",
    "new_algorithm",
    "new_decoder",
    "new_encoder",
    "register",
    "registered",
    "with_endian",
    "with_level",
    "with_lit_width",
    "with_order",
]

default_registry = Registry()
register_builtins(default_registry)

register = default_registry.register
new_algorithm = default_registry.construct
registered = default_registry.require_registered
new_encoder = default_registry.new_encoder
new_decoder = default_registry.new_decoder
encode = default_registry.encode
decode = default_registry.decode


def algorithms() -> list[str]:
    """Names of the algorithms in the default registry."""
    return sorted(default_registry.names())
