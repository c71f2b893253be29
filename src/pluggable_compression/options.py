from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pluggable_compression.errors import UnsupportedOptionError

if TYPE_CHECKING:
    from pluggable_compression.algorithm import Algorithm

# Compression levels shared by the deflate family. Other codecs accept their
# own ranges; DEFAULT_COMPRESSION always selects the codec default.
NO_COMPRESSION = 0
BEST_SPEED = 1
BEST_COMPRESSION = 9
DEFAULT_COMPRESSION = -1
HUFFMAN_ONLY = -2


class OptionKind(str, enum.Enum):
    LEVEL = "level"
    LIT_WIDTH = "lit_width"
    ENDIAN = "endian"


class Endian(enum.IntEnum):
    """The order in which code bits are packed into bytes."""

    LITTLE = 0  # least significant bits first
    BIG = 1  # most significant bits first


@dataclass(frozen=True)
class Option:
    """A single tunable value waiting to be applied to an algorithm."""

    kind: OptionKind
    value: Any

    def apply(self, algorithm: Algorithm) -> None:
        algorithm.set_option(self.kind, self.value)


def with_level(level: int) -> Option:
    """Compression level. Supported by gzip, zlib, flate, bzip2, xz, brotli, zstd."""
    return Option(OptionKind.LEVEL, level)


def with_lit_width(width: int) -> Option:
    """Number of bits used for literal codes. Supported by lzw."""
    return Option(OptionKind.LIT_WIDTH, width)


def with_endian(endian: Endian) -> Option:
    """Bit packing order, LSB or MSB first. Supported by lzw."""
    return Option(OptionKind.ENDIAN, endian)


with_order = with_endian


def apply_options(algorithm: Algorithm, options: Iterable[Option]) -> None:
    """Apply options in order, stopping at the first one that fails.

    Support is checked before an option runs, so an algorithm lacking the
    tunable is never touched by it.
    """
    for option in options:
        if not algorithm.supports(option.kind):
            raise UnsupportedOptionError(algorithm.name, OptionKind(option.kind).value)
        option.apply(algorithm)
