"""Built-in algorithms backed by zlib, bz2, lzma, brotli, zstandard and LZW."""

from __future__ import annotations

import zlib
from typing import TYPE_CHECKING

from pluggable_compression.algorithm import Algorithm
from pluggable_compression.compressors import (
    BROTLI_AVAILABLE,
    ZSTD_AVAILABLE,
    BrotliCompressor,
    BrotliDecompressor,
    Bz2Compressor,
    Bz2Decompressor,
    XzCompressor,
    XzDecompressor,
    ZlibCompressor,
    ZlibDecompressor,
    ZstdCompressor,
    ZstdDecompressor,
)
from pluggable_compression.errors import ConfigError
from pluggable_compression.lzw import LzwCompressor, LzwDecompressor, check_lit_width
from pluggable_compression.options import (
    DEFAULT_COMPRESSION,
    HUFFMAN_ONLY,
    Endian,
    OptionKind,
)

if TYPE_CHECKING:
    from pluggable_compression.registry import Registry


class LeveledAlgorithm(Algorithm):
    """Base for algorithms tunable by compression level only."""
    options = frozenset({OptionKind.LEVEL})
    min_level: int = 0
    max_level: int = 9
    default_level: int = DEFAULT_COMPRESSION

    def __init__(self) -> None:
        self.level = DEFAULT_COMPRESSION

    def _check_level(self, level: int) -> None:
        if isinstance(level, bool) or not isinstance(level, int):
            raise ConfigError(f"{self.name}: invalid compression level: {level!r}")
        if level != DEFAULT_COMPRESSION and not self.min_level <= level <= self.max_level:
            raise ConfigError(
                f"{self.name}: invalid compression level: {level} "
                f"(expected {self.min_level}..{self.max_level})"
            )

    def set_level(self, level: int) -> None:
        self._check_level(level)
        self.level = level

    def check_config(self) -> None:
        self._check_level(self.level)

    @property
    def effective_level(self) -> int:
        if self.level == DEFAULT_COMPRESSION:
            return self.default_level
        return self.level


class DeflateFamily(LeveledAlgorithm):
    """Deflate in a container chosen by ``wbits``."""
    min_level = HUFFMAN_ONLY
    wbits: int = zlib.MAX_WBITS

    def compressor(self) -> ZlibCompressor:
        if self.level == HUFFMAN_ONLY:
            return ZlibCompressor(
                level=zlib.Z_DEFAULT_COMPRESSION,
                wbits=self.wbits,
                strategy=zlib.Z_HUFFMAN_ONLY,
            )
        return ZlibCompressor(level=self.effective_level, wbits=self.wbits)

    def decompressor(self) -> ZlibDecompressor:
        return ZlibDecompressor(self.name, self.wbits)


class Gzip(DeflateFamily):
    name = "gzip"
    extension = ".gz"
    # 16 + 15: zlib writes the gzip header and trailer
    wbits = 16 + zlib.MAX_WBITS

    def decompressor(self) -> ZlibDecompressor:
        return ZlibDecompressor(self.name, self.wbits, members=True)


class Zlib(DeflateFamily):
    name = "zlib"
    extension = ".zlib"
    wbits = zlib.MAX_WBITS


class Flate(DeflateFamily):
    name = "flate"
    extension = ".deflate"
    # raw deflate, no header
    wbits = -zlib.MAX_WBITS


class Bzip2(LeveledAlgorithm):
    name = "bzip2"
    extension = ".bz2"
    min_level = 1
    default_level = 9

    def compressor(self) -> Bz2Compressor:
        return Bz2Compressor(self.effective_level)

    def decompressor(self) -> Bz2Decompressor:
        return Bz2Decompressor()


class Xz(LeveledAlgorithm):
    name = "xz"
    extension = ".xz"
    default_level = 6

    def compressor(self) -> XzCompressor:
        return XzCompressor(self.effective_level)

    def decompressor(self) -> XzDecompressor:
        return XzDecompressor()


class Brotli(LeveledAlgorithm):
    name = "brotli"
    extension = ".br"
    max_level = 11
    default_level = 4

    def compressor(self) -> BrotliCompressor:
        return BrotliCompressor(self.effective_level)

    def decompressor(self) -> BrotliDecompressor:
        return BrotliDecompressor()


class Zstd(LeveledAlgorithm):
    name = "zstd"
    extension = ".zst"
    min_level = 1
    max_level = 22
    default_level = 3

    def compressor(self) -> ZstdCompressor:
        return ZstdCompressor(self.effective_level)

    def decompressor(self) -> ZstdDecompressor:
        return ZstdDecompressor()


class Lzw(Algorithm):
    """LZW with configurable literal width and bit order."""
    name = "lzw"
    extension = ".lzw"
    options = frozenset({OptionKind.LIT_WIDTH, OptionKind.ENDIAN})

    def __init__(self) -> None:
        self.lit_width = 8
        self.endian = Endian.LITTLE

    def set_lit_width(self, width: int) -> None:
        check_lit_width(width)
        self.lit_width = width

    def set_endian(self, endian: Endian) -> None:
        try:
            self.endian = Endian(endian)
        except ValueError as exc:
            raise ConfigError(f"lzw: invalid endian: {endian!r}") from exc

    def check_config(self) -> None:
        check_lit_width(self.lit_width)

    def compressor(self) -> LzwCompressor:
        return LzwCompressor(self.lit_width, self.endian)

    def decompressor(self) -> LzwDecompressor:
        return LzwDecompressor(self.lit_width, self.endian)


def builtin_algorithms() -> list[Algorithm]:
    algorithms: list[Algorithm] = [Gzip(), Zlib(), Flate(), Bzip2(), Xz(), Lzw()]
    if BROTLI_AVAILABLE:
        algorithms.append(Brotli())
    if ZSTD_AVAILABLE:
        algorithms.append(Zstd())
    return algorithms


def register_builtins(registry: Registry) -> None:
    """Register every built-in algorithm whose codec library is importable."""
    for algorithm in builtin_algorithms():
        registry.register(algorithm.name, algorithm)
