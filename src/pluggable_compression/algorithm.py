from __future__ import annotations

import io
from abc import ABC, abstractmethod
from typing import Any

from pluggable_compression.compressors import Compressor, Decompressor
from pluggable_compression.errors import UnsupportedOptionError
from pluggable_compression.options import Endian, OptionKind
from pluggable_compression.stream import DEFAULT_CHUNK_SIZE, Decoder, Encoder
from pluggable_compression.types import Sink, Source


class Algorithm(ABC):
    """
    A named compression scheme and its current configuration.

    Registered algorithms act as prototypes: callers obtain their own
    configured copy through :meth:`Registry.construct`. Subclasses declare the
    tunables they accept in ``options`` and override the matching setters;
    the default setters raise :class:`UnsupportedOptionError`.
    """
    name: str = ""
    extension: str = ""
    options: frozenset[OptionKind] = frozenset()

    def new_instance(self) -> Algorithm:
        """Return an independent, default-configured instance."""
        return type(self)()

    def ext(self) -> str:
        return self.extension

    def supports(self, kind: OptionKind) -> bool:
        return kind in self.options

    def check_config(self) -> None:
        """Raise :class:`ConfigError` if the configuration is unusable."""

    @abstractmethod
    def compressor(self) -> Compressor:
        """Build a codec compressor for the current configuration."""
        raise NotImplementedError

    @abstractmethod
    def decompressor(self) -> Decompressor:
        """Build a codec decompressor for the current configuration."""
        raise NotImplementedError

    def new_encoder(self, sink: Sink) -> Encoder:
        self.check_config()
        return Encoder(self.compressor(), sink)

    def new_decoder(self, source: Source, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Decoder:
        self.check_config()
        return Decoder(self.decompressor(), source, chunk_size)

    def encode(self, data: bytes) -> bytes:
        return encode_all(self, data)

    def decode(self, data: bytes) -> bytes:
        return decode_all(self, data)

    def set_option(self, kind: OptionKind, value: Any) -> None:
        setters = {
            OptionKind.LEVEL: self.set_level,
            OptionKind.LIT_WIDTH: self.set_lit_width,
            OptionKind.ENDIAN: self.set_endian,
        }
        setters[OptionKind(kind)](value)

    def set_level(self, level: int) -> None:
        raise UnsupportedOptionError(self.name, OptionKind.LEVEL.value)

    def set_lit_width(self, width: int) -> None:
        raise UnsupportedOptionError(self.name, OptionKind.LIT_WIDTH.value)

    def set_endian(self, endian: Endian) -> None:
        raise UnsupportedOptionError(self.name, OptionKind.ENDIAN.value)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


def encode_all(algorithm: Algorithm, data: bytes) -> bytes:
    """Compress ``data`` in one pass through a stream encoder."""
    buf = io.BytesIO()
    encoder = algorithm.new_encoder(buf)
    encoder.write(data)
    encoder.close()
    return buf.getvalue()


def decode_all(algorithm: Algorithm, data: bytes) -> bytes:
    """Decompress ``data`` in one pass through a stream decoder."""
    with algorithm.new_decoder(io.BytesIO(data)) as decoder:
        return decoder.read()
