import bz2
import lzma
import zlib
from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable

from pluggable_compression.errors import FormatError

try:
    import brotli
except ImportError:
    brotli = None

try:
    import zstandard
except ImportError:
    zstandard = None

BROTLI_AVAILABLE = brotli is not None
ZSTD_AVAILABLE = zstandard is not None


@runtime_checkable
class Compressor(Protocol):
    """
    Incremental compressor. ``flush`` finalizes the stream and returns the
    trailing bytes; the compressor must not be used afterwards.
    """
    def compress(self, data: bytes) -> bytes: ...

    def flush(self) -> bytes: ...


@runtime_checkable
class Decompressor(Protocol):
    """
    Incremental decompressor. ``eof`` turns true once the end-of-stream marker
    has been decoded. ``flush`` is called once the input is exhausted and
    returns any output still held back.
    """
    eof: bool

    def decompress(self, data: bytes) -> bytes: ...

    def flush(self) -> bytes: ...


class BaseCompressor(ABC):
    @abstractmethod
    def compress(self, data: bytes) -> bytes: ...

    @abstractmethod
    def flush(self) -> bytes: ...


class BaseDecompressor(ABC):
    """
    Helper base class for decompressors.

    Subclasses implement ``_decompress`` and keep ``eof``/``unused_data`` up to
    date. Codec failures are reported as :class:`FormatError`, as is any data
    following the end-of-stream marker.
    """
    name: str = ""
    codec_errors: tuple[type[Exception], ...] = ()

    def __init__(self) -> None:
        self.eof = False
        self.unused_data = b""

    @abstractmethod
    def _decompress(self, data: bytes) -> bytes: ...

    def decompress(self, data: bytes) -> bytes:
        if self.eof:
            if data:
                raise FormatError(f"{self.name}: trailing data after end of stream")
            return b""
        try:
            out = self._decompress(data)
        except self.codec_errors as exc:
            raise FormatError(f"{self.name}: {exc}") from exc
        if self.eof and self.unused_data:
            raise FormatError(f"{self.name}: trailing data after end of stream")
        return out

    def flush(self) -> bytes:
        return b""


class ZlibCompressor(BaseCompressor):
    """
    Deflate compressor using zlib. ``wbits`` selects the container:
    31 for gzip, 15 for zlib, -15 for raw deflate.
    """
    def __init__(
        self, level: int = zlib.Z_DEFAULT_COMPRESSION, wbits: int = zlib.MAX_WBITS,
        strategy: int = zlib.Z_DEFAULT_STRATEGY,
    ) -> None:
        self._compressobj = zlib.compressobj(
            level=level, method=zlib.DEFLATED, wbits=wbits, strategy=strategy
        )

    def compress(self, data: bytes) -> bytes:
        return self._compressobj.compress(data)

    def flush(self) -> bytes:
        return self._compressobj.flush()


class ZlibDecompressor(BaseDecompressor):
    codec_errors = (zlib.error,)

    def __init__(self, name: str, wbits: int = zlib.MAX_WBITS, members: bool = False) -> None:
        """
        :param name: Algorithm name used in error messages.
        :param wbits: Container selector, as for :class:`ZlibCompressor`.
        :param members: Accept concatenated streams (gzip members).
        """
        super().__init__()
        self.name = name
        self._wbits = wbits
        self._members = members
        self._decompressobj = zlib.decompressobj(wbits)

    def _decompress(self, data: bytes) -> bytes:
        out = self._decompressobj.decompress(data)
        while self._members and self._decompressobj.eof and self._decompressobj.unused_data:
            rest = self._decompressobj.unused_data
            self._decompressobj = zlib.decompressobj(self._wbits)
            out += self._decompressobj.decompress(rest)
        self.eof = self._decompressobj.eof
        self.unused_data = self._decompressobj.unused_data
        return out

    def decompress(self, data: bytes) -> bytes:
        if self._members and self.eof and data:
            # Another member follows the one just finished.
            self._decompressobj = zlib.decompressobj(self._wbits)
            self.eof = False
        return super().decompress(data)


class Bz2Compressor(BaseCompressor):
    def __init__(self, level: int = 9) -> None:
        self._compressor = bz2.BZ2Compressor(level)

    def compress(self, data: bytes) -> bytes:
        return self._compressor.compress(data)

    def flush(self) -> bytes:
        return self._compressor.flush()


class Bz2Decompressor(BaseDecompressor):
    name = "bzip2"
    # bz2 reports corrupt streams as OSError
    codec_errors = (OSError, EOFError)

    def __init__(self) -> None:
        super().__init__()
        self._decompressor = bz2.BZ2Decompressor()

    def _decompress(self, data: bytes) -> bytes:
        out = self._decompressor.decompress(data)
        self.eof = self._decompressor.eof
        self.unused_data = self._decompressor.unused_data
        return out


class XzCompressor(BaseCompressor):
    def __init__(self, level: int = 6) -> None:
        self._compressor = lzma.LZMACompressor(format=lzma.FORMAT_XZ, preset=level)

    def compress(self, data: bytes) -> bytes:
        return self._compressor.compress(data)

    def flush(self) -> bytes:
        return self._compressor.flush()


class XzDecompressor(BaseDecompressor):
    name = "xz"
    codec_errors = (lzma.LZMAError, EOFError)

    def __init__(self) -> None:
        super().__init__()
        self._decompressor = lzma.LZMADecompressor(format=lzma.FORMAT_XZ)

    def _decompress(self, data: bytes) -> bytes:
        out = self._decompressor.decompress(data)
        self.eof = self._decompressor.eof
        self.unused_data = self._decompressor.unused_data
        return out


class BrotliCompressor(BaseCompressor):
    def __init__(self, level: int = 4) -> None:
        if brotli is None:
            raise ImportError(
                "brotli extra is required. Install with: pip install 'pluggable-compression[brotli]'"
            )
        self._compressor = brotli.Compressor(quality=level)

    def compress(self, data: bytes) -> bytes:
        return self._compressor.process(data)

    def flush(self) -> bytes:
        return self._compressor.finish()


class BrotliDecompressor(BaseDecompressor):
    name = "brotli"

    def __init__(self) -> None:
        if brotli is None:
            raise ImportError(
                "brotli extra is required. Install with: pip install 'pluggable-compression[brotli]'"
            )
        super().__init__()
        self.codec_errors = (brotli.error,)
        self._decompressor = brotli.Decompressor()

    def _decompress(self, data: bytes) -> bytes:
        out = self._decompressor.process(data)
        self.eof = self._decompressor.is_finished()
        return out


class ZstdCompressor(BaseCompressor):
    def __init__(self, level: int = 3) -> None:
        if zstandard is None:
            raise ImportError(
                "zstandard extra is required. Install with: pip install 'pluggable-compression[zstd]'"
            )

        # one compression context per stream; compressobj() shares its parent's
        self._compressor = zstandard.ZstdCompressor(level=level).compressobj()

    def compress(self, data: bytes) -> bytes:
        return self._compressor.compress(data)

    def flush(self) -> bytes:
        return self._compressor.flush()


class ZstdDecompressor(BaseDecompressor):
    name = "zstd"

    def __init__(self) -> None:
        if zstandard is None:
            raise ImportError(
                "zstandard extra is required. Install with: pip install 'pluggable-compression[zstd]'"
            )
        super().__init__()
        self.codec_errors = (zstandard.ZstdError,)
        self._decompressor = zstandard.ZstdDecompressor().decompressobj()

    def _decompress(self, data: bytes) -> bytes:
        out = self._decompressor.decompress(data)
        self.eof = self._decompressor.eof
        self.unused_data = self._decompressor.unused_data
        return out
