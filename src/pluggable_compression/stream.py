from __future__ import annotations

import logging
from collections.abc import Iterator
from types import TracebackType

from pluggable_compression.compressors import Compressor, Decompressor
from pluggable_compression.errors import FormatError
from pluggable_compression.types import Sink, Source

log = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


class Encoder:
    """Writable stream that compresses everything written into ``sink``.

    The encoded output is only complete after :meth:`close`, which writes the
    codec's trailing bytes (final bits, checksums). The sink is left open.
    """

    def __init__(self, compressor: Compressor, sink: Sink) -> None:
        self.compressor = compressor
        self.sink = sink
        self.closed = False

    def write(self, data: bytes) -> int:
        if self.closed:
            raise ValueError("write to closed encoder")
        chunk = self.compressor.compress(data)
        if chunk:
            self.sink.write(chunk)
        return len(data)

    def flush(self) -> None:
        if self.closed:
            raise ValueError("flush of closed encoder")
        flush = getattr(self.sink, "flush", None)
        if flush is not None:
            flush()

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        tail = self.compressor.flush()
        if tail:
            self.sink.write(tail)
        log.debug("encoder finalized, wrote %d trailing bytes", len(tail))

    def __enter__(self) -> Encoder:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        # finalizing after a failure would write a misleading trailer
        if exc_type is None:
            self.close()
        else:
            self.closed = True


class Decoder:
    """Readable stream that decompresses data pulled from ``source``.

    Input ending before the codec's end-of-stream marker raises
    :class:`FormatError` rather than returning partial data. Errors raised by
    ``source`` itself are not wrapped.
    """

    def __init__(
        self,
        decompressor: Decompressor,
        source: Source,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self.decompressor = decompressor
        self.source = source
        self.chunk_size = chunk_size
        self.closed = False
        self._buffer = bytearray()
        self._exhausted = False

    def _fill(self) -> bool:
        """Decode one more chunk of input. Returns False at end of stream."""
        if self._exhausted:
            return False
        data = self.source.read(self.chunk_size)
        if not data:
            self._exhausted = True
            self._buffer += self.decompressor.flush()
            if not self.decompressor.eof:
                raise FormatError("unexpected end of stream")
            return False
        self._buffer += self.decompressor.decompress(data)
        return True

    def read(self, size: int = -1) -> bytes:
        if self.closed:
            raise ValueError("read from closed decoder")
        if size is None or size < 0:
            while self._fill():
                pass
            out = bytes(self._buffer)
            self._buffer.clear()
            return out

        while len(self._buffer) < size and self._fill():
            pass
        out = bytes(self._buffer[:size])
        del self._buffer[:size]
        return out

    def readall(self) -> bytes:
        return self.read()

    def __iter__(self) -> Iterator[bytes]:
        while True:
            chunk = self.read(self.chunk_size)
            if not chunk:
                return
            yield chunk

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._buffer.clear()

    def __enter__(self) -> Decoder:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
