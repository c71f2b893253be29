"""
LZW codec using the bit layout of Go's ``compress/lzw`` package.

Codes start ``lit_width + 1`` bits wide and grow up to 12 bits. A stream opens
with a clear code and ends with an end-of-stream code; the encoder emits
another clear code whenever the code table fills up. Codes are packed into
bytes either least significant bits first (GIF) or most significant bits
first (TIFF, PDF).
"""

from __future__ import annotations

from pluggable_compression.compressors import BaseCompressor, BaseDecompressor
from pluggable_compression.errors import ConfigError, FormatError
from pluggable_compression.options import Endian

MIN_LIT_WIDTH = 2
MAX_LIT_WIDTH = 8
MAX_WIDTH = 12
MAX_CODE = (1 << MAX_WIDTH) - 1


def check_lit_width(width: int) -> None:
    if not isinstance(width, int) or not MIN_LIT_WIDTH <= width <= MAX_LIT_WIDTH:
        raise ConfigError(f"lzw: lit_width {width!r} out of range")


class LzwCompressor(BaseCompressor):
    def __init__(self, lit_width: int = 8, endian: Endian = Endian.LITTLE) -> None:
        check_lit_width(lit_width)
        self._lit_width = lit_width
        self._endian = Endian(endian)
        self._clear = 1 << lit_width
        self._width = lit_width + 1
        self._hi = self._clear + 1
        self._overflow = 1 << (lit_width + 1)
        # (prefix code << 8 | literal) -> code
        self._table: dict[int, int] = {}
        self._saved_code: int | None = None
        self._bits = 0
        self._nbits = 0
        self._out = bytearray()

    def _write_code(self, code: int) -> None:
        if self._endian is Endian.LITTLE:
            self._bits |= code << self._nbits
            self._nbits += self._width
            while self._nbits >= 8:
                self._out.append(self._bits & 0xFF)
                self._bits >>= 8
                self._nbits -= 8
        else:
            self._bits = (self._bits << self._width) | code
            self._nbits += self._width
            while self._nbits >= 8:
                self._nbits -= 8
                self._out.append((self._bits >> self._nbits) & 0xFF)
            self._bits &= (1 << self._nbits) - 1

    def _inc_hi(self) -> bool:
        """Advance the next implied code. Returns False if the table was reset."""
        self._hi += 1
        if self._hi == self._overflow:
            self._width += 1
            self._overflow <<= 1
        if self._hi == MAX_CODE:
            self._write_code(self._clear)
            self._width = self._lit_width + 1
            self._hi = self._clear + 1
            self._overflow = self._clear << 1
            self._table.clear()
            return False
        return True

    def _take(self) -> bytes:
        out = bytes(self._out)
        self._out.clear()
        return out

    def compress(self, data: bytes) -> bytes:
        data = bytes(data)
        if not data:
            return b""

        max_lit = (1 << self._lit_width) - 1
        if max_lit != 0xFF and max(data) > max_lit:
            raise ConfigError("lzw: input byte too large for the lit_width")

        code = self._saved_code
        rest = memoryview(data)
        if code is None:
            # first write: a clear code, then a literal
            self._write_code(self._clear)
            code, rest = data[0], rest[1:]

        table = self._table
        for literal in rest:
            key = (code << 8) | literal
            hit = table.get(key)
            if hit is not None:
                code = hit
                continue
            self._write_code(code)
            code = literal
            if self._inc_hi():
                table[key] = self._hi

        self._saved_code = code
        return self._take()

    def flush(self) -> bytes:
        if self._saved_code is not None:
            self._write_code(self._saved_code)
            self._inc_hi()
        else:
            self._write_code(self._clear)
        self._write_code(self._clear + 1)

        if self._nbits > 0:
            if self._endian is Endian.LITTLE:
                self._out.append(self._bits & 0xFF)
            else:
                self._out.append((self._bits << (8 - self._nbits)) & 0xFF)
        self._bits = 0
        self._nbits = 0
        return self._take()


class LzwDecompressor(BaseDecompressor):
    name = "lzw"

    def __init__(self, lit_width: int = 8, endian: Endian = Endian.LITTLE) -> None:
        check_lit_width(lit_width)
        super().__init__()
        self._lit_width = lit_width
        self._endian = Endian(endian)
        self._clear = 1 << lit_width
        self._eof_code = self._clear + 1
        self._width = lit_width + 1
        self._hi = self._eof_code
        self._overflow = 1 << self._width
        self._last: int | None = None
        self._table: dict[int, bytes] = {}
        self._bits = 0
        self._nbits = 0

    def _read_code(self) -> int:
        mask = (1 << self._width) - 1
        if self._endian is Endian.LITTLE:
            code = self._bits & mask
            self._bits >>= self._width
            self._nbits -= self._width
        else:
            self._nbits -= self._width
            code = (self._bits >> self._nbits) & mask
            self._bits &= (1 << self._nbits) - 1
        return code

    def _expand(self, code: int) -> bytes:
        if code < self._clear:
            return bytes((code,))
        entry = self._table.get(code)
        if entry is None:
            raise FormatError("lzw: invalid code")
        return entry

    def _decode(self, code: int, out: bytearray) -> None:
        if code == self._clear:
            self._width = self._lit_width + 1
            self._hi = self._eof_code
            self._overflow = 1 << self._width
            self._last = None
            self._table.clear()
            return
        if code == self._eof_code:
            self.eof = True
            return
        if code > self._hi:
            raise FormatError("lzw: invalid code")

        if code == self._hi and self._last is not None:
            # expands to the previous string plus its own first byte
            prev = self._expand(self._last)
            entry = prev + prev[:1]
        else:
            entry = self._expand(code)
        if self._last is not None:
            self._table[self._hi] = self._expand(self._last) + entry[:1]
        out += entry

        self._last = code
        self._hi += 1
        if self._hi >= self._overflow:
            if self._width == MAX_WIDTH:
                self._last = None
                self._hi -= 1
            else:
                self._width += 1
                self._overflow = 1 << self._width

    def _decompress(self, data: bytes) -> bytes:
        out = bytearray()
        for i, byte in enumerate(data):
            if self._endian is Endian.LITTLE:
                self._bits |= byte << self._nbits
            else:
                self._bits = (self._bits << 8) | byte
            self._nbits += 8
            while self._nbits >= self._width:
                self._decode(self._read_code(), out)
                if self.eof:
                    # leftover bits in the current byte are padding
                    self.unused_data = bytes(data[i + 1:])
                    return bytes(out)
        return bytes(out)
