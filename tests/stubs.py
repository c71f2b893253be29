"""Test algorithms: identity passthrough and byte reversal."""

from pluggable_compression import Algorithm


class PassthroughCompressor:
    def compress(self, data: bytes) -> bytes:
        return bytes(data)

    def flush(self) -> bytes:
        return b""


class PassthroughDecompressor:
    eof = True

    def decompress(self, data: bytes) -> bytes:
        return bytes(data)

    def flush(self) -> bytes:
        return b""


class ReverseCompressor:
    def __init__(self):
        self.buffer = bytearray()

    def compress(self, data: bytes) -> bytes:
        self.buffer += data
        return b""

    def flush(self) -> bytes:
        return bytes(reversed(self.buffer))


class ReverseDecompressor(ReverseCompressor):
    eof = True

    def decompress(self, data: bytes) -> bytes:
        return self.compress(data)


class IdentityAlgorithm(Algorithm):
    name = "id"
    extension = ".id"

    def compressor(self):
        return PassthroughCompressor()

    def decompressor(self):
        return PassthroughDecompressor()


class ReverseAlgorithm(Algorithm):
    name = "rev"
    extension = ".rev"

    def compressor(self):
        return ReverseCompressor()

    def decompressor(self):
        return ReverseDecompressor()


class RecordingOption:
    """Option double that records whether it was applied."""

    def __init__(self, kind, fail_with=None, calls=None):
        self.kind = kind
        self.value = None
        self.fail_with = fail_with
        self.calls = calls if calls is not None else []
        self.applied = False

    def apply(self, algorithm):
        self.applied = True
        self.calls.append(self)
        if self.fail_with is not None:
            raise self.fail_with
