import bz2
import gzip
import lzma
import zlib

import pytest

import pluggable_compression as pc
from pluggable_compression import (
    ConfigError,
    Endian,
    FormatError,
    UnsupportedOptionError,
    with_endian,
    with_level,
    with_lit_width,
)
from pluggable_compression.algorithms import Gzip, Lzw, builtin_algorithms

try:
    import brotli  # type: ignore[import-untyped]

    BROTLI_AVAILABLE = True
except ImportError:
    BROTLI_AVAILABLE = False

try:
    import zstandard

    ZSTD_AVAILABLE = True
except ImportError:
    ZSTD_AVAILABLE = False


PAYLOADS = [
    b"",
    b"a",
    b"Hello, World!" * 10,
    bytes(range(256)) * 20,
    b"abracadabra " * 2000,
]


@pytest.fixture(params=pc.algorithms())
def name(request):
    return request.param


@pytest.mark.parametrize("payload", PAYLOADS, ids=lambda p: f"{len(p)}B")
def test_round_trip(name, payload):
    encoded = pc.encode(name, payload)
    assert pc.decode(name, encoded) == payload


def test_extensions():
    extensions = {a.name: a.ext() for a in builtin_algorithms()}
    assert extensions["gzip"] == ".gz"
    assert extensions["zlib"] == ".zlib"
    assert extensions["flate"] == ".deflate"
    assert extensions["bzip2"] == ".bz2"
    assert extensions["xz"] == ".xz"
    assert extensions["lzw"] == ".lzw"


def test_new_instance_does_not_share_configuration():
    prototype = pc.default_registry.lookup("gzip")
    configured = pc.new_algorithm("gzip", with_level(pc.BEST_SPEED))
    assert configured.level == pc.BEST_SPEED
    assert prototype.level == pc.DEFAULT_COMPRESSION
    assert prototype.new_instance().level == pc.DEFAULT_COMPRESSION


def test_output_is_readable_by_standard_library():
    data = b"interop " * 100
    assert gzip.decompress(pc.encode("gzip", data)) == data
    assert zlib.decompress(pc.encode("zlib", data)) == data
    assert zlib.decompress(pc.encode("flate", data), -zlib.MAX_WBITS) == data
    assert bz2.decompress(pc.encode("bzip2", data)) == data
    assert lzma.decompress(pc.encode("xz", data)) == data


@pytest.mark.skipif(not BROTLI_AVAILABLE, reason="brotli package not installed")
def test_brotli_interop():
    data = b"interop " * 100
    assert brotli.decompress(pc.encode("brotli", data, with_level(11))) == data
    assert pc.decode("brotli", brotli.compress(data)) == data


@pytest.mark.skipif(not ZSTD_AVAILABLE, reason="zstandard package not installed")
def test_zstd_interop():
    data = b"interop " * 100
    dctx = zstandard.ZstdDecompressor()
    assert dctx.decompressobj().decompress(pc.encode("zstd", data)) == data
    assert pc.decode("zstd", zstandard.ZstdCompressor().compress(data)) == data


@pytest.mark.parametrize(
    "level",
    [pc.NO_COMPRESSION, pc.BEST_SPEED, pc.BEST_COMPRESSION, pc.DEFAULT_COMPRESSION, pc.HUFFMAN_ONLY],
)
@pytest.mark.parametrize("algorithm", ["gzip", "zlib", "flate"])
def test_deflate_levels(algorithm, level):
    data = b"level test " * 500
    encoded = pc.encode(algorithm, data, with_level(level))
    assert pc.decode(algorithm, encoded) == data


def test_no_compression_is_larger_than_best():
    data = b"squeeze me " * 1000
    stored = pc.encode("zlib", data, with_level(pc.NO_COMPRESSION))
    best = pc.encode("zlib", data, with_level(pc.BEST_COMPRESSION))
    assert len(stored) > len(data)
    assert len(best) < len(stored)


@pytest.mark.parametrize(
    ("algorithm", "level"),
    [("gzip", 10), ("gzip", -3), ("bzip2", 0), ("xz", 10), ("zlib", "9")],
)
def test_level_out_of_range(algorithm, level):
    with pytest.raises(ConfigError):
        pc.new_algorithm(algorithm, with_level(level))


def test_invalid_level_set_directly_fails_at_encoder():
    algorithm = Gzip()
    algorithm.level = 42
    with pytest.raises(ConfigError):
        algorithm.new_encoder(None)


@pytest.mark.parametrize("algorithm", ["gzip", "zlib", "flate", "bzip2", "xz"])
@pytest.mark.parametrize(
    "option", [with_lit_width(8), with_endian(Endian.BIG)], ids=["lit_width", "endian"]
)
def test_leveled_algorithms_reject_lzw_options(algorithm, option):
    with pytest.raises(UnsupportedOptionError) as exc_info:
        pc.new_algorithm(algorithm, option)
    assert exc_info.value.algorithm == algorithm
    assert exc_info.value.option == option.kind.value


def test_lzw_rejects_level():
    with pytest.raises(UnsupportedOptionError) as exc_info:
        pc.new_algorithm("lzw", with_level(5))
    assert exc_info.value.algorithm == "lzw"
    assert exc_info.value.option == "level"


def test_lzw_options_are_applied():
    algorithm = pc.new_algorithm("lzw", with_lit_width(7), with_endian(Endian.BIG))
    assert isinstance(algorithm, Lzw)
    assert algorithm.lit_width == 7
    assert algorithm.endian is Endian.BIG


@pytest.mark.parametrize("width", [1, 9, 0])
def test_lzw_lit_width_out_of_range(width):
    with pytest.raises(ConfigError):
        pc.new_algorithm("lzw", with_lit_width(width))


def test_lzw_invalid_endian():
    with pytest.raises(ConfigError):
        pc.new_algorithm("lzw", with_endian(7))


def test_lzw_configuration_must_match_to_decode():
    data = b"mismatched order " * 50
    encoded = pc.encode("lzw", data, with_endian(Endian.BIG))
    assert pc.decode("lzw", encoded, with_endian(Endian.BIG)) == data
    with pytest.raises(FormatError):
        pc.decode("lzw", encoded, with_endian(Endian.LITTLE))


@pytest.mark.parametrize(
    "algorithm", ["gzip", "zlib", "flate", "bzip2", "xz", "lzw"]
)
def test_truncated_input(algorithm):
    encoded = pc.encode(algorithm, b"truncate me " * 200)
    with pytest.raises(FormatError):
        pc.decode(algorithm, encoded[: len(encoded) // 2])


@pytest.mark.parametrize("algorithm", ["gzip", "zlib", "bzip2", "xz", "lzw"])
def test_empty_input_is_not_a_stream(algorithm):
    with pytest.raises(FormatError):
        pc.decode(algorithm, b"")


@pytest.mark.parametrize("algorithm", ["gzip", "zlib", "bzip2", "xz"])
def test_bad_header(algorithm):
    with pytest.raises(FormatError) as exc_info:
        pc.decode(algorithm, b"definitely not compressed data")
    assert exc_info.value.__cause__ is not None


def test_lzw_invalid_code():
    with pytest.raises(FormatError, match="invalid code"):
        pc.decode("lzw", b"\xff\xff\xff\xff")


@pytest.mark.parametrize("algorithm", ["zlib", "bzip2", "xz", "lzw"])
def test_trailing_data(algorithm):
    encoded = pc.encode(algorithm, b"payload")
    with pytest.raises(FormatError, match="trailing data"):
        pc.decode(algorithm, encoded + b"garbage")


def test_gzip_concatenated_members():
    encoded = pc.encode("gzip", b"first ") + pc.encode("gzip", b"second")
    assert pc.decode("gzip", encoded) == b"first second"


def test_gzip_garbage_after_member():
    encoded = pc.encode("gzip", b"payload")
    with pytest.raises(FormatError):
        pc.decode("gzip", encoded + b"garbage")
