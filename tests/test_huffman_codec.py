import io
import random

import pytest

from channel import StreamBitReader, StreamBitWriter
from codec import Codec, FormatError, HuffmanCodec
from utils.types import HUFF_TREE, PSEUDO_EOF


@pytest.fixture
def codec():
    return HuffmanCodec()


def round_trip(codec: Codec, data: bytes) -> bytes:
    return codec.decompress_bytes(codec.compress_bytes(data))


def test_roundtrip_empty_input(codec):
    compressed = codec.compress_bytes(b"")

    # magic, then a single sentinel leaf: 1 100000000, then padding
    assert compressed == b"\xfa\xce\x82\x01\xc0\x00"
    assert codec.decompress_bytes(compressed) == b""


def test_roundtrip_example_string(codec):
    data = b"AAAAAAAABBBCCD"
    assert round_trip(codec, data) == data


def test_roundtrip_single_repeated_byte(codec):
    data = b"ZZZZZZZZZZ"
    out = round_trip(codec, data)

    assert len(out) == len(data)
    assert out == data


def test_roundtrip_all_bytes_once(codec):
    data = bytes(range(256))
    assert round_trip(codec, data) == data


def test_roundtrip_random_10kb(codec):
    rng = random.Random(1234)
    data = bytes(rng.getrandbits(8) for _ in range(10 * 1024))
    assert round_trip(codec, data) == data


@pytest.mark.parametrize("size", [1, 2, 3, 7, 8, 9])
def test_roundtrip_small_inputs(codec, size):
    rng = random.Random(size)
    data = bytes(rng.getrandbits(8) for _ in range(size))
    assert round_trip(codec, data) == data


def test_roundtrip_skewed_counts(codec):
    data = b"".join(bytes([symbol]) * (1 << symbol) for symbol in range(14))
    data += bytes([200]) + bytes([201])
    assert round_trip(codec, data) == data


def test_compression_shrinks_skewed_text(codec):
    data = b"abracadabra " * 500
    assert len(codec.compress_bytes(data)) < len(data) // 2


def test_output_starts_with_magic(codec):
    compressed = codec.compress_bytes(b"hello")
    assert int.from_bytes(compressed[:4], "big") == HUFF_TREE
    assert compressed[:4] == b"\xfa\xce\x82\x01"


def test_compression_is_deterministic():
    rng = random.Random(99)
    data = bytes(rng.choice(b"aabbbcdddd ") for _ in range(4000))

    assert HuffmanCodec().compress_bytes(data) == HuffmanCodec().compress_bytes(data)


def test_compress_with_channels():
    data = b"Hello World" * 50
    compressed = io.BytesIO()
    writer = StreamBitWriter(compressed)
    HuffmanCodec().compress(StreamBitReader(io.BytesIO(data)), writer)

    assert len(compressed.getvalue()) == (writer.bits_written + 7) // 8

    restored = io.BytesIO()
    HuffmanCodec().decompress(StreamBitReader(io.BytesIO(compressed.getvalue())), StreamBitWriter(restored))
    assert restored.getvalue() == data


def test_bad_magic_writes_no_output(codec):
    compressed = bytearray(codec.compress_bytes(b"Hello World" * 50))
    compressed[0] ^= 0xFF

    output = io.BytesIO()
    with pytest.raises(FormatError):
        codec.decompress(StreamBitReader(io.BytesIO(bytes(compressed))), StreamBitWriter(output))
    assert output.getvalue() == b""


def test_stream_shorter_than_magic(codec):
    with pytest.raises(FormatError):
        codec.decompress_bytes(b"\xfa\xce")


def test_foreign_input_is_a_value_error(codec):
    with pytest.raises(ValueError):
        codec.decompress_bytes(b"not a huffman stream")


def test_truncated_header(codec):
    compressed = codec.compress_bytes(b"hello world")
    with pytest.raises(FormatError):
        codec.decompress_bytes(compressed[:6])


def test_truncated_body(codec):
    compressed = codec.compress_bytes(b"This is a test" * 100)

    output = io.BytesIO()
    with pytest.raises(FormatError):
        codec.decompress(StreamBitReader(io.BytesIO(compressed[:-3])), StreamBitWriter(output))
    assert output.getvalue() == b""


def test_leaf_root_without_sentinel(codec):
    output = io.BytesIO()
    writer = StreamBitWriter(output)
    writer.write_bits(32, HUFF_TREE)
    writer.write_bits(1, 1)
    writer.write_bits(9, ord("A"))
    writer.close()

    with pytest.raises(FormatError):
        codec.decompress_bytes(output.getvalue())


def test_handcrafted_stream(codec):
    # Tree: internal(A, PSEUDO_EOF); body: A A PSEUDO_EOF -> 0 0 1
    output = io.BytesIO()
    writer = StreamBitWriter(output)
    writer.write_bits(32, HUFF_TREE)
    writer.write_bits(1, 0)
    writer.write_bits(1, 1)
    writer.write_bits(9, ord("A"))
    writer.write_bits(1, 1)
    writer.write_bits(9, PSEUDO_EOF)
    writer.write_bits(3, 0b001)
    writer.close()

    assert codec.decompress_bytes(output.getvalue()) == b"AA"


def test_verbose_statistics(capsys):
    codec = HuffmanCodec(verbose=True)
    compressed = codec.compress_bytes(b"AAAAAAAABBBCCD")
    compress_output = capsys.readouterr().out

    assert "HuffmanCodec verbose statistics:" in compress_output
    assert "- Distinct symbols (with PSEUDO_EOF): 5" in compress_output
    assert "- Header (in bits): 86" in compress_output

    assert codec.decompress_bytes(compressed) == b"AAAAAAAABBBCCD"
    decompress_output = capsys.readouterr().out
    assert "- Decoded (in bytes): 14" in decompress_output


def test_dump_tree(capsys):
    HuffmanCodec(dump_tree=True).compress_bytes(b"ZZZZZZZZZZ")
    out = capsys.readouterr().out

    assert "node weight: 11" in out
    assert "leaf value: 90, weight: 10" in out
