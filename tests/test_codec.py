import struct

import pytest

from file_compressor import compress, decompress
from file_compressor.codec import MAX_COUNT, _pack_count
from file_compressor.errors import CorruptStreamError, InputTooLargeError, OutputTooLargeError


def test_empty_input():
    assert compress(b"") == b""
    assert decompress(b"") == b""


def test_compress_empty_idempotent():
    assert compress(b"") == compress(b"")


def test_single_symbol_container_layout():
    compressed = compress(b"A" * 5)
    # leaf marker, then 0x41, padded; then the count
    assert compressed == bytes([0b10100000, 0b10000000]) + struct.pack("<I", 5)
    assert decompress(compressed) == b"AAAAA"


def test_degenerate_alphabet_has_no_payload():
    data = b"\x00" * 10240
    compressed = compress(data)
    assert len(compressed) == 2 + 4
    assert struct.unpack("<I", compressed[2:])[0] == len(data)
    assert decompress(compressed) == data


def test_multi_symbol_count_is_payload_bits():
    # tree for b"aab": leaf b, leaf a -> "b"=0, "a"=1
    compressed = compress(b"aab")
    tree = compressed[:3]
    (count,) = struct.unpack("<I", compressed[3:7])
    assert count == 3
    assert len(compressed) == 3 + 4 + 1
    assert decompress(compressed) == b"aab"
    assert tree == bytes([0b01011000, 0b10101100, 0b00100000])


@pytest.mark.parametrize("data", [
    b"x",
    b"ab",
    b"abracadabra",
    bytes(range(256)),
    bytes(range(256)) * 4 + b"\xff" * 500,
    b"\x00\x01" * 1000 + b"\x02",
])
def test_roundtrip(data):
    assert decompress(compress(data)) == data


def test_roundtrip_random(random_bytes):
    assert decompress(compress(random_bytes)) == random_bytes


def test_roundtrip_text(sample_text):
    compressed = compress(sample_text)
    assert len(compressed) < len(sample_text)
    assert decompress(compressed) == sample_text


def test_accepts_bytearray_and_memoryview(sample_text):
    assert decompress(bytearray(compress(bytearray(sample_text)))) == sample_text
    assert decompress(memoryview(compress(memoryview(sample_text)))) == sample_text


def test_output_is_deterministic(random_bytes):
    assert compress(random_bytes) == compress(bytes(random_bytes))


def test_padding_bits_are_ignored():
    data = b"abracadabra"
    compressed = bytearray(compress(data))
    # payload of 23 bits leaves one padding bit in the last byte
    compressed[-1] |= 0x01
    assert decompress(bytes(compressed)) == data


@pytest.mark.parametrize("data", [b"A" * 5, b"abracadabra", bytes(range(256))])
def test_truncated_stream_raises(data):
    compressed = compress(data)
    for end in range(1, len(compressed)):
        with pytest.raises(CorruptStreamError):
            decompress(compressed[:end])


def test_payload_ending_mid_code_raises():
    compressed = bytearray(compress(b"abracadabra"))
    tree_and_count = len(compressed) - 3
    # two bits short: the walk stops inside the code of the final "r"
    (count,) = struct.unpack("<I", compressed[tree_and_count - 4:tree_and_count])
    compressed[tree_and_count - 4:tree_and_count] = struct.pack("<I", count - 2)
    with pytest.raises(CorruptStreamError):
        decompress(bytes(compressed))


def test_count_overflow_raises():
    assert _pack_count(MAX_COUNT, "count") == b"\xff\xff\xff\xff"
    with pytest.raises(InputTooLargeError):
        _pack_count(MAX_COUNT + 1, "count")


def test_max_output_single_symbol():
    container = bytes([0b10100000, 0b10000000]) + struct.pack("<I", 50 * 1024 * 1024)
    with pytest.raises(OutputTooLargeError):
        decompress(container, max_output=1024)
    assert decompress(compress(b"A" * 1024), max_output=1024) == b"A" * 1024


def test_max_output_multi_symbol(sample_text):
    compressed = compress(sample_text)
    with pytest.raises(OutputTooLargeError):
        decompress(compressed, max_output=len(sample_text) - 1)
    assert decompress(compressed, max_output=len(sample_text)) == sample_text
