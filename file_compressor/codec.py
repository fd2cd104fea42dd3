"""
compress() / decompress(): the Huffman container format.

Layout of a compressed stream::

    [serialized tree, zero padded to a byte boundary]
    [count: 4 bytes, unsigned, little-endian]
    [payload bits, zero padded]      (only when the tree has two or more leaves)

With a single-leaf tree ``count`` is the number of repetitions of that byte
and there is no payload. Otherwise ``count`` is the exact number of payload
bits. Empty input compresses to empty output and vice versa.
"""
import logging
import struct

from .bitstream import BitReader, BitWriter
from .errors import CorruptStreamError, InputTooLargeError, OutputTooLargeError
from .huffman import (
    build_huffman_tree,
    calculate_frequency,
    deserialize_tree,
    generate_codes,
    serialize_tree,
)

logger = logging.getLogger(__name__)

COUNT_FORMAT = "<I"
COUNT_SIZE = struct.calcsize(COUNT_FORMAT)
MAX_COUNT = 0xFFFFFFFF


def _pack_count(count, what):
    if count > MAX_COUNT:
        raise InputTooLargeError(
            f"{what} ({count}) does not fit in the {COUNT_SIZE}-byte count field"
        )
    return struct.pack(COUNT_FORMAT, count)


def _check_output_size(size, max_output):
    if max_output is not None and size > max_output:
        raise OutputTooLargeError(
            f"decompressed size exceeds the limit of {max_output} bytes"
        )


def compress(data):
    """Compress ``data`` (bytes-like) and return the container as bytes."""
    if not data:
        return b""

    frequency = calculate_frequency(data)
    root = build_huffman_tree(frequency)
    huffman_codes = generate_codes(root)

    out = bytearray()
    writer = BitWriter(out)
    serialize_tree(root, writer)
    writer.flush()

    if root.is_leaf:
        out += _pack_count(root.freq, "input length")
        logger.debug("single-symbol input: byte %d x %d", root.byte, root.freq)
        return bytes(out)

    total_bits = sum(freq * len(huffman_codes[byte]) for byte, freq in frequency.items())
    out += _pack_count(total_bits, "payload bit count")

    for byte in data:
        writer.write_code(huffman_codes[byte])
    writer.flush()

    logger.debug(
        "compressed %d bytes (%d symbols) into %d payload bits, %d bytes total",
        len(data), len(frequency), total_bits, len(out),
    )
    return bytes(out)


def decompress(data, max_output=None):
    """
    Reverse compress(). Raises CorruptStreamError on truncated or bad input.

    With ``max_output`` set, OutputTooLargeError is raised before more than
    that many bytes are produced.
    """
    if not data:
        return b""

    reader = BitReader(data)
    root = deserialize_tree(reader)

    raw_count = reader.read_bytes(COUNT_SIZE)
    if raw_count is None:
        raise CorruptStreamError("stream ended before the count field")
    (count,) = struct.unpack(COUNT_FORMAT, raw_count)

    if root.is_leaf:
        _check_output_size(count, max_output)
        return bytes([root.byte]) * count

    output = bytearray()
    current_node = root
    bits_read = 0

    # Terminate on bits consumed, never on symbols emitted.
    while bits_read < count:
        bit = reader.read_bit()
        if bit is None:
            raise CorruptStreamError(
                f"payload ended after {bits_read} of {count} bits"
            )
        bits_read += 1
        current_node = current_node.right if bit else current_node.left
        if current_node.is_leaf:
            output.append(current_node.byte)
            _check_output_size(len(output), max_output)
            current_node = root

    if current_node is not root:
        raise CorruptStreamError("payload ends in the middle of a code")

    logger.debug("decoded %d payload bits into %d bytes", count, len(output))
    return bytes(output)
