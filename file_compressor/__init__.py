"""Static Huffman file compressor."""
from .codec import compress, decompress
from .errors import (
    CompressorError,
    CompressorIOError,
    CorruptStreamError,
    InputTooLargeError,
    OutputTooLargeError,
)
from .files import CompressionStats, compress_file, decompress_file

__version__ = "1.0.0"

__all__ = [
    "compress",
    "decompress",
    "compress_file",
    "decompress_file",
    "CompressionStats",
    "CompressorError",
    "CompressorIOError",
    "CorruptStreamError",
    "InputTooLargeError",
    "OutputTooLargeError",
]
