"""
File level wrappers around the codec.

Inputs are read whole. Output goes to a temporary file next to the target
and is moved into place with os.replace() only once the codec succeeded, so
a failed run never leaves a half-written file behind.
"""
import logging
import os
import tempfile

from .codec import compress, decompress
from .config import COMPRESSED_EXTENSION
from .errors import CompressorIOError

logger = logging.getLogger(__name__)


class CompressionStats:
    """Sizes before and after one compress/decompress run."""

    def __init__(self, original_size, compressed_size):
        self.original_size = original_size
        self.compressed_size = compressed_size

    @property
    def saved(self):
        return self.original_size - self.compressed_size

    @property
    def saved_percent(self):
        if not self.original_size:
            return 0
        return round(self.saved / self.original_size * 100, 2)

    def as_dict(self):
        return {
            "original_size": self.original_size,
            "compressed_size": self.compressed_size,
            "saved": self.saved,
            "saved_percent": self.saved_percent,
        }

    def __repr__(self):
        return (f"CompressionStats(original_size={self.original_size}, "
                f"compressed_size={self.compressed_size})")


def read_input(path):
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise CompressorIOError("cannot read input file", path) from e


def write_output_atomic(path, data):
    """Write ``data`` to ``path`` through a temporary file in the same directory."""
    directory = os.path.dirname(os.path.abspath(path))
    try:
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".tmp-", suffix=".part")
    except OSError as e:
        raise CompressorIOError("cannot write output file", path) from e

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except OSError as e:
        os.unlink(tmp_path)
        raise CompressorIOError("cannot write output file", path) from e


def default_compressed_path(input_path):
    return input_path + COMPRESSED_EXTENSION


def compress_file(input_path, output_path=None):
    """Compress ``input_path`` into ``output_path`` (default: input + '.huff')."""
    if output_path is None:
        output_path = default_compressed_path(input_path)

    data = read_input(input_path)
    compressed = compress(data)
    write_output_atomic(output_path, compressed)

    stats = CompressionStats(len(data), len(compressed))
    logger.info(
        "compressed %s (%dB) -> %s (%dB), %.2f%% saved",
        input_path, stats.original_size, output_path, stats.compressed_size,
        stats.saved_percent,
    )
    return stats


def decompress_file(input_path, output_path, max_output=None):
    """Decompress ``input_path`` into ``output_path``; nothing is written on error."""
    data = read_input(input_path)
    decompressed = decompress(data, max_output=max_output)
    write_output_atomic(output_path, decompressed)

    stats = CompressionStats(len(decompressed), len(data))
    logger.info(
        "decompressed %s (%dB) -> %s (%dB)",
        input_path, len(data), output_path, len(decompressed),
    )
    return stats
