"""Exceptions raised by the Huffman codec and the file helpers."""


class CompressorError(Exception):
    """Base class for every error raised by file_compressor."""


class CorruptStreamError(CompressorError):
    """The compressed data ended early or does not describe a valid stream."""


class CompressorIOError(CompressorError, OSError):
    """A source file could not be read or a destination could not be written."""

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path

    def __str__(self):
        if self.path is None:
            return self.args[0]
        return f"{self.args[0]}: {self.path}"


class InputTooLargeError(CompressorError, ValueError):
    """The input needs a count that does not fit in the 32-bit header field."""


class OutputTooLargeError(CompressorError, ValueError):
    """Decompressing would produce more bytes than the caller allows."""
