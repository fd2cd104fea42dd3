"""
MSB-first bit packing on top of plain byte buffers.

Neither class keeps track of how many *meaningful* bits a stream holds; the
last byte written by BitWriter.flush() is zero padded, so readers must know
from elsewhere where the data ends.
"""


### BIT WRITER ###
class BitWriter:
    """Packs single bits into bytes and appends them to ``out``."""

    def __init__(self, out=None):
        # The caller may append aligned bytes to ``out`` between a flush()
        # and the next write.
        self.out = out if out is not None else bytearray()
        self.buffer = 0
        self.bit_count = 0

    def write_bit(self, bit):
        self.buffer = (self.buffer << 1) | (bit & 1)
        self.bit_count += 1
        if self.bit_count == 8:
            self.out.append(self.buffer)
            self.buffer = 0
            self.bit_count = 0

    def write_bits(self, value, width):
        """Write the lowest ``width`` bits of ``value``, most significant first."""
        for shift in range(width - 1, -1, -1):
            self.write_bit((value >> shift) & 1)

    def write_code(self, code):
        """Write a code given as a string of '0' and '1' characters."""
        for bit in code:
            self.write_bit(1 if bit == "1" else 0)

    def flush(self):
        """Pad a partial byte with zero bits and emit it. No-op when aligned."""
        if self.bit_count > 0:
            self.out.append(self.buffer << (8 - self.bit_count))
            self.buffer = 0
            self.bit_count = 0
        return self.out


### BIT READER ###
class BitReader:
    """Reads bits MSB-first from a bytes-like object, one byte at a time."""

    def __init__(self, data):
        self.data = memoryview(data)
        self.position = 0
        self.buffer = 0
        self.bit_count = 0

    def read_bit(self):
        """Return the next bit, or None once the underlying bytes are used up."""
        if self.bit_count == 0:
            if self.position >= len(self.data):
                return None
            self.buffer = self.data[self.position]
            self.position += 1
            self.bit_count = 8
        self.bit_count -= 1
        return (self.buffer >> self.bit_count) & 1

    def read_bits(self, width):
        value = 0
        for _ in range(width):
            bit = self.read_bit()
            if bit is None:
                return None
            value = (value << 1) | bit
        return value

    def align(self):
        """Drop whatever is left of the current byte (it is padding)."""
        self.bit_count = 0

    def read_bytes(self, size):
        """Return the next ``size`` whole bytes, or None if fewer remain."""
        self.align()
        end = self.position + size
        if end > len(self.data):
            return None
        chunk = self.data[self.position:end].tobytes()
        self.position = end
        return chunk
