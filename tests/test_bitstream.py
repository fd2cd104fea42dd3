from file_compressor.bitstream import BitReader, BitWriter


def test_writer_packs_msb_first():
    writer = BitWriter()
    for bit in (1, 0, 1, 0, 0, 0, 0, 1):
        writer.write_bit(bit)
    assert writer.out == bytearray([0b10100001])


def test_writer_does_not_emit_partial_byte_until_flush():
    writer = BitWriter()
    writer.write_bits(0b101, 3)
    assert writer.out == bytearray()
    writer.flush()
    assert writer.out == bytearray([0b10100000])


def test_flush_is_idempotent():
    writer = BitWriter()
    writer.write_bits(0xFF, 8)
    writer.flush()
    writer.flush()
    assert writer.out == bytearray([0xFF])


def test_writer_appends_to_shared_buffer():
    out = bytearray()
    writer = BitWriter(out)
    writer.write_bit(1)
    writer.flush()
    out += b"\x01\x02"
    writer.write_code("0000000011")
    writer.flush()
    assert bytes(out) == bytes([0x80, 0x01, 0x02, 0x00, 0xC0])


def test_reader_returns_none_when_exhausted():
    reader = BitReader(bytes([0b01000000]))
    assert [reader.read_bit() for _ in range(8)] == [0, 1, 0, 0, 0, 0, 0, 0]
    assert reader.read_bit() is None


def test_reader_read_bits_and_bytes():
    reader = BitReader(bytes([0b11000000, 0xAB, 0xCD, 0x7F]))
    assert reader.read_bits(2) == 0b11
    # rest of the first byte is padding
    assert reader.read_bytes(2) == b"\xab\xcd"
    assert reader.read_bits(8) == 0x7F
    assert reader.read_bits(1) is None


def test_reader_read_bytes_short():
    reader = BitReader(b"\x00\x01")
    assert reader.read_bytes(3) is None


def test_reader_empty():
    assert BitReader(b"").read_bit() is None
