import io
from typing import BinaryIO
from ..channel import BitReader, BitWriter, EXHAUSTED, check_bit_count


class StreamBitReader(BitReader):
    def __init__(self, stream: BinaryIO):
        # reset() needs to go back to the start, so unseekable streams are read up front
        if not stream.seekable():
            stream = io.BytesIO(stream.read())
        self.stream = stream
        self.start = stream.tell()
        self.buffer = 0
        self.buffered_bits = 0
        self._bits_read = 0

    def read_bits(self, bits: int) -> int:
        check_bit_count(bits)

        while self.buffered_bits < bits:
            chunk = self.stream.read(1)
            if not chunk:
                return EXHAUSTED
            self.buffer = (self.buffer << 8) | chunk[0]
            self.buffered_bits += 8

        self.buffered_bits -= bits
        value = self.buffer >> self.buffered_bits
        self.buffer &= (1 << self.buffered_bits) - 1
        self._bits_read += bits

        return value

    def reset(self) -> None:
        self.stream.seek(self.start)
        self.buffer = 0
        self.buffered_bits = 0
        self._bits_read = 0

    @property
    def bits_read(self) -> int:
        return self._bits_read


class StreamBitWriter(BitWriter):
    def __init__(self, stream: BinaryIO):
        self.stream = stream
        self.buffer = 0
        self.buffered_bits = 0
        self.byte_array = bytearray()
        self._bits_written = 0

    def write_bits(self, bits: int, value: int) -> None:
        check_bit_count(bits)

        self.buffer = (self.buffer << bits) | (value & ((1 << bits) - 1))
        self.buffered_bits += bits
        self._bits_written += bits

        while self.buffered_bits >= 8:
            self.buffered_bits -= 8
            self.byte_array.append(self.buffer >> self.buffered_bits)
            self.buffer &= (1 << self.buffered_bits) - 1

        if len(self.byte_array) >= io.DEFAULT_BUFFER_SIZE:
            self._flush_bytes()

    def close(self) -> None:
        if self.buffered_bits:
            self.byte_array.append(self.buffer << (8 - self.buffered_bits))
            self.buffer = 0
            self.buffered_bits = 0
        self._flush_bytes()
        self.stream.flush()

    def _flush_bytes(self) -> None:
        self.stream.write(bytes(self.byte_array))
        self.byte_array.clear()

    @property
    def bits_written(self) -> int:
        return self._bits_written
