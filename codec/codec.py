import io
from abc import ABC, abstractmethod
from channel import BitReader, BitWriter, StreamBitReader, StreamBitWriter
from utils.types import FormatError


class Codec(ABC):
    @abstractmethod
    def compress(self, reader: BitReader, writer: BitWriter) -> None:
        ...

    @abstractmethod
    def decompress(self, reader: BitReader, writer: BitWriter) -> None:
        ...

    def compress_bytes(self, data: bytes) -> bytes:
        output = io.BytesIO()
        self.compress(StreamBitReader(io.BytesIO(data)), StreamBitWriter(output))
        return output.getvalue()

    def decompress_bytes(self, blob: bytes) -> bytes:
        output = io.BytesIO()
        self.decompress(StreamBitReader(io.BytesIO(blob)), StreamBitWriter(output))
        return output.getvalue()
