from .channel import BitReader, BitWriter, EXHAUSTED, MAX_BITS_PER_CALL
from .implementation.stream_channel import StreamBitReader, StreamBitWriter
