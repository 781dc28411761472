from .codec import Codec, FormatError
from .implementation.huffman_codec import HuffmanCodec
