from typing import Iterator, List
import numpy as np
from channel.channel import BitReader, BitWriter, EXHAUSTED, MAX_BITS_PER_CALL
from .types import *

BLOCK = 4096


def iterate_words(reader: BitReader) -> Iterator[int]:
    # Yields 8-bit words until the reader runs dry
    while True:
        value = reader.read_bits(BITS_PER_WORD)
        if value == EXHAUSTED:
            return
        yield value


def count_frequencies(data: bytes) -> np.ndarray:
    frequencies = np.bincount(np.frombuffer(data, dtype=np.uint8), minlength=ALPH_SIZE + 1).astype(np.int64)
    frequencies[PSEUDO_EOF] = 1
    return frequencies


def read_for_counts(reader: BitReader) -> np.ndarray:
    """
    Counts every 8-bit word the reader yields.

    The reader is consumed to exhaustion; callers that need the data again
    must reset it.

    Parameters:
        reader (BitReader): Source of the words to count.

    Returns:
        np.ndarray: ALPH_SIZE + 1 counts indexed by symbol, PSEUDO_EOF set to 1.
    """
    frequencies = np.zeros(ALPH_SIZE + 1, dtype=np.int64)
    block = bytearray()

    for value in iterate_words(reader):
        block.append(value)
        if len(block) == BLOCK:
            frequencies += np.bincount(np.frombuffer(bytes(block), dtype=np.uint8), minlength=ALPH_SIZE + 1)
            block.clear()

    if block:
        frequencies += np.bincount(np.frombuffer(bytes(block), dtype=np.uint8), minlength=ALPH_SIZE + 1)

    # The sentinel is never counted, it always gets exactly one occurrence
    frequencies[PSEUDO_EOF] = 1

    return frequencies


def calculate_entropy(frequencies: np.ndarray) -> float:
    counts = np.asarray(frequencies[:ALPH_SIZE], dtype=np.float64)
    total = counts.sum()
    if total == 0:
        return 0.0
    probabilities = counts[counts > 0] / total
    return float(-np.sum(probabilities * np.log2(probabilities)))


def calculate_average_code_length(frequencies: np.ndarray, codes: CodeTable) -> float:
    total = int(np.sum(frequencies[:ALPH_SIZE]))
    if total == 0:
        return 0.0
    return sum(int(frequencies[symbol]) * len(code) for symbol, code in codes.items() if symbol != PSEUDO_EOF) / total


def split_bit_code(bit_code: str) -> List[str]:
    return [bit_code[i:i + MAX_BITS_PER_CALL] for i in range(0, len(bit_code), MAX_BITS_PER_CALL)]


def write_bit_code(writer: BitWriter, bit_code: str) -> None:
    # Empty codes (a lone sentinel leaf at the root) write nothing
    for chunk in split_bit_code(bit_code):
        writer.write_bits(len(chunk), int(chunk, 2))
