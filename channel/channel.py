from abc import ABC, abstractmethod

# Returned by read_bits when fewer bits remain than were requested
EXHAUSTED = -1

MAX_BITS_PER_CALL = 32


def check_bit_count(bits: int) -> None:
    if not 1 <= bits <= MAX_BITS_PER_CALL:
        raise ValueError(f"Bit count must be in [1, {MAX_BITS_PER_CALL}], got {bits}.")


class BitReader(ABC):
    @abstractmethod
    def read_bits(self, bits: int) -> int:
        """
        Reads the next `bits` bits, most significant first.

        Parameters:
            bits (int): Number of bits to read, 1 to 32.

        Returns:
            int: The bits as an unsigned integer, or EXHAUSTED when the stream
            holds fewer than `bits` more bits.
        """
        ...

    @abstractmethod
    def reset(self) -> None:
        """
        Rewinds the reader so the next read starts at bit 0 again.
        """
        ...

    @property
    @abstractmethod
    def bits_read(self) -> int:
        ...


class BitWriter(ABC):
    @abstractmethod
    def write_bits(self, bits: int, value: int) -> None:
        """
        Appends the low `bits` bits of `value`, most significant first.

        Parameters:
            bits (int): Number of bits to write, 1 to 32.
            value (int): Unsigned value holding the bits.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """
        Pads the last partial byte with zero bits and flushes it.
        """
        ...

    @property
    @abstractmethod
    def bits_written(self) -> int:
        ...
