from dataclasses import dataclass
from typing import Dict, Optional, TypeAlias

BITS_PER_WORD = 8
BITS_PER_INT = 32
ALPH_SIZE = 1 << BITS_PER_WORD
PSEUDO_EOF = ALPH_SIZE

# Leaf symbols need one extra bit so that PSEUDO_EOF fits
SYMBOL_BITS = BITS_PER_WORD + 1

HUFF_NUMBER = 0xface8200
HUFF_TREE = HUFF_NUMBER | 1

Symbol: TypeAlias = int
CodeTable: TypeAlias = Dict[Symbol, str]


@dataclass(eq=False)
class HuffmanNode:
    value: Optional[Symbol] = None
    weight: int = 0
    left: Optional['HuffmanNode'] = None
    right: Optional['HuffmanNode'] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    # Same shape and same leaf symbols, weights ignored
    def same_shape(self, other: 'HuffmanNode') -> bool:
        if self.is_leaf or other.is_leaf:
            return self.is_leaf and other.is_leaf and self.value == other.value
        return self.left.same_shape(other.left) and self.right.same_shape(other.right)

    def leaves(self) -> int:
        if self.is_leaf:
            return 1
        return self.left.leaves() + self.right.leaves()


class FormatError(ValueError):
    """Raised when a compressed stream is not a well-formed tree-header stream."""
