import heapq
from itertools import count
from typing import List
import numpy as np
from channel.channel import BitReader, BitWriter, EXHAUSTED
from .types import *


def build_huffman_tree(frequencies: np.ndarray) -> HuffmanNode:
    # The insertion counter breaks weight ties, so equal input always gives the same tree
    order = count()
    heap = [
        (int(freq), next(order), HuffmanNode(symbol, int(freq)))
        for symbol, freq in enumerate(frequencies) if freq > 0
    ]
    if not heap:
        raise ValueError("Cannot build a Huffman tree without any symbol occurrences.")
    heapq.heapify(heap)

    while len(heap) > 1:
        _, _, left = heapq.heappop(heap)
        _, _, right = heapq.heappop(heap)
        merged = HuffmanNode(weight=left.weight + right.weight, left=left, right=right)
        heapq.heappush(heap, (merged.weight, next(order), merged))

    return heap[0][2]


def build_huffman_codes(root: HuffmanNode) -> CodeTable:
    codes: CodeTable = {}

    def generate_codes(node: HuffmanNode, current_code: str):
        if node.is_leaf:
            # A leaf root (lone sentinel) keeps the empty code
            codes[node.value] = current_code
            return
        generate_codes(node.left, current_code + "0")
        generate_codes(node.right, current_code + "1")

    generate_codes(root, "")
    return codes


def write_tree_header(node: HuffmanNode, writer: BitWriter) -> None:
    if node.is_leaf:
        writer.write_bits(1, 1)
        writer.write_bits(SYMBOL_BITS, node.value)
        return

    writer.write_bits(1, 0)
    write_tree_header(node.left, writer)
    write_tree_header(node.right, writer)


def read_tree_header(reader: BitReader, depth: int = 0) -> HuffmanNode:
    """
    Rebuilds a tree written by write_tree_header.

    Parameters:
        reader (BitReader): Reader positioned right after the magic number.
        depth (int): Depth of the node being read, used to reject headers
            nested deeper than any tree over ALPH_SIZE + 1 leaves can be.

    Returns:
        HuffmanNode: Root of the rebuilt tree. Weights are not stored in the
        header and are left at 0.
    """
    bit = reader.read_bits(1)
    if bit == EXHAUSTED:
        raise FormatError("bad input, tree header is truncated")

    if bit == 0:
        if depth >= ALPH_SIZE:
            raise FormatError(f"bad input, tree header nests deeper than {ALPH_SIZE} levels")
        left = read_tree_header(reader, depth + 1)
        right = read_tree_header(reader, depth + 1)
        return HuffmanNode(left=left, right=right)

    value = reader.read_bits(SYMBOL_BITS)
    if value == EXHAUSTED:
        raise FormatError("bad input, tree header is truncated")
    if value > PSEUDO_EOF:
        raise FormatError(f"bad input, leaf symbol {value} is out of range")

    return HuffmanNode(value)


def describe_tree(root: HuffmanNode) -> List[str]:
    lines = []

    def describe(node: HuffmanNode, depth: int):
        indent = "  " * depth
        if node.is_leaf:
            lines.append(f"{indent}leaf value: {node.value}, weight: {node.weight}")
            return
        lines.append(f"{indent}node weight: {node.weight}")
        describe(node.left, depth + 1)
        describe(node.right, depth + 1)

    describe(root, 0)
    return lines
