from tqdm import tqdm
from channel import BitReader, BitWriter, EXHAUSTED
from utils.types import *
from utils.bit_magic import *
from utils.huffman_tree import build_huffman_tree, build_huffman_codes, write_tree_header, read_tree_header, \
    describe_tree
from ..codec import Codec


class HuffmanCodec(Codec):
    """
    Huffman codec whose compressed stream carries the code tree itself.

    Layout: the 32-bit HUFF_TREE magic number, the preorder tree header
    (0 for an internal node, 1 plus a 9-bit symbol for a leaf), the code of
    every input byte and finally the code of PSEUDO_EOF.
    """

    def __init__(self, verbose: bool = False, dump_tree: bool = False):
        self.verbose = verbose
        self.dump_tree = dump_tree

    def compress(self, reader: BitReader, writer: BitWriter) -> None:
        frequencies = read_for_counts(reader)
        root = build_huffman_tree(frequencies)
        codes = build_huffman_codes(root)

        writer.write_bits(BITS_PER_INT, HUFF_TREE)
        write_tree_header(root, writer)
        header_bits = writer.bits_written

        reader.reset()
        for value in tqdm(iterate_words(reader), desc="Encoding", unit="B", disable=not self.verbose):
            write_bit_code(writer, codes[value])
        write_bit_code(writer, codes[PSEUDO_EOF])

        writer.close()

        if self.verbose:
            print("HuffmanCodec verbose statistics:")
            print(f"- Distinct symbols (with PSEUDO_EOF): {len(codes)}")
            print(f"- Header (in bits): {header_bits}")
            print(f"- Byte entropy: {calculate_entropy(frequencies):.3f}")
            print(f"- Average code bit length: {calculate_average_code_length(frequencies, codes):.3f}")
            print(f"- Total (in bits): {writer.bits_written}")
        if self.dump_tree:
            print("\n".join(describe_tree(root)))

    def decompress(self, reader: BitReader, writer: BitWriter) -> None:
        magic = reader.read_bits(BITS_PER_INT)
        if magic == EXHAUSTED:
            raise FormatError("illegal header, stream is shorter than the magic number")
        if magic != HUFF_TREE:
            raise FormatError(f"illegal header starts with {magic:#010x}")

        root = read_tree_header(reader)
        header_bits = reader.bits_read

        if root.is_leaf and root.value != PSEUDO_EOF:
            raise FormatError("bad input, tree without PSEUDO_EOF")

        # Nothing reaches the writer until PSEUDO_EOF has been decoded
        decoded = bytearray()
        node = root
        with tqdm(desc="Decoding", unit="B", disable=not self.verbose) as progress:
            while not node.is_leaf:
                bit = reader.read_bits(1)
                if bit == EXHAUSTED:
                    raise FormatError("bad input, no PSEUDO_EOF")

                node = node.right if bit else node.left
                if node.is_leaf and node.value != PSEUDO_EOF:
                    decoded.append(node.value)
                    progress.update(1)
                    node = root

        for value in decoded:
            writer.write_bits(BITS_PER_WORD, value)
        writer.close()

        if self.verbose:
            print("HuffmanCodec verbose statistics:")
            print(f"- Header (in bits): {header_bits}")
            print(f"- Body (in bits): {reader.bits_read - header_bits}")
            print(f"- Decoded (in bytes): {len(decoded)}")
        if self.dump_tree:
            print("\n".join(describe_tree(root)))
