import heapq
import logging
from collections import Counter

from .errors import CorruptStreamError

logger = logging.getLogger(__name__)

# A tree over 256 distinct byte values is at most 255 levels deep.
MAX_TREE_DEPTH = 255


### HUFFMAN NODE CLASSES ###
class HuffmanNode:
    """Common base of the two node kinds of a Huffman tree."""
    is_leaf = False

    def __init__(self, freq=0):
        # freq: occurrences of a byte, or the combined count of a subtree.
        self.freq = freq


class Leaf(HuffmanNode):
    """A byte value (0-255) and how often it occurs."""
    is_leaf = True

    def __init__(self, byte, freq=0):
        super().__init__(freq)
        self.byte = byte

    def __repr__(self):
        return f"Leaf(byte={self.byte!r}, freq={self.freq!r})"


class Internal(HuffmanNode):
    """A branch that owns exactly two children."""

    def __init__(self, left, right):
        super().__init__(left.freq + right.freq)
        self.left = left
        self.right = right

    def __repr__(self):
        return f"Internal(freq={self.freq!r}, left={self.left!r}, right={self.right!r})"


### FREQUENCY COUNTING ###
def calculate_frequency(data):
    """Count every byte value that occurs in ``data`` (no zero entries)."""
    return dict(Counter(data))


### TREE CONSTRUCTION ###
def build_huffman_tree(frequency):
    """
    Builds the Huffman tree for a non-empty frequency mapping.

    Heap entries are (freq, seq, node). Leaves are seeded in ascending byte
    order with seq 0..n-1 and every merged node takes the next seq, so nodes
    of equal frequency always come out oldest first and the resulting tree
    only depends on the input. The first node popped becomes the left child.
    """
    if not frequency:
        raise ValueError("cannot build a Huffman tree without any symbols")

    priority_queue = [
        (freq, seq, Leaf(byte, freq))
        for seq, (byte, freq) in enumerate(sorted(frequency.items()))
    ]
    heapq.heapify(priority_queue)
    seq = len(priority_queue)

    # A single distinct byte never merges: the leaf itself is the root.
    while len(priority_queue) > 1:
        _, _, left = heapq.heappop(priority_queue)
        _, _, right = heapq.heappop(priority_queue)
        parent = Internal(left, right)
        heapq.heappush(priority_queue, (parent.freq, seq, parent))
        seq += 1

    root = priority_queue[0][2]
    logger.debug("built Huffman tree over %d symbols", len(frequency))
    return root


### CODE GENERATION ###
def generate_codes(root):
    """Map every byte in the tree to its code, a string of '0'/'1'."""
    if root.is_leaf:
        # Placeholder for the degenerate tree; the codec never emits it.
        return {root.byte: "0"}

    huffman_codes = {}

    def generate_codes_recursive(node, current_code):
        if node.is_leaf:
            huffman_codes[node.byte] = current_code
            return
        generate_codes_recursive(node.left, current_code + "0")
        generate_codes_recursive(node.right, current_code + "1")

    generate_codes_recursive(root, "")
    return huffman_codes


### TREE SERIALIZATION ###
def serialize_tree(node, writer):
    """
    Writes the tree in pre-order: a leaf is a 1 bit followed by its byte
    (8 bits, MSB first), a branch is a 0 bit followed by its left and then
    its right subtree.
    """
    if node.is_leaf:
        writer.write_bit(1)
        writer.write_bits(node.byte, 8)
    else:
        writer.write_bit(0)
        serialize_tree(node.left, writer)
        serialize_tree(node.right, writer)


def deserialize_tree(reader, depth=0):
    """Reads back a tree written by serialize_tree. Leaf frequencies are 0."""
    bit = reader.read_bit()
    if bit is None:
        raise CorruptStreamError("stream ended inside the Huffman tree")
    if bit == 1:
        byte = reader.read_bits(8)
        if byte is None:
            raise CorruptStreamError("stream ended inside a tree leaf")
        return Leaf(byte)

    if depth >= MAX_TREE_DEPTH:
        raise CorruptStreamError("Huffman tree is deeper than any valid tree")
    left = deserialize_tree(reader, depth + 1)
    right = deserialize_tree(reader, depth + 1)
    return Internal(left, right)
