"""Decoder for the -lh1- method: adaptive Huffman codes over a 4 KiB window."""

from __future__ import annotations

from .bitstream import BitStreamReader

RING_BUFFER_SIZE = 4096
TREE_REORDER_LIMIT = 32 * 1024
NUM_CODES = 314
NUM_TREE_NODES = NUM_CODES * 2 - 1
NUM_OFFSETS = 64
MIN_OFFSET_LENGTH = 3
COPY_THRESHOLD = 3
# A single copy can at most repeat the whole history buffer.
OUTPUT_BUFFER_SIZE = RING_BUFFER_SIZE

# Number of offset codes of each length, starting at MIN_OFFSET_LENGTH bits.
_OFFSET_FDIST = (1, 3, 8, 12, 24, 16)


def _build_offset_tables():
    lookup = bytearray(256)
    lengths = bytearray(NUM_OFFSETS)
    code = 0
    offset = 0
    for index, count in enumerate(_OFFSET_FDIST):
        length = index + MIN_OFFSET_LENGTH
        span = 1 << (8 - length)
        for _ in range(count):
            lookup[code:code + span] = bytes([offset]) * span
            lengths[offset] = length
            code += span
            offset += 1
    return bytes(lookup), bytes(lengths)


_OFFSET_LOOKUP, _OFFSET_LENGTHS = _build_offset_tables()


class LH1Decoder:
    """Streaming decoder for -lh1- compressed data.

    ``read`` is called with a maximum byte count and returns bytes; an
    empty result marks the end of the compressed input.
    """

    MAX_READ = OUTPUT_BUFFER_SIZE
    BLOCK_SIZE = RING_BUFFER_SIZE

    def __init__(self, read):
        self._bits = BitStreamReader(read)
        self._ringbuf = bytearray(b" " * RING_BUFFER_SIZE)
        self._ringbuf_pos = 0

        # Tree nodes as parallel arrays; index 0 is the root and the
        # array is kept ordered by decreasing frequency.
        self._leaf = [False] * NUM_TREE_NODES
        self._child = [0] * NUM_TREE_NODES
        self._parent = [0] * NUM_TREE_NODES
        self._freq = [0] * NUM_TREE_NODES
        self._group = [0] * NUM_TREE_NODES
        self._leaf_nodes = [0] * NUM_CODES

        self._groups = []
        self._num_groups = 0
        self._group_leader = [0] * NUM_TREE_NODES

        self._init_groups()
        self._init_tree()

    # Group bookkeeping -------------------------------------------------

    def _init_groups(self):
        self._groups = list(range(NUM_TREE_NODES))
        self._num_groups = 0

    def _alloc_group(self):
        group = self._groups[self._num_groups]
        self._num_groups += 1
        return group

    def _free_group(self, group):
        self._num_groups -= 1
        self._groups[self._num_groups] = group

    # Tree construction and maintenance ---------------------------------

    def _init_tree(self):
        node_index = NUM_TREE_NODES - 1
        leaf_group = self._alloc_group()

        for code in range(NUM_CODES):
            self._leaf[node_index] = True
            self._child[node_index] = code
            self._freq[node_index] = 1
            self._group[node_index] = leaf_group
            self._group_leader[leaf_group] = node_index
            self._leaf_nodes[code] = node_index
            node_index -= 1

        child = NUM_TREE_NODES - 1
        while node_index >= 0:
            self._leaf[node_index] = False
            self._child[node_index] = child
            self._parent[child] = node_index
            self._parent[child - 1] = node_index
            self._freq[node_index] = self._freq[child] + self._freq[child - 1]

            if self._freq[node_index] == self._freq[node_index + 1]:
                self._group[node_index] = self._group[node_index + 1]
            else:
                self._group[node_index] = self._alloc_group()
            self._group_leader[self._group[node_index]] = node_index

            node_index -= 1
            child -= 2

    def _link_children(self, index):
        child = self._child[index]
        if self._leaf[index]:
            self._leaf_nodes[child] = index
        else:
            self._parent[child] = index
            self._parent[child - 1] = index

    def _make_group_leader(self, node_index):
        leader_index = self._group_leader[self._group[node_index]]
        if leader_index == node_index:
            return node_index

        leaf, child = self._leaf, self._child
        leaf[leader_index], leaf[node_index] = leaf[node_index], leaf[leader_index]
        child[leader_index], child[node_index] = child[node_index], child[leader_index]

        self._link_children(node_index)
        self._link_children(leader_index)
        return leader_index

    def _increment_node_freq(self, node_index):
        freq, group = self._freq, self._group
        other = node_index - 1
        freq[node_index] += 1

        if (node_index < NUM_TREE_NODES - 1
                and group[node_index] == group[node_index + 1]):
            # Leave a shared group; the next node becomes its leader.
            self._group_leader[group[node_index]] += 1
            if freq[node_index] == freq[other]:
                group[node_index] = group[other]
            else:
                new_group = self._alloc_group()
                group[node_index] = new_group
                self._group_leader[new_group] = node_index
        elif freq[node_index] == freq[other]:
            self._free_group(group[node_index])
            group[node_index] = group[other]

    def _copy_node(self, dest, src):
        self._leaf[dest] = self._leaf[src]
        self._child[dest] = self._child[src]
        self._parent[dest] = self._parent[src]
        self._freq[dest] = self._freq[src]
        self._group[dest] = self._group[src]

    def _reconstruct_tree(self):
        leaf, child_of, freq = self._leaf, self._child, self._freq

        # Gather the leaves at the front with halved frequencies.
        count = 0
        for index in range(NUM_TREE_NODES):
            if leaf[index]:
                leaf[count] = True
                child_of[count] = child_of[index]
                freq[count] = (freq[index] + 1) // 2
                count += 1

        # Rebuild from the end, inserting branch nodes where their
        # frequency keeps the table in decreasing order.
        src = NUM_CODES - 1
        child = NUM_TREE_NODES - 1
        index = NUM_TREE_NODES - 1

        while index >= 0:
            while child - index < 2:
                self._copy_node(index, src)
                self._leaf_nodes[child_of[index]] = index
                index -= 1
                src -= 1

            branch_freq = freq[child] + freq[child - 1]

            while src >= 0 and branch_freq >= freq[src]:
                self._copy_node(index, src)
                self._leaf_nodes[child_of[index]] = index
                index -= 1
                src -= 1

            leaf[index] = False
            freq[index] = branch_freq
            child_of[index] = child
            self._parent[child] = index
            self._parent[child - 1] = index

            index -= 1
            child -= 2

        self._init_groups()
        group = self._alloc_group()
        self._group[0] = group
        self._group_leader[group] = 0

        for index in range(1, NUM_TREE_NODES):
            if freq[index] == freq[index - 1]:
                self._group[index] = self._group[index - 1]
            else:
                group = self._alloc_group()
                self._group[index] = group
                self._group_leader[group] = index

    def _increment_for_code(self, code):
        if self._freq[0] >= TREE_REORDER_LIMIT:
            self._reconstruct_tree()

        self._freq[0] += 1

        node_index = self._leaf_nodes[code]
        while node_index != 0:
            node_index = self._make_group_leader(node_index)
            self._increment_node_freq(node_index)
            node_index = self._parent[node_index]

    # Input decoding ----------------------------------------------------

    def _read_code(self):
        node_index = 0
        while not self._leaf[node_index]:
            bit = self._bits.read_bit()
            node_index = self._child[node_index] - bit

        code = self._child[node_index]
        self._increment_for_code(code)
        return code

    def _read_offset(self):
        future = self._bits.peek_bits(8)
        offset = _OFFSET_LOOKUP[future]
        self._bits.read_bits(_OFFSET_LENGTHS[offset])
        low = self._bits.read_bits(6)
        return (offset << 6) | low

    def read(self):
        """Decode the next command and return the bytes it produces.

        Returns an empty bytes object once the input is exhausted.
        """
        try:
            code = self._read_code()
            if code < 0x100:
                return self._emit_literal(code)
            offset = self._read_offset()
        except EOFError:
            return b""

        count = code - 0x100 + COPY_THRESHOLD
        ring = self._ringbuf
        pos = self._ringbuf_pos
        start = pos - offset + RING_BUFFER_SIZE - 1
        out = bytearray()

        for step in range(count):
            byte = ring[(start + step) % RING_BUFFER_SIZE]
            out.append(byte)
            ring[pos] = byte
            pos = (pos + 1) % RING_BUFFER_SIZE

        self._ringbuf_pos = pos
        return bytes(out)

    def _emit_literal(self, byte):
        self._ringbuf[self._ringbuf_pos] = byte
        self._ringbuf_pos = (self._ringbuf_pos + 1) % RING_BUFFER_SIZE
        return bytes([byte])