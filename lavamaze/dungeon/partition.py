"""Binary space partitioning of the dungeon rectangle.

Nodes live in a flat arena (``PartitionTree.nodes``) and refer to their
children by index, so each node is owned exactly once and the tree can be
walked without recursion limits or shared references.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, List, Optional

from .config import DungeonConfig
from .rng import RandomSource

if TYPE_CHECKING:  # pragma: no cover
    from .rooms import Room

# Aspect ratio at which a leaf is forced to split across its long axis
ELONGATION_RATIO = 1.25


@dataclass
class Leaf:
    x: int
    y: int
    width: int
    height: int
    left: Optional[int] = None
    right: Optional[int] = None
    room: Optional["Room"] = None

    @property
    def is_terminal(self) -> bool:
        return self.left is None and self.right is None


class PartitionTree:
    root = 0

    def __init__(self, x: int, y: int, width: int, height: int, min_leaf_size: int = 6):
        self.min_leaf_size = min_leaf_size
        self.nodes: List[Leaf] = [Leaf(x, y, width, height)]

    def __len__(self) -> int:
        return len(self.nodes)

    def node(self, node_id: int) -> Leaf:
        return self.nodes[node_id]

    def split(self, node_id: int, rng: RandomSource) -> bool:
        """Split one leaf in two; False (and no change) when it cannot be split.

        The cut runs across whichever axis is at least 25% longer than the
        other, otherwise a coin flip picks it. Both halves keep at least
        ``min_leaf_size`` tiles along the cut axis.
        """
        leaf = self.nodes[node_id]
        if not leaf.is_terminal:
            return False
        split_h = rng.chance(0.5)
        if leaf.width > leaf.height and leaf.width / leaf.height >= ELONGATION_RATIO:
            split_h = False
        elif leaf.height > leaf.width and leaf.height / leaf.width >= ELONGATION_RATIO:
            split_h = True
        extent = leaf.height if split_h else leaf.width
        hi = extent - self.min_leaf_size
        if hi < self.min_leaf_size:
            return False
        cut = rng.next_int(self.min_leaf_size, hi)
        if split_h:
            first = Leaf(leaf.x, leaf.y, leaf.width, cut)
            second = Leaf(leaf.x, leaf.y + cut, leaf.width, leaf.height - cut)
        else:
            first = Leaf(leaf.x, leaf.y, cut, leaf.height)
            second = Leaf(leaf.x + cut, leaf.y, leaf.width - cut, leaf.height)
        self.nodes.append(first)
        leaf.left = len(self.nodes) - 1
        self.nodes.append(second)
        leaf.right = len(self.nodes) - 1
        return True

    def leaves(self) -> List[int]:
        return [i for i, n in enumerate(self.nodes) if n.is_terminal]

    def post_order(self, node_id: int = 0) -> Iterator[int]:
        stack = [(node_id, False)]
        while stack:
            nid, expanded = stack.pop()
            node = self.nodes[nid]
            if expanded or node.is_terminal:
                yield nid
                continue
            stack.append((nid, True))
            stack.append((node.right, False))
            stack.append((node.left, False))

    def depth(self, node_id: int = 0) -> int:
        node = self.nodes[node_id]
        if node.is_terminal:
            return 0
        return 1 + max(self.depth(node.left), self.depth(node.right))


def build_tree(width: int, height: int, rng: RandomSource, config: DungeonConfig) -> PartitionTree:
    """Partition the full ``width`` x ``height`` grid.

    Oversized leaves always split; smaller ones split with ``split_chance``.
    Passes repeat until one full pass splits nothing.
    """
    tree = PartitionTree(0, 0, width, height, min_leaf_size=config.min_leaf_size)
    did_split = True
    while did_split:
        did_split = False
        for node_id in tree.leaves():
            leaf = tree.nodes[node_id]
            oversized = leaf.width > config.max_leaf_size or leaf.height > config.max_leaf_size
            if oversized or rng.chance(config.split_chance):
                if tree.split(node_id, rng):
                    did_split = True
    return tree


__all__ = ["Leaf", "PartitionTree", "build_tree", "ELONGATION_RATIO"]
