import unittest

from lavamaze.dungeon.config import DungeonConfig
from lavamaze.dungeon.partition import PartitionTree, build_tree
from lavamaze.dungeon.rng import RandomSource
from lavamaze.dungeon.rooms import carve_room
from lavamaze.dungeon.tiles import FLOOR, new_grid


class TestLeafSplit(unittest.TestCase):
    def test_undersized_leaf_does_not_split(self):
        tree = PartitionTree(0, 0, 5, 5, min_leaf_size=6)
        self.assertFalse(tree.split(tree.root, RandomSource(1)))
        self.assertEqual(len(tree), 1)
        self.assertTrue(tree.node(tree.root).is_terminal)

    def test_undersized_leaf_still_gets_a_room(self):
        tree = PartitionTree(0, 0, 5, 5, min_leaf_size=6)
        grid = new_grid(5, 5)
        room = carve_room(grid, tree.node(tree.root), DungeonConfig(), RandomSource(1))
        self.assertIsNotNone(room)
        self.assertEqual((room.x, room.y, room.w, room.h), (1, 1, 3, 3))
        self.assertIs(tree.node(tree.root).room, room)
        self.assertTrue(all(grid[x][y] == FLOOR for x, y in room.cells()))

    def test_minimum_splittable_leaf(self):
        for seed in range(10):
            tree = PartitionTree(0, 0, 12, 12, min_leaf_size=6)
            self.assertTrue(tree.split(tree.root, RandomSource(seed)))
            a, b = (tree.node(i) for i in tree.leaves())
            self.assertEqual({a.width, a.height, b.width, b.height} - {6, 12}, set())
            self.assertEqual(a.width * a.height + b.width * b.height, 144)

    def test_elongated_leaf_splits_across_long_axis(self):
        for seed in range(20):
            tree = PartitionTree(0, 0, 20, 8, min_leaf_size=6)
            self.assertTrue(tree.split(tree.root, RandomSource(seed)))
            left, right = tree.node(1), tree.node(2)
            self.assertEqual(left.height, 8)
            self.assertEqual(right.height, 8)
            self.assertEqual(left.width + right.width, 20)
            self.assertEqual(right.x, left.width)

    def test_split_twice_refused(self):
        tree = PartitionTree(0, 0, 20, 20, min_leaf_size=6)
        rng = RandomSource(4)
        self.assertTrue(tree.split(tree.root, rng))
        self.assertFalse(tree.split(tree.root, rng))
        self.assertEqual(len(tree), 3)


def test_build_tree_leaves_tile_the_grid():
    cfg = DungeonConfig()
    for seed in (1, 2, 3, 42, 999):
        tree = build_tree(35, 35, RandomSource(seed), cfg)
        covered = set()
        for node_id in tree.leaves():
            leaf = tree.node(node_id)
            assert cfg.min_leaf_size <= leaf.width <= cfg.max_leaf_size
            assert cfg.min_leaf_size <= leaf.height <= cfg.max_leaf_size
            cells = {(x, y) for x in range(leaf.x, leaf.x + leaf.width) for y in range(leaf.y, leaf.y + leaf.height)}
            assert not (covered & cells)
            covered |= cells
        assert len(covered) == 35 * 35


def test_post_order_visits_children_first():
    tree = build_tree(35, 35, RandomSource(42), DungeonConfig())
    order = list(tree.post_order())
    assert sorted(order) == list(range(len(tree)))
    assert order[-1] == tree.root
    position = {nid: i for i, nid in enumerate(order)}
    for nid, node in enumerate(tree.nodes):
        if not node.is_terminal:
            assert position[node.left] < position[nid]
            assert position[node.right] < position[nid]


def test_build_tree_deterministic():
    a = build_tree(35, 35, RandomSource(77), DungeonConfig())
    b = build_tree(35, 35, RandomSource(77), DungeonConfig())
    assert [(n.x, n.y, n.width, n.height) for n in a.nodes] == [(n.x, n.y, n.width, n.height) for n in b.nodes]
    assert a.depth() >= 1
