import pytest

from lavamaze.dungeon.config import DungeonConfig
from lavamaze.dungeon.partition import Leaf, build_tree
from lavamaze.dungeon.rng import RandomSource
from lavamaze.dungeon.rooms import Room, carve_room, carve_rooms
from lavamaze.dungeon.tiles import FLOOR, WALL, count_tiles, new_grid


def test_room_keeps_margin_inside_leaf():
    cfg = DungeonConfig()
    for seed in range(25):
        grid = new_grid(20, 20)
        leaf = Leaf(3, 4, 10, 12)
        room = carve_room(grid, leaf, cfg, RandomSource(seed))
        assert room is not None
        assert room.w >= cfg.min_room_size and room.h >= cfg.min_room_size
        assert room.x >= leaf.x + 1 and room.x + room.w <= leaf.x + leaf.width - 1
        assert room.y >= leaf.y + 1 and room.y + room.h <= leaf.y + leaf.height - 1
        assert count_tiles(grid, FLOOR) == room.w * room.h


def test_tiny_leaf_gets_no_room():
    grid = new_grid(6, 6)
    leaf = Leaf(0, 0, 3, 6)
    assert carve_room(grid, leaf, DungeonConfig(), RandomSource(1)) is None
    assert leaf.room is None
    assert count_tiles(grid, WALL) == 36


def test_carve_rooms_one_per_leaf():
    cfg = DungeonConfig()
    rng = RandomSource(42)
    tree = build_tree(35, 35, rng, cfg)
    grid = new_grid(35, 35)
    rooms = carve_rooms(grid, tree, cfg, rng)
    assert len(rooms) == len(tree.leaves())
    for node_id in tree.leaves():
        assert tree.node(node_id).room in rooms
    # rooms never touch each other or the border
    for room in rooms:
        for x, y in room.cells():
            assert 0 < x < 34 and 0 < y < 34


def test_door_candidates_ring_slots():
    room = Room(5, 5, 4, 4)
    assert room.door_candidates() == [
        (6, 4),
        (7, 4),
        (6, 9),
        (7, 9),
        (4, 6),
        (4, 7),
        (9, 6),
        (9, 7),
    ]
    for door in room.door_candidates():
        assert not room.contains(*door)


def test_inward_of():
    room = Room(5, 5, 4, 4)
    assert room.inward_of((6, 4)) == (6, 5)
    assert room.inward_of((7, 9)) == (7, 8)
    assert room.inward_of((4, 7)) == (5, 7)
    assert room.inward_of((9, 6)) == (8, 6)
    with pytest.raises(ValueError):
        room.inward_of((2, 2))


def test_center_and_corners():
    room = Room(2, 3, 5, 4)
    assert room.center == (4, 5)
    assert room.corners == ((2, 3), (6, 3), (2, 6), (6, 6))
