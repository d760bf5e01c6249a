"""Corridor carving between partition siblings.

Rooms are joined bottom-up along the partition tree: every split node connects
one representative room of its left subtree to one of its right subtree with
an L-shaped corridor running door to door. Because each split joins its two
halves, every room ends up connected to every other.
"""
from typing import List, Optional, Tuple

from .partition import PartitionTree
from .rng import RandomSource
from .rooms import Room
from .tiles import FLOOR, OBSTACLE, Coord, Grid, in_bounds, is_border

Corridor = Tuple[Coord, Coord]


def pick_door(grid: Grid, room: Room, rng: RandomSource) -> Coord:
    """Uniform corner-adjacent door slot that does not sit on the grid border."""
    slots = [(x, y) for x, y in room.door_candidates() if in_bounds(grid, x, y) and not is_border(grid, x, y)]
    if not slots:
        # a room filling the whole grid has nowhere to put a door
        return room.center
    return rng.pick(slots)


def carve_line(grid: Grid, x1: int, y1: int, x2: int, y2: int) -> None:
    dx = 1 if x2 >= x1 else -1
    dy = 1 if y2 >= y1 else -1
    if x1 == x2:
        for yy in range(y1, y2 + dy, dy):
            grid[x1][yy] = FLOOR
    elif y1 == y2:
        for xx in range(x1, x2 + dx, dx):
            grid[xx][y1] = FLOOR


def carve_l_path(grid: Grid, a: Coord, b: Coord, horizontal_first: bool) -> None:
    (x1, y1), (x2, y2) = a, b
    if horizontal_first:
        carve_line(grid, x1, y1, x2, y1)
        carve_line(grid, x2, y1, x2, y2)
    else:
        carve_line(grid, x1, y1, x1, y2)
        carve_line(grid, x1, y2, x2, y2)


def door_obstacle(room: Room, door: Coord) -> Optional[Coord]:
    """Room tile that gets an OBSTACLE for ``door``, or None for a corner door.

    The blocker goes next to the door's inward tile, along the wall, on the
    side of the nearer room corner.
    """
    if room.contains(*door):
        return None
    ix, iy = room.inward_of(door)
    if (ix, iy) in room.corners:
        return None
    if door[1] in (room.y - 1, room.y + room.h):
        # top or bottom wall: the wall runs along x
        step = -1 if ix - room.x <= room.x + room.w - 1 - ix else 1
        return (ix + step, iy)
    step = -1 if iy - room.y <= room.y + room.h - 1 - iy else 1
    return (ix, iy + step)


def connect_rooms(grid: Grid, a: Room, b: Room, rng: RandomSource) -> Corridor:
    door_a = pick_door(grid, a, rng)
    door_b = pick_door(grid, b, rng)
    grid[door_a[0]][door_a[1]] = FLOOR
    grid[door_b[0]][door_b[1]] = FLOOR
    carve_l_path(grid, door_a, door_b, horizontal_first=rng.chance(0.5))
    for room, door in ((a, door_a), (b, door_b)):
        room.doors.append(door)
        blocker = door_obstacle(room, door)
        if blocker is not None:
            grid[blocker[0]][blocker[1]] = OBSTACLE
    return door_a, door_b


def _connect_subtree(
    grid: Grid, tree: PartitionTree, node_id: int, rng: RandomSource, corridors: List[Corridor]
) -> Optional[Room]:
    node = tree.nodes[node_id]
    if node.is_terminal:
        return node.room
    left = _connect_subtree(grid, tree, node.left, rng, corridors)
    right = _connect_subtree(grid, tree, node.right, rng, corridors)
    if left is None or right is None:
        return left or right
    corridors.append(connect_rooms(grid, left, right, rng))
    return left if rng.chance(0.5) else right


def connect_tree(grid: Grid, tree: PartitionTree, rng: RandomSource) -> List[Corridor]:
    """Join sibling subtrees bottom-up; returns the (door, door) pairs carved."""
    corridors: List[Corridor] = []
    _connect_subtree(grid, tree, tree.root, rng, corridors)
    return corridors


__all__ = ["pick_door", "carve_line", "carve_l_path", "door_obstacle", "connect_rooms", "connect_tree"]
