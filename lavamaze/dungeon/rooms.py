from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .config import DungeonConfig
from .partition import Leaf, PartitionTree
from .rng import RandomSource
from .tiles import FLOOR, Coord, Grid


@dataclass
class Room:
    x: int
    y: int
    w: int
    h: int
    doors: List[Coord] = field(default_factory=list)

    def cells(self):
        for ix in range(self.x, self.x + self.w):
            for iy in range(self.y, self.y + self.h):
                yield ix, iy

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.w and self.y <= y < self.y + self.h

    @property
    def center(self) -> Tuple[int, int]:
        return (self.x + self.w // 2, self.y + self.h // 2)

    @property
    def corners(self) -> Tuple[Coord, Coord, Coord, Coord]:
        x2, y2 = self.x + self.w - 1, self.y + self.h - 1
        return ((self.x, self.y), (x2, self.y), (self.x, y2), (x2, y2))

    def door_candidates(self) -> List[Coord]:
        """The eight corner-adjacent door slots on the room's wall ring.

        Two per wall, one tile in from each end, in the order top, bottom,
        left, right.
        """
        x, y, w, h = self.x, self.y, self.w, self.h
        return [
            (x + 1, y - 1),
            (x + w - 2, y - 1),
            (x + 1, y + h),
            (x + w - 2, y + h),
            (x - 1, y + 1),
            (x - 1, y + h - 2),
            (x + w, y + 1),
            (x + w, y + h - 2),
        ]

    def inward_of(self, door: Coord) -> Coord:
        """Room tile directly inside ``door``."""
        dx, dy = door
        if dy == self.y - 1:
            return (dx, self.y)
        if dy == self.y + self.h:
            return (dx, self.y + self.h - 1)
        if dx == self.x - 1:
            return (self.x, dy)
        if dx == self.x + self.w:
            return (self.x + self.w - 1, dy)
        raise ValueError(f"{door} is not on the wall ring of {self}")


def carve_room(grid: Grid, leaf: Leaf, config: DungeonConfig, rng: RandomSource) -> Optional[Room]:
    """Carve one room inside ``leaf`` keeping at least one tile of margin.

    Leaves from ``build_tree`` always fit ``min_room_size``; a hand built
    smaller leaf gets the largest room its interior allows, and none at all
    under 4 tiles.
    """
    max_w, max_h = leaf.width - 2, leaf.height - 2
    if max_w < 2 or max_h < 2:
        return None
    w = rng.next_int(min(config.min_room_size, max_w), max_w)
    h = rng.next_int(min(config.min_room_size, max_h), max_h)
    x = leaf.x + rng.next_int(1, leaf.width - w - 1)
    y = leaf.y + rng.next_int(1, leaf.height - h - 1)
    room = Room(x, y, w, h)
    for ix, iy in room.cells():
        grid[ix][iy] = FLOOR
    leaf.room = room
    return room


def carve_rooms(grid: Grid, tree: PartitionTree, config: DungeonConfig, rng: RandomSource) -> List[Room]:
    """Carve a room into every terminal leaf (post-order) and return them."""
    rooms: List[Room] = []
    for node_id in tree.post_order():
        leaf = tree.nodes[node_id]
        if not leaf.is_terminal:
            continue
        room = carve_room(grid, leaf, config, rng)
        if room is not None:
            rooms.append(room)
    return rooms


__all__ = ["Room", "carve_room", "carve_rooms"]
