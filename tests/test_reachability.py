import unittest

import pytest

from lavamaze.dungeon.connectivity import (
    analyze_reachability,
    floor_is_connected,
    floor_regions,
    slide,
    unreachable_floor,
)

from tests.dungeon_test_utils import grid_from_ascii


class TestSlideMoves(unittest.TestCase):
    def test_long_corridor_is_one_hop(self):
        grid = grid_from_ascii(
            "############",
            "#..........#",
            "############",
        )
        res = analyze_reachability(grid, (1, 1))
        self.assertEqual(res.distances, {(1, 1): 0, (10, 1): 1})
        self.assertEqual(res.max_distance, 1)

    def test_no_progress_is_not_a_move(self):
        grid = grid_from_ascii(
            "####",
            "#..#",
            "####",
        )
        self.assertIsNone(slide(grid, (1, 1), (-1, 0)))
        self.assertIsNone(slide(grid, (1, 1), (0, -1)))
        self.assertEqual(slide(grid, (1, 1), (1, 0)), (2, 1))

    def test_slide_into_lava_is_rejected(self):
        grid = grid_from_ascii(
            "#######",
            "#~....#",
            "#######",
        )
        self.assertIsNone(slide(grid, (5, 1), (-1, 0)))
        res = analyze_reachability(grid, (5, 1))
        self.assertEqual(res.distances, {(5, 1): 0})

    def test_obstacle_stops_slide(self):
        grid = grid_from_ascii(
            "#######",
            "#..o..#",
            "#######",
        )
        self.assertEqual(slide(grid, (1, 1), (1, 0)), (2, 1))
        res = analyze_reachability(grid, (1, 1))
        self.assertNotIn((5, 1), res.distances)

    def test_grid_edge_stops_slide(self):
        grid = grid_from_ascii("....")
        self.assertEqual(slide(grid, (0, 0), (1, 0)), (3, 0))

    def test_exit_and_coin_are_passable(self):
        grid = grid_from_ascii(
            "#######",
            "#.$..E#",
            "#######",
        )
        self.assertEqual(slide(grid, (1, 1), (1, 0)), (5, 1))


def test_open_room_reaches_only_corners():
    grid = grid_from_ascii(
        "#####",
        "#...#",
        "#...#",
        "#...#",
        "#####",
    )
    res = analyze_reachability(grid, (1, 1))
    assert res.distance_to((3, 1)) == 1
    assert res.distance_to((1, 3)) == 1
    assert res.at_distance(2) == [(3, 3)]
    assert res.max_distance == 2
    assert (2, 2) not in res.visited


def test_start_must_be_passable():
    grid = grid_from_ascii(
        "###",
        "#.#",
        "###",
    )
    with pytest.raises(ValueError):
        analyze_reachability(grid, (0, 0))
    with pytest.raises(ValueError):
        analyze_reachability(grid, (5, 5))


def test_floor_regions_and_unreachable():
    grid = grid_from_ascii(
        "########",
        "#..#...#",
        "########",
    )
    regions = floor_regions(grid)
    assert [len(r) for r in regions] == [3, 2]
    assert not floor_is_connected(grid)
    assert unreachable_floor(grid, (1, 1)) == {(4, 1), (5, 1), (6, 1)}


def test_single_region_is_connected():
    grid = grid_from_ascii(
        "#####",
        "#.#.#",
        "#...#",
        "#####",
    )
    assert floor_is_connected(grid)
    assert unreachable_floor(grid, (1, 1)) == set()
