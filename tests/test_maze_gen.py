"""Tests for depth-first maze carving."""

import numpy as np
import pytest

from maze_gen import generate_maze
from utils import RecordingRandomSource, ReplayRandomSource, SeededRandomSource
from visualization import distance_map


class TestSpanningTree:
    @pytest.mark.parametrize("width,height", [(1, 1), (1, 5), (5, 1), (2, 2), (7, 4), (21, 31)])
    @pytest.mark.parametrize("seed", [0, 1, 1234])
    def test_removes_exactly_cells_minus_one(self, width, height, seed):
        grid = generate_maze(width, height, SeededRandomSource(seed))
        assert grid.count_removed_walls() == width * height - 1

    @pytest.mark.parametrize("width,height", [(3, 3), (8, 5), (21, 31)])
    def test_every_cell_reachable(self, width, height):
        grid = generate_maze(width, height, SeededRandomSource(99))
        assert np.all(distance_map(grid, (0, 0)) >= 0)

    def test_outer_walls_untouched(self):
        grid = generate_maze(6, 4, SeededRandomSource(3))
        flags = grid.wall_flags()
        assert flags[-1, :, 0].all()
        assert flags[:, -1, 1].all()

    def test_all_cells_visited(self):
        grid = generate_maze(5, 5, SeededRandomSource(5))
        assert all(cell.visited for _, cell in grid.get_all_cells())

    def test_works_with_large_draws(self):
        grid = generate_maze(4, 4, ReplayRandomSource([0xFFFFFFFF, 0x80000001]))
        assert grid.count_removed_walls() == 15


class TestScenarios:
    def test_single_cell_removes_nothing(self):
        grid = generate_maze(1, 1, ReplayRandomSource([0]))
        cell = grid.get_cell(0, 0)
        assert cell.border_right and cell.border_bottom
        assert grid.count_removed_walls() == 0

    def test_two_by_one_always_zero(self):
        grid = generate_maze(2, 1, ReplayRandomSource([0]))
        assert not grid.get_cell(0, 0).border_right
        assert grid.get_cell(0, 0).border_bottom
        assert grid.get_cell(1, 0).border_right
        assert grid.count_removed_walls() == 1

    def test_two_by_two_first_candidate(self):
        """Always index 0: right, down, then left into the neighbour's flag."""
        grid = generate_maze(2, 2, ReplayRandomSource([0]))
        flags = grid.wall_flags()
        expected = np.array(
            [
                [[False, True], [False, True]],  # col 0: (0,0), (0,1)
                [[True, False], [True, True]],  # col 1: (1,0), (1,1)
            ]
        )
        assert np.array_equal(flags, expected)

    def test_two_by_two_second_candidate(self):
        """Always index 1: down, right, then up into the neighbour's flag."""
        grid = generate_maze(2, 2, ReplayRandomSource([1]))
        flags = grid.wall_flags()
        expected = np.array(
            [
                [[True, False], [False, True]],
                [[True, False], [True, True]],
            ]
        )
        assert np.array_equal(flags, expected)


class TestDeterminism:
    def test_same_seed_same_grid(self):
        a = generate_maze(9, 7, SeededRandomSource(2024))
        b = generate_maze(9, 7, SeededRandomSource(2024))
        assert np.array_equal(a.wall_flags(), b.wall_flags())

    def test_recorded_sequence_replays_identically(self):
        recorder = RecordingRandomSource(SeededRandomSource(11))
        original = generate_maze(10, 6, recorder)
        replayed = generate_maze(10, 6, recorder.replay())
        assert np.array_equal(original.wall_flags(), replayed.wall_flags())


class TestPreconditions:
    @pytest.mark.parametrize("width,height", [(0, 1), (1, 0), (0, 0)])
    def test_zero_size_fails_fast(self, width, height):
        with pytest.raises(ValueError):
            generate_maze(width, height, ReplayRandomSource([0]))
