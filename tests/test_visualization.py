"""Tests for path finding and the matplotlib renderings."""

import numpy as np

from grid_core import MazeGrid
from maze_gen import generate_maze
from utils import ReplayRandomSource, SeededRandomSource
from visualization import (
    distance_map,
    find_solution_path,
    visualize_maze_connectivity,
    visualize_maze_solution,
    visualize_maze_walls,
)


class TestPathFinding:
    def test_path_through_carved_maze(self):
        grid = generate_maze(2, 2, ReplayRandomSource([0]))
        assert find_solution_path(grid, (0, 0), (1, 1)) == [(0, 0), (1, 0), (1, 1)]

    def test_no_path_in_walled_grid(self):
        assert find_solution_path(MazeGrid(2, 2), (0, 0), (1, 1)) is None

    def test_invalid_endpoint(self):
        assert find_solution_path(MazeGrid(2, 2), (0, 0), (5, 5)) is None

    def test_distance_map(self):
        grid = generate_maze(2, 2, ReplayRandomSource([0]))
        distances = distance_map(grid, (0, 0))
        assert distances.tolist() == [[0, 3], [1, 2]]

    def test_distance_map_marks_unreachable(self):
        distances = distance_map(MazeGrid(2, 1), (0, 0))
        assert distances.tolist() == [[0], [-1]]


class TestRendering:
    def test_walls_with_trace(self, tmp_path):
        grid = generate_maze(5, 4, SeededRandomSource(1))
        filename = tmp_path / "walls.png"
        visualize_maze_walls(grid, 16, filename=str(filename), ball_trace=[(8, 8), (12, 8)])
        assert filename.exists()

    def test_solution(self, tmp_path):
        grid = generate_maze(5, 4, SeededRandomSource(1))
        filename = tmp_path / "solution.png"
        visualize_maze_solution(grid, 16, filename=str(filename))
        assert filename.exists()

    def test_connectivity(self, tmp_path):
        grid = generate_maze(5, 4, SeededRandomSource(1))
        filename = tmp_path / "connectivity.png"
        visualize_maze_connectivity(grid, 16, filename=str(filename))
        assert filename.exists()

    def test_connectivity_with_unreachable_cells(self, tmp_path):
        filename = tmp_path / "walled.png"
        visualize_maze_connectivity(MazeGrid(3, 3), 16, filename=str(filename))
        assert filename.exists()
        assert np.count_nonzero(distance_map(MazeGrid(3, 3)) < 0) == 8
