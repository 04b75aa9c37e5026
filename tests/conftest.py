"""Shared fixtures for maze and ball tests."""

import matplotlib

matplotlib.use("Agg")

import pytest

from grid_core import MazeGrid


def open_grid(width, height):
    """Grid with every interior wall removed (not a maze, handy for physics)."""
    grid = MazeGrid(width, height)
    for (col, row), cell in grid.get_all_cells():
        if col < width - 1:
            cell.border_right = False
        if row < height - 1:
            cell.border_bottom = False
    return grid


@pytest.fixture
def walled_grid():
    """4x4 grid with every wall still standing (64x64 canvas at cell size 16)."""
    return MazeGrid(4, 4)


@pytest.fixture
def empty_grid():
    """4x4 grid with only the outer walls."""
    return open_grid(4, 4)
