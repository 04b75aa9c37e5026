# grid_core.py
import numpy as np
from enum import Enum
from typing import Iterator, List, Tuple


class Direction(Enum):
    """
    Grid-adjacent moves, in the order neighbours are considered during carving.
    Each member carries its offset, the flag that represents the boundary it
    crosses, and whether that flag is stored on the neighbour or on the
    current cell (only right/bottom walls are stored).
    """

    LEFT = (-1, 0, "border_right", True)
    UP = (0, -1, "border_bottom", True)
    RIGHT = (1, 0, "border_right", False)
    DOWN = (0, 1, "border_bottom", False)

    def __init__(self, dx: int, dy: int, flag: str, on_neighbour: bool):
        self.dx = dx
        self.dy = dy
        self.flag = flag
        self.on_neighbour = on_neighbour


class Cell:
    """Wall and visited state of a single grid position."""

    def __init__(self):
        self.border_right: bool = True
        self.border_bottom: bool = True
        self.visited: bool = False  # Used by maze generation only

    def mark_visited(self):
        self.visited = True

    def unmark_visited(self):
        self.visited = False

    def __repr__(self) -> str:
        return (
            f"Cell(right={self.border_right}, bottom={self.border_bottom}, "
            f"visited={self.visited})"
        )


class MazeGrid:
    """
    Rectangular arena of cells addressed by (col, row).
    Cells are stored column-major: cells[col][row].
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(
                f"Grid dimensions must be positive (got {width}x{height})."
            )
        self.width = width
        self.height = height
        self.cells: List[List[Cell]] = [
            [Cell() for _ in range(height)] for _ in range(width)
        ]

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def get_cell(self, col: int, row: int) -> Cell:
        """Retrieves a cell; out-of-range indices are a programming error."""
        if not self.in_bounds(col, row):
            raise IndexError(
                f"Cell ({col}, {row}) outside {self.width}x{self.height} grid."
            )
        return self.cells[col][row]

    def neighbours(self, col: int, row: int) -> Iterator[Tuple[Direction, int, int]]:
        """Yields in-bounds neighbours in LEFT, UP, RIGHT, DOWN order."""
        for direction in Direction:
            n_col, n_row = col + direction.dx, row + direction.dy
            if self.in_bounds(n_col, n_row):
                yield direction, n_col, n_row

    def unvisited_neighbours(self, col: int, row: int) -> List[Tuple[Direction, int, int]]:
        return [
            (direction, n_col, n_row)
            for direction, n_col, n_row in self.neighbours(col, row)
            if not self.cells[n_col][n_row].visited
        ]

    def _wall_owner(self, col: int, row: int, direction: Direction) -> Cell:
        if direction.on_neighbour:
            return self.get_cell(col + direction.dx, row + direction.dy)
        return self.get_cell(col, row)

    def remove_wall(self, col: int, row: int, direction: Direction):
        """Clears the flag separating (col, row) from its neighbour in `direction`."""
        if not self.in_bounds(col + direction.dx, row + direction.dy):
            raise IndexError(
                f"No neighbour {direction.name} of ({col}, {row}); outer walls are fixed."
            )
        setattr(self._wall_owner(col, row, direction), direction.flag, False)

    def has_wall(self, col: int, row: int, direction: Direction) -> bool:
        """True if movement from (col, row) in `direction` is blocked. The outer boundary always blocks."""
        if not self.in_bounds(col, row):
            raise IndexError(
                f"Cell ({col}, {row}) outside {self.width}x{self.height} grid."
            )
        if not self.in_bounds(col + direction.dx, row + direction.dy):
            return True
        return getattr(self._wall_owner(col, row, direction), direction.flag)

    def open_neighbours(self, col: int, row: int) -> List[Tuple[int, int]]:
        """Cells reachable from (col, row) in one move through a missing wall."""
        return [
            (n_col, n_row)
            for direction, n_col, n_row in self.neighbours(col, row)
            if not self.has_wall(col, row, direction)
        ]

    def reset_visited(self):
        for _, cell in self.get_all_cells():
            cell.unmark_visited()

    def wall_flags(self) -> np.ndarray:
        """Boolean array (width, height, 2): [..., 0] right walls, [..., 1] bottom walls."""
        flags = np.zeros((self.width, self.height, 2), dtype=bool)
        for (col, row), cell in self.get_all_cells():
            flags[col, row, 0] = cell.border_right
            flags[col, row, 1] = cell.border_bottom
        return flags

    def count_removed_walls(self) -> int:
        # Outer right/bottom flags are never cleared, so every cleared flag is an interior passage.
        return int(np.count_nonzero(~self.wall_flags()))

    def size(self) -> int:
        return self.width * self.height

    def get_all_cells(self) -> Iterator[Tuple[Tuple[int, int], Cell]]:
        """Column-major iteration, top-to-bottom within each column."""
        for col, column in enumerate(self.cells):
            for row, cell in enumerate(column):
                yield (col, row), cell

    def extent(self, cell_size: int) -> Tuple[int, int]:
        """Canvas size covered by the grid."""
        return self.width * cell_size, self.height * cell_size

    def __repr__(self) -> str:
        return f"MazeGrid({self.width}x{self.height})"
