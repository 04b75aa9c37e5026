# maze_gen.py
from typing import List, Tuple

# Import from other project modules
from grid_core import MazeGrid
from utils import RandomSource


def generate_maze(width: int, height: int, random_source: RandomSource) -> MazeGrid:
    """
    Generates a perfect maze using randomized iterative depth-first carving.
    The stack holds (col, row) indices into the grid; each step draws one
    unvisited neighbour with `random_source.next_u32() % count`, candidates
    taken in LEFT, UP, RIGHT, DOWN order.
    """
    print(f"--- Starting Maze Generation ({width}x{height}, Depth-First Carving) ---")
    grid = MazeGrid(width, height)  # Raises on zero-size grids

    stack: List[Tuple[int, int]] = [(0, 0)]
    grid.get_cell(0, 0).mark_visited()
    visited_count = 1
    removed_walls = 0

    while stack:
        col, row = stack[-1]
        candidates = grid.unvisited_neighbours(col, row)

        if not candidates:
            # Dead end, backtrack
            stack.pop()
            continue

        move_index = random_source.next_u32() % len(candidates)
        direction, n_col, n_row = candidates[move_index]
        grid.get_cell(n_col, n_row).mark_visited()
        grid.remove_wall(col, row, direction)
        stack.append((n_col, n_row))
        visited_count += 1
        removed_walls += 1

    print(
        f"--- Maze Generation Complete: Visited {visited_count}/{grid.size()} cells, "
        f"removed {removed_walls} walls. ---"
    )

    # Sanity check: every cell must have been reached
    if visited_count != grid.size():
        print(f"ERROR: MAZE GENERATION FAILED TO VISIT ALL CELLS! Visited {visited_count}/{grid.size()}.")
        raise RuntimeError("Maze generation left unvisited cells.")

    return grid
