# geometry.py
import numpy as np
from typing import List, Tuple

# Import from other project modules
from grid_core import MazeGrid
import constants as const

Point = Tuple[int, int]
WallSegment = Tuple[Point, Point]


def extract_walls(
    grid: MazeGrid,
    cell_size: int = const.DEFAULT_CELL_SIZE,
    include_outer: bool = False,
) -> List[WallSegment]:
    """
    Converts the grid's right/bottom wall flags into line segments ((x1,y1), (x2,y2)).
    Column-major, top-to-bottom, right wall before bottom wall for each cell.
    With include_outer, the top and left canvas boundary (which no flag
    represents) is appended afterwards.
    """
    if cell_size <= 0:
        raise ValueError(f"Cell size must be positive (got {cell_size}).")
    print("--- Extracting Maze Walls ---")
    walls: List[WallSegment] = []

    for (col, row), cell in grid.get_all_cells():
        if cell.border_right:
            walls.append(
                (
                    ((col + 1) * cell_size, row * cell_size),
                    ((col + 1) * cell_size, (row + 1) * cell_size),
                )
            )
        if cell.border_bottom:
            walls.append(
                (
                    (col * cell_size, (row + 1) * cell_size),
                    ((col + 1) * cell_size, (row + 1) * cell_size),
                )
            )

    if include_outer:
        for col in range(grid.width):
            walls.append(((col * cell_size, 0), ((col + 1) * cell_size, 0)))
        for row in range(grid.height):
            walls.append(((0, row * cell_size), (0, (row + 1) * cell_size)))

    print(f"--- Wall Extraction Complete: Found {len(walls)} segments. ---")
    return walls


def walls_to_array(walls: List[WallSegment]) -> np.ndarray:
    """Stacks segments into an (n, 2, 2) float array."""
    if not walls:
        return np.zeros((0, 2, 2), dtype=float)
    return np.asarray(walls, dtype=float)


def extract_wall_bases_2d(
    walls: List[WallSegment], wall_thickness: float
) -> List[Tuple[Tuple[float, float], ...]]:
    """
    Extracts 2D wall base quads by offsetting each segment by half the
    thickness on both sides and past both ends (so corners overlap).
    Vertices are ordered counter-clockwise.
    """
    if wall_thickness <= const.GEOMETRY_TOLERANCE:
        raise ValueError("Wall thickness must be positive.")
    half = wall_thickness / 2.0
    bases = []
    for p1, p2 in walls:
        start = np.asarray(p1, dtype=float)
        end = np.asarray(p2, dtype=float)
        direction = end - start
        length = np.linalg.norm(direction)
        if length < const.GEOMETRY_TOLERANCE:
            continue  # Degenerate segment
        along = direction / length * half
        normal = np.array([-along[1], along[0]])
        a = start - along
        b = end + along
        quad = (
            tuple(a - normal),
            tuple(b - normal),
            tuple(b + normal),
            tuple(a + normal),
        )
        bases.append(tuple((float(x), float(y)) for x, y in quad))
    return bases
