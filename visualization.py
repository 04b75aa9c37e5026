# visualization.py
import matplotlib.pyplot as plt
import matplotlib.cm as cm
import matplotlib.colors as mcolors
import numpy as np
from collections import deque
from typing import Dict, List, Optional, Sequence, Tuple

# Import from other project modules
from grid_core import MazeGrid
from geometry import WallSegment, extract_walls
import constants as const

CellIndex = Tuple[int, int]


# --- Pathfinding (Often used with visualization) ---
def find_solution_path(
    grid: MazeGrid, start_cell: CellIndex, end_cell: CellIndex
) -> Optional[List[CellIndex]]:
    """Finds the shortest path between two cells using Breadth-First Search through open walls."""
    print(f"--- Finding path from {start_cell} to {end_cell} ---")
    if not (grid.in_bounds(*start_cell) and grid.in_bounds(*end_cell)):
        print("ERROR: Invalid start or end cell provided.")
        return None

    queue = deque([start_cell])
    # Keep track of predecessors to reconstruct the path
    predecessor: Dict[CellIndex, Optional[CellIndex]] = {start_cell: None}
    path_found = False

    while queue:
        current = queue.popleft()
        if current == end_cell:
            path_found = True
            break
        for neighbour in grid.open_neighbours(*current):
            if neighbour not in predecessor:
                predecessor[neighbour] = current
                queue.append(neighbour)

    if not path_found:
        print("  Path not found!")
        return None

    path: List[CellIndex] = []
    curr: Optional[CellIndex] = end_cell
    while curr is not None:
        path.append(curr)
        curr = predecessor[curr]
    path.reverse()

    print(f"  Path length: {len(path)} cells.")
    return path


def distance_map(grid: MazeGrid, start_cell: CellIndex = (0, 0)) -> np.ndarray:
    """BFS distance (in moves) from start_cell to every cell, indexed [col, row]; -1 marks unreachable cells."""
    distances = np.full((grid.width, grid.height), -1, dtype=int)
    distances[start_cell] = 0
    queue = deque([start_cell])
    while queue:
        current = queue.popleft()
        for neighbour in grid.open_neighbours(*current):
            if distances[neighbour] == -1:
                distances[neighbour] = distances[current] + 1
                queue.append(neighbour)
    return distances


# --- Visualization Helpers ---
def _setup_canvas_plot(grid: MazeGrid, cell_size: int) -> Tuple[plt.Figure, plt.Axes]:
    """Creates an axis in canvas units with y pointing down, like the screen."""
    width, height = grid.extent(cell_size)
    fig, ax = plt.subplots(figsize=(6, 6 * height / width))
    ax.set_xlim(-1, width + 1)
    ax.set_ylim(height + 1, -1)
    ax.set_aspect("equal")
    ax.set_xticks([])
    ax.set_yticks([])
    return fig, ax


def _cell_center(cell: CellIndex, cell_size: int) -> Tuple[float, float]:
    return (cell[0] + 0.5) * cell_size, (cell[1] + 0.5) * cell_size


def _draw_walls(ax: plt.Axes, walls: Sequence[WallSegment]):
    for (x1, y1), (x2, y2) in walls:
        ax.plot(
            [x1, x2],
            [y1, y2],
            const.VIS_WALL_LINE_STYLE,
            lw=const.VIS_WALL_LINE_LW,
            alpha=const.VIS_WALL_LINE_ALPHA,
        )


def _draw_entry_exit(ax: plt.Axes, entry: CellIndex, exit_: CellIndex, cell_size: int):
    ax.plot(*_cell_center(entry, cell_size), const.VIS_ENTRY_MARKER,
            markersize=const.VIS_ENTRY_MARKER_SIZE, label="Entry")
    ax.plot(*_cell_center(exit_, cell_size), const.VIS_EXIT_MARKER,
            markersize=const.VIS_EXIT_MARKER_SIZE, label="Exit")


# --- Main Visualization Functions ---

def visualize_maze_walls(
    grid: MazeGrid,
    cell_size: int = const.DEFAULT_CELL_SIZE,
    filename="maze_walls.png",
    ball_trace: Optional[Sequence[Tuple[int, int]]] = None,
    ball_radius: int = const.BALL_RADIUS,
):
    """Draws the maze walls and, optionally, the path the ball travelled."""
    print(f"--- Generating Maze Walls Visualization: {filename} ---")
    try:
        fig, ax = _setup_canvas_plot(grid, cell_size)
        _draw_walls(ax, extract_walls(grid, cell_size, include_outer=True))
        if ball_trace:
            xs = [p[0] for p in ball_trace]
            ys = [p[1] for p in ball_trace]
            ax.plot(xs, ys, const.VIS_TRACE_LINE_STYLE,
                    lw=const.VIS_TRACE_LINE_LW, alpha=const.VIS_TRACE_LINE_ALPHA)
            ax.add_patch(
                plt.Circle(ball_trace[-1], ball_radius,
                           facecolor=const.VIS_BALL_FACE_COLOR,
                           edgecolor=const.VIS_BALL_EDGE_COLOR)
            )
            ax.set_title(f"Maze Walls (ball trace, {len(ball_trace)} ticks)")
        else:
            ax.set_title("Maze Walls")
        plt.savefig(filename, dpi=150, bbox_inches="tight")
        plt.close(fig)
        print(f"  Walls visualization saved to {filename}")
    except ImportError:
        print("ERROR: Matplotlib not found, cannot generate visualization.")
    except Exception as e:
        print(f"ERROR during visualization: {e}")


def visualize_maze_solution(
    grid: MazeGrid,
    cell_size: int = const.DEFAULT_CELL_SIZE,
    filename="maze_solution.png",
    start_cell: CellIndex = (0, 0),
    end_cell: Optional[CellIndex] = None,
):
    """Finds and visualizes the path between two cells (default: opposite corners)."""
    print(f"--- Generating Maze Solution Visualization: {filename} ---")
    end_cell = end_cell or (grid.width - 1, grid.height - 1)
    solution_path = find_solution_path(grid, start_cell, end_cell)
    if not solution_path:
        print("  Could not find solution path, cannot visualize.")
        return

    try:
        fig, ax = _setup_canvas_plot(grid, cell_size)
        _draw_walls(ax, extract_walls(grid, cell_size, include_outer=True))
        centers = [_cell_center(cell, cell_size) for cell in solution_path]
        ax.plot([c[0] for c in centers], [c[1] for c in centers],
                const.VIS_SOLUTION_LINE_STYLE,
                lw=const.VIS_SOLUTION_LINE_LW,
                alpha=const.VIS_SOLUTION_LINE_ALPHA)
        _draw_entry_exit(ax, start_cell, end_cell, cell_size)
        ax.set_title(f"Maze Solution Path ({len(solution_path)} cells)")
        plt.savefig(filename, dpi=150, bbox_inches="tight")
        plt.close(fig)
        print(f"  Solution visualization saved to {filename}")
    except ImportError:
        print("ERROR: Matplotlib not found, cannot generate visualization.")
    except Exception as e:
        print(f"ERROR during visualization: {e}")


def visualize_maze_connectivity(
    grid: MazeGrid,
    cell_size: int = const.DEFAULT_CELL_SIZE,
    filename="maze_connectivity.png",
    start_cell: CellIndex = (0, 0),
):
    """Colors every cell by its distance from the start cell."""
    print(f"--- Generating Connectivity Visualization: {filename} ---")
    distances = distance_map(grid, start_cell)
    reachable = int(np.count_nonzero(distances >= 0))
    max_distance = int(distances.max())
    print(f"  Connectivity check visited {reachable}/{grid.size()} cells.")
    if reachable < grid.size():
        print("  WARNING: Not all cells are reachable from the start cell!")

    try:
        fig, ax = _setup_canvas_plot(grid, cell_size)
        cmap = cm.viridis
        norm = mcolors.Normalize(vmin=0, vmax=max(1, max_distance))
        width, height = grid.extent(cell_size)
        # imshow expects [row, col]
        colors = cmap(norm(distances.T))
        colors[distances.T < 0] = mcolors.to_rgba(const.VIS_CONN_UNREACHABLE_COLOR)
        ax.imshow(colors, extent=(0, width, height, 0), interpolation="nearest")
        _draw_walls(ax, extract_walls(grid, cell_size, include_outer=True))

        sm = plt.cm.ScalarMappable(cmap=cmap, norm=norm)
        sm.set_array([])
        cbar = plt.colorbar(sm, ax=ax, shrink=0.7, aspect=20, pad=0.04)
        cbar.set_label(f"Distance from Start Cell {start_cell}")

        ax.set_title(f"Maze Connectivity ({reachable}/{grid.size()} Reachable)")
        plt.savefig(filename, dpi=150, bbox_inches="tight")
        plt.close(fig)
        print(f"  Connectivity visualization saved to {filename}")
    except ImportError:
        print("ERROR: Matplotlib not found, cannot generate visualization.")
    except Exception as e:
        print(f"ERROR during visualization: {e}")
