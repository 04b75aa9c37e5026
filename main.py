# main.py
import math
import os
import time
import traceback
from typing import Callable, List, Optional, Tuple

# Import project modules
import constants as const
from utils import SeededRandomSource, SystemRandomSource
from maze_gen import generate_maze
from geometry import extract_walls
from physics import BallController, TiltReadError
from mesh_builder import create_2d_maze_stl
from visualization import (
    visualize_maze_connectivity,
    visualize_maze_solution,
    visualize_maze_walls,
)


class SimulatedTiltSensor:
    """
    Stand-in for the accelerometer: sweeps the tilt around a slow circle.
    Every `drop_every`-th read fails, exercising the controller's fallback.
    """

    def __init__(self, amplitude: int = 1500, period_ticks: int = 120, drop_every: int = 0):
        self.amplitude = amplitude
        self.period_ticks = period_ticks
        self.drop_every = drop_every
        self.reads = 0

    def read(self) -> Tuple[int, int]:
        self.reads += 1
        if self.drop_every and self.reads % self.drop_every == 0:
            raise TiltReadError(f"sample {self.reads} dropped")
        phase = 2 * math.pi * self.reads / self.period_ticks
        return (
            int(-self.amplitude * math.cos(phase)),
            int(self.amplitude * math.sin(phase)),
        )


class TickPump:
    """Calls controller.tick() once per period until stopped or out of ticks."""

    def __init__(
        self,
        controller: BallController,
        read_tilt: Callable[[], Tuple[int, int]],
        period_ms: int = const.UPDATE_RATE_MS,
    ):
        self.controller = controller
        self.read_tilt = read_tilt
        self.period_ms = period_ms
        self.running = False
        self.trace: List[Tuple[int, int]] = [controller.center]

    def stop(self):
        self.running = False

    def run(self, ticks: int) -> List[Tuple[int, int]]:
        self.running = True
        for _ in range(ticks):
            if not self.running:
                break
            self.trace.append(self.controller.tick(self.read_tilt))
            if self.period_ms > 0:
                time.sleep(self.period_ms / 1000.0)
        self.running = False
        return self.trace


def run_labyrinth_simulation(
    ticks: int = 400,
    seed: Optional[int] = None,
    period_ms: int = 0,
    output_dir: str = "output",
):
    start_time = time.time()
    os.makedirs(output_dir, exist_ok=True)

    print("\n--- Configuration ---")
    width, height = const.DEFAULT_GRID_WIDTH, const.DEFAULT_GRID_HEIGHT
    cell_size = const.DEFAULT_CELL_SIZE
    print(f"  Grid: {width}x{height}, Cell Size: {cell_size}")
    print(f"  Ball Radius: {const.BALL_RADIUS}, Start: {const.BALL_START}")
    print(f"  Ticks: {ticks}, Period: {period_ms} ms, Seed: {seed}")

    random_source = SeededRandomSource(seed) if seed is not None else SystemRandomSource()
    grid = generate_maze(width, height, random_source)
    walls = extract_walls(grid, cell_size)
    print(f"  Maze has {len(walls)} wall segments, {grid.count_removed_walls()} passages.")

    # === Ball Simulation ===
    print("\n--- Running Ball Simulation ---")
    trace: List[Tuple[int, int]] = []
    try:
        controller = BallController(grid, cell_size=cell_size)
        sensor = SimulatedTiltSensor(drop_every=50)
        pump = TickPump(controller, sensor.read, period_ms=period_ms)
        trace = pump.run(ticks)
        print(f"  Ball finished at {controller.center} after {len(trace) - 1} ticks.")
    except Exception as e:
        print(f"ERROR during simulation: {e}")
        traceback.print_exc()

    # --- Visualizations ---
    print("\n--- Generating Visualizations ---")
    visualize_maze_walls(grid, cell_size, filename=os.path.join(output_dir, "maze_walls.png"),
                         ball_trace=trace)
    visualize_maze_solution(grid, cell_size, filename=os.path.join(output_dir, "maze_solution.png"))
    visualize_maze_connectivity(grid, cell_size, filename=os.path.join(output_dir, "maze_connectivity.png"))

    # --- Create 2D Flat STL ---
    print("\n--- Generating 2D Flat STL ---")
    try:
        create_2d_maze_stl(
            extract_walls(grid, cell_size, include_outer=True),
            grid.extent(cell_size),
            output_filename=os.path.join(output_dir, "maze_2d_flat.stl"),
        )
    except Exception as e:
        print(f"An error occurred during 2D STL generation: {e}")
        traceback.print_exc()

    end_time = time.time()
    print(f"\n--- Total Execution Time: {end_time - start_time:.2f} seconds ---")


if __name__ == "__main__":
    run_labyrinth_simulation()
