# physics.py
from typing import Callable, Optional, Tuple

# Import from other project modules
from grid_core import MazeGrid
from utils import split_evenly, trunc_div
import constants as const

TiltSample = Tuple[int, int]


class TiltReadError(Exception):
    """Raised by a tilt reader when no sample is available for this tick."""


def momentum_from_tilt(raw_tilt: TiltSample, scale: int = const.MOMENTUM_SCALE) -> Tuple[int, int]:
    """
    Maps a raw tilt sample to a per-tick velocity.
    Negative x means the device tilts right, so x is negated; y is used as is.
    """
    x, y = raw_tilt
    return -trunc_div(int(x), scale), trunc_div(int(y), scale)


class Ball:
    """A circle with an integer center, moved once per tick."""

    def __init__(self, center: Tuple[int, int], radius: int):
        self.x, self.y = int(center[0]), int(center[1])
        self.radius = radius

    @property
    def center(self) -> Tuple[int, int]:
        return self.x, self.y

    def translate(self, dx: int, dy: int):
        self.x += dx
        self.y += dy

    def __repr__(self) -> str:
        return f"Ball(center={self.center}, radius={self.radius})"


class BallController:
    """
    Moves the ball under tilt input and resolves collisions against the
    canvas edges and the walls of a finished maze grid.
    """

    def __init__(
        self,
        grid: MazeGrid,
        cell_size: int = const.DEFAULT_CELL_SIZE,
        radius: int = const.BALL_RADIUS,
        screen_size: Optional[Tuple[int, int]] = None,
        start: Tuple[int, int] = const.BALL_START,
        sweep: bool = True,
    ):
        if cell_size <= 0:
            raise ValueError(f"Cell size must be positive (got {cell_size}).")
        if radius <= 0:
            raise ValueError(f"Ball radius must be positive (got {radius}).")
        if 2 * radius >= cell_size:
            raise ValueError(
                f"Ball radius ({radius}) must be less than half the cell size ({cell_size})."
            )
        grid_width, grid_height = grid.extent(cell_size)
        screen_width, screen_height = screen_size or (grid_width, grid_height)
        if not (2 * radius < screen_width <= grid_width and 2 * radius < screen_height <= grid_height):
            raise ValueError(
                f"Canvas {screen_width}x{screen_height} must fit the ball and lie within "
                f"the {grid_width}x{grid_height} maze."
            )
        if not (
            radius <= start[0] <= screen_width - radius
            and radius <= start[1] <= screen_height - radius
        ):
            raise ValueError(f"Start position {start} is outside the canvas.")

        self.grid = grid
        self.cell_size = cell_size
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.sweep = sweep
        # A step no longer than the ball diameter always lands in the straddle window of a boundary it crosses
        self.step_limit = min(const.MOMENTUM_LIMIT, 2 * radius)
        self.ball = Ball(start, radius)
        self.momentum: Tuple[int, int] = (0, 0)

    @property
    def center(self) -> Tuple[int, int]:
        return self.ball.center

    @property
    def radius(self) -> int:
        return self.ball.radius

    def update(self, raw_tilt: TiltSample) -> Tuple[int, int]:
        """Advances one tick from a raw tilt sample and returns the new center."""
        self.momentum = momentum_from_tilt(raw_tilt)
        for dx, dy in self._sub_steps(*self.momentum):
            self._step(dx, dy)
        return self.ball.center

    def tick(self, read_tilt: Callable[[], TiltSample]) -> Tuple[int, int]:
        """Reads the sensor and updates; a failed read becomes a motionless tick."""
        try:
            sample = read_tilt()
        except (TiltReadError, OSError) as e:
            print(f"  Warning: tilt read failed ({e}); holding position this tick.")
            sample = (0, 0)
        return self.update(sample)

    def _sub_steps(self, mx: int, my: int):
        distance = max(abs(mx), abs(my))
        if not self.sweep or distance <= self.step_limit:
            return [(mx, my)]
        parts = -(-distance // self.step_limit)
        return list(zip(split_evenly(mx, parts), split_evenly(my, parts)))

    def _step(self, dx: int, dy: int):
        prev_x, prev_y = self.ball.x, self.ball.y
        self.ball.translate(dx, dy)
        self._clamp_to_canvas()
        self._resolve_walls(prev_x, prev_y)
        self._clamp_to_canvas()

    def _clamp_to_canvas(self):
        ball, r = self.ball, self.ball.radius
        if ball.x + r >= self.screen_width:
            ball.x = self.screen_width - r
        if ball.x - r <= 0:
            ball.x = r
        if ball.y + r >= self.screen_height:
            ball.y = self.screen_height - r
        if ball.y - r <= 0:
            ball.y = r

    def cell_span(self) -> Tuple[int, int, int, int]:
        """(left, right, top, bottom) cell indices covered by the ball's bounding box."""
        ball, r, size = self.ball, self.ball.radius, self.cell_size
        left = (ball.x - r) // size
        right = min((ball.x + r) // size, self.grid.width - 1)
        top = (ball.y - r) // size
        bottom = min((ball.y + r) // size, self.grid.height - 1)
        return left, right, top, bottom

    def current_cell(self) -> Tuple[int, int]:
        return self.ball.x // self.cell_size, self.ball.y // self.cell_size

    def _snap(self, index: int, previous: int) -> int:
        """Center coordinate just clear of the wall after cell `index`, on the side the ball came from."""
        wall = (index + 1) * self.cell_size
        offset = self.ball.radius + const.WALL_CLEARANCE
        return wall - offset if previous < wall else wall + offset

    def _resolve_walls(self, prev_x: int, prev_y: int):
        grid = self.grid
        left, right, top, bottom = self.cell_span()
        if left != right and (
            grid.get_cell(left, top).border_right
            or (top != bottom and grid.get_cell(left, bottom).border_right)
        ):
            self.ball.x = self._snap(left, prev_x)
            left, right, top, bottom = self.cell_span()

        if top != bottom and (
            grid.get_cell(left, top).border_bottom
            or (left != right and grid.get_cell(right, top).border_bottom)
        ):
            self.ball.y = self._snap(top, prev_y)
