# --- Grid Structure ---
DEFAULT_GRID_WIDTH = 21  # Columns
DEFAULT_GRID_HEIGHT = 31  # Rows
DEFAULT_CELL_SIZE = 16  # Canvas units per cell edge

# --- Ball ---
BALL_RADIUS = 6
BALL_START = (56, 8)  # Center, canvas units

# --- Tilt / Momentum ---
MOMENTUM_SCALE = 200  # Raw tilt units per canvas unit of motion
MOMENTUM_LIMIT = 8  # Largest sub-step when sweeping fast motion (further capped at the ball diameter)
WALL_CLEARANCE = 1  # Gap left between a snapped ball and the wall line

# --- Pump ---
UPDATE_RATE_MS = 50

# --- RNG ---
U32_MASK = 0xFFFFFFFF

# --- 2D STL Export ---
MAZE_2D_WALL_THICKNESS = 2.0
MAZE_2D_WALL_HEIGHT = 8.0
MAZE_2D_BASE_HEIGHT = MAZE_2D_WALL_HEIGHT / 3.0  # Configurable base height

# --- Tolerances ---
GEOMETRY_TOLERANCE = 1e-9  # For floating point comparisons

# --- Visualization ---
VIS_CONN_UNREACHABLE_COLOR = "lightgrey"
VIS_WALL_LINE_STYLE = "k-"
VIS_WALL_LINE_LW = 1.5
VIS_WALL_LINE_ALPHA = 0.7  # Used in solution plot walls
VIS_SOLUTION_LINE_STYLE = "r-"
VIS_SOLUTION_LINE_LW = 2.0
VIS_SOLUTION_LINE_ALPHA = 0.9
VIS_TRACE_LINE_STYLE = "b-"
VIS_TRACE_LINE_LW = 0.8
VIS_TRACE_LINE_ALPHA = 0.6
VIS_ENTRY_MARKER = "go"
VIS_ENTRY_MARKER_SIZE = 6
VIS_EXIT_MARKER = "ro"
VIS_EXIT_MARKER_SIZE = 6
VIS_BALL_FACE_COLOR = "dimgrey"
VIS_BALL_EDGE_COLOR = "black"
