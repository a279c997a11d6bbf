# Core grid Snake state and rules, independent from input/rendering code.
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import random


logger = logging.getLogger(__name__)

Position = tuple[int, int]  # (row, col)

# Bounds used by callers when validating user input.
MIN_GRID_SIZE = 1
MAX_GRID_SIZE = 60

# Screen-derived grid sizing (one cell per MIN_CELL_PIXELS, clamped).
MIN_CELL_PIXELS = 50
SCREEN_MIN_ROWS = 10
SCREEN_MIN_COLUMNS = 10
SCREEN_MAX_ROWS = 50
SCREEN_MAX_COLUMNS = 30

PLACEMENT_POLICIES = ("safe", "naive")
REVERSAL_POLICIES = ("allow_single", "block")

STATE_READY = "ready"
STATE_PLAYING = "playing"
STATE_GAME_OVER = "game_over"


class Direction(Enum):
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def delta(self) -> tuple[int, int]:
        return self.value

    @property
    def opposite(self) -> Direction:
        d_row, d_col = self.value
        return Direction((-d_row, -d_col))


@dataclass
class SnakeConfig:
    """Session settings for the engine."""
    rows: int = 11
    columns: int = 11
    placement: str = "safe"          # safe | naive
    reversal: str = "allow_single"   # allow_single | block
    seed: int | None = None


def grid_size_for_screen(width_px: int, height_px: int, min_cell: int = MIN_CELL_PIXELS) -> tuple[int, int]:
    """Pick (rows, columns) so each cell is at least `min_cell` pixels, within clamps."""
    if min_cell <= 0:
        raise ValueError("min_cell must be > 0")
    columns = min(max(width_px // min_cell, SCREEN_MIN_COLUMNS), SCREEN_MAX_COLUMNS)
    rows = min(max(height_px // min_cell, SCREEN_MIN_ROWS), SCREEN_MAX_ROWS)
    return rows, columns


class GridSnakeEngine:
    """Pure game state + rules for one grid session (no UI code)."""
    def __init__(self, config: SnakeConfig | None = None, rng: random.Random | None = None) -> None:
        self.config = config if config is not None else SnakeConfig()
        if self.config.placement not in PLACEMENT_POLICIES:
            raise ValueError(f"Unsupported placement policy: {self.config.placement}")
        if self.config.reversal not in REVERSAL_POLICIES:
            raise ValueError(f"Unsupported reversal policy: {self.config.reversal}")
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.rows = 0
        self.columns = 0
        self.reset(self.config.rows, self.config.columns)

    def reset(self, rows: int | None = None, columns: int | None = None) -> None:
        """Start a fresh session: one centered segment facing right, new apple."""
        rows = self.rows if rows is None else rows
        columns = self.columns if columns is None else columns
        if rows <= 0 or columns <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{columns}.")

        self.rows = rows
        self.columns = columns
        self.snake: list[Position] = [(rows // 2, columns // 2)]   # head at index 0
        self.direction = Direction.RIGHT
        self.score = 0
        self.game_over = False
        self.board_full = False
        self.started = False
        self.apple: Position = self.snake[0]
        self.spawn_apple()
        logger.debug("Reset %dx%d grid, apple at %s", rows, columns, self.apple)

    @property
    def grid_size(self) -> tuple[int, int]:
        return self.rows, self.columns

    @property
    def state(self) -> str:
        if self.game_over:
            return STATE_GAME_OVER
        return STATE_PLAYING if self.started else STATE_READY

    def in_bounds(self, position: Position) -> bool:
        row, col = position
        return 0 <= row < self.rows and 0 <= col < self.columns

    def _clamp(self, row: int, col: int) -> Position:
        # Walls pin the head at the boundary instead of ending the game.
        return min(max(row, 0), self.rows - 1), min(max(col, 0), self.columns - 1)

    def next_head(self, direction: Direction) -> Position:
        """Head position one clamped step in `direction`."""
        head_row, head_col = self.snake[0]
        d_row, d_col = direction.delta
        return self._clamp(head_row + d_row, head_col + d_col)

    def resolve_direction(self, requested: Direction) -> Direction:
        """Direction actually used for the next step under the reversal policy."""
        if requested is not self.direction.opposite:
            return requested
        if self.config.reversal == "allow_single" and len(self.snake) == 1:
            return requested
        return self.direction

    def move(self, requested: Direction) -> None:
        """Advance one step. No-op once the game is over."""
        if self.game_over:
            return

        self.started = True
        self.direction = self.resolve_direction(requested)
        new_head = self.next_head(self.direction)

        old_tail = self.snake[-1]
        # Shift the body toward the tail, then place the new head.
        for i in range(len(self.snake) - 1, 0, -1):
            self.snake[i] = self.snake[i - 1]
        self.snake[0] = new_head

        if new_head in self.snake[1:]:
            self.game_over = True
            logger.info("Game over: self-collision at %s (score %d)", new_head, self.score)
            return

        if new_head == self.apple:
            self.snake.append(old_tail)
            self.spawn_apple()
            self.score += 1

    def free_cells(self) -> list[Position]:
        occupied = set(self.snake)
        return [
            (row, col)
            for row in range(self.rows)
            for col in range(self.columns)
            if (row, col) not in occupied
        ]

    def spawn_apple(self) -> None:
        """Relocate the apple according to the configured placement policy."""
        if self.config.placement == "naive":
            self.apple = (self.rng.randrange(self.rows), self.rng.randrange(self.columns))
            return

        free = self.free_cells()
        if not free:
            # Snake fills the grid: keep the stale apple and flag the board.
            self.board_full = True
            logger.info("Board full at score %d; no apple spawned", self.score)
            return
        self.board_full = False
        self.apple = self.rng.choice(free)

    def place_apple(self, position: Position) -> None:
        """Force the apple onto a free cell (scripted setups and tests)."""
        if not self.in_bounds(position):
            raise ValueError(f"Apple position {position} is outside the {self.rows}x{self.columns} grid.")
        if self.config.placement == "safe" and tuple(position) in self.snake:
            raise ValueError(f"Apple position {position} is covered by the snake.")
        self.apple = (int(position[0]), int(position[1]))

    def load_snake(self, segments: list[Position], direction: Direction = Direction.RIGHT) -> None:
        """Replace the snake body (head first) for scripted setups and tests."""
        body = [(int(row), int(col)) for row, col in segments]
        if not body:
            raise ValueError("Snake needs at least one segment.")
        for segment in body:
            if not self.in_bounds(segment):
                raise ValueError(f"Segment {segment} is outside the {self.rows}x{self.columns} grid.")
        if len(set(body)) != len(body):
            raise ValueError("Snake segments must not overlap.")
        self.snake = body
        self.direction = direction
        if self.config.placement == "safe" and (self.board_full or self.apple in body):
            self.spawn_apple()

    # Query surface used by renderers and input adapters.
    def get_snake_segments(self) -> list[Position]:
        return list(self.snake)

    def get_apple_position(self) -> Position:
        return self.apple

    def get_score(self) -> int:
        return self.score

    def is_game_over(self) -> bool:
        return self.game_over

    def is_board_full(self) -> bool:
        return self.board_full

    def get_direction(self) -> Direction:
        return self.direction
