# Shared helpers: run config, board encoding, headless episodes, and statistics.
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

try:
    from .game_logic import GridSnakeEngine, SnakeConfig
    from .policies import Policy
except ImportError:
    from game_logic import GridSnakeEngine, SnakeConfig
    from policies import Policy


EMPTY_CELL = 0.0
APPLE_CELL = 0.5
BODY_CELL = -0.5
HEAD_CELL = 1.0


@dataclass
class RunConfig:
    rows: int = 11
    columns: int = 11
    games: int = 100
    max_steps: int = 500
    policy: str = "greedy"          # random | greedy
    placement: str = "safe"
    reversal: str = "allow_single"
    seed: int | None = None


@dataclass
class EpisodeResult:
    score: int
    length: int
    steps: int
    game_over: bool
    board_full: bool


def make_engine(cfg: RunConfig, seed: int | None = None) -> GridSnakeEngine:
    game_cfg = SnakeConfig(
        rows=cfg.rows,
        columns=cfg.columns,
        placement=cfg.placement,
        reversal=cfg.reversal,
        seed=cfg.seed if seed is None else seed,
    )
    return GridSnakeEngine(game_cfg)


def encode_board(engine: GridSnakeEngine) -> np.ndarray:
    """
    Board as a (rows, columns) float32 grid:
    - 0.0: empty
    - 0.5: apple
    - -0.5: snake body
    - 1.0: snake head
    """
    board = np.full((engine.rows, engine.columns), EMPTY_CELL, dtype=np.float32)

    if not engine.is_board_full():
        row, col = engine.get_apple_position()
        board[row, col] = APPLE_CELL

    # Body first so the head wins if the final frame overlaps it.
    segments = engine.get_snake_segments()
    for row, col in segments[1:]:
        board[row, col] = BODY_CELL
    head_row, head_col = segments[0]
    board[head_row, head_col] = HEAD_CELL
    return board


def board_to_text(engine: GridSnakeEngine) -> str:
    """
    Text view of the board, row 0 on top:
    . = empty, A = apple, H = head, o = body
    """
    symbols = {EMPTY_CELL: ".", APPLE_CELL: "A", BODY_CELL: "o", HEAD_CELL: "H"}
    board = encode_board(engine)
    return "\n".join(" ".join(symbols[float(cell)] for cell in row) for row in board)


def run_episode(engine: GridSnakeEngine, policy: Policy, max_steps: int = 500) -> EpisodeResult:
    """Play one game from a fresh reset until it ends or `max_steps` is reached."""
    if max_steps <= 0:
        raise ValueError("max_steps must be > 0")

    engine.reset()
    steps_taken = 0
    for step in range(max_steps):
        if engine.is_game_over() or engine.is_board_full():
            break
        engine.move(policy.choose(engine))
        steps_taken = step + 1

    return EpisodeResult(
        score=engine.get_score(),
        length=len(engine.get_snake_segments()),
        steps=steps_taken,
        game_over=engine.is_game_over(),
        board_full=engine.is_board_full(),
    )


def score_bands(scores: list[float], chunk_size: int) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Per-chunk (end game index, mean, 25th percentile, 75th percentile) for the score chart."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")

    arr = np.asarray(scores, dtype=np.float32)
    if arr.size == 0:
        empty = np.array([], dtype=np.float32)
        return empty, empty, empty, empty

    chunks = np.array_split(arr, list(range(chunk_size, arr.size, chunk_size)))
    x_end = np.cumsum([chunk.size for chunk in chunks]).astype(np.float32)
    bands = np.array(
        [(chunk.mean(), np.percentile(chunk, 25), np.percentile(chunk, 75)) for chunk in chunks],
        dtype=np.float32,
    )
    return x_end, bands[:, 0], bands[:, 1], bands[:, 2]
