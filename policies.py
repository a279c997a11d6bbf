# Scripted drivers for headless games (stand-ins for a player tilting the device).
from __future__ import annotations

import random
from typing import Protocol

try:
    from .game_logic import Direction, GridSnakeEngine
except ImportError:
    from game_logic import Direction, GridSnakeEngine


DIRECTIONS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


class Policy(Protocol):
    def choose(self, engine: GridSnakeEngine) -> Direction: ...


def is_unsafe(engine: GridSnakeEngine, direction: Direction) -> bool:
    """True if stepping in `direction` would run the head into the body."""
    effective = engine.resolve_direction(direction)
    target = engine.next_head(effective)
    # The tail slides away during the shift, so it never blocks.
    return target in engine.snake[:-1]


class RandomPolicy:
    """Uniform random direction each step."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()

    def choose(self, engine: GridSnakeEngine) -> Direction:
        return self.rng.choice(DIRECTIONS)


class GreedyPolicy:
    """Head for the apple along the longer axis, dodging the body when it can."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()

    def preferred(self, engine: GridSnakeEngine) -> list[Direction]:
        head_row, head_col = engine.snake[0]
        apple_row, apple_col = engine.apple
        d_row = apple_row - head_row
        d_col = apple_col - head_col

        vertical = Direction.DOWN if d_row > 0 else Direction.UP
        horizontal = Direction.RIGHT if d_col > 0 else Direction.LEFT
        ordered: list[Direction] = []
        if abs(d_row) >= abs(d_col):
            if d_row:
                ordered.append(vertical)
            if d_col:
                ordered.append(horizontal)
        else:
            ordered.append(horizontal)
            if d_row:
                ordered.append(vertical)

        rest = [d for d in DIRECTIONS if d not in ordered]
        self.rng.shuffle(rest)
        return ordered + rest

    def choose(self, engine: GridSnakeEngine) -> Direction:
        candidates = self.preferred(engine)
        for direction in candidates:
            if not is_unsafe(engine, direction):
                return direction
        return candidates[0]


POLICIES = {
    "random": RandomPolicy,
    "greedy": GreedyPolicy,
}


def make_policy(name: str, seed: int | None = None) -> Policy:
    if name not in POLICIES:
        raise ValueError(f"Unknown policy: {name} (expected one of {', '.join(POLICIES)})")
    return POLICIES[name](random.Random(seed))
