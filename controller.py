# Input-side adapter: turns tilt readings and button presses into engine calls.
from __future__ import annotations

import logging
import time
from typing import Callable

try:
    from .game_logic import Direction, GridSnakeEngine
except ImportError:
    from game_logic import Direction, GridSnakeEngine


logger = logging.getLogger(__name__)

DEFAULT_MOVE_INTERVAL_MS = 100
DEFAULT_DEAD_ZONE = 1.0


def tilt_to_direction(x: float, y: float, dead_zone: float = DEFAULT_DEAD_ZONE) -> Direction | None:
    """
    Map an accelerometer reading to a direction.
    The dominant axis wins; readings inside the dead zone map to None.
    """
    if abs(y) > abs(x):
        if y < -dead_zone:
            return Direction.UP
        if y > dead_zone:
            return Direction.DOWN
        return None
    if x < -dead_zone:
        return Direction.LEFT
    if x > dead_zone:
        return Direction.RIGHT
    return None


class MoveThrottle:
    """Accept at most one request per `interval_ms`; early requests are dropped."""
    def __init__(self, interval_ms: int = DEFAULT_MOVE_INTERVAL_MS, clock: Callable[[], float] = time.monotonic) -> None:
        if interval_ms < 0:
            raise ValueError("interval_ms must be >= 0")
        self.interval_ms = interval_ms
        self.clock = clock
        self.last_accepted: float | None = None

    def allow(self) -> bool:
        now = self.clock()
        if self.last_accepted is not None and (now - self.last_accepted) * 1000.0 < self.interval_ms:
            return False
        self.last_accepted = now
        return True

    def reset(self) -> None:
        self.last_accepted = None


class TiltController:
    """Drives a GridSnakeEngine from input events and notifies view listeners."""
    def __init__(self, engine: GridSnakeEngine, throttle: MoveThrottle | None = None) -> None:
        self.engine = engine
        self.throttle = throttle if throttle is not None else MoveThrottle()
        self.paused = False
        self._listeners: list[Callable[[GridSnakeEngine], None]] = []

    def add_listener(self, callback: Callable[[GridSnakeEngine], None]) -> None:
        """Register a callback run after every accepted step or restart."""
        self._listeners.append(callback)

    def _notify(self) -> None:
        for callback in self._listeners:
            callback(self.engine)

    def on_direction_requested(self, direction: Direction) -> bool:
        """Step the engine once; returns False when the request was dropped."""
        if self.paused or self.engine.is_game_over():
            return False
        if not self.throttle.allow():
            return False
        self.engine.move(direction)
        self._notify()
        return True

    def on_tilt(self, x: float, y: float, dead_zone: float = DEFAULT_DEAD_ZONE) -> bool:
        direction = tilt_to_direction(x, y, dead_zone)
        if direction is None:
            return False
        return self.on_direction_requested(direction)

    def pause(self) -> None:
        self.paused = True
        logger.debug("Paused")

    def resume(self) -> None:
        self.paused = False
        logger.debug("Resumed")

    def toggle_pause(self) -> None:
        """Pause/resume button; after a loss it restarts instead."""
        if self.engine.is_game_over():
            self.restart()
        elif self.paused:
            self.resume()
        else:
            self.pause()

    def restart(self) -> None:
        self.engine.reset()
        self.paused = False
        self.throttle.reset()
        logger.info("Restarted %dx%d game", self.engine.rows, self.engine.columns)
        self._notify()
