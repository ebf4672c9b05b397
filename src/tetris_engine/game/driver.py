from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, Optional

from .core import Command, GameEngine


logger = logging.getLogger(__name__)


DEFAULT_BINDINGS: Dict[str, Command] = {
    "left": Command.LEFT,
    "right": Command.RIGHT,
    "down": Command.DOWN,
    "up": Command.ROTATE,
}


@dataclass
class TickSchedule:
    """Periodic timer handle fed with elapsed time by its owner."""

    period_ms: int
    elapsed_ms: int = 0
    cancelled: bool = False

    def due(self, elapsed_ms: int) -> int:
        if self.cancelled:
            return 0
        self.elapsed_ms += int(elapsed_ms)
        fired, self.elapsed_ms = divmod(self.elapsed_ms, self.period_ms)
        return fired

    def cancel(self) -> None:
        self.cancelled = True
        self.elapsed_ms = 0


@dataclass
class InputSubscription:
    bindings: Dict[str, Command] = field(default_factory=lambda: dict(DEFAULT_BINDINGS))
    closed: bool = False

    def lookup(self, key: str) -> Optional[Command]:
        if self.closed:
            return None
        return self.bindings.get(key)

    def close(self) -> None:
        self.closed = True


class GameDriver:
    """Owns the tick schedule and input subscription for one engine.

    Both handles exist only while a game is playing. `start()` releases the
    previous pair before installing a new one, and every engine call goes
    through one re-entrant lock so a timer thread and an input thread can
    share the driver.
    """

    def __init__(self, engine: Optional[GameEngine] = None, tick_ms: Optional[int] = None,
                 bindings: Optional[Dict[str, Command]] = None) -> None:
        self.engine = engine or GameEngine()
        self.tick_ms = int(tick_ms if tick_ms is not None else self.engine.config.tick_ms)
        self.bindings = dict(bindings) if bindings is not None else dict(DEFAULT_BINDINGS)
        self.lock = threading.RLock()
        self.schedule: Optional[TickSchedule] = None
        self.subscription: Optional[InputSubscription] = None

    def __enter__(self) -> "GameDriver":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    @property
    def active(self) -> bool:
        return self.schedule is not None

    def start(self) -> None:
        with self.lock:
            self._release()
            self.engine.start()
            if self.engine.is_playing:
                self.schedule = TickSchedule(self.tick_ms)
                self.subscription = InputSubscription(dict(self.bindings))

    def stop(self) -> None:
        with self.lock:
            self._release()

    def _release(self) -> None:
        if self.schedule is not None:
            self.schedule.cancel()
            self.schedule = None
        if self.subscription is not None:
            self.subscription.close()
            self.subscription = None

    def _sync(self) -> None:
        if self.schedule is not None and not self.engine.is_playing:
            logger.info("engine stopped playing, releasing timer and input (score %d)", self.engine.score)
            self._release()

    def advance(self, elapsed_ms: int) -> int:
        """Feed elapsed time to the schedule and return the number of ticks fired."""
        with self.lock:
            if self.schedule is None:
                return 0
            fired = 0
            for _ in range(self.schedule.due(elapsed_ms)):
                self.engine.tick()
                fired += 1
                if not self.engine.is_playing:
                    break
            self._sync()
            return fired

    def command(self, command: Command) -> bool:
        with self.lock:
            if self.subscription is None or self.subscription.closed:
                return False
            result = self.engine.on_command(command)
            self._sync()
            return result

    def press(self, key: str) -> bool:
        with self.lock:
            if self.subscription is None:
                return False
            command = self.subscription.lookup(key)
            if command is None:
                return False
            return self.command(command)
