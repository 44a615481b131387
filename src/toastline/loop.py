from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

from .manager import Notifications

logger = logging.getLogger(__name__)


@dataclass
class LoopConfig:
    """Configuration for the toast frame loop.

    Attributes:
        active_tick_rate: Frames per second while any toast is animating. 0 runs unthrottled.
        idle_tick_rate: Frames per second when nothing is on screen. 0 runs unthrottled.
        max_steps: If provided and > 0, the loop stops after this many frames.
        fixed_dt: If set, every frame advances by this many seconds instead of wall time.
        stop_when_empty: Stop as soon as the manager holds no toasts.
    """

    active_tick_rate: float = 30.0
    idle_tick_rate: float = 4.0
    max_steps: Optional[int] = None
    fixed_dt: Optional[float] = None
    stop_when_empty: bool = False


class ToastLoop:
    """Headless-friendly frame loop that ticks and renders a :class:`Notifications` manager.

    The loop speeds up while toasts animate and slows down when idle, which is
    the intended use of ``Notifications.has_active``.
    """

    def __init__(self, manager: Notifications, surface: Any, config: Optional[LoopConfig] = None) -> None:
        self.manager = manager
        self.surface = surface
        self.config = config or LoopConfig()
        self._running: bool = False
        self._step: int = 0
        self._last_time: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def step(self) -> int:
        return self._step

    @property
    def current_tick_rate(self) -> float:
        if self.manager.has_active():
            return self.config.active_tick_rate
        return self.config.idle_tick_rate

    def start(self) -> None:
        """Start the loop state.

        Safe to call multiple times; subsequent calls are no-ops.
        """
        if self._running:
            logger.debug("ToastLoop.start() called while already running")
            return
        self._running = True
        self._step = 0
        self._last_time = time.perf_counter()
        logger.info(
            "ToastLoop started (active=%s Hz, idle=%s Hz, max_steps=%s)",
            self.config.active_tick_rate,
            self.config.idle_tick_rate,
            self.config.max_steps,
        )

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        logger.info("ToastLoop stopped at step=%s", self._step)

    def update(self, dt: float) -> None:
        """Advance toasts by ``dt`` seconds and draw one frame."""
        if not self._running:
            logger.debug("update() called while not running; ignored")
            return
        self._step += 1
        self.manager.tick(dt)
        self.manager.render(self.surface)

        if self.config.max_steps is not None and 0 < self.config.max_steps <= self._step:
            self.stop()
        elif self.config.stop_when_empty and len(self.manager) == 0:
            self.stop()

    def run(self) -> None:
        """Run a blocking loop until stopped, max_steps reached or (optionally) no toasts remain."""
        self.start()
        while self._running:
            now = time.perf_counter()
            if self.config.fixed_dt is not None:
                dt = self.config.fixed_dt
            elif self._last_time is None:
                dt = 0.0
            else:
                dt = now - self._last_time
            self._last_time = now

            self.update(dt)

            rate = self.current_tick_rate
            if self._running and rate and rate > 0:
                remaining = 1.0 / float(rate) - (time.perf_counter() - now)
                if remaining > 0:
                    time.sleep(remaining)

        logger.info("Loop complete (steps=%d)", self._step)
