from __future__ import annotations

import logging
import math
import time
from datetime import timedelta
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Tuple, Union

from .anchors import AnchorIndex
from .animation import AnimationState, ManagerDefaults, to_nanoseconds
from .exceptions import ConfigError
from .notification import Notification
from .render import Renderer, RenderView, ToastView
from .rich_renderer import RichRenderer
from .types import Anchor, Overflow

if TYPE_CHECKING:
    from .config import ToastConfig

logger = logging.getLogger(__name__)

# Identities are unsigned 64-bit; the counter wraps to 0 after the last one.
_ID_MODULUS = 2 ** 64

Elapsed = Union[float, int, timedelta]


class Notifications:
    """Owns every live toast: allocates ids, enforces per-anchor limits and advances animations.

    The manager is driven by a host loop: ``add`` when something happens,
    ``tick(dt)`` once per frame, then ``render(surface)``. Nothing runs in the
    background and all time comes from the caller, so behaviour is fully
    deterministic.

    Example:
        manager = Notifications().max_concurrent(3).overflow(Overflow.DISCARD_OLDEST)
        toast_id = manager.add(NotificationBuilder("Saved").build())
        manager.tick(0.016)
        manager.render(console)
    """

    def __init__(
        self,
        defaults: Optional[ManagerDefaults] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        renderer: Optional[Renderer] = None,
    ) -> None:
        self.defaults = defaults or ManagerDefaults()
        self._clock = clock
        self._renderer: Renderer = renderer or RichRenderer()
        self._states: Dict[int, AnimationState] = {}
        self._by_anchor = AnchorIndex()
        self._next_id = 0
        self._max_concurrent: Optional[int] = None
        self._overflow = Overflow.DISCARD_OLDEST

    @classmethod
    def from_config(
        cls,
        config: "ToastConfig",
        *,
        clock: Callable[[], float] = time.monotonic,
        renderer: Optional[Renderer] = None,
    ) -> "Notifications":
        return (
            cls(config.defaults, clock=clock, renderer=renderer)
            .max_concurrent(config.max_concurrent)
            .overflow(config.overflow)
        )

    # Configuration (call before first use)
    def max_concurrent(self, limit: Optional[int]) -> "Notifications":
        """Cap live toasts per anchor; None means unbounded."""
        if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 1):
            raise ConfigError(f"max_concurrent must be >= 1 or None, got {limit!r}")
        self._max_concurrent = limit
        return self

    def overflow(self, behavior: Overflow) -> "Notifications":
        """Choose which toast is evicted when an anchor is at its cap."""
        self._overflow = Overflow(behavior)
        return self

    @property
    def max_concurrent_limit(self) -> Optional[int]:
        return self._max_concurrent

    @property
    def overflow_behavior(self) -> Overflow:
        return self._overflow

    # Lifecycle
    def add(self, notification: Notification) -> int:
        """Add a toast and return its id, evicting one at the same anchor if the cap is reached."""
        toast_id = self._next_id
        self._next_id = (self._next_id + 1) % _ID_MODULUS
        if toast_id in self._states:
            # The counter wrapped onto a still-live id; the old toast gives way
            logger.warning("Toast id %d reused after wraparound; replacing the old toast", toast_id)
            self.remove(toast_id)

        anchor = notification.anchor
        self._enforce_limit(anchor)

        state = AnimationState.create(toast_id, notification, self.defaults, self._clock())
        self._states[toast_id] = state
        self._by_anchor.add(anchor, toast_id)
        logger.debug("Added toast %d at %s (phase=%s)", toast_id, anchor.value, state.phase.value)
        return toast_id

    def remove(self, toast_id: int) -> bool:
        """Remove a toast; returns False if it was not live."""
        state = self._states.pop(toast_id, None)
        if state is None:
            return False
        self._by_anchor.discard(state.notification.anchor, toast_id)
        logger.debug("Removed toast %d", toast_id)
        return True

    def clear(self) -> None:
        if not self._states:
            return
        logger.debug("Clearing %d toasts", len(self._states))
        self._states.clear()
        self._by_anchor.clear()

    def tick(self, elapsed: Elapsed) -> None:
        """Advance every toast by ``elapsed`` seconds and prune the ones that finished.

        Negative or non-finite values are treated as zero.
        """
        dt_ns = self._elapsed_nanos(elapsed)
        for state in self._states.values():
            state.update(dt_ns)

        finished = [toast_id for toast_id, state in self._states.items() if state.is_finished]
        for toast_id in finished:
            self.remove(toast_id)
        if finished:
            logger.debug("Pruned %d finished toasts", len(finished))

    @staticmethod
    def _elapsed_nanos(elapsed: Elapsed) -> int:
        if not isinstance(elapsed, timedelta):
            seconds = float(elapsed)
            if not math.isfinite(seconds):
                logger.warning("Ignoring invalid tick duration %r; treating as 0", elapsed)
                return 0
            elapsed = seconds
        dt_ns = to_nanoseconds(elapsed)
        if dt_ns < 0:
            logger.warning("Ignoring invalid tick duration %r; treating as 0", elapsed)
            return 0
        return dt_ns

    def has_active(self) -> bool:
        """True while any toast is still animating or on screen."""
        return any(not state.is_finished for state in self._states.values())

    def render(self, surface: Any) -> None:
        """Hand a read-only view of the live toasts to the renderer."""
        self._renderer.draw(self.render_view(), surface)

    def render_view(self) -> RenderView:
        grouped = (
            (anchor, [self._states[toast_id] for toast_id in self._by_anchor.ids(anchor)])
            for anchor in self._by_anchor.anchors()
        )
        return RenderView.build(grouped, self._max_concurrent)

    # Read-only lookups
    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, toast_id: object) -> bool:
        return toast_id in self._states

    def get(self, toast_id: int) -> Optional[ToastView]:
        state = self._states.get(toast_id)
        return ToastView.from_state(state) if state is not None else None

    def ids(self, anchor: Optional[Anchor] = None) -> Tuple[int, ...]:
        """Live ids at ``anchor`` in insertion order, or every live id when anchor is None."""
        if anchor is None:
            return tuple(self._states)
        return self._by_anchor.ids(anchor)

    # Overflow enforcement
    def _enforce_limit(self, anchor: Anchor) -> None:
        if self._max_concurrent is None:
            return
        if self._by_anchor.count(anchor) < self._max_concurrent:
            return
        if self._overflow is Overflow.DISCARD_OLDEST:
            victim = self._by_anchor.oldest(anchor, self._created_at)
        else:
            victim = self._by_anchor.newest(anchor, self._created_at)
        if victim is not None:
            logger.debug("Anchor %s at cap %d; evicting toast %d (%s)",
                         anchor.value, self._max_concurrent, victim, self._overflow.value)
            self.remove(victim)

    def _created_at(self, toast_id: int) -> float:
        return self._states[toast_id].created_at
