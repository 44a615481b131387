from __future__ import annotations

from enum import Enum


class Anchor(str, Enum):
    """Fixed screen positions toasts are grouped and stacked by."""

    TOP_LEFT = "top_left"
    TOP_CENTER = "top_center"
    TOP_RIGHT = "top_right"
    MIDDLE_LEFT = "middle_left"
    MIDDLE_CENTER = "middle_center"
    MIDDLE_RIGHT = "middle_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_CENTER = "bottom_center"
    BOTTOM_RIGHT = "bottom_right"

    @property
    def vertical(self) -> str:
        """One of ``top``, ``middle`` or ``bottom``."""
        return self.value.split("_", 1)[0]

    @property
    def horizontal(self) -> str:
        """One of ``left``, ``center`` or ``right``."""
        return self.value.split("_", 1)[1]


class Level(str, Enum):
    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class Overflow(str, Enum):
    """What to evict when an anchor is already at its concurrency cap."""

    DISCARD_OLDEST = "discard_oldest"
    DISCARD_NEWEST = "discard_newest"


class AnimationPhase(Enum):
    """Closed set of animation phases; transitions only ever move forward."""

    APPEARING = "appearing"
    VISIBLE = "visible"
    DISAPPEARING = "disappearing"
    FINISHED = "finished"

    @property
    def next(self) -> "AnimationPhase":
        return _NEXT_PHASE[self]

    @property
    def is_terminal(self) -> bool:
        return self is AnimationPhase.FINISHED


_NEXT_PHASE = {
    AnimationPhase.APPEARING: AnimationPhase.VISIBLE,
    AnimationPhase.VISIBLE: AnimationPhase.DISAPPEARING,
    AnimationPhase.DISAPPEARING: AnimationPhase.FINISHED,
    AnimationPhase.FINISHED: AnimationPhase.FINISHED,
}
