from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, Union

from .exceptions import ConfigError
from .notification import Notification
from .types import AnimationPhase

NANOS_PER_SECOND = 1_000_000_000

# Integer nanoseconds, or math.inf for a phase that never ends on its own
Nanos = Union[int, float]


def to_nanoseconds(value: Union[float, int, timedelta]) -> Nanos:
    """Convert seconds (or a timedelta) to integer nanoseconds; ``math.inf`` stays infinite."""
    if isinstance(value, timedelta):
        return value // timedelta(microseconds=1) * 1000
    if math.isinf(value) and value > 0:
        return math.inf
    return round(value * NANOS_PER_SECOND)


def to_seconds(nanos: Nanos) -> float:
    if math.isinf(nanos):
        return math.inf
    return nanos / NANOS_PER_SECOND


@dataclass(frozen=True)
class ManagerDefaults:
    """Per-phase durations (seconds) applied to every new toast.

    ``math.inf`` is a valid duration and keeps a toast in that phase until it
    is removed explicitly.
    """

    appear: float = 0.25
    hold: float = 4.0
    dismiss: float = 0.25

    def __post_init__(self) -> None:
        for name in ("appear", "hold", "dismiss"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value) or value < 0:
                raise ConfigError(f"{name} duration must be a non-negative number, got {value!r}")


@dataclass
class AnimationState:
    """Timing state of one live toast.

    Time is kept in integer nanoseconds. Each update adds elapsed time to the
    current phase; when a phase runs out the excess carries into the next one,
    so a long frame can move a toast through several phases at once and one
    big update equals any split of it into smaller ones.
    """

    id: int
    notification: Notification
    created_at: float
    appear_ns: Nanos
    hold_ns: Nanos
    dismiss_ns: Nanos
    phase: AnimationPhase = AnimationPhase.APPEARING
    phase_elapsed_ns: int = 0
    _durations: Dict[AnimationPhase, Nanos] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._durations = {
            AnimationPhase.APPEARING: self.appear_ns,
            AnimationPhase.VISIBLE: self.hold_ns,
            AnimationPhase.DISAPPEARING: self.dismiss_ns,
            AnimationPhase.FINISHED: 0,
        }
        # Skip zero-length phases right away (e.g. appear == 0 starts VISIBLE)
        self._advance()

    @classmethod
    def create(
        cls,
        id: int,
        notification: Notification,
        defaults: ManagerDefaults,
        created_at: float,
    ) -> "AnimationState":
        hold = defaults.hold if notification.auto_dismiss is None else notification.auto_dismiss
        return cls(
            id=id,
            notification=notification,
            created_at=created_at,
            appear_ns=to_nanoseconds(defaults.appear),
            hold_ns=to_nanoseconds(hold),
            dismiss_ns=to_nanoseconds(defaults.dismiss),
        )

    @property
    def is_finished(self) -> bool:
        return self.phase.is_terminal

    @property
    def phase_elapsed(self) -> float:
        """Seconds spent in the current phase."""
        return to_seconds(self.phase_elapsed_ns)

    def duration_of(self, phase: AnimationPhase) -> float:
        """Configured length of ``phase`` in seconds."""
        return to_seconds(self._durations[phase])

    def update(self, dt_ns: int) -> None:
        """Advance by ``dt_ns`` nanoseconds (see :func:`to_nanoseconds`)."""
        if self.is_finished:
            return
        self.phase_elapsed_ns += dt_ns
        self._advance()

    def _advance(self) -> None:
        while not self.phase.is_terminal:
            duration = self._durations[self.phase]
            if self.phase_elapsed_ns < duration:
                return
            self.phase_elapsed_ns -= duration
            self.phase = self.phase.next
        self.phase_elapsed_ns = 0

    def progress(self) -> float:
        """Fraction of the current phase already elapsed, in [0, 1]."""
        if self.is_finished:
            return 1.0
        duration = self._durations[self.phase]
        if math.isinf(duration):
            return 0.0
        if duration <= 0:
            return 1.0
        return max(0.0, min(1.0, self.phase_elapsed_ns / duration))
