from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Protocol, Tuple

from .animation import AnimationState
from .notification import Notification
from .types import Anchor, AnimationPhase


@dataclass(frozen=True)
class ToastView:
    """Read-only snapshot of one live toast, handed to renderers."""

    id: int
    notification: Notification
    phase: AnimationPhase
    phase_elapsed: float
    phase_duration: float
    progress: float
    created_at: float

    @classmethod
    def from_state(cls, state: AnimationState) -> "ToastView":
        return cls(
            id=state.id,
            notification=state.notification,
            phase=state.phase,
            phase_elapsed=state.phase_elapsed,
            phase_duration=state.duration_of(state.phase),
            progress=state.progress(),
            created_at=state.created_at,
        )


@dataclass(frozen=True)
class RenderView:
    """Everything a renderer may see for one frame.

    Attributes:
        groups: Live toasts per anchor in insertion order (finished toasts never appear).
        max_visible: Per-anchor display cap, or None for no cap.
    """

    groups: Mapping[Anchor, Tuple[ToastView, ...]]
    max_visible: Optional[int] = None

    @classmethod
    def build(
        cls,
        grouped: Iterable[Tuple[Anchor, Iterable[AnimationState]]],
        max_visible: Optional[int] = None,
    ) -> "RenderView":
        groups = {}
        for anchor, states in grouped:
            views = tuple(ToastView.from_state(s) for s in states if not s.is_finished)
            if views:
                groups[anchor] = views
        return cls(groups=MappingProxyType(groups), max_visible=max_visible)

    def visible(self, anchor: Anchor) -> Tuple[ToastView, ...]:
        """Toasts to draw at ``anchor``, most recent first, capped at ``max_visible``."""
        newest_first = tuple(reversed(self.groups.get(anchor, ())))
        if self.max_visible is None:
            return newest_first
        return newest_first[: self.max_visible]

    def is_empty(self) -> bool:
        return not self.groups


class Renderer(Protocol):
    """Protocol for drawing a frame of toasts. Allows decoupling from the terminal in tests."""

    def draw(self, view: RenderView, surface: Any) -> None:
        ...
