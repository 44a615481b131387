from __future__ import annotations

import math
from typing import Any, Dict, List

from rich.align import Align
from rich.console import Console, Group, RenderableType
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from .render import RenderView, ToastView
from .types import Anchor, AnimationPhase, Level

LEVEL_STYLES: Dict[Level, str] = {
    Level.TRACE: "bright_black",
    Level.DEBUG: "blue",
    Level.INFO: "green",
    Level.WARN: "yellow",
    Level.ERROR: "red",
}

_ROWS = ("top", "middle", "bottom")
_COLUMNS = ("left", "center", "right")


class RichRenderer:
    """Draws a :class:`RenderView` as a 3x3 grid of anchored toast stacks using Rich.

    Toasts that are appearing reveal their text progressively; appearing and
    disappearing toasts are dimmed. Nothing from the view is kept after a call.
    """

    def __init__(self, max_width: int = 40) -> None:
        if max_width <= 4:
            raise ValueError("max_width must leave room for the border")
        self.max_width = max_width

    def draw(self, view: RenderView, surface: Any) -> None:
        renderable = self.build(view)
        if isinstance(surface, Live):
            surface.update(renderable, refresh=True)
        elif isinstance(surface, Console):
            surface.print(renderable)
        else:
            raise TypeError(f"Unsupported surface for RichRenderer: {type(surface).__name__}")

    def build(self, view: RenderView) -> RenderableType:
        layout = Layout(name="toasts")
        layout.split_column(*(Layout(name=row) for row in _ROWS))
        for row in _ROWS:
            layout[row].split_row(*(Layout(name=f"{row}_{col}") for col in _COLUMNS))

        for anchor in Anchor:
            toasts = list(view.visible(anchor))
            if not toasts:
                layout[anchor.value].update(Text(""))
                continue
            # Newest toast sits closest to the screen edge it is anchored to
            if anchor.vertical == "bottom":
                toasts.reverse()
            panels: List[RenderableType] = [self.toast_panel(t) for t in toasts]
            layout[anchor.value].update(
                Align(Group(*panels), align=anchor.horizontal, vertical=anchor.vertical)
            )
        return layout

    def toast_panel(self, toast: ToastView) -> Panel:
        notification = toast.notification
        style = LEVEL_STYLES.get(notification.level, "white")
        content = notification.content
        if toast.phase is AnimationPhase.APPEARING:
            shown = max(1, math.ceil(len(content) * toast.progress))
            content = content[:shown]
        body = Text(content)
        fading = toast.phase in (AnimationPhase.APPEARING, AnimationPhase.DISAPPEARING)
        if fading:
            body.stylize("dim")
        return Panel(
            body,
            title=notification.title,
            border_style=f"dim {style}" if fading else style,
            expand=False,
            width=min(self.max_width, max(len(notification.content), len(notification.title or "")) + 4),
        )
