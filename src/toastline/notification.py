from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .exceptions import NotificationError
from .types import Anchor, Level


@dataclass(frozen=True)
class Notification:
    """Immutable content of a single toast.

    Attributes:
        content: Body text shown inside the toast.
        level: Severity; renderers use it for colouring.
        anchor: Screen position the toast is stacked at.
        title: Optional heading drawn in the toast border.
        auto_dismiss: Hold duration in seconds overriding the manager default.
            ``math.inf`` keeps the toast visible until it is removed.
    """

    content: str
    level: Level = Level.INFO
    anchor: Anchor = Anchor.BOTTOM_RIGHT
    title: Optional[str] = None
    auto_dismiss: Optional[float] = None

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "level", Level(self.level))
            object.__setattr__(self, "anchor", Anchor(self.anchor))
        except ValueError as exc:
            raise NotificationError(str(exc)) from exc


class NotificationBuilder:
    """Fluent builder that validates content before a :class:`Notification` exists.

    Example:
        notif = NotificationBuilder("Saved").level(Level.INFO).anchor(Anchor.TOP_RIGHT).build()
    """

    def __init__(self, content: str) -> None:
        self._content = content
        self._level = Level.INFO
        self._anchor = Anchor.BOTTOM_RIGHT
        self._title: Optional[str] = None
        self._auto_dismiss: Optional[float] = None

    def level(self, level: Level) -> "NotificationBuilder":
        self._level = Level(level)
        return self

    def anchor(self, anchor: Anchor) -> "NotificationBuilder":
        self._anchor = Anchor(anchor)
        return self

    def title(self, title: Optional[str]) -> "NotificationBuilder":
        self._title = title
        return self

    def auto_dismiss(self, seconds: Optional[float]) -> "NotificationBuilder":
        self._auto_dismiss = seconds
        return self

    def build(self) -> Notification:
        """Validate and freeze the notification.

        Raises:
            NotificationError: if content is empty or the auto-dismiss value is negative or NaN.
        """
        if not isinstance(self._content, str) or not self._content.strip():
            raise NotificationError("Notification content must be a non-empty string")
        auto_dismiss = self._auto_dismiss
        if auto_dismiss is not None:
            auto_dismiss = float(auto_dismiss)
            if math.isnan(auto_dismiss) or auto_dismiss < 0:
                raise NotificationError(f"auto_dismiss must be >= 0 seconds, got {self._auto_dismiss!r}")
        title = self._title if self._title else None
        return Notification(
            content=self._content,
            level=self._level,
            anchor=self._anchor,
            title=title,
            auto_dismiss=auto_dismiss,
        )
