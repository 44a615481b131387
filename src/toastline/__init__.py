"""
toastline package root.

Animated, per-anchor toast notifications for text-mode interfaces. The
orchestrator (:class:`Notifications`) is pure timing and bookkeeping; drawing
is delegated to a renderer so the core stays testable without a terminal.
"""

from .animation import AnimationState, ManagerDefaults
from .exceptions import ConfigError, NotificationError, ToastlineError
from .manager import Notifications
from .notification import Notification, NotificationBuilder
from .render import RenderView, ToastView
from .types import Anchor, AnimationPhase, Level, Overflow

__version__ = "0.3.0"

__all__ = [
    "Anchor",
    "AnimationPhase",
    "AnimationState",
    "ConfigError",
    "Level",
    "ManagerDefaults",
    "Notification",
    "NotificationBuilder",
    "NotificationError",
    "Notifications",
    "Overflow",
    "RenderView",
    "ToastView",
    "ToastlineError",
]
