class ToastlineError(Exception):
    """Base exception for the toastline package."""


class NotificationError(ToastlineError):
    """Raised by the builder when notification content is invalid (e.g., empty text)."""


class ConfigError(ToastlineError):
    """Raised for invalid durations, limits or configuration files."""
