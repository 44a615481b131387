from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from importlib.resources import files as resource_files
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml
from platformdirs import user_config_dir

from .animation import ManagerDefaults
from .exceptions import ConfigError
from .types import Overflow

logger = logging.getLogger(__name__)

APP_NAME = "toastline"
CONFIG_FILENAME = "toasts.yaml"

# YAML spellings that mean "this phase never ends on its own"
_UNBOUNDED = {"never", "inf", "infinite"}


@dataclass(frozen=True)
class ToastConfig:
    defaults: ManagerDefaults = field(default_factory=ManagerDefaults)
    max_concurrent: Optional[int] = None
    overflow: Overflow = Overflow.DISCARD_OLDEST


def default_config_path() -> Path:
    """Location of the per-user override file (may not exist)."""
    return Path(user_config_dir(appname=APP_NAME)) / CONFIG_FILENAME


def load_toast_config(path: Optional[Union[str, Path]] = None) -> ToastConfig:
    """Load toast settings from YAML.

    If path is None, the per-user file is used when present, otherwise the
    embedded ``toastline/defaults.yaml`` resource.

    Raises:
        ConfigError: if an explicit path is missing or the file holds invalid values.
    """
    if path is None:
        user_path = default_config_path()
        if user_path.exists():
            data = user_path.read_text(encoding="utf-8")
            logger.debug("Loaded toast config from user file: %s", user_path)
        else:
            data = resource_files("toastline").joinpath("defaults.yaml").read_text(encoding="utf-8")
            logger.debug("Loaded embedded toast config resource")
    else:
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        data = path.read_text(encoding="utf-8")
        logger.debug("Loaded toast config from path: %s", path)

    try:
        raw = yaml.safe_load(data) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in toast config: {exc}") from exc
    if not isinstance(raw, Mapping):
        raise ConfigError("Toast config must be a mapping at the top level")

    config = parse_toast_config(raw)
    logger.info(
        "Toast config: max_concurrent=%s overflow=%s durations=%s",
        config.max_concurrent,
        config.overflow.value,
        config.defaults,
    )
    return config


def parse_toast_config(raw: Mapping[str, Any]) -> ToastConfig:
    """Build a :class:`ToastConfig` from an already-parsed mapping. Missing keys use defaults."""
    base = ManagerDefaults()
    durations = raw.get("durations") or {}
    if not isinstance(durations, Mapping):
        raise ConfigError("'durations' must be a mapping of appear/hold/dismiss seconds")
    defaults = ManagerDefaults(
        appear=_duration(durations, "appear", base.appear),
        hold=_duration(durations, "hold", base.hold),
        dismiss=_duration(durations, "dismiss", base.dismiss),
    )

    max_concurrent = raw.get("max_concurrent")
    if max_concurrent is not None:
        if isinstance(max_concurrent, bool) or not isinstance(max_concurrent, int) or max_concurrent < 1:
            raise ConfigError(f"max_concurrent must be a positive integer or null, got {max_concurrent!r}")

    overflow_raw = raw.get("overflow", Overflow.DISCARD_OLDEST.value)
    try:
        overflow = Overflow(str(overflow_raw).lower())
    except ValueError as exc:
        choices = ", ".join(o.value for o in Overflow)
        raise ConfigError(f"overflow must be one of {choices}, got {overflow_raw!r}") from exc

    return ToastConfig(defaults=defaults, max_concurrent=max_concurrent, overflow=overflow)


def _duration(durations: Mapping[str, Any], key: str, fallback: float) -> float:
    if key not in durations:
        return fallback
    value = durations[key]
    if value is None or (isinstance(value, str) and value.strip().lower() in _UNBOUNDED):
        return math.inf
    if isinstance(value, bool):
        raise ConfigError(f"durations.{key} must be a number of seconds, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"durations.{key} must be a number of seconds, got {value!r}") from exc
