from __future__ import annotations

import argparse
import itertools
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.live import Live

from . import __version__
from .config import load_toast_config
from .exceptions import ToastlineError
from .loop import LoopConfig, ToastLoop
from .manager import Notifications
from .notification import NotificationBuilder
from .types import Anchor, Level

logger = logging.getLogger(__name__)

_DEMO_ANCHORS = (Anchor.TOP_RIGHT, Anchor.BOTTOM_RIGHT, Anchor.TOP_LEFT, Anchor.BOTTOM_CENTER)
_DEMO_LEVELS = (Level.INFO, Level.WARN, Level.ERROR, Level.DEBUG)


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )


def run_demo(
    console: Console,
    count: int = 4,
    config_path: Optional[str] = None,
    max_steps: Optional[int] = None,
    fixed_dt: Optional[float] = None,
    tick_rate: float = 30.0,
) -> int:
    """Show ``count`` demo toasts and run until they finish (or max_steps is reached).

    Returns:
        Number of frames rendered.
    """
    config = load_toast_config(config_path)
    manager = Notifications.from_config(config)
    cycle = zip(itertools.cycle(_DEMO_ANCHORS), itertools.cycle(_DEMO_LEVELS))
    for n, (anchor, level) in zip(range(1, count + 1), cycle):
        notif = (
            NotificationBuilder(f"Demo notification #{n}")
            .title(level.value.upper())
            .level(level)
            .anchor(anchor)
            .build()
        )
        manager.add(notif)

    loop_config = LoopConfig(
        active_tick_rate=tick_rate,
        idle_tick_rate=tick_rate,
        max_steps=max_steps,
        fixed_dt=fixed_dt,
        stop_when_empty=True,
    )
    with Live(console=console, auto_refresh=False, transient=True) as live:
        loop = ToastLoop(manager, live, loop_config)
        loop.run()
    console.print(f"toastline demo: {loop.step} frames rendered, {len(manager)} toasts still live")
    return loop.step


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="toastline",
        description="toastline - animated terminal toast demo",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", default=None, help="Path to a toasts.yaml file")
    parser.add_argument("--count", type=int, default=4, help="Number of demo toasts to show")
    parser.add_argument("--max-steps", type=int, default=None, help="Stop after N frames (for testing)")
    parser.add_argument("--fixed-dt", type=float, default=None, help="Advance each frame by this many seconds")
    parser.add_argument("--tick-rate", type=float, default=30.0, help="Target frame rate (Hz); 0 is unthrottled")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        run_demo(
            Console(),
            count=args.count,
            config_path=args.config,
            max_steps=args.max_steps,
            fixed_dt=args.fixed_dt,
            tick_rate=args.tick_rate,
        )
    except ToastlineError as exc:
        logger.error("%s", exc)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
