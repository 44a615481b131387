from __future__ import annotations

from typing import List

from toastline import ManagerDefaults, NotificationBuilder, Notifications, RenderView
from toastline.loop import LoopConfig, ToastLoop


class CountingRenderer:
    def __init__(self) -> None:
        self.frames: List[RenderView] = []

    def draw(self, view: RenderView, surface) -> None:
        self.frames.append(view)


def make_manager(renderer: CountingRenderer) -> Notifications:
    return Notifications(ManagerDefaults(appear=0.25, hold=0.5, dismiss=0.25), renderer=renderer)


def test_loop_runs_exact_steps() -> None:
    renderer = CountingRenderer()
    loop = ToastLoop(make_manager(renderer), None, LoopConfig(active_tick_rate=0, idle_tick_rate=0, max_steps=5))
    loop.run()
    assert loop.step == 5
    assert loop.running is False
    assert len(renderer.frames) == 5


def test_loop_stops_when_toasts_finish() -> None:
    renderer = CountingRenderer()
    mgr = make_manager(renderer)
    mgr.add(NotificationBuilder("bye").build())
    config = LoopConfig(active_tick_rate=0, idle_tick_rate=0, fixed_dt=0.25, stop_when_empty=True)
    loop = ToastLoop(mgr, None, config)
    loop.run()
    # appear, hold x2, dismiss -> pruned on the fourth frame
    assert loop.step == 4
    assert len(mgr) == 0
    assert renderer.frames[-1].is_empty()


def test_update_and_stop() -> None:
    renderer = CountingRenderer()
    loop = ToastLoop(make_manager(renderer), None, LoopConfig(max_steps=2))
    loop.update(0.016)  # not started: ignored
    assert loop.step == 0
    loop.start()
    loop.update(0.016)
    loop.update(0.016)
    assert loop.step == 2
    assert loop.running is False


def test_tick_rate_follows_activity() -> None:
    renderer = CountingRenderer()
    mgr = make_manager(renderer)
    loop = ToastLoop(mgr, None, LoopConfig(active_tick_rate=60, idle_tick_rate=2))
    assert loop.current_tick_rate == 2
    mgr.add(NotificationBuilder("hi").build())
    assert loop.current_tick_rate == 60
