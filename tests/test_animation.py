from __future__ import annotations

import math
from datetime import timedelta

import pytest

from toastline import AnimationPhase, AnimationState, ConfigError, ManagerDefaults, NotificationBuilder
from toastline.animation import to_nanoseconds as ns

PHASE_ORDER = [
    AnimationPhase.APPEARING,
    AnimationPhase.VISIBLE,
    AnimationPhase.DISAPPEARING,
    AnimationPhase.FINISHED,
]


def make_state(appear: float = 0.25, hold: float = 1.0, dismiss: float = 0.25, auto_dismiss=None) -> AnimationState:
    builder = NotificationBuilder("hello")
    if auto_dismiss is not None:
        builder.auto_dismiss(auto_dismiss)
    defaults = ManagerDefaults(appear=appear, hold=hold, dismiss=dismiss)
    return AnimationState.create(0, builder.build(), defaults, created_at=0.0)


def test_phase_transitions_are_closed() -> None:
    assert AnimationPhase.APPEARING.next is AnimationPhase.VISIBLE
    assert AnimationPhase.VISIBLE.next is AnimationPhase.DISAPPEARING
    assert AnimationPhase.DISAPPEARING.next is AnimationPhase.FINISHED
    assert AnimationPhase.FINISHED.next is AnimationPhase.FINISHED
    assert AnimationPhase.FINISHED.is_terminal
    assert not AnimationPhase.VISIBLE.is_terminal


def test_excess_carries_into_next_phase() -> None:
    s = make_state(appear=0.1, hold=0.2, dismiss=0.1)
    s.update(ns(0.05))
    assert s.phase is AnimationPhase.APPEARING
    assert s.phase_elapsed == pytest.approx(0.05)

    s.update(ns(0.08))
    assert s.phase is AnimationPhase.VISIBLE
    assert s.phase_elapsed == pytest.approx(0.03)

    s.update(ns(0.5))
    assert s.phase is AnimationPhase.FINISHED
    assert s.is_finished


def test_large_tick_cascades_to_middle_of_dismiss() -> None:
    s = make_state(appear=0.25, hold=1.0, dismiss=0.5)
    s.update(ns(1.5))
    assert s.phase is AnimationPhase.DISAPPEARING
    assert s.phase_elapsed == 0.25


def test_exact_boundary_advances() -> None:
    s = make_state(appear=0.25, hold=1.0, dismiss=0.25)
    s.update(ns(0.25))
    assert s.phase is AnimationPhase.VISIBLE
    assert s.phase_elapsed == 0.0


@pytest.mark.parametrize("chunks", [
    [1.5],
    [0.5, 0.5, 0.5],
    [0.125, 0.125, 1.0, 0.25],
    [0.75, 0.75],
    [0.1] * 15,
    [0.016] * 100,
    [0.3, 0.7, 0.45, 0.05],
])
def test_sum_decomposition_invariance(chunks) -> None:
    whole = make_state(appear=0.25, hold=1.0, dismiss=0.5)
    whole.update(sum(ns(c) for c in chunks))

    split = make_state(appear=0.25, hold=1.0, dismiss=0.5)
    for c in chunks:
        split.update(ns(c))

    assert split.phase is whole.phase
    assert split.phase_elapsed == whole.phase_elapsed


def test_phase_never_regresses() -> None:
    s = make_state(appear=0.25, hold=0.5, dismiss=0.25)
    seen = [PHASE_ORDER.index(s.phase)]
    for _ in range(20):
        s.update(ns(0.0625))
        seen.append(PHASE_ORDER.index(s.phase))
    assert seen == sorted(seen)
    assert s.is_finished


def test_zero_appear_starts_visible() -> None:
    s = make_state(appear=0.0)
    assert s.phase is AnimationPhase.VISIBLE
    assert s.phase_elapsed == 0.0


def test_zero_durations_are_skipped_on_update() -> None:
    s = make_state(appear=0.25, hold=0.0, dismiss=0.25)
    s.update(ns(0.25))
    assert s.phase is AnimationPhase.DISAPPEARING


def test_all_zero_durations_finish_immediately() -> None:
    s = make_state(appear=0.0, hold=0.0, dismiss=0.0)
    assert s.is_finished


def test_finished_state_ignores_updates() -> None:
    s = make_state(appear=0.0, hold=0.0, dismiss=0.0)
    s.update(ns(10.0))
    assert s.phase is AnimationPhase.FINISHED
    assert s.phase_elapsed == 0.0


def test_unbounded_hold_never_expires() -> None:
    s = make_state(appear=0.25, hold=math.inf)
    s.update(ns(1e9))
    assert s.phase is AnimationPhase.VISIBLE
    assert s.progress() == 0.0


def test_auto_dismiss_overrides_default_hold() -> None:
    s = make_state(appear=0.0, hold=10.0, auto_dismiss=0.5)
    assert s.duration_of(AnimationPhase.VISIBLE) == 0.5
    s.update(ns(0.5))
    assert s.phase is AnimationPhase.DISAPPEARING


def test_progress_fraction() -> None:
    s = make_state(appear=0.5, hold=1.0)
    assert s.progress() == 0.0
    s.update(ns(0.25))
    assert s.progress() == 0.5
    s.update(ns(0.5))
    assert s.phase is AnimationPhase.VISIBLE
    assert s.progress() == 0.25


def test_defaults_reject_negative_or_nan() -> None:
    with pytest.raises(ConfigError):
        ManagerDefaults(appear=-0.1)
    with pytest.raises(ConfigError):
        ManagerDefaults(hold=float("nan"))
    assert ManagerDefaults(hold=math.inf).hold == math.inf


def test_frame_times_add_up_exactly() -> None:
    s = make_state(appear=1.0, hold=1.0, dismiss=1.0)
    for _ in range(10):
        s.update(ns(0.1))
    assert s.phase is AnimationPhase.VISIBLE
    assert s.phase_elapsed_ns == 0


def test_to_nanoseconds_conversions() -> None:
    assert ns(0.1) == 100_000_000
    assert ns(1) == 1_000_000_000
    assert ns(timedelta(milliseconds=100)) == 100_000_000
    assert ns(timedelta(microseconds=7)) == 7_000
    assert ns(math.inf) == math.inf


def test_defaults_reject_bool_durations() -> None:
    with pytest.raises(ConfigError):
        ManagerDefaults(hold=True)
    with pytest.raises(ConfigError):
        ManagerDefaults(appear=False)
