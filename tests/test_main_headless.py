from __future__ import annotations

import io
from pathlib import Path

from rich.console import Console

from toastline.__main__ import main, run_demo


def test_demo_runs_until_toasts_finish(tmp_path: Path) -> None:
    cfg = tmp_path / "toasts.yaml"
    cfg.write_text("max_concurrent: 1\ndurations:\n  appear: 0.25\n  hold: 0.5\n  dismiss: 0.25\n", encoding="utf-8")
    console = Console(file=io.StringIO(), width=100, height=24, record=True, color_system=None)

    frames = run_demo(console, count=5, config_path=str(cfg), fixed_dt=0.25, tick_rate=0)

    assert frames == 4
    assert "4 frames rendered, 0 toasts still live" in console.export_text()


def test_main_entrypoint_exits_successfully(capsys) -> None:
    code = main(["--count", "2", "--max-steps", "3", "--tick-rate", "0", "--fixed-dt", "0.01"])
    assert code == 0
    assert "3 frames rendered" in capsys.readouterr().out


def test_main_reports_bad_config(tmp_path: Path) -> None:
    assert main(["--config", str(tmp_path / "missing.yaml"), "--max-steps", "1"]) == 2
