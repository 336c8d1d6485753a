"""Shared fixtures: synthetic sysfs CPU trees under tmp_path."""

from pathlib import Path
from typing import Callable

import pytest

EPP_FILE = Path("cpufreq") / "energy_performance_preference"


@pytest.fixture
def make_sysfs(tmp_path: Path) -> Callable[..., Path]:
    """
    Build a fake /sys/devices/system/cpu.

    make_sysfs({"cpu0": "performance\\n", "cpu1": None, "cpufreq": None}) creates
    every named directory; a string value also creates the EPP file with that content.
    """

    def _make(entries: dict[str, str | None]) -> Path:
        base = tmp_path / "cpu"
        base.mkdir(exist_ok=True)
        for name, content in entries.items():
            d = base / name
            d.mkdir(parents=True, exist_ok=True)
            if content is not None:
                f = d / EPP_FILE
                f.parent.mkdir(parents=True, exist_ok=True)
                f.write_text(content, encoding="ascii")
        return base

    return _make
