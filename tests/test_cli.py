"""Tests for CLI module - action selection and command behavior."""

import json
from pathlib import Path
from typing import Callable
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from pyamd_epp import EppProfile, SetProfile, ShowHelp, ShowValues
from pyamd_epp.cli import app, get_profile_help_section, select_action
from pyamd_epp.errors import InvalidLevelError
from pyamd_epp.sysfs import EPP_RELPATH

runner = CliRunner()


# ============================================================================
# Action Selection Tests
# ============================================================================


class TestSelectAction:
    """Test collapsing flags into a single Action."""

    def test_no_flags_is_help(self) -> None:
        assert select_action() == ShowHelp()

    def test_named_profiles(self) -> None:
        assert select_action(performance=True) == SetProfile(EppProfile.PERFORMANCE)
        assert select_action(balance_performance=True) == SetProfile(EppProfile.BALANCE_PERFORMANCE)
        assert select_action(balance_power=True) == SetProfile(EppProfile.BALANCE_POWER)
        assert select_action(power=True) == SetProfile(EppProfile.POWER)

    def test_level(self) -> None:
        for level, profile in enumerate(EppProfile):
            assert select_action(profile_level=level) == SetProfile(profile)

    def test_show(self) -> None:
        assert select_action(show=True) == ShowValues()

    def test_invalid_level(self) -> None:
        with pytest.raises(InvalidLevelError):
            select_action(profile_level=4)

    def test_combined_flags_rejected(self) -> None:
        with pytest.raises(ValueError, match="mutually exclusive"):
            select_action(performance=True, show=True)
        with pytest.raises(ValueError, match="mutually exclusive"):
            select_action(power=True, profile_level=1)


class TestProfileHelpSection:
    """Test the help epilog listing."""

    def test_lists_every_profile(self) -> None:
        text = get_profile_help_section()
        lines = text.splitlines()
        assert lines[0] == "EPP Profiles Explanations:"
        assert "- performance" in lines
        assert "- balance_performance" in lines
        assert "- balance_power" in lines
        assert "- power" in lines
        assert "  Strongly prioritizes power saving." in lines
        assert len(lines) == 1 + 4 * 3


# ============================================================================
# Command Tests
# ============================================================================


@pytest.fixture
def sysfs_root(make_sysfs: Callable[..., Path]) -> Path:
    return make_sysfs(
        {
            "cpu0": "performance\n",
            "cpu1": "power\n",
            "cpu2": "balance_power\n",
            "cpu3": "balance_performance\n",
            "cpufreq": None,
        }
    )


def _read(base: Path, cpu: str) -> str:
    return (base / cpu / EPP_RELPATH).read_text(encoding="ascii")


def test_no_args_prints_help() -> None:
    result = runner.invoke(app, [])
    assert result.exit_code == 0
    assert "--performance" in result.stdout
    assert "EPP Profiles Explanations:" in result.stdout


def test_help_flag() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "--show" in result.stdout
    assert "- balance_power" in result.stdout
    assert "Aims for a balance but leans towards power saving." in result.stdout


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "pyamd-epp" in result.stdout


def test_show(sysfs_root: Path) -> None:
    result = runner.invoke(app, ["--show", "--sysfs-root", str(sysfs_root)])
    assert result.exit_code == 0
    lines = result.stdout.rstrip("\n").split("\n")
    assert len(lines) == 2
    assert "CPU00: performance" in lines[0]
    assert "CPU02: balance_power" in lines[0]
    assert lines[1] == "CPU03: balance_performance"


def test_show_json(sysfs_root: Path) -> None:
    result = runner.invoke(app, ["-s", "--json", "--sysfs-root", str(sysfs_root)])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data == {
        "CPU00": "performance",
        "CPU01": "power",
        "CPU02": "balance_power",
        "CPU03": "balance_performance",
    }


def test_sysfs_root_from_env(sysfs_root: Path) -> None:
    result = runner.invoke(app, ["--show", "--json"], env={"AMDEPP_SYSFS_ROOT": str(sysfs_root)})
    assert result.exit_code == 0
    assert json.loads(result.stdout)["CPU01"] == "power"


def test_set_power(sysfs_root: Path) -> None:
    result = runner.invoke(app, ["--power", "--sysfs-root", str(sysfs_root)])
    assert result.exit_code == 0
    assert "Applying EPP setting: power" in result.stdout
    assert "Successfully set value to power for all detected CPU cores." in result.stdout
    for cpu in ("cpu0", "cpu1", "cpu2", "cpu3"):
        assert _read(sysfs_root, cpu) == "power\n"


@pytest.mark.parametrize(
    ("flag", "token"),
    [
        ("--performance", "performance"),
        ("--balance-performance", "balance_performance"),
        ("--balance-power", "balance_power"),
    ],
)
def test_set_named_profile(sysfs_root: Path, flag: str, token: str) -> None:
    result = runner.invoke(app, [flag, "--sysfs-root", str(sysfs_root)])
    assert result.exit_code == 0
    assert _read(sysfs_root, "cpu1") == f"{token}\n"


def test_set_by_level(sysfs_root: Path) -> None:
    result = runner.invoke(app, ["-p", "1", "--sysfs-root", str(sysfs_root)])
    assert result.exit_code == 0
    assert _read(sysfs_root, "cpu0") == "balance_performance\n"


def test_invalid_level_rejected(sysfs_root: Path) -> None:
    result = runner.invoke(app, ["-p", "4", "--sysfs-root", str(sysfs_root)])
    assert result.exit_code == 2
    assert "Must be between 0 and 3" in result.output
    assert _read(sysfs_root, "cpu0") == "performance\n"


def test_combined_actions_rejected(sysfs_root: Path) -> None:
    result = runner.invoke(app, ["--power", "--show", "--sysfs-root", str(sysfs_root)])
    assert result.exit_code == 2
    assert "mutually exclusive" in result.output
    assert _read(sysfs_root, "cpu0") == "performance\n"


def test_not_supported(make_sysfs: Callable[..., Path]) -> None:
    base = make_sysfs({"cpu0": None})
    result = runner.invoke(app, ["--show", "--sysfs-root", str(base)])
    assert result.exit_code == 3
    assert "No CPU energy preference files found" in result.output


def test_missing_sysfs_root(tmp_path: Path) -> None:
    result = runner.invoke(app, ["--show", "--sysfs-root", str(tmp_path / "missing")])
    assert result.exit_code == 3
    assert "Failed to list" in result.output


def test_permission_denied(sysfs_root: Path) -> None:
    def denied(path: str):
        raise PermissionError(13, "Permission denied", path)

    with patch("pyamd_epp.manager._open_for_write", side_effect=denied):
        result = runner.invoke(app, ["--performance", "--sysfs-root", str(sysfs_root)])

    assert result.exit_code == 3
    assert "root privileges" in result.output
    assert "Successfully" not in result.output
