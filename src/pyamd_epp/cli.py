#!/usr/bin/env python3
"""Command line interface for pyamd-epp using Typer."""

import json
import logging
from typing import Optional

import typer
from typing_extensions import Annotated

from . import __version__  # type: ignore
from .errors import (
    ControlFilesNotFoundError,
    EppIOError,
    EppPermissionError,
    InvalidDataError,
    InvalidLevelError,
    InvalidProfileError,
)
from .manager import EppManager
from .sysfs import DEFAULT_SYSFS_ROOT, SysfsSource
from .types import Action, EppProfile, SetProfile, ShowHelp, ShowValues

logger = logging.getLogger(__name__)

PROFILE_HELP_INDENT = "  "


def get_profile_help_section() -> str:
    """Profile list for the help epilog: one bullet per token, description lines indented."""
    lines = ["EPP Profiles Explanations:"]
    for profile in EppProfile:
        lines.append(f"- {profile.token}")
        for line in profile.description.splitlines():
            lines.append(f"{PROFILE_HELP_INDENT}{line}")
    return "\n".join(lines) + "\n"


app = typer.Typer(
    name="amdepp",
    help="Manage AMD Energy Performance Preference (EPP) settings.",
    add_completion=False,
    rich_markup_mode=None,
    context_settings={"help_option_names": ["-h", "--help"]},
)


# ============================================================================
# Shared options and helpers
# ============================================================================

SysfsRootOption = Annotated[
    str,
    typer.Option(
        "--sysfs-root",
        help="CPU topology directory to scan",
        envvar="AMDEPP_SYSFS_ROOT",
        show_default=True,
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable debug logging"),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", help="With --show: output as JSON"),
]


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbose flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if not verbose else "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def select_action(
    performance: bool = False,
    balance_performance: bool = False,
    balance_power: bool = False,
    power: bool = False,
    profile_level: Optional[int] = None,
    show: bool = False,
) -> Action:
    """
    Collapse the action flags into a single Action.

    Raises ValueError if more than one action is selected and InvalidLevelError
    if profile_level is outside 0-3. No flag at all selects ShowHelp.
    """
    selected: list[tuple[str, Action | None]] = []
    if performance:
        selected.append(("--performance", SetProfile(EppProfile.PERFORMANCE)))
    if balance_performance:
        selected.append(("--balance-performance", SetProfile(EppProfile.BALANCE_PERFORMANCE)))
    if balance_power:
        selected.append(("--balance-power", SetProfile(EppProfile.BALANCE_POWER)))
    if power:
        selected.append(("--power", SetProfile(EppProfile.POWER)))
    if profile_level is not None:
        # Level is validated only once the selection is known to be unambiguous
        selected.append(("-p", None))
    if show:
        selected.append(("--show", ShowValues()))

    if len(selected) > 1:
        names = ", ".join(name for name, _ in selected)
        raise ValueError(f"Options are mutually exclusive: {names}")
    if not selected:
        return ShowHelp()

    _name, action = selected[0]
    if action is None:
        return SetProfile(EppProfile.from_level(profile_level))  # type: ignore[arg-type]
    return action


def run_action(action: Action, sysfs_root: str = DEFAULT_SYSFS_ROOT, json_output: bool = False) -> None:
    """Discover the control files and carry out a SetProfile or ShowValues action."""
    if isinstance(action, ShowHelp):
        return

    manager = EppManager.from_source(SysfsSource(sysfs_root))

    if isinstance(action, SetProfile):
        token = action.profile.token
        typer.echo(f"Applying EPP setting: {token}")
        manager.apply(action.profile)
        typer.echo(f"Successfully set value to {token} for all detected CPU cores.")
    elif isinstance(action, ShowValues):
        if json_output:
            typer.echo(json.dumps({r.label: r.value for r in manager.read()}, indent=2))
        else:
            typer.echo(manager.report())


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"pyamd-epp {__version__}")
        raise typer.Exit(0)


# ============================================================================
# Command
# ============================================================================

@app.command(epilog="\b\n" + get_profile_help_section())
def main(
    ctx: typer.Context,
    performance: Annotated[bool, typer.Option("--performance", help="Set EPP profile to 'performance'.")] = False,
    balance_performance: Annotated[
        bool,
        typer.Option("--balance-performance", help="Set EPP profile to 'balance_performance'."),
    ] = False,
    balance_power: Annotated[
        bool,
        typer.Option("--balance-power", help="Set EPP profile to 'balance_power'."),
    ] = False,
    power: Annotated[bool, typer.Option("--power", help="Set EPP profile to 'power'.")] = False,
    profile_level: Annotated[
        Optional[int],
        typer.Option(
            "--profile-level",
            "-p",
            metavar="LEVEL",
            help="Set EPP profile by level. 0=performance, 1=balance_performance, 2=balance_power, 3=power",
        ),
    ] = None,
    show: Annotated[bool, typer.Option("--show", "-s", help="Show current EPP values for all CPU cores.")] = False,
    json_output: JsonOption = False,
    sysfs_root: SysfsRootOption = DEFAULT_SYSFS_ROOT,
    verbose: VerboseOption = False,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit"),
    ] = None,
) -> None:
    """Manage AMD Energy Performance Preference (EPP) settings."""
    setup_logging(verbose)

    try:
        action = select_action(
            performance=performance,
            balance_performance=balance_performance,
            balance_power=balance_power,
            power=power,
            profile_level=profile_level,
            show=show,
        )
    except (InvalidLevelError, InvalidProfileError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)

    if isinstance(action, ShowHelp):
        typer.echo(ctx.get_help())
        raise typer.Exit(0)

    try:
        run_action(action, sysfs_root=sysfs_root, json_output=json_output)
    except ControlFilesNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(3)
    except EppPermissionError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(3)
    except (EppIOError, InvalidDataError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(3)
    except Exception as e:
        typer.echo(f"Error: Unexpected error: {e}", err=True)
        if verbose:
            import traceback
            traceback.print_exc()
        raise typer.Exit(4)


if __name__ == "__main__":
    app()
