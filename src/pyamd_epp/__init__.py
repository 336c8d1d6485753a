"""pyamd-epp: read and set the per-CPU Energy Performance Preference via sysfs."""

__version__ = "0.1.0"

from .errors import (
    ControlFilesNotFoundError,
    EppError,
    EppIOError,
    EppPermissionError,
    InvalidDataError,
    InvalidLevelError,
    InvalidProfileError,
)
from .manager import EppManager
from .report import format_report
from .sysfs import LocationSource, SysfsSource, discover
from .types import Action, ControlLocation, EppProfile, ReadResult, SetProfile, ShowHelp, ShowValues

__all__ = [
    "__version__",
    "EppManager",
    "ControlFilesNotFoundError",
    "EppError",
    "EppIOError",
    "EppPermissionError",
    "InvalidDataError",
    "InvalidLevelError",
    "InvalidProfileError",
    "format_report",
    "LocationSource",
    "SysfsSource",
    "discover",
    "Action",
    "ControlLocation",
    "EppProfile",
    "ReadResult",
    "SetProfile",
    "ShowHelp",
    "ShowValues",
]
