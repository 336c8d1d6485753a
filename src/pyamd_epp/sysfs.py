"""Discover per-CPU energy_performance_preference files under the sysfs CPU directory."""

import logging
import os
from typing import Iterable, Protocol

from .cpuname import match_cpu_dir
from .errors import ControlFilesNotFoundError, EppIOError
from .types import ControlLocation

logger = logging.getLogger(__name__)

DEFAULT_SYSFS_ROOT = "/sys/devices/system/cpu"
EPP_RELPATH = os.path.join("cpufreq", "energy_performance_preference")


class LocationSource(Protocol):
    """Where discovery looks for cpu<N> directories; lets tests swap in a synthetic tree."""

    base: str

    def entries(self) -> Iterable[str]:
        """Names of the immediate child directories of base; raises OSError if unlistable."""
        ...

    def is_file(self, path: str) -> bool:
        ...


class SysfsSource:
    """LocationSource backed by the real filesystem (default /sys/devices/system/cpu)."""

    def __init__(self, base: str = DEFAULT_SYSFS_ROOT) -> None:
        self.base = base

    def entries(self) -> list[str]:
        names: list[str] = []
        with os.scandir(self.base) as it:
            for entry in it:
                if entry.is_dir():
                    names.append(entry.name)
        return names

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)


def discover(source: LocationSource | None = None) -> list[ControlLocation]:
    """
    Find every cpu<N>/cpufreq/energy_performance_preference under the source base.

    Result is sorted by full path string, so cpu10 comes before cpu2.
    Raises EppIOError if the base cannot be listed and ControlFilesNotFoundError
    if no CPU exposes the file.
    """
    src = source if source is not None else SysfsSource()
    try:
        names = list(src.entries())
    except OSError as e:
        raise EppIOError(f"Failed to list {src.base}: {e}", path=src.base, cause=e) from e

    locations: list[ControlLocation] = []
    for name in names:
        index = match_cpu_dir(name)
        if index is None:
            continue
        path = os.path.join(src.base, name, EPP_RELPATH)
        if src.is_file(path):
            locations.append(ControlLocation(index=index, path=path))

    locations.sort(key=lambda loc: loc.path)

    if not locations:
        raise ControlFilesNotFoundError(src.base)

    logger.debug("Found %d EPP control files under %s", len(locations), src.base)
    return locations
