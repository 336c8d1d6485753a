"""EppManager: apply an EPP profile to every CPU and read back the current values."""

import logging
import os
from typing import Sequence, TextIO

from .cpuname import core_label, cpu_index_from_name
from .errors import EppIOError, EppPermissionError
from .report import COLUMN_SPACING, NUM_COLUMNS, format_report
from .sysfs import LocationSource, discover
from .types import ControlLocation, EppProfile, ReadResult

logger = logging.getLogger(__name__)


def _open_for_write(path: str) -> TextIO:
    # Write in place: no create, no append. O_TRUNC is a no-op on sysfs attributes.
    fd = os.open(path, os.O_WRONLY | os.O_TRUNC)
    return os.fdopen(fd, "w", encoding="ascii")


def _read_text(path: str) -> str:
    with open(path, "r", encoding="ascii") as f:
        return f.read()


class EppManager:
    """
    Holds the discovered control files for one invocation and applies or reads EPP on all of them.

    Writes are sequential and not transactional: if one file fails, the files
    before it keep the new value and the files after it are not touched.
    """

    def __init__(self, locations: Sequence[ControlLocation]) -> None:
        self._locations: tuple[ControlLocation, ...] = tuple(locations)

    @classmethod
    def from_source(cls, source: LocationSource | None = None) -> "EppManager":
        """Run discovery (default: /sys/devices/system/cpu) and wrap the result."""
        return cls(discover(source))

    @property
    def locations(self) -> tuple[ControlLocation, ...]:
        return self._locations

    def __len__(self) -> int:
        return len(self._locations)

    def apply(self, profile: EppProfile | str) -> EppProfile:
        """
        Write the profile token plus a trailing newline to every control file, in order.

        Accepts an EppProfile or its literal token. Each file is flushed and closed
        before the next is opened. Raises EppPermissionError if a file cannot be
        opened for lack of privileges, EppIOError for any other failure.
        """
        if not isinstance(profile, EppProfile):
            profile = EppProfile.from_token(profile)
        payload = f"{profile.token}\n"

        for loc in self._locations:
            try:
                f = _open_for_write(loc.path)
            except PermissionError as e:
                raise EppPermissionError(loc.path, cause=e) from e
            except OSError as e:
                raise EppIOError(
                    f"Failed to open {loc.path} for writing. Error details: {e}",
                    path=loc.path,
                    cause=e,
                ) from e
            try:
                with f:
                    f.write(payload)
                    f.flush()
            except OSError as e:
                raise EppIOError(
                    f"Failed to write {profile.token!r} to {loc.path}. Error details: {e}",
                    path=loc.path,
                    cause=e,
                ) from e
            logger.debug("Wrote %s to %s", profile.token, loc.path)

        return profile

    def read(self) -> list[ReadResult]:
        """
        Read the trimmed value of every control file, sorted by CPU label.

        A file whose cpu directory lacks the "cpu" prefix is skipped with a warning;
        a "cpu" directory with a non-numeric suffix raises InvalidDataError.
        """
        results: list[ReadResult] = []
        for loc in self._locations:
            cpu_dir = os.path.basename(os.path.dirname(os.path.dirname(loc.path)))
            index = cpu_index_from_name(cpu_dir, loc.path)
            if index is None:
                logger.warning("Could not extract CPU number from path: %s", loc.path)
                continue
            try:
                value = _read_text(loc.path).strip()
            except OSError as e:
                raise EppIOError(
                    f"Failed to read {loc.path}. Error details: {e}",
                    path=loc.path,
                    cause=e,
                ) from e
            results.append(ReadResult(label=core_label(index), value=value))

        results.sort(key=lambda r: r.label)
        return results

    def report(self, columns: int = NUM_COLUMNS, spacing: int = COLUMN_SPACING) -> str:
        """Current values as an aligned multi-column table (see format_report)."""
        return "\n".join(format_report(self.read(), columns=columns, spacing=spacing))
