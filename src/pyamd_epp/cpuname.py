"""Parse sysfs cpu<N> directory names and build fixed-width CPU labels."""

import re

from .errors import InvalidDataError

# "cpu" + one or more ASCII digits; rejects cpufreq, cpuidle, bare "cpu"
_CPU_DIR_PATTERN = re.compile(r"^cpu([0-9]+)$")

_CPU_PREFIX = "cpu"
_LABEL_PREFIX = "CPU"


def match_cpu_dir(name: str) -> int | None:
    """Return the core index for a cpu<N> directory name, or None if the name does not qualify."""
    m = _CPU_DIR_PATTERN.match(name)
    if not m:
        return None
    return int(m.group(1))


def cpu_index_from_name(name: str, path: str) -> int | None:
    """
    Parse the core index out of a directory name found on the read path.

    - Name without the "cpu" prefix: returns None (caller skips with a warning).
    - "cpu" prefix but no decimal number after it: raises InvalidDataError.
    """
    if not name.startswith(_CPU_PREFIX):
        return None
    digits = name[len(_CPU_PREFIX):]
    if not digits.isascii() or not digits.isdigit():
        raise InvalidDataError(path, f"Invalid CPU number in path: {path} ({digits!r})")
    return int(digits)


def core_label(index: int) -> str:
    """CPU label with the index zero-padded to at least 2 digits (CPU03, CPU12, CPU128)."""
    return f"{_LABEL_PREFIX}{index:02d}"
