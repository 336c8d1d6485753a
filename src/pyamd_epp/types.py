"""Core data model: EPP profile enum, control locations, read results and CLI actions."""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .errors import InvalidLevelError, InvalidProfileError

_DESCRIPTIONS: dict[str, str] = {
    "performance": (
        "Prioritizes performance above power saving.\n"
        "CPU reaches higher clock speeds aggressively."
    ),
    "balance_performance": (
        "Aims for a balance but leans towards performance.\n"
        "This is the default value in many systems."
    ),
    "balance_power": (
        "Aims for a balance but leans towards power saving.\n"
        "More conservative clock speed increases."
    ),
    "power": (
        "Strongly prioritizes power saving.\n"
        "Favors lower frequencies, may limit peak performance."
    ),
}


class EppProfile(str, Enum):
    """EPP values accepted by the kernel, ordered from performance to power saving."""

    PERFORMANCE = "performance"
    BALANCE_PERFORMANCE = "balance_performance"
    BALANCE_POWER = "balance_power"
    POWER = "power"

    @property
    def token(self) -> str:
        """Literal string written to / read from the control file."""
        return self.value

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self.value]

    @property
    def level(self) -> int:
        return list(EppProfile).index(self)

    @classmethod
    def from_level(cls, level: int) -> "EppProfile":
        """
        Map a profile level to a profile.

        0=performance, 1=balance_performance, 2=balance_power, 3=power.
        Raises InvalidLevelError for anything else.
        """
        members = list(cls)
        if isinstance(level, bool) or not 0 <= level < len(members):
            raise InvalidLevelError(level)
        return members[level]

    @classmethod
    def from_token(cls, token: str) -> "EppProfile":
        """Look up a profile by its literal token; raise InvalidProfileError if unknown."""
        try:
            return cls(token.strip())
        except ValueError:
            raise InvalidProfileError(token) from None


@dataclass(frozen=True)
class ControlLocation:
    """One CPU's energy_performance_preference file."""

    index: int
    path: str

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"index must be >= 0, got {self.index}")


@dataclass(frozen=True)
class ReadResult:
    """Current EPP value for one CPU, e.g. ReadResult("CPU03", "balance_power")."""

    label: str
    value: str

    @property
    def rendered(self) -> str:
        return f"{self.label}: {self.value}"


@dataclass(frozen=True)
class SetProfile:
    """Write the given profile to every discovered CPU."""

    profile: EppProfile


@dataclass(frozen=True)
class ShowValues:
    """Print the current value of every discovered CPU."""


@dataclass(frozen=True)
class ShowHelp:
    """Print usage; no filesystem access."""


Action = Union[SetProfile, ShowValues, ShowHelp]
