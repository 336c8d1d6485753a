"""Clear exceptions for pyamd-epp: missing EPP support, sysfs I/O and invalid profile input."""


class EppError(Exception):
    """Base exception for pyamd-epp."""

    pass


class ControlFilesNotFoundError(EppError):
    """Raised when no CPU exposes an energy_performance_preference file."""

    def __init__(self, base: str, message: str | None = None) -> None:
        self.base = base
        self._msg = message or f"No CPU energy preference files found under {base}"
        super().__init__(self._msg)


class EppPermissionError(EppError):
    """Raised when a control file cannot be opened for writing due to missing privileges."""

    def __init__(self, path: str, *, cause: BaseException | None = None) -> None:
        self.path = path
        self.cause = cause
        message = (
            f"Permission error for writing to {path}. "
            "Ensure you have root privileges to modify EPP settings."
        )
        if cause is not None:
            message += f" Error details: {cause}"
        super().__init__(message)


class EppIOError(EppError):
    """Raised when listing, reading or writing sysfs fails (wraps OSError)."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.path = path
        self.cause = cause
        super().__init__(message)


class InvalidDataError(EppError):
    """Raised when a control file path has a cpu directory whose number does not parse."""

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        self._msg = message or f"Invalid CPU number in path: {path}"
        super().__init__(self._msg)


class InvalidLevelError(EppError, ValueError):
    """Raised when a profile level is outside 0-3."""

    def __init__(self, level: int, message: str | None = None) -> None:
        self.level = level
        self._msg = message or f"Invalid profile level: {level}. Must be between 0 and 3."
        super().__init__(self._msg)


class InvalidProfileError(EppError, ValueError):
    """Raised when a token is not one of the supported EPP values."""

    def __init__(self, token: str, message: str | None = None) -> None:
        self.token = token
        self._msg = message or f"Unknown EPP profile: {token!r}"
        super().__init__(self._msg)
