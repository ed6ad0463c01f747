"""Custom exceptions for waituntil."""


class WaitUntilError(Exception):
    """Base exception for waituntil."""


class TimeSpecError(WaitUntilError):
    """Error related to the target time text."""


class MissingArgumentError(TimeSpecError):
    """No target time was given."""

    def __init__(self, message: str = "no target time given") -> None:
        super().__init__(message)


class UnparseableTimeError(TimeSpecError):
    """Target time text matched none of the accepted layouts.

    The offending text is kept on ``text`` so callers can report it.
    """

    reason = "unparseable"

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"cannot parse target time: {text!r}")


class ConfigError(WaitUntilError):
    """Error in configuration."""


class ConfigNotFoundError(ConfigError):
    """Configuration file not found."""
