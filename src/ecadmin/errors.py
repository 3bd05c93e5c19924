"""Custom exception types for ecadmin."""

from __future__ import annotations


class EcAdminError(Exception):
    """Base class for all ecadmin errors."""


class ConfigError(EcAdminError):
    """Raised when configuration files or generic options are invalid."""


class InvalidArgumentError(ValueError, EcAdminError):
    """Raised when an argument value is malformed.

    Commands let this propagate; the dispatcher reports it with its own exit
    status so scripts can tell bad input shape apart from bad option usage.
    """


# ---------------------------------------------------------------------------
# Local usage errors
# ---------------------------------------------------------------------------


class CommandUsageError(EcAdminError):
    """Base class for usage errors detected before any namespace call."""


class MissingOptionError(CommandUsageError):
    def __init__(self, option: str, hint: str = "") -> None:
        self.option = option
        self.hint = hint or f"Please specify {option}."
        super().__init__(self.hint)


class TooManyArgumentsError(CommandUsageError):
    def __init__(self, leftover: list[str]) -> None:
        self.leftover = list(leftover)
        super().__init__(f"Too many arguments: {' '.join(self.leftover)}")


class UnknownCommandError(CommandUsageError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Can't understand command '{name}'")


# ---------------------------------------------------------------------------
# Namespace service failures
# ---------------------------------------------------------------------------


class NamespaceError(EcAdminError):
    """Base class for failures reported by the namespace service."""


class PolicyNotFoundError(NamespaceError):
    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        super().__init__(
            f"Policy '{name}' does not match any enabled erasure coding policies: "
            f"[{', '.join(available)}]"
        )


class IneligiblePathError(NamespaceError):
    def __init__(self, message: str) -> None:
        super().__init__(message)


class NoPolicySetError(NamespaceError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No erasure coding policy explicitly set on {path}")


class NamespaceUnavailableError(NamespaceError):
    def __init__(self, message: str) -> None:
        super().__init__(message)
