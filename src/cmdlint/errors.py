"""Exception hierarchy shared by every layer.

Resolution and transport failures are reported per command or per rule;
configuration failures abort a run before any command is evaluated.
"""

from __future__ import annotations


class CmdlintError(Exception):
    """Base class for all cmdlint errors."""

    code = "CMDLINT_ERROR"


class ResolutionError(CmdlintError):
    """A command name did not resolve to a descriptor."""

    code = "NOT_FOUND"

    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        super().__init__(message or f"Command not found: {name}")


class ConfigurationError(CmdlintError):
    """Run options or catalogue definitions are invalid."""

    code = "INVALID_CONFIG"


class TransportError(CmdlintError):
    """A network check could not complete."""

    code = "TRANSPORT"


class RuleSkipped(CmdlintError):
    """Raised by a rule predicate whose precondition does not hold."""

    code = "SKIPPED"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)
