"""Domain errors for the Overleaf toolkit."""

from typing import List, Optional


class ToolkitError(RuntimeError):
    """Raised when the toolkit cannot continue safely."""


class ConfigurationError(ToolkitError):
    """Raised for a missing project root, configuration file or malformed version."""


class ExternalCommandError(ToolkitError):
    """Raised when docker or git fails or cannot be found."""

    def __init__(self, message: str, cmd: Optional[List[str]] = None, returncode: int = 1):
        super().__init__(message)
        self.cmd = cmd or []
        self.returncode = returncode


class UpgradeAbortedError(ToolkitError):
    """Raised when the operator refuses a safety-critical confirmation."""
