"""
overleaf-toolkit - run and upgrade a local Overleaf deployment with Docker Compose
"""

__version__ = "1.0.0"

from .core import Toolkit, find_toolkit_root
from .errors import ConfigurationError, ExternalCommandError, ToolkitError, UpgradeAbortedError
from .upgrade import UpgradeController

__all__ = [
    "Toolkit",
    "find_toolkit_root",
    "UpgradeController",
    "ToolkitError",
    "ConfigurationError",
    "ExternalCommandError",
    "UpgradeAbortedError",
]
