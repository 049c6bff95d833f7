"""Subprocess execution service for the Overleaf toolkit."""

import subprocess
from typing import List, Mapping, Optional

from overleaf_toolkit.errors import ExternalCommandError


class CommandRunner:
    """Runs external commands with consistent error handling.

    Commands are never retried: a failing docker or git call halts the
    pipeline at that point.
    """

    def __init__(self, logger, subprocess_module=subprocess):
        self.logger = logger
        self.subprocess = subprocess_module

    def run(
        self,
        cmd: List[str],
        check: bool = True,
        capture_output: bool = False,
        env: Optional[Mapping[str, str]] = None,
    ) -> subprocess.CompletedProcess:
        cmd_str = " ".join(cmd)
        self.logger.debug("Executing: %s", cmd_str)

        try:
            result = self.subprocess.run(
                cmd,
                text=True,
                capture_output=capture_output,
                env=dict(env) if env is not None else None,
            )
        except FileNotFoundError as exc:
            raise ExternalCommandError(
                f"Required command not found: {cmd[0]}. Please install it and try again.",
                cmd=cmd,
                returncode=127,
            ) from exc
        except OSError as exc:
            raise ExternalCommandError(f"Failed to execute command: {cmd_str}. {exc}", cmd=cmd) from exc

        if capture_output and result.stdout:
            self.logger.debug("Command output: %s", result.stdout.strip())

        if result.returncode == 0 or not check:
            return result

        stderr = (result.stderr or "").strip() if capture_output else ""
        message = f"Command failed ({result.returncode}): {cmd_str}"
        if stderr:
            message = f"{message}\n{stderr}"
        raise ExternalCommandError(message, cmd=cmd, returncode=result.returncode)
