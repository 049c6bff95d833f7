"""Docker runtime services for the Overleaf toolkit."""

import os
import subprocess
from typing import List, Mapping, Optional

from overleaf_toolkit.errors import ExternalCommandError
from overleaf_toolkit.models import ComposeInvocation


class DockerRuntimeService:
    """Detects the compose executable and runs compose invocations."""

    def __init__(self, logger, runner, subprocess_module=subprocess):
        self.logger = logger
        self.runner = runner
        self.subprocess = subprocess_module
        self._compose_cmd: Optional[List[str]] = None

    def get_docker_compose_cmd(self) -> List[str]:
        if self._compose_cmd is not None:
            return self._compose_cmd

        try:
            self.subprocess.run(["docker", "compose", "version"], check=True, capture_output=True)
            self._compose_cmd = ["docker", "compose"]
        except (self.subprocess.CalledProcessError, FileNotFoundError):
            try:
                self.subprocess.run(["docker-compose", "--version"], check=True, capture_output=True)
                self._compose_cmd = ["docker-compose"]
            except (self.subprocess.CalledProcessError, FileNotFoundError):
                raise ExternalCommandError(
                    "Docker Compose is not available. Install Docker Compose v2 (`docker compose`) "
                    "or v1 (`docker-compose`) and try again.",
                    cmd=["docker", "compose"],
                    returncode=127,
                )
        return self._compose_cmd

    def execute(
        self,
        invocation: ComposeInvocation,
        capture_output: bool = False,
        check: bool = False,
        base_env: Optional[Mapping[str, str]] = None,
    ) -> subprocess.CompletedProcess:
        cmd = invocation.command(self.get_docker_compose_cmd())
        env = invocation.process_environment(os.environ if base_env is None else base_env)
        return self.runner.run(cmd, check=check, capture_output=capture_output, env=env)
