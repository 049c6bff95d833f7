"""Source synchronization through the git command line."""

from typing import List

from overleaf_toolkit.constants import CHANGELOG_FILE
from overleaf_toolkit.errors import ExternalCommandError


class GitClient:
    """Queries and fast-forwards the toolkit checkout against `origin`."""

    def __init__(self, root: str, runner, logger, remote: str = "origin"):
        self.root = root
        self.runner = runner
        self.logger = logger
        self.remote = remote

    def current_branch(self) -> str:
        return self._git(["rev-parse", "--abbrev-ref", "HEAD"]).stdout.strip()

    def current_commit(self) -> str:
        return self._git(["rev-parse", "--short", "HEAD"]).stdout.strip()

    def pull_available(self, branch: str) -> bool:
        # `git fetch` reports ref updates on stderr.
        result = self._git(["fetch", "--dry-run", self.remote, branch])
        output = f"{result.stdout or ''}\n{result.stderr or ''}"
        return f"-> {self.remote}/{branch}" in output

    def fetch(self, branch: str):
        self._git(["fetch", self.remote, branch])

    def has_changes(self, branch: str) -> bool:
        cmd = self._cmd(["diff", "--quiet", "HEAD", f"{self.remote}/{branch}"])
        result = self.runner.run(cmd, check=False, capture_output=True)
        if result.returncode == 0:
            return False
        if result.returncode == 1:
            return True
        raise ExternalCommandError(
            f"Command failed ({result.returncode}): {' '.join(cmd)}",
            cmd=cmd,
            returncode=result.returncode,
        )

    def changelog_changes(self, branch: str) -> List[str]:
        result = self._git(
            [
                "diff",
                "--no-prefix",
                "-U0",
                branch,
                f"{self.remote}/{branch}",
                "--",
                CHANGELOG_FILE,
            ]
        )
        changes = []
        for line in (result.stdout or "").splitlines():
            if line.startswith("+++"):
                continue
            if line.startswith("+"):
                changes.append(line[1:])
        return changes

    def pull(self, branch: str):
        self._git(["pull", "--ff-only", self.remote, branch])

    def _git(self, args: List[str]):
        return self.runner.run(self._cmd(args), check=True, capture_output=True)

    def _cmd(self, args: List[str]) -> List[str]:
        return ["git", "-C", self.root] + args
