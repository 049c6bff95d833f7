import subprocess

import pytest

from overleaf_toolkit.errors import ExternalCommandError
from overleaf_toolkit.services.git_client import GitClient

CHANGELOG_DIFF = """diff --git CHANGELOG.md CHANGELOG.md
index 1111111..2222222 100644
--- CHANGELOG.md
+++ CHANGELOG.md
@@ -2,0 +3,3 @@
+## 2026-10-01
+### Added
+- Support for the 4.3 image
"""


class DummyLogger:
    def debug(self, *_args, **_kwargs):
        return None


class ScriptedRunner:
    """Returns canned results keyed by the git sub-command."""

    def __init__(self, results):
        self.results = results
        self.calls = []

    def run(self, cmd, check=True, capture_output=False, env=None):
        self.calls.append(cmd)
        returncode, stdout, stderr = self.results.get(cmd[3], (0, "", ""))
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)


def _client(results):
    runner = ScriptedRunner(results)
    return GitClient(root="/toolkit", runner=runner, logger=DummyLogger()), runner


def test_reads_branch_and_commit():
    client, runner = _client({"rev-parse": (0, "main\n", "")})

    assert client.current_branch() == "main"
    assert runner.calls[0] == ["git", "-C", "/toolkit", "rev-parse", "--abbrev-ref", "HEAD"]


def test_pull_available_reads_fetch_stderr():
    stderr = "From github.com:overleaf/toolkit\n   1234567..89abcde  main       -> origin/main\n"
    client, runner = _client({"fetch": (0, "", stderr)})

    assert client.pull_available("main") is True
    assert runner.calls[0] == ["git", "-C", "/toolkit", "fetch", "--dry-run", "origin", "main"]


def test_pull_available_false_without_ref_update():
    client, _ = _client({"fetch": (0, "", "")})

    assert client.pull_available("main") is False


@pytest.mark.parametrize("returncode, expected", [(0, False), (1, True)])
def test_has_changes_uses_diff_exit_code(returncode, expected):
    client, _ = _client({"diff": (returncode, "", "")})

    assert client.has_changes("main") is expected


def test_has_changes_raises_on_git_failure():
    client, _ = _client({"diff": (128, "", "fatal: bad revision")})

    with pytest.raises(ExternalCommandError) as exc_info:
        client.has_changes("main")

    assert exc_info.value.returncode == 128


def test_changelog_changes_returns_added_lines():
    client, runner = _client({"diff": (0, CHANGELOG_DIFF, "")})

    assert client.changelog_changes("main") == [
        "## 2026-10-01",
        "### Added",
        "- Support for the 4.3 image",
    ]
    assert runner.calls[0][-2:] == ["--", "CHANGELOG.md"]


def test_pull_fast_forwards_only():
    client, runner = _client({})

    client.pull("main")

    assert runner.calls[0] == ["git", "-C", "/toolkit", "pull", "--ff-only", "origin", "main"]
