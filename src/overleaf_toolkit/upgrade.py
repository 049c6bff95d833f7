"""Interactive upgrade of the toolkit code and the pinned image version."""

import logging
from typing import Optional

import click

from .constants import RELEASE_NOTES_URL
from .core import Toolkit, console, err_console
from .errors import ToolkitError, UpgradeAbortedError
from .errors_catalog import actionable_error
from .models import CodeSyncOutcome, ImageUpgradeOutcome, UpgradeSession
from .services.git_client import GitClient
from .services.prompt import DecisionSource
from .services.version_store import VersionStore, is_newer, major

logger = logging.getLogger("overleaf_toolkit")


class UpgradeController:
    """Runs the code sync phase, then the image version phase.

    The only write is `VersionStore.swap`, reached after the upgrade was
    confirmed, services are known to be stopped, and the operator confirmed
    a second time. Declines are returned as outcomes; only a refusal to stop
    running services raises.
    """

    def __init__(
        self,
        toolkit: Toolkit,
        decisions: DecisionSource,
        git: Optional[GitClient] = None,
        version_store: Optional[VersionStore] = None,
    ):
        self.toolkit = toolkit
        self.decisions = decisions
        self.git = git or GitClient(root=toolkit.root, runner=toolkit.command_runner, logger=logger)
        self.version_store = version_store or toolkit.version_store

    def ask(self, session: UpgradeSession, message: str) -> bool:
        return session.record(message, bool(self.decisions.confirm(message)))

    def sync_code(self, session: UpgradeSession) -> CodeSyncOutcome:
        session.branch = self.git.current_branch()
        session.commit = self.git.current_commit()
        console.print(f"Current branch: {session.branch}")
        console.print(f"Current commit: {session.commit}")
        console.print("[blue]Checking for code update...[/blue]")

        if not self.git.pull_available(session.branch):
            console.print("No code update available")
            return CodeSyncOutcome.NO_UPDATE

        console.print("Fetching remote changes...")
        self.git.fetch(session.branch)
        if not self.git.has_changes(session.branch):
            console.print("Code is up to date")
            return CodeSyncOutcome.UP_TO_DATE

        console.print(f"[bold]Code update available![/bold] (current commit is {session.commit})")
        changes = self.git.changelog_changes(session.branch)
        console.print("Summary of changes:")
        if changes:
            for line in changes:
                console.print(f"  {line}", markup=False, highlight=False)
        else:
            console.print("  No changelog available")

        if not self.ask(session, "Perform code update?"):
            logger.info("Continuing without updating code")
            return CodeSyncOutcome.DECLINED

        console.print("Pulling new code...")
        self.git.pull(session.branch)
        console.print("[green]Code has been updated.[/green]")
        return CodeSyncOutcome.PULLED

    def services_running(self) -> bool:
        result = self.toolkit.compose(["top"], capture_output=True, check=True)
        return bool((result.stdout or "").strip())

    def upgrade_image(self, session: UpgradeSession) -> ImageUpgradeOutcome:
        installed = self.version_store.read_installed()
        seed = self.version_store.read_seed()

        if not is_newer(seed, installed):
            console.print("No change to docker image version")
            return ImageUpgradeOutcome.NO_CHANGE

        console.print(f"[bold]New docker image version available ({seed})[/bold]")
        console.print(f"Current image version is '{installed}' (from config/version)")

        if int(major(seed)) > int(major(installed)):
            err_console.print(
                "[yellow]WARNING:[/yellow] this is a major version update, please check the "
                "Release Notes for breaking changes before proceeding:"
            )
            err_console.print(f"* {RELEASE_NOTES_URL}", markup=False)

        if not self.ask(session, "Upgrade image?"):
            console.print(f"Keeping image version '{installed}'")
            return ImageUpgradeOutcome.DECLINED

        console.print("Checking if services are running")
        if self.services_running():
            if not self.ask(session, "All services must be stopped before upgrading. Stop all services now?"):
                raise UpgradeAbortedError(actionable_error("services_running"))
            console.print("Stopping docker services")
            self.toolkit.compose(["stop"], check=True)
            session.services_stopped = True

        console.print("At this point, we recommend backing up your data before proceeding")
        err_console.print("[bold yellow]!! WARNING: Only do this while the docker services are stopped!![/bold yellow]")
        if not self.ask(session, "Proceed with the upgrade?"):
            console.print("Not proceeding with upgrade")
            if session.services_stopped:
                logger.info("Services stopped by this run were left stopped")
            return ImageUpgradeOutcome.ABORTED

        console.print(f"Over-writing config/version with {seed} (previous version kept in config/__old-version)")
        self.version_store.swap(seed)

        if session.services_stopped:
            if self.ask(session, "Start docker services again?"):
                console.print("Starting docker services")
                self.toolkit.compose(["up", "-d"], check=True)
            else:
                logger.info("Leaving services stopped")

        console.print(f"[green]Image version upgraded to {seed}.[/green]")
        return ImageUpgradeOutcome.UPGRADED

    def run(self) -> int:
        session = UpgradeSession()
        try:
            self.version_store.read_installed()
            self.sync_code(session)
            self.upgrade_image(session)
            console.print("Done")
            return 0
        except (KeyboardInterrupt, click.Abort):
            err_console.print("[bold red]Operation cancelled by user.[/bold red]")
            logger.info("Operation cancelled by user")
            return 1
        except ToolkitError as exc:
            err_console.print(f"[bold red]Error:[/bold red] {exc}")
            logger.error(str(exc))
            return 1
        except Exception as exc:
            err_console.print(f"[bold red]Unexpected error:[/bold red] {exc}")
            logger.exception("Unexpected error")
            return 1
