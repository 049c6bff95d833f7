import logging
import os
import shutil
import subprocess
from typing import List, Optional, Sequence

from rich.console import Console

from .constants import CONFIG_DIR, LIB_DIR, RC_FILE, SEED_DIR, SEED_FILES
from .errors import ConfigurationError, ToolkitError
from .errors_catalog import actionable_error
from .models import ComposeInvocation, ToolkitConfiguration
from .services.command_runner import CommandRunner
from .services.compose_builder import ComposeBuilder
from .services.config_loader import ConfigLoader
from .services.docker_runtime import DockerRuntimeService
from .services.version_store import VersionStore

console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger("overleaf_toolkit")


def find_toolkit_root(candidate: Optional[str] = None) -> str:
    """Return the absolute toolkit root, which must hold `lib/` and `config/`."""
    root = os.path.realpath(candidate or os.environ.get("OVERLEAF_TOOLKIT_ROOT") or os.getcwd())
    if not os.path.isdir(os.path.join(root, LIB_DIR)) or not os.path.isdir(os.path.join(root, CONFIG_DIR)):
        raise ConfigurationError(actionable_error("root_not_found", path=root))
    return root


class Toolkit:
    """Entry point for compose invocations against one toolkit checkout."""

    def __init__(
        self,
        root: str,
        debug: bool = False,
        runtime: Optional[DockerRuntimeService] = None,
    ):
        self.root = root
        self.debug = debug
        self.config_file = os.path.join(root, RC_FILE)

        self.command_runner = CommandRunner(logger=logger)
        self.config_loader = ConfigLoader(logger=logger)
        self.version_store = VersionStore(root=root, logger=logger)
        self.compose_builder = ComposeBuilder(root=root, logger=logger)
        self.runtime = runtime or DockerRuntimeService(
            logger=logger,
            runner=self.command_runner,
            subprocess_module=subprocess,
        )

    def load_config(self) -> ToolkitConfiguration:
        return self.config_loader.load(self.config_file)

    def installed_version(self) -> str:
        return self.version_store.read_installed()

    def build_invocation(self, args: Sequence[str] = ()) -> ComposeInvocation:
        config = self.load_config()
        invocation = self.compose_builder.build(config, self.installed_version(), args)
        if self.debug or config.flag("RC_DEBUG") or os.environ.get("RC_DEBUG"):
            err_console.print(
                self.compose_builder.debug_report(invocation), markup=False, highlight=False, emoji=False, soft_wrap=True
            )
        return invocation

    def compose(
        self,
        args: Sequence[str],
        capture_output: bool = False,
        check: bool = False,
    ) -> subprocess.CompletedProcess:
        invocation = self.build_invocation(args)
        return self.runtime.execute(invocation, capture_output=capture_output, check=check)

    def run_compose(self, args: Sequence[str]) -> int:
        try:
            return self.compose(args).returncode
        except ToolkitError as exc:
            err_console.print(f"[bold red]Error:[/bold red] {exc}")
            return 1
        except Exception as exc:
            err_console.print(f"[bold red]Unexpected error:[/bold red] {exc}")
            logger.exception("Unexpected error")
            return 1

    def run_init(self) -> int:
        try:
            self.init_config()
            return 0
        except ToolkitError as exc:
            err_console.print(f"[bold red]Error:[/bold red] {exc}")
            return 1
        except Exception as exc:
            err_console.print(f"[bold red]Unexpected error:[/bold red] {exc}")
            logger.exception("Unexpected error")
            return 1

    def init_config(self) -> List[str]:
        """Copy the seed configuration into `config/`."""
        if os.path.exists(self.config_file):
            raise ConfigurationError(actionable_error("config_exists", path=os.path.join(self.root, CONFIG_DIR)))

        copied = []
        for file_name in SEED_FILES:
            source = os.path.join(self.root, SEED_DIR, file_name)
            destination = os.path.join(self.root, CONFIG_DIR, file_name)
            if not os.path.isfile(source):
                raise ConfigurationError(f"Seed file missing from the toolkit checkout: {source}")
            try:
                shutil.copyfile(source, destination)
            except OSError as exc:
                raise ConfigurationError(f"Could not copy {source} to {destination}: {exc}") from exc
            logger.info("Copied %s to %s", source, destination)
            copied.append(destination)

        console.print(f"[green]Configuration initialized in {os.path.join(self.root, CONFIG_DIR)}[/green]")
        return copied
