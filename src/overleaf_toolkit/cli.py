import logging

import click
from rich.logging import RichHandler

from .core import Toolkit, find_toolkit_root
from .errors import ToolkitError
from .services.prompt import ConsoleDecisionSource
from .upgrade import UpgradeController

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_level=False, show_path=False)],
)


def _toolkit(ctx: click.Context) -> Toolkit:
    options = ctx.obj
    try:
        root = find_toolkit_root(options["root"])
    except ToolkitError as exc:
        raise click.ClickException(str(exc)) from exc
    return Toolkit(root=root, debug=options["debug"])


class ToolkitGroup(click.Group):
    """Reports usage errors with exit status 1 like every other validation failure."""

    def make_context(self, info_name, args, parent=None, **extra):
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as exc:
            exc.exit_code = 1
            raise

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except click.UsageError as exc:
            exc.exit_code = 1
            raise


@click.group(cls=ToolkitGroup)
@click.option(
    "--root",
    required=False,
    type=click.Path(file_okay=False),
    envvar="OVERLEAF_TOOLKIT_ROOT",
    help="Toolkit checkout holding lib/ and config/. Defaults to the current directory.",
)
@click.option("--verbose", is_flag=True, default=False, help="Enable verbose logging")
@click.option("--debug", is_flag=True, default=False, help="Print the resolved compose variables and arguments.")
@click.option("--log-file", type=click.Path(), help="Path to log file")
@click.pass_context
def main(ctx, root, verbose, debug, log_file):
    """Run and upgrade a local Overleaf deployment with Docker Compose."""
    logger = logging.getLogger("overleaf_toolkit")

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(file_handler)

    ctx.obj = {"root": root, "debug": debug}


@main.command(
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
    add_help_option=False,
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def compose(ctx, args):
    """Forward ARGS to docker compose with the configured overlays."""
    raise SystemExit(_toolkit(ctx).run_compose(list(args)))


@main.command()
@click.pass_context
def upgrade(ctx):
    """Check for toolkit code updates, then offer to upgrade the image version.

    Pulls new toolkit code from the remote branch when available, then
    compares config/version with lib/config-seed/version and, after
    confirmation, stops the services and switches to the new version.
    """
    controller = UpgradeController(toolkit=_toolkit(ctx), decisions=ConsoleDecisionSource())
    raise SystemExit(controller.run())


@main.command()
@click.pass_context
def init(ctx):
    """Create config/ files from lib/config-seed."""
    raise SystemExit(_toolkit(ctx).run_init())


@main.command()
@click.pass_context
def start(ctx):
    """Start all services in the background."""
    raise SystemExit(_toolkit(ctx).run_compose(["up", "-d"]))


@main.command()
@click.pass_context
def stop(ctx):
    """Stop all services."""
    raise SystemExit(_toolkit(ctx).run_compose(["stop"]))


@main.command(context_settings={"ignore_unknown_options": True, "allow_extra_args": True})
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def up(ctx, args):
    """Run `docker compose up` with optional extra ARGS."""
    raise SystemExit(_toolkit(ctx).run_compose(["up"] + list(args)))


if __name__ == "__main__":
    main()
