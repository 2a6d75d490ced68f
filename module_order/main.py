"""module-order CLI - resolve dependency-respecting load orders for modules."""

import logging

import click

from .commands import order_cmd
from .commands import show_cmd
from .logging_setup import init_json_logging
from .settings import SettingsManager

logger = logging.getLogger(__name__)


@click.group(invoke_without_command=True)
@click.version_option(package_name="module-order")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (overrides settings and MODULE_ORDER_LOG_LEVEL)",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Append JSONL logs to this file (overrides settings and MODULE_ORDER_LOG_PATH)",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, log_file: str | None):
    """module-order - resolve the load order of interdependent modules."""
    settings = SettingsManager()
    log_path = log_file or settings.get_log_path()
    try:
        init_json_logging(path=log_path, level=log_level or settings.get_log_level())
    except OSError as e:
        raise click.ClickException(f"Cannot open log file {log_path}: {e}") from e
    ctx.obj = settings

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit()


cli.add_command(order_cmd)
cli.add_command(show_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
