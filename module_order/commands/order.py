"""Load order commands for the module-order CLI."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from rich.panel import Panel
from rich.table import Table

from ..console import console
from ..console import err_console
from ..manifest import ManifestError
from ..manifest import ManifestGraph
from ..settings import SettingsManager
from ..utils import escape_markup
from ..utils import format_error_message

logger = logging.getLogger(__name__)


def _load_graph(ctx: click.Context, manifest: Path | None) -> tuple[ManifestGraph, Path]:
    """Load the manifest given on the command line or configured in settings."""
    if manifest is None:
        settings = ctx.obj if isinstance(ctx.obj, SettingsManager) else SettingsManager()
        manifest = settings.get_manifest_path()

    try:
        return ManifestGraph.from_file(manifest), manifest
    except ManifestError as e:
        err_console.print(f"[red]✗ {escape_markup(format_error_message(e, include_type=False))}[/red]")
        raise click.Abort() from e


@click.command("order")
@click.argument("manifest", required=False, type=click.Path(path_type=Path, dir_okay=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "plain", "json"]),
    default="table",
    help="Output format",
)
@click.pass_context
def order_cmd(ctx: click.Context, manifest: Path | None, output_format: str):
    """Print the resolved load order of a module manifest."""
    graph, manifest_path = _load_graph(ctx, manifest)
    load_order = graph.load_order()
    logger.info(f"Resolved {len(load_order)} modules from {manifest_path}")

    if output_format == "plain":
        for module in load_order:
            click.echo(module.key)
        return

    if output_format == "json":
        payload = [
            {
                "position": position,
                "key": module.key,
                "foreign": module.foreign,
                "description": module.description,
            }
            for position, module in enumerate(load_order, start=1)
        ]
        click.echo(json.dumps(payload, indent=2))
        return

    if not load_order:
        console.print(f"[dim]No modules declared in {escape_markup(manifest_path)}[/dim]")
        return

    table = Table(title=f"Load order ({escape_markup(manifest_path)})", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Module", style="green")
    table.add_column("Origin", style="yellow")
    table.add_column("Description")

    for position, module in enumerate(load_order, start=1):
        origin = "foreign" if module.foreign else "manifest"
        table.add_row(str(position), escape_markup(module.key), origin, escape_markup(module.description or ""))

    console.print(table)


@click.command("show")
@click.argument("module_key")
@click.argument("manifest", required=False, type=click.Path(path_type=Path, dir_okay=False))
@click.pass_context
def show_cmd(ctx: click.Context, module_key: str, manifest: Path | None):
    """Show where a module loads and how its dependencies were ordered."""
    graph, manifest_path = _load_graph(ctx, manifest)
    load_order = graph.load_order()
    positions = {module.key: position for position, module in enumerate(load_order, start=1)}

    if module_key not in positions:
        raise click.ClickException(f"Module '{module_key}' not found in {manifest_path}")

    module = graph.get(module_key)
    spec = graph.manifest.get_spec(module_key)
    position = positions[module_key]

    lines = [
        f"[bold]Key:[/bold] {escape_markup(module.key)}",
        f"[bold]Origin:[/bold] {'foreign (not declared in manifest)' if module.foreign else 'manifest'}",
        f"[bold]Description:[/bold] {escape_markup(module.description or 'No description provided')}",
        f"[bold]Position:[/bold] {position} of {len(load_order)}",
    ]

    dependencies = spec.depends_on if spec else []
    if dependencies:
        lines.append("[bold]Dependencies:[/bold]")
        for dep_key in dependencies:
            if dep_key == module_key:
                status = "[yellow]self-dependency[/yellow]"
            elif positions.get(dep_key, 0) < position:
                status = "[green]loaded before[/green]"
            else:
                status = "[yellow]loaded after (cycle)[/yellow]"
            lines.append(f"  • {escape_markup(dep_key)} {status}")
    else:
        lines.append("[bold]Dependencies:[/bold] [dim]none[/dim]")

    console.print(Panel("\n".join(lines), title=f"Module: {escape_markup(module_key)}", border_style="cyan"))
