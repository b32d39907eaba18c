"""CLI entry point: plugpm install/uninstall/update/list."""

from __future__ import annotations

import sys

import click
from rich.console import Console
from rich.markup import escape

from . import __version__
from .core.config import load_config
from .core.utils import short_path
from .plugins import Outcome, PackageRegistry, PluginHandler

console = Console()


def _print_outcome(outcome: Outcome | None) -> None:
    if outcome is None:
        return
    if isinstance(outcome.body, list):
        style = "green" if outcome.success else "red"
        console.print(f"[{style}]{outcome.title}[/{style}]")
        for name in outcome.body:
            console.print(f"  [bold]{escape(name)}[/bold]")


def _make_handler(ctx: click.Context) -> PluginHandler:
    return PluginHandler.from_config(ctx.obj["config"])


def _finish(outcome: Outcome | None) -> None:
    _print_outcome(outcome)
    if outcome is None or not outcome.success:
        sys.exit(1)


@click.group()
@click.version_option(__version__, prog_name="plugpm")
@click.option(
    "--base-dir",
    "-d",
    type=click.Path(file_okay=False),
    default=None,
    help="Plugin base directory (default: ~/.picgo)",
)
@click.option("--registry", default=None, help="npm registry URL")
@click.pass_context
def cli(ctx: click.Context, base_dir: str | None, registry: str | None):
    """plugpm — manage picgo plugins with npm."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config(base_dir=base_dir, registry=registry)


@cli.command()
@click.argument("plugins", nargs=-1, required=True)
@click.option("--proxy", "-p", default=None, help="Proxy handed to npm")
@click.pass_context
def install(ctx: click.Context, plugins: tuple[str, ...], proxy: str | None):
    """Install plugins by name, scoped name, or local path."""
    config = ctx.obj["config"]
    handler = _make_handler(ctx)
    _finish(handler.install(list(plugins), proxy=proxy or config.proxy, env=config.env))


@cli.command()
@click.argument("plugins", nargs=-1, required=True)
@click.pass_context
def uninstall(ctx: click.Context, plugins: tuple[str, ...]):
    """Uninstall plugins."""
    handler = _make_handler(ctx)
    _finish(handler.uninstall(list(plugins)))


@cli.command()
@click.argument("plugins", nargs=-1, required=True)
@click.option("--proxy", "-p", default=None, help="Proxy handed to npm")
@click.pass_context
def update(ctx: click.Context, plugins: tuple[str, ...], proxy: str | None):
    """Update installed plugins."""
    config = ctx.obj["config"]
    handler = _make_handler(ctx)
    _finish(handler.update(list(plugins), proxy=proxy or config.proxy, env=config.env))


@cli.command(name="list")
@click.pass_context
def list_cmd(ctx: click.Context):
    """List installed plugins."""
    config = ctx.obj["config"]
    registry = PackageRegistry(config.base_dir)
    names = registry.load()
    if not names:
        console.print(f"no plugins installed in {short_path(config.base_dir)}", style="dim")
        console.print("use `plugpm install` to add one", style="dim")
        return
    for name in names:
        console.print(f"  [bold]{escape(name)}[/bold]")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
