"""Config command - Manage symscope configuration."""

from dataclasses import fields
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel

from symscope.foundation.config import get_config, load_config, save_default_config

console = Console()


def _get_nested(obj: object, key: str) -> object:
    """Get a nested attribute using dot notation.

    Args:
        obj: The object to traverse
        key: Dot-separated path like 'lookup.indent_width'

    Returns:
        The value at the path, or raises KeyError if not found
    """
    current = obj
    for part in key.split("."):
        if hasattr(current, part):
            current = getattr(current, part)
        else:
            raise KeyError(f"Key not found: {key}")
    return current


@click.group()
def config() -> None:
    """Manage symscope configuration.

    Configuration is loaded from (in priority order):
    1. Environment variables (SYMSCOPE_*)
    2. .symscope/config.yaml (project-local)
    3. ~/.symscope/config.yaml (user-global)
    4. Built-in defaults

    Examples:

        symscope config show              # Show current config
        symscope config init              # Create default config file
        symscope config get lookup.indent_width

    Environment overrides:

        SYMSCOPE_LOOKUP_PREFER_SOURCE=false symscope ...
        SYMSCOPE_LOOKUP_TEXT_EXTENSIONS=txt,xml symscope ...
    """


@config.command()
@click.option("--path", type=click.Path(), help="Config file path to show")
def show(path: str | None) -> None:
    """Show current configuration.

    Examples:
        symscope config show
        symscope config show --path ~/.symscope/config.yaml
    """
    cfg = load_config(path) if path else get_config()

    console.print(Panel("[bold]symscope Configuration[/bold]", border_style="cyan"))

    console.print("\n[cyan]Lookup[/cyan]")
    for f in fields(cfg.lookup):
        value = getattr(cfg.lookup, f.name)
        if isinstance(value, tuple):
            value = ", ".join(value)
        console.print(f"  {f.name}: {value}", markup=False, highlight=False)

    console.print(f"\n  verbose: {cfg.verbose}", highlight=False)

    console.print("\n[dim]Config sources:[/dim]")
    local_config = Path(".symscope/config.yaml")
    home_config = Path.home() / ".symscope" / "config.yaml"
    for candidate in (local_config, home_config):
        if candidate.exists():
            console.print(f"  [green]✓[/green] {candidate}")
        else:
            console.print(f"  [dim]○[/dim] {candidate} (not found)")


@config.command()
@click.option(
    "--path",
    type=click.Path(),
    default=".symscope/config.yaml",
    help="Config file path (default: .symscope/config.yaml)",
)
@click.option("--global", "global_config", is_flag=True, help="Create in ~/.symscope/ instead")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init(path: str, global_config: bool, force: bool) -> None:
    """Create default config file.

    Examples:
        symscope config init                    # Create .symscope/config.yaml
        symscope config init --global           # Create ~/.symscope/config.yaml
        symscope config init --path custom.yaml
    """
    config_path = Path.home() / ".symscope" / "config.yaml" if global_config else Path(path)
    if config_path.exists() and not force:
        console.print(f"[yellow]![/yellow] Config file already exists: {config_path}")
        console.print("[dim]Use --force to overwrite it.[/dim]")
        raise SystemExit(1)

    saved_path = save_default_config(config_path)
    console.print(f"[green]✓[/green] Config file created: {saved_path}")
    console.print("\n[dim]Edit this file to customize symscope behavior.[/dim]")


@config.command()
@click.argument("key")
@click.option("--path", type=click.Path(), help="Config file path")
def get(key: str, path: str | None) -> None:
    """Get a configuration value.

    Examples:
        symscope config get lookup.indent_width
        symscope config get verbose
    """
    cfg = load_config(path) if path else get_config()

    try:
        value = _get_nested(cfg, key)
    except KeyError:
        console.print(f"[red]✗[/red] Key not found: {key}")
        console.print("\n[dim]Available top-level keys:[/dim]")
        console.print("  lookup, verbose")
        raise SystemExit(1) from None

    # Plain output for scripting
    if isinstance(value, tuple):
        value = ",".join(value)
    click.echo(value)
