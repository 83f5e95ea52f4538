"""
CLI entry point for scrublog.

Commands:
    scrublog scrub <text>         - Scrub secrets out of a line of text
    scrublog sanitize <path>      - Sanitize a JSON or YAML document
    scrublog config               - Manage configuration
    scrublog version              - Show version information
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import typer
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.pretty import Pretty

if TYPE_CHECKING:
    from scrublog.redaction import Sanitizer

app = typer.Typer(
    name="scrublog",
    help="Secret-safe logging - scrub and sanitize data before it is logged",
    no_args_is_help=True,
)
console = Console()

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})

DEFAULT_CONFIG = """\
# scrublog configuration

# Show verbose `log` output (warnings and errors are always shown)
verbose_logging: false

# Scrub messages and sanitize arguments before they are logged
enable_redaction: true

# Prefix for every message from the default logger
# prefix: "[MyApp]"

# Additional key names per redaction rule
extra_keys:
  secret: []
  code: []
  identifier: []
"""


def _build_sanitizer() -> Sanitizer:
    """Build a sanitizer honoring extra key aliases from the config file."""
    from scrublog.config import LoggingConfig
    from scrublog.redaction import Sanitizer, build_rules

    return Sanitizer(rules=build_rules(LoggingConfig.get_instance().extra_keys))


def _load_document(path: Path) -> Any:
    """Load a JSON or YAML document based on its suffix."""
    text = path.read_text()
    if path.suffix.lower() in _YAML_SUFFIXES:
        return yaml.safe_load(text)
    return json.loads(text)


@app.command()
def scrub(
    text: str = typer.Argument(..., help="Text to scrub ('-' reads stdin)"),
) -> None:
    """Scrub bearer tokens, key=value secrets, codes, long tokens and emails."""
    from scrublog.redaction import scrub as scrub_text

    if text == "-":
        for line in sys.stdin:
            print(scrub_text(line.rstrip("\n")))
        return
    print(scrub_text(text))


@app.command()
def sanitize(
    path: Path = typer.Argument(..., help="JSON or YAML file to sanitize"),
    output_json: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Sanitize a JSON or YAML document with the key-based rules."""
    try:
        document = _load_document(path)
        result = _build_sanitizer().sanitize_top(document)
    except Exception as e:
        if output_json:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if output_json:
        print(json.dumps(result, indent=2, default=str))
    else:
        console.print(
            Panel(
                Pretty(result),
                title=f"[green]Sanitized[/green] {path.name}",
                border_style="green",
            )
        )


@app.command()
def config(
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    init: bool = typer.Option(False, "--init", help="Initialize default configuration"),
) -> None:
    """Manage scrublog configuration."""
    from scrublog.config import get_config_file

    config_file = get_config_file()

    if show:
        if config_file.exists():
            console.print(config_file.read_text(), markup=False)
        else:
            console.print("[yellow]No configuration file found.[/yellow]")
            console.print(f"Run 'scrublog config --init' to create one at {config_file}")
        return

    if init:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(DEFAULT_CONFIG)
        console.print(f"[green]Created configuration at {config_file}[/green]")
        return

    console.print("Usage: scrublog config [--show | --init]")


@app.command()
def version() -> None:
    """Show version information."""
    from scrublog import __version__

    console.print(f"scrublog v{__version__}")


if __name__ == "__main__":
    app()
