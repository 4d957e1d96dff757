"""
earlydecoder CLI - Quick semantic summaries of infrastructure modules.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from .errors import EarlyDecoderError
from .formatters import ModuleSummaryFormatter
from .loader import load_module_from_dir
from .settings import get_settings

# Setup
app = typer.Typer(
    name="earlydecoder",
    help="Early, partial decoding of infrastructure configuration modules",
    add_completion=False,
)
console = Console()


def configure_logging():
    """Configure logging based on settings."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@app.callback()
def main():
    """Early, partial decoding of infrastructure configuration modules."""
    configure_logging()


@app.command()
def inspect(
    directory: Path = typer.Argument(
        Path("."), help="Module directory to decode"
    ),
    as_json: bool = typer.Option(
        False, "--json", help="Print the summary and diagnostics as JSON"
    ),
    strict: Optional[bool] = typer.Option(
        None, "--strict/--no-strict", help="Exit with status 1 if any error diagnostic is found (default from ED_STRICT)"
    ),
):
    """Decode a module directory and print what was found."""
    settings = get_settings()
    if strict is None:
        strict = settings.strict

    try:
        mod, diags_by_file = load_module_from_dir(directory, settings)
    except EarlyDecoderError as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    has_errors = any(d.has_errors() for d in diags_by_file.values())

    if as_json:
        payload = {
            "module": mod.summary(),
            "diagnostics": {
                filename: [d.model_dump(mode="json") for d in diags]
                for filename, diags in diags_by_file.items()
            },
        }
        typer.echo(json.dumps(payload, indent=2))
    else:
        console.print(Panel.fit(
            f"[bold cyan]earlydecoder inspect[/bold cyan]\n"
            f"Directory: {directory.resolve().name}\n"
            f"Files: {len(diags_by_file)}",
            border_style="cyan",
        ))
        formatter = ModuleSummaryFormatter(console)
        formatter.print_module(mod)
        formatter.print_diagnostics(diags_by_file)

    if strict and has_errors:
        raise typer.Exit(code=1)


@app.command()
def version():
    """Show earlydecoder version."""
    from . import __version__

    console.print(f"earlydecoder version: [bold]{__version__}[/bold]")


if __name__ == "__main__":
    app()
