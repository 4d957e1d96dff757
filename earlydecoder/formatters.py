"""
Terminal output for decoded modules.

Renders the facts of a ``DecodedModule`` as rich tables followed by the
diagnostics of each file.
"""

from typing import Dict, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .diagnostics import Diagnostics, Severity
from .models import DecodedModule


class ModuleSummaryFormatter:
    """Prints a decoded module and its diagnostics to a rich console."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize formatter with Rich console."""
        self.console = console or Console()

        self.colors = {
            'header': 'bold blue',
            'name': 'bright_white',
            'value': 'cyan',
            'comment': 'dim',
            Severity.ERROR: 'bold red',
            Severity.WARNING: 'yellow',
        }

    def _table(self, title: str, *columns: str) -> Table:
        table = Table(title=title, title_style=self.colors['header'], title_justify="left")
        for column in columns:
            table.add_column(column)
        return table

    def print_module(self, mod: DecodedModule) -> None:
        """Print every non-empty section of a decoded module."""
        if mod.required_core:
            table = self._table("Required core versions", "Constraint")
            for constraint in mod.required_core:
                table.add_row(escape(constraint))
            self.console.print(table)

        if mod.provider_requirements:
            table = self._table("Provider requirements", "Name", "Source", "Version constraints")
            for name, req in mod.provider_requirements.items():
                versions = ", ".join(req.version_constraints) or "-"
                table.add_row(escape(name), escape(req.source or "-"), escape(versions))
            self.console.print(table)

        if mod.provider_configs:
            table = self._table("Provider configurations", "Key", "Name", "Alias")
            for key, config in mod.provider_configs.items():
                table.add_row(escape(key), escape(config.name), escape(config.alias or "-"))
            self.console.print(table)

        for title, records in (("Resources", mod.resources), ("Data sources", mod.data_sources)):
            if not records:
                continue
            table = self._table(title, "Key", "Type", "Name", "Provider")
            for key, record in records.items():
                table.add_row(
                    escape(key), escape(record.type), escape(record.name),
                    escape(str(record.provider) or "-"),
                )
            self.console.print(table)

        if mod.module_calls:
            table = self._table("Module calls", "Key", "Name", "Source")
            for key, call in mod.module_calls.items():
                table.add_row(escape(key), escape(call.name), escape(call.source or "-"))
            self.console.print(table)

    def print_diagnostics(self, diags_by_file: Dict[str, Diagnostics]) -> None:
        """Print diagnostics grouped by file, or a note that there are none."""
        total = sum(len(d) for d in diags_by_file.values())
        if total == 0:
            self.console.print("[dim]No diagnostics.[/dim]")
            return

        for filename, diags in diags_by_file.items():
            if not diags:
                continue
            self.console.print(f"\n[bold]{escape(filename)}[/bold]")
            for diag in diags:
                style = self.colors[diag.severity]
                label = diag.severity.value.capitalize()
                location = f" [dim]({diag.subject})[/dim]" if diag.subject is not None else ""
                self.console.print(f"  [{style}]{label}:[/{style}] {escape(diag.summary)}{location}")
                if diag.detail:
                    self.console.print(f"    [dim]{escape(diag.detail)}[/dim]", highlight=False)
