"""Console output helpers for the luming CLI."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from luming.diagnostics import Diagnostic, DiagnosticLevel

console = Console()
err_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]![/yellow] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_info(message: str) -> None:
    """Print an informational message."""
    console.print(f"[cyan]ℹ[/cyan] {message}")


def diagnostics_table(diagnostics: list[Diagnostic], title: str) -> Table:
    """Build a table listing diagnostics in emission order.

    Parameters
    ----------
    diagnostics : list[Diagnostic]
        Diagnostics to list.
    title : str
        Table title.

    Returns
    -------
    Table
        Rich table with level, line, column, and message columns.
    """
    table = Table(title=title)
    table.add_column("Level", style="bold")
    table.add_column("Line", justify="right", style="yellow")
    table.add_column("Column", justify="right", style="yellow")
    table.add_column("Message", style="cyan")

    for diagnostic in diagnostics:
        color = "red" if diagnostic.level == DiagnosticLevel.ERROR else "yellow"
        table.add_row(
            f"[{color}]{diagnostic.level.value}[/{color}]",
            "" if diagnostic.line is None else str(diagnostic.line),
            "" if diagnostic.column is None else str(diagnostic.column),
            escape(diagnostic.message),
        )
    return table
