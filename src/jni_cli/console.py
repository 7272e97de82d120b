"""Shared Rich console for jni-cli output."""

from rich.console import Console
from rich.table import Table

from jni_cli.models.project import JavaClassBinding

console = Console()


def error(message: str, console: Console = console) -> None:
    """Print an error message in red."""
    console.print(f"[red bold]{message}[/red bold]")


def success(message: str, console: Console = console) -> None:
    """Print a success message in green."""
    console.print(f"[green]{message}[/green]")


def warning(message: str, console: Console = console) -> None:
    """Print a warning message in yellow."""
    console.print(f"[yellow]{message}[/yellow]")


def print_bindings(bindings: list[JavaClassBinding], console: Console = console) -> None:
    """Print #[java_class] bindings as a table, one row per Rust type."""
    table = Table(title="Java class bindings")
    table.add_column("Rust type", style="bold")
    table.add_column("Package")
    table.add_column("JVM class")

    for binding in bindings:
        table.add_row(binding.rust_type, binding.package, binding.qualified_name)

    console.print(table)
