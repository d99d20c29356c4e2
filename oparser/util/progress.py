"""
Progress reporting utilities using rich.
"""

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console

console = Console()


@contextmanager
def operation_status(operation: str, out: Console | None = None) -> Iterator[None]:
    """
    Context manager to show operation status.

    Usage:
        with operation_status("Extracting overlay configuration"):
            # do work
            pass

    Args:
        operation: Description of the operation
        out: Console to print on (default: module console)

    Yields:
        None
    """
    target = out or console
    target.print(f"[bold blue]{operation}...[/bold blue]")

    try:
        yield
        target.print(f"[green]✓ {operation} complete[/green]")
    except Exception as e:
        target.print(f"[red]✗ {operation} failed: {e}[/red]")
        raise


def print_stage_counts(counts: dict[str, tuple[int, int]], out: Console | None = None) -> None:
    """
    Print per-category extracted/missing counts.

    Args:
        counts: Category label mapped to (extracted, missing)
        out: Console to print on (default: module console)
    """
    target = out or console
    for label, (extracted, missing) in counts.items():
        if missing:
            target.print(f"  [yellow]⚠ {label}: {extracted} extracted, {missing} missing[/yellow]")
        else:
            target.print(f"  [green]✓ {label}: {extracted} extracted[/green]")
