"""Shared console helpers for devicegen.

All user-facing output goes through a single Rich console so that colours
and wrapping are consistent, and so tests can swap in a recording console.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

console = Console()
err_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, escape(str(value)))

    console.print(table)
    console.print()


def print_file_tree(
    root: Path, paths: list[Path], labels: dict[Path, str] | None = None
) -> None:
    """Print *paths* (all below *root*) as a directory tree.

    Args:
        root: Directory shown at the top of the tree.
        paths: Files to show, as absolute paths below *root*.
        labels: Optional short description per file, shown dimmed after
            its name.
    """
    labels = labels or {}
    tree = Tree(f"[bold]{escape(root.name)}/[/bold]")
    branches: dict[Path, Tree] = {Path("."): tree}
    for path in sorted(paths):
        relative = path.relative_to(root)
        parent = Path(".")
        for part in relative.parts[:-1]:
            node = parent / part
            if node not in branches:
                branches[node] = branches[parent].add(f"{escape(part)}/")
            parent = node
        leaf = escape(relative.name)
        if labels.get(path):
            leaf += f"  [dim]{escape(labels[path])}[/dim]"
        branches[parent].add(leaf)
    console.print(tree)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message to stderr."""
    err_console.print(f"[bold red]{escape(message)}[/bold red]")
