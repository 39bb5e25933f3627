from __future__ import annotations

"""Canopy Command Line Interface."""

from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from jsonschema import ValidationError as SchemaError
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from canopy.core.builder import scan_directory
from canopy.core.node import Node
from canopy.core.traversal import run_visitor
from canopy.core.visitors import DepthMeter, NodeCounter, Printer, SizeCalculator
from canopy.utils.logging import get as get_logger
from canopy.utils.render import RenderOptions, build_rich_tree
from canopy.yaml_loader import load_tree

app = typer.Typer(
    name="canopy",
    help="CLI for Canopy: build trees, run visitors over them.",
    add_completion=False,
)

console = Console()


def _load_tree_from_file(tree_file: Path) -> Node:
    """Load a YAML tree file, turning every load error into a clean exit."""
    try:
        return load_tree(tree_file)
    except yaml.YAMLError as e:
        console.print(f"[bold red]Error: {tree_file} is not valid YAML: {e}[/]")
    except SchemaError as e:
        where = "/".join(str(p) for p in e.absolute_path) or "<document>"
        console.print(f"[bold red]Error: {tree_file} does not match the tree schema at {where}: {e.message}[/]")
    except (ValidationError, ValueError, TypeError) as e:
        console.print(f"[bold red]Error: invalid tree in {tree_file}: {e}[/]")
    raise typer.Exit(code=1)


def _tree_file_arg() -> Any:
    return typer.Argument(
        ..., help="YAML file describing the tree.", exists=True, file_okay=True, dir_okay=False, readable=True
    )


@app.callback()
def main(debug: bool = typer.Option(False, "--debug", help="Elevate logging verbosity to DEBUG.")):
    """Build trees from YAML or directories and run visitors over them."""
    get_logger("debug" if debug else "info")


@app.command()
def size(tree_file: Path = _tree_file_arg()):
    """Print the total of all leaf values in the tree."""
    root = _load_tree_from_file(tree_file)
    total = run_visitor(root, SizeCalculator())
    typer.echo(total)


@app.command()
def show(
    tree_file: Path = _tree_file_arg(),
    icons: bool = typer.Option(True, "--icons/--no-icons", help="Prefix nodes with folder/file icons."),
    max_children: Optional[int] = typer.Option(None, "--max-children", min=0, help="Children shown per composite."),
    plain: bool = typer.Option(False, "--plain", help="Indented text instead of a Rich tree."),
    indent: int = typer.Option(2, "--indent", min=0, help="Spaces per level in --plain mode."),
):
    """Display the tree."""
    root = _load_tree_from_file(tree_file)
    if plain:
        for line in run_visitor(root, Printer(indent=indent)):
            typer.echo(line)
        return
    opts = RenderOptions(icons_on=icons, max_children=max_children)
    console.print(build_rich_tree(root, opts=opts))


@app.command()
def stats(tree_file: Path = _tree_file_arg()):
    """Show node counts, depth and total size."""
    root = _load_tree_from_file(tree_file)
    counts = run_visitor(root, NodeCounter())

    table = Table(title=f"Tree '{root.name}'")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="magenta", justify="right")
    table.add_row("Leaves", str(counts.leaves))
    table.add_row("Composites", str(counts.composites))
    table.add_row("Depth", str(run_visitor(root, DepthMeter())))
    table.add_row("Total size", str(run_visitor(root, SizeCalculator())))
    console.print(table)


@app.command()
def scan(
    directory: Path = typer.Argument(..., help="Directory to scan.", exists=True, file_okay=False, dir_okay=True),
    hidden: bool = typer.Option(False, "--hidden", help="Include dot-files and dot-directories."),
    follow_symlinks: bool = typer.Option(False, "--follow-symlinks", help="Descend into symlinked directories."),
    show_tree: bool = typer.Option(False, "--show", help="Print the scanned tree too."),
    max_children: Optional[int] = typer.Option(None, "--max-children", min=0, help="Children shown per composite."),
):
    """Scan a directory and report its total size in bytes."""
    try:
        root = scan_directory(directory, follow_symlinks=follow_symlinks, include_hidden=hidden)
    except OSError as e:
        console.print(f"[bold red]Error scanning {directory}: {e}[/]")
        raise typer.Exit(code=1)

    if show_tree:
        console.print(build_rich_tree(root, opts=RenderOptions(max_children=max_children)))
    total = run_visitor(root, SizeCalculator())
    console.print(f"[bold green]Total size:[/] {total} bytes")


if __name__ == "__main__":
    app()
