#!/usr/bin/env python3
"""
Command-line interface for paginating measured block geometry.

Reads block geometry exported from a rendering (one infinite-height column)
and prints the corrective margins and page count the pagination engine
computes for it.

Input is a JSON list of blocks, or an object with "blocks" and an optional
"contentHeight":

    [{"top": 0, "bottom": 400}, {"top": 900, "bottom": 1200, "atomic": true}]

A block's ordinal defaults to its position in the list.

Usage:
    python scripts/paginate_blocks.py blocks.json
    python scripts/paginate_blocks.py blocks.json --page-size letter
    python scripts/paginate_blocks.py blocks.json --capacity 1000 --strict
"""

import json
from pathlib import Path
from typing import Any, List, Optional, Tuple

import typer
from typing_extensions import Annotated

from galley.contexts.layout import BlockGeometry, get_page_geometry, paginate
from galley.contexts.layout.logger import setup_layout_logger

app = typer.Typer(
    help="Compute page-break corrections for measured block geometry",
    add_completion=False,
)


def parse_blocks(data: Any) -> Tuple[List[BlockGeometry], Optional[float]]:
    """
    Parse exported geometry into blocks and an optional content height.

    Raises:
        typer.BadParameter: If the data is not a list of blocks with top and bottom
    """
    content_height = None
    if isinstance(data, dict):
        content_height = data.get("contentHeight")
        data = data.get("blocks")
    if not isinstance(data, list):
        raise typer.BadParameter("Expected a list of blocks or an object with a 'blocks' list")

    blocks = []
    for index, item in enumerate(data):
        if not isinstance(item, dict) or "top" not in item or "bottom" not in item:
            raise typer.BadParameter(f"Block {index} must be an object with 'top' and 'bottom'")
        blocks.append(
            BlockGeometry(
                ordinal=item.get("ordinal", index),
                top=float(item["top"]),
                bottom=float(item["bottom"]),
                atomic=bool(item.get("atomic", True)),
            )
        )
    return blocks, content_height


@app.command()
def main(
    blocks_file: Annotated[
        Path, typer.Argument(help="JSON file of measured blocks", exists=True, dir_okay=False)
    ],
    page_size: Annotated[
        Optional[str], typer.Option("--page-size", "-p", help="Page size preset (a4, letter)")
    ] = None,
    capacity: Annotated[
        Optional[float],
        typer.Option("--capacity", "-c", help="Page capacity in px (overrides --page-size)", min=1),
    ] = None,
    strict: Annotated[
        bool, typer.Option("--strict", help="Exit non-zero if the layout has issues")
    ] = False,
):
    """
    Paginate one exported rendering.

    Examples:\n

        $ python scripts/paginate_blocks.py blocks.json

        $ python scripts/paginate_blocks.py blocks.json -p letter --strict
    """
    try:
        geometry = get_page_geometry(page_size)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--page-size")
    if capacity is None:
        capacity = geometry.content_height

    try:
        data = json.loads(blocks_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        typer.secho(f"Error: {blocks_file} is not valid JSON: {e.msg}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    blocks, content_height = parse_blocks(data)

    log_file = setup_layout_logger(page_size=geometry.name, capacity=capacity)

    result = paginate(blocks, content_height=content_height, capacity=capacity)

    typer.secho(f"\n{blocks_file.name}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Capacity: {capacity:g}px ({len(blocks)} blocks)")
    typer.echo(f"Pages: {result.page_count}")
    typer.echo(f"Iterations: {result.iterations}")
    if result.corrections:
        typer.echo("Corrections:")
        for ordinal, margin in sorted(result.corrections.items()):
            typer.echo(f"  block {ordinal}: +{margin:g}px")
    else:
        typer.echo("Corrections: none")

    issues = result.get_issues()
    for issue in issues:
        typer.secho(f"⚠ {issue}", fg=typer.colors.YELLOW)
    typer.echo(f"Log saved to: {log_file}")

    if strict and issues:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
