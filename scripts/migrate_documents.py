#!/usr/bin/env python3
"""
Command-line interface for migrating stored resume documents.

Lifts JSON documents of any schema version (legacy flat documents, current
documents with old sub-shapes, partial documents) into the current shape.
Unreadable files are reported and left untouched.

Usage:
    # Migrate a single file in place
    python scripts/migrate_documents.py resume.json

    # Migrate a directory into another directory
    python scripts/migrate_documents.py data/documents/ --output data/migrated/

    # Preview without writing
    python scripts/migrate_documents.py data/documents/ --dry-run
"""

import json
from pathlib import Path
from typing import List, Optional

import typer
from typing_extensions import Annotated

from galley.contexts.migration import LoadResult, empty_document, load_document
from galley.contexts.migration.logger import log_migration_result, setup_migration_logger

app = typer.Typer(
    help="Migrate stored resume documents to the current schema",
    add_completion=False,
)


def collect_documents(path: Path) -> List[Path]:
    """All .json files at path (the file itself, or a directory's direct children)."""
    if path.is_dir():
        return sorted(path.glob("*.json"))
    return [path]


def read_document(path: Path) -> LoadResult:
    """
    Read and migrate one stored document.

    Returns:
        LoadResult; on error the document is empty and must not be written
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        return LoadResult(
            document=empty_document(),
            error=f"Document is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})",
        )
    return load_document(raw)


def output_path_for(document_path: Path, source: Path, output: Optional[Path]) -> Path:
    if output is None:
        return document_path
    if source.is_dir():
        return output / document_path.name
    return output


@app.command()
def main(
    path: Annotated[Path, typer.Argument(help="JSON document or directory of documents", exists=True)],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output file (or directory when PATH is a directory); default is in place"),
    ] = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Report what would change without writing")] = False,
):
    """
    Migrate one document or a directory of documents.

    Examples:\n

        $ python scripts/migrate_documents.py resume.json

        $ python scripts/migrate_documents.py data/documents/ -o data/migrated/ --dry-run
    """
    documents = collect_documents(path)
    if not documents:
        typer.secho(f"No .json files found in {path}", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)

    log_file = setup_migration_logger(document_count=len(documents))

    if output is not None and path.is_dir() and not dry_run:
        output.mkdir(exist_ok=True, parents=True)

    migrated_count = 0
    error_count = 0
    for document_path in documents:
        result = read_document(document_path)
        log_migration_result(document_path.name, result)

        if not result.success:
            error_count += 1
            continue
        if result.migrated:
            migrated_count += 1
        if dry_run:
            continue

        target = output_path_for(document_path, path, output)
        target.write_text(json.dumps(result.document, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")

    typer.echo(f"\n{'=' * 60}")
    typer.echo(
        f"Summary: {len(documents) - error_count} current "
        f"({migrated_count} migrated from legacy), {error_count} unreadable"
    )
    if dry_run:
        typer.echo("Dry run: no files written")
    typer.echo(f"Log saved to: {log_file}")
    typer.echo(f"{'=' * 60}")

    if error_count:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
