"""
CLI: ``iconspine export`` and ``iconspine inspect``.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.table import Table

from iconspine.cli.utils import RichProgressObserver, console, fail, load_settings
from iconspine.core.errors import IconSpineError
from iconspine.framework.logging import configure_logging
from iconspine.pipeline import IconLibraryPipeline


def export_library(
    source: Path | None = typer.Option(None, "--source", "-s", help="Icon set root (categories.yml, icons.yml, 32/)."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Library output root."),
    workers: int | None = typer.Option(None, "--workers", "-w", min=1, help="Export threads (1 = sequential)."),
    skip_failures: bool | None = typer.Option(
        None, "--skip-failures/--fail-fast", help="Skip icons that fail to render instead of aborting."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR."),
    log_format: str | None = typer.Option(None, "--log-format", help="console or json."),
) -> None:
    """Recolor and rasterize every icon into the library layout."""
    try:
        settings = load_settings(
            source_dir=source,
            output_dir=output,
            workers=workers,
            skip_failures=skip_failures,
            log_level=log_level,
            log_format=log_format,
        )
    except IconSpineError as e:
        fail(e)
    configure_logging(level=settings.log_level, format=settings.log_format, force=True)

    console.print("[bold]Icon set to library converter[/bold]\n")

    pipeline = IconLibraryPipeline(settings, observer=RichProgressObserver())
    result = pipeline.run()

    if not result.succeeded and pipeline.error is not None:
        fail(pipeline.error)

    summary = pipeline.summary
    console.print(
        f"\n[green]Done[/green]: {summary.exported}/{summary.total} icons, "
        f"{summary.artifacts} files in {settings.output_dir}"
    )
    if summary.failures:
        console.print(f"[yellow]Skipped {len(summary.failures)} icon(s):[/yellow]")
        for failure in summary.failures:
            console.print(f"  • {failure.identifier}: {failure.error_type}: {failure.message}")


def inspect_registry(
    source: Path | None = typer.Option(None, "--source", "-s", help="Icon set root."),
    as_json: bool = typer.Option(False, "--json", help="Print records as JSON."),
) -> None:
    """Build the registry without exporting and list its records."""
    try:
        settings = load_settings(source_dir=source)
        configure_logging(level=settings.log_level, format=settings.log_format)
        registry = IconLibraryPipeline(settings).build()
    except IconSpineError as e:
        fail(e)

    records = [record.to_dict() for record in registry.values()]
    if as_json:
        console.print_json(json.dumps(records))
        return

    table = Table(title=f"{len(records)} icons")
    table.add_column("Identifier")
    table.add_column("Category")
    table.add_column("Top category")
    table.add_column("Friendly name")
    table.add_column("Aliases")
    for row in records:
        table.add_row(
            row["identifier"],
            row["category"],
            row["top_category"],
            row["friendly_name"],
            ", ".join(row["aliases"]),
        )
    console.print(table)
