# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Typer CLI application root."""

from __future__ import annotations

import asyncio
import sys
from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer

from logtriage.cli.commands import db, notify

app = typer.Typer(
    name="logtriage",
    help="Rule-based severity classification for log files",
    no_args_is_help=True,
)

app.add_typer(db.app, name="db", help="Database management")
app.add_typer(notify.app, name="notify", help="Alert channels and summaries")


class OutputFormat(StrEnum):
    CONSOLE = "console"
    JSON = "json"
    SUMMARY = "summary"


def _read_text(path: Path) -> str:
    from logtriage.processing.upload import decode_upload

    return decode_upload(path.read_bytes())


@app.callback()
def main(
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Override LOGTRIAGE_LOG_LEVEL")
    ] = None,
) -> None:
    """Configure logging before any command runs."""
    from logtriage.core.config import get_settings
    from logtriage.core.exceptions import ConfigurationError
    from logtriage.core.logging import setup_logging

    try:
        settings = get_settings()
    except ConfigurationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(2) from exc
    setup_logging(log_level or settings.log_level, settings.log_format)


@app.command()
def classify(
    target: Annotated[Path, typer.Argument(help="Log file to classify")],
    fmt: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Output format")
    ] = OutputFormat.CONSOLE,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Output file path")
    ] = None,
    max_findings: Annotated[
        int | None, typer.Option("--max-findings", help="Limit console listing")
    ] = None,
) -> None:
    """Classify a log file and print its findings (nothing is stored)."""
    from logtriage.classifier.engine import classify as classify_content

    if not target.is_file():
        typer.echo(f"Target not found: {target}", err=True)
        raise typer.Exit(1)

    result = classify_content(_read_text(target))

    if fmt == OutputFormat.CONSOLE:
        from logtriage.cli.formatters.console import format_result

        format_result(result, target=str(target), max_findings=max_findings)
    elif fmt == OutputFormat.JSON:
        from logtriage.cli.formatters.json_fmt import format_json

        _write_output(format_json(result), output)
    else:
        from logtriage.cli.formatters.json_fmt import format_json_summary

        _write_output(format_json_summary(result, target=str(target)), output)


@app.command()
def ingest(
    target: Annotated[Path, typer.Argument(help="Log file to upload")],
    uploaded_by: Annotated[
        str | None, typer.Option("--uploaded-by", help="Uploader recorded on the log")
    ] = None,
) -> None:
    """Fingerprint, classify, and store a log file in the configured database."""
    if not target.is_file():
        typer.echo(f"Target not found: {target}", err=True)
        raise typer.Exit(1)
    raise typer.Exit(asyncio.run(_async_ingest(target, uploaded_by)))


async def _async_ingest(target: Path, uploaded_by: str | None) -> int:
    from logtriage.core.config import get_settings
    from logtriage.core.exceptions import DuplicateFileError, UploadError
    from logtriage.processing.service import LogProcessingService
    from logtriage.storage.database import close_db, init_db

    settings = get_settings()
    db = await init_db(settings.db_path, auto_migrate=settings.auto_migrate)
    try:
        service = LogProcessingService(db, settings=settings)
        try:
            log = await service.submit(target.name, target.read_bytes(), uploaded_by=uploaded_by)
        except DuplicateFileError as exc:
            typer.echo(f"Already ingested as {exc.existing_id}; skipped.")
            return 0
        except UploadError as exc:
            typer.echo(f"Rejected: {exc}", err=True)
            return 2

        outcome = await service.wait_for(log.id)
        if outcome is None or outcome.result is None:
            error = outcome.error if outcome else "unknown"
            typer.echo(f"Log {log.id} failed: {error}", err=True)
            return 1

        counts = outcome.result.severity_counts
        typer.echo(
            f"Log {log.id} {outcome.status}: {outcome.result.total} findings "
            f"(critical {counts['critical']}, medium {counts['medium']}, low {counts['low']})"
        )
        return 0
    finally:
        await close_db()


@app.command()
def rules() -> None:
    """List the rule catalogue in evaluation order."""
    from logtriage.classifier.catalogue import all_rules
    from logtriage.cli.formatters.console import format_rules

    format_rules(all_rules())


@app.command()
def suggest(
    category: Annotated[str, typer.Argument(help="Finding category, e.g. 500")],
) -> None:
    """Print remediation suggestions for a finding category."""
    from logtriage.classifier.catalogue import suggestions_for

    for line in suggestions_for(category):
        typer.echo(f"- {line}")


def _write_output(text: str, output: Path | None) -> None:
    if output:
        output.write_text(text)
        typer.echo(f"Output written to {output}")
    else:
        sys.stdout.write(text + "\n")


@app.command()
def serve(
    host: Annotated[str | None, typer.Option("--host", help="Bind address")] = None,
    port: Annotated[int | None, typer.Option("--port", "-p", help="Bind port")] = None,
    workers: Annotated[int | None, typer.Option("--workers", "-w", help="Worker count")] = None,
) -> None:
    """Start the logtriage API server (defaults come from LOGTRIAGE_API_*)."""
    import uvicorn

    from logtriage.core.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "logtriage.api.app:create_app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        workers=workers or settings.api_workers,
        factory=True,
    )
