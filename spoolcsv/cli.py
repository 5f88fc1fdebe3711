"""Typer based command line entry points for spoolcsv."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from spoolcsv.config import AppSettings, ensure_directories, load_settings
from spoolcsv.core.errors import ConfigError, FileAccessError
from spoolcsv.core.logger import get_logger, new_session_id
from spoolcsv.core.pipeline import SpoolBatch
from spoolcsv.services.reporting import BatchSummary, ResultLog, describe_result, prune_old_logs
from spoolcsv.services.scanner import scan_input_files
from spoolcsv.services.spool_processor import ProcessingResult, detect_file
from spoolcsv.services.spool_processor.models import FixedWidth, PositionBased

app = typer.Typer(help="Convert Oracle spool dumps into normalized CSV files.")


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    level_value = getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")
    ctx.obj = {"log_level": level_value}


def _load(config: Optional[Path], **overrides: object) -> AppSettings:
    try:
        return load_settings(config, **overrides)
    except ConfigError as exc:
        typer.secho(f"Configuration error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from exc


def _configure_logger(ctx: typer.Context, settings: AppSettings, log_dir: Path | None, session_id: str) -> logging.Logger:
    detailed = settings.logs.enable_detailed_logging
    logger = get_logger(log_dir, session_id, detailed=detailed)
    level = (ctx.obj or {}).get("log_level", logging.INFO)
    if detailed:
        level = min(level, logging.DEBUG)
    logger.setLevel(level)
    return logger


def _progress(index: int, total: int, name: str) -> None:
    typer.secho(f"[{index}/{total}] {name}", fg=typer.colors.BLUE)


def _echo_result(result: ProcessingResult) -> None:
    colour = typer.colors.GREEN if result.success else typer.colors.RED
    for line in describe_result(result):
        typer.secho(line, fg=colour)


@app.command("run")
def run(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings YAML/JSON file."),
    input_dir: Optional[Path] = typer.Option(None, "--input-dir", help="Override the configured input directory."),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", help="Override the configured output directory."),
) -> None:
    """Convert every supported file in the input directory."""

    settings = _load(
        config,
        input_directory=str(input_dir) if input_dir else None,
        output_directory=str(output_dir) if output_dir else None,
    )
    try:
        dirs = ensure_directories(settings)
    except FileAccessError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from exc
    session_id = new_session_id()
    logger = _configure_logger(ctx, settings, dirs["console"], session_id)
    prune_old_logs(dirs["logs"], settings.logs.max_log_retention_days)

    files = scan_input_files(dirs["input"], settings.supported_file_extensions)

    if not files:
        typer.secho(
            "No files found to process. Add files with supported extensions "
            f"({', '.join(settings.supported_file_extensions)}) to {settings.input_path}.",
            fg=typer.colors.YELLOW,
        )
        return

    summary = BatchSummary()
    result_log = ResultLog(dirs["success"], dirs["errors"], session_id)
    batch = SpoolBatch(
        settings,
        reporters=[result_log, summary, _echo_result],
        progress_cb=_progress,
        logger=logger,
    )
    batch.run(files)

    typer.secho("Processing complete!", fg=typer.colors.CYAN)
    for line in summary.render():
        typer.echo(line)
    typer.echo("OUTPUT LOCATIONS:")
    typer.echo(f"  CSV files: {dirs['output'].resolve()}")
    typer.echo(f"  Process logs: {dirs['logs'].resolve()}")
    typer.echo(f"  Console logs: {dirs['console'].resolve()}")

    if summary.failed:
        raise typer.Exit(code=1)


@app.command("detect")
def detect(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, resolve_path=True, help="Spool file to inspect."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings YAML/JSON file."),
) -> None:
    """Show which parsing strategy a file would use, without writing output."""

    settings = _load(config)
    _configure_logger(ctx, settings, None, new_session_id())
    try:
        window, parsed = detect_file(file, settings)
    except FileAccessError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"File: {file.name}")
    typer.echo(f"Lines read: {window.total_lines}")
    typer.echo(f"Content lines: {len(window)}")
    if window.footer_index is not None:
        typer.echo(f"Footer marker line: {window.footer_index + 1}")
    typer.echo(f"Strategy: {parsed.label} ({parsed.strategy})")
    if isinstance(parsed.layout, FixedWidth):
        typer.echo(f"Column starts: {list(parsed.layout.starts)} widths: {list(parsed.layout.widths)}")
    elif isinstance(parsed.layout, PositionBased):
        typer.echo(f"Column starts: {list(parsed.layout.starts)}")
    typer.echo(f"Rows: {len(parsed.rows)}")


if __name__ == "__main__":  # pragma: no cover
    app()
