"""CLI entrypoint for Mockoon environment generation."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

if __package__ in {None, ""}:
    sys.path.append(str(Path(__file__).resolve().parents[1]))
    __package__ = "mockoon_config_builder"

from .errors import ConfigBuildError
from .example import write_example_tree
from .logging_utils import LogFormat, configure_logging
from .pipeline import ConfigPipeline

app = typer.Typer(help="Aggregate typed mock API definitions into a single Mockoon environment file.")

DEFAULT_BASE_DIR = Path("mockoon-config")
BASE_DIR_ENV_VAR = "MOCKOON_CONFIG_BASE_DIR"
LOG_FORMAT_ENV_VAR = "CONSOLE_OUTPUT_FORMAT"


@app.command()
def generate(
    base_dir: Path = typer.Option(
        DEFAULT_BASE_DIR,
        "--base-dir",
        "-b",
        envvar=BASE_DIR_ENV_VAR,
        help="Base directory holding src/, dist/ and the intermediate .tmp/ tree.",
    ),
    source: Optional[Path] = typer.Option(
        None,
        "--source",
        "-s",
        help="Definition source directory (default: <base-dir>/src).",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Destination JSON file (default: <base-dir>/dist/config.json).",
    ),
    log_level: str = typer.Option("INFO", help="Logging level."),
    log_format: LogFormat = typer.Option(
        LogFormat.AUTO,
        envvar=LOG_FORMAT_ENV_VAR,
        case_sensitive=False,
        help="Log format; auto and rich both select the coloured console renderer.",
    ),
) -> None:
    """Compile the definition tree and write the Mockoon environment JSON."""

    logger = configure_logging(log_level, log_format)
    pipeline = ConfigPipeline.from_base_dir(base_dir, source_dir=source, output_path=output)

    try:
        result = pipeline.run()
    except ConfigBuildError as exc:
        logger.error("generation_failed", error_type=type(exc).__name__, error=str(exc))
        raise typer.Exit(code=1) from exc

    if result.example_created:
        typer.secho(f"Example definitions created -> {pipeline.source_dir}", fg=typer.colors.CYAN)
    typer.secho(f"Mockoon config created -> {result.output_path}", fg=typer.colors.GREEN)


@app.command()
def init(
    base_dir: Path = typer.Option(
        DEFAULT_BASE_DIR,
        "--base-dir",
        "-b",
        envvar=BASE_DIR_ENV_VAR,
        help="Base directory; the example is written to <base-dir>/src.",
    ),
    source: Optional[Path] = typer.Option(
        None,
        "--source",
        "-s",
        help="Directory to write the example definitions to.",
    ),
) -> None:
    """Write the example definition tree without generating."""

    source_dir = source or base_dir / "src"
    if source_dir.exists():
        typer.secho(f"{source_dir} already exists, refusing to overwrite", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    try:
        written = write_example_tree(source_dir)
    except ConfigBuildError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    for path in written:
        typer.echo(f"  {path}")
    typer.secho(f"Example definitions created -> {source_dir}", fg=typer.colors.GREEN)


def run() -> None:
    """Console_scripts hook."""

    app()


if __name__ == "__main__":  # pragma: no cover
    run()
