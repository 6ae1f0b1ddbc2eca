"""Typer CLI entry points for the sotu-tidy pipeline."""

from __future__ import annotations

import sys
from pathlib import Path

import click
import typer
from loguru import logger

SRC_DIR = Path(__file__).resolve().parent
if str(SRC_DIR) not in sys.path:  # pragma: no cover - runtime convenience
    sys.path.insert(0, str(SRC_DIR))

try:  # pragma: no cover
    from .adapters import load_raw_table, resolve_adapter
    from .errors import NormalizationError
    from .normalize import normalize
    from .pipeline import build_dictionary, run_pipeline
    from .profiling import profile_table
    from .synth_data import generate_corpus
except ImportError:  # pragma: no cover
    from adapters import load_raw_table, resolve_adapter  # type: ignore
    from errors import NormalizationError  # type: ignore
    from normalize import normalize  # type: ignore
    from pipeline import build_dictionary, run_pipeline  # type: ignore
    from profiling import profile_table  # type: ignore
    from synth_data import generate_corpus  # type: ignore

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"
RAW_DIR = DATA_DIR / "raw"
PROCESSED_DIR = DATA_DIR / "processed"

DEFAULT_INPUT = RAW_DIR / "sotu.csv"
DEFAULT_OUTPUT = PROCESSED_DIR / "sotu.csv"
DEFAULT_DICTIONARY = PROCESSED_DIR / "sotu_dictionary.csv"

DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVEL_CHOICES = [
    "TRACE",
    "DEBUG",
    "INFO",
    "SUCCESS",
    "WARNING",
    "ERROR",
    "CRITICAL",
]

app = typer.Typer(help="sotu-tidy pipeline CLI.")


def _configure_logger(level: str = DEFAULT_LOG_LEVEL) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        enqueue=False,
        colorize=True,
        format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level:<8}</level> | {message}",
    )


def _fail(exc: NormalizationError) -> typer.Exit:
    logger.error("{}:{}", exc.__class__.__name__, exc)
    typer.echo(f"Error: {exc}", err=True)
    return typer.Exit(code=1)


@app.callback()
def main(
    log_level: str = typer.Option(
        DEFAULT_LOG_LEVEL,
        "--log-level",
        envvar="SOTU_TIDY_LOG_LEVEL",
        click_type=click.Choice(LOG_LEVEL_CHOICES, case_sensitive=False),
        help="Set log verbosity (default: INFO).",
    ),
) -> None:
    """sotu-tidy pipeline CLI."""
    _configure_logger(log_level)


@app.command("normalize")
def normalize_cli(
    input_path: Path = typer.Option(
        DEFAULT_INPUT,
        "--input",
        "-i",
        envvar="SOTU_TIDY_INPUT",
        exists=True,
        readable=True,
        dir_okay=False,
        resolve_path=True,
        help="Corpus export (CSV or JSONL).",
    ),
    output_path: Path = typer.Option(
        DEFAULT_OUTPUT,
        "--output",
        "-o",
        envvar="SOTU_TIDY_OUTPUT",
        dir_okay=False,
        resolve_path=True,
        help="Destination canonical CSV.",
    ),
    dictionary_path: Path = typer.Option(
        DEFAULT_DICTIONARY,
        "--dictionary",
        "-d",
        envvar="SOTU_TIDY_DICTIONARY",
        dir_okay=False,
        resolve_path=True,
        help="Destination data dictionary CSV; existing descriptions are kept.",
    ),
) -> None:
    """Normalise the corpus and write the canonical table and its dictionary."""
    try:
        report = run_pipeline(input_path, output_path, dictionary_path)
    except NormalizationError as exc:
        raise _fail(exc) from exc
    if report.dropped_columns:
        typer.echo(f"Dropped source columns: {', '.join(report.dropped_columns)}")
    typer.echo(f"Wrote {report.rows} documents to {output_path}")
    typer.echo(f"Wrote data dictionary to {dictionary_path}")


@app.command("dictionary")
def dictionary_cli(
    input_path: Path = typer.Option(
        DEFAULT_INPUT,
        "--input",
        "-i",
        envvar="SOTU_TIDY_INPUT",
        exists=True,
        readable=True,
        dir_okay=False,
        resolve_path=True,
        help="Corpus export (CSV or JSONL).",
    ),
    dictionary_path: Path = typer.Option(
        DEFAULT_DICTIONARY,
        "--output",
        "-o",
        envvar="SOTU_TIDY_DICTIONARY",
        dir_okay=False,
        resolve_path=True,
        help="Destination data dictionary CSV; existing descriptions are kept.",
    ),
) -> None:
    """Regenerate the data dictionary without rewriting the canonical table."""
    try:
        schema = build_dictionary(input_path, dictionary_path)
    except NormalizationError as exc:
        raise _fail(exc) from exc
    typer.echo(f"Wrote {len(schema)} dictionary rows to {dictionary_path}")


@app.command("profile")
def profile_cli(
    input_path: Path = typer.Option(
        DEFAULT_INPUT,
        "--input",
        "-i",
        envvar="SOTU_TIDY_INPUT",
        exists=True,
        readable=True,
        dir_okay=False,
        resolve_path=True,
        help="Corpus export (CSV or JSONL).",
    ),
) -> None:
    """Print document counts per categorical value."""
    try:
        canonical, _ = normalize(load_raw_table(resolve_adapter(input_path)))
    except NormalizationError as exc:
        raise _fail(exc) from exc

    profile = profile_table(canonical)
    typer.echo(f"documents: {profile.rows}")
    typer.echo(f"dates: {profile.first_date} .. {profile.last_date}")
    for column, counts in profile.counts.items():
        typer.echo(f"{column}:")
        for value, count in counts.items():
            typer.echo(f"  {value}: {count}")


@app.command("sample")
def sample_cli(
    output_path: Path = typer.Option(
        DEFAULT_INPUT,
        "--output",
        "-o",
        dir_okay=False,
        resolve_path=True,
        help="Destination export file; .csv, .jsonl or .json.",
    ),
    count: int = typer.Option(20, "--count", "-n", min=0, help="Number of speeches to generate."),
    seed: int = typer.Option(13, "--seed", help="Seed for deterministic generation."),
) -> None:
    """Generate a synthetic corpus export in the upstream format."""
    try:
        generate_corpus(output_path=output_path, count=count, seed=seed)
    except NormalizationError as exc:
        raise _fail(exc) from exc
    typer.echo(f"Wrote {count} speeches to {output_path}")


def run() -> None:
    """Entrypoint when invoking via `python -m` or the console script."""
    app()


if __name__ == "__main__":
    run()
