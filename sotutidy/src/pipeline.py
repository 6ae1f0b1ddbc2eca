"""End-to-end runs: corpus export in, canonical CSV and data dictionary out."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Optional

from loguru import logger

try:  # pragma: no cover - package/script compatibility
    from .adapters import CorpusAdapter, load_raw_table, resolve_adapter
    from .dictionary import annotate_schema, read_dictionary_descriptions, write_dictionary
    from .io_utils import write_csv
    from .normalize import dropped_columns, normalize
    from .schemas.dictionary import DictionaryEntry, PipelineReport
    from .schemas.documents import SOURCE_COLUMNS
except ImportError:  # pragma: no cover
    from adapters import CorpusAdapter, load_raw_table, resolve_adapter  # type: ignore
    from dictionary import annotate_schema, read_dictionary_descriptions, write_dictionary  # type: ignore
    from io_utils import write_csv  # type: ignore
    from normalize import dropped_columns, normalize  # type: ignore
    from schemas.dictionary import DictionaryEntry, PipelineReport  # type: ignore
    from schemas.documents import SOURCE_COLUMNS  # type: ignore


def _domains(schema: list[DictionaryEntry]) -> dict[str, list[str]]:
    return {entry.column_name: list(entry.allowed_values) for entry in schema if entry.type == "categorical"}


def _staging_path(path: Path) -> Path:
    return path.with_name(f".{path.name}.tmp")


def _write_staged(writes: list[tuple[Path, Callable[[Path], None]]]) -> None:
    """Write every artifact to a temporary sibling, then move them all into place.

    No target is replaced unless every write succeeded.
    """
    staged = [(target, _staging_path(target)) for target, _ in writes]
    try:
        for (_, writer), (_, temporary) in zip(writes, staged):
            writer(temporary)
        for target, temporary in staged:
            temporary.replace(target)
    finally:
        for _, temporary in staged:
            temporary.unlink(missing_ok=True)


def run_pipeline(
    input_path: Optional[Path],
    output_path: Path,
    dictionary_path: Path,
    *,
    adapter: CorpusAdapter | None = None,
    column_map: Mapping[str, str] = SOURCE_COLUMNS,
) -> PipelineReport:
    """Normalise the corpus at ``input_path`` and write both artifacts.

    Nothing is written when normalization fails. Descriptions already present
    in ``dictionary_path`` are carried over to the regenerated dictionary.
    """
    if adapter is None:
        if input_path is None:
            raise ValueError("Either input_path or adapter is required")
        adapter = resolve_adapter(input_path)

    raw_table = load_raw_table(adapter)
    dropped = dropped_columns(raw_table, column_map)
    canonical, schema = normalize(raw_table, column_map)
    schema = annotate_schema(schema, read_dictionary_descriptions(dictionary_path))

    # Dictionary is moved into place first, so a failed move leaves the previous table untouched.
    _write_staged(
        [
            (dictionary_path, lambda path: write_dictionary(path, schema)),
            (output_path, lambda path: write_csv(path, canonical)),
        ]
    )
    logger.info("pipeline:written | output={} | dictionary={}", output_path, dictionary_path)

    return PipelineReport(
        rows=len(canonical),
        dropped_columns=dropped,
        domains=_domains(schema),
        output_path=output_path,
        dictionary_path=dictionary_path,
    )


def build_dictionary(
    input_path: Path,
    dictionary_path: Path,
    *,
    column_map: Mapping[str, str] = SOURCE_COLUMNS,
) -> list[DictionaryEntry]:
    """Regenerate only the dictionary for the corpus at ``input_path``."""
    _, schema = normalize(load_raw_table(resolve_adapter(input_path)), column_map)
    schema = annotate_schema(schema, read_dictionary_descriptions(dictionary_path))
    _write_staged([(dictionary_path, lambda path: write_dictionary(path, schema))])
    logger.info("dictionary:written | path={} | columns={}", dictionary_path, len(schema))
    return schema
