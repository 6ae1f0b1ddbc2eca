"""Derive and annotate the data dictionary for a canonical speech table."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

import pandas as pd

try:  # pragma: no cover - package/script compatibility
    from .errors import CorpusFormatError
    from .io_utils import read_csv, write_csv
    from .schemas.dictionary import DICTIONARY_HEADER, ColumnType, DictionaryEntry
    from .schemas.documents import CATEGORICAL_COLUMNS, DATE_COLUMN, is_missing
except ImportError:  # pragma: no cover
    from errors import CorpusFormatError  # type: ignore
    from io_utils import read_csv, write_csv  # type: ignore
    from schemas.dictionary import DICTIONARY_HEADER, ColumnType, DictionaryEntry  # type: ignore
    from schemas.documents import CATEGORICAL_COLUMNS, DATE_COLUMN, is_missing  # type: ignore


def _column_type(table: pd.DataFrame, column: str) -> ColumnType:
    if column in CATEGORICAL_COLUMNS:
        return "categorical"
    if column == DATE_COLUMN or pd.api.types.is_datetime64_any_dtype(table[column]):
        return "date"
    return "text"


def observed_domain(values: Iterable[object]) -> tuple[str, ...]:
    """Sorted distinct non-missing values, as strings."""
    return tuple(sorted({str(value) for value in values if not is_missing(value)}))


def derive_schema(canonical_table: pd.DataFrame) -> list[DictionaryEntry]:
    """Describe every column of ``canonical_table``.

    Categorical columns carry their observed domain. The result depends only
    on each column's value set, never on row order, and descriptions are left
    empty for a human to fill in.
    """
    schema: list[DictionaryEntry] = []
    for column in canonical_table.columns:
        column_type = _column_type(canonical_table, column)
        allowed = observed_domain(canonical_table[column]) if column_type == "categorical" else ()
        schema.append(DictionaryEntry(column_name=column, type=column_type, allowed_values=allowed))
    return schema


def annotate_schema(
    schema: Iterable[DictionaryEntry],
    descriptions: Mapping[str, str],
) -> list[DictionaryEntry]:
    """Copy descriptions onto ``schema`` by column name.

    Names, types and domains always come from ``schema``; columns without a
    non-blank description in ``descriptions`` keep their own.
    """
    annotated = []
    for entry in schema:
        description = descriptions.get(entry.column_name)
        if description is not None and not is_missing(description):
            entry = entry.model_copy(update={"description": description})
        annotated.append(entry)
    return annotated


def read_dictionary_descriptions(path: Path) -> dict[str, str]:
    """Return the descriptions from a previously written dictionary, if any."""
    if not path.exists():
        return {}
    try:
        frame = read_csv(path)
    except pd.errors.EmptyDataError:
        return {}
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise CorpusFormatError(f"Cannot read data dictionary {path}: {exc}") from exc
    if "column_name" not in frame.columns or "description" not in frame.columns:
        return {}
    return {
        str(name): str(description)
        for name, description in zip(frame["column_name"], frame["description"])
        if not is_missing(name) and not is_missing(description)
    }


def write_dictionary(path: Path, schema: Iterable[DictionaryEntry]) -> None:
    """Write ``schema`` as the dictionary CSV."""
    frame = pd.DataFrame([entry.to_row() for entry in schema], columns=list(DICTIONARY_HEADER))
    write_csv(path, frame)
