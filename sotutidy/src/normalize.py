"""Normalise a raw corpus extract into the canonical speech table."""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date, datetime

import numpy as np
import pandas as pd
from loguru import logger

try:  # pragma: no cover - package/script compatibility
    from .dictionary import derive_schema
    from .errors import MalformedDateError, SchemaMismatchError, ValidationError, Violation
    from .schemas.dictionary import DictionaryEntry
    from .schemas.documents import (
        CANONICAL_COLUMNS,
        DATE_COLUMN,
        REQUIRED_COLUMNS,
        SOURCE_COLUMNS,
        SURNAME_COLUMN,
        is_missing,
    )
except ImportError:  # pragma: no cover
    from dictionary import derive_schema  # type: ignore
    from errors import MalformedDateError, SchemaMismatchError, ValidationError, Violation  # type: ignore
    from schemas.dictionary import DictionaryEntry  # type: ignore
    from schemas.documents import (  # type: ignore
        CANONICAL_COLUMNS,
        DATE_COLUMN,
        REQUIRED_COLUMNS,
        SOURCE_COLUMNS,
        SURNAME_COLUMN,
        is_missing,
    )

# Full calendar date, optionally followed by a time and UTC offset.
ISO_DATE = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?$"
)

# Second resolution covers years 1-9999; nanoseconds stop at 1677.
DATE_DTYPE = "datetime64[s]"


def _check_column_map(column_map: Mapping[str, str]) -> None:
    targets = sorted(column_map.values())
    if targets != sorted(CANONICAL_COLUMNS):
        raise ValueError(f"column_map must target exactly {list(CANONICAL_COLUMNS)}, got {targets}")


def dropped_columns(raw_table: pd.DataFrame, column_map: Mapping[str, str] = SOURCE_COLUMNS) -> list[str]:
    """Source columns that normalization discards, in source order."""
    return [str(column) for column in raw_table.columns if column not in column_map]


def _rename(raw_table: pd.DataFrame, column_map: Mapping[str, str]) -> pd.DataFrame:
    missing = [source for source in column_map if source not in raw_table.columns]
    if missing:
        raise SchemaMismatchError(missing)

    dropped = dropped_columns(raw_table, column_map)
    if dropped:
        logger.info("normalize:drop_columns | columns={}", dropped)
    return raw_table.drop(columns=dropped).rename(columns=dict(column_map))


def _reorder(table: pd.DataFrame) -> pd.DataFrame:
    return table.loc[:, list(CANONICAL_COLUMNS)]


def _parse_date(row: int, value: object) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    match = ISO_DATE.match(str(value).strip())
    if match is None:
        raise MalformedDateError(row, value)
    try:
        # Any time or offset part is ignored; the calendar date is kept as written.
        return date.fromisoformat(match.group("date"))
    except ValueError as exc:
        raise MalformedDateError(row, value) from exc


def _parse_dates(table: pd.DataFrame) -> pd.DataFrame:
    parsed = [
        np.datetime64("NaT", "s") if is_missing(value) else np.datetime64(_parse_date(int(row), value), "s")
        for row, value in zip(table.index, table[DATE_COLUMN])
    ]
    table = table.copy()
    table[DATE_COLUMN] = pd.Series(parsed, index=table.index, dtype=DATE_DTYPE)
    return table


def _sort(table: pd.DataFrame) -> pd.DataFrame:
    # Multi-key sort_values uses a stable lexsort, so equal keys keep input order.
    return table.sort_values([DATE_COLUMN, SURNAME_COLUMN], kind="mergesort", na_position="last")


def find_violations(table: pd.DataFrame) -> list[Violation]:
    """Every empty required field, ordered by input row then field."""
    ordered = table.sort_index()
    return [
        Violation(row=int(row), field=field)
        for row, values in zip(ordered.index, ordered[list(REQUIRED_COLUMNS)].itertuples(index=False))
        for field, value in zip(REQUIRED_COLUMNS, values)
        if is_missing(value)
    ]


def normalize(
    raw_table: pd.DataFrame,
    column_map: Mapping[str, str] = SOURCE_COLUMNS,
) -> tuple[pd.DataFrame, list[DictionaryEntry]]:
    """Rename, reorder, date-parse, sort and validate ``raw_table``.

    Rows are never added or removed. Errors refer to 0-based positions in
    ``raw_table``.

    Raises:
        SchemaMismatchError: an expected source column is absent.
        MalformedDateError: a non-empty date is not a full ISO 8601 calendar date.
        ValidationError: required fields are empty; lists every violation.
    """
    _check_column_map(column_map)
    table = raw_table.reset_index(drop=True)
    logger.debug("normalize:start | rows={} | columns={}", len(table), list(table.columns))

    table = _rename(table, column_map)
    table = _reorder(table)
    table = _parse_dates(table)
    table = _sort(table)

    violations = find_violations(table)
    if violations:
        logger.error("normalize:invalid | violations={}", len(violations))
        raise ValidationError(violations)

    canonical = table.reset_index(drop=True)
    schema = derive_schema(canonical)
    logger.info("normalize:done | rows={}", len(canonical))
    return canonical, schema
