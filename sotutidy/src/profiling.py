"""Document counts over a canonical speech table."""

from __future__ import annotations

import pandas as pd

try:  # pragma: no cover
    from .schemas.dictionary import CorpusProfile
    from .schemas.documents import CATEGORICAL_COLUMNS, DATE_COLUMN, is_missing
except ImportError:  # pragma: no cover
    from schemas.dictionary import CorpusProfile  # type: ignore
    from schemas.documents import CATEGORICAL_COLUMNS, DATE_COLUMN, is_missing  # type: ignore


def count_by(table: pd.DataFrame, column: str) -> dict[str, int]:
    """Number of documents per distinct value of ``column``, keyed in sorted order."""
    values = [str(value) for value in table[column] if not is_missing(value)]
    counts = pd.Series(values, dtype="object").value_counts()
    return {value: int(counts[value]) for value in sorted(counts.index)}


def profile_table(table: pd.DataFrame) -> CorpusProfile:
    dates = table[DATE_COLUMN].dropna() if DATE_COLUMN in table.columns else pd.Series(dtype="datetime64[ns]")
    return CorpusProfile(
        rows=len(table),
        first_date=dates.min().date() if len(dates) else None,
        last_date=dates.max().date() if len(dates) else None,
        counts={column: count_by(table, column) for column in CATEGORICAL_COLUMNS if column in table.columns},
    )
