"""Corpus adapters for the sotu-tidy pipeline."""

from .corpus import (
    CorpusAdapter,
    CsvCorpusAdapter,
    JsonlCorpusAdapter,
    RecordsCorpusAdapter,
    corpus_format,
    load_raw_table,
    resolve_adapter,
)

__all__ = [
    "CorpusAdapter",
    "CsvCorpusAdapter",
    "JsonlCorpusAdapter",
    "RecordsCorpusAdapter",
    "corpus_format",
    "load_raw_table",
    "resolve_adapter",
]
