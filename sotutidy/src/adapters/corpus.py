"""Adapters turning an opaque corpus export into an ordered table of flat records."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Protocol

import orjson
import pandas as pd
from loguru import logger

try:  # pragma: no cover - package/script compatibility
    from ..errors import CorpusFormatError
    from ..io_utils import read_csv, read_jsonl
except ImportError:  # pragma: no cover
    from errors import CorpusFormatError  # type: ignore
    from io_utils import read_csv, read_jsonl  # type: ignore

JSONL_SUFFIXES = {".jsonl", ".json", ".ndjson"}


class CorpusAdapter(Protocol):
    """Protocol defining the minimum interface for corpus providers."""

    name: str

    def to_records(self) -> list[dict[str, Any]]:  # pragma: no cover - structural typing
        """Return every document as a flat mapping, in corpus order."""


@dataclass
class CsvCorpusAdapter:
    """Reads a CSV export; all columns stay text until normalization."""

    path: Path
    name: str = "csv"

    def to_records(self) -> list[dict[str, Any]]:
        try:
            frame = read_csv(self.path)
        except pd.errors.EmptyDataError:
            return []
        except (pd.errors.ParserError, UnicodeDecodeError) as exc:
            raise CorpusFormatError(f"Cannot read CSV corpus {self.path}: {exc}") from exc
        return frame.to_dict(orient="records")


@dataclass
class JsonlCorpusAdapter:
    """Reads a JSON Lines export with one document object per line."""

    path: Path
    name: str = "jsonl"

    def to_records(self) -> list[dict[str, Any]]:
        try:
            rows = read_jsonl(self.path)
        except orjson.JSONDecodeError as exc:
            raise CorpusFormatError(f"Cannot read JSONL corpus {self.path}: {exc}") from exc
        for index, row in enumerate(rows):
            if not isinstance(row, dict):
                raise CorpusFormatError(f"Line {index + 1} of {self.path} is not a JSON object")
        return rows


@dataclass
class RecordsCorpusAdapter:
    """Wraps documents that are already in memory."""

    records: Sequence[Mapping[str, Any]] = field(default_factory=list)
    name: str = "records"

    def to_records(self) -> list[dict[str, Any]]:
        return [dict(record) for record in self.records]


def corpus_format(path: Path) -> Literal["csv", "jsonl"]:
    """Name the export format implied by the suffix of ``path``."""
    suffix = Path(path).suffix.lower()
    if suffix == ".csv":
        return "csv"
    if suffix in JSONL_SUFFIXES:
        return "jsonl"
    raise CorpusFormatError(f"Unsupported corpus format '{suffix or path}'; expected .csv, .jsonl or .json")


def resolve_adapter(path: Path) -> CorpusAdapter:
    """Pick an adapter for ``path`` based on its suffix."""
    if corpus_format(path) == "csv":
        return CsvCorpusAdapter(Path(path))
    return JsonlCorpusAdapter(Path(path))


def load_raw_table(adapter: CorpusAdapter) -> pd.DataFrame:
    """Materialise the adapter's records as a raw table, preserving corpus order."""
    records = adapter.to_records()
    adapter_name = getattr(adapter, "name", adapter.__class__.__name__)
    if not records:
        logger.warning("corpus:empty | adapter={}", adapter_name)
    logger.info("corpus:loaded | adapter={} | rows={}", adapter_name, len(records))
    return pd.DataFrame.from_records(records)
