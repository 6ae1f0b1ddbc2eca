"""Utilities for reading and writing CSV and JSONL pipeline artifacts."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import orjson
import pandas as pd

CSV_DATE_FORMAT = "%Y-%m-%d"


def _coerce_path(path: str | Path) -> Path:
    """Convert input to a resolved Path."""
    if isinstance(path, Path):
        return path
    return Path(path)


def write_jsonl(path: str | Path, rows: Iterable[Mapping[str, Any]]) -> None:
    """Write an iterable of mappings to JSON Lines format."""
    resolved_path = _coerce_path(path)
    resolved_path.parent.mkdir(parents=True, exist_ok=True)

    with resolved_path.open("wb") as handle:
        for row in rows:
            handle.write(orjson.dumps(dict(row)))
            handle.write(b"\n")


def read_jsonl(path: str | Path) -> list[dict[str, Any]]:
    """Read a JSON Lines file into a list of dictionaries."""
    resolved_path = _coerce_path(path)
    with resolved_path.open("rb") as handle:
        return [orjson.loads(line) for line in handle if line.strip()]


def write_csv(path: str | Path, frame: pd.DataFrame) -> None:
    """Write ``frame`` as UTF-8 CSV with LF line endings and no index.

    Output bytes depend only on the frame contents, so rewriting an unchanged
    frame reproduces the file exactly.
    """
    resolved_path = _coerce_path(path)
    resolved_path.parent.mkdir(parents=True, exist_ok=True)

    with resolved_path.open("w", encoding="utf-8", newline="") as handle:
        frame.to_csv(handle, index=False, lineterminator="\n", date_format=CSV_DATE_FORMAT)


def read_csv(path: str | Path) -> pd.DataFrame:
    """Read a CSV file with every column kept as text; empty cells become NaN."""
    resolved_path = _coerce_path(path)
    with resolved_path.open("r", encoding="utf-8-sig", newline="") as handle:
        return pd.read_csv(handle, dtype=str, keep_default_na=False, na_values=[""])
