"""Schemas for data dictionary rows and pipeline reports."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ColumnType = Literal["text", "categorical", "date"]

DICTIONARY_HEADER: tuple[str, ...] = ("column_name", "type", "description", "allowed_values")
ALLOWED_VALUES_SEPARATOR = ","


class DictionaryEntry(BaseModel):
    """One row of the data dictionary."""

    model_config = ConfigDict(frozen=True)

    column_name: str = Field(..., description="Canonical column name.")
    type: ColumnType = Field(..., description="Primitive type inferred for the column.")
    description: str = Field(default="", description="Human-authored description; empty in a scaffold.")
    allowed_values: tuple[str, ...] = Field(
        default=(),
        description="Sorted observed domain; only populated for categorical columns.",
    )

    def to_row(self) -> dict[str, str]:
        return {
            "column_name": self.column_name,
            "type": self.type,
            "description": self.description,
            "allowed_values": ALLOWED_VALUES_SEPARATOR.join(self.allowed_values),
        }


class CorpusProfile(BaseModel):
    """Document counts over a canonical table."""

    rows: int
    first_date: Optional[date] = None
    last_date: Optional[date] = None
    counts: dict[str, dict[str, int]] = Field(default_factory=dict)


class PipelineReport(BaseModel):
    """Summary of a completed normalization run."""

    rows: int
    dropped_columns: list[str] = Field(default_factory=list)
    domains: dict[str, list[str]] = Field(default_factory=dict)
    output_path: Optional[Path] = None
    dictionary_path: Optional[Path] = None
