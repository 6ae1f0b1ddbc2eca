"""Schemas for source and canonical speech records."""

from __future__ import annotations

from datetime import date
from typing import Any

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field


class SourceSpeech(BaseModel):
    """One speech as exported by the upstream corpus provider.

    Field names are the canonical column names, in canonical order; aliases
    are the provider's own export column names.
    """

    model_config = ConfigDict(populate_by_name=True)

    speaker_surname: str = Field(..., alias="President", description="Surname of the president.")
    speaker_given_name: str = Field(..., alias="FirstName", description="Given name(s) of the president.")
    affiliation: str = Field(..., alias="party", description="Party affiliation at the time of the address.")
    occurred_on: date = Field(..., alias="Date", description="Date the address was delivered or sent.")
    category: str = Field(..., alias="type", description="'SOTU' for titled addresses, 'other' otherwise.")
    delivery_mode: str = Field(..., alias="delivery", description="Whether the address was spoken or written.")
    body: str = Field(..., alias="text", description="Full text of the address.")


SOURCE_COLUMNS: dict[str, str] = {
    field.alias: name for name, field in SourceSpeech.model_fields.items() if field.alias
}
CANONICAL_COLUMNS: tuple[str, ...] = tuple(SourceSpeech.model_fields)

DATE_COLUMN = "occurred_on"
SURNAME_COLUMN = "speaker_surname"
TEXT_COLUMN = "body"
CATEGORICAL_COLUMNS: tuple[str, ...] = ("affiliation", "category", "delivery_mode")
REQUIRED_COLUMNS: tuple[str, ...] = (SURNAME_COLUMN, DATE_COLUMN, TEXT_COLUMN)


def is_missing(value: Any) -> bool:
    """Return True for None, NaN/NaT and blank or whitespace-only strings."""
    if isinstance(value, str):
        return not value.strip()
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False
