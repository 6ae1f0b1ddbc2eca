"""Tests for the normalization step."""

import pandas as pd
import pytest

from errors import MalformedDateError, SchemaMismatchError, ValidationError, Violation
from normalize import dropped_columns, normalize
from schemas.documents import CANONICAL_COLUMNS


def _row(surname: str, date: str, **overrides) -> dict:
    row = {
        "President": surname,
        "FirstName": "George",
        "party": "Nonpartisan",
        "Date": date,
        "type": "SOTU",
        "delivery": "spoken",
        "text": f"Address by {surname}.",
    }
    row.update(overrides)
    return row


def _raw(*rows: dict) -> pd.DataFrame:
    return pd.DataFrame(list(rows))


def test_normalize_renames_and_orders_columns() -> None:
    raw = _raw(_row("Washington", "1790-01-08", doc_id="d1"))

    canonical, _ = normalize(raw)

    assert tuple(canonical.columns) == CANONICAL_COLUMNS
    assert canonical.columns[-1] == "body"
    assert canonical.loc[0, "speaker_surname"] == "Washington"
    assert canonical.loc[0, "occurred_on"] == pd.Timestamp("1790-01-08")


def test_dropped_columns_lists_extras_in_source_order() -> None:
    raw = _raw(_row("Washington", "1790-01-08", doc_id="d1", years_active="1789-1793"))

    assert dropped_columns(raw) == ["doc_id", "years_active"]


def test_normalize_breaks_date_ties_by_surname() -> None:
    raw = _raw(_row("Washington", "1790-01-08"), _row("Adams", "1790-01-08"))

    canonical, _ = normalize(raw)

    assert canonical["speaker_surname"].tolist() == ["Adams", "Washington"]


def test_normalize_sorts_by_date_and_preserves_row_count() -> None:
    raw = _raw(
        _row("Obama", "2016-01-12"),
        _row("Lincoln", "1861-12-03"),
        _row("Washington", "1790-01-08"),
        _row("Lincoln", "1862-12-01"),
    )

    canonical, _ = normalize(raw)

    assert len(canonical) == len(raw)
    dates = canonical["occurred_on"].tolist()
    assert dates == sorted(dates)
    assert canonical["speaker_surname"].tolist() == ["Washington", "Lincoln", "Lincoln", "Obama"]
    assert list(canonical.index) == [0, 1, 2, 3]


def test_normalize_sort_is_stable_for_full_ties() -> None:
    raw = _raw(
        _row("Roosevelt", "1905-12-05", text="first"),
        _row("Roosevelt", "1905-12-05", text="second"),
    )

    canonical, _ = normalize(raw)

    assert canonical["body"].tolist() == ["first", "second"]


def test_normalize_drops_time_component() -> None:
    raw = _raw(_row("Kennedy", "1962-01-11T12:30:00"))

    canonical, _ = normalize(raw)

    assert canonical.loc[0, "occurred_on"] == pd.Timestamp("1962-01-11")


def test_normalize_missing_source_column() -> None:
    raw = _raw(_row("Washington", "1790-01-08")).drop(columns=["delivery", "party"])

    with pytest.raises(SchemaMismatchError) as excinfo:
        normalize(raw)

    assert set(excinfo.value.missing) == {"delivery", "party"}


def test_normalize_malformed_date_names_row() -> None:
    raw = _raw(_row("Washington", "1790-01-08"), _row("Adams", "not-a-date"))

    with pytest.raises(MalformedDateError) as excinfo:
        normalize(raw)

    assert excinfo.value.row == 1
    assert excinfo.value.value == "not-a-date"
    assert "not-a-date" in str(excinfo.value)


def test_normalize_missing_surname_reports_only_that_row() -> None:
    raw = _raw(
        _row("Washington", "1790-01-08"),
        _row(None, "1791-10-25"),
        _row("Adams", "1797-11-22"),
    )

    with pytest.raises(ValidationError) as excinfo:
        normalize(raw)

    assert excinfo.value.violations == (Violation(row=1, field="speaker_surname"),)


def test_normalize_collects_every_violation() -> None:
    raw = _raw(
        _row("Washington", "", text="   "),
        _row("Adams", "1797-11-22"),
        _row("", "1798-12-08"),
    )

    with pytest.raises(ValidationError) as excinfo:
        normalize(raw)

    assert excinfo.value.violations == (
        Violation(row=0, field="occurred_on"),
        Violation(row=0, field="body"),
        Violation(row=2, field="speaker_surname"),
    )


def test_normalize_accepts_unknown_categorical_values() -> None:
    raw = _raw(
        _row("Washington", "1790-01-08", type="other"),
        _row("Adams", "1797-11-22", type="proclamation"),
    )

    canonical, schema = normalize(raw)

    category = next(entry for entry in schema if entry.column_name == "category")
    assert category.allowed_values == ("other", "proclamation")
    assert len(canonical) == 2


def test_normalize_rejects_incomplete_column_map() -> None:
    raw = _raw(_row("Washington", "1790-01-08"))

    with pytest.raises(ValueError):
        normalize(raw, column_map={"President": "speaker_surname"})


@pytest.mark.parametrize(
    "value",
    ["today", "now", "NaT", "nat", "1790", "1790-01", "17900108", "1790-02-30", "0000-01-01", "01/08/1790"],
)
def test_normalize_rejects_ambiguous_or_partial_dates(value: str) -> None:
    raw = _raw(_row("Washington", "1790-01-08"), _row("Adams", value))

    with pytest.raises(MalformedDateError) as excinfo:
        normalize(raw)

    assert excinfo.value.row == 1
    assert excinfo.value.value == value


def test_normalize_keeps_dates_before_1677() -> None:
    raw = _raw(_row("Tudor", "1500-01-01"), _row("Washington", "1790-01-08"))

    canonical, _ = normalize(raw)

    assert canonical["speaker_surname"].tolist() == ["Tudor", "Washington"]
    assert canonical.loc[0, "occurred_on"].year == 1500


def test_normalize_keeps_written_calendar_date_with_offset() -> None:
    raw = _raw(_row("Obama", "2016-01-12T21:00:00-05:00"))

    canonical, _ = normalize(raw)

    assert canonical.loc[0, "occurred_on"] == pd.Timestamp("2016-01-12")
