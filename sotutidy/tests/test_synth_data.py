"""Tests for synthetic corpus generation."""

from pathlib import Path

import pytest

from adapters import load_raw_table, resolve_adapter
from errors import CorpusFormatError
from io_utils import read_csv, read_jsonl
from normalize import normalize
from synth_data import PRESIDENTS, SOURCE_FIELD_ORDER, generate_corpus


def test_generate_corpus_creates_expected_count(tmp_path: Path) -> None:
    output = tmp_path / "sotu.jsonl"
    generate_corpus(output_path=output, count=5, seed=42)

    docs = read_jsonl(output)
    assert len(docs) == 5
    assert list(docs[0]) == SOURCE_FIELD_ORDER

    surnames = {surname for _, surname, _, _, _ in PRESIDENTS}
    assert all(doc["President"] in surnames for doc in docs)
    assert all(doc["delivery"] in {"spoken", "written"} for doc in docs)
    assert all(doc["type"] in {"SOTU", "other"} for doc in docs)


def test_generate_corpus_written_era(tmp_path: Path) -> None:
    output = tmp_path / "sotu.jsonl"
    generate_corpus(output_path=output, count=40, seed=1)

    for doc in read_jsonl(output):
        year = int(doc["Date"][:4])
        expected = "written" if 1801 <= year < 1913 else "spoken"
        assert doc["delivery"] == expected


def test_generate_corpus_csv_header(tmp_path: Path) -> None:
    output = tmp_path / "sotu.csv"
    generate_corpus(output_path=output, count=3, seed=9)

    table = read_csv(output)
    assert list(table.columns) == SOURCE_FIELD_ORDER
    assert len(table) == 3


def test_generate_corpus_deterministic_seed(tmp_path: Path) -> None:
    output_one = tmp_path / "first.jsonl"
    output_two = tmp_path / "second.jsonl"

    generate_corpus(output_one, count=3, seed=7)
    generate_corpus(output_two, count=3, seed=7)

    assert read_jsonl(output_one) == read_jsonl(output_two)


def test_generate_corpus_negative_count(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        generate_corpus(tmp_path / "out.jsonl", count=-1)


def test_generate_corpus_json_suffix_reads_back(tmp_path: Path) -> None:
    output = tmp_path / "raw.json"
    generate_corpus(output_path=output, count=3, seed=2)

    canonical, _ = normalize(load_raw_table(resolve_adapter(output)))

    assert len(canonical) == 3


def test_generate_corpus_rejects_unknown_suffix(tmp_path: Path) -> None:
    output = tmp_path / "raw.parquet"

    with pytest.raises(CorpusFormatError):
        generate_corpus(output_path=output, count=3)

    assert not output.exists()
