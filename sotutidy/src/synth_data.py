"""Synthetic corpus extracts in the upstream export format."""

from __future__ import annotations

import random
from collections.abc import Iterator, Sequence
from datetime import date
from pathlib import Path
from typing import TypeVar

import pandas as pd

try:  # pragma: no cover - import fallbacks for direct module usage
    from .adapters import corpus_format
    from .io_utils import write_csv, write_jsonl
    from .schemas.documents import SourceSpeech
except ImportError:  # pragma: no cover
    from adapters import corpus_format  # type: ignore
    from io_utils import write_csv, write_jsonl  # type: ignore
    from schemas.documents import SourceSpeech  # type: ignore

# (given name, surname, party, first year, last year in office)
PRESIDENTS = [
    ("George", "Washington", "Nonpartisan", 1789, 1797),
    ("John", "Adams", "Federalist", 1797, 1801),
    ("Thomas", "Jefferson", "Democratic-Republican", 1801, 1809),
    ("Andrew", "Jackson", "Democratic", 1829, 1837),
    ("Abraham", "Lincoln", "Republican", 1861, 1865),
    ("Theodore", "Roosevelt", "Republican", 1901, 1909),
    ("Woodrow", "Wilson", "Democratic", 1913, 1921),
    ("Franklin D.", "Roosevelt", "Democratic", 1933, 1945),
    ("John F.", "Kennedy", "Democratic", 1961, 1963),
    ("Ronald", "Reagan", "Republican", 1981, 1989),
    ("Barack", "Obama", "Democratic", 2009, 2017),
]

# Annual messages were sent to Congress in writing between these years.
WRITTEN_ERA = (1801, 1913)

OTHER_SHARE = 0.1

OPENERS = [
    "Fellow citizens of the Senate and House of Representatives.",
    "Mr. Speaker, Mr. Vice President, Members of Congress.",
    "To the Senate and House of Representatives of the United States.",
]

SUBJECTS = [
    "the public debt",
    "our relations with foreign nations",
    "the condition of the Army and Navy",
    "the revenue from customs",
    "the settlement of the western territories",
    "the currency and the banks",
    "the welfare of working families",
]

CLOSINGS = [
    "I commend these matters to your earnest consideration.",
    "May God bless the labors of this session.",
    "The state of the Union is strong.",
]

SOURCE_FIELD_ORDER = [field.alias for field in SourceSpeech.model_fields.values()]


T = TypeVar("T")


def _pick(rng: random.Random, items: Sequence[T]) -> T:
    return rng.choice(items)


def _generate_text(rng: random.Random) -> str:
    subjects = rng.sample(SUBJECTS, k=2)
    return " ".join(
        [
            _pick(rng, OPENERS),
            f"I report to you on {subjects[0]}, and on {subjects[1]}.",
            _pick(rng, CLOSINGS),
        ]
    )


def _speech_records(count: int, seed: int) -> Iterator[SourceSpeech]:
    rng = random.Random(seed)

    for _ in range(count):
        given, surname, party, first_year, last_year = _pick(rng, PRESIDENTS)
        year = rng.randint(first_year, last_year - 1)
        occurred_on = date(year, _pick(rng, [1, 2, 12]), rng.randint(1, 28))
        delivery = "written" if WRITTEN_ERA[0] <= year < WRITTEN_ERA[1] else "spoken"
        yield SourceSpeech(
            speaker_surname=surname,
            speaker_given_name=given,
            affiliation=party,
            occurred_on=occurred_on,
            category="other" if rng.random() < OTHER_SHARE else "SOTU",
            delivery_mode=delivery,
            body=_generate_text(rng),
        )


def generate_corpus(output_path: Path, count: int, seed: int = 13) -> None:
    """Write ``count`` synthetic speeches in the upstream export format.

    The suffix of ``output_path`` selects CSV or JSON Lines; any other suffix
    raises ``CorpusFormatError``. Rows are in generation order, not date order.
    """
    if count < 0:
        raise ValueError("count must be non-negative")
    export_format = corpus_format(output_path)

    rows = [
        speech.model_dump(by_alias=True, mode="json")
        for speech in _speech_records(count=count, seed=seed)
    ]

    if export_format == "csv":
        write_csv(output_path, pd.DataFrame(rows, columns=SOURCE_FIELD_ORDER))
    else:
        write_jsonl(output_path, rows)
