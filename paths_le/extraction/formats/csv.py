"""CSV extractor: tests every cell against the path-like predicate."""

from __future__ import annotations

import csv
import io
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from ..base import ExtractedPath, SourcePosition
from ..classify import COMPACT_PATH_LIKE, GENERIC_RULES, classify
from ..registry import registry

logger = logging.getLogger(__name__)

_BOM = "\ufeff"


def _is_empty_line(row: list[str]) -> bool:
    # A line with a single blank field is empty; "," still yields a row.
    return not row or (len(row) == 1 and not row[0].strip())


@contextmanager
def _field_size_limit(minimum: int) -> Iterator[None]:
    previous = csv.field_size_limit()
    if minimum > previous:
        csv.field_size_limit(minimum)
    try:
        yield
    finally:
        csv.field_size_limit(previous)


def _read_rows(content: str) -> list[list[str]]:
    """Parse leniently: ragged rows allowed, stray quotes kept, empty lines dropped.

    A malformed row ends the scan; rows read before it are kept.
    """

    if content.startswith(_BOM):
        content = content[len(_BOM):]
    reader = csv.reader(io.StringIO(content, newline=""), strict=False, skipinitialspace=True)
    rows: list[list[str]] = []
    with _field_size_limit(len(content) + 1):
        try:
            for row in reader:
                if _is_empty_line(row):
                    continue
                rows.append([cell.strip() for cell in row])
        except csv.Error as exc:
            logger.debug("CSV parsing stopped after %d rows: %s", len(rows), exc)
    return rows


def extract_from_csv(content: str) -> list[ExtractedPath]:
    if not content.strip():
        return []

    paths: list[ExtractedPath] = []
    for row_number, row in enumerate(_read_rows(content), start=1):
        for column_number, cell in enumerate(row, start=1):
            if not COMPACT_PATH_LIKE(cell):
                continue
            paths.append(
                ExtractedPath(
                    value=cell,
                    type=classify(cell, GENERIC_RULES),
                    position=SourcePosition(line=row_number, column=column_number),
                    context=f"CSV cell [{row_number},{column_number}]",
                )
            )
    return paths


@dataclass(slots=True)
class CsvExtractor:
    """Concrete :class:`PathExtractor` for comma-separated tables."""

    name: str = "csv"

    def extract(self, content: str) -> list[ExtractedPath]:
        return extract_from_csv(content)


csv_extractor = CsvExtractor()
registry.register_extractor(csv_extractor, categories=("csv",), replace=True)

__all__ = ["CsvExtractor", "csv_extractor", "extract_from_csv"]
