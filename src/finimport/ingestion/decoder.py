"""Delimited text to header-keyed rows."""

import csv
import io
import logging
from typing import Iterable, Iterator

from finimport.errors import MalformedInputError
from finimport.types import RawRow

logger = logging.getLogger(__name__)


def _reader(raw: str | bytes, delimiter: str) -> Iterator[list[str]]:
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise MalformedInputError(f"Input is not valid UTF-8 text: {e}") from e
    return csv.reader(io.StringIO(raw.lstrip("\ufeff"), newline=""), delimiter=delimiter)


def _read_columns(reader: Iterator[list[str]]) -> list[str]:
    header = next(reader, None)
    if not header or all(cell.strip() == "" for cell in header):
        raise MalformedInputError("Input has no header line")
    return [cell.strip() for cell in header]


def decode_rows(raw: str | bytes, delimiter: str = ",") -> Iterator[RawRow]:
    """Yield one mapping per data row, keyed by the (stripped) header names.

    Rows shorter than the header get None for the missing trailing columns;
    extra trailing cells are dropped. Blank lines are skipped. Nothing is read
    until the caller starts iterating, so errors surface on the first ``next``.

    Raises:
        MalformedInputError: If the input is not text, has no header line, or
            cannot be tokenized.
    """
    reader = _reader(raw, delimiter)
    try:
        columns = _read_columns(reader)
        for row in reader:
            if not row or all(cell.strip() == "" for cell in row):
                continue
            if len(row) > len(columns):
                logger.debug("Dropping %d cells beyond the header", len(row) - len(columns))
            values: list[str | None] = list(row[: len(columns)])
            values.extend([None] * (len(columns) - len(values)))
            yield dict(zip(columns, values))
    except csv.Error as e:
        raise MalformedInputError(f"Input could not be parsed as delimited text: {e}") from e


def read_header(raw: str | bytes, delimiter: str = ",") -> list[str]:
    """Return the stripped header names without reading any data rows."""
    try:
        return _read_columns(_reader(raw, delimiter))
    except csv.Error as e:
        raise MalformedInputError(f"Input could not be parsed as delimited text: {e}") from e


def require_columns(header: Iterable[str], required: Iterable[str]) -> None:
    """Raise MalformedInputError naming any required column absent from the header."""
    present = set(header)
    missing = [column for column in required if column not in present]
    if missing:
        raise MalformedInputError(f"Missing required columns: {', '.join(missing)}")
