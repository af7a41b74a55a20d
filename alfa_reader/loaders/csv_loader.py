# alfa_reader/loaders/csv_loader.py
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator
import logging

from ..core.conventions import NamingConventions, current_conventions
from ..core.errors import FileOpenError, HeaderReadError, RowFormatError
from ..core.message import Record, decode
from ..core.schema import TopicSchema, infer_schema
from ..core.tokenize import tokenize
from ..core.widths import ColumnWidths, combine

_LOG = logging.getLogger(__name__)


@dataclass
class IngestResult:
    records: list[Record] = field(default_factory=list)
    widths: ColumnWidths = field(default_factory=ColumnWidths)
    error: RowFormatError | None = None     # first malformed row, ingestion stopped there


@dataclass(frozen=True)
class LoadedTopic:
    path: Path
    schema: TopicSchema
    ingest: IngestResult


# ---------- phases ----------
def read_raw_schema(lines: Iterator[str], path: Path, delimiter: str) -> list[str]:
    header = next(lines, None)
    if header is None or not header.strip():
        raise HeaderReadError(path)
    return tokenize(header, delimiter)


def ingest_rows(lines: Iterable[str], schema: TopicSchema, path: Path,
                delimiter: str = ",") -> IngestResult:
    """
    Decode data rows in order. Short rows are padded with empty fields; the
    first row with too many fields stops ingestion and is reported in
    ``IngestResult.error`` while the rows before it are kept.
    """
    result = IngestResult(widths=ColumnWidths.for_fields(len(schema.field_labels)))
    n_cols = schema.width

    for line_number, line in enumerate(lines, start=1):
        tokens = tokenize(line, delimiter)
        if len(tokens) > n_cols:
            result.error = RowFormatError(path, line_number, len(tokens), n_cols)
            break
        tokens.extend([""] * (n_cols - len(tokens)))

        record, row_widths = decode(tokens, schema)
        result.records.append(record)
        result.widths = combine(result.widths, row_widths)

    return result


# ---------- public loader ----------
def load(path: Path, conventions: NamingConventions | None = None) -> LoadedTopic:
    """
    Read a whole topic CSV file.
    Raises FileOpenError / HeaderReadError; malformed rows are returned, not raised.
    """
    conv = conventions or current_conventions()
    path = Path(path)
    try:
        fh = path.open("r", encoding="utf-8-sig", errors="replace", newline="")
    except OSError as e:
        raise FileOpenError(path, e.strerror or str(e)) from e

    try:
        with fh:
            lines = iter(fh)
            raw_labels = read_raw_schema(lines, path, conv.delimiter)
            schema = infer_schema(raw_labels, conv)
            _LOG.debug("%s: %d columns, fields=%s, header=%s",
                       path.name, schema.width, list(schema.field_labels), schema.has_header)
            result = ingest_rows(lines, schema, path, conv.delimiter)
    except OSError as e:
        raise FileOpenError(path, e.strerror or str(e)) from e

    return LoadedTopic(path=path, schema=schema, ingest=result)
