# alfa_reader/core/topic.py
from __future__ import annotations
from pathlib import Path
from typing import Iterator, TextIO
import logging
import sys

import pandas as pd

from ..loaders import csv_loader
from .conventions import NamingConventions, current_conventions, is_fault_topic_name
from .errors import TopicLoadError
from .message import Record, format_datetime, render
from .widths import (ColumnWidths, with_label_floors,
                     INDEX_LABEL, DATETIME_LABEL, SEQ_LABEL, STAMP_LABEL, FRAME_LABEL)

_LOG = logging.getLogger(__name__)


class Topic:
    """
    One topic of an ALFA dataset sequence: the decoded records of a single
    CSV file plus what is needed to print them as a fixed-width table.

    A Topic is not thread-safe; use one instance per topic.
    """

    def __init__(self, file_path: Path | str | None = None, name: str = "N/A",
                 conventions: NamingConventions | None = None):
        self.conventions = conventions or current_conventions()
        self.name = name
        self.file_path: Path | None = None
        self.field_labels: list[str] = []
        self.records: list[Record] = []
        self.widths = ColumnWidths()
        self._initialized = False
        self._fault_topic = False
        self._has_header = False

        if file_path:
            self.load(file_path)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __repr__(self) -> str:
        return f"Topic(name={self.name!r}, file_path={self.file_path!r}, records={len(self.records)})"

    # ---------- loading ----------
    def load(self, file_path: Path | str, topic_name: str | None = None) -> bool:
        """
        Load a topic CSV file, replacing whatever the topic held before.
        Returns False if the file cannot be opened or has no header line.
        """
        # keep the topic name across the reset
        name = self.name if topic_name is None else topic_name
        self.clear()
        self.name = name
        self.file_path = Path(file_path)

        try:
            loaded = csv_loader.load(self.file_path, self.conventions)
        except TopicLoadError as e:
            _LOG.error("%s", e)
            return False

        if loaded.ingest.error is not None:
            _LOG.error("%s", loaded.ingest.error)

        self.records = loaded.ingest.records
        self.field_labels = list(loaded.schema.field_labels)
        self._has_header = loaded.schema.has_header
        self.widths = with_label_floors(loaded.ingest.widths, self.field_labels)
        self._fault_topic = is_fault_topic_name(self.name, self.conventions)
        self._initialized = True

        _LOG.info("loaded topic '%s': %d records, %d fields%s from %s",
                  self.name, len(self.records), len(self.field_labels),
                  " (fault topic)" if self._fault_topic else "", self.file_path.name)
        return self.is_initialized()

    def clear(self) -> None:
        self.name = ""
        self.file_path = None
        self.field_labels = []
        self.records = []
        self.widths = ColumnWidths()
        self._initialized = False
        self._fault_topic = False
        self._has_header = False

    # ---------- state ----------
    def is_initialized(self) -> bool:
        return self._initialized

    def is_fault_topic(self) -> bool:
        return self._fault_topic

    def has_header_subrecord(self) -> bool:
        return self._has_header

    # ---------- console report ----------
    def _datetime_width(self) -> int:
        # the first record's date/time sizes its column
        return len(format_datetime(self.records[0].datetime)) if self.records else 0

    def print_header(self, separator: str = " | ", out: TextIO | None = None) -> int:
        """
        Print the column labels. Returns the layout length of the line, used
        as the width of the divider under it, or 0 if there are no records.
        """
        if not self.records:
            return 0
        out = sys.stdout if out is None else out
        len_datetime = self._datetime_width()

        w = self.widths
        total_len = len(INDEX_LABEL) + len_datetime + w.seq_id + w.timestamp + w.frame_id
        total_len += sum(w.fields[:len(self.field_labels)])
        total_len += (6 + len(self.field_labels)) * len(separator)

        parts = [INDEX_LABEL, DATETIME_LABEL.rjust(len_datetime)]
        if self._has_header:
            parts += [SEQ_LABEL.rjust(w.seq_id), STAMP_LABEL.rjust(w.timestamp), FRAME_LABEL.rjust(w.frame_id)]
        parts += [label.rjust(width) for label, width in zip(self.field_labels, w.fields)]
        print(separator + separator.join(parts) + separator, file=out)
        return total_len

    def print(self, start: int = 0, count: int = -1, separator: str = " | ",
              out: TextIO | None = None) -> int:
        """
        Print ``count`` records starting at ``start`` (all remaining if
        ``count`` is negative), preceded by the header and a divider.
        Returns the number of records printed.
        """
        if start < 0:
            return 0
        out = sys.stdout if out is None else out
        if count < 0:
            count = len(self.records)

        header_length = self.print_header(separator, out=out)
        print("-" * header_length, file=out)

        len_datetime = self._datetime_width()
        printed = 0
        for i in range(start, min(start + count, len(self.records))):
            row = render(self.records[i], self.widths, self._has_header, separator, len_datetime)
            print(f"{separator}{str(i).rjust(len(INDEX_LABEL))}{separator}{row}{separator}", file=out)
            printed += 1
        return printed

    # ---------- tabular view ----------
    def to_dataframe(self) -> pd.DataFrame:
        """One row per record; header sub-record columns only if the topic has them."""
        columns = ["datetime"]
        if self._has_header:
            columns += ["seq", "stamp", "frame_id"]
        columns += self.field_labels

        rows = []
        for rec in self.records:
            row = [rec.datetime]
            if self._has_header:
                h = rec.header
                row += [h.seq, h.stamp, h.frame_id] if h else [None, None, ""]
            row += list(rec.fields)
            rows.append(row)
        return pd.DataFrame(rows, columns=columns)
