# alfa_reader/core/widths.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

# ---------- column labels of the console report ----------
INDEX_LABEL = "Index"
DATETIME_LABEL = "Date/Time Stamp"
SEQ_LABEL = "SeqID"
STAMP_LABEL = "Time Stamp"
FRAME_LABEL = "Frame"


@dataclass(frozen=True)
class RowWidths:
    """Rendered widths of a single decoded row."""
    seq_id: int = 0
    timestamp: int = 0
    frame_id: int = 0
    fields: tuple[int, ...] = ()


@dataclass(frozen=True)
class ColumnWidths:
    """Running maximum widths of a topic's columns."""
    seq_id: int = 0
    timestamp: int = 0
    frame_id: int = 0
    fields: tuple[int, ...] = ()

    @classmethod
    def for_fields(cls, n_fields: int) -> "ColumnWidths":
        return cls(fields=(0,) * n_fields)


def combine(acc: ColumnWidths, row: RowWidths) -> ColumnWidths:
    """One fold step: widen ``acc`` so it fits ``row``."""
    fields = list(acc.fields)
    for i, w in enumerate(row.fields):
        if i < len(fields):
            fields[i] = max(fields[i], w)
        else:
            fields.append(w)
    return ColumnWidths(
        seq_id=max(acc.seq_id, row.seq_id),
        timestamp=max(acc.timestamp, row.timestamp),
        frame_id=max(acc.frame_id, row.frame_id),
        fields=tuple(fields),
    )


def with_label_floors(widths: ColumnWidths, field_labels: Sequence[str]) -> ColumnWidths:
    """
    Make every column at least as wide as its label. The field widths are
    sized to ``field_labels``; a column no row reported gets its label width.
    """
    fields = []
    for i, label in enumerate(field_labels):
        seen = widths.fields[i] if i < len(widths.fields) else 0
        fields.append(max(seen, len(label)))
    return ColumnWidths(
        seq_id=max(widths.seq_id, len(SEQ_LABEL)),
        timestamp=max(widths.timestamp, len(STAMP_LABEL)),
        frame_id=max(widths.frame_id, len(FRAME_LABEL)),
        fields=tuple(fields),
    )
