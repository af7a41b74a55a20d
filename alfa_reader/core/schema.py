# alfa_reader/core/schema.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .conventions import NamingConventions, current_conventions


class ColumnRole(Enum):
    TIME = "time"
    HEADER_SEQ = "header_seq"
    HEADER_STAMP = "header_stamp"
    HEADER_FRAME_ID = "header_frame_id"
    FIELD = "field"


_HEADER_ROLES = (ColumnRole.HEADER_SEQ, ColumnRole.HEADER_STAMP, ColumnRole.HEADER_FRAME_ID)


@dataclass(frozen=True)
class Column:
    role: ColumnRole
    raw_label: str
    label: str = ""           # display label, only set for FIELD columns


@dataclass(frozen=True)
class TopicSchema:
    raw_labels: tuple[str, ...]
    columns: tuple[Column, ...]

    @property
    def width(self) -> int:
        return len(self.columns)

    @property
    def field_labels(self) -> tuple[str, ...]:
        return tuple(c.label for c in self.columns if c.role is ColumnRole.FIELD)

    @property
    def has_header(self) -> bool:
        return any(c.role in _HEADER_ROLES for c in self.columns)


def classify_column(raw_label: str, conventions: NamingConventions) -> Column:
    if raw_label == conventions.time_marker:
        return Column(ColumnRole.TIME, raw_label)

    header_roles = {
        conventions.header_seq_label: ColumnRole.HEADER_SEQ,
        conventions.header_stamp_label: ColumnRole.HEADER_STAMP,
        conventions.header_frame_id_label: ColumnRole.HEADER_FRAME_ID,
    }
    role = header_roles.get(raw_label)
    if role is not None:
        return Column(role, raw_label)

    prefix = conventions.field_prefix
    if prefix and raw_label.startswith(prefix):
        return Column(ColumnRole.FIELD, raw_label, raw_label[len(prefix):])
    return Column(ColumnRole.FIELD, raw_label, raw_label)


def infer_schema(raw_labels: Sequence[str],
                 conventions: NamingConventions | None = None) -> TopicSchema:
    """
    Resolve the raw CSV header labels into typed columns.

    The time column and the three header sub-record columns are consumed by
    the record decoder; every other column becomes a named field, with the
    dataset field prefix stripped when present.
    """
    conv = conventions or current_conventions()
    labels = tuple(str(label) for label in raw_labels)
    return TopicSchema(raw_labels=labels,
                       columns=tuple(classify_column(label, conv) for label in labels))
