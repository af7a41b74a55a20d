# alfa_reader/core/message.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Sequence, Union

import pandas as pd

from .schema import ColumnRole, TopicSchema
from .widths import ColumnWidths, RowWidths

FieldValue = Union[bool, int, float, str]

_NS_PER_SEC = 1_000_000_000


@dataclass(frozen=True)
class HeaderSubrecord:
    seq: Optional[int] = None
    stamp: Optional[pd.Timestamp] = None
    frame_id: str = ""


@dataclass(frozen=True)
class Record:
    datetime: Optional[pd.Timestamp]
    header: Optional[HeaderSubrecord]
    fields: tuple[FieldValue, ...]


# ---------- token parsing ----------
def parse_value(token: str) -> FieldValue:
    text = token.strip()
    if not text:
        return ""
    if text in ("True", "False"):
        return text == "True"
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return token


def parse_int(token: str) -> Optional[int]:
    try:
        return int(token.strip())
    except ValueError:
        return None


def parse_nanoseconds(token: str) -> Optional[pd.Timestamp]:
    """ROS times are exported as integer nanoseconds since the epoch."""
    ns = parse_int(token)
    if ns is None:
        return None
    try:
        return pd.Timestamp(ns, unit="ns")
    except (ValueError, OverflowError):
        return None


# ---------- text rendering ----------
def format_datetime(ts: Optional[pd.Timestamp]) -> str:
    if ts is None:
        return ""
    return f"{ts.strftime('%Y/%m/%d %H:%M:%S')}.{ts.value % _NS_PER_SEC:09d}"


def format_stamp(ts: Optional[pd.Timestamp]) -> str:
    if ts is None:
        return ""
    sec, nsec = divmod(ts.value, _NS_PER_SEC)
    return f"{sec}.{nsec:09d}"


def format_value(value: FieldValue) -> str:
    if isinstance(value, float):
        return repr(value)
    return str(value)


def _header_texts(header: Optional[HeaderSubrecord]) -> tuple[str, str, str]:
    h = header or HeaderSubrecord()
    seq = "" if h.seq is None else str(h.seq)
    return seq, format_stamp(h.stamp), h.frame_id


def measure(record: Record) -> RowWidths:
    seq, stamp, frame = _header_texts(record.header)
    return RowWidths(
        seq_id=len(seq) if record.header else 0,
        timestamp=len(stamp) if record.header else 0,
        frame_id=len(frame) if record.header else 0,
        fields=tuple(len(format_value(v)) for v in record.fields),
    )


# ---------- public API ----------
def decode(tokens: Sequence[str], schema: TopicSchema) -> tuple[Record, RowWidths]:
    """
    Turn one row of raw tokens into a Record.
    ``tokens`` must already be padded to the schema width.
    Returns the record and the rendered width of each of its columns.
    """
    if len(tokens) != schema.width:
        raise ValueError(f"expected {schema.width} tokens, got {len(tokens)}")

    dt: Optional[pd.Timestamp] = None
    seq: Optional[int] = None
    stamp: Optional[pd.Timestamp] = None
    frame_id = ""
    values: list[FieldValue] = []

    for column, token in zip(schema.columns, tokens):
        role = column.role
        if role is ColumnRole.TIME:
            if dt is None:                  # first time column wins
                dt = parse_nanoseconds(token)
        elif role is ColumnRole.HEADER_SEQ:
            seq = parse_int(token)
        elif role is ColumnRole.HEADER_STAMP:
            stamp = parse_nanoseconds(token)
        elif role is ColumnRole.HEADER_FRAME_ID:
            frame_id = token
        else:
            values.append(parse_value(token))

    header = HeaderSubrecord(seq, stamp, frame_id) if schema.has_header else None
    record = Record(datetime=dt, header=header, fields=tuple(values))
    return record, measure(record)


def render(record: Record, widths: ColumnWidths, has_header: bool,
           separator: str = " | ", datetime_width: int = 0) -> str:
    """Date/time, then the header sub-record (if any), then the fields, each padded to its width."""
    parts = [format_datetime(record.datetime).rjust(datetime_width)]
    if has_header:
        seq, stamp, frame = _header_texts(record.header)
        parts += [seq.rjust(widths.seq_id), stamp.rjust(widths.timestamp), frame.rjust(widths.frame_id)]
    for i, value in enumerate(record.fields):
        width = widths.fields[i] if i < len(widths.fields) else 0
        parts.append(format_value(value).rjust(width))
    return separator.join(parts)
