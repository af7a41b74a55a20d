# alfa_reader/core/tokenize.py
from __future__ import annotations


def tokenize(line: str, delimiter: str = ",") -> list[str]:
    """
    Split one CSV line into raw string fields.
    The line terminator is dropped; an empty line has no fields.
    """
    text = line.rstrip("\r\n")
    if not text:
        return []
    return text.split(delimiter)
