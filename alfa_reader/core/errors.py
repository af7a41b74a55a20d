# alfa_reader/core/errors.py
from __future__ import annotations
from pathlib import Path


class TopicLoadError(Exception):
    """Base class for problems reading a topic CSV file."""

    def __init__(self, path: Path | str, message: str):
        self.path = Path(path)
        super().__init__(message)


class FileOpenError(TopicLoadError):
    def __init__(self, path: Path | str, reason: str = ""):
        msg = f"Failed to open '{path}'"
        super().__init__(path, f"{msg}: {reason}" if reason else msg)


class HeaderReadError(TopicLoadError):
    def __init__(self, path: Path | str):
        super().__init__(path, f"Error reading the header from '{path}'")


class RowFormatError(TopicLoadError):
    """A data row carries more tokens than the header has columns."""

    def __init__(self, path: Path | str, line_number: int, n_tokens: int, n_columns: int):
        self.line_number = line_number      # 1-based, data rows only
        self.n_tokens = n_tokens
        self.n_columns = n_columns
        super().__init__(
            path,
            f"Error converting line #{line_number} of '{path}' "
            f"({n_tokens} fields for {n_columns} columns); ignoring the rest of the topic",
        )
