"""Exceptions raised while scanning and parsing lease files."""

from __future__ import annotations


class LeaseFileError(Exception):
    """Base class for every lease-file failure."""

    def __init__(self, message: str, line: str | None = None, line_number: int | None = None):
        self.line = line
        self.line_number = line_number
        if line is not None:
            where = f" (line {line_number})" if line_number is not None else ""
            message = f"{message}{where}: {line}"
        super().__init__(message)


class ScanError(LeaseFileError):
    """Block boundaries are malformed or a block is left open at end of input."""


class ParseError(LeaseFileError):
    """A single declaration could not be turned into a record."""


class HeaderError(ParseError):
    pass


class StatementError(ParseError):
    pass


class FieldConflictError(ParseError):
    def __init__(self, field: str, line: str, line_number: int | None = None):
        self.field = field
        super().__init__(f"Duplicate statement for field '{field}'", line, line_number)
