"""
Scan Errors
===========
Every error aborts the whole scan. Positional errors carry the zero-based
row and column of the offending input.
"""

from __future__ import annotations

from typing import Optional


class ScanError(Exception):
    """Base class for all unrecoverable scan failures."""

    def __init__(
        self,
        message: str,
        row: Optional[int] = None,
        column: Optional[int] = None,
    ):
        super().__init__(message)
        self.row = row
        self.column = column


class MalformedNumberError(ScanError):
    """A digit run does not decode to a valid part number."""

    def __init__(self, row: int, column: int, text: str = ""):
        super().__init__(
            f"The number at row {row} col {column} is not a valid part number"
            + (f": {text}" if text else ""),
            row=row,
            column=column,
        )
        self.text = text


class UnexpectedCharacterError(ScanError):
    """A character outside {digits, '.', symbols} was found."""

    def __init__(self, row: int, column: int, char: str):
        super().__init__(
            f"The character {char!r} at row {row}, col {column} is not expected",
            row=row,
            column=column,
        )
        self.char = char


class ReadError(ScanError):
    """The line source could not produce a line."""

    def __init__(self, message: str, row: Optional[int] = None):
        super().__init__(message, row=row)
