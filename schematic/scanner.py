"""
Line Scanner
============
Single-pass state machine that scans a schematic one line at a time.

Only two lines of tokens are ever held: the current line and the carry
from the line above. A symbol is finalized (its list of adjacent numbers is
complete) as soon as the line below it has been scanned, and is then handed
back to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from .errors import MalformedNumberError, UnexpectedCharacterError
from .models import (
    MAX_PART_NUMBER,
    MAX_PART_NUMBER_DIGITS,
    NumberToken,
    SymbolToken,
)

logger = logging.getLogger(__name__)

DOT = "."


class ScanState(Enum):
    """Lexer states within a single line."""
    NORMAL = "NORMAL"
    IN_NUMBER = "IN_NUMBER"


class CharClass(Enum):
    """Legal character classes of the schematic alphabet."""
    DIGIT = "DIGIT"
    DOT = "DOT"
    SYMBOL = "SYMBOL"


def classify(char: str) -> Optional[CharClass]:
    """Return the class of ``char`` or None if it is not allowed."""
    if "0" <= char <= "9":
        return CharClass.DIGIT
    if char == DOT:
        return CharClass.DOT
    if char.isascii() and char.isprintable() and not char.isspace():
        return CharClass.SYMBOL
    return None


@dataclass
class ScanCarry:
    """Tokens of the previous line, still needed by the next one."""
    numbers: list[NumberToken] = field(default_factory=list)
    symbols: list[SymbolToken] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.numbers and not self.symbols


def _match(numbers: list[NumberToken], symbols: list[SymbolToken]) -> int:
    """Attach every number to every symbol it touches."""
    matched = 0
    for number in numbers:
        for symbol in symbols:
            if number.is_adjacent_to(symbol):
                symbol.attach(number)
                matched += 1
    return matched


class LineScanner:
    """
    Streaming schematic scanner.

    Feed lines in order with :meth:`process_line`; each call returns the
    symbols of the previous line, finalized. After the last line call
    :meth:`flush` to collect the symbols of the final line.
    """

    def __init__(self):
        self.state = ScanState.NORMAL
        self.number_start: Optional[int] = None
        self._carry = ScanCarry()
        self.rows_scanned = 0
        self.numbers_seen = 0

    @property
    def carry(self) -> ScanCarry:
        return self._carry

    def reset(self):
        """Reset the scanner for a fresh schematic."""
        self.state = ScanState.NORMAL
        self.number_start = None
        self._carry = ScanCarry()
        self.rows_scanned = 0
        self.numbers_seen = 0

    def process_line(self, line: str, row: int) -> list[SymbolToken]:
        """
        Scan one line and match it against the carried line above.

        Args:
            line: Raw line text. A trailing newline is ignored.
            row: Zero-based row index of the line.

        Returns:
            The previous line's symbols, now finalized.

        Raises:
            UnexpectedCharacterError: On a character outside the alphabet.
            MalformedNumberError: On a digit run above the part number range.
        """
        numbers, symbols = self._tokenize(line.rstrip("\r\n"), row)

        # Same row
        matched = _match(numbers, symbols)
        # Row above against this row's symbols
        matched += _match(self._carry.numbers, symbols)
        # This row against the symbols above; nothing below can reach them now
        matched += _match(numbers, self._carry.symbols)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Row {row}: {len(numbers)} numbers, {len(symbols)} symbols, "
                f"{matched} new associations; finalizing "
                f"{[str(s) for s in self._carry.symbols]}"
            )

        finished = self._finalize_carry()
        self._carry = ScanCarry(numbers=numbers, symbols=symbols)
        self.rows_scanned += 1
        self.numbers_seen += len(numbers)
        return finished

    def flush(self) -> list[SymbolToken]:
        """Finalize and return the symbols of the last line. Safe to repeat."""
        finished = self._finalize_carry()
        self._carry = ScanCarry()
        return finished

    def _finalize_carry(self) -> list[SymbolToken]:
        for symbol in self._carry.symbols:
            symbol.finalize()
        return self._carry.symbols

    def _tokenize(
        self, line: str, row: int
    ) -> tuple[list[NumberToken], list[SymbolToken]]:
        """Run the character state machine over one line."""
        numbers: list[NumberToken] = []
        symbols: list[SymbolToken] = []
        self.state = ScanState.NORMAL
        self.number_start = None

        for col, char in enumerate(line):
            char_class = classify(char)
            if char_class is None:
                raise UnexpectedCharacterError(row, col, char)

            if self.state == ScanState.NORMAL:
                if char_class == CharClass.DIGIT:
                    self.state = ScanState.IN_NUMBER
                    self.number_start = col
                elif char_class == CharClass.SYMBOL:
                    symbols.append(SymbolToken(row=row, column=col, char=char))

            elif self.state == ScanState.IN_NUMBER:
                if char_class == CharClass.DIGIT:
                    continue
                numbers.append(self._close_number(line, row, col))
                if char_class == CharClass.SYMBOL:
                    symbols.append(SymbolToken(row=row, column=col, char=char))

        if self.state == ScanState.IN_NUMBER:
            numbers.append(self._close_number(line, row, len(line)))

        return numbers, symbols

    def _close_number(self, line: str, row: int, end: int) -> NumberToken:
        start = self.number_start
        text = line[start:end]
        self.state = ScanState.NORMAL
        self.number_start = None

        # Length check first: int() refuses very long digit strings
        significant = text.lstrip("0") or "0"
        if (
            len(significant) > MAX_PART_NUMBER_DIGITS
            or int(significant) > MAX_PART_NUMBER
        ):
            shown = text if len(text) <= 20 else text[:20] + "..."
            raise MalformedNumberError(row, start, shown)
        value = int(significant)
        return NumberToken(row=row, column=start, digits=len(text), value=value)


def scan_lines(lines: Iterable[str]) -> list[SymbolToken]:
    """Scan a whole schematic and return every finalized symbol."""
    scanner = LineScanner()
    symbols: list[SymbolToken] = []
    for row, line in enumerate(lines):
        symbols.extend(scanner.process_line(line, row))
    symbols.extend(scanner.flush())
    return symbols
