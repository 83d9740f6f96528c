"""
Data Models
===========
Pydantic models for schematic scanning output.
All result models are serializable to JSON via ``model_dump()``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field

# Part numbers live in the unsigned 32-bit range.
MAX_PART_NUMBER = 2**32 - 1
MAX_PART_NUMBER_DIGITS = len(str(MAX_PART_NUMBER))

GEAR_CHAR = "*"


# ─── Token Models ─────────────────────────────────────────────────────────────


class NumberToken(BaseModel):
    """
    A maximal run of decimal digits found on one line.
    Immutable once created; symbols hold references to it.
    """
    model_config = ConfigDict(frozen=True)

    row: int = Field(ge=0)
    column: int = Field(ge=0, description="Column of the first digit")
    digits: int = Field(ge=1)
    value: int = Field(ge=0, le=MAX_PART_NUMBER)

    @property
    def end_column(self) -> int:
        return self.column + self.digits - 1

    def is_adjacent_to(self, symbol: SymbolToken) -> bool:
        """True if ``symbol`` touches this number, diagonals included."""
        return (
            abs(self.row - symbol.row) <= 1
            and self.column - 1 <= symbol.column <= self.column + self.digits
        )

    def __str__(self) -> str:
        return str(self.value)


class SymbolToken(BaseModel):
    """
    A single non-digit, non-'.' character on the grid together with the
    numbers adjacent to it.
    """
    row: int = Field(ge=0)
    column: int = Field(ge=0)
    char: str = Field(min_length=1, max_length=1)
    numbers: list[NumberToken] = Field(default_factory=list)
    finalized: bool = False

    def attach(self, number: NumberToken):
        if self.finalized:
            raise RuntimeError(
                f"Cannot attach {number} to finalized symbol {self}"
            )
        self.numbers.append(number)

    def finalize(self):
        self.finalized = True

    def is_gear(self, gear_char: str = GEAR_CHAR) -> bool:
        return self.char == gear_char and len(self.numbers) == 2

    def __str__(self) -> str:
        values = [n.value for n in self.numbers]
        return (
            f"<Symbol {self.char!r} at row {self.row}, col {self.column} "
            f"with part numbers {values}>"
        )


# ─── Report Models ────────────────────────────────────────────────────────────


class ScanReport(BaseModel):
    """Aggregate figures for a fully scanned schematic."""
    rows_scanned: int = 0
    number_count: int = 0
    symbol_count: int = 0
    association_count: int = 0
    gear_count: int = 0
    part_number_sum: int = 0
    gear_ratio_sum: int = 0
    isolated_symbol_count: int = 0
    symbol_breakdown: dict[str, int] = Field(default_factory=dict)

    @computed_field
    @property
    def numbers_per_symbol(self) -> float:
        if self.symbol_count == 0:
            return 0.0
        return round(self.association_count / self.symbol_count, 2)


class ScanResult(BaseModel):
    """
    Complete output of a scan run.
    This is the top-level JSON structure printed by ``--json-output``.
    """
    source: str = "<lines>"
    symbols: list[SymbolToken] = Field(default_factory=list)
    report: ScanReport = Field(default_factory=ScanReport)
