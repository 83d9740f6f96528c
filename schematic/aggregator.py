"""
Aggregator
==========
Aggregate queries over the finalized symbol set.

After a schematic has been scanned, produces a report of:
    - Part-number sum (every symbol/number association counts once)
    - Gear-ratio sum (``*`` symbols with exactly two part numbers)
    - Symbol, number and gear counts
    - Symbol breakdown by character

A number touching two symbols is counted for each of them.
"""

from __future__ import annotations

import logging
from collections import Counter

from .models import GEAR_CHAR, ScanReport, SymbolToken

logger = logging.getLogger(__name__)


def part_number_sum(symbols: list[SymbolToken]) -> int:
    return sum(n.value for s in symbols for n in s.numbers)


def gear_ratio_sum(symbols: list[SymbolToken], gear_char: str = GEAR_CHAR) -> int:
    total = 0
    for symbol in symbols:
        if symbol.is_gear(gear_char):
            first, second = symbol.numbers
            total += first.value * second.value
    return total


class SchematicAggregator:
    """
    Runs the aggregate queries and produces a ScanReport.
    """

    def __init__(self, gear_char: str = GEAR_CHAR):
        self.gear_char = gear_char

    def aggregate(
        self,
        symbols: list[SymbolToken],
        rows_scanned: int = 0,
        number_count: int = 0,
    ) -> ScanReport:
        """
        Aggregate finalized symbols.

        Args:
            symbols: Finalized symbols of the whole schematic.
            rows_scanned: Number of lines fed to the scanner.
            number_count: Number of part numbers the scanner found.

        Returns:
            ScanReport with both sums and the counts.
        """
        report = ScanReport(
            rows_scanned=rows_scanned,
            number_count=number_count,
        )

        if not symbols:
            logger.warning("No symbols found in schematic")
            return report

        report.symbol_count = len(symbols)
        report.association_count = sum(len(s.numbers) for s in symbols)
        report.isolated_symbol_count = sum(1 for s in symbols if not s.numbers)
        report.gear_count = sum(1 for s in symbols if s.is_gear(self.gear_char))
        report.symbol_breakdown = dict(
            sorted(Counter(s.char for s in symbols).items())
        )
        report.part_number_sum = part_number_sum(symbols)
        report.gear_ratio_sum = gear_ratio_sum(symbols, self.gear_char)

        logger.info("=" * 60)
        logger.info("SCAN REPORT")
        logger.info("=" * 60)
        logger.info(f"Rows Scanned: {report.rows_scanned}")
        logger.info(f"Part Numbers: {report.number_count}")
        logger.info(
            f"Symbols: {report.symbol_count} "
            f"({report.isolated_symbol_count} isolated)"
        )
        logger.info(f"Gears: {report.gear_count}")
        logger.info(f"Total Part Number Sum: {report.part_number_sum}")
        logger.info(f"Sum of Gear Ratios: {report.gear_ratio_sum}")
        logger.info("=" * 60)

        return report
