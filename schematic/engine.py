"""
Schematic Engine
================
Orchestrator that feeds lines through the line scanner and aggregates the
finalized symbols into a scan result.

Usage:
    engine = SchematicEngine(config)
    result = engine.scan_file("path/to/schematic.txt")
    # result is a ScanResult with both sums in result.report

Architecture:
    file → lines → LineScanner → finalized SymbolTokens →
    SchematicAggregator → ScanResult (JSON)
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterable, Iterator, Optional

from .aggregator import SchematicAggregator
from .errors import ReadError
from .models import GEAR_CHAR, ScanResult, SymbolToken
from .scanner import LineScanner

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class ScannerConfig:
    """Configuration for the schematic engine."""

    gear_char: str = GEAR_CHAR
    encoding: str = "utf-8"

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None


def _read_lines(handle: IO[bytes], source: str, encoding: str) -> Iterator[str]:
    """
    Yield decoded lines one at a time, turning read failures into ReadError.

    Each line is decoded on its own so a bad byte is reported on its row.
    """
    row = 0
    while True:
        try:
            raw = handle.readline()
            if not raw:
                return
            line = raw.decode(encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(
                f"Unable to read line {row} of {source}: {e}", row=row
            ) from e
        yield line
        row += 1


class SchematicEngine:
    """
    Main scanning engine.

    Orchestrates the pipeline:
        1. Line reading
        2. Line scanning (tokens, adjacency, finalization)
        3. Aggregation
    """

    def __init__(self, config: Optional[ScannerConfig] = None):
        self.config = config or ScannerConfig()
        self._setup_logging()

    def _setup_logging(self):
        """Configure logging based on config."""
        log_level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        package_logger = logging.getLogger("schematic")
        package_logger.setLevel(log_level)

        # Handlers are shared by every engine; keep their levels current
        for handler in package_logger.handlers:
            handler.setLevel(log_level)

        if not any(
            type(h) is logging.StreamHandler for h in package_logger.handlers
        ):
            console = logging.StreamHandler()
            console.setLevel(log_level)
            console.setFormatter(
                logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
            )
            package_logger.addHandler(console)

        if self.config.log_file and not self._has_file_handler(package_logger):
            log_dir = Path(self.config.log_file).parent
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(
                self.config.log_file, encoding="utf-8"
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(
                logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
            )
            package_logger.addHandler(file_handler)

    def _has_file_handler(self, package_logger: logging.Logger) -> bool:
        log_path = os.path.abspath(self.config.log_file)
        return any(
            isinstance(h, logging.FileHandler) and h.baseFilename == log_path
            for h in package_logger.handlers
        )

    def scan(self, lines: Iterable[str], source: str = "<lines>") -> ScanResult:
        """
        Scan an ordered sequence of schematic lines.

        Args:
            lines: Lines of the schematic, top to bottom.
            source: Label recorded in the result.

        Returns:
            ScanResult with all finalized symbols and the report.

        Raises:
            ScanError: On any malformed input; no partial result is returned.
        """
        start_time = time.time()
        logger.info(f"Starting scan of: {source}")

        scanner = LineScanner()
        symbols: list[SymbolToken] = []
        for row, line in enumerate(lines):
            symbols.extend(scanner.process_line(line, row))
        symbols.extend(scanner.flush())

        aggregator = SchematicAggregator(gear_char=self.config.gear_char)
        report = aggregator.aggregate(
            symbols,
            rows_scanned=scanner.rows_scanned,
            number_count=scanner.numbers_seen,
        )

        elapsed = time.time() - start_time
        logger.info(
            f"Scan complete in {elapsed:.3f}s, "
            f"{report.symbol_count} symbols finalized"
        )

        return ScanResult(source=source, symbols=symbols, report=report)

    def scan_file(self, path: str) -> ScanResult:
        """
        Scan a schematic file line by line.

        Raises:
            ReadError: If the file cannot be opened or read.
            ScanError: On malformed schematic content.
        """
        path = os.path.abspath(path)
        source = os.path.basename(path)

        try:
            handle = open(path, "rb")
        except OSError as e:
            raise ReadError(f"Cannot open file due to: {e}") from e

        with handle:
            return self.scan(
                _read_lines(handle, source, self.config.encoding),
                source=source,
            )
