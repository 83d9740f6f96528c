"""
Schematic Scanner
=================
Streaming scanner for engine schematics: a grid of part numbers, symbols
and '.' filler.

Architecture:
    - Line Scanner: Single-pass state machine over one line at a time
    - Carry: The previous line's tokens, the only state kept between lines
    - Aggregator: Part-number sum and gear-ratio sum over finalized symbols
    - Engine: Reads lines from a file and produces a JSON-serializable result

Version: 1.0.0
"""

__version__ = "1.0.0"
