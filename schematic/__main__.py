"""
Module entry point for: python -m schematic

Allows running the scanner directly as a module:
    python -m schematic scan <input_path> [options]
    python -m schematic symbols <input_path> [options]
"""

from .cli import cli


def main():
    cli()


if __name__ == "__main__":
    main()
