"""Entry point for termcomp."""

import sys

from termcomp.cli import run


def main() -> None:
    """Complete the command line given on the command line or in COMP_LINE."""
    sys.exit(run())


if __name__ == "__main__":
    main()
