#!/usr/bin/env python3
"""
Main entry point for sudokugen.

Generates a minimal Sudoku puzzle with a unique solution, or counts the
solutions of a supplied puzzle with --solve.
"""

import sys

from sudokugen.cli import main

if __name__ == "__main__":
    sys.exit(main())
