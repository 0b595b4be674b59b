"""
twopass Command-Line Interface
==============================

This package provides the command-line tool for the linker:

- **tplink**: Two-pass linker

The tool is implemented as a Click-based CLI application with
help text and consistent error reporting.
"""

__all__ = ["tplink"]
