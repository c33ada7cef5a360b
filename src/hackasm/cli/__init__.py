"""
hackasm Command-Line Interface
==============================

This package provides the command-line tool for the Hack assembler:

- **hackasm**: Hack assembler

The tool is implemented as a Click-based CLI application with help text
and uniform error reporting.
"""

__all__ = ["hackasm"]
