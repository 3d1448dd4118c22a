"""
Hack Assembler Command-Line Interface
=====================================

This package provides the ``hackasm`` command, a Click-based front end
that reads an assembly file and writes its machine code file.
"""

__all__ = ["hackasm"]
