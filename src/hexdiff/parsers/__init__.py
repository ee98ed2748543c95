#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Readers that turn memory image files into MemorySequence objects."""

from hexdiff.parsers.ihex16 import load_ihex16, parse_ihex16

__all__ = ["load_ihex16", "parse_ihex16"]
