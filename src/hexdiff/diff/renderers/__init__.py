#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/hexdiff/diff/renderers/__init__.py
"""Diff renderers for various output formats.

Available Renderers
-------------------
- TextDiffRenderer: one line of hexadecimal fields per record
- JsonDiffRenderer: structured JSON output for programmatic access
- RichDiffRenderer: colored terminal table (requires ``rich``)

Examples
--------
Render records as text:
    >>> from hexdiff import diff_files
    >>> from hexdiff.diff.renderers import TextDiffRenderer
    >>> records = diff_files("build_a.hex", "build_b.hex")
    >>> print(TextDiffRenderer().render(records))

"""

from hexdiff.diff.renderers.json import JsonDiffRenderer
from hexdiff.diff.renderers.rich_table import RichDiffRenderer
from hexdiff.diff.renderers.text import TextDiffRenderer, format_record

__all__ = [
    "JsonDiffRenderer",
    "RichDiffRenderer",
    "TextDiffRenderer",
    "format_record",
]
