#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/hexdiff/diff/renderers/json.py
"""JSON diff renderer for structured output.

Records become a JSON array of objects tagged by variant::

    [
      {"type": "single", "address": 0, "value_1": 16, "value_2": 32},
      {"type": "range", "start": 2, "end": 6, "value_1": 1, "value_2": 2}
    ]
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from hexdiff.diff.records import DiffRecord


class JsonDiffRenderer:
    """Render diff records as structured JSON.

    Parameters
    ----------
    pretty_print : bool, default = True
        If True, format JSON with indentation
    indent : int, default = 2
        Number of spaces for indentation (if pretty_print=True)
    absent_as_sentinel : bool, default = True
        Write absent values as the numeric sentinel. If False they are
        written as ``null``, which keeps them distinct from a stored word
        equal to the sentinel.

    Examples
    --------
    Render records as JSON:
        >>> from hexdiff.diff.renderers import JsonDiffRenderer
        >>> renderer = JsonDiffRenderer(absent_as_sentinel=False)
        >>> json_output = renderer.render(records)

    """

    def __init__(
        self,
        pretty_print: bool = True,
        indent: int = 2,
        absent_as_sentinel: bool = True,
    ):
        """Initialize the JSON diff renderer."""
        self.pretty_print = pretty_print
        self.indent = indent
        self.absent_as_sentinel = absent_as_sentinel

    def to_data(self, records: Iterable[DiffRecord]) -> list[dict[str, Any]]:
        """Convert records to JSON-ready dictionaries."""
        return [record.to_dict(absent_as_sentinel=self.absent_as_sentinel) for record in records]

    def render(self, records: Iterable[DiffRecord]) -> str:
        """Render records to a JSON string.

        Parameters
        ----------
        records : iterable of DiffRecord
            Records to serialise

        Returns
        -------
        str
            JSON array of tagged record objects

        """
        data = self.to_data(records)
        if self.pretty_print:
            return json.dumps(data, indent=self.indent)
        return json.dumps(data)
