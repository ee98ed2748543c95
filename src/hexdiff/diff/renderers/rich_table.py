#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/hexdiff/diff/renderers/rich_table.py
"""Terminal table renderer built on Rich.

Requires the optional ``rich`` dependency (``pip install hexdiff[rich]``).
Rows are colored by status: differences in red, matching words dim, and
addresses that neither image defines in yellow.
"""

from __future__ import annotations

import io
from typing import Any, Iterable

from hexdiff.diff.records import DiffRecord, SingleDiff, WordValue
from hexdiff.exceptions import DependencyError

RICH_INSTALL_COMMAND = "pip install hexdiff[rich]"


def _import_rich() -> Any:
    try:
        import rich.console
        import rich.table
    except ImportError as e:
        raise DependencyError(
            feature_name="Rich output",
            missing_packages=[("rich", "")],
            install_command=RICH_INSTALL_COMMAND,
            original_import_error=e,
        ) from e
    return rich


def _format_value(value: WordValue) -> str:
    return "[italic]absent[/italic]" if value is None else f"{value:06X}"


def _row_style(record: DiffRecord) -> str:
    if record.is_gap:
        return "yellow"
    return "dim" if record.is_same else "red"


class RichDiffRenderer:
    """Render diff records as a Rich table.

    Parameters
    ----------
    title : str, optional
        Table title.
    width : int, default 100
        Console width used when rendering to a string.
    color : bool, default True
        Emit ANSI color codes in :meth:`render` output.

    """

    def __init__(self, title: str | None = None, width: int = 100, color: bool = True):
        """Initialize the Rich diff renderer."""
        self.title = title
        self.width = width
        self.color = color

    def build_table(self, records: Iterable[DiffRecord]) -> Any:
        """Build a ``rich.table.Table`` with one row per record."""
        rich = _import_rich()
        table = rich.table.Table(title=self.title)
        table.add_column("Start", style="cyan", no_wrap=True)
        table.add_column("End", style="cyan", no_wrap=True)
        table.add_column("Value 1", justify="right")
        table.add_column("Value 2", justify="right")

        for record in records:
            end = "" if isinstance(record, SingleDiff) else f"{record.end:06X}"
            table.add_row(
                f"{record.start:06X}",
                end,
                _format_value(record.value_1),
                _format_value(record.value_2),
                style=_row_style(record),
            )
        return table

    def render(self, records: Iterable[DiffRecord]) -> str:
        """Render the table to a string."""
        rich = _import_rich()
        buffer = io.StringIO()
        console = rich.console.Console(
            file=buffer,
            width=self.width,
            force_terminal=self.color,
            color_system="standard" if self.color else None,
        )
        console.print(self.build_table(records))
        return buffer.getvalue().rstrip("\n")
