"""Grid rows for tabular Query Service results."""

from dataclasses import dataclass, field
from typing import Any

from src.models.schemas import TableData


@dataclass
class TableView:
    """Column and row dicts in the shape ``ui.table`` expects."""

    columns: list[dict[str, Any]] = field(default_factory=list)
    rows: list[dict[str, Any]] = field(default_factory=list)


def _field_name(index: int) -> str:
    return f"c{index}"


def build_table(table: TableData) -> TableView:
    """Shape a TableData for display.

    Rows are not required to match the column count: a short row shows
    the cells it has, a long row adds untitled columns for the extras.
    """
    width = max([len(table.columns), *(len(row) for row in table.rows)], default=0)

    columns = []
    for i in range(width):
        label = table.columns[i] if i < len(table.columns) else ""
        columns.append({"name": _field_name(i), "label": label, "field": _field_name(i), "align": "left"})

    rows = []
    for row_index, row in enumerate(table.rows):
        cells = {_field_name(i): cell for i, cell in enumerate(row)}
        rows.append({"_row": row_index, **cells})

    return TableView(columns=columns, rows=rows)
