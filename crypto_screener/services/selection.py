from __future__ import annotations

Cell = tuple[str, str]


def toggle_cell(selection: frozenset[Cell], row_id: str, field_key: str) -> frozenset[Cell]:
    cell = (row_id, field_key)
    if cell in selection:
        return selection - {cell}
    return selection | {cell}


class CellSelection:
    """Highlighted (row_id, field_key) cells for the lifetime of a session."""

    def __init__(self) -> None:
        self._cells: frozenset[Cell] = frozenset()

    def toggle(self, row_id: str, field_key: str) -> bool:
        self._cells = toggle_cell(self._cells, row_id, field_key)
        return (row_id, field_key) in self._cells

    def is_selected(self, row_id: str, field_key: str) -> bool:
        return (row_id, field_key) in self._cells

    def selected(self) -> list[Cell]:
        return sorted(self._cells)

    def fields_for(self, row_id: str) -> list[str]:
        return sorted(field for rid, field in self._cells if rid == row_id)

    def clear(self) -> None:
        self._cells = frozenset()
