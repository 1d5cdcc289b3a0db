from typing import Literal

from pydantic import BaseModel

from crypto_screener.schemas.ticker import FieldKey

SortOrder = Literal["ascending", "descending", "none"]


class SortState(BaseModel):
    active_field: FieldKey | None = None
    ascending: bool = True


class ColumnView(BaseModel):
    key: FieldKey
    label: str
    sort_order: SortOrder


class RowView(BaseModel):
    row_id: str
    cells: dict[str, str]
    selected: list[str]


class ScreenerSnapshot(BaseModel):
    loaded: bool
    error: str | None = None
    sort: SortState
    columns: list[ColumnView]
    rows: list[RowView]


class CellToggleRequest(BaseModel):
    row_id: str
    field: str
