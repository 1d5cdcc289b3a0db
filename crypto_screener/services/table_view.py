from __future__ import annotations

from crypto_screener.schemas.screener import ColumnView, RowView, ScreenerSnapshot
from crypto_screener.schemas.ticker import (
    FieldKey,
    FloatValue,
    IntegerValue,
    TextValue,
    TickerRecord,
)
from crypto_screener.services.screener_state import ScreenerSession
from crypto_screener.services.sorting import sort_order

COLUMNS: list[tuple[FieldKey, str]] = [
    (FieldKey.SYMBOL, "Symbol"),
    (FieldKey.NAME, "Name"),
    (FieldKey.PRICE, "Price (USD)"),
    (FieldKey.PERCENT_CHANGE_1H, "1h %"),
    (FieldKey.PERCENT_CHANGE_24H, "24h %"),
    (FieldKey.PERCENT_CHANGE_7D, "7d %"),
    (FieldKey.VOLUME_24H, "Volume ($)"),
]

DEFAULT_NAME_WIDTH = 30


def _fixed(value: TextValue | IntegerValue | FloatValue, digits: int) -> str:
    if isinstance(value, TextValue):
        return value.display()
    return f"{value.as_float():.{digits}f}"


def format_cell(record: TickerRecord, field: FieldKey, name_width: int = DEFAULT_NAME_WIDTH) -> str:
    value = record.value(field)
    if field == FieldKey.NAME:
        return value.display()[:name_width]
    if field == FieldKey.PRICE:
        return _fixed(value, 6)
    if field == FieldKey.VOLUME_24H:
        return _fixed(value, 2)
    return value.display()


def build_snapshot(session: ScreenerSession, name_width: int = DEFAULT_NAME_WIDTH) -> ScreenerSnapshot:
    state = session.sort_state()
    columns = [
        ColumnView(key=key, label=label, sort_order=sort_order(state, key))
        for key, label in COLUMNS
    ]
    rows = [
        RowView(
            row_id=record.row_id,
            cells={key.value: format_cell(record, key, name_width) for key, _ in COLUMNS},
            selected=session.selected_fields(record.row_id),
        )
        for record in session.records()
    ]
    return ScreenerSnapshot(
        loaded=session.initialized,
        error=session.last_error,
        sort=state,
        columns=columns,
        rows=rows,
    )
