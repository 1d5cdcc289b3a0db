"""Column sort for ticker records.

Descending order is the ascending result reversed, not a sort with an
inverted comparator. The two differ when records tie on the active field:
reversal also reverses the relative order of tied records.
"""
from __future__ import annotations

import math
from typing import Callable, Iterable

from crypto_screener.schemas.screener import SortOrder, SortState
from crypto_screener.schemas.ticker import TEXT_FIELDS, FieldKey, TickerRecord, resolve_field_key
from crypto_screener.services.normalizer import numeric_value


def _text_key(field: FieldKey) -> Callable[[TickerRecord], str]:
    def key(record: TickerRecord) -> str:
        return record.value(field).display().lower()

    return key


def _numeric_key(field: FieldKey) -> Callable[[TickerRecord], float]:
    def key(record: TickerRecord) -> float:
        value = numeric_value(record.value(field))
        # NaN has no ordering; treat it like missing data
        return 0.0 if math.isnan(value) else value

    return key


_SORT_KEYS: dict[FieldKey, Callable[[TickerRecord], object]] = {
    field: _text_key(field) if field in TEXT_FIELDS else _numeric_key(field)
    for field in FieldKey
}


def sort_records(
    records: Iterable[TickerRecord],
    active_field: FieldKey | str | None,
    ascending: bool,
) -> list[TickerRecord]:
    rows = list(records)
    field = resolve_field_key(active_field)
    if field is None:
        return rows

    rows.sort(key=_SORT_KEYS[field])
    if not ascending:
        rows.reverse()
    return rows


def default_ascending(field: FieldKey) -> bool:
    return field in TEXT_FIELDS


def next_sort_state(state: SortState, field: FieldKey | str) -> SortState:
    """Re-selecting the active column flips direction; a new column starts at its default."""
    key = resolve_field_key(field)
    if key is None:
        return state
    if state.active_field == key:
        return SortState(active_field=key, ascending=not state.ascending)
    return SortState(active_field=key, ascending=default_ascending(key))


def sort_order(state: SortState, field: FieldKey) -> SortOrder:
    if state.active_field != field:
        return "none"
    return "ascending" if state.ascending else "descending"


def initial_sort_state(field: FieldKey | str | None) -> SortState:
    """Pre-selected default column, descending; no column means input order."""
    key = resolve_field_key(field)
    if key is None:
        return SortState()
    return SortState(active_field=key, ascending=False)
