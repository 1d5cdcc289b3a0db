from __future__ import annotations

import threading
from typing import Any, Protocol

import requests

from crypto_screener.errors import TickerFeedError
from crypto_screener.schemas.screener import SortState
from crypto_screener.schemas.ticker import FetchFailure, FieldKey, TickerRecord, resolve_field_key
from crypto_screener.services.normalizer import normalize_many
from crypto_screener.services.selection import Cell, CellSelection
from crypto_screener.services.sorting import next_sort_state, sort_records


class TickerFeed(Protocol):
    def get_tickers(self) -> list[dict]: ...


class ScreenerSession:
    """Loaded records, sort state and highlighted cells for one screener."""

    def __init__(self, sort_state: SortState | None = None) -> None:
        self._lock = threading.Lock()
        # serializes loads so concurrent first requests share one fetch
        self._load_lock = threading.Lock()
        self._records: list[TickerRecord] = []
        self._sort_state = sort_state or SortState()
        self._selection = CellSelection()
        self._initialized = False
        self._last_error: str | None = None

    @property
    def initialized(self) -> bool:
        with self._lock:
            return self._initialized

    @property
    def last_error(self) -> str | None:
        return self._last_error

    def apply_fetch_result(self, result: list[Any] | FetchFailure) -> bool:
        if isinstance(result, FetchFailure):
            with self._lock:
                self._last_error = result.reason
            print(f"[SCREENER][fetch_failed] reason={result.reason}", flush=True)
            return False

        records = normalize_many(result)
        with self._lock:
            self._records = sort_records(
                records, self._sort_state.active_field, self._sort_state.ascending
            )
            self._last_error = None
        print(f"[SCREENER][fetch_ok] records={len(records)}", flush=True)
        return True

    def refresh(self, feed: TickerFeed) -> bool:
        with self._load_lock:
            return self._load(feed)

    def ensure_loaded(self, feed: TickerFeed) -> bool:
        with self._load_lock:
            with self._lock:
                if self._initialized:
                    return self._last_error is None
            return self._load(feed)

    def _load(self, feed: TickerFeed) -> bool:
        try:
            result: list[Any] | FetchFailure = feed.get_tickers()
        except (requests.RequestException, TickerFeedError, ValueError) as exc:
            result = FetchFailure(reason=f"Failed to fetch data: {exc}")
        with self._lock:
            self._initialized = True
        return self.apply_fetch_result(result)

    def sort_by(self, field: FieldKey | str) -> SortState:
        requested = getattr(field, "value", field)
        with self._lock:
            state = next_sort_state(self._sort_state, field)
            if state is not self._sort_state:
                self._sort_state = state
                self._records = sort_records(self._records, state.active_field, state.ascending)
            print(
                "[SCREENER][sort] "
                f"requested={requested} active_field={state.active_field and state.active_field.value} "
                f"ascending={int(state.ascending)}",
                flush=True,
            )
            return state.model_copy()

    def reset_sort(self, state: SortState) -> None:
        with self._lock:
            self._sort_state = state.model_copy()
            self._records = sort_records(self._records, state.active_field, state.ascending)

    def toggle_cell(self, row_id: str, field: FieldKey | str) -> bool:
        key = resolve_field_key(field)
        if key is None:
            raise ValueError("UNKNOWN_FIELD")
        with self._lock:
            return self._selection.toggle(row_id, key.value)

    def is_selected(self, row_id: str, field: FieldKey) -> bool:
        with self._lock:
            return self._selection.is_selected(row_id, field.value)

    def selected_fields(self, row_id: str) -> list[str]:
        with self._lock:
            return self._selection.fields_for(row_id)

    def selected_cells(self) -> list[Cell]:
        with self._lock:
            return self._selection.selected()

    def records(self) -> list[TickerRecord]:
        with self._lock:
            return list(self._records)

    def sort_state(self) -> SortState:
        with self._lock:
            return self._sort_state.model_copy()
