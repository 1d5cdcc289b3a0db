from __future__ import annotations

from typing import Any, Iterable, Mapping

from crypto_screener.schemas.ticker import (
    EMPTY_TEXT,
    FieldValue,
    FloatValue,
    IntegerValue,
    TextValue,
    TickerRecord,
    parse_float,
)

# inbound keys tried in order; the first present, non-null one wins
_PRICE_KEYS = ("price_usd", "price", "current_price")
_CHANGE_1H_KEYS = ("percent_change_1h", "percentChange1h")
_CHANGE_24H_KEYS = ("percent_change_24h", "percentChange24h")
_CHANGE_7D_KEYS = ("percent_change_7d", "percentChange7d")
_VOLUME_KEYS = ("volume24", "total_volume", "volume24h")


def normalize_value(raw: Any) -> FieldValue:
    """Convert a raw JSON scalar into a typed field value. Never raises."""
    if isinstance(raw, bool) or raw is None:
        return EMPTY_TEXT
    if isinstance(raw, str):
        if not raw:
            return EMPTY_TEXT
        parsed = parse_float(raw)
        if parsed is None:
            return TextValue(value=raw)
        return FloatValue(value=parsed, text=raw)
    if isinstance(raw, int):
        return IntegerValue(value=raw)
    if isinstance(raw, float):
        return FloatValue(value=raw)
    return EMPTY_TEXT


def normalize_text(raw: Any) -> TextValue:
    """Identifier fields keep their text as-is, even when it looks numeric."""
    if isinstance(raw, bool) or raw is None:
        return EMPTY_TEXT
    if isinstance(raw, (str, int, float)):
        return TextValue(value=str(raw))
    return EMPTY_TEXT


def numeric_value(value: TextValue | IntegerValue | FloatValue | None) -> float:
    if value is None:
        return 0.0
    return value.as_float()


def _first_present(raw_record: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        value = raw_record.get(key)
        if value is not None:
            return value
    return None


def normalize(raw_record: Any) -> TickerRecord:
    if not isinstance(raw_record, Mapping):
        return TickerRecord()

    symbol = normalize_text(raw_record.get("symbol"))
    row_id = normalize_text(raw_record.get("id")).value or symbol.value

    return TickerRecord(
        row_id=row_id,
        rank=normalize_value(raw_record.get("rank")),
        symbol=symbol,
        name=normalize_text(raw_record.get("name")),
        price=normalize_value(_first_present(raw_record, _PRICE_KEYS)),
        percent_change_1h=normalize_value(_first_present(raw_record, _CHANGE_1H_KEYS)),
        percent_change_24h=normalize_value(_first_present(raw_record, _CHANGE_24H_KEYS)),
        percent_change_7d=normalize_value(_first_present(raw_record, _CHANGE_7D_KEYS)),
        volume_24h=normalize_value(_first_present(raw_record, _VOLUME_KEYS)),
    )


def normalize_many(raw_records: Iterable[Any]) -> list[TickerRecord]:
    return [normalize(row) for row in raw_records]
