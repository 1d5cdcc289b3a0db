from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


def parse_float(text: str) -> float | None:
    """Strict decimal parse: no surrounding whitespace, no digit separators."""
    if not text or text != text.strip() or "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


class TextValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    value: str = ""

    def as_float(self) -> float:
        parsed = parse_float(self.value)
        return 0.0 if parsed is None else parsed

    def display(self) -> str:
        return self.value


class IntegerValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["integer"] = "integer"
    value: int

    def as_float(self) -> float:
        try:
            return float(self.value)
        except OverflowError:
            return float("inf") if self.value > 0 else float("-inf")

    def display(self) -> str:
        return str(self.value)


class FloatValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["float"] = "float"
    value: float
    # source text when the number arrived as a JSON string
    text: str | None = None

    def as_float(self) -> float:
        return self.value

    def display(self) -> str:
        if self.text is not None:
            return self.text
        return str(self.value)


FieldValue = Annotated[Union[TextValue, IntegerValue, FloatValue], Field(discriminator="kind")]

EMPTY_TEXT = TextValue()


class FieldKey(str, Enum):
    SYMBOL = "symbol"
    NAME = "name"
    PRICE = "price"
    PERCENT_CHANGE_1H = "percentChange1h"
    PERCENT_CHANGE_24H = "percentChange24h"
    PERCENT_CHANGE_7D = "percentChange7d"
    VOLUME_24H = "volume24h"


TEXT_FIELDS = frozenset({FieldKey.SYMBOL, FieldKey.NAME})

# raw API column names accepted wherever a field key is expected
_FIELD_KEY_ALIASES = {
    "price_usd": FieldKey.PRICE,
    "percent_change_1h": FieldKey.PERCENT_CHANGE_1H,
    "percent_change_24h": FieldKey.PERCENT_CHANGE_24H,
    "percent_change_7d": FieldKey.PERCENT_CHANGE_7D,
    "volume24": FieldKey.VOLUME_24H,
    "total_volume": FieldKey.VOLUME_24H,
}


def resolve_field_key(raw: FieldKey | str | None) -> FieldKey | None:
    if raw is None:
        return None
    if isinstance(raw, FieldKey):
        return raw
    key = str(raw).strip()
    try:
        return FieldKey(key)
    except ValueError:
        return _FIELD_KEY_ALIASES.get(key)


class TickerRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    row_id: str = ""
    rank: FieldValue = EMPTY_TEXT
    symbol: FieldValue = EMPTY_TEXT
    name: FieldValue = EMPTY_TEXT
    price: FieldValue = EMPTY_TEXT
    percent_change_1h: FieldValue = EMPTY_TEXT
    percent_change_24h: FieldValue = EMPTY_TEXT
    percent_change_7d: FieldValue = EMPTY_TEXT
    volume_24h: FieldValue = EMPTY_TEXT

    def value(self, field: FieldKey) -> TextValue | IntegerValue | FloatValue:
        return getattr(self, _RECORD_ATTRS[field])


_RECORD_ATTRS = {
    FieldKey.SYMBOL: "symbol",
    FieldKey.NAME: "name",
    FieldKey.PRICE: "price",
    FieldKey.PERCENT_CHANGE_1H: "percent_change_1h",
    FieldKey.PERCENT_CHANGE_24H: "percent_change_24h",
    FieldKey.PERCENT_CHANGE_7D: "percent_change_7d",
    FieldKey.VOLUME_24H: "volume_24h",
}


class FetchFailure(BaseModel):
    reason: str
