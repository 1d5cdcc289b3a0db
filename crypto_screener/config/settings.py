import os
from functools import lru_cache

from pydantic import BaseModel, Field, field_validator

from crypto_screener.schemas.ticker import FieldKey, resolve_field_key


class Settings(BaseModel):
    SCREENER_API_URL: str = "https://api.coinlore.net/api"
    SCREENER_REQUEST_TIMEOUT_SEC: float = Field(default=5.0, gt=0)
    SCREENER_DEFAULT_SORT_FIELD: FieldKey | None = FieldKey.VOLUME_24H
    SCREENER_NAME_WIDTH: int = Field(default=30, ge=1)

    @field_validator("SCREENER_DEFAULT_SORT_FIELD", mode="before")
    @classmethod
    def parse_sort_field(cls, value):
        if value is None or isinstance(value, FieldKey):
            return value
        if not str(value).strip():
            return None
        key = resolve_field_key(value)
        if key is None:
            raise ValueError(f"unknown sort field: {value}")
        return key

    @classmethod
    def from_env(cls) -> "Settings":
        raw = {
            "SCREENER_API_URL": os.getenv("SCREENER_API_URL"),
            "SCREENER_REQUEST_TIMEOUT_SEC": os.getenv("SCREENER_REQUEST_TIMEOUT_SEC"),
            "SCREENER_DEFAULT_SORT_FIELD": os.getenv("SCREENER_DEFAULT_SORT_FIELD"),
            "SCREENER_NAME_WIDTH": os.getenv("SCREENER_NAME_WIDTH"),
        }
        # unset env vars fall back to model defaults; "" still means "no default sort"
        return cls.model_validate({k: v for k, v in raw.items() if v is not None})


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
