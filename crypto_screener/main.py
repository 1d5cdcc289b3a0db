from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from crypto_screener.api.routes import router
from crypto_screener.config.settings import get_settings
from crypto_screener.integrations.coinlore_rest import CoinloreRestClient
from crypto_screener.schemas.ticker import FieldKey
from crypto_screener.services.screener_state import ScreenerSession
from crypto_screener.services.sorting import initial_sort_state


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.get_settings()
    client = app.state.ticker_client
    if isinstance(client, CoinloreRestClient):
        client.base_url = (settings.SCREENER_API_URL or client.DEFAULT_BASE_URL).rstrip('/')
        client.timeout_sec = settings.SCREENER_REQUEST_TIMEOUT_SEC

    session = app.state.screener_session
    if not session.initialized:
        session.reset_sort(initial_sort_state(settings.SCREENER_DEFAULT_SORT_FIELD))

    print(f"[SCREENER][app_start] api_url={settings.SCREENER_API_URL}", flush=True)
    try:
        yield
    finally:
        print("[SCREENER][app_stop]", flush=True)


app = FastAPI(title="Crypto Screener", version="0.1.0", lifespan=lifespan)
app.include_router(router, prefix="/v1")

# NOTE: settings are read lazily so app import does not depend on env during tests.
app.state.get_settings = get_settings
app.state.ticker_client = CoinloreRestClient()
app.state.screener_session = ScreenerSession(initial_sort_state(FieldKey.VOLUME_24H))
