from fastapi import APIRouter, HTTPException, Request

from crypto_screener.schemas.screener import CellToggleRequest, ScreenerSnapshot, SortState
from crypto_screener.services.table_view import build_snapshot

router = APIRouter()


def _snapshot(request: Request) -> ScreenerSnapshot:
    settings = request.app.state.get_settings()
    return build_snapshot(request.app.state.screener_session, name_width=settings.SCREENER_NAME_WIDTH)


@router.get('/screener', response_model=ScreenerSnapshot)
def get_screener(request: Request):
    session = request.app.state.screener_session
    session.ensure_loaded(request.app.state.ticker_client)
    return _snapshot(request)


@router.post('/screener/refresh', response_model=ScreenerSnapshot)
def refresh_screener(request: Request):
    session = request.app.state.screener_session
    if not session.refresh(request.app.state.ticker_client):
        raise HTTPException(status_code=502, detail='TICKER_FEED_UNAVAILABLE')
    return _snapshot(request)


@router.get('/screener/sort', response_model=SortState)
def get_sort_state(request: Request):
    return request.app.state.screener_session.sort_state()


@router.post('/screener/sort/{field}', response_model=ScreenerSnapshot)
def sort_screener(field: str, request: Request):
    request.app.state.screener_session.sort_by(field)
    return _snapshot(request)


@router.post('/screener/cells/toggle')
def toggle_cell(req: CellToggleRequest, request: Request):
    session = request.app.state.screener_session
    try:
        selected = session.toggle_cell(req.row_id, req.field)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail='UNKNOWN_FIELD') from exc
    return {'row_id': req.row_id, 'field': req.field, 'selected': selected}
