# textshare/routers/share.py
# FastAPI router for link generation, link opening and recent history

from __future__ import annotations

from functools import lru_cache

from fastapi import APIRouter, Depends, Request, status

from textshare.config import settings
from textshare.constants import MSG_EMPTY_INPUT
from textshare.errors import EncodeFailure, ValidationError
from textshare.repositories.history_repository import HistoryStore
from textshare.repositories.local_storage_repository import LocalStorage
from textshare.schemas.share import (
    DecodedTextResponse,
    HistoryResponse,
    LinkCreateRequest,
    LinkCreateResponse,
    RouteRequest,
    RouteStateResponse,
    StatsRequest,
    TextStats,
)
from textshare.services.link_router import LinkRouter
from textshare.services.share_session import ShareSession
from textshare.utils.links import fragment_of
from textshare.utils.logger import log_info
from textshare.utils.text_stats import calculate_stats


router = APIRouter(tags=["Share"])


@lru_cache
def get_history_store() -> HistoryStore:
    store = HistoryStore(
        LocalStorage(),
        key=settings.HISTORY_KEY,
        capacity=settings.HISTORY_LIMIT,
    )
    store.load()
    return store


def get_origin(request: Request) -> str:
    """Configured public origin, else the origin the request came in on."""
    if settings.PUBLIC_ORIGIN:
        return settings.PUBLIC_ORIGIN.rstrip("/")
    return f"{request.url.scheme}://{request.url.netloc}"


@router.post("/links", response_model=LinkCreateResponse, status_code=status.HTTP_201_CREATED)
def create_link(
    payload: LinkCreateRequest,
    origin: str = Depends(get_origin),
    store: HistoryStore = Depends(get_history_store),
) -> LinkCreateResponse:
    """Turn text into a self-contained link and remember it in history."""
    if not payload.text.strip():
        raise ValidationError(MSG_EMPTY_INPUT)

    session = ShareSession(
        store,
        origin=origin,
        path=settings.APP_PATH,
        qr_service_url=settings.QR_SERVICE_URL,
        qr_size=settings.QR_SIZE,
    )
    session.set_text(payload.text)
    link = session.generate_link()
    if link is None:
        raise EncodeFailure()

    log_info(f"create_link: generated link for {len(payload.text)} chars")
    return LinkCreateResponse(
        token=fragment_of(link),
        link=link,
        qr_url=session.qr_code_url(),
        stats=TextStats(**session.stats),
        entry=session.generated_entry,
    )


@router.get("/links/{token}", response_model=DecodedTextResponse)
def open_link(token: str) -> DecodedTextResponse:
    """Decode a link token into the shared text."""
    link_router = LinkRouter(initial_fragment=token)
    if link_router.error is not None:
        raise link_router.error
    return DecodedTextResponse(
        mode=link_router.mode.value,
        text=link_router.text,
        stats=TextStats(**calculate_stats(link_router.text)),
    )


@router.post("/route", response_model=RouteStateResponse)
def route(payload: RouteRequest) -> RouteStateResponse:
    """Mode and text a page shows for the given fragment or URL."""
    link_router = LinkRouter()
    if payload.url is not None:
        state = link_router.on_url_change(payload.url)
    else:
        state = link_router.on_fragment_change(payload.fragment or "")
    return RouteStateResponse(
        mode=state.mode.value,
        text=state.text,
        fragment=state.fragment,
        error=state.error.message if state.error is not None else None,
    )


@router.get("/history", response_model=HistoryResponse)
def history(store: HistoryStore = Depends(get_history_store)) -> HistoryResponse:
    """Recently generated links, most recent first."""
    return HistoryResponse(items=list(store.entries))


@router.post("/stats", response_model=TextStats)
def stats(payload: StatsRequest) -> TextStats:
    return TextStats(**calculate_stats(payload.text))
