from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class HistoryEntry(BaseModel):
    """A previously generated link. Never mutated after creation."""

    # strict: persisted blobs with mistyped fields are rejected, not coerced
    model_config = ConfigDict(frozen=True, strict=True)

    id: int
    preview: str
    date: str
    link: str


class TextStats(BaseModel):
    chars: int
    words: int
    reading_time: str


class LinkCreateRequest(BaseModel):
    text: str = Field(..., description="Text to embed in the link")


class LinkCreateResponse(BaseModel):
    token: str
    link: str
    qr_url: str
    stats: TextStats
    entry: HistoryEntry


class DecodedTextResponse(BaseModel):
    mode: str
    text: str
    stats: TextStats


class RouteRequest(BaseModel):
    """Fragment-change event, given either as the fragment or as the full URL."""

    fragment: Optional[str] = None
    url: Optional[str] = None

    @model_validator(mode='after')
    def check_source(self) -> 'RouteRequest':
        if self.fragment is not None and self.url is not None:
            raise ValueError("Validation Error: pass either 'fragment' or 'url', not both")
        return self


class RouteStateResponse(BaseModel):
    mode: str
    text: str
    fragment: str
    error: Optional[str] = None


class HistoryResponse(BaseModel):
    items: List[HistoryEntry]


class StatsRequest(BaseModel):
    text: str = ""
