from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BoundingBox(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_lat: float = Field(..., ge=-90.0, le=90.0)
    min_lon: float = Field(..., ge=-180.0, le=180.0)
    max_lat: float = Field(..., ge=-90.0, le=90.0)
    max_lon: float = Field(..., ge=-180.0, le=180.0)


class Trail(BaseModel):
    """A route record as returned by GET /api/trails."""

    name: str
    location: str
    distance_km: float
    elevation_m: Optional[float] = None
    difficulty: str
    provider: str
    dog_policy: str
    dog_notes: Optional[str] = None
    surface: str
    map_url: str

    # Sent by the backend; not rendered.
    id: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None


class Provider(BaseModel):
    name: str
    api_status: str
    notes: str
    website: str


class TrailCard(BaseModel):
    name: str
    location: str
    distance: str
    elevation: str
    difficulty: str
    provider: str
    dog_policy: str
    surface: str
    map_url: str
    map_label: str = "View map"
    warning: Optional[str] = None


class TrailListView(BaseModel):
    cards: List[TrailCard] = Field(default_factory=list)
    count_label: str
    error: Optional[str] = None


class ProviderItem(BaseModel):
    name: str
    status: str
    notes: str
    website: str
    target: str = "_blank"
    rel: str = "noreferrer"


class ProviderListView(BaseModel):
    items: List[ProviderItem] = Field(default_factory=list)
    error: Optional[str] = None
