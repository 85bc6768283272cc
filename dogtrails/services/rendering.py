from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from dogtrails.models import (
    Provider,
    ProviderItem,
    ProviderListView,
    Trail,
    TrailCard,
    TrailListView,
)

ALLOWED_POLICY = "allowed"
RESTRICTED_FALLBACK = "Dog access has restrictions."
TRAILS_ERROR_PREFIX = "Could not load live trails."
PROVIDERS_ERROR_PREFIX = "Could not load providers."


def format_label(value: str) -> str:
    return value.replace("_", " ")


def format_distance(distance_km: float) -> str:
    # Half-up on the exact binary value: 2.25 -> 2.3, 1.05 -> 1.1 (stored as 1.0500000000000000444).
    rounded = Decimal(distance_km).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{rounded} km"


def format_elevation(elevation_m: Optional[float]) -> str:
    if elevation_m is None:
        return "Unknown"
    return f"{int(round(elevation_m))} m gain"


def result_count_label(count: int) -> str:
    return f"{count} route{'' if count == 1 else 's'}"


def dog_warning(trail: Trail) -> Optional[str]:
    """Warning text for restricted trails; None when dogs are allowed."""
    if trail.dog_policy == ALLOWED_POLICY:
        return None
    if trail.dog_notes is not None:
        return trail.dog_notes
    return RESTRICTED_FALLBACK


def render_trail(trail: Trail) -> TrailCard:
    return TrailCard(
        name=trail.name,
        location=trail.location,
        distance=format_distance(trail.distance_km),
        elevation=format_elevation(trail.elevation_m),
        difficulty=format_label(trail.difficulty),
        provider=trail.provider,
        dog_policy=f"Dog policy: {format_label(trail.dog_policy)}",
        surface=f"Surface: {trail.surface}",
        map_url=trail.map_url,
        warning=dog_warning(trail),
    )


def render_trails(trails: Iterable[Trail]) -> TrailListView:
    cards = [render_trail(trail) for trail in trails]
    return TrailListView(cards=cards, count_label=result_count_label(len(cards)))


def render_trails_error(reason: str) -> TrailListView:
    return TrailListView(
        cards=[],
        count_label=result_count_label(0),
        error=f"{TRAILS_ERROR_PREFIX} {reason}",
    )


def render_provider(provider: Provider) -> ProviderItem:
    return ProviderItem(
        name=provider.name,
        status=provider.api_status,
        notes=provider.notes,
        website=provider.website,
    )


def render_providers(providers: Iterable[Provider]) -> ProviderListView:
    return ProviderListView(items=[render_provider(p) for p in providers])


def render_providers_error(reason: str) -> ProviderListView:
    return ProviderListView(items=[], error=f"{PROVIDERS_ERROR_PREFIX} {reason}")
