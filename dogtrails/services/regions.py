from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from dogtrails.models import BoundingBox

# Preset areas offered by the region picker. Read-only for the life of the process.
REGION_BBOXES: Mapping[str, BoundingBox] = MappingProxyType(
    {
        "wellington": BoundingBox(min_lat=-41.35, min_lon=174.72, max_lat=-41.24, max_lon=174.82),
        "auckland": BoundingBox(min_lat=-36.93, min_lon=174.63, max_lat=-36.77, max_lon=174.84),
        "queenstown": BoundingBox(min_lat=-45.08, min_lon=168.56, max_lat=-44.95, max_lon=168.79),
        "christchurch": BoundingBox(min_lat=-43.60, min_lon=172.50, max_lat=-43.45, max_lon=172.77),
    }
)

BBOX_KEYS = ("min_lat", "min_lon", "max_lat", "max_lon")


def resolve_region(region: Optional[str]) -> Optional[BoundingBox]:
    """Bounding box for a region id, or None when the id is empty or unknown."""
    if not region:
        return None
    return REGION_BBOXES.get(region)


def list_regions() -> dict[str, dict[str, float]]:
    return {name: bbox.model_dump() for name, bbox in REGION_BBOXES.items()}
