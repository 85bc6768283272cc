from __future__ import annotations

from typing import Iterable, List, Mapping, Tuple, Union
from urllib.parse import urlencode

from dogtrails.services.regions import BBOX_KEYS, resolve_region

REGION_FIELD = "region"

FormFields = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


def _items(fields: FormFields) -> List[Tuple[str, str]]:
    if isinstance(fields, Mapping):
        return list(fields.items())
    return list(fields)


def build_query_params(fields: FormFields) -> List[Tuple[str, str]]:
    """Turn form field values into trail query parameters.

    Empty values are dropped. A known ``region`` is replaced by its four
    bounding-box parameters (emitted first); an unknown one is dropped.
    Repeated keys keep their last value at the position of the first.
    """
    items = _items(fields)
    params: dict[str, str] = {}

    region = next((value for key, value in items if key == REGION_FIELD), None)
    bbox = resolve_region(region)
    if bbox is not None:
        for key in BBOX_KEYS:
            params[key] = str(getattr(bbox, key))

    for key, value in items:
        if key == REGION_FIELD:
            continue
        if value:
            params[key] = str(value)

    return list(params.items())


def build_query(fields: FormFields) -> str:
    return urlencode(build_query_params(fields))
