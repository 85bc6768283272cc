from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple

import aiohttp
from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from dogtrails.config import get_settings
from dogtrails.logging_config import setup_logging
from dogtrails.models import ProviderListView, TrailListView
from dogtrails.orchestrator import TrailSearchController
from dogtrails.services.query import build_query
from dogtrails.services.regions import list_regions
from dogtrails.services.rendering import result_count_label

settings = get_settings()
setup_logging(settings.log_level)

app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Find dog-friendly running and walking trails.",
)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


# Options the search page preselects; sent with the first, unfiltered page load.
FORM_DEFAULTS: Dict[str, str] = {
    "effort": "steady",
    "length": "medium",
    "dog": "allowed_or_partial",
}


class QueryForm:
    """Form handle backed by the request's query string.

    Fields missing from the request fall back to ``defaults``.
    """

    def __init__(self, request: Request, defaults: Optional[Dict[str, str]] = None) -> None:
        items: List[Tuple[str, str]] = request.query_params.multi_items()
        present = {key for key, _ in items}
        fallback = [(key, value) for key, value in (defaults or {}).items() if key not in present]
        self._items = fallback + items

    def values(self) -> List[Tuple[str, str]]:
        return self._items


class PageState:
    """View handle that keeps the latest rendered views for the response."""

    def __init__(self) -> None:
        self.trails = TrailListView(count_label=result_count_label(0))
        self.providers = ProviderListView()

    def show_trails(self, view: TrailListView) -> None:
        self.trails = view

    def show_providers(self, view: ProviderListView) -> None:
        self.providers = view


_KM = r"^(\d+(\.\d+)?)?$"


def check_filters(
    region: Optional[str] = Query(None, description="Preset area, e.g. wellington"),
    effort: Optional[str] = Query(None, pattern="^(easy|steady|hard)?$"),
    length: Optional[str] = Query(None, pattern="^(short|medium|long)?$"),
    dog: Optional[str] = Query(None, pattern="^(allowed_only|allowed_or_partial|any)?$"),
    difficulty: Optional[str] = Query(None, pattern="^(easy|moderate|hard)?$"),
    min_km: Optional[str] = Query(None, pattern=_KM),
    max_km: Optional[str] = Query(None, pattern=_KM),
) -> None:
    # Validation only; handlers read the raw query string so unknown regions
    # and extra fields pass through untouched.
    return None


@app.get("/", response_class=HTMLResponse, tags=["Page"])
async def index(request: Request):
    form = QueryForm(request, defaults=FORM_DEFAULTS)
    state = PageState()
    async with aiohttp.ClientSession() as session:
        await TrailSearchController(session, form, state).load()

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": settings.app_name,
            "selected": dict(form.values()),
            "regions": sorted(list_regions()),
            "trails": state.trails,
            "providers": state.providers,
        },
    )


@app.get("/health", tags=["Healthcheck"])
async def health():
    return {"ok": True}


@app.get("/api/regions", tags=["Api Regions"])
async def api_regions():
    return {"regions": list_regions()}


@app.get("/api/query", tags=["Api Query"], dependencies=[Depends(check_filters)])
async def api_query(request: Request):
    return {"query": build_query(QueryForm(request).values())}


@app.get(
    "/api/search",
    response_model=TrailListView,
    tags=["Api Search"],
    dependencies=[Depends(check_filters)],
)
async def api_search(request: Request):
    state = PageState()
    async with aiohttp.ClientSession() as session:
        await TrailSearchController(session, QueryForm(request), state).refresh_trails()
    return state.trails


@app.get("/api/providers", response_model=ProviderListView, tags=["Api Providers"])
async def api_providers(request: Request):
    state = PageState()
    async with aiohttp.ClientSession() as session:
        await TrailSearchController(session, QueryForm(request), state).refresh_providers()
    return state.providers
