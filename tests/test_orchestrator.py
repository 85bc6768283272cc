from __future__ import annotations

import asyncio

import aiohttp
import pytest

from dogtrails.models import Provider, Trail
from dogtrails.orchestrator import TrailSearchController


def make_trail(name: str, **overrides) -> Trail:
    data = {
        "name": name,
        "location": "Auckland",
        "distance_km": 12.0,
        "elevation_m": 520,
        "difficulty": "hard",
        "provider": "OpenStreetMap",
        "dog_policy": "allowed",
        "surface": "Dirt",
        "map_url": "https://www.openstreetmap.org/",
    }
    data.update(overrides)
    return Trail(**data)


PROVIDER = Provider(
    name="OpenStreetMap Overpass",
    api_status="Public API",
    notes="Uses public OSM data.",
    website="https://overpass-api.de",
)


class Form:
    def __init__(self, fields) -> None:
        self.fields = fields

    def values(self):
        return self.fields


class View:
    def __init__(self) -> None:
        self.trails = []
        self.providers = []

    def show_trails(self, view) -> None:
        self.trails.append(view)

    def show_providers(self, view) -> None:
        self.providers.append(view)


class Event:
    def __init__(self) -> None:
        self.prevented = False

    def prevent_default(self) -> None:
        self.prevented = True


def http_error(status: int, reason: str) -> aiohttp.ClientResponseError:
    return aiohttp.ClientResponseError(None, (), status=status, message=reason)


def patch_api(monkeypatch, trails=None, providers=None, queries=None):
    async def fake_fetch_trails(session, query):
        if queries is not None:
            queries.append(query)
        if isinstance(trails, Exception):
            raise trails
        return trails or []

    async def fake_fetch_providers(session):
        if isinstance(providers, Exception):
            raise providers
        return providers or []

    monkeypatch.setattr("dogtrails.orchestrator.fetch_trails", fake_fetch_trails)
    monkeypatch.setattr("dogtrails.orchestrator.fetch_providers", fake_fetch_providers)


def test_load_renders_trails_and_providers(monkeypatch):
    queries = []
    patch_api(monkeypatch, trails=[make_trail("Forest Ridge")], providers=[PROVIDER], queries=queries)
    view = View()

    controller = TrailSearchController(object(), Form({"region": "wellington", "dog": "any"}), view)
    asyncio.run(controller.load())

    assert queries == [
        "min_lat=-41.35&min_lon=174.72&max_lat=-41.24&max_lon=174.82&dog=any"
    ]
    assert view.trails[-1].count_label == "1 route"
    assert view.trails[-1].cards[0].name == "Forest Ridge"
    assert view.providers[-1].items[0].name == "OpenStreetMap Overpass"


def test_trails_http_error_shows_warning(monkeypatch):
    patch_api(monkeypatch, trails=http_error(502, "Bad Gateway"), providers=[PROVIDER])
    view = View()

    asyncio.run(TrailSearchController(object(), Form({}), view).load())

    result = view.trails[-1]
    assert result.error == "Could not load live trails. Bad Gateway"
    assert result.count_label == "0 routes"
    assert result.cards == []
    # providers are unaffected
    assert view.providers[-1].error is None


def test_trails_connection_error_shows_warning(monkeypatch):
    patch_api(monkeypatch, trails=aiohttp.ClientConnectionError("connection refused"))
    view = View()

    asyncio.run(TrailSearchController(object(), Form({}), view).refresh_trails())

    assert view.trails[-1].error == "Could not load live trails. connection refused"
    assert view.trails[-1].count_label == "0 routes"


def test_trails_timeout_shows_warning(monkeypatch):
    patch_api(monkeypatch, trails=asyncio.TimeoutError())
    view = View()

    asyncio.run(TrailSearchController(object(), Form({}), view).refresh_trails())

    assert view.trails[-1].error == "Could not load live trails. TimeoutError"


def test_providers_error_shows_warning(monkeypatch):
    patch_api(monkeypatch, trails=[], providers=http_error(503, "Service Unavailable"))
    view = View()

    asyncio.run(TrailSearchController(object(), Form({}), view).load())

    assert view.providers[-1].items == []
    assert view.providers[-1].error == "Could not load providers. Service Unavailable"
    assert view.trails[-1].count_label == "0 routes"
    assert view.trails[-1].error is None


def test_submit_prevents_default_and_searches(monkeypatch):
    queries = []
    patch_api(monkeypatch, trails=[make_trail("A"), make_trail("B")], queries=queries)
    view = View()
    event = Event()

    asyncio.run(TrailSearchController(object(), Form({"effort": "hard"}), view).handle_submit(event))

    assert event.prevented is True
    assert queries == ["effort=hard"]
    assert view.trails[-1].count_label == "2 routes"


def test_stale_trail_response_is_dropped(monkeypatch):
    async def scenario():
        gate = asyncio.Event()

        async def fake_fetch_trails(session, query):
            if query == "length=short":
                await gate.wait()
                return [make_trail("Old")]
            return [make_trail("New")]

        monkeypatch.setattr("dogtrails.orchestrator.fetch_trails", fake_fetch_trails)

        form = Form({"length": "short"})
        view = View()
        controller = TrailSearchController(object(), form, view)

        first = asyncio.create_task(controller.refresh_trails())
        await asyncio.sleep(0)
        form.fields = {"length": "long"}
        await controller.refresh_trails()
        gate.set()
        await first
        return view

    view = asyncio.run(scenario())

    assert len(view.trails) == 1
    assert view.trails[0].cards[0].name == "New"


def test_non_json_success_body_propagates(monkeypatch):
    bad_body = aiohttp.ContentTypeError(None, (), status=200, message="Attempt to decode JSON")
    patch_api(monkeypatch, trails=bad_body, providers=bad_body)
    view = View()
    controller = TrailSearchController(object(), Form({}), view)

    with pytest.raises(aiohttp.ContentTypeError):
        asyncio.run(controller.refresh_trails())
    with pytest.raises(aiohttp.ContentTypeError):
        asyncio.run(controller.refresh_providers())

    assert view.trails == []
    assert view.providers == []
