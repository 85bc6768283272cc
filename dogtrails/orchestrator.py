from __future__ import annotations

import asyncio
import logging
from typing import Protocol

import aiohttp

from dogtrails.models import ProviderListView, TrailListView
from dogtrails.services.api_client import fetch_providers, fetch_trails
from dogtrails.services.query import FormFields, build_query
from dogtrails.services.rendering import (
    render_providers,
    render_providers_error,
    render_trails,
    render_trails_error,
)

logger = logging.getLogger(__name__)


class SearchForm(Protocol):
    def values(self) -> FormFields: ...


class SubmitEvent(Protocol):
    def prevent_default(self) -> None: ...


class ResultsView(Protocol):
    def show_trails(self, view: TrailListView) -> None: ...

    def show_providers(self, view: ProviderListView) -> None: ...


def _reason(err: Exception) -> str:
    if isinstance(err, aiohttp.ClientResponseError):
        return err.message or str(err.status)
    return str(err) or type(err).__name__


class TrailSearchController:
    """Fetches providers and trails and pushes rendered views to a display.

    The form and view handles are injected so the controller can drive any
    surface (the server-rendered page, the JSON API, or a test double).
    Only the most recently started trails search is applied to the view.
    """

    def __init__(self, session: aiohttp.ClientSession, form: SearchForm, view: ResultsView) -> None:
        self.session = session
        self.form = form
        self.view = view
        self._generation = 0

    async def load(self) -> None:
        await asyncio.gather(self.refresh_providers(), self.refresh_trails())

    async def handle_submit(self, event: SubmitEvent) -> None:
        event.prevent_default()
        await self.load()

    async def refresh_providers(self) -> None:
        try:
            providers = await fetch_providers(self.session)
        except aiohttp.ContentTypeError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning("Provider request failed: %s", _reason(e))
            self.view.show_providers(render_providers_error(_reason(e)))
            return
        self.view.show_providers(render_providers(providers))

    async def refresh_trails(self) -> None:
        self._generation += 1
        generation = self._generation
        query = build_query(self.form.values())

        try:
            trails = await fetch_trails(self.session, query)
            view = render_trails(trails)
        except aiohttp.ContentTypeError:
            # Non-JSON 2xx bodies propagate like other malformed payloads.
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning("Trail request failed (query=%r): %s", query, _reason(e))
            view = render_trails_error(_reason(e))

        if generation != self._generation:
            logger.debug("Dropping stale trail response for query=%r", query)
            return
        self.view.show_trails(view)
