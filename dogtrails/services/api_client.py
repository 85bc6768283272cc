from __future__ import annotations

import logging
from typing import Any, List

import aiohttp

from dogtrails.config import get_settings
from dogtrails.models import Provider, Trail

logger = logging.getLogger(__name__)


def _endpoint(path: str) -> str:
    settings = get_settings()
    return f"{str(settings.api_base_url).rstrip('/')}/{path.lstrip('/')}"


async def _get_json(session: aiohttp.ClientSession, url: str) -> Any:
    settings = get_settings()
    headers = {"User-Agent": settings.user_agent}
    timeout = aiohttp.ClientTimeout(total=settings.http_timeout_s)

    logger.debug("GET %s", url)
    async with session.get(url, headers=headers, timeout=timeout) as resp:
        # Non-2xx raises ClientResponseError before the body is read.
        resp.raise_for_status()
        return await resp.json()


async def fetch_providers(session: aiohttp.ClientSession) -> List[Provider]:
    """List data providers (GET /api/providers)."""
    data = await _get_json(session, _endpoint(get_settings().providers_path))
    return [Provider.model_validate(item) for item in data]


async def fetch_trails(session: aiohttp.ClientSession, query: str) -> List[Trail]:
    """List trails matching an already-encoded query string (GET /api/trails?<query>)."""
    data = await _get_json(session, f"{_endpoint(get_settings().trails_path)}?{query}")
    return [Trail.model_validate(item) for item in data]
