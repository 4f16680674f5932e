"""
GristClient — Appels HTTP authentifiés vers l'API Grist.

GET uniquement. Bearer token fourni par l'hôte (secret opaque).

Design decisions :
- Async httpx (les appels sont I/O bound)
- Tout échec (transport, status != 200, JSON illisible, payload inattendu)
  devient UNE FetchError au message traduit et générique
- Le détail (status, body tronqué) part dans les logs, jamais vers l'hôte
- Pas de retry : c'est à l'hôte de relancer
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from connectors.base import FetchError
from connectors.cache import NullCache, ResponseCache
from connectors.utils import truncate
from services.config import Settings, get_settings
from services.i18n import translate

logger = logging.getLogger("catalog.connectors.catalog.grist.client")


class GristClient:
    """Client HTTP partagé par la navigation et le téléchargement.

    Usage :
        async with GristClient() as client:
            orgs = await client.get_json("https://grist.example.com/api/orgs", api_key)
    """

    CONNECTOR_NAME = "grist"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        cache: Optional[ResponseCache] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        if cache is None:
            cache = (
                ResponseCache(ttl_seconds=self.settings.cache_ttl_seconds)
                if self.settings.cache_enabled
                else NullCache()
            )
        self.cache = cache
        self._transport = transport
        self._http: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "GristClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._http:
            await self._http.aclose()
            self._http = None

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.request_timeout_seconds),
                transport=self._transport,
            )
        return self._http

    @staticmethod
    def _headers(api_key: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {api_key}"}

    def _fetch_error(self, raw_error: Optional[Exception] = None) -> FetchError:
        return FetchError(
            connector_name=self.CONNECTOR_NAME,
            message=translate("fetch_failed", self.settings.default_locale),
            raw_error=raw_error,
        )

    # ──────────────────────────────────────────────
    # JSON
    # ──────────────────────────────────────────────

    async def get_json(self, url: str, api_key: str, use_cache: bool = True) -> Any:
        """GET → JSON décodé. Lève FetchError si status != 200."""
        if use_cache:
            cached = self.cache.get(url, api_key)
            if cached is not None:
                logger.debug(f"GET {url} | cache hit")
                return cached

        start = time.monotonic()
        try:
            response = await self._client().get(url, headers=self._headers(api_key))
        except httpx.HTTPError as e:
            logger.error(f"Error while fetching data: GET {url} failed: {e}")
            raise self._fetch_error(e) from e

        duration_ms = (time.monotonic() - start) * 1000
        logger.debug(f"GET {url} | status={response.status_code} | duration={duration_ms:.0f}ms")

        if response.status_code != 200:
            logger.error(
                f"Error while fetching data: HTTP {response.status_code}, "
                f"{truncate(response.text)}"
            )
            raise self._fetch_error()

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Error while fetching data: invalid JSON from {url}: {e}")
            raise self._fetch_error(e) from e

        if use_cache:
            self.cache.set(url, api_key, data)
        return data

    async def get_as(
        self,
        url: str,
        api_key: str,
        model: Any,
        use_cache: bool = True,
    ) -> Any:
        """GET → payload validé par un modèle pydantic (ou list[Model])."""
        data = await self.get_json(url, api_key, use_cache=use_cache)
        try:
            return TypeAdapter(model).validate_python(data)
        except ValidationError as e:
            logger.error(f"Unexpected payload from {url}: {e}")
            raise self._fetch_error(e) from e

    # ──────────────────────────────────────────────
    # STREAM
    # ──────────────────────────────────────────────

    @asynccontextmanager
    async def stream(self, url: str, api_key: str) -> AsyncIterator[httpx.Response]:
        """GET en streaming. La réponse n'est cédée que si status == 200.

        Jamais mis en cache.
        """
        try:
            async with self._client().stream(
                "GET", url, headers=self._headers(api_key)
            ) as response:
                if response.status_code != 200:
                    body = await response.aread()
                    logger.error(
                        f"Failed to fetch resource: HTTP {response.status_code}, "
                        f"{truncate(body.decode('utf-8', errors='replace'))}"
                    )
                    raise self._fetch_error()
                yield response
        except httpx.HTTPError as e:
            logger.error(f"Error while streaming {url}: {e}")
            raise self._fetch_error(e) from e
