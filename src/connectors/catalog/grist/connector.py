"""
Grist Connector — Catalogue Grist pour l'hôte.

Expose les 3 points d'entrée de l'hôte :
- prepare        : range la clé d'API dans les secrets, vérifie la connexion
- list_resources : organisations → workspaces → documents → tables
- get_resource   : table → CSV + schéma

Capacités annoncées : "import" et "thumbnail".

Usage :
    async with GristConnector() as connector:
        prepared = await connector.prepare(config, secrets)
        listing = await connector.list_resources(
            prepared.catalog_config, prepared.secrets, "/orgs/2"
        )
        resource = await connector.get_resource(
            prepared.catalog_config, prepared.secrets, "org-2|d1|Table1", tmp_dir
        )
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from connectors.base import (
    BaseCatalogConnector,
    ConfigurationError,
    ConnectionCheckError,
    FetchError,
)
from connectors.cache import ResponseCache
from connectors.catalog.grist.client import GristClient
from connectors.catalog.grist.fetcher import GristFetcher
from connectors.catalog.grist.identifiers import GristUrls
from connectors.catalog.grist.navigator import GristNavigator
from connectors.utils import ProgressReporter
from models.catalog import (
    MASKED_SECRET,
    CatalogConfig,
    CatalogSecrets,
    ListResult,
    PrepareResult,
    Resource,
)
from services.config import Settings, get_settings
from services.i18n import translate


def redact_secrets(
    config: CatalogConfig,
    secrets: CatalogSecrets,
) -> tuple[CatalogConfig, CatalogSecrets]:
    """Déplace la clé d'API de la config vers les secrets.

    Fonction pure : retourne de nouveaux objets, n'altère pas les entrées.
    - clé saisie (≠ masque) → secret mis à jour, config masquée
    - clé vidée ("") alors qu'un secret existe → secret supprimé
    - clé absente (None) ou déjà masquée → rien ne change
    """
    if config.api_key and config.api_key != MASKED_SECRET:
        return (
            config.model_copy(update={"api_key": MASKED_SECRET}),
            secrets.model_copy(update={"api_key": config.api_key}),
        )
    if config.api_key == "" and secrets.api_key:
        return config.model_copy(), secrets.model_copy(update={"api_key": None})
    return config.model_copy(), secrets.model_copy()


class GristConnector(BaseCatalogConnector):

    CONNECTOR_NAME = "grist"
    CONNECTOR_CATEGORY = "catalog"
    CAPABILITIES = ["import", "thumbnail"]
    TITLE = "Catalog Grist"
    DESCRIPTION = "Import de tables Grist (CSV) dans le catalogue"
    THUMBNAIL_PATH = Path(__file__).parent / "resources" / "thumbnail.svg"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[GristClient] = None,
        cache: Optional[ResponseCache] = None,
    ):
        super().__init__()
        self.settings = settings or get_settings()
        self.client = client or GristClient(settings=self.settings, cache=cache)
        self.navigator = GristNavigator(self.client)
        self.fetcher = GristFetcher(self.client)

    async def disconnect(self) -> None:
        await self.client.aclose()
        await super().disconnect()

    # ──────────────────────────────────────────────
    # CONFIG
    # ──────────────────────────────────────────────

    @classmethod
    def config_schema(cls) -> dict[str, Any]:
        return CatalogConfig.model_json_schema(by_alias=True)

    @classmethod
    def assert_config_valid(cls, data: Any) -> CatalogConfig:
        """Valide une config brute de l'hôte. ConfigurationError sinon."""
        try:
            config = CatalogConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(
                connector_name=cls.CONNECTOR_NAME,
                message=translate("invalid_config", details=e.error_count()),
                raw_error=e,
            ) from e
        if not config.has_url:
            raise ConfigurationError(
                connector_name=cls.CONNECTOR_NAME,
                message=translate("missing_url"),
            )
        return config

    def _require_url(self, config: CatalogConfig) -> None:
        if not config.has_url:
            raise ConfigurationError(
                connector_name=self.CONNECTOR_NAME,
                message=translate("missing_url", self.settings.default_locale),
            )

    # ──────────────────────────────────────────────
    # POINTS D'ENTRÉE
    # ──────────────────────────────────────────────

    async def prepare(
        self,
        config: CatalogConfig,
        secrets: CatalogSecrets,
    ) -> PrepareResult:
        config, secrets = redact_secrets(config, secrets)
        self._require_url(config)

        urls = GristUrls(config.url, self.settings.grist_saas_domain)
        try:
            await self.client.get_json(urls.orgs(), secrets.bearer, use_cache=False)
        except FetchError as e:
            self.logger.error(f"Error connecting to Grist API at {config.url}: {e.raw_error or e}")
            raise ConnectionCheckError(
                connector_name=self.CONNECTOR_NAME,
                message=translate("connection_failed", self.settings.default_locale),
                raw_error=e,
            ) from e

        self.logger.info(f"Connected to Grist at {config.url}")
        return PrepareResult(
            catalog_config=config,
            capabilities=list(self.CAPABILITIES),
            secrets=secrets,
        )

    async def list_resources(
        self,
        config: CatalogConfig,
        secrets: CatalogSecrets,
        current_folder_id: Optional[str] = None,
    ) -> ListResult:
        self._require_url(config)
        return await self.navigator.list(config.url, secrets.bearer, current_folder_id)

    async def get_resource(
        self,
        config: CatalogConfig,
        secrets: CatalogSecrets,
        resource_id: str,
        scratch_dir: Union[str, Path],
        reporter: Optional[ProgressReporter] = None,
    ) -> Resource:
        self._require_url(config)
        metrics = self._start_metrics(resource_id)
        resource = await self.fetcher.fetch(
            config.url,
            secrets.bearer,
            resource_id,
            scratch_dir,
            reporter=reporter,
            metrics=metrics,
        )
        self.logger.info(
            f"Resource {resource_id} ready: {resource.size} bytes "
            f"in {metrics.duration_seconds:.2f}s"
        )
        return resource
