"""
BaseCatalogConnector — Classe abstraite pour tous les connecteurs de catalogue.

Un connecteur expose à l'hôte :
- prepare        : valide la config, range la clé d'API dans les secrets
- list_resources : navigation dossier par dossier
- get_resource   : téléchargement d'une ressource dans un répertoire temporaire

Les erreurs remontées à l'hôte sont TOUJOURS des ConnectorError
avec un message traduit. Le détail technique reste dans raw_error et les logs.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from models.catalog import (
    CatalogConfig,
    CatalogSecrets,
    ListResult,
    PrepareResult,
    Resource,
)


# ──────────────────────────────────────────────
# EXCEPTIONS
# ──────────────────────────────────────────────


class ConnectorError(Exception):
    def __init__(
        self,
        connector_name: str,
        message: str,
        recoverable: bool = True,
        raw_error: Optional[Exception] = None,
    ):
        self.connector_name = connector_name
        self.message = message
        self.recoverable = recoverable
        self.raw_error = raw_error
        super().__init__(f"[{connector_name}] {message}")


class ConfigurationError(ConnectorError):
    """Config incomplète ou invalide. Levée avant tout appel distant."""

    def __init__(
        self,
        connector_name: str,
        message: str,
        raw_error: Optional[Exception] = None,
    ):
        super().__init__(
            connector_name=connector_name,
            message=message,
            recoverable=False,
            raw_error=raw_error,
        )


class ConnectionCheckError(ConnectorError):
    """La sonde de prepare() n'a pas pu joindre l'API."""


class FetchError(ConnectorError):
    """Échec d'un appel distant ou de l'écriture du fichier téléchargé."""


class InvalidIdentifierError(ConnectorError):
    """Identifiant de dossier ou de ressource qui ne correspond à aucune forme connue."""

    def __init__(
        self,
        connector_name: str,
        message: str,
        identifier: str,
    ):
        self.identifier = identifier
        super().__init__(
            connector_name=connector_name,
            message=message,
            recoverable=False,
        )


# ──────────────────────────────────────────────
# TRANSFER METRICS
# ──────────────────────────────────────────────


class TransferMetrics(BaseModel):
    connector_name: str
    resource_id: str = ""
    started_at: datetime = Field(default_factory=datetime.utcnow)
    completed_at: Optional[datetime] = None
    duration_seconds: Optional[float] = None
    bytes_downloaded: int = 0
    warnings: list[str] = Field(default_factory=list)
    status: str = "pending"

    def complete(self, bytes_downloaded: int) -> None:
        self.completed_at = datetime.utcnow()
        self.duration_seconds = (
            self.completed_at - self.started_at
        ).total_seconds()
        self.bytes_downloaded = bytes_downloaded
        self.status = "success"

    def fail(self, error_message: str) -> None:
        self.completed_at = datetime.utcnow()
        self.duration_seconds = (
            self.completed_at - self.started_at
        ).total_seconds()
        self.status = "failed"
        self.warnings.append(error_message)


# ──────────────────────────────────────────────
# BASE CONNECTOR
# ──────────────────────────────────────────────


class BaseCatalogConnector(ABC):
    """Classe abstraite pour tous les connecteurs de catalogue.

    Chaque connecteur DOIT définir :
    - CONNECTOR_NAME  : identifiant unique ("grist", ...)
    - CAPABILITIES : actions proposées à l'hôte ("import", "thumbnail", ...)
    - TITLE / DESCRIPTION : affichés dans l'hôte
    """

    CONNECTOR_NAME: str = "base"
    CONNECTOR_CATEGORY: str = "catalog"
    CAPABILITIES: list[str] = []
    TITLE: str = ""
    DESCRIPTION: str = ""
    THUMBNAIL_PATH: Optional[Path] = None

    def __init__(self) -> None:
        self.logger = logging.getLogger(
            f"catalog.connectors.{self.CONNECTOR_CATEGORY}.{self.CONNECTOR_NAME}"
        )
        self._metrics: Optional[TransferMetrics] = None

    async def __aenter__(self) -> "BaseCatalogConnector":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()

    @abstractmethod
    async def prepare(
        self,
        config: CatalogConfig,
        secrets: CatalogSecrets,
    ) -> PrepareResult:
        ...

    @abstractmethod
    async def list_resources(
        self,
        config: CatalogConfig,
        secrets: CatalogSecrets,
        current_folder_id: Optional[str] = None,
    ) -> ListResult:
        ...

    @abstractmethod
    async def get_resource(
        self,
        config: CatalogConfig,
        secrets: CatalogSecrets,
        resource_id: str,
        scratch_dir: Union[str, Path],
        reporter: Any = None,
    ) -> Resource:
        ...

    async def disconnect(self) -> None:
        self.logger.debug("Disconnected")

    def _start_metrics(self, resource_id: str) -> TransferMetrics:
        self._metrics = TransferMetrics(
            connector_name=self.CONNECTOR_NAME,
            resource_id=resource_id,
        )
        return self._metrics

    @property
    def last_metrics(self) -> Optional[TransferMetrics]:
        return self._metrics

    @classmethod
    def info(cls) -> dict[str, Any]:
        """Metadata du connecteur pour le registry et l'hôte."""
        return {
            "name": cls.CONNECTOR_NAME,
            "category": cls.CONNECTOR_CATEGORY,
            "title": cls.TITLE,
            "description": cls.DESCRIPTION,
            "thumbnail_path": str(cls.THUMBNAIL_PATH) if cls.THUMBNAIL_PATH else None,
            "capabilities": list(cls.CAPABILITIES),
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.CONNECTOR_NAME}>"
