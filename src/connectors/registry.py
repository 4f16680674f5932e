"""
ConnectorRegistry — Registre des connecteurs de catalogue.

L'hôte interroge le registre pour construire sa liste de catalogues :
chaque connecteur n'est importé qu'au moment où on le demande
(httpx n'est pas chargé pour rien).

Design decisions :
- Une entrée par provider : module, classe, catégorie
- Les catégories sont dérivées des entrées, pas maintenues à part
- Metadata (titre, capacités, vignette) lue sur la classe, sans instancier
"""

from __future__ import annotations

import importlib
import logging
from typing import Any, NamedTuple, Optional, Type

from connectors.base import BaseCatalogConnector, ConnectorError
from services.i18n import translate

logger = logging.getLogger("catalog.connectors.registry")


class ConnectorEntry(NamedTuple):
    module_path: str
    class_name: str
    category: str


# ──────────────────────────────────────────────
# REGISTRY
# ──────────────────────────────────────────────

_CATALOG_CONNECTORS: dict[str, ConnectorEntry] = {
    "grist": ConnectorEntry(
        "connectors.catalog.grist.connector", "GristConnector", "catalog"
    ),
}


def _normalize(provider: str) -> str:
    return provider.strip().lower()


class ConnectorRegistry:
    """Registre central des connecteurs de catalogue.

    Usage :
        ConnectorRegistry.list_all()                 # ["grist"]
        connector = ConnectorRegistry.create("grist")
        ConnectorRegistry.capabilities("grist")      # ["import", "thumbnail"]
    """

    @classmethod
    def _entry(cls, provider: str) -> ConnectorEntry:
        entry = _CATALOG_CONNECTORS.get(_normalize(provider))
        if entry is None:
            raise ConnectorError(
                connector_name=provider,
                message=translate(
                    "unsupported_provider",
                    provider=provider,
                    supported=", ".join(cls.list_all()),
                ),
                recoverable=False,
            )
        return entry

    @classmethod
    def load(cls, provider: str) -> Type[BaseCatalogConnector]:
        """Importe la classe du connecteur à la demande.

        Raises:
            ConnectorError si le provider est inconnu ou si son module
            ne s'importe pas (dépendance manquante).
        """
        entry = cls._entry(provider)
        try:
            module = importlib.import_module(entry.module_path)
        except ImportError as e:
            logger.error(f"Cannot import {entry.module_path} for {provider}: {e}")
            raise ConnectorError(
                connector_name=provider,
                message=translate("connector_unavailable", provider=provider),
                recoverable=False,
                raw_error=e,
            ) from e
        return getattr(module, entry.class_name)

    @classmethod
    def create(cls, provider: str, **kwargs: Any) -> BaseCatalogConnector:
        return cls.load(provider)(**kwargs)

    @classmethod
    def metadata(cls, provider: str) -> dict[str, Any]:
        return cls.load(provider).info()

    @classmethod
    def capabilities(cls, provider: str) -> list[str]:
        return list(cls.load(provider).CAPABILITIES)

    @classmethod
    def describe_all(cls) -> list[dict[str, Any]]:
        """Metadata de chaque connecteur, pour l'écran de choix de l'hôte."""
        return [cls.metadata(name) for name in cls.list_all()]

    @staticmethod
    def is_supported(provider: str) -> bool:
        return _normalize(provider) in _CATALOG_CONNECTORS

    @staticmethod
    def list_all() -> list[str]:
        return sorted(_CATALOG_CONNECTORS)

    @staticmethod
    def list_by_category(category: str) -> list[str]:
        wanted = _normalize(category)
        return sorted(
            name for name, entry in _CATALOG_CONNECTORS.items()
            if entry.category == wanted
        )

    @staticmethod
    def get_category(provider: str) -> Optional[str]:
        entry = _CATALOG_CONNECTORS.get(_normalize(provider))
        return entry.category if entry else None
