"""
Connecteurs de catalogue.

Chaque connecteur hérite de BaseCatalogConnector et expose à l'hôte
prepare / list_resources / get_resource.
L'hôte ne sait JAMAIS quelle API est derrière.

Le ConnectorRegistry permet de :
- Découvrir les connecteurs disponibles
- Instancier le bon connecteur à partir du nom du provider (import à la demande)
"""

from connectors.base import (
    BaseCatalogConnector,
    ConfigurationError,
    ConnectionCheckError,
    ConnectorError,
    FetchError,
    InvalidIdentifierError,
    TransferMetrics,
)
from connectors.cache import NullCache, ResponseCache
from connectors.registry import ConnectorRegistry

__all__ = [
    "BaseCatalogConnector",
    "ConnectorError",
    "ConfigurationError",
    "ConnectionCheckError",
    "FetchError",
    "InvalidIdentifierError",
    "TransferMetrics",
    "ResponseCache",
    "NullCache",
    "ConnectorRegistry",
]
