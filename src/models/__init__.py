"""
Modèles du connecteur.

  catalog.py → ce que l'hôte envoie et reçoit (config, listes, ressources)
  grist.py   → payloads de l'API Grist
"""

from models.catalog import (
    MASKED_SECRET,
    CatalogConfig,
    CatalogSecrets,
    Folder,
    ListEntry,
    ListResult,
    PrepareResult,
    Resource,
    ResourceEntry,
    SchemaField,
)
from models.grist import (
    Document,
    DocumentSummary,
    Organization,
    Table,
    TableList,
    TableSchema,
    Workspace,
)

__all__ = [
    # Hôte
    "MASKED_SECRET",
    "CatalogConfig",
    "CatalogSecrets",
    "PrepareResult",
    "Folder",
    "ResourceEntry",
    "ListEntry",
    "ListResult",
    "SchemaField",
    "Resource",
    # Grist
    "Organization",
    "Workspace",
    "DocumentSummary",
    "Document",
    "Table",
    "TableList",
    "TableSchema",
]
