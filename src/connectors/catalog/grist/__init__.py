"""
Connecteur de catalogue Grist.

  client.py       → appels HTTP authentifiés + cache court
  identifiers.py  → ids de dossier / ressource, routage SaaS vs /o/{domain}
  navigator.py    → organisations → workspaces → documents → tables
  fetcher.py      → table → CSV + schéma
  connector.py    → points d'entrée de l'hôte (prepare, list, get)
"""

from connectors.catalog.grist.client import GristClient
from connectors.catalog.grist.connector import GristConnector, redact_secrets
from connectors.catalog.grist.fetcher import GristFetcher, build_schema
from connectors.catalog.grist.identifiers import (
    DocumentRef,
    GristUrls,
    OrganizationRef,
    ResourceRef,
    RootRef,
    UnrecognizedRef,
    WorkspaceRef,
    parse_folder_id,
    parse_resource_id,
)
from connectors.catalog.grist.navigator import GristNavigator

__all__ = [
    "GristClient",
    "GristConnector",
    "GristFetcher",
    "GristNavigator",
    "GristUrls",
    "redact_secrets",
    "build_schema",
    "parse_folder_id",
    "parse_resource_id",
    "RootRef",
    "OrganizationRef",
    "WorkspaceRef",
    "DocumentRef",
    "UnrecognizedRef",
    "ResourceRef",
]
