"""
Identifiants Grist et routage des URLs.

Identifiants de dossier (opaques pour l'hôte, renvoyés tels quels) :
    ""                        → racine (liste des organisations)
    /orgs/{orgId}             → organisation
    /workspaces/{wsId}        → espace de travail
    {domain}|/docs/{docId}    → document (liste des tables)

Identifiant de ressource :
    {domain}|{docId}|{tableId}   (exactement 3 champs, docId SANS /docs/)

Le préfixe /docs/ est conservé dans les dossiers et retiré dans les
ressources : ne pas "harmoniser" l'un sans l'autre, les ids déjà
enregistrés côté hôte ne seraient plus reconnus.

Le domaine suit l'utilisateur de la liste des workspaces jusqu'à l'URL
de téléchargement : hors SaaS, Grist route les documents par /o/{domain}.
"""

from __future__ import annotations

import re
from typing import Optional, Union
from urllib.parse import quote, urlparse

from pydantic import BaseModel, ConfigDict

ORGS_PREFIX = "/orgs/"
WORKSPACES_PREFIX = "/workspaces/"
DOCS_PREFIX = "/docs/"
SEPARATOR = "|"

# Segment d'id : pas de séparateur, pas de chemin
_SEGMENT = re.compile(r"^[^|/\\]+$")
# Les ids de table Grist sont des identifiants ; ils deviennent des noms de fichier
_TABLE_ID = re.compile(r"^[\w-]+$")


# ──────────────────────────────────────────────
# DOSSIERS
# ──────────────────────────────────────────────


class _Ref(BaseModel):
    model_config = ConfigDict(frozen=True)


class RootRef(_Ref):
    @property
    def folder_id(self) -> str:
        return ""


class OrganizationRef(_Ref):
    org_id: str

    @property
    def folder_id(self) -> str:
        return f"{ORGS_PREFIX}{self.org_id}"


class WorkspaceRef(_Ref):
    workspace_id: str

    @property
    def folder_id(self) -> str:
        return f"{WORKSPACES_PREFIX}{self.workspace_id}"


class DocumentRef(_Ref):
    domain: str
    doc_id: str

    @property
    def folder_id(self) -> str:
        return f"{self.domain}{SEPARATOR}{DOCS_PREFIX}{self.doc_id}"


class UnrecognizedRef(_Ref):
    raw: str

    @property
    def folder_id(self) -> str:
        return self.raw


FolderRef = Union[RootRef, OrganizationRef, WorkspaceRef, DocumentRef, UnrecognizedRef]


def _segment(value: str) -> Optional[str]:
    return value if _SEGMENT.match(value) else None


def parse_folder_id(folder_id: Optional[str]) -> FolderRef:
    """Classe un identifiant de dossier. Ne lève jamais : UnrecognizedRef sinon."""
    if not folder_id:
        return RootRef()

    if folder_id.startswith(ORGS_PREFIX):
        org_id = _segment(folder_id[len(ORGS_PREFIX):])
        return OrganizationRef(org_id=org_id) if org_id else UnrecognizedRef(raw=folder_id)

    if folder_id.startswith(WORKSPACES_PREFIX):
        ws_id = _segment(folder_id[len(WORKSPACES_PREFIX):])
        return WorkspaceRef(workspace_id=ws_id) if ws_id else UnrecognizedRef(raw=folder_id)

    if SEPARATOR in folder_id:
        domain, doc_path = folder_id.split(SEPARATOR, 1)
        if _segment(domain) and doc_path.startswith(DOCS_PREFIX):
            doc_id = _segment(doc_path[len(DOCS_PREFIX):])
            if doc_id:
                return DocumentRef(domain=domain, doc_id=doc_id)

    return UnrecognizedRef(raw=folder_id)


# ──────────────────────────────────────────────
# RESSOURCES
# ──────────────────────────────────────────────


class ResourceRef(_Ref):
    domain: str
    doc_id: str
    table_id: str

    @property
    def resource_id(self) -> str:
        return SEPARATOR.join((self.domain, self.doc_id, self.table_id))

    @property
    def document(self) -> DocumentRef:
        return DocumentRef(domain=self.domain, doc_id=self.doc_id)


def parse_resource_id(resource_id: str) -> ResourceRef:
    """domain|docId|tableId → ResourceRef. ValueError si la forme est invalide."""
    parts = resource_id.split(SEPARATOR)
    if len(parts) != 3:
        raise ValueError(
            f"resource id must have exactly 3 '|'-separated parts, got {len(parts)}"
        )
    domain, doc_id, table_id = parts
    if not (_segment(domain) and _segment(doc_id)):
        raise ValueError(f"invalid domain or document in resource id {resource_id!r}")
    if not _TABLE_ID.match(table_id):
        raise ValueError(f"invalid table id in resource id {resource_id!r}")
    return ResourceRef(domain=domain, doc_id=doc_id, table_id=table_id)


# ──────────────────────────────────────────────
# URLS
# ──────────────────────────────────────────────


class GristUrls:
    """Construit les URLs de l'API à partir de l'URL de base du catalogue.

    Sur le domaine SaaS (getgrist.com et *.getgrist.com) les documents
    sont servis à /api/docs/{id}. Ailleurs (self-hosted, multi-tenant)
    il faut passer par /o/{domain}/api/docs/{id}.
    """

    def __init__(self, base_url: str, saas_domain: str = "getgrist.com"):
        self.base_url = base_url.rstrip("/")
        self.saas_domain = saas_domain.lstrip(".").lower()

    @property
    def is_saas(self) -> bool:
        # getgrist.com lui-même compte aussi comme SaaS
        host = (urlparse(self.base_url).hostname or "").lower()
        return host == self.saas_domain or host.endswith(f".{self.saas_domain}")

    def orgs(self) -> str:
        return f"{self.base_url}/api/orgs"

    def org(self, org_id: str) -> str:
        return f"{self.base_url}/api/orgs/{org_id}"

    def org_workspaces(self, org_id: str) -> str:
        return f"{self.org(org_id)}/workspaces"

    def workspace(self, workspace_id: str) -> str:
        return f"{self.base_url}/api/workspaces/{workspace_id}"

    def _doc_root(self, domain: str) -> str:
        if self.is_saas:
            return self.base_url
        return f"{self.base_url}/o/{domain}"

    def doc(self, domain: str, doc_id: str) -> str:
        return f"{self._doc_root(domain)}/api/docs/{doc_id}"

    def doc_tables(self, domain: str, doc_id: str) -> str:
        return f"{self.doc(domain, doc_id)}/tables"

    def download_csv(self, ref: ResourceRef) -> str:
        return (
            f"{self.doc(ref.domain, ref.doc_id)}/download/csv"
            f"?tableId={quote(ref.table_id, safe='')}"
        )

    def download_table_schema(self, ref: ResourceRef) -> str:
        return (
            f"{self.doc(ref.domain, ref.doc_id)}/download/table-schema"
            f"?tableId={quote(ref.table_id, safe='')}"
        )

    def origin(self, domain: str, doc_id: str) -> str:
        """Lien lisible vers le document, pour l'utilisateur."""
        return f"{self._doc_root(domain)}/{doc_id}"
