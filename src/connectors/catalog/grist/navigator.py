"""
GristNavigator — Navigation organisations → workspaces → documents → tables.

Un appel = un niveau de l'arbre + le fil d'Ariane (path) jusqu'au dossier courant.
Pas de pagination : l'API Grist renvoie chaque niveau en entier.
Un seul appel distant en échec fait échouer toute la liste (pas de résultat partiel).
"""

from __future__ import annotations

import logging
from typing import Optional

from connectors.base import InvalidIdentifierError
from connectors.catalog.grist.client import GristClient
from connectors.catalog.grist.identifiers import (
    DocumentRef,
    GristUrls,
    OrganizationRef,
    ResourceRef,
    RootRef,
    WorkspaceRef,
    parse_folder_id,
)
from models.catalog import Folder, ListEntry, ListResult, ResourceEntry
from models.grist import (
    PERSONAL_ORG_DOMAIN,
    Document,
    Organization,
    TableList,
    Workspace,
)
from services.i18n import translate

logger = logging.getLogger("catalog.connectors.catalog.grist.navigator")


def _org_folder(org: Optional[Organization]) -> Folder:
    if org is None:
        return Folder(id=OrganizationRef(org_id="").folder_id, title="")
    return Folder(id=OrganizationRef(org_id=str(org.id)).folder_id, title=org.name)


def _workspace_folder(ws: Optional[Workspace]) -> Folder:
    if ws is None:
        return Folder(id=WorkspaceRef(workspace_id="").folder_id, title="")
    return Folder(id=WorkspaceRef(workspace_id=str(ws.id)).folder_id, title=ws.name)


class GristNavigator:

    def __init__(self, client: GristClient):
        self.client = client

    async def list(
        self,
        base_url: str,
        api_key: str,
        current_folder_id: Optional[str] = None,
    ) -> ListResult:
        urls = GristUrls(base_url, self.client.settings.grist_saas_domain)
        ref = parse_folder_id(current_folder_id)
        logger.debug(f"Listing {type(ref).__name__} {ref.folder_id!r}")

        if isinstance(ref, RootRef):
            return await self._list_organizations(urls, api_key)
        if isinstance(ref, OrganizationRef):
            return await self._list_workspaces(urls, api_key, ref)
        if isinstance(ref, WorkspaceRef):
            return await self._list_documents(urls, api_key, ref)
        if isinstance(ref, DocumentRef):
            return await self._list_tables(urls, api_key, ref)

        logger.warning(f"Unrecognized folder id: {ref.raw!r}")
        raise InvalidIdentifierError(
            connector_name=self.client.CONNECTOR_NAME,
            message=translate(
                "invalid_folder_id",
                self.client.settings.default_locale,
                identifier=ref.raw,
            ),
            identifier=ref.raw,
        )

    # ──────────────────────────────────────────────
    # NIVEAUX
    # ──────────────────────────────────────────────

    async def _list_organizations(self, urls: GristUrls, api_key: str) -> ListResult:
        orgs: list[Organization] = await self.client.get_as(
            urls.orgs(), api_key, list[Organization]
        )
        results: list[ListEntry] = [
            Folder(id=OrganizationRef(org_id=str(org.id)).folder_id, title=org.display_name)
            for org in orgs
        ]
        return ListResult.build(results, path=[])

    async def _list_workspaces(
        self,
        urls: GristUrls,
        api_key: str,
        ref: OrganizationRef,
    ) -> ListResult:
        workspaces: list[Workspace] = await self.client.get_as(
            urls.org_workspaces(ref.org_id), api_key, list[Workspace]
        )
        results: list[ListEntry] = [_workspace_folder(ws) for ws in workspaces]

        org: Organization = await self.client.get_as(
            urls.org(ref.org_id), api_key, Organization
        )
        path = [Folder(id=ref.folder_id, title=org.name)]
        return ListResult.build(results, path=path)

    async def _list_documents(
        self,
        urls: GristUrls,
        api_key: str,
        ref: WorkspaceRef,
    ) -> ListResult:
        ws: Workspace = await self.client.get_as(
            urls.workspace(ref.workspace_id), api_key, Workspace
        )
        if ws.org is None:
            logger.warning(f"Workspace {ref.workspace_id} has no parent organization")
        domain = ws.org.routing_domain if ws.org else PERSONAL_ORG_DOMAIN

        results: list[ListEntry] = [
            Folder(id=DocumentRef(domain=domain, doc_id=doc.id).folder_id, title=doc.name)
            for doc in ws.docs
        ]
        path = [
            _org_folder(ws.org),
            Folder(id=ref.folder_id, title=ws.name),
        ]
        return ListResult.build(results, path=path)

    async def _list_tables(
        self,
        urls: GristUrls,
        api_key: str,
        ref: DocumentRef,
    ) -> ListResult:
        tables: TableList = await self.client.get_as(
            urls.doc_tables(ref.domain, ref.doc_id), api_key, TableList
        )
        results: list[ListEntry] = [
            ResourceEntry(
                id=ResourceRef(
                    domain=ref.domain, doc_id=ref.doc_id, table_id=table.id
                ).resource_id,
                title=table.id,
            )
            for table in tables.tables
        ]

        # Le document embarque son workspace, qui embarque son organisation
        doc: Document = await self.client.get_as(
            urls.doc(ref.domain, ref.doc_id), api_key, Document
        )
        ws = doc.workspace
        path = [
            _org_folder(ws.org if ws else None),
            _workspace_folder(ws),
            Folder(id=ref.folder_id, title=doc.name),
        ]
        return ListResult.build(results, path=path)
