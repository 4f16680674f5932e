"""
Listing tests: organizations → workspaces → documents → tables.
"""

import httpx
import pytest

from conftest import BASE_URL, GENERIC_ERROR, SAAS_URL, json_response
from connectors.base import ConfigurationError, FetchError, InvalidIdentifierError
from models.catalog import CatalogConfig


class TestListOrganizations:
    """Root level: no current folder."""

    async def test_lists_organizations(self, connector, config, secrets, grist_api, mock_orgs_response):
        route = grist_api.get(f"{BASE_URL}/api/orgs").mock(
            return_value=json_response(mock_orgs_response)
        )

        result = await connector.list_resources(config, secrets)

        assert route.call_count == 1
        assert route.calls.last.request.headers["Authorization"] == "Bearer abcde"
        assert result.count == 2
        assert result.path == []
        hosted = [entry.to_host() for entry in result.results]
        assert {"id": "/orgs/1", "title": "Personal (@UserTest)", "type": "folder"} in hosted
        assert {"id": "/orgs/2", "title": "orgaTest", "type": "folder"} in hosted

    async def test_empty_folder_id_is_root(self, connector, config, secrets, grist_api, mock_orgs_response):
        grist_api.get(f"{BASE_URL}/api/orgs").mock(return_value=json_response(mock_orgs_response))

        result = await connector.list_resources(config, secrets, "")

        assert result.count == 2

    async def test_personal_org_without_owner_keeps_bare_name(self, connector, config, secrets, grist_api):
        grist_api.get(f"{BASE_URL}/api/orgs").mock(
            return_value=json_response([{"name": "Personal", "id": 7, "domain": "docs-7"}])
        )

        result = await connector.list_resources(config, secrets)

        assert result.results[0].title == "Personal"
        assert result.results[0].id == "/orgs/7"


class TestListWorkspaces:

    async def test_lists_workspaces_with_org_breadcrumb(
        self, connector, config, secrets, grist_api, mock_workspaces_response, mock_org_response
    ):
        grist_api.get(f"{BASE_URL}/api/orgs/1/workspaces").mock(
            return_value=json_response(mock_workspaces_response)
        )
        grist_api.get(f"{BASE_URL}/api/orgs/1").mock(return_value=json_response(mock_org_response))

        result = await connector.list_resources(config, secrets, "/orgs/1")

        assert result.count == 2
        assert [w.id for w in result.results] == ["/workspaces/1", "/workspaces/2"]
        assert [w.title for w in result.results] == ["wsp 1", "wsp 2"]
        assert len(result.path) == 1
        assert result.path[0].id == "/orgs/1"
        assert result.path[0].title == "Personal"


class TestListDocuments:

    async def test_lists_documents_with_domain(
        self, connector, config, secrets, grist_api, mock_workspace_response
    ):
        grist_api.get(f"{BASE_URL}/api/workspaces/1").mock(
            return_value=json_response(mock_workspace_response)
        )

        result = await connector.list_resources(config, secrets, "/workspaces/1")

        assert result.count == 2
        assert [(d.id, d.title) for d in result.results] == [
            ("org-1|/docs/d1", "doc1"),
            ("org-1|/docs/d2", "doc2"),
        ]
        assert [(p.id, p.title) for p in result.path] == [
            ("/orgs/1", "Personal"),
            ("/workspaces/1", "wsp 1"),
        ]

    async def test_missing_org_domain_falls_back_to_personal_alias(self, connector, config, secrets, grist_api):
        grist_api.get(f"{BASE_URL}/api/workspaces/3").mock(
            return_value=json_response({
                "name": "Home",
                "id": 3,
                "docs": [{"name": "doc1", "id": "d1"}],
                "org": {"name": "Personal", "id": 1},
            })
        )

        result = await connector.list_resources(config, secrets, "/workspaces/3")

        assert result.results[0].id == "docs|/docs/d1"


class TestListTables:

    async def test_lists_tables_self_hosted(
        self, connector, config, secrets, grist_api, mock_tables_response, mock_document_response
    ):
        grist_api.get(f"{BASE_URL}/o/org-1/api/docs/d1/tables").mock(
            return_value=json_response(mock_tables_response)
        )
        grist_api.get(f"{BASE_URL}/o/org-1/api/docs/d1").mock(
            return_value=json_response(mock_document_response)
        )

        result = await connector.list_resources(config, secrets, "org-1|/docs/d1")

        assert result.count == 2
        assert [entry.to_host() for entry in result.results] == [
            {"id": "org-1|d1|Table1", "title": "Table1", "type": "resource", "format": "csv"},
            {"id": "org-1|d1|Table2", "title": "Table2", "type": "resource", "format": "csv"},
        ]
        assert [(p.id, p.title) for p in result.path] == [
            ("/orgs/1", "Personal"),
            ("/workspaces/1", "wsp 1"),
            ("org-1|/docs/d1", "doc1"),
        ]

    async def test_lists_tables_on_saas_domain(
        self, connector, saas_config, secrets, grist_api, mock_tables_response, mock_document_response
    ):
        tables = grist_api.get(f"{SAAS_URL}/api/docs/d1/tables").mock(
            return_value=json_response(mock_tables_response)
        )
        grist_api.get(f"{SAAS_URL}/api/docs/d1").mock(
            return_value=json_response(mock_document_response)
        )

        result = await connector.list_resources(saas_config, secrets, "org-1|/docs/d1")

        assert tables.called
        assert result.results[0].id == "org-1|d1|Table1"
        assert len(result.path) == 3

    async def test_count_ignores_path_length(
        self, connector, config, secrets, grist_api, mock_document_response
    ):
        grist_api.get(f"{BASE_URL}/o/org-1/api/docs/d1/tables").mock(
            return_value=json_response({"tables": []})
        )
        grist_api.get(f"{BASE_URL}/o/org-1/api/docs/d1").mock(
            return_value=json_response(mock_document_response)
        )

        result = await connector.list_resources(config, secrets, "org-1|/docs/d1")

        assert result.count == 0
        assert len(result.path) == 3


class TestRoundTrip:
    """Ids emitted at one level are accepted unmodified at the next one."""

    async def test_document_ids_route_to_table_listing(
        self, connector, config, secrets, grist_api,
        mock_workspace_response, mock_tables_response, mock_document_response,
    ):
        grist_api.get(f"{BASE_URL}/api/workspaces/1").mock(
            return_value=json_response(mock_workspace_response)
        )
        tables = grist_api.get(f"{BASE_URL}/o/org-1/api/docs/d1/tables").mock(
            return_value=json_response(mock_tables_response)
        )
        grist_api.get(f"{BASE_URL}/o/org-1/api/docs/d1").mock(
            return_value=json_response(mock_document_response)
        )

        documents = await connector.list_resources(config, secrets, "/workspaces/1")
        tables_result = await connector.list_resources(config, secrets, documents.results[0].id)

        assert tables.called
        assert tables_result.path[-1].id == documents.results[0].id

    async def test_breadcrumb_ids_are_listable(
        self, connector, config, secrets, grist_api,
        mock_document_response, mock_tables_response, mock_workspace_response,
    ):
        grist_api.get(f"{BASE_URL}/o/org-1/api/docs/d1/tables").mock(
            return_value=json_response(mock_tables_response)
        )
        grist_api.get(f"{BASE_URL}/o/org-1/api/docs/d1").mock(
            return_value=json_response(mock_document_response)
        )
        workspace = grist_api.get(f"{BASE_URL}/api/workspaces/1").mock(
            return_value=json_response(mock_workspace_response)
        )

        tables_result = await connector.list_resources(config, secrets, "org-1|/docs/d1")
        await connector.list_resources(config, secrets, tables_result.path[1].id)

        assert workspace.called


class TestListErrors:

    async def test_server_error_raises_generic_message(
        self, connector, config, secrets, grist_api, mock_server_error
    ):
        grist_api.get(f"{BASE_URL}/api/orgs/3/workspaces").mock(
            return_value=json_response(mock_server_error, status=500)
        )

        with pytest.raises(FetchError) as exc_info:
            await connector.list_resources(config, secrets, "/orgs/3")

        assert GENERIC_ERROR in str(exc_info.value)
        assert "Internal Server Error" not in str(exc_info.value)

    async def test_breadcrumb_failure_aborts_listing(
        self, connector, config, secrets, grist_api, mock_workspaces_response
    ):
        grist_api.get(f"{BASE_URL}/api/orgs/1/workspaces").mock(
            return_value=json_response(mock_workspaces_response)
        )
        grist_api.get(f"{BASE_URL}/api/orgs/1").mock(return_value=httpx.Response(404))

        with pytest.raises(FetchError):
            await connector.list_resources(config, secrets, "/orgs/1")

    async def test_unexpected_payload_raises_fetch_error(self, connector, config, secrets, grist_api):
        grist_api.get(f"{BASE_URL}/api/orgs").mock(return_value=json_response({"not": "a list"}))

        with pytest.raises(FetchError):
            await connector.list_resources(config, secrets)

    @pytest.mark.parametrize("folder_id", ["orgs/1", "/docs/d1", "org-1|d1", "/orgs/", "random"])
    async def test_unrecognized_folder_id_raises(self, connector, config, secrets, grist_api, folder_id):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            await connector.list_resources(config, secrets, folder_id)

        assert exc_info.value.identifier == folder_id
        assert not grist_api.calls

    async def test_missing_url_raises_before_any_call(self, connector, secrets, grist_api):
        with pytest.raises(ConfigurationError):
            await connector.list_resources(CatalogConfig(url=""), secrets)

        assert not grist_api.calls
