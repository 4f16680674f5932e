"""
Shared pytest fixtures for the Grist catalog connector tests.

The Grist API is mocked with respx: no test makes a real HTTP call.
"""

import httpx
import pytest
import respx

from connectors.cache import NullCache, ResponseCache
from connectors.catalog.grist.client import GristClient
from connectors.catalog.grist.connector import GristConnector
from models.catalog import MASKED_SECRET, CatalogConfig, CatalogSecrets
from services.config import Settings


BASE_URL = "https://grist.example.com"
SAAS_URL = "https://docs.getgrist.com"
API_KEY = "abcde"
GENERIC_ERROR = "Erreur pendant la récupération des données"


# =============================================================================
# Settings / connector
# =============================================================================


@pytest.fixture
def settings():
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, default_locale="fr", progress_interval_seconds=0.5)


@pytest.fixture
async def connector(settings):
    """Connector without response cache, so every call hits the mock."""
    connector = GristConnector(settings=settings, cache=NullCache())
    yield connector
    await connector.disconnect()


@pytest.fixture
async def cached_connector(settings):
    connector = GristConnector(settings=settings, cache=ResponseCache(ttl_seconds=300))
    yield connector
    await connector.disconnect()


@pytest.fixture
async def client(settings):
    client = GristClient(settings=settings, cache=ResponseCache(ttl_seconds=300))
    yield client
    await client.aclose()


@pytest.fixture
def config():
    return CatalogConfig(url=BASE_URL, api_key=MASKED_SECRET)


@pytest.fixture
def saas_config():
    return CatalogConfig(url=SAAS_URL, api_key=MASKED_SECRET)


@pytest.fixture
def secrets():
    return CatalogSecrets(api_key=API_KEY)


@pytest.fixture
def grist_api():
    """respx router: every request must match a declared route."""
    with respx.mock(assert_all_called=False) as router:
        yield router


def json_response(payload, status=200):
    return httpx.Response(status, json=payload)


# =============================================================================
# API Response Fixtures
# =============================================================================


@pytest.fixture
def mock_orgs_response():
    """GET /api/orgs"""
    return [
        {
            "name": "Personal",
            "id": 1,
            "domain": "org-1",
            "owner": {"id": 5, "name": "UserTest", "picture": None},
            "access": "owners",
        },
        {
            "name": "orgaTest",
            "id": 2,
            "domain": "org-2",
            "owner": None,
            "access": "editors",
        },
    ]


@pytest.fixture
def mock_org_response():
    """GET /api/orgs/1"""
    return {"name": "Personal", "id": 1, "domain": "org-1"}


@pytest.fixture
def mock_workspaces_response():
    """GET /api/orgs/1/workspaces"""
    return [
        {"name": "wsp 1", "id": 1, "docs": [{"name": "doc1", "id": "d1"}]},
        {"name": "wsp 2", "id": 2, "docs": []},
    ]


@pytest.fixture
def mock_workspace_response():
    """GET /api/workspaces/1"""
    return {
        "name": "wsp 1",
        "id": 1,
        "docs": [
            {"name": "doc1", "id": "d1", "isPinned": False},
            {"name": "doc2", "id": "d2", "isPinned": True},
        ],
        "org": {"name": "Personal", "id": 1, "domain": "org-1"},
    }


@pytest.fixture
def mock_tables_response():
    """GET /o/{domain}/api/docs/d1/tables"""
    return {
        "tables": [
            {"id": "Table1", "fields": {"tableRef": 1, "onDemand": False}},
            {"id": "Table2", "fields": {"tableRef": 2, "onDemand": False}},
        ]
    }


@pytest.fixture
def mock_document_response():
    """GET /o/{domain}/api/docs/d1"""
    return {
        "name": "doc1",
        "id": "d1",
        "workspace": {
            "name": "wsp 1",
            "id": 1,
            "org": {"name": "Personal", "id": 1, "domain": "org-1"},
        },
    }


@pytest.fixture
def mock_table_schema_response():
    """GET /o/{domain}/api/docs/doc1/download/table-schema?tableId=table1"""
    return {
        "dialect": {"delimiter": ","},
        "name": "table1",
        "title": "Table1",
        "schema": {
            "fields": [
                {"name": "field1", "description": "Field 1"},
                {"name": "field2", "description": "Field 2", "type": "array"},
            ]
        },
    }


@pytest.fixture
def mock_server_error():
    return {"error": "Internal Server Error"}
