"""
Modèles échangés avec le catalogue hôte.

Config, secrets, entrées de liste, chemin (fil d'Ariane),
descripteur de ressource téléchargée.

Design decisions :
- Pydantic v2 pour validation stricte + sérialisation JSON native
- Noms Python en snake_case, clés camelCase côté hôte (alias)
- to_host() = le dict exact que l'hôte reçoit
- Les modèles sont reconstruits, jamais mutés en place
"""

from __future__ import annotations

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Valeur affichée à la place de la clé d'API une fois celle-ci
# déplacée dans les secrets.
MASKED_SECRET = "********"


class HostModel(BaseModel):
    """Base commune : alias camelCase, construction par nom Python."""

    model_config = ConfigDict(populate_by_name=True)

    def to_host(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


# ──────────────────────────────────────────────
# CONFIG & SECRETS
# ──────────────────────────────────────────────


class CatalogConfig(HostModel):
    """Configuration d'un catalogue Grist telle que saisie dans l'hôte."""

    url: str = Field(
        default="",
        description="URL de l'instance Grist (ex: https://docs.getgrist.com)",
    )
    api_key: Optional[str] = Field(
        default=None,
        alias="apiKey",
        description="Clé d'API Grist (masquée après prepare)",
    )

    @field_validator("url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/")

    @property
    def has_url(self) -> bool:
        return bool(self.url)

    @property
    def is_masked(self) -> bool:
        return self.api_key == MASKED_SECRET


class CatalogSecrets(HostModel):
    api_key: Optional[str] = Field(default=None, alias="apiKey")

    @property
    def bearer(self) -> str:
        return self.api_key or ""


class PrepareResult(HostModel):
    catalog_config: CatalogConfig = Field(alias="catalogConfig")
    capabilities: list[str]
    secrets: CatalogSecrets


# ──────────────────────────────────────────────
# LISTING
# ──────────────────────────────────────────────


class Folder(HostModel):
    """Noeud navigable : organisation, espace de travail ou document."""

    id: str
    title: str
    type: Literal["folder"] = "folder"


class ResourceEntry(HostModel):
    """Table téléchargeable, adressée par domaine|document|table."""

    id: str
    title: str
    type: Literal["resource"] = "resource"
    format: str = "csv"


ListEntry = Union[Folder, ResourceEntry]


class ListResult(HostModel):
    count: int = Field(ge=0)
    results: list[ListEntry] = Field(default_factory=list)
    path: list[Folder] = Field(default_factory=list)

    @classmethod
    def build(
        cls,
        results: list[ListEntry],
        path: Optional[list[Folder]] = None,
    ) -> "ListResult":
        """count = nombre d'entrées, jamais la longueur du chemin."""
        return cls(count=len(results), results=results, path=path or [])


# ──────────────────────────────────────────────
# RESOURCE
# ──────────────────────────────────────────────


class SchemaField(HostModel):
    """Métadonnées d'une colonne. separator uniquement pour les tableaux."""

    key: str
    title: str
    description: Optional[str] = None
    separator: Optional[str] = None


class Resource(HostModel):
    """Descripteur d'une table téléchargée en CSV dans le répertoire temporaire."""

    id: str
    title: str
    format: str = "csv"
    mime_type: str = Field(default="text/csv", alias="mimeType")
    origin: str
    size: int = Field(ge=0)
    file_path: str = Field(alias="filePath")
    table_schema: list[SchemaField] = Field(default_factory=list, alias="schema")
