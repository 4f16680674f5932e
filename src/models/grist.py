"""
Payloads de l'API Grist.

Uniquement les champs lus par le connecteur. Le reste est ignoré
(Grist renvoie beaucoup plus : access, createdAt, ...).
"""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, Field

# Nom réservé par Grist pour l'organisation personnelle de chaque utilisateur
PERSONAL_ORG_NAME = "Personal"

# Alias Grist de l'organisation personnelle, utilisé quand le domaine manque
PERSONAL_ORG_DOMAIN = "docs"


class Owner(BaseModel):
    name: Optional[str] = None


class Organization(BaseModel):
    id: Union[int, str]
    name: str = ""
    domain: Optional[str] = None
    owner: Optional[Owner] = None

    @property
    def display_name(self) -> str:
        """'Personal' est ambigu : on y ajoute le propriétaire."""
        if self.name == PERSONAL_ORG_NAME and self.owner and self.owner.name:
            return f"{self.name} (@{self.owner.name})"
        return self.name

    @property
    def routing_domain(self) -> str:
        return self.domain or PERSONAL_ORG_DOMAIN


class DocumentSummary(BaseModel):
    id: str
    name: str = ""


class Workspace(BaseModel):
    id: Union[int, str]
    name: str = ""
    docs: list[DocumentSummary] = Field(default_factory=list)
    org: Optional[Organization] = None


class Document(BaseModel):
    id: str
    name: str = ""
    workspace: Optional[Workspace] = None


class Table(BaseModel):
    id: str


class TableList(BaseModel):
    tables: list[Table] = Field(default_factory=list)


# ── /download/table-schema (Frictionless Table Schema) ──


class Dialect(BaseModel):
    delimiter: Optional[str] = None


class FieldSpec(BaseModel):
    name: str
    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None


class FieldList(BaseModel):
    fields: list[FieldSpec] = Field(default_factory=list)


class TableSchema(BaseModel):
    name: Optional[str] = None
    title: Optional[str] = None
    dialect: Optional[Dialect] = None
    table_schema: FieldList = Field(default_factory=FieldList, alias="schema")

    @property
    def delimiter(self) -> Optional[str]:
        return self.dialect.delimiter if self.dialect else None
