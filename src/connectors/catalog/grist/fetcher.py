"""
GristFetcher — Téléchargement d'une table en CSV + schéma des colonnes.

1. domain|docId|tableId → URLs (SaaS ou /o/{domain})
2. CSV streamé vers {scratch_dir}/{tableId}.csv, octets inchangés
3. /download/table-schema → id, titre, schéma des colonnes
4. Descripteur : origin, size (sur disque), mimeType, filePath

Le fichier partiel n'est PAS supprimé en cas d'échec :
le répertoire temporaire appartient à l'appelant.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from connectors.base import FetchError, InvalidIdentifierError, TransferMetrics
from connectors.catalog.grist.client import GristClient
from connectors.catalog.grist.identifiers import GristUrls, ResourceRef, parse_resource_id
from connectors.utils import (
    LoggingProgressReporter,
    ProgressReporter,
    ProgressThrottle,
    slugify_key,
)
from models.catalog import Resource, SchemaField
from models.grist import TableSchema
from services.i18n import translate

logger = logging.getLogger("catalog.connectors.catalog.grist.fetcher")

CSV_MIME_TYPE = "text/csv"
CSV_FORMAT = "csv"
ARRAY_TYPE = "array"
DEFAULT_ARRAY_SEPARATOR = ", "


def build_schema(table_schema: TableSchema) -> list[SchemaField]:
    """Champs Frictionless → métadonnées de colonnes pour l'hôte.

    separator n'est renseigné que pour les colonnes de type "array" :
    le délimiteur du dialecte, ou ", " si celui-ci est "," ou absent.
    """
    delimiter = table_schema.delimiter
    array_separator = (
        delimiter if delimiter and delimiter != "," else DEFAULT_ARRAY_SEPARATOR
    )
    return [
        SchemaField(
            key=slugify_key(spec.name),
            title=spec.title or spec.name,
            description=spec.description,
            separator=array_separator if spec.type == ARRAY_TYPE else None,
        )
        for spec in table_schema.table_schema.fields
    ]


class GristFetcher:

    def __init__(self, client: GristClient):
        self.client = client

    def _parse(self, resource_id: str) -> ResourceRef:
        try:
            return parse_resource_id(resource_id)
        except ValueError as e:
            logger.warning(f"Invalid resource id {resource_id!r}: {e}")
            raise InvalidIdentifierError(
                connector_name=self.client.CONNECTOR_NAME,
                message=translate(
                    "invalid_resource_id",
                    self.client.settings.default_locale,
                    identifier=resource_id,
                ),
                identifier=resource_id,
            ) from e

    async def fetch(
        self,
        base_url: str,
        api_key: str,
        resource_id: str,
        scratch_dir: Union[str, Path],
        reporter: Optional[ProgressReporter] = None,
        metrics: Optional[TransferMetrics] = None,
    ) -> Resource:
        try:
            ref = self._parse(resource_id)
        except InvalidIdentifierError as e:
            if metrics:
                metrics.fail(e.message)
            raise
        urls = GristUrls(base_url, self.client.settings.grist_saas_domain)
        dest = Path(scratch_dir) / f"{ref.table_id}.csv"
        reporter = reporter or LoggingProgressReporter(f"Téléchargement {ref.table_id}", logger)

        try:
            downloaded = await self._download(urls.download_csv(ref), api_key, dest, reporter)
            table_schema: TableSchema = await self.client.get_as(
                urls.download_table_schema(ref), api_key, TableSchema, use_cache=False
            )
            size = dest.stat().st_size
        except FetchError as e:
            if metrics:
                metrics.fail(str(e.raw_error or e))
            raise
        except OSError as e:
            logger.error(f"Error in get_resource: cannot write {dest}: {e}")
            if metrics:
                metrics.fail(str(e))
            raise FetchError(
                connector_name=self.client.CONNECTOR_NAME,
                message=translate("fetch_failed", self.client.settings.default_locale),
                raw_error=e,
            ) from e

        if metrics:
            metrics.complete(bytes_downloaded=downloaded)

        return Resource(
            id=table_schema.name or ref.table_id,
            title=table_schema.title or ref.table_id,
            format=CSV_FORMAT,
            mime_type=CSV_MIME_TYPE,
            origin=urls.origin(ref.domain, ref.doc_id),
            size=size,
            file_path=str(dest),
            table_schema=build_schema(table_schema),
        )

    async def _download(
        self,
        url: str,
        api_key: str,
        dest: Path,
        reporter: ProgressReporter,
    ) -> int:
        settings = self.client.settings
        throttle = ProgressThrottle(settings.progress_interval_seconds)
        downloaded = 0

        async with self.client.stream(url, api_key) as response:
            length = response.headers.get("content-length")
            total = int(length) if length and length.isdigit() else None
            with dest.open("wb") as out:
                async for chunk in response.aiter_bytes(settings.download_chunk_size):
                    out.write(chunk)
                    downloaded += len(chunk)
                    if throttle.ready():
                        reporter.progress(downloaded, total)

        reporter.done(downloaded)
        logger.info(f"Downloaded {url} → {dest} ({downloaded} bytes)")
        return downloaded
