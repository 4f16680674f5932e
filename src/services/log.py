"""
Logging — configuration unique pour le connecteur.

Format texte pour le dev, JSON (une ligne par record) pour la prod.
Les loggers suivent la hiérarchie "catalog.connectors.*" / "catalog.services.*".
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Optional

from services.config import Settings, get_settings

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JsonFormatter(logging.Formatter):
    """Un record = un objet JSON sur une ligne."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure le logger racine "catalog" selon les settings."""
    settings = settings or get_settings()

    handler = logging.StreamHandler()
    if settings.log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )

    root = logging.getLogger("catalog")
    root.handlers = [handler]
    root.setLevel("DEBUG" if settings.debug else settings.log_level)
    root.propagate = False

    # httpx logue chaque requête en INFO, avec l'URL complète
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
