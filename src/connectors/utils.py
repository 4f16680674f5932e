"""
Utilitaires partagés par les connecteurs de catalogue.
"""

from __future__ import annotations

import logging
import re
import time
import unicodedata
from typing import Callable, Optional, Protocol

logger = logging.getLogger("catalog.connectors.utils")


# ──────────────────────────────────────────────
# STRING
# ──────────────────────────────────────────────

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify_key(name: str) -> str:
    """Clé de colonne : minuscules, ASCII, séquences non alphanumériques → '_'.

    "Prénom du client" → "prenom_du_client"
    """
    ascii_name = (
        unicodedata.normalize("NFKD", name)
        .encode("ascii", "ignore")
        .decode("ascii")
    )
    slug = _NON_ALNUM.sub("_", ascii_name.lower()).strip("_")
    return slug or "field"


def truncate(text: Optional[str], max_length: int = 500) -> Optional[str]:
    if text is None:
        return None
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."


# ──────────────────────────────────────────────
# PROGRESS
# ──────────────────────────────────────────────


class ProgressThrottle:
    """Laisse passer au plus un rapport de progression par intervalle."""

    def __init__(
        self,
        interval_seconds: float = 0.5,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.interval_seconds = interval_seconds
        self._clock = clock
        self._last: Optional[float] = None

    def ready(self) -> bool:
        now = self._clock()
        if self._last is not None and now - self._last < self.interval_seconds:
            return False
        self._last = now
        return True


class ProgressReporter(Protocol):
    """Ce que l'hôte fournit pour suivre un téléchargement."""

    def progress(self, downloaded: int, total: Optional[int]) -> None:
        ...

    def done(self, total: int) -> None:
        ...


class LoggingProgressReporter:
    """Reporter par défaut : écrit la progression dans les logs."""

    def __init__(self, label: str, log: Optional[logging.Logger] = None):
        self.label = label
        self.log = log or logger

    def progress(self, downloaded: int, total: Optional[int]) -> None:
        if total:
            self.log.info(
                f"{self.label}: {format_bytes(downloaded)} / {format_bytes(total)}"
            )
        else:
            self.log.info(f"{self.label}: {format_bytes(downloaded)}")

    def done(self, total: int) -> None:
        self.log.info(f"{self.label}: terminé ({format_bytes(total)})")


def format_bytes(size: int) -> str:
    if size < 1024:
        return f"{size} o"
    value = size / 1024
    for unit in ("Ko", "Mo"):
        if value < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} Go"
