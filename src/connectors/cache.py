"""
ResponseCache — Mémorisation courte des réponses JSON.

Réafficher le même dossier dans l'hôte ne doit pas multiplier
les appels distants. Clé = (url, credential), durée de vie fixe.

Design decisions :
- Cache possédé par le client (pas de global process) → injectable
- NullCache pour les tests déterministes ou pour désactiver
- Seules les réponses réussies sont mémorisées
- Le credential n'est jamais stocké en clair dans la clé
- Copies en entrée et en sortie : une entrée mémorisée n'est jamais modifiée
"""

from __future__ import annotations

import copy
import hashlib
import time
from typing import Any, Callable, Optional

CacheKey = tuple[str, str]


def make_key(url: str, credential: str) -> CacheKey:
    digest = hashlib.sha256(credential.encode("utf-8")).hexdigest()
    return (url, digest)


class ResponseCache:
    """Cache mémoire à durée de vie fixe (TTL)."""

    def __init__(
        self,
        ttl_seconds: float = 300.0,
        max_entries: int = 512,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[CacheKey, tuple[float, Any]] = {}

    def get(self, url: str, credential: str) -> Optional[Any]:
        key = make_key(url, credential)
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return copy.deepcopy(value)

    def set(self, url: str, credential: str, value: Any) -> None:
        if len(self._entries) >= self.max_entries:
            self._evict()
        self._entries[make_key(url, credential)] = (
            self._clock() + self.ttl_seconds,
            copy.deepcopy(value),
        )

    def clear(self) -> None:
        self._entries.clear()

    def _evict(self) -> None:
        now = self._clock()
        expired = [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        # Toujours plein : on retire la plus ancienne insertion
        if len(self._entries) >= self.max_entries:
            oldest = next(iter(self._entries))
            del self._entries[oldest]

    def __len__(self) -> int:
        return len(self._entries)


class NullCache(ResponseCache):
    """Ne mémorise rien."""

    def __init__(self) -> None:
        super().__init__(ttl_seconds=0)

    def get(self, url: str, credential: str) -> Optional[Any]:
        return None

    def set(self, url: str, credential: str, value: Any) -> None:
        return None
