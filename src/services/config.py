"""
Settings — Configuration centralisée du connecteur.

Toutes les variables d'environnement sont validées ICI.
Aucun os.getenv() ailleurs dans le code.

Usage :
    from services.config import get_settings

    settings = get_settings()
    settings.grist_saas_domain
    settings.cache_ttl_seconds
    settings.default_locale
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Environment(str, Enum):
    """Environnement d'exécution."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Locale(str, Enum):
    """Langues disponibles pour les messages affichés à l'utilisateur."""
    FR = "fr"
    EN = "en"


class Settings(BaseSettings):
    """
    Configuration centralisée du connecteur.

    Charge depuis .env ou variables d'environnement.
    Chaque champ a une valeur par défaut raisonnable pour le dev.
    La configuration du catalogue (url, apiKey) n'est PAS ici :
    elle est fournie par l'hôte à chaque appel.
    """

    # ── Environnement ──
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False
    app_name: str = "catalog-grist"
    app_version: str = "0.1.0"

    # ── Grist ──
    grist_saas_domain: str = Field(
        default="getgrist.com",
        description="Domaine SaaS : les documents y sont routés sans /o/{domain}",
    )

    # ── HTTP ──
    request_timeout_seconds: Optional[float] = Field(
        default=30.0,
        description="Timeout du transport httpx (None = pas de timeout)",
    )
    cache_ttl_seconds: float = Field(
        default=300.0,
        ge=0,
        le=3600,
        description="Durée de vie des réponses JSON mémorisées",
    )

    # ── Téléchargement ──
    download_chunk_size: int = Field(default=64 * 1024, ge=1024)
    progress_interval_seconds: float = Field(default=0.5, ge=0)

    # ── Messages ──
    default_locale: Locale = Field(
        default=Locale.FR,
        description="Langue des messages d'erreur remontés à l'hôte",
    )

    # ── Logging ──
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="text")

    # ── Validators ──

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in ("text", "json"):
            raise ValueError("log_format must be 'text' or 'json'")
        return v_lower

    @field_validator("grist_saas_domain")
    @classmethod
    def validate_saas_domain(cls, v: str) -> str:
        cleaned = v.strip().lower().lstrip(".")
        if not cleaned:
            raise ValueError("grist_saas_domain cannot be empty")
        return cleaned

    # ── Properties ──

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    @property
    def cache_enabled(self) -> bool:
        return self.cache_ttl_seconds > 0

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Singleton des settings.

    Chargé une seule fois, mis en cache.
    Usage : from services.config import get_settings
    """
    return Settings()
