"""
Messages traduits remontés à l'hôte.

Les erreurs visibles par l'utilisateur ne contiennent JAMAIS
le détail de l'API distante (status, body) : celui-ci part dans les logs.
"""

from __future__ import annotations

from typing import Any, Optional

from services.config import Locale, get_settings


_MESSAGES: dict[Locale, dict[str, str]] = {
    Locale.FR: {
        "fetch_failed": (
            "Erreur pendant la récupération des données, pensez à vérifier "
            "si l'url ou la clé d'API est correcte"
        ),
        "connection_failed": (
            "Erreur de connexion à l'API Grist, vérifiez l'URL et la clé d'API."
        ),
        "missing_url": (
            "La configuration du catalogue Grist nécessite une propriété \"url\"."
        ),
        "invalid_config": "Configuration du catalogue Grist invalide : {details}",
        "invalid_folder_id": "Identifiant de dossier non reconnu : {identifier}",
        "invalid_resource_id": (
            "Identifiant de ressource invalide : {identifier} "
            "(format attendu : domaine|document|table)"
        ),
        "unsupported_provider": (
            "Connecteur \"{provider}\" non supporté. Disponibles : {supported}"
        ),
        "connector_unavailable": (
            "Le connecteur \"{provider}\" est déclaré mais ne peut pas être chargé."
        ),
    },
    Locale.EN: {
        "fetch_failed": (
            "Error while fetching data, check that the url and the API key "
            "are correct"
        ),
        "connection_failed": (
            "Could not connect to the Grist API, check the URL and the API key."
        ),
        "missing_url": 'Grist catalog configuration requires a "url" property.',
        "invalid_config": "Invalid Grist catalog configuration: {details}",
        "invalid_folder_id": "Unrecognized folder identifier: {identifier}",
        "invalid_resource_id": (
            "Invalid resource identifier: {identifier} "
            "(expected format: domain|document|table)"
        ),
        "unsupported_provider": (
            "Connector \"{provider}\" is not supported. Available: {supported}"
        ),
        "connector_unavailable": (
            "Connector \"{provider}\" is registered but cannot be loaded."
        ),
    },
}


def translate(key: str, locale: Optional[Locale] = None, **variables: Any) -> str:
    """Retourne le message `key` dans la langue demandée (défaut : settings)."""
    locale = Locale(locale) if locale else get_settings().default_locale
    catalog = _MESSAGES.get(locale, _MESSAGES[Locale.FR])
    template = catalog.get(key) or _MESSAGES[Locale.FR][key]
    return template.format(**variables) if variables else template


def available_keys() -> list[str]:
    return sorted(_MESSAGES[Locale.FR].keys())
