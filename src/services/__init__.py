"""
Services partagés par les connecteurs.

UNE config, UN catalogue de messages, UNE config de logs.

Modules :
  - config.py  → Settings centralisés (.env → Pydantic)
  - i18n.py    → messages traduits remontés à l'hôte
  - log.py     → setup_logging (texte ou JSON)
"""

from services.config import Environment, Locale, Settings, get_settings
from services.i18n import translate
from services.log import setup_logging

__all__ = [
    "Environment",
    "Locale",
    "Settings",
    "get_settings",
    "translate",
    "setup_logging",
]
