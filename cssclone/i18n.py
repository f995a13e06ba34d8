"""
CSSClone — duplicated declaration detector for stylesheets.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import locale
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

DEFAULT_LANGUAGE: Final = "en"
AUTO_LANGUAGE: Final = "auto"
SUPPORTED_LANGUAGES: Final = ("en", "fr")
LANGUAGE_CHOICES: Final = (AUTO_LANGUAGE, *SUPPORTED_LANGUAGES)

MESSAGES: Final[Mapping[str, Mapping[str, str]]] = {
    "no-path-error": {
        "en": "Please provide at least one CSS file path.",
        "fr": "Veuillez indiquer au moins un chemin de fichier CSS.",
    },
    "duplicated-pattern": {
        "en": "Duplicated declaration groups found:",
        "fr": "Groupes de déclarations dupliqués trouvés :",
    },
    "share": {
        "en": "share",
        "fr": "partagent",
    },
    "rules": {
        "en": "rules",
        "fr": "règles",
    },
    "no-duplication-found": {
        "en": "No duplication found.",
        "fr": "Aucune duplication trouvée.",
    },
    "invalid-min-set-size": {
        "en": "Minimum set size must be a positive integer, got {value}.",
        "fr": "La taille minimale doit être un entier positif, reçu {value}.",
    },
    "ignored-integer": {
        "en": "Ignoring extra numeric argument: {value}",
        "fr": "Argument numérique supplémentaire ignoré : {value}",
    },
    "file-error": {
        "en": "Cannot process stylesheet: {error}",
        "fr": "Impossible de traiter la feuille de style : {error}",
    },
    "parse-error": {
        "en": "Malformed stylesheet: {error}",
        "fr": "Feuille de style invalide : {error}",
    },
}


def _language_part(locale_name: str | None) -> str | None:
    if not locale_name:
        return None
    head = locale_name.replace("-", "_").split("_", 1)[0].split(".", 1)[0]
    return head.lower() or None


def system_locale(environ: Mapping[str, str] | None = None) -> str | None:
    """Best-effort name of the runtime locale, e.g. ``fr_FR``."""
    try:
        name = locale.getlocale()[0]
    except ValueError:
        name = None
    if name and name not in {"C", "POSIX"}:
        return name
    env = os.environ if environ is None else environ
    for key in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = env.get(key)
        if value and value not in {"C", "POSIX"}:
            return value
    return None


def select_language(configured: str | None, locale_name: str | None) -> str:
    choice = (configured or "").strip().lower()
    if choice in SUPPORTED_LANGUAGES:
        return choice
    if choice == AUTO_LANGUAGE:
        detected = _language_part(locale_name)
        if detected in SUPPORTED_LANGUAGES:
            return detected
    return DEFAULT_LANGUAGE


@dataclass(frozen=True, slots=True)
class Messages:
    lang: str = DEFAULT_LANGUAGE

    @classmethod
    def from_config(
        cls, configured: str | None, *, locale_name: str | None = None
    ) -> Messages:
        if locale_name is None:
            locale_name = system_locale()
        return cls(lang=select_language(configured, locale_name))

    def get(self, key: str, **fmt: object) -> str:
        translations = MESSAGES[key]
        text = translations.get(self.lang, translations[DEFAULT_LANGUAGE])
        return text.format(**fmt) if fmt else text
