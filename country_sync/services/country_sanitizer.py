"""Sanitisation des enregistrements Country.

Deux fonctions pures, sans mode d'échec sur une entrée bien formée :
- sanitize_country : entité stockée -> forme publique (sans champs internes)
- sanitize_external_country : enregistrement brut du fournisseur -> forme de création
"""

import math
from collections.abc import Mapping
from typing import Any

from country_sync.models.country import Country
from country_sync.schemas.country import CountryCreate, CountryResponse

# Champs média du fournisseur, aplatis au premier niveau
MEDIA_FIELDS = ("flag", "emblem", "orthographic")


def _clean_str(value: Any) -> str | None:
    """Normalise une chaîne du fournisseur (espaces, chaîne vide -> None)."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _to_int(value: Any) -> int | None:
    """Convertit une population ("1 234", "1,234", 1234.0) en entier (NaN/Infinity -> None)."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    digits = str(value).strip().replace(",", "").replace(" ", "")
    return int(digits) if digits.isdigit() else None


def sanitize_country(country: Country) -> CountryResponse:
    """
    Convertit un pays persisté en forme publique.

    Les champs internes (`deleted`, `created_at`, `updated_at`) ne sont pas exposés.
    """
    return CountryResponse.model_validate(country)


def sanitize_external_country(raw: Mapping[str, Any]) -> CountryCreate:
    """
    Convertit un enregistrement brut du fournisseur en CountryCreate.

    - aplatit `media.{flag,emblem,orthographic}` (un champ de premier niveau l'emporte)
    - normalise les chaînes et met `abbreviation` en majuscules
    - convertit `population` en entier (None si non numérique)
    - ignore l'`id` du fournisseur, l'identité locale est attribuée par le store

    Args:
        raw: Enregistrement tel que renvoyé par la source externe

    Returns:
        CountryCreate prêt pour create/upsert
    """
    media = raw.get("media") or {}
    fields: dict[str, Any] = {
        "name": _clean_str(raw.get("name")),
        "abbreviation": _clean_str(raw.get("abbreviation")),
        "capital": _clean_str(raw.get("capital")),
        "currency": _clean_str(raw.get("currency")),
        "phone": _clean_str(raw.get("phone")),
        "population": _to_int(raw.get("population")),
    }
    for field in MEDIA_FIELDS:
        fields[field] = _clean_str(raw.get(field) or media.get(field))

    return CountryCreate(**fields)
