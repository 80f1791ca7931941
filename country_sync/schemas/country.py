"""Schémas Pydantic pour Country.

- CountryCreate : forme de création / upsert (entrée locale ou source externe)
- CountryUpdate : mise à jour partielle
- CountryResponse : forme publique, sans champs internes
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from country_sync.schemas.utils import Abbreviation, CountryId, NonEmptyStr, Population, Url


class CountryBase(BaseModel):
    """Schéma de base partagé pour Country."""

    name: NonEmptyStr = Field(..., max_length=255, description="Nom du pays", examples=["Senegal"])
    abbreviation: Abbreviation
    capital: str | None = Field(None, max_length=255, description="Capitale")
    currency: str | None = Field(None, max_length=50, description="Devise", examples=["XOF"])
    phone: str | None = Field(None, max_length=50, description="Indicatif téléphonique")
    population: Population | None = None
    flag: Url | None = Field(None, description="URL du drapeau")
    emblem: Url | None = Field(None, description="URL de l'emblème")
    orthographic: Url | None = Field(None, description="URL de la projection orthographique")


class CountryCreate(CountryBase):
    """Schéma pour création ou upsert d'un pays."""

    pass


class CountryUpdate(BaseModel):
    """Schéma pour mise à jour partielle (seuls les champs fournis sont appliqués)."""

    name: NonEmptyStr | None = Field(None, max_length=255)
    abbreviation: Abbreviation | None = None
    capital: str | None = Field(None, max_length=255)
    currency: str | None = Field(None, max_length=50)
    phone: str | None = Field(None, max_length=50)
    population: Population | None = None
    flag: Url | None = None
    emblem: Url | None = None
    orthographic: Url | None = None

    @field_validator("name", "abbreviation")
    @classmethod
    def reject_explicit_null(cls, v: str | None) -> str:
        """Les colonnes NOT NULL peuvent être omises, pas mises à null."""
        if v is None:
            raise ValueError("Ce champ ne peut pas être null")
        return v


class CountryResponse(CountryBase):
    """Schéma de réponse publique."""

    id: CountryId

    model_config = ConfigDict(from_attributes=True)
