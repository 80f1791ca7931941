import json
from typing import Literal, TypeAlias

from opentelemetry.sdk.resources import Resource
from pydantic import AnyHttpUrl, PostgresDsn, field_validator
from pydantic_settings import BaseSettings

# Type personnalisé pour les listes configurables depuis l'environnement
ConfigurableList: TypeAlias = str | list[str] | list[AnyHttpUrl]


def parse_list_from_env(value: ConfigurableList, field_name: str = "field") -> list[str]:
    """
    Parse une liste depuis une variable d'environnement.

    Formats acceptés:
    - Liste Python directe: ['val1', 'val2']
    - Format JSON: '["val1", "val2"]'
    - Format virgules: "val1,val2,val3"
    - Chaîne vide: "" → []

    Args:
        value: La valeur à parser (chaîne ou liste)
        field_name: Nom du champ pour les messages d'erreur

    Returns:
        Liste de chaînes parsée

    Raises:
        ValueError: Si le format n'est pas valide
    """
    if isinstance(value, list):
        return [str(item) for item in value]
    if isinstance(value, str):
        value = value.strip()
        if value.startswith("[") and value.endswith("]"):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                raise ValueError(f"Format JSON invalide pour {field_name}: {value}")
        if value:
            return [item.strip() for item in value.split(",") if item.strip()]
        return []
    raise ValueError(f"Valeur invalide pour {field_name}: {value}")


class Settings(BaseSettings):
    try:
        from country_sync import __version__
    except ImportError:
        __version__ = "0.1.0"

    PROJECT_NAME: str = "country-sync"
    PROJECT_SLUG: str = "countries"
    VERSION: str = __version__
    DESCRIPTION: str = "Country synchronization and lifecycle management"

    API_VERSIONS: list[str] = ["v1"]
    API_LATEST_VERSION: str = "v1"

    # Environnement
    ENVIRONMENT: Literal["development", "staging", "production", "test"] = "development"
    DEBUG: bool = False

    # OpenTelemetry
    OTEL_SERVICE_NAME: str = "country-sync"

    # CORS, ex: ALLOWED_ORIGINS='["http://localhost:3000"]'
    ALLOWED_ORIGINS: ConfigurableList = []
    TRUSTED_HOSTS: ConfigurableList = ["localhost", "127.0.0.1"]

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: ConfigurableList) -> list[str]:
        """Parse ALLOWED_ORIGINS (virgules, JSON ou liste)."""
        return parse_list_from_env(v, "ALLOWED_ORIGINS")

    @field_validator("TRUSTED_HOSTS", mode="before")
    @classmethod
    def assemble_trusted_hosts(cls, v: ConfigurableList) -> list[str]:
        """Parse TRUSTED_HOSTS depuis une variable d'environnement."""
        return parse_list_from_env(v, "TRUSTED_HOSTS")

    # Base de données (PostgreSQL + SQLAlchemy 2.0 async)
    SQLALCHEMY_DATABASE_URI: PostgresDsn
    SQLALCHEMY_ECHO: bool = False

    # Ressource OpenTelemetry
    @property
    def OTEL_RESOURCE_ATTRIBUTES(self) -> Resource:  # noqa: N802
        """Crée l'objet Resource pour OpenTelemetry avec les attributs du service."""
        return Resource(
            attributes={
                "service.name": self.OTEL_SERVICE_NAME,
                "service.version": self.VERSION,
                "service.environment": self.ENVIRONMENT,
                "service.debug": str(self.DEBUG).lower(),
            }
        )

    def get_api_prefix(self, version: str | None = None) -> str:
        """
        Retourne le préfixe d'API pour une version donnée.

        Args:
            version: Version de l'API (ex: "v1"). Par défaut la plus récente.

        Returns:
            Préfixe (ex: "/api/v1")
        """
        version = version or self.API_LATEST_VERSION
        return f"/api/{version}"

    model_config = {
        "case_sensitive": True,
        "env_file": ".env",
        "extra": "ignore",
    }


# Instance unique des paramètres chargée depuis .env
settings = Settings()
