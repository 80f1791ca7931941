"""Configuration for the external countries API connection."""

from pydantic import AnyHttpUrl
from pydantic_settings import BaseSettings


class CountriesAPISettings(BaseSettings):
    """External countries provider settings.

    Settings can be overridden via environment variables.
    """

    COUNTRIES_API_BASE_URL: AnyHttpUrl = "https://api.sampleapis.com/countries/countries"
    COUNTRIES_API_TIMEOUT: int = 30
    COUNTRIES_API_RETRY_ATTEMPTS: int = 3
    COUNTRIES_API_RETRY_DELAY: float = 1.0

    model_config = {
        "env_prefix": "",
        "case_sensitive": True,
    }


countries_api_settings = CountriesAPISettings()
