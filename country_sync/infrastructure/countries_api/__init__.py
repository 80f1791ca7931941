"""External countries provider integration (read-only HTTP source)."""

from country_sync.infrastructure.countries_api.client import CountriesAPIClient
from country_sync.infrastructure.countries_api.config import countries_api_settings
from country_sync.infrastructure.countries_api.exceptions import (
    CountriesAPIConnectionError,
    CountriesAPIError,
    CountriesAPIOperationError,
)

__all__ = [
    "CountriesAPIClient",
    "CountriesAPIConnectionError",
    "CountriesAPIError",
    "CountriesAPIOperationError",
    "countries_api_settings",
]
