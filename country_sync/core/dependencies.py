"""Dependances FastAPI pour l'injection de services."""

from fastapi import Depends, Request

from country_sync.core.database import async_session_maker
from country_sync.infrastructure.countries_api.client import CountriesAPIClient
from country_sync.services.country_service import CountryService


def get_countries_client(request: Request) -> CountriesAPIClient:
    """
    Recupere le client de la source externe depuis l'etat de l'application.

    Le client est initialise dans le lifespan de l'application (main.py)
    et stocke dans app.state.countries_client.

    Raises:
        RuntimeError: Si le client n'est pas initialise
    """
    countries_client = getattr(request.app.state, "countries_client", None)
    if countries_client is None:
        raise RuntimeError(
            "Countries API client not initialized. "
            "Ensure the application lifespan properly initializes app.state.countries_client"
        )
    return countries_client


def get_country_service(
    countries_client: CountriesAPIClient = Depends(get_countries_client),
) -> CountryService:
    """Construit le service de reconciliation avec ses dependances."""
    return CountryService(async_session_maker, countries_client)
