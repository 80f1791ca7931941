"""Endpoints API pour la gestion des pays.

Ce module expose le service de réconciliation : CRUD local avec
suppression logique, upsert par abréviation et synchronisation depuis
la source externe.
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from country_sync.core.dependencies import get_country_service
from country_sync.schemas import (
    CountryCreate,
    CountryResponse,
    CountryUpdate,
    problem_responses,
)
from country_sync.services.country_service import CountryService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/external",
    responses=problem_responses(503),
    response_model=list[CountryCreate],
    summary="Lister les pays de la source externe",
    description="Récupère et sanitise la liste complète de la source externe, sans persistance",
)
async def fetch_external_countries(
    service: CountryService = Depends(get_country_service),
) -> list[CountryCreate]:
    return await service.fetch_external_countries()


@router.post(
    "/sync",
    response_model=list[CountryResponse],
    summary="Synchroniser les pays depuis la source externe",
    responses=problem_responses(503),
)
async def sync_countries(
    service: CountryService = Depends(get_country_service),
) -> list[CountryResponse]:
    """
    Synchronise tous les pays externes.

    Échoue en bloc si la source externe ou un upsert échoue ; peut être relancé.
    """
    countries = await service.sync_countries_from_api()
    logger.info(f"Synchronisation via API: {len(countries)} pays")
    return countries


@router.get(
    "/",
    responses=problem_responses(404),
    response_model=list[CountryResponse],
    summary="Lister les pays actifs",
)
async def list_countries(
    service: CountryService = Depends(get_country_service),
) -> list[CountryResponse]:
    """Liste les pays non supprimés (404 si aucun)."""
    return await service.list_countries()


@router.post(
    "/",
    response_model=CountryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Créer un pays",
    responses=problem_responses(409),
)
async def create_country(
    country: CountryCreate,
    service: CountryService = Depends(get_country_service),
) -> CountryResponse:
    """Crée un pays (409 si le nom ou l'abréviation existe déjà)."""
    return await service.create_country(country)


@router.put(
    "/",
    response_model=CountryResponse,
    summary="Créer ou mettre à jour un pays par abréviation",
)
async def upsert_country(
    country: CountryCreate,
    service: CountryService = Depends(get_country_service),
) -> CountryResponse:
    return await service.upsert_country(country)


@router.get(
    "/{country_id}",
    responses=problem_responses(404),
    response_model=CountryResponse,
    summary="Récupérer un pays par ID",
)
async def get_country(
    country_id: int,
    service: CountryService = Depends(get_country_service),
) -> CountryResponse:
    return await service.get_country(country_id)


@router.patch(
    "/{country_id}",
    responses=problem_responses(404),
    response_model=CountryResponse,
    summary="Mettre à jour partiellement un pays",
)
async def update_country(
    country_id: int,
    country_update: CountryUpdate,
    service: CountryService = Depends(get_country_service),
) -> CountryResponse:
    """Met à jour un pays, y compris s'il est supprimé logiquement."""
    return await service.update_country(country_id, country_update)


@router.delete(
    "/{country_id}",
    response_model=CountryResponse,
    summary="Supprimer un pays",
    description="Suppression logique (cascade vers les visites) ou physique avec hard=true",
)
async def delete_country(
    country_id: int,
    hard: bool = Query(False, description="Suppression physique, sans cascade"),
    service: CountryService = Depends(get_country_service),
) -> CountryResponse:
    return await service.delete_country(country_id, hard=hard)
