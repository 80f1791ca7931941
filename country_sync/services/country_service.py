"""Service metier de reconciliation des pays.

Ce module implemente le cycle de vie des pays :
- synchronisation depuis la source externe (upsert par cle naturelle `abbreviation`)
- CRUD local avec suppression logique propagee aux visites

Chaque operation ouvre sa propre session a partir de la fabrique injectee,
ce qui permet d'executer les upserts de synchronisation en parallele.
"""

import asyncio
import logging

from opentelemetry import trace
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from country_sync.core.exceptions import (
    CountryAlreadyExistsError,
    CountryNotFoundError,
    StoreErrorKind,
    UpstreamError,
    classify_store_error,
)
from country_sync.infrastructure.countries_api.client import CountriesAPIClient
from country_sync.infrastructure.countries_api.exceptions import CountriesAPIError
from country_sync.models.country import Country
from country_sync.models.visit import Visit
from country_sync.schemas.country import CountryCreate, CountryResponse, CountryUpdate
from country_sync.services.country_sanitizer import sanitize_country, sanitize_external_country

logger = logging.getLogger(__name__)

tracer = trace.get_tracer(__name__)


class CountryService:
    """
    Reconciliation des pays entre la source externe et PostgreSQL.

    Le service ne detient aucun etat mutable propre : uniquement la fabrique
    de sessions et le client de la source externe, tous deux injectes.

    Example:
        ```python
        service = CountryService(async_session_maker, CountriesAPIClient())
        countries = await service.sync_countries_from_api()
        ```
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        countries_client: CountriesAPIClient,
    ):
        self._session_maker = session_maker
        self._countries_client = countries_client

    async def fetch_external_countries(self) -> list[CountryCreate]:
        """
        Recupere la liste complete des pays externes, sanitisee.

        L'ordre de la source est conserve. Aucun resultat partiel.

        Returns:
            Liste de CountryCreate

        Raises:
            UpstreamError: Si la source est injoignable ou sa reponse inexploitable
        """
        with tracer.start_as_current_span("fetch_external_countries") as span:
            try:
                raw_countries = await self._countries_client.fetch_all("")
            except CountriesAPIError as e:
                span.record_exception(e)
                logger.error(f"Echec de recuperation des pays externes: {e.message}")
                raise UpstreamError(
                    detail=f"Unable to fetch external countries: {e.message}"
                ) from e

            try:
                countries = [sanitize_external_country(raw) for raw in raw_countries]
            except PydanticValidationError as e:
                span.record_exception(e)
                raise UpstreamError(
                    detail=(
                        "External countries source returned unusable records: "
                        f"{e.error_count()} error(s)"
                    )
                ) from e

            span.set_attribute("countries.count", len(countries))
            return countries

    async def sync_countries_from_api(self) -> list[CountryResponse]:
        """
        Synchronise tous les pays externes via upsert_country.

        Les upserts sont executes en parallele (gather) ; une sortie par entree,
        sans garantie d'ordre. Le premier echec fait echouer l'ensemble (fail-fast),
        une nouvelle synchronisation complete peut etre relancee sans risque.

        Returns:
            Liste des pays upsertes

        Raises:
            UpstreamError: Si la source externe echoue
        """
        with tracer.start_as_current_span("sync_countries_from_api") as span:
            countries = await self.fetch_external_countries()
            upserted = await asyncio.gather(*(self.upsert_country(c) for c in countries))

            span.set_attribute("countries.count", len(upserted))
            span.add_event("Synchronisation terminee")
            logger.info(f"Synchronisation des pays terminee: {len(upserted)} pays upsertes")
            return list(upserted)

    async def upsert_country(self, data: CountryCreate) -> CountryResponse:
        """
        Cree ou met a jour un pays selon son abbreviation.

        Le drapeau `deleted` n'est jamais modifie : un pays supprime logiquement
        reste supprime apres mise a jour de ses champs.

        Args:
            data: Donnees du pays

        Returns:
            Pays cree ou mis a jour
        """
        with tracer.start_as_current_span("upsert_country") as span:
            span.set_attribute("country.abbreviation", data.abbreviation)

            values = data.model_dump()
            stmt = (
                pg_insert(Country)
                .values(**values)
                .on_conflict_do_update(
                    index_elements=[Country.abbreviation],
                    set_={**values, "updated_at": func.now()},
                )
                .returning(Country)
                .execution_options(populate_existing=True)
            )

            async with self._session_maker() as session:
                result = await session.execute(stmt)
                country = result.scalar_one()
                response = sanitize_country(country)
                await session.commit()

            span.set_attribute("country.id", response.id)
            return response

    async def get_country(self, country_id: int) -> CountryResponse:
        """
        Recupere un pays non supprime par son ID.

        Raises:
            CountryNotFoundError: Si le pays est absent ou supprime logiquement
        """
        with tracer.start_as_current_span("get_country") as span:
            span.set_attribute("country.id", country_id)

            async with self._session_maker() as session:
                result = await session.execute(
                    select(Country).where(
                        Country.id == country_id,
                        Country.deleted.is_(False),
                    )
                )
                country = result.scalar_one_or_none()

            if country is None:
                span.add_event("Pays non trouve")
                raise CountryNotFoundError(country_id=country_id)

            return sanitize_country(country)

    async def list_countries(self) -> list[CountryResponse]:
        """
        Liste tous les pays non supprimes.

        Une liste vide est une erreur, pas un succes vide.

        Raises:
            CountryNotFoundError: Si aucun pays actif n'existe
        """
        with tracer.start_as_current_span("list_countries") as span:
            async with self._session_maker() as session:
                result = await session.execute(
                    select(Country).where(Country.deleted.is_(False)).order_by(Country.id)
                )
                countries = result.scalars().all()

            span.set_attribute("countries.count", len(countries))
            if not countries:
                raise CountryNotFoundError()

            return [sanitize_country(country) for country in countries]

    async def update_country(self, country_id: int, data: CountryUpdate) -> CountryResponse:
        """
        Met a jour partiellement un pays, supprime logiquement ou non.

        Seuls les champs explicitement fournis sont appliques.

        Raises:
            CountryNotFoundError: Si aucun pays n'a cet ID
        """
        with tracer.start_as_current_span("update_country") as span:
            span.set_attribute("country.id", country_id)

            values = data.model_dump(exclude_unset=True)
            if values:
                stmt = (
                    update(Country)
                    .where(Country.id == country_id)
                    .values(**values)
                    .returning(Country)
                    .execution_options(populate_existing=True)
                )
            else:
                stmt = select(Country).where(Country.id == country_id)

            async with self._session_maker() as session:
                try:
                    result = await session.execute(stmt)
                    country = result.scalar_one()
                except SQLAlchemyError as e:
                    if classify_store_error(e) is StoreErrorKind.NOT_FOUND:
                        raise CountryNotFoundError(country_id=country_id) from e
                    raise
                response = sanitize_country(country)
                await session.commit()

            span.set_attribute("country.fields_updated", ",".join(sorted(values)))
            return response

    async def delete_country(self, country_id: int, hard: bool = False) -> CountryResponse:
        """
        Supprime un pays.

        - hard=True : suppression physique, sans cascade vers les visites
          (les visites gardent une reference pendante).
        - hard=False : `deleted=True` sur le pays, puis sur toutes ses visites.
          Les deux ecritures sont validees separement (non transactionnel) :
          si la cascade echoue, le pays reste marque supprime.

        Les erreurs du store (ex: ID inexistant) sont propagees telles quelles.

        Returns:
            Dernier etat connu du pays
        """
        with tracer.start_as_current_span("delete_country") as span:
            span.set_attribute("country.id", country_id)
            span.set_attribute("country.hard_delete", hard)

            async with self._session_maker() as session:
                if hard:
                    result = await session.execute(
                        delete(Country).where(Country.id == country_id).returning(Country)
                    )
                    response = sanitize_country(result.scalar_one())
                    await session.commit()
                    logger.info(f"Pays #{country_id} supprime physiquement")
                    return response

                # 1. Drapeau du pays
                result = await session.execute(
                    update(Country)
                    .where(Country.id == country_id)
                    .values(deleted=True)
                    .returning(Country)
                    .execution_options(populate_existing=True)
                )
                response = sanitize_country(result.scalar_one())
                await session.commit()

                # 2. Cascade vers les visites
                visits_result = await session.execute(
                    update(Visit).where(Visit.country_id == country_id).values(deleted=True)
                )
                await session.commit()

            span.set_attribute("visits.deleted_count", visits_result.rowcount)
            logger.info(
                f"Pays #{country_id} supprime logiquement ({visits_result.rowcount} visites marquees)"
            )
            return response

    async def create_country(self, data: CountryCreate) -> CountryResponse:
        """
        Cree un pays sans condition.

        Raises:
            CountryAlreadyExistsError: Si `name` ou `abbreviation` existe deja
        """
        with tracer.start_as_current_span("create_country") as span:
            span.set_attribute("country.abbreviation", data.abbreviation)

            country = Country(**data.model_dump())
            async with self._session_maker() as session:
                session.add(country)
                try:
                    await session.flush()
                except SQLAlchemyError as e:
                    if classify_store_error(e) is StoreErrorKind.UNIQUE_VIOLATION:
                        span.add_event("Conflit d'unicite")
                        raise CountryAlreadyExistsError(
                            name=data.name, abbreviation=data.abbreviation
                        ) from e
                    raise
                response = sanitize_country(country)
                await session.commit()

            span.set_attribute("country.id", response.id)
            return response
