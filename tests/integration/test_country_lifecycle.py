"""
Tests d'intégration du cycle de vie des pays avec PostgreSQL réel.

Vérifie l'upsert par clé naturelle, la suppression logique en cascade vers
les visites, la suppression physique et la synchronisation depuis la source
externe (client simulé).
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import NoResultFound

from country_sync.core.exceptions import CountryAlreadyExistsError, CountryNotFoundError
from country_sync.models import Country, Visit
from country_sync.schemas.country import CountryCreate, CountryUpdate
from country_sync.services.country_service import CountryService

pytestmark = pytest.mark.integration


@pytest.fixture
def countries_client():
    client = MagicMock()
    client.fetch_all = AsyncMock(return_value=[])
    return client


@pytest.fixture
def service(session_maker, countries_client) -> CountryService:
    return CountryService(session_maker, countries_client)


async def _add_visits(session_maker, country_id: int, count: int) -> None:
    async with session_maker() as session:
        session.add_all(
            [
                Visit(country_id=country_id, visited_on=date(2024, 1, i + 1))
                for i in range(count)
            ]
        )
        await session.commit()


async def _visit_flags(session_maker, country_id: int) -> list[bool]:
    async with session_maker() as session:
        result = await session.execute(
            select(Visit.deleted).where(Visit.country_id == country_id).order_by(Visit.id)
        )
        return list(result.scalars().all())


class TestCreateAndRead:
    async def test_create_then_get_and_list(self, service):
        created = await service.create_country(
            CountryCreate(name="Senegal", abbreviation="sn", capital="Dakar")
        )

        fetched = await service.get_country(created.id)
        listed = await service.list_countries()

        assert fetched == created
        assert fetched.abbreviation == "SN"
        assert [c.id for c in listed] == [created.id]

    async def test_create_duplicate_abbreviation(self, service):
        await service.create_country(CountryCreate(name="Senegal", abbreviation="SN"))

        with pytest.raises(CountryAlreadyExistsError):
            await service.create_country(CountryCreate(name="Sénégal", abbreviation="SN"))

    async def test_list_empty_is_error(self, service):
        with pytest.raises(CountryNotFoundError):
            await service.list_countries()


class TestUpsert:
    async def test_upsert_is_idempotent_on_abbreviation(self, service, db_session):
        first = await service.upsert_country(
            CountryCreate(name="Senegal", abbreviation="SN", population=100)
        )
        second = await service.upsert_country(
            CountryCreate(name="Senegal", abbreviation="SN", population=200)
        )

        assert second.id == first.id
        assert second.population == 200
        count = await db_session.scalar(select(func.count()).select_from(Country))
        assert count == 1

    async def test_upsert_keeps_soft_deleted_flag(self, service):
        created = await service.create_country(CountryCreate(name="Mali", abbreviation="ML"))
        await service.delete_country(created.id)

        updated = await service.upsert_country(
            CountryCreate(name="Mali", abbreviation="ML", capital="Bamako")
        )

        assert updated.capital == "Bamako"
        with pytest.raises(CountryNotFoundError):
            await service.get_country(created.id)


class TestUpdate:
    async def test_update_soft_deleted_country(self, service):
        created = await service.create_country(CountryCreate(name="Mali", abbreviation="ML"))
        await service.delete_country(created.id)

        updated = await service.update_country(created.id, CountryUpdate(capital="Bamako"))

        assert updated.capital == "Bamako"
        assert updated.name == "Mali"

    async def test_update_missing_country(self, service):
        with pytest.raises(CountryNotFoundError):
            await service.update_country(999, CountryUpdate(capital="Nowhere"))


class TestDelete:
    async def test_soft_delete_cascades_only_to_own_visits(self, service, session_maker):
        senegal = await service.create_country(CountryCreate(name="Senegal", abbreviation="SN"))
        france = await service.create_country(CountryCreate(name="France", abbreviation="FR"))
        await _add_visits(session_maker, senegal.id, 3)
        await _add_visits(session_maker, france.id, 2)

        deleted = await service.delete_country(senegal.id)

        assert deleted.id == senegal.id
        assert await _visit_flags(session_maker, senegal.id) == [True, True, True]
        assert await _visit_flags(session_maker, france.id) == [False, False]
        with pytest.raises(CountryNotFoundError):
            await service.get_country(senegal.id)
        assert [c.id for c in await service.list_countries()] == [france.id]

    async def test_soft_delete_without_visits(self, service):
        created = await service.create_country(CountryCreate(name="Chad", abbreviation="TD"))

        deleted = await service.delete_country(created.id)

        assert deleted.id == created.id

    async def test_hard_delete_leaves_visits(self, service, session_maker, db_session):
        created = await service.create_country(CountryCreate(name="Senegal", abbreviation="SN"))
        await _add_visits(session_maker, created.id, 2)

        deleted = await service.delete_country(created.id, hard=True)

        assert deleted.id == created.id
        assert await db_session.get(Country, created.id) is None
        # Références pendantes, non marquées supprimées
        assert await _visit_flags(session_maker, created.id) == [False, False]

    async def test_delete_missing_country(self, service):
        with pytest.raises(NoResultFound):
            await service.delete_country(999)

        with pytest.raises(NoResultFound):
            await service.delete_country(999, hard=True)


class TestSync:
    async def test_sync_from_api(self, service, countries_client, db_session):
        countries_client.fetch_all.return_value = [
            {"id": 1, "name": "Senegal", "abbreviation": "SN", "population": "16,743,927"},
            {"id": 2, "name": "France", "abbreviation": "FR", "media": {"flag": "f.svg"}},
        ]

        first = await service.sync_countries_from_api()
        second = await service.sync_countries_from_api()

        assert len(first) == 2
        assert sorted(c.id for c in first) == sorted(c.id for c in second)
        count = await db_session.scalar(select(func.count()).select_from(Country))
        assert count == 2

        france = next(c for c in second if c.abbreviation == "FR")
        assert france.flag == "f.svg"

    async def test_sync_duplicate_abbreviation_in_listing(self, service, countries_client):
        """Deux enregistrements avec la même clé naturelle convergent vers une ligne."""
        countries_client.fetch_all.return_value = [
            {"name": "Senegal", "abbreviation": "SN"},
            {"name": "Senegal", "abbreviation": "SN"},
        ]

        result = await service.sync_countries_from_api()

        assert len(result) == 2
        assert result[0].id == result[1].id
