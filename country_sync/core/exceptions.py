"""
RFC 9457 Problem Details pour HTTP APIs - exceptions du domaine Country.

Les erreurs du service de réconciliation héritent de `ProblemException`
(fastapi-problem-details) et sont converties en réponses
`application/problem+json` par les handlers installés via `init_app`.

Ce module porte aussi la frontière unique de traduction des erreurs du
store (SQLAlchemy / driver PostgreSQL) vers des catégories métier.
"""

from enum import Enum

from fastapi import status
from fastapi_problem_details import Problem, ProblemException
from sqlalchemy.exc import IntegrityError, NoResultFound

# SQLSTATE PostgreSQL pour une violation de contrainte d'unicité
UNIQUE_VIOLATION_SQLSTATE = "23505"


class DomainProblemException(ProblemException):
    """Base des erreurs métier ; `str(exc)` renvoie le détail du problème."""

    def __str__(self) -> str:
        return self.detail or super().__str__()


class CountryNotFoundError(DomainProblemException):
    """
    Exception levée lorsqu'un pays est absent ou exclu par le filtre `deleted`.

    Attributes:
        status: Code HTTP 404 (Not Found)
        country_id: ID recherché, None pour une liste vide

    Example:
        ```python
        if country is None:
            raise CountryNotFoundError(country_id=country_id)
        ```
    """

    def __init__(self, country_id: int | None = None, detail: str | None = None):
        """
        Initialise une exception pays introuvable.

        Args:
            country_id: ID du pays recherché (None pour une liste vide)
            detail: Description détaillée (générée si absente)
        """
        if detail is None:
            detail = (
                f"Country with id #{country_id} not found"
                if country_id is not None
                else "Countries not found"
            )
        super().__init__(
            status=status.HTTP_404_NOT_FOUND,
            title="Country Not Found",
            detail=detail,
            type="/problems/country-not-found",
            country_id=country_id,
        )
        self.country_id = country_id


class CountryAlreadyExistsError(DomainProblemException):
    """
    Exception levée lorsqu'une création viole l'unicité de `name` ou `abbreviation`.

    Attributes:
        status: Code HTTP 409 (Conflict)
    """

    def __init__(self, name: str, abbreviation: str):
        """
        Initialise une exception de conflit sur un pays.

        Args:
            name: Nom du pays en conflit
            abbreviation: Abréviation (clé naturelle) en conflit
        """
        super().__init__(
            status=status.HTTP_409_CONFLICT,
            title="Country Already Exists",
            detail=(
                f'Country with name "{name}" or abbreviation "{abbreviation}" already exists'
            ),
            type="/problems/country-already-exists",
            name=name,
            abbreviation=abbreviation,
        )
        self.name = name
        self.abbreviation = abbreviation


class UpstreamError(DomainProblemException):
    """
    Exception levée lorsque la source externe des pays est injoignable ou
    renvoie une réponse inexploitable.

    Attributes:
        status: Code HTTP 503 (Service Unavailable)

    Example:
        ```python
        try:
            raw = await client.fetch_all()
        except CountriesAPIError as e:
            raise UpstreamError(detail=str(e)) from e
        ```
    """

    def __init__(
        self,
        detail: str = "External countries source is unavailable",
        retry_after: int | None = None,
    ):
        super().__init__(
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
            title="Upstream Unavailable",
            detail=detail,
            type="/problems/upstream-unavailable",
            headers={"Retry-After": str(retry_after)} if retry_after is not None else None,
        )


class StoreErrorKind(str, Enum):
    """Catégories d'erreurs du store ayant une signification métier."""

    NOT_FOUND = "not_found"
    UNIQUE_VIOLATION = "unique_violation"


def _sqlstate(exc: IntegrityError) -> str | None:
    """Extrait le SQLSTATE du driver (asyncpg: sqlstate, psycopg: pgcode)."""
    orig = exc.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def classify_store_error(exc: BaseException) -> StoreErrorKind | None:
    """
    Traduit une erreur du store en catégorie métier.

    Seul point du code qui inspecte les erreurs SQLAlchemy / driver. Toute
    erreur non reconnue renvoie None et doit être propagée telle quelle.

    Args:
        exc: Exception levée par la couche de persistance

    Returns:
        StoreErrorKind correspondant, ou None si l'erreur n'est pas reconnue
    """
    if isinstance(exc, NoResultFound):
        return StoreErrorKind.NOT_FOUND
    if isinstance(exc, IntegrityError) and _sqlstate(exc) == UNIQUE_VIOLATION_SQLSTATE:
        return StoreErrorKind.UNIQUE_VIOLATION
    return None


__all__ = [
    "CountryAlreadyExistsError",
    "CountryNotFoundError",
    "DomainProblemException",
    "Problem",
    "ProblemException",
    "StoreErrorKind",
    "UNIQUE_VIOLATION_SQLSTATE",
    "UpstreamError",
    "classify_store_error",
]
