"""Schemas Pydantic pour validation des donnees."""

from country_sync.schemas.country import (
    CountryBase,
    CountryCreate,
    CountryResponse,
    CountryUpdate,
)
from country_sync.schemas.responses import (
    COMMON_RESPONSES,
    PROBLEM_CONTENT,
    problem_responses,
)

__all__ = [
    "COMMON_RESPONSES",
    "PROBLEM_CONTENT",
    "CountryBase",
    "CountryCreate",
    "CountryResponse",
    "CountryUpdate",
    "problem_responses",
]
