"""Annotations Pydantic réutilisables pour validation.

Ce module centralise les types annotés partagés par les schémas Country.
"""

from typing import Annotated

from pydantic import Field, StringConstraints

NonEmptyStr = Annotated[str, StringConstraints(min_length=1, strip_whitespace=True)]

CountryId = Annotated[int, Field(gt=0, description="ID unique du pays")]

# Code pays, normalisé en majuscules (clé naturelle)
Abbreviation = Annotated[
    str,
    StringConstraints(min_length=1, max_length=10, strip_whitespace=True, to_upper=True),
    Field(description="Code du pays (clé naturelle)", examples=["SN", "FR"]),
]

Population = Annotated[int, Field(ge=0, description="Population")]

Url = Annotated[str, StringConstraints(max_length=1000, strip_whitespace=True)]
