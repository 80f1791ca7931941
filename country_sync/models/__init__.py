# Modèles SQLAlchemy pour country-sync
#
# - Country: entité réconciliée avec la source externe (clé naturelle: abbreviation)
# - Visit: dépendant de Country, reçoit la cascade de suppression logique

from .country import Country
from .visit import Visit

__all__ = [
    "Country",
    "Visit",
]
