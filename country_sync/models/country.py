"""Modèle de données Country.

Un pays est identifié par un ID système (`id`) et par une clé naturelle
stable (`abbreviation`) utilisée pour réconcilier les données externes.
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from country_sync.core.database import Base


class Country(Base):
    """
    Modèle Country avec suppression logique.

    Champs clés :
    - abbreviation : clé naturelle unique (cible des upserts), y compris
      pour les lignes supprimées logiquement
    - deleted : drapeau de suppression logique, propagé aux visites
    """

    __tablename__ = "countries"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, comment="Nom du pays"
    )
    abbreviation: Mapped[str] = mapped_column(
        String(10),
        unique=True,
        nullable=False,
        index=True,
        comment="Code pays (clé naturelle de réconciliation)",
    )

    # Champs descriptifs du fournisseur
    capital: Mapped[str | None] = mapped_column(String(255), nullable=True)
    currency: Mapped[str | None] = mapped_column(String(50), nullable=True)
    phone: Mapped[str | None] = mapped_column(
        String(50), nullable=True, comment="Indicatif téléphonique international"
    )
    population: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    flag: Mapped[str | None] = mapped_column(String(1000), nullable=True, comment="URL du drapeau")
    emblem: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    orthographic: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    # Statut
    deleted: Mapped[bool] = mapped_column(
        nullable=False,
        default=False,
        server_default="false",
        index=True,
        comment="Suppression logique",
    )

    # Métadonnées internes (jamais exposées)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<Country(id={self.id}, abbreviation='{self.abbreviation}', deleted={self.deleted})>"
