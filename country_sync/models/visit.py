"""Modèle de données Visit, dépendant d'un Country via `country_id`."""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from country_sync.core.database import Base


class Visit(Base):
    """
    Visite rattachée à un pays.

    Le drapeau `deleted` passe à True quand le pays parent est supprimé
    logiquement. `country_id` n'est pas une clé étrangère contrainte : une
    suppression physique du pays laisse la visite intacte (référence pendante).
    """

    __tablename__ = "visits"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    country_id: Mapped[int] = mapped_column(
        Integer, nullable=False, index=True, comment="ID du pays visité (countries.id)"
    )
    visited_on: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    deleted: Mapped[bool] = mapped_column(
        nullable=False, default=False, server_default="false", index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<Visit(id={self.id}, country_id={self.country_id}, deleted={self.deleted})>"
