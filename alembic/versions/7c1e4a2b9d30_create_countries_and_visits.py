"""Create countries and visits tables

Revision ID: 7c1e4a2b9d30
Revises:
Create Date: 2026-10-19 09:12:44.318205

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "7c1e4a2b9d30"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "countries",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False, comment="Nom du pays"),
        sa.Column(
            "abbreviation",
            sa.String(length=10),
            nullable=False,
            comment="Code pays (clé naturelle de réconciliation)",
        ),
        sa.Column("capital", sa.String(length=255), nullable=True),
        sa.Column("currency", sa.String(length=50), nullable=True),
        sa.Column(
            "phone",
            sa.String(length=50),
            nullable=True,
            comment="Indicatif téléphonique international",
        ),
        sa.Column("population", sa.BigInteger(), nullable=True),
        sa.Column("flag", sa.String(length=1000), nullable=True, comment="URL du drapeau"),
        sa.Column("emblem", sa.String(length=1000), nullable=True),
        sa.Column("orthographic", sa.String(length=1000), nullable=True),
        sa.Column(
            "deleted",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
            comment="Suppression logique",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index(op.f("ix_countries_id"), "countries", ["id"], unique=False)
    op.create_index(op.f("ix_countries_abbreviation"), "countries", ["abbreviation"], unique=True)
    op.create_index(op.f("ix_countries_deleted"), "countries", ["deleted"], unique=False)

    # country_id sans contrainte FK : une suppression physique laisse les visites en place
    op.create_table(
        "visits",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column(
            "country_id", sa.Integer(), nullable=False, comment="ID du pays visité (countries.id)"
        ),
        sa.Column("visited_on", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("deleted", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_visits_id"), "visits", ["id"], unique=False)
    op.create_index(op.f("ix_visits_country_id"), "visits", ["country_id"], unique=False)
    op.create_index(op.f("ix_visits_deleted"), "visits", ["deleted"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_visits_deleted"), table_name="visits")
    op.drop_index(op.f("ix_visits_country_id"), table_name="visits")
    op.drop_index(op.f("ix_visits_id"), table_name="visits")
    op.drop_table("visits")
    op.drop_index(op.f("ix_countries_deleted"), table_name="countries")
    op.drop_index(op.f("ix_countries_abbreviation"), table_name="countries")
    op.drop_index(op.f("ix_countries_id"), table_name="countries")
    op.drop_table("countries")
