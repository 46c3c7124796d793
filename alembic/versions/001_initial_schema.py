"""Initial schema — users, profiles, currencies, goals; seeds base currencies.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

Constraint names match jarbas.db.base.NAMING_CONVENTION.
profiles.currency_id has no foreign key: profile currencies are stored as
given and resolved on read.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


_CURRENCIES = [
    {"code": "BRL", "name": "Real brasileiro", "symbol": "R$"},
    {"code": "USD", "name": "US Dollar", "symbol": "$"},
    {"code": "EUR", "name": "Euro", "symbol": "€"},
]


def upgrade() -> None:
    currencies = op.create_table(
        "currencies",
        sa.Column("id", sa.Integer, autoincrement=True),
        sa.Column("code", sa.String(3), nullable=False),
        sa.Column("name", sa.String(60), nullable=False),
        sa.Column("symbol", sa.String(8), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_currencies"),
        sa.UniqueConstraint("code", name="uq_currencies_code"),
    )

    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True)),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("email", sa.String(254), nullable=False),
        sa.Column("username", sa.String(254), nullable=False),
        sa.Column("password_hash", sa.String(128), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("username", name="uq_users_username"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "profiles",
        sa.Column("id", sa.Integer, autoincrement=True),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("target_value", sa.Numeric(14, 2), nullable=True),
        sa.Column("currency_id", sa.Integer, nullable=True),
        sa.Column("fixed_income", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("occupation", sa.String(120), nullable=True),
        sa.Column("age_range", sa.String(20), nullable=True),
        sa.Column("time_horizon", sa.String(20), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_profiles"),
        sa.UniqueConstraint("user_id", name="uq_profiles_user_id"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"],
            name="fk_profiles_user_id_users", ondelete="CASCADE",
        ),
    )

    op.create_table(
        "goals",
        sa.Column("id", sa.Integer, autoincrement=True),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("currency_id", sa.Integer, nullable=False),
        sa.Column("title", sa.String(120), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("target_amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("target_date", sa.Date, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name="pk_goals"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"],
            name="fk_goals_user_id_users", ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["currency_id"], ["currencies.id"],
            name="fk_goals_currency_id_currencies",
        ),
    )
    op.create_index("ix_goals_user_id", "goals", ["user_id"])

    op.bulk_insert(currencies, _CURRENCIES)


def downgrade() -> None:
    op.drop_index("ix_goals_user_id", table_name="goals")
    op.drop_table("goals")
    op.drop_table("profiles")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    op.drop_table("currencies")
