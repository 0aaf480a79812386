"""create_catalog_tables

Revision ID: 3f1c9a7d2b40
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2b40"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create products, product_details and subscription_plans."""
    op.create_table(
        "products",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("kind", sa.String(20), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("id", "kind", name="uq_products_id_kind"),
    )
    op.create_index("ix_products_id", "products", ["id"])
    op.create_index("ix_products_kind", "products", ["kind"])

    # One detail row per product; its kind must match the parent's kind
    op.create_table(
        "product_details",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("product_id", sa.Uuid(), nullable=False),
        sa.Column("kind", sa.String(20), nullable=False),
        sa.Column("file_size", sa.Integer(), nullable=True),
        sa.Column("download_link", sa.String(), nullable=True),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("dimensions", sa.String(), nullable=True),
        sa.Column("subscription_period", sa.String(), nullable=True),
        sa.Column("renewal_price", sa.Float(), nullable=True),
        sa.ForeignKeyConstraint(
            ["product_id", "kind"],
            ["products.id", "products.kind"],
            name="fk_product_details_product",
            ondelete="CASCADE",
        ),
    )
    op.create_index(
        "ix_product_details_product_id",
        "product_details",
        ["product_id"],
        unique=True,
    )

    # product_id is a plain indexed column, not a foreign key
    op.create_table(
        "subscription_plans",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("product_id", sa.Uuid(), nullable=False),
        sa.Column("plan_name", sa.String(255), nullable=False),
        sa.Column("duration_days", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
    )
    op.create_index("ix_subscription_plans_id", "subscription_plans", ["id"])
    op.create_index(
        "ix_subscription_plans_product_id",
        "subscription_plans",
        ["product_id"],
    )


def downgrade() -> None:
    """Drop all tables in reverse order."""
    op.drop_index("ix_subscription_plans_product_id", table_name="subscription_plans")
    op.drop_index("ix_subscription_plans_id", table_name="subscription_plans")
    op.drop_table("subscription_plans")

    op.drop_index("ix_product_details_product_id", table_name="product_details")
    op.drop_table("product_details")

    op.drop_index("ix_products_kind", table_name="products")
    op.drop_index("ix_products_id", table_name="products")
    op.drop_table("products")
