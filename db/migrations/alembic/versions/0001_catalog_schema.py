"""catalog schema

Revision ID: 0001_catalog_schema
Revises: None
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0001_catalog_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("slug", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.UniqueConstraint("slug", name="uq_categories_slug"),
    )

    op.create_table(
        "category_metadata",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=False),
    )

    op.create_table(
        "metadata_values",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("label", sa.Text(), nullable=False),
        sa.Column("category_metadata_id", sa.Text(), sa.ForeignKey("category_metadata.id"), nullable=False),
    )

    op.create_table(
        "banners",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("img", sa.Text(), nullable=False),
        sa.Column("link", sa.Text(), nullable=False),
    )

    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("label", sa.Text(), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=False),
    )

    op.create_table(
        "product_images",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id"), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
    )

    op.create_table(
        "product_metadata",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id"), nullable=False),
        sa.Column("category_metadata_id", sa.Text(), sa.ForeignKey("category_metadata.id"), nullable=False),
        sa.Column("metadata_value_id", sa.Text(), sa.ForeignKey("metadata_values.id"), nullable=False),
    )

    op.create_index("idx_products_category", "products", ["category_id"])
    op.create_index("idx_product_images_product", "product_images", ["product_id"])
    op.create_index("idx_product_metadata_product", "product_metadata", ["product_id"])


def downgrade() -> None:
    op.drop_index("idx_product_metadata_product", table_name="product_metadata")
    op.drop_index("idx_product_images_product", table_name="product_images")
    op.drop_index("idx_products_category", table_name="products")

    op.drop_table("product_metadata")
    op.drop_table("product_images")
    op.drop_table("products")
    op.drop_table("banners")
    op.drop_table("metadata_values")
    op.drop_table("category_metadata")
    op.drop_table("categories")
