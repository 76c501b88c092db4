from __future__ import annotations

import sqlalchemy as sa


metadata = sa.MetaData()

categories = sa.Table(
    "categories",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
    sa.Column("slug", sa.Text(), nullable=False),
    sa.Column("name", sa.Text(), nullable=False),
    sa.UniqueConstraint("slug", name="uq_categories_slug"),
)

# A facet: one metadata axis (e.g. technology) offered by a category.
category_metadata = sa.Table(
    "category_metadata",
    metadata,
    sa.Column("id", sa.Text(), primary_key=True),
    sa.Column("name", sa.Text(), nullable=False),
    sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=False),
)

metadata_values = sa.Table(
    "metadata_values",
    metadata,
    sa.Column("id", sa.Text(), primary_key=True),
    sa.Column("label", sa.Text(), nullable=False),
    sa.Column("category_metadata_id", sa.Text(), sa.ForeignKey("category_metadata.id"), nullable=False),
)

banners = sa.Table(
    "banners",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
    sa.Column("img", sa.Text(), nullable=False),
    sa.Column("link", sa.Text(), nullable=False),
)

products = sa.Table(
    "products",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
    sa.Column("label", sa.Text(), nullable=False),
    sa.Column("price", sa.Numeric(10, 2, asdecimal=False), nullable=False),
    sa.Column("description", sa.Text(), nullable=True),
    sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=False),
)

product_images = sa.Table(
    "product_images",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
    sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id"), nullable=False),
    sa.Column("url", sa.Text(), nullable=False),
)

product_metadata = sa.Table(
    "product_metadata",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
    sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id"), nullable=False),
    sa.Column("category_metadata_id", sa.Text(), sa.ForeignKey("category_metadata.id"), nullable=False),
    sa.Column("metadata_value_id", sa.Text(), sa.ForeignKey("metadata_values.id"), nullable=False),
)

sa.Index("idx_products_category", products.c.category_id)
sa.Index("idx_product_images_product", product_images.c.product_id)
sa.Index("idx_product_metadata_product", product_metadata.c.product_id)

TABLES: dict[str, sa.Table] = {t.name: t for t in metadata.sorted_tables}
