from __future__ import annotations

from typing import Any

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from db import schema


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, pool_pre_ping=True)


class CatalogStore:
    """
    CRUD access to the catalog tables.

    Every create runs in its own connection and commits on its own; there is no
    unit of work spanning several calls. Callers may issue creates concurrently.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine

    @classmethod
    def from_url(cls, database_url: str) -> CatalogStore:
        return cls(create_engine(database_url))

    async def close(self) -> None:
        await self.engine.dispose()

    async def _insert(self, table: sa.Table, values: dict[str, Any]) -> dict[str, Any]:
        q = table.insert().values(**values).returning(*table.c)
        async with self.engine.begin() as conn:
            row = (await conn.execute(q)).mappings().one()
        return dict(row)

    async def find_category_by_slug(self, slug: str) -> dict[str, Any] | None:
        q = sa.select(schema.categories).where(schema.categories.c.slug == slug).limit(1)
        async with self.engine.connect() as conn:
            row = (await conn.execute(q)).mappings().first()
        return dict(row) if row else None

    async def create_category(self, *, slug: str, name: str) -> dict[str, Any]:
        return await self._insert(schema.categories, {"slug": slug, "name": name})

    async def create_category_metadata(self, *, id: str, name: str, category_id: int) -> dict[str, Any]:
        return await self._insert(schema.category_metadata, {"id": id, "name": name, "category_id": category_id})

    async def create_metadata_value(self, *, id: str, label: str, category_metadata_id: str) -> dict[str, Any]:
        return await self._insert(
            schema.metadata_values,
            {"id": id, "label": label, "category_metadata_id": category_metadata_id},
        )

    async def create_banner(self, *, img: str, link: str) -> dict[str, Any]:
        return await self._insert(schema.banners, {"img": img, "link": link})

    async def create_product(
        self, *, label: str, price: float, description: str | None, category_id: int
    ) -> dict[str, Any]:
        return await self._insert(
            schema.products,
            {"label": label, "price": price, "description": description, "category_id": category_id},
        )

    async def create_product_image(self, *, product_id: int, url: str) -> dict[str, Any]:
        return await self._insert(schema.product_images, {"product_id": product_id, "url": url})

    async def create_product_metadata(
        self, *, product_id: int, category_metadata_id: str, metadata_value_id: str
    ) -> dict[str, Any]:
        return await self._insert(
            schema.product_metadata,
            {
                "product_id": product_id,
                "category_metadata_id": category_metadata_id,
                "metadata_value_id": metadata_value_id,
            },
        )

    async def count_rows(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        async with self.engine.connect() as conn:
            for name, table in schema.TABLES.items():
                counts[name] = (await conn.execute(sa.select(sa.func.count()).select_from(table))).scalar_one()
        return counts
