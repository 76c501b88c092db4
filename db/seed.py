from __future__ import annotations

import argparse
import asyncio
import sys
from dataclasses import dataclass, field
from typing import Any

from db.settings import SETTINGS
from db.store import CatalogStore
from db.logging import configure_logging, logger


@dataclass(frozen=True)
class ProductSpec:
    label: str
    price: float
    description: str
    # Facet value linked to the product created at the same position.
    metadata_value_id: str


CATEGORY = {"slug": "camisas", "name": "Camisas"}
FACET = {"id": "tech", "name": "Tecnologia"}

BANNERS = [
    {"img": "banner_promo_1.jpg", "link": "/categories/camisas"},
    {"img": "banner_promo_2.jpg", "link": "/categories/algo"},
]

METADATA_VALUES = [
    {"id": "node", "label": "Node"},
    {"id": "react", "label": "React"},
    {"id": "javascript", "label": "Javascript"},
    {"id": "react-native", "label": "React Native"},
    {"id": "php", "label": "PHP"},
]

PRODUCTS: list[ProductSpec] = [
    ProductSpec(
        label="Camisa RN",
        price=89.90,
        description="Camisa com estampa de React Native, perfeita para desenvolvedores",
        metadata_value_id="react-native",
    ),
    ProductSpec(
        label="Camisa React",
        price=94.50,
        description="Camisa com logo do React, ideal para front-end developers",
        metadata_value_id="react",
    ),
    ProductSpec(
        label="Camisa NodeJS",
        price=80,
        description="Camisa Node, para quem gosta de javascript no backend",
        metadata_value_id="node",
    ),
    ProductSpec(
        label="Camisa JavaScript",
        price=67.40,
        description="Camisa com estampa de JavaScript, perfeita para quem ama a linguagem",
        metadata_value_id="javascript",
    ),
    ProductSpec(
        label="Camisa PHP",
        price=69.90,
        description="Camisa com estampa PHP, para desenvolvedores web",
        metadata_value_id="php",
    ),
]

PRODUCT_IMAGES: dict[str, list[str]] = {
    "Camisa RN": ["camisa-rn-1.jpg", "camisa-rn-2.jpg"],
    "Camisa React": ["camisa-react-1.jpg", "camisa-react-2.jpg"],
    "Camisa NodeJS": ["camisa-nodejs-1.jpg", "camisa-nodejs-2.jpg"],
    "Camisa JavaScript": ["camisa-javascript-1.jpg", "camisa-javascript-2.jpg"],
    "Camisa PHP": ["camisa-php-1.jpg", "camisa-php-2.jpg"],
}


@dataclass
class SeedResult:
    skipped: bool = False
    category: dict[str, Any] | None = None
    category_metadata: dict[str, Any] | None = None
    banners: list[dict[str, Any]] = field(default_factory=list)
    metadata_values: list[dict[str, Any]] = field(default_factory=list)
    products: list[dict[str, Any]] = field(default_factory=list)
    product_images: list[dict[str, Any]] = field(default_factory=list)
    product_metadata: list[dict[str, Any]] = field(default_factory=list)

    def counts(self) -> dict[str, int]:
        return {
            "categories": 0 if self.skipped or self.category is None else 1,
            "category_metadata": 0 if self.category_metadata is None else 1,
            "banners": len(self.banners),
            "metadata_values": len(self.metadata_values),
            "products": len(self.products),
            "product_images": len(self.product_images),
            "product_metadata": len(self.product_metadata),
        }


async def seed(store: CatalogStore) -> SeedResult:
    """
    Create the demo catalog unless it already exists.

    The guard only looks at the `camisas` category: a run that failed midway leaves
    its rows behind and later runs skip, so partial state has to be removed by hand.
    Nothing here is transactional across creates.
    """
    logger.info("seed_started")

    existing = await store.find_category_by_slug(CATEGORY["slug"])
    if existing:
        logger.info("seed_skipped", reason="already_seeded", category=existing["name"])
        return SeedResult(skipped=True, category=existing)

    result = SeedResult()

    result.category = await store.create_category(**CATEGORY)
    logger.info("seed_step_finished", step="category", name=result.category["name"])

    result.category_metadata = await store.create_category_metadata(
        **FACET, category_id=result.category["id"]
    )
    logger.info("seed_step_finished", step="category_metadata", name=result.category_metadata["name"])

    result.banners = list(await asyncio.gather(*(store.create_banner(**b) for b in BANNERS)))
    logger.info("seed_step_finished", step="banners", created=len(result.banners))

    facet_id = result.category_metadata["id"]
    result.metadata_values = list(
        await asyncio.gather(
            *(store.create_metadata_value(**v, category_metadata_id=facet_id) for v in METADATA_VALUES)
        )
    )
    logger.info("seed_step_finished", step="metadata_values", created=len(result.metadata_values))

    # gather() keeps argument order, so products[i] was created from PRODUCTS[i].
    result.products = list(
        await asyncio.gather(
            *(
                store.create_product(
                    label=p.label,
                    price=p.price,
                    description=p.description,
                    category_id=result.category["id"],
                )
                for p in PRODUCTS
            )
        )
    )
    logger.info("seed_step_finished", step="products", created=len(result.products))

    for product in result.products:
        images = PRODUCT_IMAGES.get(product["label"])
        if not images:
            continue
        for url in images:
            result.product_images.append(await store.create_product_image(product_id=product["id"], url=url))
    logger.info("seed_step_finished", step="product_images", created=len(result.product_images))

    result.product_metadata = list(
        await asyncio.gather(
            *(
                store.create_product_metadata(
                    product_id=product["id"],
                    category_metadata_id=facet_id,
                    metadata_value_id=p.metadata_value_id,
                )
                for p, product in zip(PRODUCTS, result.products)
            )
        )
    )
    logger.info("seed_step_finished", step="product_metadata", created=len(result.product_metadata))

    logger.info("seed_finished", counts=result.counts())
    return result


async def run(store: CatalogStore) -> int:
    """Seed through `store`, always releasing its connections. Returns the process exit code."""
    try:
        await seed(store)
    except Exception:
        logger.exception("seed_failed")
        return 1
    finally:
        await store.close()
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the catalog with the demo category, products, and banners.")
    parser.add_argument("--database-url", default=SETTINGS.database_url)
    parser.add_argument("--log-level", default=SETTINGS.log_level)
    args = parser.parse_args()

    configure_logging(args.log_level)
    sys.exit(asyncio.run(run(CatalogStore.from_url(args.database_url))))


if __name__ == "__main__":
    main()
