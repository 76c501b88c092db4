from __future__ import annotations

import pytest

from db.seed import PRODUCT_IMAGES, PRODUCTS, run, seed
from db.store import CatalogStore


EXPECTED_COUNTS = {
    "categories": 1,
    "category_metadata": 1,
    "banners": 2,
    "metadata_values": 5,
    "products": 5,
    "product_images": 10,
    "product_metadata": 5,
}


class FailingProductStore(CatalogStore):
    async def create_product(self, **kwargs):
        raise RuntimeError("products table unavailable")


class ClosingStore(CatalogStore):
    closed = False

    async def close(self) -> None:
        self.closed = True
        # The fixture still owns the engine; don't dispose it here.


@pytest.mark.asyncio
async def test_full_run_creates_expected_counts(store) -> None:
    result = await seed(store)

    assert result.skipped is False
    assert result.counts() == EXPECTED_COUNTS
    assert await store.count_rows() == EXPECTED_COUNTS


@pytest.mark.asyncio
async def test_second_run_writes_nothing(store) -> None:
    await seed(store)
    before = await store.count_rows()

    again = await seed(store)

    assert again.skipped is True
    assert again.category["slug"] == "camisas"
    assert again.counts()["products"] == 0
    assert await store.count_rows() == before


@pytest.mark.asyncio
async def test_products_link_to_positional_metadata_values(store) -> None:
    result = await seed(store)

    value_by_product_id = {pm["product_id"]: pm["metadata_value_id"] for pm in result.product_metadata}
    by_label = {p["label"]: value_by_product_id[p["id"]] for p in result.products}
    assert by_label == {
        "Camisa RN": "react-native",
        "Camisa React": "react",
        "Camisa NodeJS": "node",
        "Camisa JavaScript": "javascript",
        "Camisa PHP": "php",
    }
    assert {pm["category_metadata_id"] for pm in result.product_metadata} == {"tech"}


@pytest.mark.asyncio
async def test_created_rows_reference_parents_from_same_run(store) -> None:
    result = await seed(store)

    category_id = result.category["id"]
    facet_id = result.category_metadata["id"]
    product_ids = {p["id"] for p in result.products}
    value_ids = {v["id"] for v in result.metadata_values}

    assert result.category_metadata["category_id"] == category_id
    assert all(v["category_metadata_id"] == facet_id for v in result.metadata_values)
    assert all(p["category_id"] == category_id for p in result.products)
    assert all(img["product_id"] in product_ids for img in result.product_images)
    assert all(pm["product_id"] in product_ids for pm in result.product_metadata)
    assert all(pm["metadata_value_id"] in value_ids for pm in result.product_metadata)


@pytest.mark.asyncio
async def test_products_keep_dataset_order_and_prices(store) -> None:
    result = await seed(store)

    assert [p["label"] for p in result.products] == [p.label for p in PRODUCTS]
    prices = {p["label"]: p["price"] for p in result.products}
    assert prices["Camisa RN"] == pytest.approx(89.90)
    assert prices["Camisa NodeJS"] == pytest.approx(80)
    assert prices["Camisa JavaScript"] == pytest.approx(67.40)


@pytest.mark.asyncio
async def test_images_are_created_per_product_in_mapping_order(store) -> None:
    result = await seed(store)

    expected = [url for p in PRODUCTS for url in PRODUCT_IMAGES[p.label]]
    assert [img["url"] for img in result.product_images] == expected

    ids = [img["id"] for img in result.product_images]
    assert ids == sorted(ids)


@pytest.mark.asyncio
async def test_banners_point_at_category_pages(store) -> None:
    result = await seed(store)

    assert sorted((b["img"], b["link"]) for b in result.banners) == [
        ("banner_promo_1.jpg", "/categories/camisas"),
        ("banner_promo_2.jpg", "/categories/algo"),
    ]


@pytest.mark.asyncio
async def test_failure_after_facet_leaves_partial_state_and_blocks_rerun(store) -> None:
    failing = FailingProductStore(store.engine)
    with pytest.raises(RuntimeError, match="products table unavailable"):
        await seed(failing)

    partial = await store.count_rows()
    assert partial["categories"] == 1
    assert partial["category_metadata"] == 1
    assert partial["metadata_values"] == 5
    assert partial["products"] == 0

    # The guard only checks the category, so a clean rerun does nothing.
    rerun = await seed(store)
    assert rerun.skipped is True
    assert await store.count_rows() == partial


@pytest.mark.asyncio
async def test_run_returns_zero_and_releases_store(store) -> None:
    closing = ClosingStore(store.engine)

    assert await run(closing) == 0
    assert closing.closed is True
    assert (await store.count_rows())["products"] == 5


@pytest.mark.asyncio
async def test_run_returns_nonzero_and_releases_store_on_failure(store) -> None:
    class FailingClosingStore(FailingProductStore, ClosingStore):
        pass

    failing = FailingClosingStore(store.engine)

    assert await run(failing) == 1
    assert failing.closed is True


@pytest.mark.asyncio
async def test_skipped_run_returns_zero(store) -> None:
    await seed(store)
    closing = ClosingStore(store.engine)

    assert await run(closing) == 0
    assert closing.closed is True


@pytest.mark.asyncio
async def test_products_missing_from_image_table_get_no_images(store, monkeypatch) -> None:
    monkeypatch.delitem(PRODUCT_IMAGES, "Camisa PHP")

    result = await seed(store)

    php_id = next(p["id"] for p in result.products if p["label"] == "Camisa PHP")
    assert len(result.product_images) == 8
    assert all(img["product_id"] != php_id for img in result.product_images)
    # The product itself and its metadata link are still created.
    assert len(result.products) == 5
    assert any(pm["product_id"] == php_id for pm in result.product_metadata)
    assert (await store.count_rows())["product_images"] == 8
