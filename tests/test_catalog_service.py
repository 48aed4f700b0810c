# tests/test_catalog_service.py

"""Tests for CatalogService wiring between client, cache and filters."""

import unittest
from unittest.mock import MagicMock

from src.forms.product_form import AttachFile, EditField, FormState, reduce_form
from src.models.image_source import UploadedImage
from src.models.payload import MultipartPayload
from src.models.product import Product, Rating
from src.services.catalog_service import CatalogService
from src.storage.catalog_cache import CatalogCache

CATALOG = [
    Product(id=1, title="Red Shirt", price=22.3, category="men's clothing"),
    Product(id=2, title="Blue Ring", price=9.99, category="jewelery"),
    Product(id=3, title="Red Ring", price=12.0, category="jewelery"),
]


def _service(products: list[Product] | None = None) -> tuple[CatalogService, MagicMock]:
    client = MagicMock()
    client.fetch_products.return_value = list(CATALOG if products is None else products)
    return CatalogService(client=client, cache=CatalogCache(ttl=60)), client


class TestLoadAndView(unittest.TestCase):
    """load_catalog / view."""

    def test_load_uses_cache_on_second_call(self) -> None:
        service, client = _service()
        service.load_catalog()
        service.load_catalog()
        client.fetch_products.assert_called_once()

    def test_force_bypasses_cache(self) -> None:
        service, client = _service()
        service.load_catalog()
        service.load_catalog(force=True)
        self.assertEqual(client.fetch_products.call_count, 2)

    def test_empty_fetch_is_not_cached(self) -> None:
        service, client = _service([])
        service.load_catalog()
        service.load_catalog()
        self.assertEqual(client.fetch_products.call_count, 2)

    def test_view_filters_and_summarises(self) -> None:
        service, _client = _service()
        service.load_catalog()
        view = service.view("red", None)
        self.assertEqual([p.id for p in view.products], [1, 3])
        self.assertEqual(view.categories, ["men's clothing", "jewelery"])
        self.assertEqual(view.summary, "Showing 2 of 3 products")
        self.assertTrue(view.filtered)

    def test_view_empty_category_is_all(self) -> None:
        service, _client = _service()
        service.load_catalog()
        view = service.view("", "")
        self.assertIsNone(view.category)
        self.assertEqual(len(view.products), 3)
        self.assertFalse(view.filtered)


class TestSubmitAndDelete(unittest.TestCase):
    """submit / delete routing."""

    def test_new_draft_is_created(self) -> None:
        service, client = _service()
        client.create_product.return_value = Product(id=21, title="X", price=1.0)
        state = FormState.new()
        for name, value in (
            ("title", "X"), ("description", "d"), ("price", "1"),
            ("category", "electronics"), ("image", "https://x/y.png"),
        ):
            state, _errors = reduce_form(state, EditField(name, value))

        result = service.submit(state)

        assert result is not None
        self.assertEqual(result.id, 21)
        client.create_product.assert_called_once()
        client.update_product.assert_not_called()

    def test_existing_draft_is_updated(self) -> None:
        service, client = _service()
        product = Product(
            id=2, title="Blue Ring", price=9.99, description="d",
            category="jewelery", image="https://x/ring.png", rating=Rating(4.0, 3),
        )
        client.update_product.return_value = product

        service.submit(FormState.for_product(product))

        product_id, payload = client.update_product.call_args[0]
        self.assertEqual(product_id, 2)
        self.assertEqual(payload, product)

    def test_upload_is_sent_as_multipart(self) -> None:
        service, client = _service()
        product = Product(id=2, title="Blue Ring", price=9.99, category="jewelery")
        state, _errors = reduce_form(
            FormState.for_product(product),
            AttachFile(UploadedImage("r.png", "image/png", b"x")),
        )

        service.submit(state)

        payload = client.update_product.call_args[0][1]
        self.assertIsInstance(payload, MultipartPayload)

    def test_successful_submit_clears_cache(self) -> None:
        service, client = _service()
        service.load_catalog()
        client.update_product.return_value = CATALOG[0]
        service.submit(FormState.for_product(CATALOG[0]))
        service.load_catalog()
        self.assertEqual(client.fetch_products.call_count, 2)

    def test_failed_submit_returns_none(self) -> None:
        service, client = _service()
        client.update_product.return_value = None
        self.assertIsNone(service.submit(FormState.for_product(CATALOG[0])))

    def test_delete_delegates(self) -> None:
        service, client = _service()
        client.delete_product.return_value = True
        self.assertTrue(service.delete(3))
        client.delete_product.assert_called_once_with(3)


class TestAsyncWrappers(unittest.IsolatedAsyncioTestCase):
    """Thread-offloaded variants used by the TUI."""

    async def test_load_catalog_async(self) -> None:
        service, _client = _service()
        products = await service.load_catalog_async()
        self.assertEqual(len(products), 3)

    async def test_get_product_async(self) -> None:
        service, client = _service()
        client.fetch_product.return_value = CATALOG[1]
        product = await service.get_product_async(2)
        self.assertEqual(product, CATALOG[1])
        client.fetch_product.assert_called_once_with(2)


if __name__ == "__main__":
    unittest.main()
