# ==============================================================================
# PRODUCT ENDPOINT TESTS
# ==============================================================================
# Tests for product CRUD, filtering and catalog statistics
# ==============================================================================

import pytest
from httpx import AsyncClient
from pydantic import ValidationError

from bizdash.schemas.product import ProductCreate, ProductUpdate


async def _create(client: AsyncClient, **data) -> dict:
    response = await client.post("/api/v1/products", json=data)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestProducts:
    """Tests for product CRUD endpoints."""

    @pytest.mark.asyncio
    async def test_create_product(self, client: AsyncClient, sample_product_data: dict):
        response = await client.post("/api/v1/products", json=sample_product_data)

        assert response.status_code == 201
        data = response.json()["data"]

        assert data["name"] == "Desk Lamp"
        assert data["reference"] == sample_product_data["reference"].upper()
        assert data["price"] == 25.5
        assert data["stock"] == 15
        assert data["sales"] == 0
        assert data["features"] == ["Dimmable", "USB-C"]

    @pytest.mark.asyncio
    async def test_reference_is_normalized(self, client: AsyncClient):
        created = await _create(client, reference=" ab 12 ", name="Pen")
        assert created["reference"] == "AB12"

    @pytest.mark.asyncio
    async def test_blank_price_is_null(self, client: AsyncClient):
        created = await _create(client, reference="P1", name="Pen", price="")
        assert created["price"] is None

    @pytest.mark.asyncio
    async def test_duplicate_features_are_dropped(self, client: AsyncClient):
        created = await _create(
            client, reference="P1", name="Pen", features=["Blue", " Blue ", "", "Red"]
        )
        assert created["features"] == ["Blue", "Red"]

    @pytest.mark.asyncio
    async def test_reference_and_name_required(self, client: AsyncClient):
        response = await client.post("/api/v1/products", json={"reference": "", "name": "Pen"})
        assert response.status_code == 422

        response = await client.post("/api/v1/products", json={"reference": "P1"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_non_numeric_price_rejected(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/products",
            json={"reference": "P1", "name": "Lamp", "price": "abc"},
        )
        assert response.status_code == 422

        listed = await client.get("/api/v1/products")
        assert listed.json()["data"] == []

    @pytest.mark.asyncio
    async def test_non_numeric_price_update_rejected(
        self, client: AsyncClient, sample_product_data: dict
    ):
        created = await _create(client, **sample_product_data)

        response = await client.patch(
            f"/api/v1/products/{created['id']}",
            json={"price": "abc", "original_price": "NaN"},
        )
        assert response.status_code == 422

        fetched = await client.get(f"/api/v1/products/{created['id']}")
        assert fetched.json()["data"]["price"] == 25.5

    @pytest.mark.asyncio
    async def test_update_product(self, client: AsyncClient, sample_product_data: dict):
        created = await _create(client, **sample_product_data)

        response = await client.patch(
            f"/api/v1/products/{created['id']}",
            json={"price": 30, "status": "Arriving Soon"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["price"] == 30.0
        assert data["status"] == "Arriving Soon"
        assert data["stock"] == 15

    @pytest.mark.asyncio
    async def test_delete_product(self, client: AsyncClient, sample_product_data: dict):
        created = await _create(client, **sample_product_data)

        response = await client.delete(f"/api/v1/products/{created['id']}")
        assert response.status_code == 200

        response = await client.get(f"/api/v1/products/{created['id']}")
        assert response.status_code == 404


class TestProductListAndStats:
    """Tests for the product list view and statistics."""

    @pytest.mark.asyncio
    async def test_filter_by_status_and_query(self, client: AsyncClient):
        await _create(client, reference="LMP-1", name="Lamp", stock=50)
        await _create(client, reference="CHR-1", name="Chair", stock=2, status="Low Stock")

        response = await client.get("/api/v1/products", params={"status": "Low Stock"})
        assert [p["name"] for p in response.json()["data"]] == ["Chair"]

        response = await client.get("/api/v1/products", params={"q": "lmp"})
        assert [p["name"] for p in response.json()["data"]] == ["Lamp"]

    @pytest.mark.asyncio
    async def test_stats(self, client: AsyncClient):
        await _create(client, reference="A", name="A", price=10, stock=3, sales=5)
        await _create(client, reference="B", name="B", stock=0, status="Out of Stock")

        response = await client.get("/api/v1/products/stats")

        assert response.status_code == 200
        stats = response.json()["data"]
        assert stats["total_products"] == 2
        assert stats["total_inventory_value"] == 30.0
        assert stats["low_stock_count"] == 1
        assert stats["total_sales"] == 5


class TestProductPriceInput:
    """Tests for price parsing on the product input schemas."""

    def test_create_rejects_text_price(self):
        with pytest.raises(ValidationError):
            ProductCreate(reference="abc", name="Lamp", price="not-a-number")

    def test_update_rejects_text_price(self):
        with pytest.raises(ValidationError):
            ProductUpdate(price="abc")

    def test_infinite_price_rejected(self):
        with pytest.raises(ValidationError):
            ProductCreate(reference="abc", name="Lamp", original_price="Infinity")

    def test_numeric_string_price_accepted(self):
        product = ProductCreate(reference="abc", name="Lamp", price="12.50")
        assert str(product.price) == "12.50"


class TestProductSummary:
    """Tests for the product list summary."""

    @pytest.mark.asyncio
    async def test_summary_counts_each_status(self, client: AsyncClient):
        await _create(client, reference="LMP-1", name="Lamp", stock=50)
        await _create(client, reference="CHR-1", name="Chair", stock=50, status="Arriving Soon")
        await _create(client, reference="DSK-1", name="Desk", stock=50, status="Arriving Soon")

        response = await client.get("/api/v1/products/summary")

        assert response.status_code == 200
        summary = response.json()["data"]
        assert summary["total"] == 3
        assert summary["counts"] == {
            "All": 3,
            "In Stock": 1,
            "Low Stock": 0,
            "Out of Stock": 0,
            "Arriving Soon": 2,
        }

    @pytest.mark.asyncio
    async def test_summary_of_empty_catalog(self, client: AsyncClient):
        response = await client.get("/api/v1/products/summary")

        summary = response.json()["data"]
        assert summary["total"] == 0
        assert summary["counts"]["All"] == 0
