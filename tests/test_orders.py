# ==============================================================================
# ORDER AND INVOICE ENDPOINT TESTS
# ==============================================================================
# Order intake, fulfillment, invoices and dashboard over the HTTP API
# ==============================================================================

import pytest
from httpx import AsyncClient


async def _seed(client: AsyncClient, stock: int = 15, price: float = 10.005) -> tuple:
    response = await client.post(
        "/api/v1/clients",
        json={"cin": "12345678", "name": "John Doe", "email": "john@example.com"},
    )
    customer = response.json()["data"]
    response = await client.post(
        "/api/v1/products",
        json={"reference": "LMP-01", "name": "Desk Lamp", "price": price, "stock": stock},
    )
    product = response.json()["data"]
    return customer, product


async def _place(client: AsyncClient, customer: dict, product: dict, quantity: int = 2) -> dict:
    response = await client.post(
        "/api/v1/orders",
        json={
            "client_id": customer["id"],
            "items": [{"product_id": product["id"], "quantity": quantity}],
            "tax_rate": 0.2,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestOrders:
    """Tests for order intake endpoints."""

    @pytest.mark.asyncio
    async def test_create_order(self, client: AsyncClient):
        customer, product = await _seed(client)

        order = await _place(client, customer, product)

        assert order["status"] == "Pending"
        assert order["subtotal"] == 20.01
        assert order["tax_amount"] == 4.0
        assert order["total_amount"] == 24.01
        assert order["tax_rate"] == 0.2
        assert order["items"][0]["reference"] == "LMP-01"
        assert order["invoice_id"] is None

    @pytest.mark.asyncio
    async def test_insufficient_stock(self, client: AsyncClient):
        customer, product = await _seed(client, stock=1)

        response = await client.post(
            "/api/v1/orders",
            json={
                "client_id": customer["id"],
                "items": [{"product_id": product["id"], "quantity": 2}],
            },
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "INSUFFICIENT_STOCK"
        assert "Desk Lamp" in error["message"]

    @pytest.mark.asyncio
    async def test_empty_order_is_rejected(self, client: AsyncClient):
        customer, _ = await _seed(client)

        response = await client.post(
            "/api/v1/orders",
            json={"client_id": customer["id"], "items": []},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_both_tax_fields_rejected(self, client: AsyncClient):
        customer, product = await _seed(client)

        response = await client.post(
            "/api/v1/orders",
            json={
                "client_id": customer["id"],
                "items": [{"product_id": product["id"]}],
                "tax_rate": 0.19,
                "tax_percent": 19,
            },
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_pending_count_on_client(self, client: AsyncClient):
        customer, product = await _seed(client)
        await _place(client, customer, product, quantity=1)
        await _place(client, customer, product, quantity=1)
        third = await _place(client, customer, product, quantity=1)
        await client.post(f"/api/v1/orders/{third['id']}/fulfill")

        response = await client.get(f"/api/v1/clients/{customer['id']}")

        assert response.json()["data"]["pending_orders_count"] == 2

        response = await client.get(f"/api/v1/clients/{customer['id']}/orders")
        assert len(response.json()["data"]) == 3

    @pytest.mark.asyncio
    async def test_list_orders_by_status(self, client: AsyncClient):
        customer, product = await _seed(client)
        first = await _place(client, customer, product, quantity=1)
        await _place(client, customer, product, quantity=1)
        await client.post(f"/api/v1/orders/{first['id']}/fulfill")

        response = await client.get("/api/v1/orders", params={"status": "Completed"})

        assert [o["id"] for o in response.json()["data"]] == [first["id"]]


class TestFulfillment:
    """Tests for the fulfill endpoint and the resulting invoice."""

    @pytest.mark.asyncio
    async def test_fulfill_order(self, client: AsyncClient):
        customer, product = await _seed(client, stock=15)
        order = await _place(client, customer, product, quantity=10)

        response = await client.post(f"/api/v1/orders/{order['id']}/fulfill")

        assert response.status_code == 200, response.text
        result = response.json()["data"]
        assert result["order"]["status"] == "Completed"
        assert result["order"]["invoice_id"] == result["invoice"]["id"]
        assert result["invoice"]["total_amount"] == order["total_amount"]
        assert result["invoice"]["invoice_number"].startswith("INV-")
        assert result["stock_updates"][0]["stock"] == 5
        assert result["stock_updates"][0]["status"] == "Low Stock"
        assert result["pending_orders_count"] == 0

        response = await client.get(f"/api/v1/products/{product['id']}")
        assert response.json()["data"]["sales"] == 10

    @pytest.mark.asyncio
    async def test_fulfill_twice(self, client: AsyncClient):
        customer, product = await _seed(client)
        order = await _place(client, customer, product)
        await client.post(f"/api/v1/orders/{order['id']}/fulfill")

        response = await client.post(f"/api/v1/orders/{order['id']}/fulfill")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "ORDER_ALREADY_FULFILLED"

        response = await client.get("/api/v1/invoices")
        assert len(response.json()["data"]) == 1

    @pytest.mark.asyncio
    async def test_fulfill_unknown_order(self, client: AsyncClient):
        response = await client.post("/api/v1/orders/does-not-exist/fulfill")
        assert response.status_code == 404


class TestInvoices:
    """Tests for invoice endpoints."""

    async def _invoice(self, client: AsyncClient) -> dict:
        customer, product = await _seed(client)
        order = await _place(client, customer, product)
        response = await client.post(f"/api/v1/orders/{order['id']}/fulfill")
        return response.json()["data"]["invoice"]

    @pytest.mark.asyncio
    async def test_get_invoice(self, client: AsyncClient):
        invoice = await self._invoice(client)

        response = await client.get(f"/api/v1/invoices/{invoice['id']}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["client"]["name"] == "John Doe"
        assert data["client_cin"] == "12345678"
        assert data["status"] == "Pending"

    @pytest.mark.asyncio
    async def test_mark_paid_updates_revenue(self, client: AsyncClient):
        invoice = await self._invoice(client)

        response = await client.get("/api/v1/dashboard/stats")
        assert response.json()["data"]["total_revenue"] == 0.0

        response = await client.patch(
            f"/api/v1/invoices/{invoice['id']}",
            json={"status": "Paid"},
        )
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "Paid"

        response = await client.get("/api/v1/dashboard/stats")
        stats = response.json()["data"]
        assert stats["total_revenue"] == 24.01
        assert stats["invoices_count"] == 1
        assert stats["clients_count"] == 1
        assert stats["products_count"] == 1

    @pytest.mark.asyncio
    async def test_invalid_status(self, client: AsyncClient):
        invoice = await self._invoice(client)

        response = await client.patch(
            f"/api/v1/invoices/{invoice['id']}",
            json={"status": "Refunded"},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_filter_by_status(self, client: AsyncClient):
        await self._invoice(client)

        response = await client.get("/api/v1/invoices", params={"status": "Paid"})

        assert response.json()["data"] == []

    @pytest.mark.asyncio
    async def test_document(self, client: AsyncClient):
        invoice = await self._invoice(client)

        response = await client.get(f"/api/v1/invoices/{invoice['id']}/document")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert invoice["invoice_number"] in response.text
        assert "John Doe" in response.text
        assert "24.01" in response.text
