"""
Coffee Menu Backend — HTTP API Tests
======================================

What:  End-to-end requests through routing, the admin gate, the service,
       and a real SQLite store.
How:   HTTPX AsyncClient over ASGITransport (no server process).

What we test:
    ✅ login / verify contract
    ✅ every write route rejects missing or wrong tokens with 401, no state change
    ✅ create → list round trip with camelCase fields
    ✅ category delete cascades; missing ids report changes=0
    ✅ store failures answer 500 with the driver message
    ✅ non-numeric path ids match nothing; malformed bodies answer {"error": ...}
    ✅ unexpected 500s still carry CORS headers
    ✅ concurrent category creation yields distinct sort orders
"""

import asyncio
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import select

from coffeemenu.database import async_session_factory
from coffeemenu.models.catalog import Category
from coffeemenu.services.catalog_service import catalog_service
from coffeemenu.services.catalog_store import catalog_store


async def _row_counts():
    async with async_session_factory() as db:
        return (
            await catalog_store.count_categories(db),
            await catalog_store.count_items(db),
        )


async def _create_category(client, headers, body):
    response = await client.post("/api/categories", json=body, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["id"]


class TestAuthRoutes:

    @pytest.mark.asyncio
    async def test_login_success(self, test_client):
        response = await test_client.post("/api/login", json={"username": "admin", "password": "123"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "token": "test-admin-token"}

    @pytest.mark.asyncio
    async def test_login_failure(self, test_client):
        response = await test_client.post("/api/login", json={"username": "admin", "password": "nope"})

        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Invalid credentials"}

    @pytest.mark.asyncio
    async def test_login_without_body_is_invalid_credentials(self, test_client):
        response = await test_client.post("/api/login")

        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Invalid credentials"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        {"username": "admin", "password": 123},
        {"username": None, "password": "123"},
        {},
    ])
    async def test_login_with_non_string_credentials_is_invalid(self, test_client, body):
        response = await test_client.post("/api/login", json=body)

        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Invalid credentials"}

    @pytest.mark.asyncio
    async def test_login_token_verifies(self, test_client):
        token = (await test_client.post(
            "/api/login", json={"username": "admin", "password": "123"}
        )).json()["token"]

        response = await test_client.get("/api/verify", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json() == {"valid": True}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer other-token"}])
    async def test_verify_rejects(self, test_client, headers):
        response = await test_client.get("/api/verify", headers=headers)

        assert response.status_code == 401
        assert response.json() == {"valid": False}


class TestAdminGate:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("headers", [
        {},
        {"Authorization": "Bearer wrong"},
        {"Authorization": "test-admin-token-extra"},
    ])
    async def test_writes_rejected_without_valid_token(
        self, test_client, admin_headers, sample_category, sample_item, headers
    ):
        category_id = await _create_category(test_client, admin_headers, sample_category)
        item = await test_client.post(
            "/api/items", json={**sample_item, "categoryId": category_id}, headers=admin_headers
        )
        before = await _row_counts()

        attempts = [
            await test_client.post("/api/categories", json=sample_category, headers=headers),
            await test_client.delete(f"/api/categories/{category_id}", headers=headers),
            await test_client.post("/api/items", json={**sample_item, "categoryId": category_id}, headers=headers),
            await test_client.delete(f"/api/items/{item.json()['id']}", headers=headers),
        ]

        for response in attempts:
            assert response.status_code == 401
            assert "error" in response.json()
        assert await _row_counts() == before

    @pytest.mark.asyncio
    async def test_reads_are_public(self, test_client):
        assert (await test_client.get("/api/categories")).status_code == 200
        assert (await test_client.get("/api/items/1")).status_code == 200


class TestCatalogRoutes:

    @pytest.mark.asyncio
    async def test_menu_scenario(self, test_client, admin_headers, sample_item):
        assert (await test_client.get("/api/categories")).json() == []

        response = await test_client.post(
            "/api/categories",
            json={"nameRu": "Кофе", "nameEn": "Coffee", "image": "x"},
            headers=admin_headers,
        )
        assert response.json() == {"id": 1}

        assert (await test_client.get("/api/categories")).json() == [
            {"id": 1, "nameRu": "Кофе", "nameEn": "Coffee", "image": "x"}
        ]

        response = await test_client.post(
            "/api/items", json={**sample_item, "categoryId": 1, "price": 150}, headers=admin_headers
        )
        assert response.json() == {"id": 1}

        response = await test_client.delete("/api/categories/1", headers=admin_headers)
        assert response.json() == {"message": "Deleted", "changes": 1}

        assert (await test_client.get("/api/items/1")).json() == []

    @pytest.mark.asyncio
    async def test_item_round_trip(self, test_client, admin_headers, sample_category, sample_item):
        category_id = await _create_category(test_client, admin_headers, sample_category)
        body = {**sample_item, "categoryId": category_id}

        item_id = (await test_client.post("/api/items", json=body, headers=admin_headers)).json()["id"]
        (listed,) = (await test_client.get(f"/api/items/{category_id}")).json()

        assert listed == {"id": item_id, **body}
        assert isinstance(listed["price"], float)

    @pytest.mark.asyncio
    async def test_categories_listed_in_creation_order(self, test_client, admin_headers):
        names = ["Кофе", "Чай", "Десерты"]
        for name in names:
            await _create_category(test_client, admin_headers, {"nameRu": name, "nameEn": name, "image": ""})

        listed = (await test_client.get("/api/categories")).json()

        assert [c["nameRu"] for c in listed] == names
        assert "sortOrder" not in listed[0]

    @pytest.mark.asyncio
    async def test_delete_category_removes_all_its_items(
        self, test_client, admin_headers, sample_category, sample_item
    ):
        category_id = await _create_category(test_client, admin_headers, sample_category)
        for _ in range(3):
            await test_client.post(
                "/api/items", json={**sample_item, "categoryId": category_id}, headers=admin_headers
            )

        response = await test_client.delete(f"/api/categories/{category_id}", headers=admin_headers)

        assert response.json()["changes"] == 1
        assert (await test_client.get(f"/api/items/{category_id}")).json() == []
        assert await _row_counts() == (0, 0)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/api/categories/999", "/api/items/999"])
    async def test_delete_missing_id_is_not_an_error(self, test_client, admin_headers, path):
        response = await test_client.delete(path, headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Deleted", "changes": 0}

    @pytest.mark.asyncio
    async def test_delete_item(self, test_client, admin_headers, sample_category, sample_item):
        category_id = await _create_category(test_client, admin_headers, sample_category)
        item_id = (await test_client.post(
            "/api/items", json={**sample_item, "categoryId": category_id}, headers=admin_headers
        )).json()["id"]

        response = await test_client.delete(f"/api/items/{item_id}", headers=admin_headers)

        assert response.json() == {"message": "Deleted", "changes": 1}
        assert (await test_client.get(f"/api/items/{category_id}")).json() == []

    @pytest.mark.asyncio
    async def test_item_for_unknown_category_is_store_failure(
        self, test_client, admin_headers, sample_item
    ):
        response = await test_client.post(
            "/api/items", json={**sample_item, "categoryId": 404}, headers=admin_headers
        )

        assert response.status_code == 500
        assert "FOREIGN KEY constraint failed" in response.json()["error"]
        assert await _row_counts() == (0, 0)

    @pytest.mark.asyncio
    async def test_non_numeric_path_ids_match_nothing(
        self, test_client, admin_headers, sample_category
    ):
        await _create_category(test_client, admin_headers, sample_category)

        response = await test_client.get("/api/items/abc")
        assert response.status_code == 200
        assert response.json() == []

        for path in ("/api/categories/abc", "/api/items/abc", "/api/categories/1.0"):
            response = await test_client.delete(path, headers=admin_headers)
            assert response.status_code == 200
            assert response.json() == {"message": "Deleted", "changes": 0}

        assert await _row_counts() == (1, 0)

    @pytest.mark.asyncio
    async def test_malformed_body_answers_with_error_field(
        self, test_client, admin_headers, sample_category, sample_item
    ):
        category_id = await _create_category(test_client, admin_headers, sample_category)

        response = await test_client.post(
            "/api/items",
            json={**sample_item, "categoryId": category_id, "price": "free"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert "price" in response.json()["error"]
        assert await _row_counts() == (1, 0)

    @pytest.mark.asyncio
    async def test_malformed_body_without_token_is_unauthorized(self, test_client, sample_item):
        response = await test_client.post("/api/items", json={**sample_item, "price": "free"})

        assert response.status_code == 401
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_concurrent_category_creation_gets_distinct_sort_orders(
        self, test_client, admin_headers
    ):
        count = 10
        responses = await asyncio.gather(*[
            test_client.post(
                "/api/categories",
                json={"nameRu": f"к{n}", "nameEn": f"c{n}", "image": ""},
                headers=admin_headers,
            )
            for n in range(count)
        ])
        assert all(r.status_code == 200 for r in responses)

        async with async_session_factory() as db:
            orders = (await db.execute(select(Category.sort_order))).scalars().all()

        assert sorted(orders) == list(range(1, count + 1))


class TestAmbient:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["categories"] == 0

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/api/categories", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_cors_allows_any_origin(self, test_client):
        response = await test_client.options(
            "/api/categories",
            headers={
                "Origin": "http://menu.example",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "authorization,content-type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    async def test_unexpected_error_keeps_cors_headers(self, test_client, monkeypatch):
        monkeypatch.setattr(
            catalog_service, "list_categories", AsyncMock(side_effect=RuntimeError("boom"))
        )

        response = await test_client.get(
            "/api/categories", headers={"Origin": "http://menu.example"}
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert response.headers["access-control-allow-origin"] == "*"
        assert "X-Request-ID" in response.headers
