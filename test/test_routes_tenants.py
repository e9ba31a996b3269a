"""
Tests for the tenant routes
"""

from httpx import AsyncClient


class TestTenantRoutes:
    async def test_create_tenant(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/tenants/", json={"subdomain": "initech", "name": "Initech", "email": "bill@initech.io"}
        )
        assert response.status_code == 201
        body = response.json()
        assert body["subdomain"] == "initech"
        assert body["status"] == "ACTIVE"
        assert body["custom_domain"] is None

    async def test_duplicate_subdomain(self, client: AsyncClient, acme):
        response = await client.post(
            "/api/v1/tenants/", json={"subdomain": "acme", "name": "Acme 2", "email": "two@acme.io"}
        )
        assert response.status_code == 409
        assert response.json()["error"]["error_code"] == "VALIDATION_DUPLICATE_RESOURCE"

    async def test_invalid_payload(self, client: AsyncClient):
        response = await client.post("/api/v1/tenants/", json={"subdomain": "A", "name": "x", "email": "nope"})
        assert response.status_code == 422
        assert response.json()["error"]["error_code"] == "VALIDATION_FAILED"

    async def test_get_tenant(self, client: AsyncClient, acme):
        response = await client.get("/api/v1/tenants/acme")
        assert response.status_code == 200
        assert response.json()["id"] == acme.id

    async def test_get_unknown_tenant(self, client: AsyncClient):
        response = await client.get("/api/v1/tenants/nobody")
        assert response.status_code == 404
        error = response.json()["error"]
        assert error["error_code"] == "RESOURCE_TENANT_NOT_FOUND"
        assert error["path"] == "/api/v1/tenants/nobody"

    async def test_get_tenant_by_id(self, client: AsyncClient, acme):
        response = await client.get(f"/api/v1/tenants/id/{acme.id}")
        assert response.status_code == 200
        assert response.json()["subdomain"] == "acme"

    async def test_get_tenant_by_unknown_id(self, client: AsyncClient):
        response = await client.get("/api/v1/tenants/id/missing")
        assert response.status_code == 404
        assert response.json()["error"]["error_code"] == "RESOURCE_TENANT_NOT_FOUND"


class TestHealth:
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    async def test_request_id_echoed(self, client: AsyncClient):
        response = await client.get("/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["x-request-id"] == "req-123"
