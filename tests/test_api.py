"""Tests for API endpoints."""

import pytest

from tldr.database.models import Mapping


SHORT_GONE = "G" * 18


@pytest.mark.asyncio
class TestAPIEndpoints:
    """Test API endpoints."""
    
    async def test_create(self, client, sample_urls):
        """Test POST /api/."""
        response = await client.post("/api/", json={"url": sample_urls[0]})
        
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == 200
        assert body["message"] == "Ok"
        assert body["data"]["url"] == sample_urls[0]
        assert body["data"]["valid"] is True
        assert len(body["data"]["short"]) == 18
    
    async def test_create_adds_scheme(self, client):
        """URLs without http(s) get https:// prepended."""
        response = await client.post("/api/", json={"url": "example-domain.com"})
        
        assert response.status_code == 200
        assert response.json()["data"]["url"] == "https://example-domain.com"
    
    async def test_create_invalid_url(self, client):
        """Invalid URLs yield a 500 envelope with the error message."""
        response = await client.post("/api/", json={"url": "not a url"})
        
        assert response.status_code == 500
        body = response.json()
        assert body["status"] == 500
        assert "not a url" in body["message"]
        assert body["data"] is None
    
    async def test_create_malformed_body(self, client):
        """A body without url is reported in the envelope too."""
        response = await client.post("/api/", json={"link": "https://example.com"})
        
        assert response.status_code == 500
        body = response.json()
        assert body["status"] == 500
        assert "Malformed request body" in body["message"]
        assert body["data"] is None
    
    async def test_create_storage_error(self, client, store):
        """Storage failures yield a 500 envelope."""
        await store.close()
        
        response = await client.post("/api/", json={"url": "https://example.com"})
        
        assert response.status_code == 500
        assert response.json()["message"] == "database is not initialized"
    
    async def test_resolve(self, client, sample_urls):
        """Test GET /api/{short}."""
        create_response = await client.post("/api/", json={"url": sample_urls[0]})
        short = create_response.json()["data"]["short"]
        
        response = await client.get(f"/api/{short}")
        
        assert response.status_code == 200
        body = response.json()
        assert body == {
            "status": 200,
            "message": "Ok",
            "data": {"url": sample_urls[0], "short": short, "valid": True},
        }
    
    async def test_resolve_not_found(self, client):
        """Test GET /api/{short} for an unknown token."""
        short = "Q" * 18
        response = await client.get(f"/api/{short}")
        
        assert response.status_code == 404
        body = response.json()
        assert body["status"] == 404
        assert body["message"] == f"No URL found for short '{short}'."
        assert body["data"] is None
    
    async def test_resolve_malformed(self, client):
        """Tokens of the wrong shape are simply not found."""
        response = await client.get("/api/abc123")
        
        assert response.status_code == 404
    
    async def test_resolve_invalid(self, client, store):
        """A mapping flagged invalid yields 422."""
        await store.insert(Mapping(url="https://example.com/gone", short=SHORT_GONE, valid=False))
        
        response = await client.get(f"/api/{SHORT_GONE}")
        
        assert response.status_code == 422
        body = response.json()
        assert body["message"] == "URL is not valid"
        assert body["data"] is None
    
    async def test_resolve_storage_error(self, client, store):
        await store.close()
        
        response = await client.get(f"/api/{'Q' * 18}")
        
        assert response.status_code == 500
        assert response.json()["status"] == 500
    
    async def test_list(self, client, store, sample_urls):
        """Test GET /api/ annotates each mapping by its validity."""
        for url in sample_urls:
            await client.post("/api/", json={"url": url})
        await store.insert(Mapping(url="https://example.com/gone", short=SHORT_GONE, valid=False))
        
        response = await client.get("/api/")
        
        assert response.status_code == 200
        items = response.json()
        assert len(items) == len(sample_urls) + 1
        
        for item, url in zip(items, sample_urls):
            assert item["status"] == 200
            assert item["message"] == "Ok"
            assert item["data"]["url"] == url
        
        assert items[-1] == {
            "status": 422,
            "message": "URL is not valid",
            "data": {"url": "https://example.com/gone", "short": SHORT_GONE, "valid": False},
        }
    
    async def test_list_empty(self, client):
        response = await client.get("/api/")
        
        assert response.status_code == 200
        assert response.json() == []
    
    async def test_list_storage_error(self, client, store):
        await store.close()
        
        response = await client.get("/api/")
        
        assert response.status_code == 500
        assert response.json()["status"] == 500
    
    async def test_health_check(self, client):
        """Test GET /api/health."""
        response = await client.get("/api/health")
        
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"
        assert "timestamp" in data
    
    async def test_health_check_unhealthy(self, client, store):
        await store.close()
        
        response = await client.get("/api/health")
        
        assert response.status_code == 200
        assert response.json()["status"] == "unhealthy"
    
    async def test_request_id(self, client):
        """Responses carry a request id, echoing the caller's if given."""
        response = await client.get("/api/health")
        assert response.headers.get("x-request-id")
        
        response = await client.get("/api/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["x-request-id"] == "abc-123"
    
    async def test_resolve_nested_path(self, client):
        """Paths with slashes still get the envelope, not a bare 404."""
        response = await client.get("/api/a/b")
        
        assert response.status_code == 404
        body = response.json()
        assert body["status"] == 404
        assert body["message"] == "No URL found for short 'a/b'."
        assert body["data"] is None
    
    async def test_create_control_characters(self, client, store):
        """URLs with control characters are rejected and nothing is stored."""
        response = await client.post("/api/", json={"url": "https://example.com/a\x00b\x7f"})
        
        assert response.status_code == 500
        assert "control characters" in response.json()["message"]
        assert await store.list_all() == []
