"""Tests for HTTP endpoints."""

import uuid

import pytest

from shortener.lib.database.memory import MemoryUrlStore
from shortener.lib.errors import StorageError
from shortener.lib.registry import UrlRegistry
from shortener.lib.shortcode import ShortCodeGenerator


class FailingStore(MemoryUrlStore):
    async def list_all(self):
        raise StorageError("connection to server at 10.0.0.5 refused")


class TestAPIEndpoints:
    """Test API endpoints."""

    async def test_shorten_url(self, client):
        """Test POST /url."""
        response = await client.post("/url", json={"url": "https://example.com"})

        assert response.status_code == 201
        data = response.json()
        assert data["url"] == "https://example.com"
        assert len(data["shortened"]) == 12
        assert ShortCodeGenerator.is_valid_format(data["shortened"])
        assert uuid.UUID(data["id"])

    async def test_redirect(self, client):
        """Test GET /{shortened}."""
        create_response = await client.post("/url", json={"url": "https://example.com"})
        shortened = create_response.json()["shortened"]

        response = await client.get(f"/{shortened}", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com"

    async def test_redirect_not_found(self, client):
        response = await client.get("/doesnotexist", follow_redirects=False)

        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}

    async def test_missing_path(self, client):
        response = await client.get("/", follow_redirects=False)

        assert response.status_code == 400

    async def test_shorten_missing_url(self, client):
        response = await client.post("/url", json={})

        assert response.status_code == 400
        assert "error" in response.json()

        listing = await client.get("/url")
        assert listing.json() == []

    async def test_shorten_malformed_body(self, client):
        response = await client.post(
            "/url",
            content="{not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400

    async def test_shorten_non_string_url(self, client):
        response = await client.post("/url", json={"url": 123})

        assert response.status_code == 400

    async def test_shorten_empty_url(self, client):
        """Empty destinations are stored as given."""
        response = await client.post("/url", json={"url": ""})

        assert response.status_code == 201
        assert response.json()["url"] == ""

    async def test_list_urls(self, client, sample_urls):
        created = []
        for url in sample_urls:
            response = await client.post("/url", json={"url": url})
            created.append(response.json())

        response = await client.get("/url")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == len(sample_urls)
        assert {item["shortened"] for item in data} == {item["shortened"] for item in created}
        assert {item["url"] for item in data} == set(sample_urls)

    async def test_redirect_by_id(self, client, sample_urls):
        create_response = await client.post("/url", json={"url": sample_urls[1]})
        record_id = create_response.json()["id"]

        response = await client.get(f"/url/{record_id}", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == sample_urls[1]

    async def test_redirect_by_id_not_found(self, client):
        response = await client.get(f"/url/{uuid.uuid4()}", follow_redirects=False)

        assert response.status_code == 404

    async def test_redirect_by_malformed_id(self, client):
        response = await client.get("/url/not-a-uuid", follow_redirects=False)

        assert response.status_code == 404

    async def test_missing_id(self, client):
        response = await client.get("/url/", follow_redirects=False)

        assert response.status_code == 400

    async def test_token_is_not_an_id(self, client):
        create_response = await client.post("/url", json={"url": "https://example.com"})
        data = create_response.json()

        by_id_with_token = await client.get(f"/url/{data['shortened']}", follow_redirects=False)
        by_token_with_id = await client.get(f"/{data['id']}", follow_redirects=False)

        assert by_id_with_token.status_code == 404
        assert by_token_with_id.status_code == 404

    async def test_favicon(self, client):
        response = await client.get("/favicon.ico")

        assert response.status_code == 204
        assert response.content == b""

    async def test_health_check(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"
        assert data["cache"] == "healthy"


class TestErrorResponses:
    """Server-side failures return generic messages."""

    async def test_store_error(self, make_client, logger):
        registry = UrlRegistry(store=FailingStore(logger=logger), logger=logger)

        async with make_client(registry) as client:
            response = await client.get("/url")

        assert response.status_code == 500
        assert response.json() == {"error": "An error occurred"}
        assert "10.0.0.5" not in response.text

    async def test_generation_failure(self, make_client, store, logger):
        def broken_entropy(n):
            raise OSError("no entropy")

        registry = UrlRegistry(
            store=store,
            short_code_generator=ShortCodeGenerator(entropy=broken_entropy),
            logger=logger,
        )

        async with make_client(registry) as client:
            response = await client.post("/url", json={"url": "https://example.com"})
            # Only the failed request is affected
            health = await client.get("/health")

        assert response.status_code == 500
        assert response.json() == {"error": "An error occurred"}
        assert health.status_code == 200

    async def test_timeout(self, make_client, logger):
        import asyncio

        class SlowStore(MemoryUrlStore):
            async def get_by_token(self, token):
                await asyncio.sleep(1)
                return await super().get_by_token(token)

        registry = UrlRegistry(store=SlowStore(logger=logger), logger=logger, store_timeout_seconds=0.05)

        async with make_client(registry) as client:
            response = await client.get("/3f2a9c1b7d4e", follow_redirects=False)

        assert response.status_code == 504
        assert response.json() == {"error": "The request timed out"}

    @pytest.mark.parametrize("url", ["not-a-url", "ftp://example.com"])
    async def test_validation_enabled(self, make_client, store, logger, url):
        registry = UrlRegistry(store=store, logger=logger, validate_urls=True)

        async with make_client(registry) as client:
            response = await client.post("/url", json={"url": url})

        assert response.status_code == 400
