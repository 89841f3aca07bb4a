"""
Integration API Tests
=====================

POST /api/integration/variants and GET /api/integration/widget.js through
the FastAPI app, with storage replaced by the in-memory fakes.
"""

import pytest

from fakes import FakeWebsiteRepository

IPHONE_UA = "Mozilla/5.0 (iPhone; CPU iPhone OS 16_0 like Mac OS X) Mobile/15E148"
DESKTOP_UA = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) Chrome/120.0 Safari/537.36"

VARIANTS_URL = "/api/integration/variants"


@pytest.fixture
def site(store):
    """Active website: a hero with a mobile variant, a banner with only a default."""
    website = store.add_website(api_key="ev_" + "a" * 32)
    hero = store.add_element(website, "#hero", default_content="A")
    store.add_variant(hero, "Mobile hero", "B", conditions=[("device", "equals", "mobile", 5)])
    store.add_element(website, ".banner", default_content="Welcome")
    return website


def post_variants(client, api_key, body=None):
    headers = {"X-API-Key": api_key} if api_key is not None else {}
    return client.post(VARIANTS_URL, json=body if body is not None else {}, headers=headers)


class TestServeVariants:
    """Successful resolution."""

    def test_mobile_visitor_gets_mobile_variant(self, client, site):
        response = post_variants(client, site.api_key, {"userAgent": IPHONE_UA, "screenWidth": 390})

        assert response.status_code == 200
        assert response.json() == {
            "variants": [
                {"selector": "#hero", "content": "B"},
                {"selector": ".banner", "content": "Welcome"},
            ]
        }

    def test_desktop_visitor_gets_default(self, client, site):
        response = post_variants(client, site.api_key, {"userAgent": DESKTOP_UA, "screenWidth": 1440})

        assert response.status_code == 200
        assert response.json()["variants"][0] == {"selector": "#hero", "content": "A"}

    def test_full_context_payload_is_accepted(self, client, site):
        body = {
            "url": "https://example.com/pricing?plan=pro",
            "path": "/pricing",
            "referrer": "https://google.com/",
            "userAgent": IPHONE_UA,
            "language": "en-US",
            "screenWidth": 1024,
            "screenHeight": 1366,
            "timestamp": "2026-10-17T09:30:00.000Z",
        }
        response = post_variants(client, site.api_key, body)

        assert response.status_code == 200
        # iPhone UA on a wide viewport is a tablet, so the default is served
        assert response.json()["variants"][0]["content"] == "A"

    def test_missing_and_null_fields_default(self, client, site):
        response = post_variants(client, site.api_key, {"userAgent": None, "screenWidth": None})

        assert response.status_code == 200
        assert response.json()["variants"][0]["content"] == "A"

    def test_empty_body_is_empty_context(self, client, site):
        response = client.post(VARIANTS_URL, content=b"", headers={"X-API-Key": site.api_key})

        assert response.status_code == 200
        assert len(response.json()["variants"]) == 2

    def test_elements_without_content_are_omitted(self, client, store, site):
        store.add_element(site, "#nothing", default_content=None)

        response = post_variants(client, site.api_key)

        selectors = [v["selector"] for v in response.json()["variants"]]
        assert "#nothing" not in selectors
        assert all(v is not None for v in response.json()["variants"])

    def test_repeated_calls_are_identical(self, client, site):
        body = {"userAgent": IPHONE_UA, "screenWidth": 390, "path": "/"}
        first = post_variants(client, site.api_key, body).json()
        second = post_variants(client, site.api_key, body).json()
        assert first == second

    def test_unimplemented_conditions_never_match(self, client, store, site):
        promo = store.add_element(site, "#promo", default_content="regular")
        store.add_variant(promo, "Chrome users", "chrome-only",
                          conditions=[("browser", "contains", "chrome", 10)])
        store.add_variant(promo, "Big screens", "wide",
                          conditions=[("screenSize", "greater_than", "1000", 10)])

        response = post_variants(client, site.api_key, {"userAgent": DESKTOP_UA, "screenWidth": 1920})

        assert {"selector": "#promo", "content": "regular"} in response.json()["variants"]


class TestAuthentication:
    """Every key failure is a 401 with a generic body."""

    def test_missing_key(self, client, site):
        response = post_variants(client, None)

        assert response.status_code == 401
        assert response.json() == {"error": "API key is required"}

    def test_blank_key(self, client, site):
        response = post_variants(client, "   ")
        assert response.status_code == 401

    def test_unknown_and_inactive_keys_are_indistinguishable(self, client, store, site):
        inactive = store.add_website(domain="paused.example.com", active=False)

        unknown = post_variants(client, "ev_" + "z" * 32)
        paused = post_variants(client, inactive.api_key)

        assert unknown.status_code == paused.status_code == 401
        assert unknown.json() == paused.json() == {"error": "Invalid API key or inactive website"}


class TestFailures:
    """Unexpected errors become a generic 500."""

    def test_storage_failure_is_500_without_details(self, app, client, store, site):
        class BrokenRepository(FakeWebsiteRepository):
            async def find_active_by_api_key(self, api_key):
                raise RuntimeError("connection reset by peer")

        from api.dependencies import get_website_repository
        app.dependency_overrides[get_website_repository] = lambda: BrokenRepository(store)

        response = post_variants(client, site.api_key)

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert "connection reset" not in response.text

    def test_malformed_element_is_skipped(self, client, store, site):
        hero_variant = next(v for v in store.variants.values() if v.content == "B")
        condition = next(c for c in store.conditions.values() if c.variant_id == hero_variant.id)
        condition.priority = None

        response = post_variants(client, site.api_key, {"userAgent": IPHONE_UA, "screenWidth": 390})

        assert response.status_code == 200
        assert response.json()["variants"] == [{"selector": ".banner", "content": "Welcome"}]


class TestWidgetScript:

    def test_serves_javascript(self, client):
        response = client.get("/api/integration/widget.js")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/javascript")
        assert response.headers["cache-control"] == "public, max-age=3600"
        assert "/api/integration/variants" in response.text
        assert "X-API-Key" in response.text
