"""Tests for the HTML page endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from hydration.tests.sample_pages import ARTICLE_TEMPLATE, LISTING_TEMPLATE


class StubFetcher:
    def __init__(self, records=(), record=None):
        self.records = list(records)
        self.record = record

    async def fetch_list(self, locale):
        return self.records

    async def fetch_one(self, locale, slug):
        return self.record


@pytest.fixture
def site(mock_settings, tmp_path):
    root = tmp_path / "site"
    (root / "cs").mkdir(parents=True)
    (root / "index.html").write_text(LISTING_TEMPLATE, encoding="utf-8")
    (root / "publications.html").write_text(LISTING_TEMPLATE, encoding="utf-8")
    (root / "cs" / "index.html").write_text(LISTING_TEMPLATE, encoding="utf-8")
    (root / "article.html").write_text(ARTICLE_TEMPLATE, encoding="utf-8")
    (root / "about.html").write_text("<h1>About</h1>", encoding="utf-8")
    return root


@pytest.fixture
def use_fetcher():
    from hydration.main import app
    from hydration.routers.pages import get_fetcher

    def _use(fetcher):
        app.dependency_overrides[get_fetcher] = lambda: fetcher

    yield _use
    app.dependency_overrides.clear()


async def _get(path, **kwargs):
    from hydration.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        return await client.get(path, **kwargs)


async def test_listing_page_is_hydrated(site, use_fetcher, make_record):
    use_fetcher(StubFetcher(records=[make_record(title="Fresh post", slug="fresh")]))
    response = await _get("/publications.html")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Fresh post" in response.text


async def test_directory_index(site, use_fetcher):
    use_fetcher(StubFetcher())
    response = await _get("/cs/")
    assert response.status_code == 200
    assert "Static hero" in response.text


async def test_root_index(site, use_fetcher):
    use_fetcher(StubFetcher())
    response = await _get("/")
    assert response.status_code == 200


async def test_article_page(site, use_fetcher, make_record):
    use_fetcher(StubFetcher(record=make_record(title="Single", perex="Lead")))
    response = await _get("/article.html", params={"slug": "single"})

    assert response.status_code == 200
    assert "Single | CzechAlert" in response.text
    assert "Lead" in response.text


async def test_article_without_slug_redirects(site, use_fetcher):
    use_fetcher(StubFetcher())
    response = await _get("/article.html")

    assert response.status_code == 307
    assert response.headers["location"] == "publications.html"


async def test_plain_page_served_as_is(site, use_fetcher):
    use_fetcher(StubFetcher())
    response = await _get("/about.html")
    assert response.status_code == 200
    assert "<h1>About</h1>" in response.text


async def test_missing_page_is_404(site, use_fetcher):
    use_fetcher(StubFetcher())
    response = await _get("/missing.html")
    assert response.status_code == 404
    assert response.json()["detail"] == "Page not found"


async def test_overlong_page_name_is_404(site, use_fetcher):
    use_fetcher(StubFetcher())
    response = await _get("/" + "a" * 300 + ".html")
    assert response.status_code == 404


async def test_health(mock_settings):
    response = await _get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "czechalert-site"
    assert data["checks"]["sanity"] == "ok"
