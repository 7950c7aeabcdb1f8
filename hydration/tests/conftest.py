"""Shared fixtures for site hydration tests."""

import pytest


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset module-level singletons between tests."""
    yield

    from hydration.config import get_settings

    get_settings.cache_clear()

    import hydration.services.http_client as http_mod

    http_mod._client = None


@pytest.fixture
def mock_settings(monkeypatch, tmp_path):
    """Provide a Settings object with safe test defaults."""
    from hydration.config import Settings, get_settings

    test_settings = Settings(
        sanity_project_id="testproj",
        sanity_dataset="testdata",
        sanity_api_version="2023-10-01",
        site_root=str(tmp_path / "site"),
    )

    get_settings.cache_clear()
    monkeypatch.setattr("hydration.config.get_settings", lambda: test_settings)

    # Modules that did `from hydration.config import get_settings` keep their
    # own binding, so patch each of them too
    for mod_path in [
        "hydration.services.http_client",
        "hydration.routers.pages",
        "hydration.main",
        "hydration.middleware",
    ]:
        monkeypatch.setattr(f"{mod_path}.get_settings", lambda: test_settings)

    return test_settings


@pytest.fixture
def make_record():
    """Build a ContentRecord from API-shaped keyword arguments."""
    from hydration.models.content import ContentRecord

    def _make(**fields):
        data = {
            "title": "Untitled",
            "slug": "untitled",
            "language": "en",
            "author": "Petr Svoboda",
            "publishedAt": "2025-06-01T09:00:00Z",
            "body": [],
        }
        data.update(fields)
        return ContentRecord.model_validate(data)

    return _make
