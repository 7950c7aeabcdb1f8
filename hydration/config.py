"""Application configuration via environment variables."""

from dataclasses import dataclass
from functools import lru_cache

from pydantic_settings import BaseSettings


@dataclass(frozen=True)
class SanityConfig:
    """Connection parameters for the Sanity content query API."""

    project_id: str
    dataset: str
    api_version: str
    use_cdn: bool = False
    timeout: float = 15.0

    @property
    def host(self) -> str:
        return "apicdn.sanity.io" if self.use_cdn else "api.sanity.io"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App
    debug: bool = False
    environment: str = "development"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
        "https://czechalert.cz",
    ]

    # Sanity content API
    sanity_project_id: str = "8z0tbe2a"
    sanity_dataset: str = "production"
    sanity_api_version: str = "2023-10-01"
    sanity_use_cdn: bool = False
    sanity_timeout: float = 15.0

    # Locales: pages under /cs/ are Czech, everything else falls back to English
    base_locale: str = "en"
    secondary_locale: str = "cs"

    # Static site
    site_root: str = "site"
    listing_script: str = "sanity-content.js"
    article_script: str = "article-content.js"
    listing_fallback_page: str = "publications.html"
    strip_hydration_scripts: bool = True

    # Copy defaults used when a record leaves a field empty
    brand_name: str = "CzechAlert"
    default_read_time: str = "5 min read"

    model_config = {"env_file": ".env", "extra": "ignore"}

    def sanity_config(self) -> SanityConfig:
        return SanityConfig(
            project_id=self.sanity_project_id,
            dataset=self.sanity_dataset,
            api_version=self.sanity_api_version,
            use_cdn=self.sanity_use_cdn,
            timeout=self.sanity_timeout,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
