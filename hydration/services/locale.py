"""Locale detection from page paths and the one-step fallback policy."""

import re

from hydration.config import Settings

_ARTICLE_TEMPLATE_RE = re.compile(r"/(?:cs/)?article\.html$", re.IGNORECASE)


def resolve_locale(path: str, settings: Settings) -> str:
    """Return the secondary locale when *path* has a ``/cs/`` segment, else the base."""
    marker = f"/{settings.secondary_locale}/"
    if marker in (path or ""):
        return settings.secondary_locale
    return settings.base_locale


def fallback_locales(locale: str, base_locale: str) -> list[str]:
    """Locales to try, in order. Only one fallback level exists."""
    if locale == base_locale:
        return [locale]
    return [locale, base_locale]


def article_page_for(locale: str, settings: Settings) -> str:
    """Article template path used by listing links."""
    if locale == settings.base_locale:
        return "article.html"
    return f"{locale}/article.html"


def article_link(page: str, slug: str | None) -> str | None:
    if not slug:
        return None
    return f"{page}?slug={slug}"


def is_article_template(path: str) -> bool:
    """True for the dynamic per-record article page in either locale."""
    return bool(_ARTICLE_TEMPLATE_RE.search(path or ""))
