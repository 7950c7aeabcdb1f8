"""Hydrated HTML pages."""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from hydration.config import get_settings
from hydration.services.content_fetcher import ContentFetcher
from hydration.services.pages import load_template, render_page

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])


def get_fetcher() -> ContentFetcher:
    """Build a fetcher from the current settings.

    One fetcher per request with no cache; requests go through the shared
    HTTP client.
    """
    settings = get_settings()
    return ContentFetcher(settings.sanity_config(), base_locale=settings.base_locale)


async def _serve(page_path: str, slug: str | None, fetcher: ContentFetcher) -> Response:
    settings = get_settings()
    try:
        html = load_template(Path(settings.site_root), page_path)
    except ValueError:
        logger.warning("Rejected page path %r", page_path)
        raise HTTPException(status_code=404, detail="Page not found")
    if html is None:
        raise HTTPException(status_code=404, detail="Page not found")

    result = await render_page(page_path, html, fetcher, settings, slug=slug)
    if result.redirect_to is not None:
        return RedirectResponse(url=result.redirect_to, status_code=307)
    return HTMLResponse(content=result.html or "")


@router.get("/", response_class=HTMLResponse)
async def site_index(
    slug: str | None = Query(default=None),
    fetcher: ContentFetcher = Depends(get_fetcher),
):
    """Hydrated home page."""
    return await _serve("/", slug, fetcher)


@router.get("/{directory:path}/", response_class=HTMLResponse)
async def directory_index(
    directory: str,
    slug: str | None = Query(default=None),
    fetcher: ContentFetcher = Depends(get_fetcher),
):
    """Hydrated ``index.html`` of a sub-directory such as ``/cs/``."""
    return await _serve(f"/{directory}/", slug, fetcher)


@router.get("/{page:path}.html", response_class=HTMLResponse)
async def html_page(
    page: str,
    slug: str | None = Query(default=None, description="Post slug for article pages"),
    fetcher: ContentFetcher = Depends(get_fetcher),
):
    """Any HTML page of the site, hydrated when it embeds a hydration script."""
    return await _serve(f"/{page}.html", slug, fetcher)
