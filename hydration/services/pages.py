"""Page rendering: runs the hydrators a template asks for.

A template opts into hydration by embedding the listing or article script;
the same pages that ran those scripts in the browser are hydrated here.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from bs4 import BeautifulSoup

from hydration.config import Settings
from hydration.models.render import PageResult
from hydration.services.article_hydrator import hydrate_article
from hydration.services.carousel_hydrator import hydrate_carousel
from hydration.services.content_fetcher import ContentFetcher
from hydration.services.dom import attr_of, parse_html
from hydration.services.listing_hydrator import hydrate_listing
from hydration.services.locale import is_article_template, resolve_locale

logger = logging.getLogger(__name__)

LANGUAGE_TOGGLE_SELECTOR = "#switch-mode, #nav--item-switch-mode"


@dataclass
class Hydrators:
    listing: bool = False
    article: bool = False


def resolve_template_path(site_root: Path, page_path: str) -> Path:
    """Map a URL path onto a file under *site_root*.

    Directory paths map to their ``index.html``. Raises ValueError when the
    path escapes the site root or is not an HTML page.
    """
    root = site_root.resolve()
    relative = page_path.lstrip("/")
    if not relative or relative.endswith("/"):
        relative += "index.html"
    try:
        candidate = (root / relative).resolve()
    except OSError as e:
        raise ValueError(f"Unresolvable page path: {page_path[:80]!r}") from e
    if not candidate.is_relative_to(root):
        raise ValueError(f"Path escapes site root: {page_path!r}")
    if candidate.suffix.lower() != ".html":
        raise ValueError(f"Not an HTML page: {page_path!r}")
    return candidate


def load_template(site_root: Path, page_path: str) -> str | None:
    """Read the template for *page_path*, or None when there is no such page.

    Paths the filesystem refuses (over-long names and the like) count as
    missing pages.
    """
    path = resolve_template_path(site_root, page_path)
    try:
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("Cannot read template for %r: %s", page_path[:80], e.strerror)
        return None


def _script_sources(soup: BeautifulSoup) -> list[str]:
    return [attr_of(s, "src") for s in soup.find_all("script") if s.get("src")]


def hydrators_for(soup: BeautifulSoup, settings: Settings) -> Hydrators:
    """Which hydrators the template embeds, judged by its script tags."""
    found = Hydrators()
    for src in _script_sources(soup):
        name = src.split("?", 1)[0].rsplit("/", 1)[-1]
        if name == settings.listing_script:
            found.listing = True
        elif name == settings.article_script:
            found.article = True
    return found


def strip_hydration_scripts(soup: BeautifulSoup, names: set[str]) -> None:
    """Remove the browser scripts named in *names*, matched by file name."""
    for script in soup.find_all("script"):
        src = attr_of(script, "src")
        if src and src.split("?", 1)[0].rsplit("/", 1)[-1] in names:
            script.decompose()


def mark_language_toggles(
    soup: BeautifulSoup, locale: str, settings: Settings
) -> None:
    """Checked means the base language; unchecked the secondary one."""
    for toggle in soup.select(LANGUAGE_TOGGLE_SELECTOR):
        if locale == settings.base_locale:
            toggle["checked"] = ""
        elif toggle.has_attr("checked"):
            del toggle["checked"]


async def render_page(
    page_path: str,
    html: str,
    fetcher: ContentFetcher,
    settings: Settings,
    *,
    slug: str | None = None,
) -> PageResult:
    """Hydrate *html*, served at *page_path*, with content for its locale.

    Returns a redirect to the listing page when the dynamic article template
    is requested without a slug or the slug resolves to nothing. Other pages
    embedding the article hydrator keep their static content on a miss.

    A browser hydration script is only stripped once its hydrator has run
    here, so a page rendered while the CMS is unreachable still hydrates
    itself.
    """
    soup = parse_html(html)
    locale = resolve_locale(page_path, settings)
    hydrators = hydrators_for(soup, settings)
    article_template = is_article_template(page_path)
    hydrated: set[str] = set()

    if hydrators.listing:
        records = await fetcher.fetch_list(locale)
        if records:
            hydrate_listing(soup, records, locale, settings)
            hydrate_carousel(soup, records)
            hydrated.add(settings.listing_script)
        else:
            logger.info("No posts for %s, serving %s unchanged", locale, page_path)

    if hydrators.article:
        if not slug:
            if article_template:
                return PageResult(redirect_to=settings.listing_fallback_page)
        else:
            record = await fetcher.fetch_one(locale, slug)
            if record is not None:
                hydrate_article(soup, record, settings)
                hydrated.add(settings.article_script)
            elif article_template:
                logger.info("Post %r not found, redirecting", slug)
                return PageResult(redirect_to=settings.listing_fallback_page)

    mark_language_toggles(soup, locale, settings)
    if settings.strip_hydration_scripts and hydrated:
        strip_hydration_scripts(soup, hydrated)
    return PageResult(html=str(soup))
