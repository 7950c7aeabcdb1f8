"""Prerender hydrated listing pages for static hosting.

Usage:
    python -m scripts.prerender --out dist
    python -m scripts.prerender --site-root site --out dist --page cs/index.html
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from hydration.config import get_settings
from hydration.services.content_fetcher import ContentFetcher
from hydration.services.http_client import get_shared_client
from hydration.services.pages import load_template, render_page

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

DEFAULT_PAGES = [
    "index.html",
    "publications.html",
    "cs/index.html",
    "cs/publications.html",
]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--site-root", default=settings.site_root)
    parser.add_argument("--out", required=True, help="Output directory")
    parser.add_argument(
        "--page",
        action="append",
        dest="pages",
        help="Page to render, relative to the site root (repeatable)",
    )
    return parser.parse_args(argv)


async def prerender(site_root: Path, out_dir: Path, pages: list[str]) -> int:
    """Render *pages* into *out_dir*. Returns the number of pages that failed."""
    settings = get_settings()
    fetcher = ContentFetcher(settings.sanity_config(), base_locale=settings.base_locale)
    failed = 0

    for page in pages:
        try:
            html = load_template(site_root, page)
        except ValueError as e:
            logger.error("%s", e)
            failed += 1
            continue
        if html is None:
            logger.error("Page not found: %s", page)
            failed += 1
            continue

        result = await render_page(f"/{page}", html, fetcher, settings)
        if result.html is None:
            logger.error("Page %s redirects to %s; not written", page, result.redirect_to)
            failed += 1
            continue

        target = out_dir / page
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(result.html, encoding="utf-8")
        logger.info("Wrote %s", target)

    return failed


async def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    pages = args.pages or DEFAULT_PAGES
    try:
        failed = await prerender(Path(args.site_root), Path(args.out), pages)
    finally:
        await get_shared_client().aclose()

    print(f"\nPrerendered {len(pages) - failed}/{len(pages)} page(s)")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
