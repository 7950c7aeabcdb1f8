"""Publications listing hydration.

The newest post replaces the hero, every further post becomes a grid card,
and the hero's original static content is kept as a trailing card so nothing
that was on the page before is lost. The pass runs in three phases:

* ``capture_hero`` reads the hero before anything changes,
* ``compute_listing`` turns records and the snapshot into a ``ListingPlan``,
* ``commit_listing`` writes the plan into the page and re-sorts the grid.

Only the last phase touches the document.
"""

import logging
from collections.abc import Sequence
from datetime import datetime

from bs4 import BeautifulSoup, Tag

from hydration.config import Settings
from hydration.models.content import ContentRecord
from hydration.models.render import CardModel, HeroSnapshot, ListingPlan
from hydration.services.dom import (
    attr_of,
    has_class,
    new_element,
    set_attr,
    set_text,
    text_of,
)
from hydration.services.locale import article_link, article_page_for
from hydration.services.text import (
    EARLIEST,
    first_paragraph,
    format_date,
    parse_date_text,
    parse_iso,
)

logger = logging.getLogger(__name__)

HERO_SELECTOR = ".publishing-page--grid__article.grid-item-1"
GRID_SELECTOR = ".publishing-page--grid"
CARD_SELECTOR = ".publishing-page--grid__article.grid-item"

HERO_IMAGE_SELECTOR = "img.main-article-preview-img"
AUTHOR_SELECTOR = ".features .author"
DATE_SELECTOR = ".features .date"
READ_TIME_SELECTOR = ".features .read-time"
HEADING_SELECTOR = ".article-preview-heading"
EXCERPT_SELECTOR = ".article-preview-text"

CARD_CLASSES = ["publishing-page--grid__article", "grid-item", "is-dynamic"]
DYNAMIC_CLASS = "is-dynamic"
PREVIOUS_HERO_CLASS = "previous-hero"


# --- capture ---


def capture_hero(soup: BeautifulSoup, settings: Settings) -> HeroSnapshot | None:
    """Snapshot the hero's static content. Does not modify *soup*."""
    hero = soup.select_one(HERO_SELECTOR)
    if hero is None:
        return None
    return HeroSnapshot(
        image_url=attr_of(hero.select_one(HERO_IMAGE_SELECTOR), "src"),
        author=text_of(hero.select_one(AUTHOR_SELECTOR)) or settings.brand_name,
        # already formatted in the static markup
        date_text=text_of(hero.select_one(DATE_SELECTOR)),
        read_time_text=(
            text_of(hero.select_one(READ_TIME_SELECTOR)) or settings.default_read_time
        ),
        title=text_of(hero.select_one(HEADING_SELECTOR)),
        excerpt=text_of(hero.select_one(EXCERPT_SELECTOR)),
        href=attr_of(hero.find("a"), "href") or "#",
    )


# --- compute ---


def excerpt_for(record: ContentRecord) -> str:
    """Perex when set, else the first paragraph of the body."""
    return record.perex or first_paragraph(record.body)


def hero_model(record: ContentRecord, article_page: str, settings: Settings) -> CardModel:
    """Hero fields for *record*.

    ``None`` values mean "keep what the template already shows".
    """
    return CardModel(
        heading=record.heading,
        author=record.author or settings.brand_name,
        date_text=format_date(record.published_at),
        read_time=record.read_time or None,
        excerpt=excerpt_for(record) or None,
        href=article_link(article_page, record.slug),
        image_url=record.image_url,
    )


def card_model(record: ContentRecord, article_page: str, settings: Settings) -> CardModel:
    return CardModel(
        heading=record.heading,
        author=record.author or settings.brand_name,
        date_text=format_date(record.published_at),
        read_time=record.read_time or settings.default_read_time,
        excerpt=excerpt_for(record),
        href=article_link(article_page, record.slug) or "#",
        image_url=record.image_url,
        image_alt=record.heading or "Article image",
        published_at=record.published_at,
        slug=record.slug,
    )


def snapshot_card_model(snapshot: HeroSnapshot, settings: Settings) -> CardModel:
    return CardModel(
        heading=snapshot.title,
        author=snapshot.author or settings.brand_name,
        date_text=snapshot.date_text,
        read_time=snapshot.read_time_text or settings.default_read_time,
        excerpt=snapshot.excerpt,
        href=snapshot.href or "#",
        image_url=snapshot.image_url or None,
        image_alt=snapshot.title or "Article image",
    )


def compute_listing(
    records: Sequence[ContentRecord],
    snapshot: HeroSnapshot | None,
    locale: str,
    settings: Settings,
) -> ListingPlan:
    """Plan the hydrated listing. *records* must be ordered newest first."""
    article_page = article_page_for(locale, settings)
    return ListingPlan(
        hero=hero_model(records[0], article_page, settings) if records else None,
        cards=[card_model(r, article_page, settings) for r in records[1:]],
        previous_hero=(
            snapshot_card_model(snapshot, settings) if snapshot is not None else None
        ),
    )


# --- commit ---


def _apply_hero(hero: Tag, model: CardModel, settings: Settings) -> None:
    set_attr(hero.select_one(HERO_IMAGE_SELECTOR), "src", model.image_url)
    set_text(hero.select_one(HEADING_SELECTOR), model.heading)
    set_text(hero.select_one(AUTHOR_SELECTOR), model.author)
    set_text(hero.select_one(DATE_SELECTOR), model.date_text)

    read_el = hero.select_one(READ_TIME_SELECTOR)
    set_text(
        read_el, model.read_time or text_of(read_el) or settings.default_read_time
    )
    excerpt_el = hero.select_one(EXCERPT_SELECTOR)
    set_text(excerpt_el, model.excerpt or text_of(excerpt_el))
    set_attr(hero.find("a"), "href", model.href)


def build_card(
    soup: BeautifulSoup, model: CardModel, extra_classes: Sequence[str] = ()
) -> Tag:
    """Grid card markup matching the static cards of the template."""
    card = new_element(soup, "div", [*CARD_CLASSES, *extra_classes])
    if model.published_at:
        card["data-published"] = model.published_at
    if model.slug:
        card["data-slug"] = model.slug

    img = new_element(soup, "img", ["article-preview-img"], alt=model.image_alt)
    if model.image_url:
        img["src"] = model.image_url
    card.append(img)

    features = new_element(soup, "div", ["features"])
    features.append(new_element(soup, "span", ["author"], model.author))
    features.append(new_element(soup, "span", ["date"], model.date_text))
    features.append(new_element(soup, "span", ["read-time"], model.read_time or ""))
    card.append(features)

    card.append(new_element(soup, "h2", ["article-preview-heading"], model.heading))
    card.append(new_element(soup, "p", ["article-preview-text"], model.excerpt or ""))

    link = new_element(soup, "a", href=model.href or "#")
    link.append(new_element(soup, "button", ["btn", "btn--article"], "Read more"))
    card.append(link)
    return card


def card_date(card: Tag) -> datetime:
    """Sort key: ``data-published``, else the rendered date text, else the earliest date."""
    published = parse_iso(attr_of(card, "data-published"))
    if published is not None:
        return published
    return parse_date_text(text_of(card.select_one(DATE_SELECTOR))) or EARLIEST


def sort_cards(grid: Tag) -> None:
    """Re-append cards: dynamic cards newest first, then originals newest first.

    Originals are the static cards plus the re-added previous hero. Ties keep
    document order.
    """
    cards = grid.select(CARD_SELECTOR)
    originals = [c for c in cards if not has_class(c, DYNAMIC_CLASS)]
    originals += [c for c in cards if has_class(c, PREVIOUS_HERO_CLASS)]
    dynamics = [
        c
        for c in cards
        if has_class(c, DYNAMIC_CLASS) and not has_class(c, PREVIOUS_HERO_CLASS)
    ]

    for card in sorted(dynamics, key=card_date, reverse=True):
        grid.append(card)
    for card in sorted(originals, key=card_date, reverse=True):
        grid.append(card)


def commit_listing(soup: BeautifulSoup, plan: ListingPlan, settings: Settings) -> None:
    hero = soup.select_one(HERO_SELECTOR)
    if hero is not None and plan.hero is not None:
        _apply_hero(hero, plan.hero, settings)

    grid = soup.select_one(GRID_SELECTOR)
    if grid is None:
        return

    # Drop cards injected by an earlier pass so re-rendering does not duplicate them
    for stale in grid.select(f".grid-item.{DYNAMIC_CLASS}"):
        stale.decompose()

    for model in plan.cards:
        grid.append(build_card(soup, model))

    if plan.previous_hero is not None:
        card = build_card(soup, plan.previous_hero, [PREVIOUS_HERO_CLASS])
        card["data-origin"] = PREVIOUS_HERO_CLASS
        grid.append(card)

    sort_cards(grid)


def hydrate_listing(
    soup: BeautifulSoup,
    records: Sequence[ContentRecord],
    locale: str,
    settings: Settings,
) -> ListingPlan | None:
    """Run capture, compute and commit. With no records the page is left alone."""
    if not records:
        return None
    snapshot = capture_hero(soup, settings)
    plan = compute_listing(records, snapshot, locale, settings)
    commit_listing(soup, plan, settings)
    logger.debug(
        "Hydrated listing (%s): %d dynamic card(s), previous hero %s",
        locale,
        len(plan.cards),
        "kept" if plan.previous_hero else "absent",
    )
    return plan
