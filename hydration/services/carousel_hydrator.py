"""Homepage carousel hydration.

Slide 1 shows the newest post, slide 2 the second newest, and slide 3 the
newest of the slides that were on the page before hydration.
"""

import logging
from collections.abc import Sequence

from bs4 import BeautifulSoup, Tag

from hydration.models.content import ContentRecord
from hydration.models.render import SlideModel, SlideSnapshot
from hydration.services.dom import attr_of, has_class, set_attr, set_text, text_of
from hydration.services.locale import article_link
from hydration.services.text import EARLIEST, parse_date_text

logger = logging.getLogger(__name__)

SLIDE_SELECTOR = ".swiper .swiper-wrapper .swiper-slide"
# Loop-mode carousels clone slides; clones are never hydrated
DUPLICATE_CLASS = "swiper-slide-duplicate"
HEADING_SELECTOR = ".text-container--heading .heading-XXL"
LINK_SELECTOR = ".text-container a"
IMAGE_SELECTOR = ".img-overlay-wrapper img.blog-img"
DATE_SELECTOR = ".features .date"

ARTICLE_PAGE = "article.html"


def original_slides(soup: BeautifulSoup) -> list[Tag]:
    return [s for s in soup.select(SLIDE_SELECTOR) if not has_class(s, DUPLICATE_CLASS)]


def capture_slide(slide: Tag) -> SlideSnapshot:
    return SlideSnapshot(
        heading=text_of(slide.select_one(HEADING_SELECTOR)),
        href=attr_of(slide.select_one(LINK_SELECTOR), "href"),
        image_url=attr_of(slide.select_one(IMAGE_SELECTOR), "src"),
        date_text=text_of(slide.select_one(DATE_SELECTOR)),
    )


def newest_snapshot(snapshots: Sequence[SlideSnapshot]) -> SlideSnapshot | None:
    """The snapshot with the latest date text; undated slides sort last."""
    if not snapshots:
        return None
    return sorted(
        snapshots,
        key=lambda snap: parse_date_text(snap.date_text) or EARLIEST,
        reverse=True,
    )[0]


def record_slide(record: ContentRecord) -> SlideModel:
    return SlideModel(
        heading=record.heading or None,
        href=article_link(ARTICLE_PAGE, record.slug),
        image_url=record.image_url,
    )


def snapshot_slide(snapshot: SlideSnapshot) -> SlideModel:
    return SlideModel(
        heading=snapshot.heading or None,
        href=snapshot.href or None,
        image_url=snapshot.image_url or None,
    )


def apply_slide(slide: Tag, model: SlideModel) -> None:
    """Write *model* into *slide*; ``None`` fields leave the slide's content as is."""
    if model.heading:
        set_text(slide.select_one(HEADING_SELECTOR), model.heading)
    set_attr(slide.select_one(LINK_SELECTOR), "href", model.href)
    set_attr(slide.select_one(IMAGE_SELECTOR), "src", model.image_url)


def hydrate_carousel(
    soup: BeautifulSoup, records: Sequence[ContentRecord]
) -> list[SlideModel]:
    slides = original_slides(soup)
    if not slides:
        return []

    # Snapshot every slide before the first one is overwritten
    newest_static = newest_snapshot([capture_slide(s) for s in slides])

    models: list[SlideModel] = []
    for slide, record in zip(slides[:2], records[:2]):
        model = record_slide(record)
        apply_slide(slide, model)
        models.append(model)

    if len(slides) > 2 and newest_static is not None:
        model = snapshot_slide(newest_static)
        apply_slide(slides[2], model)
        models.append(model)

    logger.debug("Hydrated %d carousel slide(s)", len(models))
    return models
