"""Article page hydration: one record into the single-article template."""

import logging

from bs4 import BeautifulSoup

from hydration.config import Settings
from hydration.models.content import ContentRecord
from hydration.models.render import ArticleView, ResourceLink
from hydration.services.dom import new_element, set_attr, set_text, show
from hydration.services.text import to_paragraphs

logger = logging.getLogger(__name__)

TITLE_SELECTOR = ".article-page--heading"
IMAGE_SELECTOR = ".article-page--content-img"
FIRST_PARAGRAPH_SELECTOR = ".first-paragraph"
BODY_ID = "article-body"
RESOURCES_ID = "article-resources"
RESOURCES_LIST_ID = "article-resources-list"

BODY_PARAGRAPH_CLASSES = ["article-page--content-p", "other-paragraphs"]


def build_resource_links(record: ContentRecord) -> list[ResourceLink]:
    """Numbered labels: ``"1. <label>"``, using the URL when there is no label."""
    links = []
    for i, resource in enumerate(record.resources, start=1):
        label = (resource.label or resource.url or "").strip()
        links.append(ResourceLink(label=f"{i}. {label}", href=resource.url or "#"))
    return links


def build_article_view(record: ContentRecord, settings: Settings) -> ArticleView:
    """Map a record onto the article template's slots.

    The perex, when present, becomes the first paragraph and every body
    paragraph is still rendered below it. Without a perex the first body
    paragraph moves up and is not repeated.
    """
    paragraphs = to_paragraphs(record.body)
    if record.perex:
        first = record.perex
    elif paragraphs:
        first = paragraphs.pop(0)
    else:
        first = ""

    return ArticleView(
        title=record.title or "",
        image_url=record.image_url,
        first_paragraph=first,
        paragraphs=paragraphs,
        resources=build_resource_links(record),
        document_title=(
            f"{record.title} | {settings.brand_name}" if record.title else None
        ),
    )


def apply_article_view(soup: BeautifulSoup, view: ArticleView) -> None:
    set_text(soup.select_one(TITLE_SELECTOR), view.title)
    set_attr(soup.select_one(IMAGE_SELECTOR), "src", view.image_url)
    set_text(soup.select_one(FIRST_PARAGRAPH_SELECTOR), view.first_paragraph)

    body = soup.find(id=BODY_ID)
    if body is not None:
        for text in view.paragraphs:
            body.append(new_element(soup, "p", BODY_PARAGRAPH_CLASSES, text))

    container = soup.find(id=RESOURCES_ID)
    resource_list = soup.find(id=RESOURCES_LIST_ID)
    if view.resources and container is not None and resource_list is not None:
        show(container)
        resource_list.clear()
        for link in view.resources:
            item = new_element(soup, "li")
            item.append(
                new_element(
                    soup,
                    "a",
                    text=link.label,
                    href=link.href,
                    target="_blank",
                    rel="noopener noreferrer",
                )
            )
            resource_list.append(item)

    if view.document_title and soup.title is not None:
        soup.title.string = view.document_title


def hydrate_article(
    soup: BeautifulSoup, record: ContentRecord, settings: Settings
) -> ArticleView:
    view = build_article_view(record, settings)
    apply_article_view(soup, view)
    logger.debug(
        "Hydrated article %r: %d paragraph(s), %d resource(s)",
        record.slug,
        len(view.paragraphs),
        len(view.resources),
    )
    return view
