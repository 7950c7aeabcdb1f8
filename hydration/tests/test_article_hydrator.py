"""Tests for the single-article hydrator."""

import pytest

from hydration.config import Settings
from hydration.services.article_hydrator import (
    apply_article_view,
    build_article_view,
    hydrate_article,
)
from hydration.services.dom import parse_html
from hydration.tests.sample_pages import ARTICLE_TEMPLATE, text_block


@pytest.fixture
def settings():
    return Settings()


def _body_paragraphs(soup):
    return [p.get_text() for p in soup.select("#article-body p.other-paragraphs")]


class TestBuildArticleView:
    def test_without_perex_first_body_paragraph_moves_up(self, make_record, settings):
        record = make_record(body=[text_block("A\n\nB"), text_block("C")])
        view = build_article_view(record, settings)

        assert view.first_paragraph == "A"
        assert view.paragraphs == ["B", "C"]

    def test_perex_does_not_consume_a_body_paragraph(self, make_record, settings):
        record = make_record(perex="Intro.", body=[text_block("A\n\nB")])
        view = build_article_view(record, settings)

        assert view.first_paragraph == "Intro."
        assert view.paragraphs == ["A", "B"]

    def test_empty_body_and_no_perex(self, make_record, settings):
        view = build_article_view(make_record(body=[]), settings)
        assert view.first_paragraph == ""
        assert view.paragraphs == []

    def test_resource_labels_are_numbered(self, make_record, settings):
        record = make_record(
            resources=[{"url": "https://a"}, {"label": "B", "url": "https://b"}]
        )
        view = build_article_view(record, settings)

        assert [r.label for r in view.resources] == ["1. https://a", "2. B"]
        assert [r.href for r in view.resources] == ["https://a", "https://b"]

    def test_resource_label_is_trimmed_and_missing_url_links_nowhere(
        self, make_record, settings
    ):
        record = make_record(resources=[{"label": "  Report  "}])
        (link,) = build_article_view(record, settings).resources
        assert link.label == "1. Report"
        assert link.href == "#"

    def test_document_title_uses_brand(self, make_record, settings):
        view = build_article_view(make_record(title="Threat Brief"), settings)
        assert view.document_title == "Threat Brief | CzechAlert"


class TestApplyArticleView:
    def test_populates_template(self, make_record, settings):
        soup = parse_html(ARTICLE_TEMPLATE)
        record = make_record(
            title="Threat Brief",
            imageUrl="https://cdn.sanity.io/images/brief.webp",
            body=[text_block("A"), text_block("B"), text_block("C")],
        )
        hydrate_article(soup, record, settings)

        assert soup.select_one(".article-page--heading").get_text() == "Threat Brief"
        assert (
            soup.select_one(".article-page--content-img")["src"]
            == "https://cdn.sanity.io/images/brief.webp"
        )
        assert soup.select_one(".first-paragraph").get_text() == "A"
        assert _body_paragraphs(soup) == ["B", "C"]
        assert soup.title.get_text() == "Threat Brief | CzechAlert"

    def test_perex_page_renders_every_body_paragraph(self, make_record, settings):
        soup = parse_html(ARTICLE_TEMPLATE)
        record = make_record(perex="Intro.", body=[text_block("A\n\nB\n\nC")])
        hydrate_article(soup, record, settings)

        assert soup.select_one(".first-paragraph").get_text() == "Intro."
        assert _body_paragraphs(soup) == ["A", "B", "C"]

    def test_keeps_template_image_when_record_has_none(self, make_record, settings):
        soup = parse_html(ARTICLE_TEMPLATE)
        hydrate_article(soup, make_record(imageUrl=None), settings)
        assert soup.select_one(".article-page--content-img")["src"] == (
            "media/placeholder.webp"
        )

    def test_resources_are_revealed_and_rendered(self, make_record, settings):
        soup = parse_html(ARTICLE_TEMPLATE)
        record = make_record(
            resources=[{"url": "https://a"}, {"label": "B", "url": "https://b"}]
        )
        hydrate_article(soup, record, settings)

        container = soup.find(id="article-resources")
        assert not container.has_attr("style")
        links = soup.select("#article-resources-list li a")
        assert [a.get_text() for a in links] == ["1. https://a", "2. B"]
        for a in links:
            assert a["target"] == "_blank"
            assert a["rel"] == "noopener noreferrer"
        assert "placeholder" not in soup.find(id="article-resources-list").get_text()

    def test_resources_stay_hidden_when_empty(self, make_record, settings):
        soup = parse_html(ARTICLE_TEMPLATE)
        hydrate_article(soup, make_record(resources=[]), settings)

        container = soup.find(id="article-resources")
        assert "display: none" in container["style"]
        assert soup.select_one("#article-resources-list li").get_text() == "placeholder"

    def test_other_inline_styles_survive_reveal(self, make_record, settings):
        soup = parse_html(
            '<div id="article-resources" style="margin: 0; display:none">'
            '<ol id="article-resources-list"></ol></div>'
        )
        hydrate_article(soup, make_record(resources=[{"url": "https://a"}]), settings)
        assert soup.find(id="article-resources")["style"] == "margin: 0;"

    def test_missing_elements_are_skipped(self, make_record, settings):
        soup = parse_html("<html><body><p>unrelated</p></body></html>")
        view = build_article_view(
            make_record(perex="p", resources=[{"url": "https://a"}]), settings
        )
        apply_article_view(soup, view)
        assert soup.body.get_text() == "unrelated"
