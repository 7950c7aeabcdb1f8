"""Render models: the values a hydrator writes into a page."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class HeroSnapshot:
    """Pre-hydration content of a listing page's hero slot.

    Captured once before the hero is overwritten and turned into a trailing
    card at the end of the same pass.
    """

    image_url: str
    author: str
    date_text: str
    read_time_text: str
    title: str
    excerpt: str
    href: str


@dataclass
class CardModel:
    """Field values for the hero slot or one grid card."""

    heading: str
    author: str
    date_text: str
    read_time: str | None
    excerpt: str | None
    href: str | None
    image_url: str | None = None
    image_alt: str = "Article image"
    published_at: str | None = None
    slug: str | None = None


@dataclass
class ListingPlan:
    """The new state of a listing page, computed before anything is mutated."""

    hero: CardModel | None
    cards: list[CardModel] = field(default_factory=list)
    previous_hero: CardModel | None = None


@dataclass
class ResourceLink:
    label: str
    href: str


@dataclass
class ArticleView:
    """Everything the article template needs for one record."""

    title: str
    image_url: str | None
    first_paragraph: str
    paragraphs: list[str] = field(default_factory=list)
    resources: list[ResourceLink] = field(default_factory=list)
    document_title: str | None = None


@dataclass(frozen=True)
class SlideSnapshot:
    """Pre-hydration content of one carousel slide."""

    heading: str
    href: str
    image_url: str
    date_text: str


@dataclass
class SlideModel:
    heading: str | None
    href: str | None
    image_url: str | None


@dataclass
class PageResult:
    """Outcome of rendering one page: hydrated HTML or a redirect target."""

    html: str | None = None
    redirect_to: str | None = None
