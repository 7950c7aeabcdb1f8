"""Content records as returned by the Sanity query API."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Span(BaseModel):
    """A run of text inside a Portable Text block."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str = Field(default="span", alias="_type")
    text: str = ""

    @field_validator("text", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class PortableTextBlock(BaseModel):
    """One entry of a rich-text body.

    Only ``_type == "block"`` entries carry text; images and other custom
    types keep their extra keys but are ignored when rendering.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str = Field(default="", alias="_type")
    children: list[Span] | None = None

    @property
    def is_text(self) -> bool:
        return self.type == "block" and self.children is not None

    @field_validator("children", mode="before")
    @classmethod
    def _drop_bad_children(cls, value: Any) -> Any:
        if value is None or not isinstance(value, list):
            return None
        return [c for c in value if isinstance(c, dict)]


class Resource(BaseModel):
    """A labelled external link listed under an article."""

    label: str | None = None
    url: str | None = None


class ContentRecord(BaseModel):
    """A single published post.

    Field names follow the GROQ projection (camelCase) on input and are
    exposed in snake_case.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str
    preview_heading: str | None = Field(default=None, alias="previewHeading")
    slug: str | None = None
    language: Literal["en", "cs"] | None = None
    author: str | None = None
    published_at: str | None = Field(default=None, alias="publishedAt")
    read_time: str | None = Field(default=None, alias="readTime")
    image_url: str | None = Field(default=None, alias="imageUrl")
    perex: str | None = None
    body: list[PortableTextBlock] = []
    resources: list[Resource] = []

    @field_validator("body", "resources", mode="before")
    @classmethod
    def _null_list(cls, value: Any) -> Any:
        """The API returns ``null`` for unset arrays; non-dict entries are dropped."""
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, dict)]

    @property
    def heading(self) -> str:
        """Listing heading: previewHeading, falling back to title."""
        return self.preview_heading or self.title or ""
