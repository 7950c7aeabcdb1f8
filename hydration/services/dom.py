"""Small BeautifulSoup helpers shared by the hydrators.

Every setter tolerates a missing element so templates can drift without
breaking a hydration pass.
"""

import re

from bs4 import BeautifulSoup, Tag

_DISPLAY_RE = re.compile(r"\s*display\s*:[^;]*;?", re.IGNORECASE)


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def text_of(el: Tag | None) -> str:
    return el.get_text() if el is not None else ""


def attr_of(el: Tag | None, name: str) -> str:
    if el is None:
        return ""
    value = el.get(name)
    if isinstance(value, list):
        return " ".join(value)
    return value or ""


def set_text(el: Tag | None, text: str) -> None:
    if el is not None:
        el.string = text


def set_attr(el: Tag | None, name: str, value: str | None) -> None:
    if el is not None and value:
        el[name] = value


def has_class(el: Tag, name: str) -> bool:
    return name in (el.get("class") or [])


def show(el: Tag | None) -> None:
    """Clear an inline ``display`` so a hidden container becomes visible."""
    if el is None or not el.has_attr("style"):
        return
    style = _DISPLAY_RE.sub("", el["style"]).strip()
    if style:
        el["style"] = style
    else:
        del el["style"]


def new_element(
    soup: BeautifulSoup,
    name: str,
    classes: list[str] | None = None,
    text: str | None = None,
    **attrs: str,
) -> Tag:
    tag = soup.new_tag(name)
    if classes:
        tag["class"] = list(classes)
    for key, value in attrs.items():
        tag[key.replace("_", "-")] = value
    if text is not None:
        tag.string = text
    return tag
