"""HTML helpers built on BeautifulSoup."""

import re
from typing import Dict, FrozenSet, Optional

from bs4 import BeautifulSoup, Comment, Tag

SUGGESTION_ALLOWED_TAGS: FrozenSet[str] = frozenset(
    {"h1", "h2", "h3", "p", "ul", "ol", "li", "strong", "em", "section", "div", "span"}
)
SUGGESTION_ALLOWED_ATTRIBUTES: Dict[str, FrozenSet[str]] = {
    "div": frozenset({"class"}),
    "section": frozenset({"class"}),
    "span": frozenset({"class"}),
}

# Content of these tags is dropped along with the tag itself
_DROP_WITH_CONTENT = ("script", "style", "iframe", "object", "embed", "noscript", "template")

_CODE_FENCE = re.compile(r"```(?:html|json)?")


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences a model may wrap its answer in."""
    return _CODE_FENCE.sub("", text).strip()


def sanitize_html(
    html: str,
    allowed_tags: FrozenSet[str] = SUGGESTION_ALLOWED_TAGS,
    allowed_attributes: Optional[Dict[str, FrozenSet[str]]] = None,
) -> str:
    """Reduce ``html`` to an allow-list of tags and attributes.

    Disallowed tags are unwrapped so their text survives; script-like tags are
    removed together with their content.
    """
    if allowed_attributes is None:
        allowed_attributes = SUGGESTION_ALLOWED_ATTRIBUTES

    soup = BeautifulSoup(html, "html.parser")

    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()

    for tag in soup.find_all(_DROP_WITH_CONTENT):
        tag.decompose()

    for tag in soup.find_all(True):
        if not isinstance(tag, Tag):
            continue
        if tag.name not in allowed_tags:
            tag.unwrap()
            continue
        permitted = allowed_attributes.get(tag.name, frozenset())
        tag.attrs = {k: v for k, v in tag.attrs.items() if k in permitted}

    return str(soup).strip()


def html_to_text(html: str) -> str:
    """Return the visible text of an HTML fragment."""
    return BeautifulSoup(html, "html.parser").get_text(" ", strip=True)


def first_image_src(html: str) -> Optional[str]:
    """Return the ``src`` of the first ``<img>`` in ``html``, if any."""
    img = BeautifulSoup(html, "html.parser").find("img", src=True)
    if isinstance(img, Tag):
        src = img.get("src")
        return src if isinstance(src, str) else None
    return None
