"""
Allowlist HTML sanitizer for model-authored markup.

The grammar notes arrive as an HTML fragment written by the language model.
Formatting tags survive; anything that can run script does not.
"""

from __future__ import annotations

import re
from typing import Optional

from bs4 import BeautifulSoup, Comment

ALLOWED_TAGS = {
    "b", "strong", "i", "em", "u", "s", "mark", "small", "sub", "sup",
    "br", "p", "div", "span", "ul", "ol", "li", "h3", "h4", "h5", "h6",
    "blockquote", "code", "pre", "table", "thead", "tbody", "tr", "th", "td",
}

# Dropped together with their content
DROP_TAGS = {
    "script", "style", "iframe", "object", "embed", "noscript", "template",
    "svg", "math", "form", "input", "button", "select", "textarea", "link", "meta",
}

ALLOWED_ATTRS = {"class", "style"}

_UNSAFE_STYLE = re.compile(r"expression\s*\(|url\s*\(|javascript:|@import", re.IGNORECASE)


def _clean_style(value: str) -> Optional[str]:
    if not value or _UNSAFE_STYLE.search(value):
        return None
    return value


def sanitize_html(html: Optional[str]) -> str:
    """Return ``html`` reduced to the formatting allowlist."""
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")

    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()

    for tag in soup.find_all(DROP_TAGS):
        tag.decompose()

    for tag in soup.find_all(True):
        if tag.name not in ALLOWED_TAGS:
            tag.unwrap()
            continue
        for attr in list(tag.attrs):
            if attr not in ALLOWED_ATTRS:
                del tag[attr]
            elif attr == "style":
                cleaned = _clean_style(str(tag[attr]))
                if cleaned is None:
                    del tag[attr]

    return str(soup)
