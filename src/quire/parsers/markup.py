"""HTML to paragraph conversion for the EPUB importer."""

from __future__ import annotations

import re
import warnings

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning

warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)

BLOCK_TAGS = frozenset(
    ["p", "div", "h1", "h2", "h3", "h4", "h5", "h6", "li", "blockquote", "pre"]
)


def soup_to_paragraphs(soup: BeautifulSoup) -> list[str]:
    for tag in soup.find_all(["head", "script", "style", "sup", "nav"]):
        tag.decompose()

    paragraphs: list[str] = []
    block_tags = soup.find_all(list(BLOCK_TAGS))

    if block_tags:
        for tag in block_tags:
            if tag.find(list(BLOCK_TAGS)):
                continue
            text = tag.get_text(separator=" ", strip=True)
            text = re.sub(r"\s+", " ", text).strip()
            if text:
                paragraphs.append(text)
    else:
        text = soup.get_text(separator="\n")
        for para in re.split(r"\n\s*\n", text):
            cleaned = re.sub(r"\s+", " ", para).strip()
            if cleaned:
                paragraphs.append(cleaned)

    return paragraphs
