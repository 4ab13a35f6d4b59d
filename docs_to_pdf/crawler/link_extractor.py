# docs_to_pdf/crawler/link_extractor.py
"""
Link extraction and URL normalization utilities for docs_to_pdf.
"""
from __future__ import annotations

from typing import List
from urllib.parse import urljoin, urlparse, urlunparse

from bs4 import BeautifulSoup
from bs4.element import Tag

from docs_to_pdf.utils import remove_duplicates

_SKIPPED_PREFIXES = ("#", "mailto:", "javascript:")


def normalize_url(url: str) -> str:
    """
    Normalize URL by lowercasing scheme and netloc and dropping the fragment.

    Path, query and trailing slashes are kept as they are.
    """
    parsed = urlparse(url)
    return urlunparse(
        (parsed.scheme.lower(), parsed.netloc.lower(), parsed.path, parsed.params, parsed.query, "")
    )


def extract_links(html: str, page_url: str) -> List[str]:
    """
    Extract outbound links from *html*, resolved against *page_url*.

    Ignores in-page anchors, mailto: and javascript: links; fragments are stripped
    and duplicates removed (first occurrence wins). Domain scoping is left to
    :func:`docs_to_pdf.crawler.filters.is_eligible`.
    """
    soup = BeautifulSoup(html, "html.parser")
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if not raw or raw.lower().startswith(_SKIPPED_PREFIXES):
            continue
        try:
            absolute = urljoin(page_url, raw)
            parsed = urlparse(absolute)
        except ValueError:
            continue
        if parsed.scheme in ("http", "https"):
            links.append(normalize_url(absolute))
    return remove_duplicates(links)


__all__ = ["extract_links", "normalize_url"]
