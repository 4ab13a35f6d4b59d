# File: docs_to_pdf/utils.py
"""docs_to_pdf.utils: helpers for URL-derived names (domain label, file names, display strings)."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Collection, List, Sequence, Union
from urllib.parse import urlparse

from docs_to_pdf.logger import logger

__all__: Sequence[str] = (
    "FALLBACK_DOMAIN",
    "MAX_FILENAME_LENGTH",
    "MAX_DISPLAY_URL_LENGTH",
    "extract_domain",
    "default_output_name",
    "derive_title",
    "url_to_filename",
    "truncate_url",
    "remove_duplicates",
)

FALLBACK_DOMAIN = "documentation"
MAX_FILENAME_LENGTH = 100
MAX_DISPLAY_URL_LENGTH = 80

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_UNSAFE_RE = re.compile(r"[^a-zA-Z0-9-]+")


def extract_domain(url: str) -> str:
    """Short site label: hostname without ``www.``, first label only (``docs.python.org`` → ``docs``)."""
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        hostname = None
    if not hostname:
        return FALLBACK_DOMAIN
    return hostname.replace("www.", "", 1).split(".")[0] or FALLBACK_DOMAIN


def default_output_name(url: str) -> str:
    return f"{extract_domain(url)}-documentation.pdf"


def derive_title(output_name: Union[str, Path]) -> str:
    """Human title from the output file name: ``my-docs.pdf`` → ``my docs``."""
    name = Path(output_name).name
    if name.lower().endswith(".pdf"):
        name = name[: -len(".pdf")]
    return name.replace("-", " ")


def url_to_filename(url: str, max_length: int = MAX_FILENAME_LENGTH) -> str:
    """
    Safe file name for a captured page.

    The scheme is dropped, runs of characters outside ``[A-Za-z0-9-]`` collapse
    into one ``_`` and the result is cut at *max_length* before ``.pdf`` is appended.
    The mapping is lossy: ``.../a.b`` and ``.../a/b`` give one name, as do the
    ``http`` and ``https`` forms of a URL. :class:`~docs_to_pdf.storage.ArtifactStore`
    adds a numeric suffix when names clash.
    """
    stem = _UNSAFE_RE.sub("_", _SCHEME_RE.sub("", url)).strip("_")
    if len(stem) > max_length:
        stem = stem[:max_length]
    return f"{stem or 'index'}.pdf"


def truncate_url(url: str, max_length: int = MAX_DISPLAY_URL_LENGTH) -> str:
    """Display form of *url* for separator and contents pages."""
    if len(url) > max_length:
        return url[:max_length] + "..."
    return url


def remove_duplicates(urls: Collection[str]) -> List[str]:
    """Удаляет дубликаты из списка URL, сохраняя порядок."""
    unique = list(dict.fromkeys(urls))
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique
