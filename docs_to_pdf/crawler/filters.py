# docs_to_pdf/crawler/filters.py
"""
URL eligibility predicate: same host, include/exclude substrings, no binary files.
"""
from __future__ import annotations

from typing import Sequence
from urllib.parse import urlparse

# Paths ending with these are never documentation pages (frozen set for O(1) lookup)
SKIP_EXTENSIONS: frozenset[str] = frozenset((
    ".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg", ".bmp", ".ico", ".tif", ".tiff",
    ".zip", ".tar", ".gz", ".tgz", ".bz2", ".xz", ".7z", ".rar",
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx", ".epub",
    ".mp3", ".mp4", ".wav", ".webm", ".avi", ".mov",
    ".exe", ".dmg", ".msi", ".deb", ".rpm", ".whl", ".jar",
))


def has_skipped_extension(path: str) -> bool:
    lowered = path.lower()
    return any(lowered.endswith(ext) for ext in SKIP_EXTENSIONS)


def is_eligible(
    candidate_url: str,
    seed_url: str,
    include_patterns: Sequence[str] = (),
    exclude_patterns: Sequence[str] = (),
) -> bool:
    """
    Decide whether *candidate_url* may be queued.

    Rules are checked in order and short-circuit:

    1. the host must equal the seed's host;
    2. with include patterns, the raw URL must contain at least one of them;
    3. the raw URL must contain none of the exclude patterns (exclude wins);
    4. the path must not end with a binary/media extension.

    URLs that fail to parse are rejected.
    """
    try:
        candidate = urlparse(candidate_url)
        host = candidate.hostname
        seed_host = urlparse(seed_url).hostname
    except ValueError:
        return False

    if not host or host != seed_host:
        return False
    if include_patterns and not any(p in candidate_url for p in include_patterns):
        return False
    if any(p in candidate_url for p in exclude_patterns):
        return False
    if has_skipped_extension(candidate.path):
        return False
    return True


__all__ = ["SKIP_EXTENSIONS", "has_skipped_extension", "is_eligible"]
