# docs_to_pdf/crawler/models.py
"""
Data models for the docs_to_pdf crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple


@dataclass(slots=True, frozen=True)
class CrawlTarget:
    """A normalized URL waiting in the frontier, with its discovery depth."""

    url: str
    depth: int


@dataclass(slots=True, frozen=True)
class RenderOptions:
    """Per-visit settings handed to the renderer."""

    selector: str
    navigation_timeout_ms: int = 60000
    selector_timeout_ms: int = 10000
    fallback_timeout_ms: int = 5000

    @property
    def primary_selector(self) -> str:
        """First clause of the selector list, used for the initial wait."""
        return self.selector.split(",")[0].strip() or "body"


@dataclass(slots=True)
class CaptureResult:
    """What the renderer returns for one page: outbound links and the PDF bytes."""

    links: List[str]
    artifact: bytes
    final_url: str = ""


@dataclass(slots=True, frozen=True)
class PageArtifact:
    """Captured PDF of one visited page, stored on disk at *path*."""

    url: str
    depth: int
    path: Path = field(compare=False)

    @property
    def order_key(self) -> Tuple[int, str]:
        return (self.depth, self.url)

    @property
    def content(self) -> bytes:
        return self.path.read_bytes()
