# === FILE: docs_to_pdf/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import enum
import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from docs_to_pdf.config import CrawlerConfig
from docs_to_pdf.crawler.filters import is_eligible
from docs_to_pdf.crawler.frontier import Frontier
from docs_to_pdf.crawler.link_extractor import normalize_url
from docs_to_pdf.crawler.models import CrawlTarget, PageArtifact, RenderOptions
from docs_to_pdf.crawler.renderer import Renderer
from docs_to_pdf.errors import FetchFailure
from docs_to_pdf.storage import ArtifactStore

__all__ = ("CrawlState", "CrawlSummary", "DocsCrawler")


class CrawlState(enum.Enum):
    RUNNING = "running"
    DRAINING = "draining"
    DONE = "done"


@dataclass(slots=True)
class CrawlSummary:
    """Outcome of one crawl: visited URLs, produced artifacts and what was skipped."""
    seed_url: str
    visited: List[str] = field(default_factory=list)
    artifacts: List[PageArtifact] = field(default_factory=list)
    failed_urls: List[str] = field(default_factory=list)
    depth_skipped: int = 0
    duration: float = 0.0

    @property
    def pages_visited(self) -> int:
        return len(self.visited)

    @property
    def artifacts_produced(self) -> int:
        return len(self.artifacts)

    @property
    def skipped(self) -> int:
        return len(self.failed_urls)


class DocsCrawler:
    """
    Sequential crawl loop: one page at a time, in frontier (FIFO) order.

    The renderer does navigation, link extraction and PDF capture; this class
    owns the frontier, applies the URL filter and stores artifacts. A failing
    page is logged and skipped, it never stops the crawl.
    """

    def __init__(self, config: CrawlerConfig, renderer: Renderer, store: ArtifactStore) -> None:
        self.config = config
        self.renderer = renderer
        self.store = store
        self.logger = logging.getLogger("DocsToPdf")
        self.seed_url = normalize_url(config.seed_url)
        self.frontier = Frontier(config.depth)
        self.state = CrawlState.RUNNING
        self.options = RenderOptions(
            selector=config.selector,
            navigation_timeout_ms=config.navigation_timeout_ms,
            selector_timeout_ms=config.selector_timeout_ms,
            fallback_timeout_ms=config.fallback_timeout_ms,
        )

    async def crawl(self) -> CrawlSummary:
        self.logger.info("Starting crawl: %s", self.seed_url)
        start = time.monotonic()
        summary = CrawlSummary(seed_url=self.seed_url)
        self.frontier.enqueue(self.seed_url, 0)
        self.state = CrawlState.RUNNING

        while self.state is CrawlState.RUNNING:
            target = self.frontier.dequeue_next()
            if target is None:
                self.state = CrawlState.DRAINING
                break
            if self.frontier.is_visited(target.url):
                continue
            if self.frontier.exceeds_depth(target):
                self.logger.info("Skipping %s - max depth reached", target.url)
                summary.depth_skipped += 1
                continue

            # marked before rendering so self-links on the page are not re-queued
            self.frontier.mark_visited(target.url)
            summary.visited.append(target.url)

            artifact = await self._process(target, summary)
            if artifact is not None:
                summary.artifacts.append(artifact)

            if self.config.wait > 0:
                await asyncio.sleep(self.config.wait / 1000)

        self.state = CrawlState.DONE
        summary.duration = time.monotonic() - start
        self.logger.info(
            "Crawl summary: visited %d pages, PDFs generated %d, skipped %d (%.2f s)",
            summary.pages_visited,
            summary.artifacts_produced,
            summary.skipped,
            summary.duration,
        )
        return summary

    async def _process(self, target: CrawlTarget, summary: CrawlSummary) -> Optional[PageArtifact]:
        self.logger.info("[Depth %d] Processing: %s", target.depth, target.url)
        try:
            result = await self.renderer.fetch_and_capture(target.url, self.options)
        except FetchFailure as exc:
            self.logger.error("Error processing %s: %s", target.url, exc)
            summary.failed_urls.append(target.url)
            return None

        queued = self._enqueue_links(result.links, target.depth + 1)
        self.logger.debug("Queued %d new links from %s", queued, target.url)

        try:
            artifact = self.store.save(target.url, target.depth, result.artifact)
        except OSError as exc:
            self.logger.error("Error saving PDF for %s: %s", target.url, exc)
            summary.failed_urls.append(target.url)
            return None
        self.logger.info("Generated PDF: %s", artifact.path.name)
        return artifact

    def _enqueue_links(self, links: List[str], depth: int) -> int:
        queued = 0
        for link in links:
            try:
                url = normalize_url(link)
            except ValueError:
                continue
            if not is_eligible(url, self.seed_url, self.config.include, self.config.exclude):
                continue
            if self.frontier.enqueue(url, depth):
                queued += 1
        return queued

    # alias for compatibility
    run = crawl
