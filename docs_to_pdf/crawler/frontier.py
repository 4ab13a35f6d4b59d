# docs_to_pdf/crawler/frontier.py
"""
Crawl frontier: pending FIFO queue, visited set and first-seen depth map.
"""
from __future__ import annotations

from collections import deque
from typing import Deque, Dict, FrozenSet, Optional, Set

from docs_to_pdf.crawler.models import CrawlTarget


class Frontier:
    """
    Pending targets in discovery (FIFO) order plus visit bookkeeping.

    A URL that was visited is never queued again, and its depth is the one it
    had when first discovered. Order is arrival order, not strict per-layer BFS.
    """

    def __init__(self, max_depth: int) -> None:
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        self.max_depth = max_depth
        self._pending: Deque[CrawlTarget] = deque()
        self._pending_urls: Set[str] = set()
        self._visited: Set[str] = set()
        self._depths: Dict[str, int] = {}

    def enqueue(self, url: str, depth: int) -> bool:
        """Queue *url* at *depth*; returns False when it is already visited or pending."""
        if url in self._visited or url in self._pending_urls:
            return False
        self._pending.append(CrawlTarget(url, depth))
        self._pending_urls.add(url)
        self._depths.setdefault(url, depth)
        return True

    def dequeue_next(self) -> Optional[CrawlTarget]:
        if not self._pending:
            return None
        target = self._pending.popleft()
        self._pending_urls.discard(target.url)
        return target

    def mark_visited(self, url: str) -> None:
        self._visited.add(url)

    def is_visited(self, url: str) -> bool:
        return url in self._visited

    def exceeds_depth(self, target: CrawlTarget) -> bool:
        return target.depth > self.max_depth

    def depth_of(self, url: str) -> Optional[int]:
        return self._depths.get(url)

    @property
    def visited(self) -> FrozenSet[str]:
        return frozenset(self._visited)

    def __len__(self) -> int:
        return len(self._pending)

    def __bool__(self) -> bool:
        return bool(self._pending)


__all__ = ["Frontier"]
