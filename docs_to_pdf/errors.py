"""
Error taxonomy for docs_to_pdf.

Per-target (:class:`FetchFailure`) and per-artifact (:class:`MergeFailure`)
errors are recovered where they occur; :class:`FatalStartupFailure` aborts the run.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class DocsToPdfError(Exception):
    """Base class for all project errors."""


class FetchFailure(DocsToPdfError):
    """A single page could not be rendered; the crawl goes on without it."""

    step = "fetch"

    def __init__(self, url: str, reason: Union[str, BaseException]) -> None:
        self.url = url
        self.reason = str(reason)
        super().__init__(f"{self.step} failed for {url}: {self.reason}")


class NavigationError(FetchFailure):
    step = "navigation"


class SelectorTimeoutError(FetchFailure):
    step = "selector wait"


class CaptureError(FetchFailure):
    step = "capture"


class MergeFailure(DocsToPdfError):
    """One artifact could not be read while assembling the final document."""

    def __init__(self, url: str, path: Optional[Path], reason: Union[str, BaseException]) -> None:
        self.url = url
        self.path = path
        self.reason = str(reason)
        super().__init__(f"cannot merge {url} ({path}): {self.reason}")


class FatalStartupFailure(DocsToPdfError):
    """The run cannot proceed at all (no browser, unwritable output, ...)."""


__all__ = [
    "DocsToPdfError",
    "FetchFailure",
    "NavigationError",
    "SelectorTimeoutError",
    "CaptureError",
    "MergeFailure",
    "FatalStartupFailure",
]
