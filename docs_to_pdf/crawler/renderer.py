# docs_to_pdf/crawler/renderer.py
"""
Renderer: opens a page in headless Chromium, extracts its links and prints it to PDF.

One browser is shared by the whole run; every visit gets its own browser
context, closed on every exit path.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeout

from docs_to_pdf.crawler.link_extractor import extract_links
from docs_to_pdf.crawler.models import CaptureResult, RenderOptions
from docs_to_pdf.errors import CaptureError, FatalStartupFailure, NavigationError, SelectorTimeoutError

__all__ = ("Renderer", "PlaywrightRenderer", "PRINT_CSS")

VIEWPORT = {"width": 1280, "height": 800}
PDF_MARGIN = {"top": "20mm", "right": "20mm", "bottom": "20mm", "left": "20mm"}

# Hide site chrome and make content readable on paper
PRINT_CSS = """
nav, aside, .sidebar, .navigation, header, footer,
.header, .footer, .nav, .navbar, .breadcrumb,
[class*="cookie"], [class*="banner"], [class*="popup"],
[class*="modal"], [class*="overlay"], [class*="alert"] {
    display: none !important;
}
main, .main-content, article, .content, .documentation {
    max-width: 100% !important;
    margin: 0 auto !important;
    padding: 20px !important;
}
pre, code {
    white-space: pre-wrap !important;
    word-wrap: break-word !important;
    max-width: 100% !important;
    overflow-x: auto !important;
}
table {
    max-width: 100% !important;
    overflow-x: auto !important;
    display: block !important;
}
"""

# Clauses are tried in the order given; the first hit replaces the body content
_ISOLATE_CONTENT_JS = """
(selector) => {
    for (const clause of selector.split(',')) {
        const css = clause.trim();
        if (!css) {
            continue;
        }
        const el = document.querySelector(css);
        if (!el) {
            continue;
        }
        if (el === document.body || el === document.documentElement) {
            return false;
        }
        document.body.replaceChildren(el);
        return true;
    }
    return false;
}
"""


class Renderer(Protocol):
    """Contract the crawler relies on; failures are :class:`~docs_to_pdf.errors.FetchFailure`."""

    async def fetch_and_capture(self, url: str, options: RenderOptions) -> CaptureResult:
        ...


class PlaywrightRenderer:
    """Headless Chromium renderer built on Playwright's async API."""

    def __init__(self, headless: bool = True) -> None:
        self.headless = headless
        self.logger = logging.getLogger("DocsToPdf")
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    async def __aenter__(self) -> PlaywrightRenderer:
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.headless,
                args=["--no-sandbox", "--disable-setuid-sandbox"],
            )
        except PlaywrightError as exc:
            await self._shutdown()
            raise FatalStartupFailure(f"cannot launch browser: {exc}") from exc
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._shutdown()

    async def _shutdown(self) -> None:
        if self._browser is not None:
            try:
                await self._browser.close()
            except PlaywrightError as exc:
                self.logger.debug("Browser close failed: %s", exc)
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None

    async def fetch_and_capture(self, url: str, options: RenderOptions) -> CaptureResult:
        if self._browser is None:
            raise RuntimeError("Renderer not started; use 'async with PlaywrightRenderer()'")
        try:
            context: BrowserContext = await self._browser.new_context(viewport=VIEWPORT)
        except PlaywrightError as exc:
            raise NavigationError(url, exc) from exc
        try:
            page = await self._open_page(context, url)
            await self._navigate(page, url, options)
            await self._wait_for_content(page, url, options)
            final_url = page.url or url
            links = await self._extract_links(page, final_url)
            artifact = await self._capture(page, url, options)
            return CaptureResult(links=links, artifact=artifact, final_url=final_url)
        finally:
            try:
                await context.close()
            except PlaywrightError as exc:
                self.logger.debug("Context close failed for %s: %s", url, exc)

    # ------------------------------------------------------------------ steps

    async def _open_page(self, context: BrowserContext, url: str) -> Page:
        try:
            return await context.new_page()
        except PlaywrightError as exc:
            raise NavigationError(url, exc) from exc

    async def _navigate(self, page: Page, url: str, options: RenderOptions) -> None:
        try:
            await page.goto(url, wait_until="networkidle", timeout=options.navigation_timeout_ms)
        except PlaywrightError as exc:
            raise NavigationError(url, exc) from exc

    async def _wait_for_content(self, page: Page, url: str, options: RenderOptions) -> None:
        try:
            await page.wait_for_selector(options.primary_selector, timeout=options.selector_timeout_ms)
            return
        except PlaywrightTimeout:
            self.logger.info("Primary selector %r not found on %s, trying fallback...", options.primary_selector, url)
        except PlaywrightError as exc:
            raise SelectorTimeoutError(url, exc) from exc
        try:
            await page.wait_for_selector("body", timeout=options.fallback_timeout_ms)
        except PlaywrightError as exc:
            raise SelectorTimeoutError(url, exc) from exc

    async def _extract_links(self, page: Page, page_url: str) -> List[str]:
        try:
            html = await page.content()
        except PlaywrightError as exc:
            raise CaptureError(page_url, exc) from exc
        return extract_links(html, page_url)

    async def _capture(self, page: Page, url: str, options: RenderOptions) -> bytes:
        try:
            await page.evaluate(_ISOLATE_CONTENT_JS, options.selector)
            await page.add_style_tag(content=PRINT_CSS)
            return await page.pdf(format="A4", print_background=True, margin=PDF_MARGIN)
        except PlaywrightError as exc:
            raise CaptureError(url, exc) from exc
