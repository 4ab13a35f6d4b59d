# File: tests/conftest.py
from __future__ import annotations

import io
from pathlib import Path
from typing import Dict, List, Union

import pytest
from pypdf import PdfWriter

from docs_to_pdf.config import CrawlerConfig
from docs_to_pdf.crawler.link_extractor import extract_links
from docs_to_pdf.crawler.models import CaptureResult, PageArtifact, RenderOptions
from docs_to_pdf.errors import FetchFailure
from docs_to_pdf.report import front_matter

SEED = "https://docs.example.com/"


def make_pdf(pages: int = 1) -> bytes:
    """Return bytes of a small valid PDF with *pages* blank A4 pages."""
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=595, height=842)
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()


def page(*hrefs: str) -> str:
    """HTML document whose body links to *hrefs*."""
    anchors = "".join(f'<a href="{h}">{h}</a>' for h in hrefs)
    return f"<html><body><main>{anchors}</main></body></html>"


class FakeRenderer:
    """
    In-memory renderer: *site* maps URL → HTML, or → FetchFailure to raise.
    Unknown URLs render as empty pages.
    """

    def __init__(self, site: Dict[str, Union[str, FetchFailure]], pages_per_pdf: int = 1) -> None:
        self.site = site
        self.pages_per_pdf = pages_per_pdf
        self.calls: List[str] = []
        self.entered = 0
        self.exited = 0

    async def __aenter__(self) -> FakeRenderer:
        self.entered += 1
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.exited += 1

    async def fetch_and_capture(self, url: str, options: RenderOptions) -> CaptureResult:
        self.calls.append(url)
        entry = self.site.get(url, page())
        if isinstance(entry, FetchFailure):
            raise entry
        return CaptureResult(
            links=extract_links(entry, url),
            artifact=make_pdf(self.pages_per_pdf),
            final_url=url,
        )


@pytest.fixture(autouse=True)
def builtin_fonts(monkeypatch):
    """Draw generated pages with Helvetica so page text is extractable everywhere."""
    monkeypatch.setattr(front_matter, "_fonts", {"regular": "Helvetica", "bold": "Helvetica-Bold"})


@pytest.fixture()
def config_factory(tmp_path):
    """Build CrawlerConfig instances writing into *tmp_path*, without delays."""

    def factory(**overrides) -> CrawlerConfig:
        values = dict(
            url=SEED,
            depth=1,
            wait=0,
            temp_dir=tmp_path / "pages",
            output=str(tmp_path / "out" / "docs-documentation.pdf"),
        )
        values.update(overrides)
        return CrawlerConfig(**values)

    return factory


@pytest.fixture()
def basic_config(config_factory) -> CrawlerConfig:
    return config_factory()


@pytest.fixture()
def artifact_factory(tmp_path):
    """Write PDF (or arbitrary) bytes to disk and wrap them in a PageArtifact."""
    root = tmp_path / "artifacts"
    root.mkdir()
    counter = {"n": 0}

    def factory(url: str, depth: int, data: Union[bytes, None] = None, pages: int = 1) -> PageArtifact:
        counter["n"] += 1
        path = Path(root) / f"artifact_{counter['n']}.pdf"
        path.write_bytes(make_pdf(pages) if data is None else data)
        return PageArtifact(url=url, depth=depth, path=path)

    return factory
