# docs_to_pdf/report/front_matter.py
"""
Generated pages of the merged document, drawn with ReportLab:
title page, table of contents and one separator page per section.
"""
from __future__ import annotations

import io
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, Protocol, Sequence, Tuple

from reportlab.lib.pagesizes import A4
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen.canvas import Canvas

from docs_to_pdf.logger import logger

PageSize = Tuple[float, float]


class TocLine(Protocol):
    """Anything listed in the contents or given a separator page."""

    @property
    def display_url(self) -> str: ...

    @property
    def depth(self) -> int: ...

    @property
    def indent(self) -> int: ...


LEFT_MARGIN = 50
TOC_LINE_HEIGHT = 16
TOC_BOTTOM_MARGIN = 50

_FONT_CANDIDATES = {
    "DejaVuSans": (
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/local/share/fonts/DejaVuSans.ttf",
    ),
    "DejaVuSans-Bold": (
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/usr/local/share/fonts/DejaVuSans-Bold.ttf",
    ),
}

_fonts: dict[str, str] = {}


def _font(kind: str) -> str:
    """Registered Unicode font for *kind* (``regular``/``bold``), Helvetica otherwise."""
    if not _fonts:
        _fonts.update(regular="Helvetica", bold="Helvetica-Bold")
        for name, paths in _FONT_CANDIDATES.items():
            for p in paths:
                if not Path(p).exists():
                    continue
                try:
                    pdfmetrics.registerFont(TTFont(name, p))
                except Exception as exc:  # broken font file: keep the built-in one
                    logger.debug("Cannot register font %s: %s", p, exc)
                    continue
                _fonts["bold" if name.endswith("Bold") else "regular"] = name
                break
    return _fonts[kind]


def _render(draw: Callable[[Canvas, PageSize], None], pagesize: PageSize) -> bytes:
    buf = io.BytesIO()
    canvas = Canvas(buf, pagesize=pagesize)
    draw(canvas, pagesize)
    canvas.save()
    return buf.getvalue()


def render_front_matter(
    title: str,
    generated_at: datetime,
    artifact_count: int,
    seed_url: str,
    toc: Sequence[TocLine],
    pagesize: PageSize = A4,
) -> bytes:
    """Title page followed by as many table-of-contents pages as *toc* needs."""

    def draw(c: Canvas, size: PageSize) -> None:
        _, height = size
        c.setFont(_font("bold"), 30)
        c.drawString(LEFT_MARGIN, height - 100, title)
        c.setFont(_font("regular"), 12)
        c.drawString(LEFT_MARGIN, height - 150, f"Generated on: {generated_at:%Y-%m-%d %H:%M}")
        c.drawString(LEFT_MARGIN, height - 180, f"Total pages crawled: {artifact_count}")
        c.setFont(_font("regular"), 10)
        c.drawString(LEFT_MARGIN, height - 210, f"Source: {seed_url}")
        c.showPage()

        heading = "Table of Contents"
        c.setFont(_font("bold"), 20)
        c.drawString(LEFT_MARGIN, height - 50, heading)
        y = height - 100
        for number, line in enumerate(toc, start=1):
            if y < TOC_BOTTOM_MARGIN:
                c.showPage()
                c.setFont(_font("bold"), 20)
                c.drawString(LEFT_MARGIN, height - 50, f"{heading} (continued)")
                y = height - 100
            c.setFont(_font("regular"), 10)
            c.drawString(LEFT_MARGIN + line.indent, y, f"{number}. {line.display_url}")
            c.drawRightString(size[0] - LEFT_MARGIN, y, f"depth {line.depth}")
            y -= TOC_LINE_HEIGHT
        c.showPage()

    return _render(draw, pagesize)


def render_separators(sections: Iterable[TocLine], pagesize: PageSize = A4) -> bytes:
    """One page per section: ``Section:`` header, URL and depth, indented by depth."""

    def draw(c: Canvas, size: PageSize) -> None:
        _, height = size
        for section in sections:
            x = LEFT_MARGIN + section.indent
            c.setFont(_font("bold"), 14)
            c.drawString(x, height - 100, "Section:")
            c.setFont(_font("regular"), 10)
            c.drawString(x, height - 130, section.display_url)
            c.drawString(x, height - 150, f"Depth: {section.depth}")
            c.showPage()

    return _render(draw, pagesize)


__all__ = ["render_front_matter", "render_separators", "TocLine"]
