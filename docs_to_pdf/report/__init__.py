# File: docs_to_pdf/report/__init__.py
"""docs_to_pdf.report: генерируемые страницы итогового PDF и JSON-манифест запуска."""

from __future__ import annotations

from docs_to_pdf.report.front_matter import render_front_matter, render_separators

__all__ = ["render_front_matter", "render_separators"]
