# File: docs_to_pdf/assembler.py
"""docs_to_pdf.assembler: сборка итогового PDF из PDF отдельных страниц.

Порядок секций зависит только от пар ``(depth, url)``; повреждённые артефакты
пропускаются с записью в лог, сборка остальных продолжается.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Union

from pypdf import PageObject, PdfReader, PdfWriter
from pypdf.errors import PyPdfError
from reportlab.lib.pagesizes import A4

from docs_to_pdf.crawler.models import PageArtifact
from docs_to_pdf.errors import FatalStartupFailure, MergeFailure
from docs_to_pdf.logger import logger
from docs_to_pdf.report.front_matter import PageSize, render_front_matter, render_separators
from docs_to_pdf.utils import truncate_url

__all__ = [
    "INDENT_STEP",
    "TocEntry",
    "Section",
    "AssembledDocument",
    "Assembler",
    "order_artifacts",
]

INDENT_STEP = 20


@dataclass(slots=True, frozen=True)
class TocEntry:
    """Строка оглавления: укороченный URL и глубина."""

    url: str
    display_url: str
    depth: int

    @property
    def indent(self) -> int:
        return self.depth * INDENT_STEP


@dataclass(slots=True)
class Section:
    """Секция документа: разделитель (url, depth) и страницы артефакта."""

    url: str
    depth: int
    pages: List[PageObject] = field(default_factory=list)

    @property
    def display_url(self) -> str:
        return truncate_url(self.url)

    @property
    def indent(self) -> int:
        return self.depth * INDENT_STEP


@dataclass(slots=True)
class AssembledDocument:
    """Итоговый документ: титульная страница, оглавление и упорядоченные секции."""

    title: str
    seed_url: str
    generated_at: datetime
    artifact_count: int
    sections: List[Section] = field(default_factory=list)
    skipped: List[MergeFailure] = field(default_factory=list)

    @property
    def toc(self) -> List[TocEntry]:
        return [TocEntry(s.url, s.display_url, s.depth) for s in self.sections]

    @property
    def merged_count(self) -> int:
        return len(self.sections)


def order_artifacts(artifacts: Iterable[PageArtifact]) -> List[PageArtifact]:
    """Глубина по возрастанию, затем URL; имя файла разводит дубликаты URL."""
    return sorted(artifacts, key=lambda a: (a.depth, a.url, a.path.name))


class Assembler:
    """Собирает документ (:meth:`assemble`) и записывает его на диск (:meth:`write`)."""

    def __init__(self, pagesize: PageSize = A4) -> None:
        self.pagesize = pagesize

    def assemble(
        self,
        artifacts: Iterable[PageArtifact],
        seed_url: str,
        title: str,
        generated_at: Optional[datetime] = None,
    ) -> AssembledDocument:
        ordered = order_artifacts(artifacts)
        document = AssembledDocument(
            title=title,
            seed_url=seed_url,
            generated_at=generated_at or datetime.now(),
            artifact_count=len(ordered),
        )
        for index, artifact in enumerate(ordered, start=1):
            logger.info("Merging %d/%d: %s", index, len(ordered), artifact.url)
            try:
                pages = self._load_pages(artifact)
            except MergeFailure as exc:
                logger.error("Error merging PDF for %s: %s", artifact.url, exc.reason)
                document.skipped.append(exc)
                continue
            document.sections.append(Section(url=artifact.url, depth=artifact.depth, pages=pages))
        logger.info(
            "Successfully merged %d out of %d PDFs", document.merged_count, document.artifact_count
        )
        return document

    @staticmethod
    def _load_pages(artifact: PageArtifact) -> List[PageObject]:
        try:
            reader = PdfReader(io.BytesIO(artifact.content))
            pages = list(reader.pages)
        except (PyPdfError, OSError, ValueError) as exc:
            raise MergeFailure(artifact.url, artifact.path, exc) from exc
        if not pages:
            raise MergeFailure(artifact.url, artifact.path, "document has no pages")
        return pages

    def build_writer(self, document: AssembledDocument) -> PdfWriter:
        writer = PdfWriter()
        front = PdfReader(
            io.BytesIO(
                render_front_matter(
                    title=document.title,
                    generated_at=document.generated_at,
                    artifact_count=document.artifact_count,
                    seed_url=document.seed_url,
                    toc=document.toc,
                    pagesize=self.pagesize,
                )
            )
        )
        for page in front.pages:
            writer.add_page(page)

        if document.sections:
            separators = PdfReader(io.BytesIO(render_separators(document.sections, self.pagesize)))
            for section, separator in zip(document.sections, separators.pages):
                writer.add_page(separator)
                for page in section.pages:
                    writer.add_page(page)

        writer.add_metadata({"/Title": document.title, "/Subject": document.seed_url})
        return writer

    def write(self, document: AssembledDocument, output_path: Union[str, Path]) -> Path:
        """Сохраняет документ в *output_path*; ошибка записи фатальна для запуска."""
        output = Path(output_path)
        writer = self.build_writer(document)
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            with output.open("wb") as fh:
                writer.write(fh)
        except OSError as exc:
            raise FatalStartupFailure(f"cannot write {output}: {exc}") from exc
        logger.info("Merged PDF saved as: %s", output.resolve())
        return output
