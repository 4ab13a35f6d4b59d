# File: docs_to_pdf/engine.py
"""docs_to_pdf.engine: Orchestration layer — обход сайта, сборка PDF и очистка временных файлов."""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncContextManager, Callable, Optional, Union

from docs_to_pdf.assembler import AssembledDocument, Assembler
from docs_to_pdf.config import CrawlerConfig
from docs_to_pdf.crawler.crawler import CrawlSummary, DocsCrawler
from docs_to_pdf.crawler.models import PageArtifact
from docs_to_pdf.crawler.renderer import PlaywrightRenderer, Renderer
from docs_to_pdf.errors import FatalStartupFailure
from docs_to_pdf.logger import logger
from docs_to_pdf.report.json_report import load_manifest, render_json
from docs_to_pdf.storage import MANIFEST_NAME, ArtifactStore
from docs_to_pdf.utils import derive_title

__all__ = ["Engine", "RunSummary", "start_run", "merge_directory"]

RendererFactory = Callable[[], AsyncContextManager[Renderer]]


@dataclass(slots=True)
class RunSummary:
    """Итог запуска: данные обхода и, если была сборка, документ и путь к нему."""

    crawl: CrawlSummary
    document: Optional[AssembledDocument] = None
    output_path: Optional[Path] = None
    artifacts_dir: Optional[Path] = None

    @property
    def pages_visited(self) -> int:
        return self.crawl.pages_visited

    @property
    def artifacts_produced(self) -> int:
        return self.crawl.artifacts_produced

    @property
    def skipped(self) -> int:
        return self.crawl.skipped

    @property
    def artifacts_merged(self) -> int:
        return self.document.merged_count if self.document else 0

    @property
    def merge_skipped(self) -> int:
        return len(self.document.skipped) if self.document else 0


class Engine:
    """Фасад для CLI и тестов: обход → сборка → очистка."""

    def __init__(
        self,
        config: CrawlerConfig,
        renderer_factory: RendererFactory = PlaywrightRenderer,
        assembler: Optional[Assembler] = None,
    ) -> None:
        self.config = config
        self.renderer_factory = renderer_factory
        self.assembler = assembler or Assembler()

    def _log_banner(self) -> None:
        cfg = self.config
        logger.info("Starting crawler for: %s", cfg.seed_url)
        logger.info("Domain: %s", cfg.domain)
        logger.info("Output: %s", cfg.output_path)
        logger.info("Max depth: %d", cfg.depth)
        if cfg.include:
            logger.info("Include patterns: %s", ", ".join(cfg.include))
        if cfg.exclude:
            logger.info("Exclude patterns: %s", ", ".join(cfg.exclude))

    def check_output(self) -> None:
        """Проверяет, что итоговый PDF и манифест можно будет записать, до начала обхода."""
        targets = [self.config.output_path] if self.config.merge else []
        if self.config.manifest is not None:
            targets.append(self.config.manifest)
        for target in targets:
            _check_writable(target.resolve())

    async def run(self) -> RunSummary:
        """Запускает обход и (если включено) сборку; фатальные ошибки пробрасываются."""
        self._log_banner()
        self.check_output()

        store = ArtifactStore(self.config.temp_dir)
        async with self.renderer_factory() as renderer:
            crawl = await DocsCrawler(self.config, renderer, store).crawl()

        try:
            manifest = render_json(crawl, self.config.manifest or store.manifest_path)
        except OSError as exc:
            raise FatalStartupFailure(f"cannot write manifest: {exc}") from exc
        result = RunSummary(crawl=crawl, artifacts_dir=store.root)

        if not self.config.merge:
            logger.info("Skipping merge; individual PDFs are in: %s", store.root)
            return result

        document = self.assembler.assemble(
            crawl.artifacts, crawl.seed_url, derive_title(self.config.output_path)
        )
        result.output_path = self.assembler.write(document, self.config.output_path)
        result.document = document
        _log_file_size(result.output_path)

        if not self.config.keep_temp:
            extra = [manifest] if manifest.parent == store.root else []
            store.cleanup(crawl.artifacts, extra=extra)
            result.artifacts_dir = None
        return result

    def start(self) -> RunSummary:
        """Синхронная обёртка над :meth:`run`."""
        return asyncio.run(self.run())


async def start_run(config: CrawlerConfig) -> RunSummary:
    """Точка входа CLI: полный запуск с Playwright."""
    return await Engine(config).run()


def merge_directory(
    directory: Union[str, Path],
    output_path: Union[str, Path],
    assembler: Optional[Assembler] = None,
) -> Optional[AssembledDocument]:
    """
    Собирает PDF из каталога ранее сохранённых страниц.

    С ``manifest.json`` порядок берётся из записанных (depth, url); без него
    файлы идут по имени с глубиной 0, а подписью служит имя файла.
    Возвращает None, если собирать нечего.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Directory not found: {directory}")

    manifest = directory / MANIFEST_NAME
    if manifest.is_file():
        seed_url, artifacts = load_manifest(manifest)
    else:
        seed_url = str(directory)
        target = Path(output_path).resolve()
        artifacts = [
            PageArtifact(url=p.stem.replace("_", " "), depth=0, path=p)
            for p in sorted(directory.glob("*.pdf"))
            if p.resolve() != target
        ]

    if not artifacts:
        logger.warning("No PDFs found to merge in %s", directory)
        return None

    logger.info("Found %d PDFs to merge", len(artifacts))
    assembler = assembler or Assembler()
    document = assembler.assemble(artifacts, seed_url, derive_title(output_path))
    written = assembler.write(document, output_path)
    _log_file_size(written)
    return document


def _check_writable(path: Path) -> None:
    if path.is_dir():
        raise FatalStartupFailure(f"output path is a directory: {path}")
    parent = path.parent
    if parent.exists() and not os.access(parent, os.W_OK):
        raise FatalStartupFailure(f"output directory is not writable: {parent}")


def _log_file_size(path: Path) -> None:
    size_mb = path.stat().st_size / (1024 * 1024)
    logger.info("File size: %.2f MB", size_mb)
