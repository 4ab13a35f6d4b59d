# File: docs_to_pdf/storage.py
"""docs_to_pdf.storage: run-scoped storage of per-page PDFs."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Iterable, Optional, Set, Union

from docs_to_pdf.crawler.models import PageArtifact
from docs_to_pdf.errors import FatalStartupFailure
from docs_to_pdf.logger import logger
from docs_to_pdf.utils import MAX_FILENAME_LENGTH, url_to_filename

__all__ = ["ArtifactStore", "MANIFEST_NAME"]

MANIFEST_NAME = "manifest.json"


class ArtifactStore:
    """
    Directory holding one PDF per captured page.

    File names come from :func:`docs_to_pdf.utils.url_to_filename`. Names of
    URLs that only differ beyond the truncation length would collide; the
    later one gets a ``_2``, ``_3``... suffix instead of overwriting.
    """

    def __init__(self, root: Union[str, Path, None] = None, max_name_length: int = MAX_FILENAME_LENGTH) -> None:
        self.max_name_length = max_name_length
        try:
            if root is None:
                self.root = Path(tempfile.mkdtemp(prefix="docs-to-pdf-"))
            else:
                self.root = Path(root).expanduser()
                self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FatalStartupFailure(f"cannot create artifact directory: {exc}") from exc
        self._names: Set[str] = set()

    def filename_for(self, url: str) -> str:
        name = url_to_filename(url, self.max_name_length)
        if name not in self._names:
            return name
        stem = name[: -len(".pdf")]
        n = 2
        while f"{stem}_{n}.pdf" in self._names:
            n += 1
        unique = f"{stem}_{n}.pdf"
        logger.warning("File name collision for %s, storing as %s", url, unique)
        return unique

    def save(self, url: str, depth: int, data: bytes) -> PageArtifact:
        """Write *data* for *url* and return the artifact pointing at it."""
        name = self.filename_for(url)
        path = self.root / name
        path.write_bytes(data)
        self._names.add(name)
        return PageArtifact(url=url, depth=depth, path=path)

    @property
    def manifest_path(self) -> Path:
        return self.root / MANIFEST_NAME

    def cleanup(self, artifacts: Iterable[PageArtifact], extra: Optional[Iterable[Path]] = None) -> None:
        """Remove artifact files and, when empty, the directory itself. Errors are only logged."""
        logger.info("Cleaning up temporary files in %s", self.root)
        paths = [a.path for a in artifacts] + list(extra or ())
        for path in paths:
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                logger.error("Error deleting %s: %s", path, exc)
        try:
            self.root.rmdir()
        except OSError as exc:
            logger.error("Error removing temp directory %s: %s", self.root, exc)
