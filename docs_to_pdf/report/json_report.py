# docs_to_pdf/report/json_report.py

"""
JSON-манифест запуска docs_to_pdf.

Сохраняет итоги обхода (посещённые страницы, артефакты с глубиной и файлом,
ошибки) и позволяет позже собрать PDF из каталога командой ``merge``.
"""
import json
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from docs_to_pdf.crawler.crawler import CrawlSummary
from docs_to_pdf.crawler.models import PageArtifact


def render_json(summary: CrawlSummary, output_path: Union[Path, str]) -> Path:
    """
    Сохраняет манифест summary в формате JSON по указанному пути.

    :param summary: объект CrawlSummary с данными обхода
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from docs_to_pdf.report.json_report import render_json
    manifest_path = render_json(summary, 'temp-pdfs/manifest.json')
    print(f"Manifest saved to: {manifest_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    # Пути к файлам относительно манифеста, если они рядом
    data = {
        'seed_url': summary.seed_url,
        'visited': summary.visited,
        'artifacts': [
            {'url': a.url, 'depth': a.depth, 'file': _relative(a.path, output.parent)}
            for a in summary.artifacts
        ],
        'failed': summary.failed_urls,
        'depth_skipped': summary.depth_skipped,
    }

    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output


def load_manifest(manifest_path: Union[Path, str]) -> Tuple[str, List[PageArtifact]]:
    """Читает манифест: (seed_url, артефакты). Относительные пути считаются от каталога манифеста."""
    manifest = Path(manifest_path)
    try:
        data: Dict[str, Any] = json.loads(manifest.read_text(encoding='utf-8'))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {manifest}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")

    artifacts: List[PageArtifact] = []
    for entry in data.get('artifacts', []):
        path = Path(entry['file'])
        if not path.is_absolute():
            path = manifest.parent / path
        artifacts.append(PageArtifact(url=entry['url'], depth=int(entry.get('depth', 0)), path=path))
    return str(data.get('seed_url', '')), artifacts


def _relative(path: Path, base: Path) -> str:
    try:
        return str(path.resolve().relative_to(base.resolve()))
    except ValueError:
        return str(path.resolve())
