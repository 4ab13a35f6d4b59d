# === FILE: docs_to_pdf/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера docs_to_pdf.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
    field_validator,
    model_validator,
)

from docs_to_pdf.utils import default_output_name, extract_domain

DEFAULT_SELECTOR = "main, article, .content, .documentation, body"


class CrawlerConfig(BaseModel):
    """Конфигурация для одного запуска: обход, рендеринг и сборка PDF."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    url: HttpUrl = Field(..., description="Стартовый URL документации.")
    output: Optional[str] = Field(None, description="Имя итогового PDF (по умолчанию <domain>-documentation.pdf).")
    depth: int = Field(5, ge=0, description="Максимальная глубина обхода ссылок.")
    include: List[str] = Field(default_factory=list, description="Подстроки, одна из которых должна быть в URL.")
    exclude: List[str] = Field(default_factory=list, description="Подстроки, исключающие URL.")
    selector: str = Field(DEFAULT_SELECTOR, min_length=1, description="CSS-селектор основного контента.")
    wait: int = Field(1000, ge=0, description="Пауза между страницами (мс), 0 отключает.")

    navigation_timeout_ms: int = Field(60000, gt=0, description="Таймаут загрузки страницы (мс).")
    selector_timeout_ms: int = Field(10000, gt=0, description="Таймаут ожидания селектора (мс).")
    fallback_timeout_ms: int = Field(5000, gt=0, description="Таймаут ожидания <body> после неудачи (мс).")

    temp_dir: Optional[Path] = Field(None, description="Каталог для промежуточных PDF (временный по умолчанию).")
    merge: bool = Field(True, description="Собирать ли итоговый PDF после обхода.")
    keep_temp: bool = Field(False, description="Не удалять промежуточные PDF после сборки.")
    manifest: Optional[Path] = Field(None, description="Куда записать JSON-манифест запуска.")

    @field_validator("include", "exclude", mode="before")
    def _split_patterns(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("include", "exclude")
    def _drop_empty_patterns(cls, v: List[str]) -> List[str]:
        # пустая подстрока совпадает с любым URL
        return [p for p in v if p]

    @model_validator(mode="before")
    @classmethod
    def _default_output(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("output") and data.get("url"):
            data = {**data, "output": default_output_name(str(data["url"]))}
        return data

    @property
    def seed_url(self) -> str:
        return str(self.url)

    @property
    def domain(self) -> str:
        return extract_domain(str(self.url))

    @property
    def output_path(self) -> Path:
        return Path(self.output or default_output_name(str(self.url))).expanduser()


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path]) -> dict[str, Any]:
    """Читает YAML или JSON и возвращает сырые значения без проверки схемы."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(path: Union[str, Path, None], **overrides: Any) -> CrawlerConfig:
    """
    Возвращает проверенный объект CrawlerConfig.

    Значения из файла (если он задан) перекрываются непустыми ``overrides``
    (так CLI-опции побеждают конфиг). Без файла и без ``url`` бросает ValidationError.
    """
    data: dict[str, Any] = read_config_file(path) if path is not None else {}
    data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return CrawlerConfig(**data)
    except ValidationError:
        raise


__all__ = ["CrawlerConfig", "DEFAULT_SELECTOR", "load_config", "read_config_file"]
