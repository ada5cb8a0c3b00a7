# === FILE: site_crawler/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера SiteCrawler.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
import random
from pathlib import Path
from typing import Annotated, Any, List, Optional, Union

import yaml
from pydantic import AnyUrl, BaseModel, ConfigDict, Field, UrlConstraints, ValidationError

from site_crawler.errors import InvalidURLError

DEFAULT_MAX_DEPTH = 4
MAX_HOST_VISITS = 512
REQUEST_TIMEOUT = 20.0
DEFAULT_RESOURCE_DIR = Path("archive/res")

USER_AGENTS = (
    "Mozilla/5.0 (X11; Linux x86_64; rv:76.0) Gecko/20100101 Firefox/76.0",
    "Mozilla/5.0 (Windows NT 6.1; WOW64; Trident/7.0; rv:11.0) like Gecko",
    "Mozilla/5.0 (iPhone; CPU iPhone OS 12_2 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Mobile/15E148",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/74.0.3729.169 Safari/537.36",
    "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)",
)


# HttpUrl without its 2083-character cap: long seeds are valid URLs
SeedUrl = Annotated[AnyUrl, UrlConstraints(allowed_schemes=["http", "https"], host_required=True)]


def _random_user_agent() -> str:
    return random.choice(USER_AGENTS)


class CrawlerConfig(BaseModel):
    """Конфигурация для одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seeds: List[SeedUrl] = Field(..., min_length=1, description="Стартовые URL обхода.")
    max_depth: int = Field(DEFAULT_MAX_DEPTH, ge=0, description="Максимальная глубина рекурсии.")
    max_host_visits: int = Field(
        MAX_HOST_VISITS, ge=1, description="Лимит одновременных запросов к одному хосту."
    )
    timeout: float = Field(REQUEST_TIMEOUT, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field(
        default_factory=_random_user_agent, min_length=1, description="Заголовок User-Agent."
    )
    resource_dir: Path = Field(
        DEFAULT_RESOURCE_DIR, description="Папка для скачанных изображений."
    )

    @property
    def seed_urls(self) -> List[str]:
        """Seeds as plain strings, duplicates removed, order kept."""
        return list(dict.fromkeys(str(url) for url in self.seeds))


_DEFAULT_CFG = Path("configs/default.yaml")


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


def _read_file(path: Path) -> dict[str, Any]:
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path)
    if suffix == ".json":
        return _read_json(path)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def _invalid_seed(exc: ValidationError) -> Optional[str]:
    """Return the first rejected seed of *exc*, if the error is about a seed URL."""
    for error in exc.errors():
        loc = error.get("loc", ())
        if len(loc) == 2 and loc[0] == "seeds" and isinstance(loc[1], int):
            return str(error.get("input"))
    return None


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CrawlerConfig:
    """
    Читает YAML или JSON, накладывает overrides (значения None пропускаются)
    и возвращает проверенный объект CrawlerConfig.

    Без явного пути используется configs/default.yaml, если он существует.
    Невалидный стартовый URL превращается в InvalidURLError.
    """
    data: dict[str, Any] = {}
    if path is None:
        if _DEFAULT_CFG.is_file():
            data = _read_file(_DEFAULT_CFG)
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
        data = _read_file(path_obj)

    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return CrawlerConfig(**data)
    except ValidationError as exc:
        bad = _invalid_seed(exc)
        if bad is not None:
            raise InvalidURLError(bad) from exc
        raise
