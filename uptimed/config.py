# === FILE: uptimed/config.py ===
"""
Загрузка и валидация конфигурации uptimed.

Схема описана через Pydantic; интервалы записываются в компактном виде
(``0s``, ``15m``, ``1h``) и разбираются кодеком из :mod:`uptimed.duration`.
"""
from __future__ import annotations

import errno
import json
import os
from datetime import timedelta
from pathlib import Path
from typing import Any, List, Tuple, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
    model_validator,
)

from uptimed.duration import format_duration, parse_duration

__all__ = [
    "CustomHeader",
    "MonitorConfig",
    "ValidationError",
    "load_config",
    "EXAMPLE_CONFIG",
]

EXAMPLE_CONFIG = """\
# Path to the file containing target URLs, one per line.
targets_path: "/path/to/targets"

# How much time between requests?
request_interval: 0s

# How much time between the start of one complete scan and the next one?
scan_interval: 15m

# Custom HTTP headers sent with every request, in this order.
custom_headers:
  - name: "X-MyHeader"
    value: "my-value"
  - name: "Authorization"
    value: "Bearer token"
"""


class CustomHeader(BaseModel):
    """Один дополнительный HTTP-заголовок."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1)
    value: str


class MonitorConfig(BaseModel):
    """Конфигурация монитора. Неизменяема после загрузки."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    targets_path: Path = Field(..., description="Файл со списком URL, по одному на строку.")
    request_interval: timedelta = Field(..., description="Пауза между запросами внутри скана.")
    scan_interval: timedelta = Field(..., description="Минимальный интервал между началами сканов.")
    custom_headers: Tuple[CustomHeader, ...] = Field(
        default_factory=tuple, description="Заголовки для каждого запроса (порядок сохраняется)."
    )

    @field_validator("targets_path", mode="before")
    def _expand_user(cls, v: Any) -> Any:
        if isinstance(v, (str, Path)):
            return Path(v).expanduser()
        return v

    @field_validator("request_interval", "scan_interval", mode="before")
    def _parse_interval(cls, v: Any) -> Any:
        if isinstance(v, timedelta):
            return v
        if isinstance(v, str):
            return parse_duration(v)
        raise ValueError("duration must be a string such as '30s', '15m' or '1h'")

    @field_serializer("request_interval", "scan_interval")
    def _dump_interval(self, v: timedelta) -> str:
        return format_duration(v)

    @model_validator(mode="after")
    def _check_targets_and_intervals(self) -> MonitorConfig:
        path = self.targets_path
        if not path.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path))
        if not path.is_file():
            raise IsADirectoryError(errno.EISDIR, "Not a file", str(path))
        if not os.access(path, os.R_OK):
            raise PermissionError(errno.EACCES, "File is not readable", str(path))
        if self.scan_interval <= self.request_interval:
            raise ValueError("scan_interval must be greater than request_interval")
        return self

    @property
    def header_pairs(self) -> List[Tuple[str, str]]:
        """Заголовки в виде списка пар ``(name, value)`` в порядке объявления."""
        return [(h.name, h.value) for h in self.custom_headers]


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


def load_config(path: Union[str, Path]) -> MonitorConfig:
    """
    Читает YAML (или JSON) и возвращает проверенный объект MonitorConfig.

    Бросает FileNotFoundError, если нет файла конфига или файла со списком целей,
    и pydantic.ValidationError при ошибках схемы или неверных интервалах.
    """
    path_obj = Path(path).expanduser()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    if path_obj.suffix.lower() == ".json":
        data = _read_json(path_obj)
    else:
        data = _read_yaml(path_obj)

    return MonitorConfig(**data)
