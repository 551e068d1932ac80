"""
Конфигурация парсера шаблонов.

Настройки читаются из YAML-файла вида:

    strict: true
    max_nesting_depth: 32
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError

_yaml = YAML(typ="safe")

DEFAULT_MAX_NESTING_DEPTH = 64
# Каждый уровень вложенности занимает кадры стека парсера
MAX_NESTING_DEPTH_LIMIT = 256


@dataclass(frozen=True)
class ParserConfig:
    """
    Политика разбора шаблона.

    Attributes:
        strict: Некорректные конструкции вызывают ошибку вместо того,
            чтобы остаться в выводе обычным текстом
        max_nesting_depth: Максимальная глубина вложенности условных тегов,
            не больше MAX_NESTING_DEPTH_LIMIT
    """
    strict: bool = False
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH

    def __post_init__(self):
        if self.max_nesting_depth > MAX_NESTING_DEPTH_LIMIT:
            raise ConfigError(
                f"'max_nesting_depth' must not exceed {MAX_NESTING_DEPTH_LIMIT}, got {self.max_nesting_depth}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Создание экземпляра из словаря (из YAML)."""
        unknown = set(data) - {"strict", "max_nesting_depth"}
        if unknown:
            raise ConfigError(f"Unknown parser config keys: {', '.join(sorted(unknown))}")

        strict = data.get("strict", False)
        if not isinstance(strict, bool):
            raise ConfigError(f"'strict' must be a boolean, got {strict!r}")

        depth = data.get("max_nesting_depth", DEFAULT_MAX_NESTING_DEPTH)
        if isinstance(depth, bool) or not isinstance(depth, int) or depth < 1:
            raise ConfigError(f"'max_nesting_depth' must be a positive integer, got {depth!r}")

        return cls(strict=strict, max_nesting_depth=depth)

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация в словарь для YAML."""
        return {"strict": self.strict, "max_nesting_depth": self.max_nesting_depth}


DEFAULT_PARSER_CONFIG = ParserConfig()


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def load_parser_config(path: Path) -> ParserConfig:
    """
    Загружает конфигурацию парсера из YAML файла.

    Args:
        path: Путь к файлу конфигурации

    Returns:
        Конфигурация парсера; значения по умолчанию, если файла нет
    """
    if not path.is_file():
        return DEFAULT_PARSER_CONFIG
    return ParserConfig.from_dict(_read_yaml_map(path))


__all__ = [
    "ParserConfig",
    "DEFAULT_PARSER_CONFIG",
    "DEFAULT_MAX_NESTING_DEPTH",
    "MAX_NESTING_DEPTH_LIMIT",
    "load_parser_config",
]
