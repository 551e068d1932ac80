"""
Реестр именованных трансформаций вывода.

Парсер обращается к реестру только для разрешения имени трансформации,
указанного в интерполяции %{path name}. Сами трансформации
реализуются и применяются движком рендеринга.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

TransformFunc = Callable[[Any], Any]


@dataclass(frozen=True)
class Transform:
    """
    Разрешённая трансформация, встраиваемая в узел интерполяции.

    Сравнивается только по имени, чтобы деревья оставались сравнимыми
    независимо от конкретной функции.
    """
    name: str
    func: TransformFunc = field(compare=False, repr=False)

    def __call__(self, value: Any) -> Any:
        return self.func(value)


@runtime_checkable
class TransformResolver(Protocol):
    """
    Протокол реестра трансформаций, используемый парсером.
    """

    def resolve(self, name: str) -> Optional[Transform]:
        """
        Разрешает трансформацию по имени.

        Args:
            name: Имя трансформации ([a-z]+)

        Returns:
            Трансформация или None, если имя неизвестно
        """
        ...


class TransformRegistry:
    """
    Простой реестр трансформаций на основе словаря.
    """

    def __init__(self, transforms: Optional[Mapping[str, TransformFunc]] = None):
        self._transforms: Dict[str, Transform] = {}
        for name, func in (transforms or {}).items():
            self.register(name, func)

    def register(self, name: str, func: TransformFunc) -> Transform:
        """
        Регистрирует трансформацию.

        Raises:
            ValueError: Если имя не состоит из строчных латинских букв
        """
        if not name or not all("a" <= ch <= "z" for ch in name):
            raise ValueError(f"Invalid transform name '{name}': expected [a-z]+")

        if name in self._transforms:
            logger.warning(f"Transform '{name}' overwrites existing transform")

        transform = Transform(name=name, func=func)
        self._transforms[name] = transform
        logger.debug(f"Registered transform: {name}")
        return transform

    def resolve(self, name: str) -> Optional[Transform]:
        return self._transforms.get(name)

    def names(self) -> List[str]:
        """Возвращает отсортированный список имён трансформаций."""
        return sorted(self._transforms)

    def __contains__(self, name: object) -> bool:
        return name in self._transforms


__all__ = ["Transform", "TransformFunc", "TransformResolver", "TransformRegistry"]
