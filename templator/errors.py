"""
Base exceptions for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from TemplatorUserError.

Programming errors and bugs should NOT inherit from TemplatorUserError —
they will propagate with full tracebacks.
"""

from __future__ import annotations


class TemplatorUserError(Exception):
    """
    Base class for all user-facing errors in templator.

    These errors indicate problems that the user can fix:
    malformed templates, unknown transforms, invalid configuration.
    """
    pass


class TemplateSyntaxError(TemplatorUserError):
    """Синтаксическая ошибка в исходном тексте шаблона."""

    def __init__(self, message: str, position: int):
        self.message = message
        self.position = position
        super().__init__(f"Parse error at position {position}: {message}")


class UnterminatedTagError(TemplateSyntaxError):
    """Тег открыт, но не закрыт до конца входных данных."""

    def __init__(self, tag_name: str, position: int):
        self.tag_name = tag_name
        super().__init__(f"Unterminated tag '<#{tag_name}>', expected '</#{tag_name}>'", position)


class UnknownTransformError(TemplateSyntaxError):
    """Интерполяция ссылается на трансформацию, отсутствующую в реестре."""

    def __init__(self, name: str, position: int):
        self.name = name
        super().__init__(f"Unknown transform '{name}'", position)


class NestingDepthError(TemplateSyntaxError):
    """Превышена допустимая глубина вложенности тегов."""

    def __init__(self, max_depth: int, position: int):
        self.max_depth = max_depth
        super().__init__(f"Tag nesting deeper than {max_depth} levels", position)


class ConfigError(TemplatorUserError):
    """Некорректный файл конфигурации парсера."""
    pass


__all__ = [
    "TemplatorUserError",
    "TemplateSyntaxError",
    "UnterminatedTagError",
    "UnknownTransformError",
    "NestingDepthError",
    "ConfigError",
]
