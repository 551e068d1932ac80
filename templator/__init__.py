"""
templator - парсер текстовых шаблонов с интерполяцией и условными блоками.
"""

from .config import ParserConfig, load_parser_config
from .errors import (
    ConfigError,
    NestingDepthError,
    TemplateSyntaxError,
    TemplatorUserError,
    UnknownTransformError,
    UnterminatedTagError,
)
from .nodes import ConditionalNode, InterpolationNode, LiteralNode, RootNode, TemplateNode
from .parser import TemplateParser, parse_template
from .transforms import Transform, TransformRegistry

__all__ = [
    "parse_template",
    "TemplateParser",
    "ParserConfig",
    "load_parser_config",
    "Transform",
    "TransformRegistry",
    "TemplateNode",
    "RootNode",
    "LiteralNode",
    "InterpolationNode",
    "ConditionalNode",
    "TemplatorUserError",
    "TemplateSyntaxError",
    "UnterminatedTagError",
    "UnknownTransformError",
    "NestingDepthError",
    "ConfigError",
]
