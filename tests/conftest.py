import pytest

from templator.config import ParserConfig
from templator.parser import TemplateParser
from templator.transforms import TransformRegistry


@pytest.fixture
def registry() -> TransformRegistry:
    """Реестр с парой трансформаций для интерполяций."""
    return TransformRegistry({"upper": str.upper, "lower": str.lower})


@pytest.fixture
def parser(registry: TransformRegistry) -> TemplateParser:
    return TemplateParser(registry=registry)


@pytest.fixture
def strict_parser(registry: TransformRegistry) -> TemplateParser:
    return TemplateParser(registry=registry, config=ParserConfig(strict=True))
