"""
Tests for strict parsing and nesting limits.
"""

import pytest

from templator.config import ParserConfig
from templator.errors import (
    NestingDepthError,
    TemplateSyntaxError,
    TemplatorUserError,
    UnknownTransformError,
    UnterminatedTagError,
)
from templator.nodes import ConditionalNode, InterpolationNode, LiteralNode
from templator.parser import TemplateParser, parse_template


def nested_ifs(depth: int) -> str:
    return "<#if(a==b)>" * depth + "x" + "</#if>" * depth


class TestStrictMode:

    def test_valid_template_parses_as_usual(self, strict_parser):
        root = strict_parser.parse("Hi %{name upper}<#if(a==b)>X</#if>")
        assert [type(n) for n in root.children] == [LiteralNode, InterpolationNode, ConditionalNode]

    def test_plain_text_with_lookalikes_is_fine(self, strict_parser):
        text = "a < b, 50% {x}, # tag"
        assert strict_parser.parse(text).children == (LiteralNode(text),)

    @pytest.mark.parametrize("text, message, position", [
        ("ab%{", "Expected path after '%{'", 2),
        ("%{a.}", "Expected path after '%{'", 0),
        ("x %{a X}", "Expected '}' to close interpolation", 2),
        ("<#if(a=b)>X</#if>", "Malformed '<#if>' tag", 0),
        ("<#if(" + "(" * 1000 + "a==b" + ")" * 1000 + ")>X</#if>", "Malformed '<#if>' tag", 0),
        ("xy<#", "Expected tag name after '<#'", 2),
        ("<#list(a==b)>X</#list>", "Unknown tag '<#list>'", 0),
        ("a</#if>", "Unexpected closing tag '</#if>'", 1),
        ("<#if(a==b)>x</#end></#if>", "Unexpected closing tag '</#end>'", 12),
    ])
    def test_malformed_constructs_raise(self, strict_parser, text, message, position):
        with pytest.raises(TemplateSyntaxError) as exc:
            strict_parser.parse(text)
        assert exc.value.message == message
        assert exc.value.position == position
        assert str(exc.value) == f"Parse error at position {position}: {message}"

    def test_unknown_transform_raises(self, strict_parser):
        with pytest.raises(UnknownTransformError) as exc:
            strict_parser.parse("abc %{name shout}")
        assert exc.value.name == "shout"
        assert exc.value.position == 4

    def test_transform_without_registry_raises(self):
        with pytest.raises(UnknownTransformError):
            parse_template("%{name upper}", config=ParserConfig(strict=True))

    def test_unterminated_tag(self, strict_parser):
        with pytest.raises(UnterminatedTagError):
            strict_parser.parse("<#if(a==b)>open")

    def test_errors_are_user_errors(self, strict_parser):
        with pytest.raises(TemplatorUserError):
            strict_parser.parse("%{")


class TestNestingDepth:

    def test_depth_within_limit(self):
        parser = TemplateParser(config=ParserConfig(max_nesting_depth=2))
        root = parser.parse(nested_ifs(2))
        inner = root.children[0].children[0]
        assert isinstance(inner, ConditionalNode)
        assert inner.children == (LiteralNode("x"),)

    def test_depth_over_limit(self):
        parser = TemplateParser(config=ParserConfig(max_nesting_depth=2))
        with pytest.raises(NestingDepthError) as exc:
            parser.parse(nested_ifs(3))
        assert exc.value.max_depth == 2
        assert exc.value.position == len("<#if(a==b)>") * 2

    def test_default_limit(self):
        parse_template(nested_ifs(64))
        with pytest.raises(NestingDepthError):
            parse_template(nested_ifs(65))

    def test_limit_applies_in_permissive_mode(self):
        parser = TemplateParser(config=ParserConfig(strict=False, max_nesting_depth=1))
        with pytest.raises(NestingDepthError):
            parser.parse(nested_ifs(2))
