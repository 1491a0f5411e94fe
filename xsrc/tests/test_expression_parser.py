#!/usr/bin/env python3
"""
Tests for the expression parser: context references, placeholders, escapes
and type specs.
"""

from __future__ import annotations

import pytest

from xsrc.pipeline.errors import ExpressionSyntaxError, TypeSpecError
from xsrc.pipeline.expression import (
    ContextRef,
    ExpressionParser,
    Literal,
    Modifier,
    Placeholder,
    PrimitiveType,
    TypeSpec,
    parse,
    parse_type_spec,
)


class TestReferences:
    def test_super_defaults_to_url(self):
        expr = parse("${!super}")
        assert expr.segments == (ContextRef(hops=1, attribute="url"),)

    def test_explicit_attribute(self):
        expr = parse("${!super.!super.method}")
        assert expr.segments == (ContextRef(hops=2, attribute="method"),)

    def test_zero_hops_reads_own_attribute(self):
        assert parse("${url}").segments == (ContextRef(hops=0, attribute="url"),)

    def test_reference_with_surrounding_text(self):
        expr = parse("${!super}/users")
        assert expr.segments == (ContextRef(1), Literal("/users"))

    def test_whitespace_inside_reference(self):
        assert parse("${ !super . url }").segments == (ContextRef(1, "url"),)

    @pytest.mark.parametrize(
        "text",
        [
            "${}",
            "${ }",
            "${!super.}",
            "${.url}",
            "${!super..url}",
            "${url.!super}",
            "${url.method}",
            "${!sup}",
            "${!super/x}",
        ],
    )
    def test_malformed_references(self, text):
        with pytest.raises(ExpressionSyntaxError):
            parse(text)

    def test_unterminated_reference(self):
        with pytest.raises(ExpressionSyntaxError) as exc_info:
            parse("abc${!super")
        assert exc_info.value.position == 3

    def test_lone_dollar_is_literal(self):
        assert parse("price$5").segments == (Literal("price$5"),)


class TestPlaceholders:
    def test_typed_placeholder(self):
        expr = parse("${!super}/<id:number>")
        assert expr.segments == (
            ContextRef(1),
            Literal("/"),
            Placeholder("id", TypeSpec(PrimitiveType.NUMBER)),
        )

    def test_untyped_placeholder_is_string(self):
        (segment,) = parse("<slug>").segments
        assert segment == Placeholder("slug", TypeSpec(PrimitiveType.STRING))

    def test_placeholders_in_order(self):
        expr = parse("/<a>/x/<b:boolean>/<c:number>")
        assert [p.name for p in expr.placeholders] == ["a", "b", "c"]
        assert expr.placeholders[1].type_spec.primitive == PrimitiveType.BOOLEAN

    def test_missing_type_after_colon(self):
        with pytest.raises(ExpressionSyntaxError):
            parse("<id:>")

    def test_unknown_type_is_type_spec_error(self):
        with pytest.raises(TypeSpecError):
            parse("<id:integer>")

    @pytest.mark.parametrize("text", ["<>", "<1id>", "<my id>", "<a-b>"])
    def test_invalid_placeholder_names(self, text):
        with pytest.raises(ExpressionSyntaxError):
            parse(text)

    def test_unterminated_placeholder(self):
        with pytest.raises(ExpressionSyntaxError):
            parse("/users/<id")

    def test_lone_closing_angle_is_literal(self):
        assert parse("a>b").segments == (Literal("a>b"),)


class TestLiteralsAndEscapes:
    def test_plain_string_is_single_literal(self):
        expr = parse("http://api_root_url")
        assert expr.segments == (Literal("http://api_root_url"),)
        assert expr.is_literal
        assert expr.text == "http://api_root_url"

    def test_empty_string(self):
        assert parse("").segments == (Literal(""),)

    def test_escapes_produce_literal_text(self):
        expr = parse(r"\${!super}\<id>\\")
        assert expr.segments == (Literal("${!super}<id>\\"),)

    def test_dangling_escape(self):
        with pytest.raises(ExpressionSyntaxError):
            parse("abc\\")

    def test_source_is_kept(self):
        assert parse("${!super}/x").source == "${!super}/x"

    def test_error_carries_schema_path(self):
        with pytest.raises(ExpressionSyntaxError) as exc_info:
            ExpressionParser().parse("${}", "~users.$url")
        assert exc_info.value.schema_path == "~users.$url"
        assert "~users.$url" in str(exc_info.value)


class TestTypeSpecs:
    def test_bare_types(self):
        for name in ("string", "number", "boolean"):
            spec = parse_type_spec(name)
            assert spec.primitive == PrimitiveType(name)
            assert not spec.has_default

    def test_boolean_default(self):
        spec = parse_type_spec("boolean|default:true")
        assert spec.primitive == PrimitiveType.BOOLEAN
        assert spec.modifiers == (Modifier("default", True),)
        assert spec.has_default
        assert spec.default is True

    def test_boolean_default_is_case_insensitive(self):
        assert parse_type_spec("boolean|default:False").default is False

    def test_number_defaults(self):
        assert parse_type_spec("number|default:10").default == 10
        assert isinstance(parse_type_spec("number|default:10").default, int)
        assert parse_type_spec("number|default:2.5").default == 2.5
        assert parse_type_spec("number|default:-3").default == -3

    def test_string_default(self):
        assert parse_type_spec("string|default:hello world").default == "hello world"

    def test_empty_string_default_is_still_a_default(self):
        spec = parse_type_spec("string|default:")
        assert spec.has_default
        assert spec.default == ""

    def test_escaped_pipe_in_default(self):
        assert parse_type_spec("string|default:a\\|b").default == "a|b"
        assert parse_type_spec("string|default:back\\\\slash").default == "back\\slash"

    def test_dangling_escape_in_type_spec(self):
        with pytest.raises(TypeSpecError):
            parse_type_spec("string|default:a\\")

    def test_whitespace_is_ignored(self):
        spec = parse_type_spec(" number | default : 5 ")
        assert spec.primitive == PrimitiveType.NUMBER
        assert spec.default == 5

    @pytest.mark.parametrize(
        "text",
        [
            "int",
            "",
            "boolean|default:yes",
            "number|default:abc",
            "number|default:nan",
            "number|default:inf",
            "string|required:true",
            "string|default",
            "string|:x",
            "string|default:a|default:b",
        ],
    )
    def test_invalid_type_specs(self, text):
        with pytest.raises(TypeSpecError):
            parse_type_spec(text)

    def test_type_spec_error_is_expression_syntax_error(self):
        with pytest.raises(ExpressionSyntaxError):
            parse_type_spec("float")


if __name__ == "__main__":
    pytest.main([__file__])
