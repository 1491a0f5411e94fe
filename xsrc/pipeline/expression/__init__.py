"""Expression language embedded in schema strings."""

from __future__ import annotations

from .nodes import ContextRef, Expression, Literal, Modifier, Placeholder, PrimitiveType, TypeSpec
from .parser import ExpressionParser, parse, parse_type_spec

__all__ = [
    "ContextRef",
    "Expression",
    "ExpressionParser",
    "Literal",
    "Modifier",
    "Placeholder",
    "PrimitiveType",
    "TypeSpec",
    "parse",
    "parse_type_spec",
]
