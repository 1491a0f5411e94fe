"""
Expression parser.

Parses schema strings into :class:`Expression` values. The grammar:

- ``${!super.!super.attr}``: context reference, zero or more ``!super`` hops
  optionally followed by one attribute name (defaults to ``url``)
- ``<name>`` / ``<name:typespec>``: inline placeholder (type defaults to string)
- ``\\x``: escapes the next character
- anything else is literal text

Type specs look like ``type|modifier:value|...``; ``default`` is the only
modifier known today. A backslash escapes ``|`` (or any character) inside a
modifier value.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from typing import Any

from ..errors import ExpressionSyntaxError, TypeSpecError
from .nodes import ContextRef, Expression, Literal, Modifier, Placeholder, PrimitiveType, Segment, TypeSpec

SUPER_TOKEN = "!super"
DEFAULT_ATTRIBUTE = "url"

IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")


def _convert_default(primitive: PrimitiveType, raw: str) -> Any:
    """Convert a default literal to the Python value of its declared type."""
    if primitive == PrimitiveType.STRING:
        return raw
    if primitive == PrimitiveType.BOOLEAN:
        lowered = raw.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        raise ValueError(f"'{raw}' is not a boolean (expected true or false)")
    if INTEGER_RE.match(raw):
        return int(raw)
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(f"'{raw}' is not a finite number")
    return value


# Modifier name -> converter(primitive, raw_value) -> value
MODIFIERS: dict[str, Callable[[PrimitiveType, str], Any]] = {
    "default": _convert_default,
}


class ExpressionParser:
    """Parser for schema expressions and type specs."""

    def parse(self, text: str, source_path: str = "") -> Expression:
        """Parse one schema string.

        Args:
            text: The raw string from the schema
            source_path: Schema path used in error messages

        Returns:
            The parsed expression

        Raises:
            ExpressionSyntaxError: On malformed references, placeholders or escapes
        """
        segments: list[Segment] = []
        buffer: list[str] = []

        def flush() -> None:
            if buffer:
                segments.append(Literal("".join(buffer)))
                buffer.clear()

        i = 0
        n = len(text)
        while i < n:
            ch = text[i]
            if ch == "\\":
                if i + 1 >= n:
                    raise ExpressionSyntaxError("Dangling escape character at end of expression", source_path, i)
                buffer.append(text[i + 1])
                i += 2
            elif ch == "$" and text.startswith("${", i):
                end = text.find("}", i + 2)
                if end < 0:
                    raise ExpressionSyntaxError("Unterminated context reference '${'", source_path, i)
                flush()
                segments.append(self._parse_reference(text[i + 2 : end], source_path, i))
                i = end + 1
            elif ch == "<":
                end = text.find(">", i + 1)
                if end < 0:
                    raise ExpressionSyntaxError("Unterminated placeholder '<'", source_path, i)
                flush()
                segments.append(self._parse_placeholder(text[i + 1 : end], source_path, i))
                i = end + 1
            else:
                buffer.append(ch)
                i += 1
        flush()

        if not segments:
            segments.append(Literal(""))
        return Expression(tuple(segments), text)

    def parse_type_spec(self, text: str, source_path: str = "", position: int | None = None) -> TypeSpec:
        """Parse a ``type|modifier:value`` spec.

        Raises:
            TypeSpecError: On unknown types, unknown or repeated modifiers,
                malformed modifier sections and defaults not matching the type
        """
        head, *rest = self._split_sections(text, source_path, position)
        type_name = head.strip()
        try:
            primitive = PrimitiveType(type_name)
        except ValueError:
            allowed = ", ".join(p.value for p in PrimitiveType)
            raise TypeSpecError(f"Unknown type '{type_name}' (expected one of: {allowed})", source_path, position) from None

        modifiers: list[Modifier] = []
        seen: set[str] = set()
        for section in rest:
            name, sep, raw = section.partition(":")
            name = name.strip()
            if not sep or not name:
                raise TypeSpecError(f"Malformed modifier '{section}' (expected name:value)", source_path, position)
            converter = MODIFIERS.get(name)
            if converter is None:
                raise TypeSpecError(f"Unknown modifier '{name}'", source_path, position)
            if name in seen:
                raise TypeSpecError(f"Modifier '{name}' given more than once", source_path, position)
            seen.add(name)
            try:
                value = converter(primitive, raw.strip())
            except ValueError as e:
                raise TypeSpecError(f"Invalid {name} for {primitive.value}: {e}", source_path, position) from e
            modifiers.append(Modifier(name, value))

        return TypeSpec(primitive, tuple(modifiers))

    def _split_sections(self, text: str, source_path: str, position: int | None) -> list[str]:
        """Split a type spec on unescaped ``|``, resolving ``\\`` escapes."""
        sections: list[str] = []
        buffer: list[str] = []
        i = 0
        while i < len(text):
            ch = text[i]
            if ch == "\\":
                if i + 1 >= len(text):
                    raise TypeSpecError("Dangling escape character at end of type spec", source_path, position)
                buffer.append(text[i + 1])
                i += 2
                continue
            if ch == "|":
                sections.append("".join(buffer))
                buffer.clear()
            else:
                buffer.append(ch)
            i += 1
        sections.append("".join(buffer))
        return sections

    def _parse_reference(self, body: str, source_path: str, position: int) -> ContextRef:
        if not body.strip():
            raise ExpressionSyntaxError("Empty context reference '${}'", source_path, position)

        hops = 0
        attribute: str | None = None
        for token in body.split("."):
            token = token.strip()
            if not token:
                raise ExpressionSyntaxError(f"Empty segment in context reference '${{{body}}}'", source_path, position)
            if attribute is not None:
                raise ExpressionSyntaxError(f"'{token}' follows attribute '{attribute}' in '${{{body}}}'", source_path, position)
            if token == SUPER_TOKEN:
                hops += 1
            elif IDENTIFIER_RE.match(token):
                attribute = token
            else:
                raise ExpressionSyntaxError(f"Invalid token '{token}' in context reference", source_path, position)

        return ContextRef(hops, attribute or DEFAULT_ATTRIBUTE)

    def _parse_placeholder(self, body: str, source_path: str, position: int) -> Placeholder:
        name, sep, type_text = body.partition(":")
        name = name.strip()
        if not IDENTIFIER_RE.match(name):
            raise ExpressionSyntaxError(f"Invalid placeholder name '{name}'", source_path, position)
        if not sep:
            return Placeholder(name)
        if not type_text.strip():
            raise ExpressionSyntaxError(f"Missing type after ':' in placeholder '<{body}>'", source_path, position)
        return Placeholder(name, self.parse_type_spec(type_text, source_path, position))


_parser = ExpressionParser()


def parse(text: str, source_path: str = "") -> Expression:
    """Parse a schema string with the default parser."""
    return _parser.parse(text, source_path)


def parse_type_spec(text: str, source_path: str = "") -> TypeSpec:
    """Parse a type spec with the default parser."""
    return _parser.parse_type_spec(text, source_path)
