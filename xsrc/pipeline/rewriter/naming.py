"""
Naming rules for each target language.

Schema names (``get_by_id``, ``user-profile``, ``~budgets``) are split into
words and re-cased per language. Reserved words get a trailing underscore and
identifiers starting with a digit get a leading one.
"""

from __future__ import annotations

import keyword
import re

# Regex for splitting words: acronyms, capitalized words, digit runs
_WORD_PATTERN = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")

JS_RESERVED_KEYWORDS = {
    "await",
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "debugger",
    "default",
    "delete",
    "do",
    "else",
    "enum",
    "export",
    "extends",
    "false",
    "finally",
    "for",
    "function",
    "if",
    "implements",
    "import",
    "in",
    "instanceof",
    "interface",
    "let",
    "new",
    "null",
    "package",
    "private",
    "protected",
    "public",
    "return",
    "static",
    "super",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "typeof",
    "var",
    "void",
    "while",
    "with",
    "yield",
    # Not bindable in strict mode, which class bodies always are
    "arguments",
    "eval",
    # Names the generated code itself refers to
    "constructor",
    "axios",
}

TS_RESERVED_KEYWORDS = JS_RESERVED_KEYWORDS | {
    "any",
    "boolean",
    "declare",
    "never",
    "number",
    "readonly",
    "string",
    "type",
    "unknown",
}

PY_RESERVED_KEYWORDS = set(keyword.kwlist) | {
    "self",
    "requests",
}


def split_words(name: str) -> list[str]:
    """Split an identifier into words on case changes, digits and separators."""
    return _WORD_PATTERN.findall(name)


class NamingRules:
    """Base naming rules; subclasses choose the member casing."""

    RESERVED: set[str] = set()

    def member_name(self, name: str) -> str:
        """Identifier for an accessor or method."""
        return self.escape(self.format(name))

    def param_name(self, name: str) -> str:
        """Identifier for a method parameter."""
        return self.escape(self.format(name))

    def class_name(self, root_name: str, path: list[str]) -> str:
        """Class name for an API set, e.g. ``XSClientUsersBudgets``."""
        return root_name + "".join(self.pascal_case(part) for part in path)

    def format(self, name: str) -> str:
        raise NotImplementedError

    def escape(self, identifier: str) -> str:
        if identifier[:1].isdigit():
            identifier = "_" + identifier
        if identifier in self.RESERVED:
            identifier += "_"
        return identifier

    @staticmethod
    def pascal_case(name: str) -> str:
        return "".join(word[:1].upper() + word[1:] for word in split_words(name))


class JavaScriptNaming(NamingRules):
    """camelCase members and parameters."""

    RESERVED = JS_RESERVED_KEYWORDS

    def format(self, name: str) -> str:
        words = split_words(name)
        if not words:
            return name
        head, *tail = words
        return head.lower() + "".join(w[:1].upper() + w[1:].lower() for w in tail)


class TypeScriptNaming(JavaScriptNaming):
    RESERVED = TS_RESERVED_KEYWORDS


class PythonNaming(NamingRules):
    """snake_case members and parameters."""

    RESERVED = PY_RESERVED_KEYWORDS

    def format(self, name: str) -> str:
        words = split_words(name)
        if not words:
            return name
        return "_".join(w.lower() for w in words)
