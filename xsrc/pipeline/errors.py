"""
Error hierarchy for the xsrc compiler.

Every error carries the schema path of the node being processed when it was
raised, so diagnostics point at the offending place in the document. Each
error class has its own process exit code used by the CLI.
"""

from __future__ import annotations


class XsrcError(Exception):
    """Base class for all compile errors."""

    exit_code: int = 1

    def __init__(self, message: str, schema_path: str = ""):
        super().__init__(message)
        self.message = message
        self.schema_path = schema_path

    def with_path(self, schema_path: str) -> XsrcError:
        """Attach a schema path if none was recorded yet."""
        if not self.schema_path:
            self.schema_path = schema_path
        return self

    def __str__(self) -> str:
        location = self.schema_path or "(root)"
        return f"{location}: {self.message}"


class DocumentLoadError(XsrcError):
    """The schema document could not be read or decoded."""

    exit_code = 2


class SchemaParseError(XsrcError):
    """A schema node is structurally invalid."""

    exit_code = 3


class ExpressionSyntaxError(XsrcError):
    """Malformed ``${...}`` reference or ``<...>`` placeholder."""

    exit_code = 4

    def __init__(self, message: str, schema_path: str = "", position: int | None = None):
        super().__init__(message, schema_path)
        self.position = position

    def __str__(self) -> str:
        text = super().__str__()
        if self.position is not None:
            text += f" (at column {self.position})"
        return text


class TypeSpecError(ExpressionSyntaxError):
    """Unknown primitive type, bad modifier, or default not matching its type."""


class ContextResolutionError(XsrcError):
    """A context reference walks past the root or names a missing attribute."""

    exit_code = 5


class DuplicateNameError(XsrcError):
    """Two entities would share one public identifier."""

    exit_code = 6


class UnsupportedTargetLanguageError(XsrcError):
    """The requested backend is not registered."""

    exit_code = 7


class OutputValidationError(XsrcError):
    """Generated source failed validation before being written."""

    exit_code = 8
