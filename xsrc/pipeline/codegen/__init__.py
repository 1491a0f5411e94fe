"""Serializers rendering the target AST to source text."""

from __future__ import annotations

from ..errors import UnsupportedTargetLanguageError
from ..languages import LanguageId
from ..rewriter.target_ast import ClientModule
from .base import Serializer
from .javascript import JavaScriptSerializer, TypeScriptSerializer
from .python import PythonSerializer

SERIALIZERS: dict[LanguageId, type[Serializer]] = {
    LanguageId.JAVASCRIPT: JavaScriptSerializer,
    LanguageId.TYPESCRIPT: TypeScriptSerializer,
    LanguageId.PYTHON: PythonSerializer,
}


def render(module: ClientModule) -> str:
    """Render a module with the serializer of its language.

    Raises:
        UnsupportedTargetLanguageError: If no serializer is registered for the language
    """
    serializer = SERIALIZERS.get(module.language)
    if serializer is None:
        raise UnsupportedTargetLanguageError(f"No serializer registered for '{module.language}'")
    return serializer().serialize(module)


__all__ = [
    "JavaScriptSerializer",
    "PythonSerializer",
    "SERIALIZERS",
    "Serializer",
    "TypeScriptSerializer",
    "render",
]
