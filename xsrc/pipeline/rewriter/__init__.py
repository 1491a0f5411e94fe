"""Rewriting of the bound tree into the language-neutral target AST."""

from __future__ import annotations

from ..analyzer.ir_nodes import BoundClient
from ..config import GeneratorConfig
from ..errors import UnsupportedTargetLanguageError
from ..languages import LanguageId
from .naming import JavaScriptNaming, NamingRules, PythonNaming, TypeScriptNaming
from .rewriter import Rewriter
from .target_ast import ClientModule

NAMING_RULES: dict[LanguageId, type[NamingRules]] = {
    LanguageId.JAVASCRIPT: JavaScriptNaming,
    LanguageId.TYPESCRIPT: TypeScriptNaming,
    LanguageId.PYTHON: PythonNaming,
}


def rewrite(bound: BoundClient, target: LanguageId | str, config: GeneratorConfig | None = None) -> ClientModule:
    """Rewrite a bound client for ``target``.

    Raises:
        UnsupportedTargetLanguageError: If no naming rules are registered for the target
    """
    language = LanguageId.parse(target)
    naming = NAMING_RULES.get(language)
    if naming is None:
        raise UnsupportedTargetLanguageError(f"No rewriter registered for '{language.value}'")
    return Rewriter(language, naming(), config).rewrite(bound)


__all__ = [
    "ClientModule",
    "JavaScriptNaming",
    "NAMING_RULES",
    "NamingRules",
    "PythonNaming",
    "Rewriter",
    "TypeScriptNaming",
    "rewrite",
]
