"""
Pipeline - schema to REST client compiler.

This module provides a multi-phase architecture for generating API clients
from xsrc schema documents:

1. Phase 1 (Expression Parser): Parse ``${!super}`` references, ``<name:type>``
   placeholders and type specs embedded in schema strings
2. Phase 2 (Transformer): Resolve contexts and bind the schema into a
   self-contained bound tree
3. Phase 3 (Rewriter): Map the bound tree to a language-neutral target AST
4. Phase 4 (Serializer): Render the target AST to source code
5. Phase 5 (Writer): Optional validated, atomic write of the output file
"""

from __future__ import annotations

from .config import GeneratorConfig, OutputConfig, OutputMode
from .errors import (
    ContextResolutionError,
    DocumentLoadError,
    DuplicateNameError,
    ExpressionSyntaxError,
    OutputValidationError,
    SchemaParseError,
    TypeSpecError,
    UnsupportedTargetLanguageError,
    XsrcError,
)
from .generator import PipelineGenerator
from .languages import LanguageId
from .loader import load_document
from .writer import AtomicWriter

__all__ = [
    "AtomicWriter",
    "ContextResolutionError",
    "DocumentLoadError",
    "DuplicateNameError",
    "ExpressionSyntaxError",
    "GeneratorConfig",
    "LanguageId",
    "OutputConfig",
    "OutputMode",
    "OutputValidationError",
    "PipelineGenerator",
    "SchemaParseError",
    "TypeSpecError",
    "UnsupportedTargetLanguageError",
    "XsrcError",
    "load_document",
]
